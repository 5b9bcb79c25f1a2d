from typing import Optional, Sequence

from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from graders.grader import partial_marks
from graders.models import (
    KeywordAnalysis,
    ReportRow,
    RiskLevel,
    ScoreDistribution,
    SimilarityBreakdown,
    StudentFeedback,
    TeacherReport,
)
from graders.plagiarism import PlagiarismDetector

MAX_SUGGESTIONS = 5
BRIEF_ANSWER_WORDS = 20

# (minimum similarity, comment), checked top-down
COMMENT_TIERS = [
    (0.9, "Excellent work! Your answer demonstrates comprehensive understanding of the topic."),
    (
        0.75,
        "Good effort! You have a solid grasp of the main concepts. "
        "Focus on incorporating the suggested improvements.",
    ),
    (
        0.6,
        "You understand the basics, but there's room for improvement. "
        "Review the missed concepts and try to explain them in more detail.",
    ),
    (
        0.4,
        "Your answer shows some understanding, but needs significant improvement. "
        "Review the reference material and ensure you cover all key points.",
    ),
]
FALLBACK_COMMENT = (
    "This answer needs more work. Please review the study materials carefully and "
    "make sure you understand the core concepts before attempting again."
)


class FeedbackGenerator:
    """
    Turns a similarity breakdown into student feedback, and graded rows
    into a per-question teacher report.
    """

    def __init__(self, detector: PlagiarismDetector, banded_points: float = 10):
        self.detector = detector
        self.banded_points = banded_points
        self.sentiment_analyzer = SentimentIntensityAnalyzer()

        print("  ✓ FeedbackGenerator initialized (VADER)")

    def student_feedback(
        self,
        student_text: str,
        reference_text: str,
        breakdown: SimilarityBreakdown,
    ) -> StudentFeedback:
        similarity = breakdown.overall_similarity
        details = breakdown.detailed_breakdown

        strengths = []
        improvements = []
        suggestions = []

        # Strengths
        if breakdown.keyword_similarity > 0.7:
            strengths.append("Excellent use of key concepts and terminology")
        elif breakdown.keyword_similarity > 0.4:
            strengths.append("Good understanding of main concepts")

        if breakdown.semantic_similarity > 0.7:
            strengths.append("Strong semantic understanding of the topic")

        if breakdown.structural_similarity > 0.7:
            strengths.append("Well-structured response with relevant context")

        if details.readability_score > 0.6:
            strengths.append("Clear and readable expression")

        # Improvements
        if breakdown.keyword_similarity < 0.5:
            improvements.append("Include more key concepts from the lesson")
            for keyword in details.missed_keywords[:MAX_SUGGESTIONS]:
                suggestions.append(f'Consider including: "{keyword}"')

        if breakdown.semantic_similarity < 0.6:
            improvements.append("Try to explain the core concepts in your own words")

        if breakdown.structural_similarity < 0.5:
            improvements.append("Provide more specific examples and context")

        if details.readability_score < 0.4:
            improvements.append("Structure your answer with clearer sentences")

        if len((student_text or "").split()) < BRIEF_ANSWER_WORDS:
            improvements.append(
                "Provide more detailed explanations (your answer seems brief)"
            )

        return StudentFeedback(
            overall_score=round(similarity * 100),
            banded_marks=partial_marks(similarity, self.banded_points),
            strengths=strengths or ["Keep practicing to improve"],
            improvements=improvements,
            keyword_analysis=KeywordAnalysis(
                matched=details.matched_keywords,
                missed=details.missed_keywords,
                suggestions=suggestions,
            ),
            detailed_comments=self._comment(similarity),
            plagiarism_risk=self.detector.assess_risk(
                student_text, reference_text, breakdown.raw_similarity
            ),
            sentiment={
                "reference": self._compound(reference_text),
                "student": self._compound(student_text),
            },
        )

    def missing_question_feedback(self) -> StudentFeedback:
        """Feedback for an answer whose question is not in the assignment"""
        return StudentFeedback(
            overall_score=0,
            strengths=[],
            improvements=["Answer not found"],
            keyword_analysis=KeywordAnalysis(),
            detailed_comments="Question not found in assignment",
            plagiarism_risk=RiskLevel.LOW,
        )

    def teacher_report(
        self, question_id: str, question_text: str, rows: Sequence[ReportRow]
    ) -> TeacherReport:
        total = len(rows)

        if total == 0:
            return TeacherReport(
                question_id=question_id,
                question_text=question_text,
                total_submissions=0,
                average_score=0,
                score_distribution=ScoreDistribution(),
                common_mistakes=[],
                top_performers=0,
                needs_attention=0,
            )

        average_score = sum(row.score for row in rows) / total

        distribution = ScoreDistribution()
        for row in rows:
            percentage = row.similarity * 100
            if percentage >= 90:
                distribution.excellent += 1
            elif percentage >= 70:
                distribution.good += 1
            elif percentage >= 50:
                distribution.average += 1
            else:
                distribution.poor += 1

        # Patterns worth a teacher's attention
        common_mistakes = []
        struggling = [row for row in rows if row.similarity < 0.6]

        if len(struggling) > total * 0.3:
            common_mistakes.append("Many students are struggling with this concept")

        if distribution.poor > total * 0.2:
            common_mistakes.append(
                "Over 20% of students scored below 50% - consider reviewing this topic in class"
            )

        if distribution.excellent < total * 0.1:
            common_mistakes.append(
                "Few students achieving excellence - this might be a challenging question"
            )

        return TeacherReport(
            question_id=question_id,
            question_text=question_text,
            total_submissions=total,
            average_score=round(average_score, 2),
            score_distribution=distribution,
            common_mistakes=common_mistakes,
            top_performers=distribution.excellent,
            needs_attention=distribution.poor,
        )

    def _comment(self, similarity: float) -> str:
        for minimum, comment in COMMENT_TIERS:
            if similarity >= minimum:
                return comment
        return FALLBACK_COMMENT

    def _compound(self, text: Optional[str]) -> Optional[float]:
        """VADER compound polarity, None for empty text"""
        if not text or not text.strip():
            return None
        return self.sentiment_analyzer.polarity_scores(text)["compound"]
