from typing import Optional, Sequence

from graders.feedback import FeedbackGenerator
from graders.grader import SubmissionGrader
from graders.models import (
    Answer,
    AssignmentReport,
    Question,
    QuestionFeedback,
    QuestionPlagiarism,
    ReportRow,
    StudentSubmission,
    SubmissionReport,
    SubmissionText,
)
from graders.plagiarism import PlagiarismDetector
from graders.scorer import SimilarityScorer
from utils.entity_extractor import EntityExtractor
from utils.settings import GradingSettings
from utils.text_normalizer import TextNormalizer


class GradingOrchestrator:
    """
    Builds the scoring components once and coordinates them:
    - grade_submission(): marks plus per-answer feedback for one submission
    - assignment_report(): teacher reports and plagiarism cases per question
    """

    def __init__(
        self,
        settings: Optional[GradingSettings] = None,
        normalizer: Optional[TextNormalizer] = None,
        extractor: Optional[EntityExtractor] = None,
    ):
        print("🚀 Initializing Grading Orchestrator...")

        self.settings = settings or GradingSettings.from_env()

        # NLP resources are built once and shared by every component
        self.normalizer = normalizer or TextNormalizer()
        self.extractor = extractor or EntityExtractor(
            auto_download=self.settings.nltk_auto_download
        )

        self.scorer = SimilarityScorer(self.normalizer, self.extractor)
        self.grader = SubmissionGrader(
            self.scorer,
            pass_threshold=self.settings.pass_threshold,
            marks_per_question=self.settings.marks_per_question,
        )
        self.detector = PlagiarismDetector(self.scorer)
        self.feedback = FeedbackGenerator(self.detector)

        print(
            f"✓ Orchestrator initialized (threshold={self.settings.pass_threshold:.2f}, "
            f"marks={self.settings.marks_per_question:g})"
        )

    def grade_submission(
        self,
        questions: Sequence[Question],
        answers: Sequence[Answer],
        pass_threshold: Optional[float] = None,
        marks_per_question: Optional[float] = None,
    ) -> SubmissionReport:
        """
        Grade one submission and attach feedback to every answer.
        Persisting the result is up to the caller.
        """
        result, breakdowns = self.grader.grade_detailed(
            questions, answers, pass_threshold, marks_per_question
        )
        answer_keys = {q.id: q.answer_key for q in questions}

        feedback = []
        for answer, breakdown in zip(answers, breakdowns):
            if breakdown is None:
                entry = QuestionFeedback(
                    question_id=answer.question_id,
                    feedback=self.feedback.missing_question_feedback(),
                )
            else:
                entry = QuestionFeedback(
                    question_id=answer.question_id,
                    feedback=self.feedback.student_feedback(
                        answer.text, answer_keys[answer.question_id], breakdown
                    ),
                    breakdown=breakdown,
                )
            feedback.append(entry)

        print(
            f"✓ Graded {len(answers)} answers: {result.total_awarded:g} marks awarded"
        )
        return SubmissionReport(
            scores=result.scores,
            total_awarded=result.total_awarded,
            feedback=feedback,
        )

    def assignment_report(
        self,
        questions: Sequence[Question],
        submissions: Sequence[StudentSubmission],
    ) -> AssignmentReport:
        """
        Per-question teacher reports plus pairwise plagiarism cases.
        Questions without suspicious pairs are left out of the plagiarism list.
        """
        question_reports = []
        plagiarism_reports = []

        for question in questions:
            rows = []
            batch = []
            for submission in submissions:
                answer = _find_answer(submission, question.id)
                if answer is None or not answer.text:
                    continue

                score = next(
                    (s for s in submission.scores if s.question_id == question.id), None
                )
                rows.append(
                    ReportRow(
                        student_id=submission.student_id,
                        answer=answer.text,
                        score=score.awarded if score else 0,
                        similarity=score.similarity if score else 0,
                    )
                )
                batch.append(
                    SubmissionText(student_id=submission.student_id, answer_text=answer.text)
                )

            question_reports.append(
                self.feedback.teacher_report(question.id, question.text, rows)
            )

            cases = self.detector.detect_pairwise(
                batch, max_cases=self.settings.plagiarism_max_cases
            )
            if cases:
                plagiarism_reports.append(
                    QuestionPlagiarism(
                        question_id=question.id,
                        question_text=question.text,
                        plagiarism_cases=cases,
                    )
                )

        flagged = sum(len(r.plagiarism_cases) for r in plagiarism_reports)
        print(
            f"✓ Report ready: {len(questions)} questions, "
            f"{len(submissions)} submissions, {flagged} flagged pairs"
        )
        return AssignmentReport(
            total_submissions=len(submissions),
            question_reports=question_reports,
            plagiarism_reports=plagiarism_reports,
        )


def _find_answer(submission: StudentSubmission, question_id: str) -> Optional[Answer]:
    for answer in submission.answers:
        if answer.question_id == question_id:
            return answer
    return None
