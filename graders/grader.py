import math
from typing import List, Optional, Sequence, Tuple

from graders.models import Answer, GradingResult, Question, Score, SimilarityBreakdown
from graders.scorer import SimilarityScorer

DEFAULT_PASS_THRESHOLD = 0.70
DEFAULT_MARKS_PER_QUESTION = 1

# (minimum similarity, fraction of marks), checked top-down
PARTIAL_MARK_BANDS = [
    (0.95, 1.0),
    (0.90, 0.95),
    (0.85, 0.9),
    (0.80, 0.85),
    (0.75, 0.8),
    (0.70, 0.75),
    (0.65, 0.7),
    (0.60, 0.65),
    (0.55, 0.6),
    (0.50, 0.55),
    (0.45, 0.5),
    (0.40, 0.4),
    (0.35, 0.3),
    (0.30, 0.2),
    (0.25, 0.1),
]


def partial_marks(similarity: float, max_points: float = 10) -> int:
    """Banded marks for a similarity, rounded half up to whole points"""
    for minimum, fraction in PARTIAL_MARK_BANDS:
        if similarity >= minimum:
            return math.floor(max_points * fraction + 0.5)
    return 0


class SubmissionGrader:
    """
    Awards per-question marks by comparing each answer to its answer key.
    Every supplied answer gets exactly one Score, in input order.
    """

    def __init__(
        self,
        scorer: SimilarityScorer,
        pass_threshold: float = DEFAULT_PASS_THRESHOLD,
        marks_per_question: float = DEFAULT_MARKS_PER_QUESTION,
    ):
        self._validate(pass_threshold, marks_per_question)
        self.scorer = scorer
        self.pass_threshold = pass_threshold
        self.marks_per_question = marks_per_question

    def grade(
        self,
        questions: Sequence[Question],
        answers: Sequence[Answer],
        pass_threshold: Optional[float] = None,
        marks_per_question: Optional[float] = None,
    ) -> GradingResult:
        """Score every answer and award marks to those at or above the threshold"""
        result, _ = self.grade_detailed(
            questions, answers, pass_threshold, marks_per_question
        )
        return result

    def grade_detailed(
        self,
        questions: Sequence[Question],
        answers: Sequence[Answer],
        pass_threshold: Optional[float] = None,
        marks_per_question: Optional[float] = None,
    ) -> Tuple[GradingResult, List[Optional[SimilarityBreakdown]]]:
        """
        Grade and also return the breakdown behind each score.
        The breakdown is None where the answer's question is unknown.
        """
        threshold = self.pass_threshold if pass_threshold is None else pass_threshold
        marks = self.marks_per_question if marks_per_question is None else marks_per_question
        self._validate(threshold, marks)

        by_id = {q.id: q for q in questions}

        scores: List[Score] = []
        breakdowns: List[Optional[SimilarityBreakdown]] = []
        for answer in answers:
            question = by_id.get(answer.question_id)
            if question is None:
                # Unknown question costs the mark, never the request
                scores.append(Score(question_id=answer.question_id, similarity=0, awarded=0))
                breakdowns.append(None)
                continue

            breakdown = self.scorer.score(answer.text, question.answer_key)
            similarity = breakdown.overall_similarity
            question_marks = marks if question.max_marks is None else question.max_marks
            awarded = question_marks if similarity >= threshold else 0

            scores.append(
                Score(question_id=answer.question_id, similarity=similarity, awarded=awarded)
            )
            breakdowns.append(breakdown)

        result = GradingResult(
            scores=scores, total_awarded=sum(s.awarded for s in scores)
        )
        return result, breakdowns

    def _validate(self, threshold: float, marks: float):
        if not 0 <= threshold <= 1:
            raise ValueError(f"pass_threshold must be within 0-1, got {threshold}")
        if marks < 0:
            raise ValueError(f"marks_per_question must be non-negative, got {marks}")
