from typing import List, Optional, Sequence

from graders.models import PlagiarismCase, RiskLevel, SubmissionText
from graders.scorer import SimilarityScorer
from tools.similarity_tools import longest_common_run

# Copy thresholds on the undampened similarity
REPORT_THRESHOLD = 0.85
MEDIUM_THRESHOLD = 0.90
HIGH_THRESHOLD = 0.95


def pairwise_risk(similarity: float) -> RiskLevel:
    if similarity > HIGH_THRESHOLD:
        return RiskLevel.HIGH
    elif similarity > MEDIUM_THRESHOLD:
        return RiskLevel.MEDIUM
    else:
        return RiskLevel.LOW


class PlagiarismDetector:
    """
    Flags suspiciously similar answers.

    Two independent signals:
    - detect_pairwise(): every pair of submissions to one question, scored
      with the same SimilarityScorer used for grading (undampened, so a copy
      scores 1.0). O(n²) scorer calls, fine for a class but worth
      offloading for large batches.
    - assess_risk(): one answer against the reference, based on the longest
      run of copied consecutive words.
    """

    def __init__(self, scorer: SimilarityScorer):
        self.scorer = scorer
        self.normalizer = scorer.normalizer

    def detect_pairwise(
        self, submissions: Sequence[SubmissionText], max_cases: Optional[int] = None
    ) -> List[PlagiarismCase]:
        """Flag pairs of submissions above the report threshold, most similar first"""
        cases = []

        for i in range(len(submissions)):
            for j in range(i + 1, len(submissions)):
                first, second = submissions[i], submissions[j]
                similarity = self.scorer.pair_similarity(first.answer_text, second.answer_text)

                # Only flag if similarity is suspiciously high
                if similarity > REPORT_THRESHOLD:
                    cases.append(
                        PlagiarismCase(
                            student_a=first.student_id,
                            student_b=second.student_id,
                            similarity=similarity,
                            risk_level=pairwise_risk(similarity),
                        )
                    )

        cases.sort(key=lambda case: case.similarity, reverse=True)

        if max_cases is not None:
            cases = cases[:max_cases]
        return cases

    def longest_common_run(self, student_text: str, reference_text: str) -> int:
        """Longest stretch of consecutive words copied from the reference"""
        return longest_common_run(
            self.normalizer.raw_words(student_text),
            self.normalizer.raw_words(reference_text),
        )

    def assess_risk(self, student_text: str, reference_text: str, similarity: float) -> RiskLevel:
        """
        Risk that an answer was lifted from the reference text.
        similarity is the undampened score (SimilarityBreakdown.raw_similarity).
        """
        word_count = len(self.normalizer.raw_words(student_text))
        run = self.longest_common_run(student_text, reference_text)

        # Long copied run, or near-identical answer of some length
        if run > 10 or (similarity > HIGH_THRESHOLD and word_count > 20):
            return RiskLevel.HIGH

        if run > 5 or (similarity > MEDIUM_THRESHOLD and word_count > 15):
            return RiskLevel.MEDIUM

        return RiskLevel.LOW
