"""Tests for PlagiarismDetector: pairwise cases and copied-run risk."""

import pytest

from graders.models import RiskLevel, SubmissionText
from graders.plagiarism import PlagiarismDetector, pairwise_risk

REFERENCE = (
    "Water evaporates from oceans and lakes then condenses into clouds "
    "before falling back to earth as rain or snow"
)

ANSWER_A = (
    "Photosynthesis is how plants use sunlight, water and carbon dioxide "
    "to make glucose and oxygen."
)
ANSWER_B = (
    "Plants capture light energy with chlorophyll and turn it into chemical "
    "energy stored in sugar."
)


class TableScorer:
    """Pair similarities looked up from a table keyed by the two texts."""

    def __init__(self, normalizer, table):
        self.normalizer = normalizer
        self.table = table

    def pair_similarity(self, a, b):
        return self.table.get((a, b), self.table.get((b, a), 0.0))


def _batch(*texts):
    return [SubmissionText(student_id=f"s{i}", answer_text=t) for i, t in enumerate(texts, 1)]


def test_verbatim_copy_is_high_risk(detector):
    cases = detector.detect_pairwise(_batch(ANSWER_A, ANSWER_A))

    assert len(cases) == 1
    assert cases[0].student_a == "s1"
    assert cases[0].student_b == "s2"
    assert cases[0].similarity > 0.95
    assert cases[0].risk_level == RiskLevel.HIGH


def test_independent_answers_not_flagged(detector):
    assert detector.detect_pairwise(_batch(ANSWER_A, ANSWER_B)) == []


def test_single_or_no_submission(detector):
    assert detector.detect_pairwise([]) == []
    assert detector.detect_pairwise(_batch(ANSWER_A)) == []


def test_cases_sorted_and_tiered(normalizer):
    table = {
        ("a", "b"): 0.86,
        ("a", "c"): 0.97,
        ("b", "c"): 0.92,
        ("a", "d"): 0.85,
    }
    detector = PlagiarismDetector(TableScorer(normalizer, table))

    cases = detector.detect_pairwise(_batch("a", "b", "c", "d"))

    assert [c.similarity for c in cases] == [0.97, 0.92, 0.86]
    assert [c.risk_level for c in cases] == [RiskLevel.HIGH, RiskLevel.MEDIUM, RiskLevel.LOW]
    assert (cases[0].student_a, cases[0].student_b) == ("s1", "s3")


def test_max_cases_keeps_most_similar(normalizer):
    table = {("a", "b"): 0.9, ("a", "c"): 0.99, ("b", "c"): 0.95}
    detector = PlagiarismDetector(TableScorer(normalizer, table))

    cases = detector.detect_pairwise(_batch("a", "b", "c"), max_cases=1)
    assert [c.similarity for c in cases] == [0.99]


@pytest.mark.parametrize(
    "similarity, expected",
    [(0.99, RiskLevel.HIGH), (0.95, RiskLevel.MEDIUM), (0.91, RiskLevel.MEDIUM), (0.9, RiskLevel.LOW)],
)
def test_pairwise_risk_boundaries(similarity, expected):
    assert pairwise_risk(similarity) == expected


def test_longest_run_ignores_case_and_punctuation(detector):
    assert detector.longest_common_run("Water, evaporates FROM oceans.", REFERENCE) == 4


def test_long_copied_run_is_high_risk(detector):
    student = (
        "I think water evaporates from oceans and lakes then condenses "
        "into clouds before falling as hail"
    )
    assert detector.longest_common_run(student, REFERENCE) == 12
    assert detector.assess_risk(student, REFERENCE, 0.5) == RiskLevel.HIGH


def test_moderate_copied_run_is_medium_risk(detector):
    student = "Basically water evaporates from oceans and lakes then we get weather"
    assert detector.longest_common_run(student, REFERENCE) == 7
    assert detector.assess_risk(student, REFERENCE, 0.5) == RiskLevel.MEDIUM


def test_own_words_low_risk(detector):
    assert detector.assess_risk("Clouds form when vapour cools", REFERENCE, 0.3) == RiskLevel.LOW


def test_high_similarity_long_answer_is_high_risk(detector):
    """Near-identical scores on a long answer count even without a copied run."""
    student = " ".join(f"word{i}" for i in range(25))
    assert detector.assess_risk(student, REFERENCE, 0.96) == RiskLevel.HIGH
    assert detector.assess_risk(student, REFERENCE, 0.92) == RiskLevel.MEDIUM
