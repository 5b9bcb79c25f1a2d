"""Shared pytest fixtures for the grading tests.

Provides:
- ``normalizer``: one TextNormalizer for the session
- ``extractor``: stand-in for the POS tagger (no NLTK model needed)
- ``scorer`` / ``grader`` / ``detector`` / ``feedback``: wired components
"""

import re

import pytest

from graders.feedback import FeedbackGenerator
from graders.grader import SubmissionGrader
from graders.plagiarism import PlagiarismDetector
from graders.scorer import SimilarityScorer
from utils.text_normalizer import TextNormalizer

MITOCHONDRIA = "The mitochondria is the powerhouse of the cell"


class WordExtractor:
    """Treats every word longer than three letters as a noun or verb."""

    tagger_ready = True

    def extract(self, text):
        return {w.lower() for w in re.findall(r"[A-Za-z]+", text or "") if len(w) > 3}


class BrokenExtractor:
    """Tagger that fails the way a missing NLTK model does."""

    tagger_ready = True

    def extract(self, text):
        raise LookupError("Resource averaged_perceptron_tagger_eng not found")


@pytest.fixture(scope="session")
def normalizer() -> TextNormalizer:
    return TextNormalizer()


@pytest.fixture
def extractor() -> WordExtractor:
    return WordExtractor()


@pytest.fixture
def scorer(normalizer, extractor) -> SimilarityScorer:
    return SimilarityScorer(normalizer, extractor)


@pytest.fixture
def grader(scorer) -> SubmissionGrader:
    return SubmissionGrader(scorer)


@pytest.fixture
def detector(scorer) -> PlagiarismDetector:
    return PlagiarismDetector(scorer)


@pytest.fixture
def feedback(detector) -> FeedbackGenerator:
    return FeedbackGenerator(detector)


@pytest.fixture
def broken_extractor() -> BrokenExtractor:
    return BrokenExtractor()


@pytest.fixture
def mitochondria() -> str:
    return MITOCHONDRIA
