import logging
from typing import Optional

from graders.models import DetailedBreakdown, SimilarityBreakdown
from tools.similarity_tools import (
    basic_jaccard,
    combine,
    jaccard,
    keyword_overlap,
    keyword_set,
    readability_score,
    structural_overlap,
    weighted_sum,
)
from utils.entity_extractor import EntityExtractor
from utils.text_normalizer import TextNormalizer

logger = logging.getLogger(__name__)


class SimilarityScorer:
    """
    Multi-signal answer similarity.

    Combines four sub-scores into one dampened score:
    - semantic: overlap of nouns/verbs picked out by the POS tagger
    - stemmed: overlap of normalized, stemmed tokens
    - keyword: overlap of the longer stemmed tokens
    - structural: closeness of length and sentence count

    score() is a pure function of its two inputs. The normalizer and
    extractor are built once and injected.
    """

    def __init__(self, normalizer: TextNormalizer, extractor: EntityExtractor):
        self.normalizer = normalizer
        self.extractor = extractor
        print("  ✓ SimilarityScorer initialized")

    def score(self, student_text: Optional[str], reference_text: Optional[str]) -> SimilarityBreakdown:
        """Full similarity breakdown of a student answer against the reference"""
        student_text = student_text or ""
        reference_text = reference_text or ""

        student_tokens = self.normalizer.normalize(student_text)
        reference_tokens = self.normalizer.normalize(reference_text)

        # 1. Entity overlap (falls back to plain word overlap)
        semantic = self._semantic_similarity(student_text, reference_text)

        # 2. Stemmed token overlap
        stemmed = jaccard(student_tokens, reference_tokens, empty_score=1.0)

        # 3. Keyword overlap
        keyword = keyword_overlap(student_tokens, reference_tokens)

        # 4. Shape of the two answers
        structural = structural_overlap(student_text, reference_text)

        raw = weighted_sum(semantic, stemmed, keyword, structural)
        overall = combine(raw)

        student_keywords = keyword_set(student_tokens)
        reference_keywords = keyword_set(reference_tokens)

        return SimilarityBreakdown(
            semantic_similarity=semantic,
            stemmed_similarity=stemmed,
            keyword_similarity=keyword,
            structural_similarity=structural,
            overall_similarity=overall,
            raw_similarity=max(0.0, min(raw, 1.0)),
            detailed_breakdown=DetailedBreakdown(
                matched_keywords=sorted(reference_keywords & student_keywords),
                missed_keywords=sorted(reference_keywords - student_keywords),
                readability_score=readability_score(student_text),
            ),
        )

    def similarity(self, text1: Optional[str], text2: Optional[str]) -> float:
        """Overall similarity only"""
        return self.score(text1, text2).overall_similarity

    def pair_similarity(self, text1: Optional[str], text2: Optional[str]) -> float:
        """
        Undampened similarity of two student answers.
        Copies must be able to reach 1.0 here, the grading ceiling does not apply.
        """
        return self.score(text1, text2).raw_similarity

    def _semantic_similarity(self, text1: str, text2: str) -> float:
        # Missing tagger model was already reported at startup
        if not self.extractor.tagger_ready:
            return basic_jaccard(text1, text2)

        try:
            entities1 = self.extractor.extract(text1)
            entities2 = self.extractor.extract(text2)
        except Exception as e:
            logger.warning(f"Entity extraction failed, using word overlap: {e}")
            return basic_jaccard(text1, text2)

        return jaccard(entities1, entities2, empty_score=0.0)
