import math
import re
from typing import Collection, List, Sequence, Set

# Normalized tokens longer than this count as keywords
KEYWORD_MIN_LENGTH = 5

# Weights of the four sub-scores in the combined score
WEIGHTS = {
    "semantic": 0.4,
    "stemmed": 0.3,
    "keyword": 0.2,
    "structural": 0.1,
}

_SENTENCE_END = re.compile(r"[.!?]+")
_NON_WORD = re.compile(r"[^\w\s]")


def jaccard(set_a: Collection[str], set_b: Collection[str], empty_score: float) -> float:
    """
    Jaccard index |A ∩ B| / |A ∪ B|.

    Args:
        set_a, set_b: Token collections (duplicates ignored)
        empty_score: Returned when both are empty

    Returns:
        float in [0, 1]; 0 when exactly one side is empty
    """
    a, b = set(set_a), set(set_b)
    if not a and not b:
        return empty_score
    if not a or not b:
        return 0.0

    return len(a & b) / len(a | b)


def basic_jaccard(text1: str, text2: str) -> float:
    """Jaccard over lowercase whitespace-split words, no normalization"""
    words1 = set((text1 or "").lower().split())
    words2 = set((text2 or "").lower().split())
    return jaccard(words1, words2, empty_score=0.0)


def keyword_set(tokens: Collection[str]) -> Set[str]:
    """Keep the longer normalized tokens that carry most of the meaning"""
    return {token for token in tokens if len(token) >= KEYWORD_MIN_LENGTH}


def keyword_overlap(tokens1: Collection[str], tokens2: Collection[str]) -> float:
    """
    Shared keywords over the larger keyword set: |A ∩ B| / max(|A|, |B|).
    More forgiving than Jaccard when one answer is much longer.
    """
    a, b = keyword_set(tokens1), keyword_set(tokens2)
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0

    return len(a & b) / max(len(a), len(b))


def split_sentences(text: str) -> List[str]:
    """Split on ., ! and ? keeping only non-blank sentences"""
    return [s for s in _SENTENCE_END.split(text or "") if s.strip()]


def _ratio(x: int, y: int) -> float:
    larger = max(x, y)
    return min(x, y) / larger if larger > 0 else 0.0


def structural_overlap(text1: str, text2: str) -> float:
    """Average of the character-length ratio and the sentence-count ratio"""
    text1, text2 = text1 or "", text2 or ""

    length_ratio = _ratio(len(text1), len(text2))
    sentence_ratio = _ratio(len(split_sentences(text1)), len(split_sentences(text2)))

    return (length_ratio + sentence_ratio) / 2


def weighted_sum(semantic: float, stemmed: float, keyword: float, structural: float) -> float:
    """Weighted sum of the four sub-scores, before dampening"""
    # fsum keeps four perfect sub-scores at exactly 1.0
    return math.fsum(
        [
            WEIGHTS["semantic"] * semantic,
            WEIGHTS["stemmed"] * stemmed,
            WEIGHTS["keyword"] * keyword,
            WEIGHTS["structural"] * structural,
        ]
    )


def combine(raw: float) -> float:
    """Dampen a weighted score and clamp it to [0, 1]"""
    return max(0.0, min(dampen(raw), 1.0))


def dampen(raw: float) -> float:
    """Pull high scores down so rote matching never reaches 1.0"""
    if raw > 0.8:
        return raw * 0.85
    elif raw > 0.6:
        return raw * 0.9
    else:
        return raw


def count_syllables(word: str) -> int:
    """Rough vowel-group syllable count"""
    word = word.lower()
    if len(word) <= 3:
        return 1

    word = re.sub(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$", "", word)
    word = re.sub(r"^y", "", word)
    groups = re.findall(r"[aeiouy]{1,2}", word)

    return len(groups) if groups else 1


def readability_score(text: str) -> float:
    """
    Flesch Reading Ease scaled to [0, 1].

    Shorter sentences and shorter words read as clearer text and score
    higher. Empty text scores 0.
    """
    sentences = split_sentences(text)
    words = [w for w in _NON_WORD.sub(" ", (text or "").lower()).split() if len(w) > 2]

    if not sentences or not words:
        return 0.0

    syllables = sum(count_syllables(w) for w in words)
    avg_sentence_length = len(words) / len(sentences)
    avg_syllables_per_word = syllables / len(words)

    flesch = 206.835 - 1.015 * avg_sentence_length - 84.6 * avg_syllables_per_word

    return max(0.0, min(1.0, flesch / 100))


def longest_common_run(words1: Sequence[str], words2: Sequence[str]) -> int:
    """
    Length of the longest run of consecutive words shared by both sequences.

    Classic longest-common-substring table over words, keeping one row.
    """
    if not words1 or not words2:
        return 0

    best = 0
    previous = [0] * (len(words2) + 1)
    for w1 in words1:
        current = [0] * (len(words2) + 1)
        for j, w2 in enumerate(words2, start=1):
            if w1 == w2:
                current[j] = previous[j - 1] + 1
                if current[j] > best:
                    best = current[j]
        previous = current

    return best
