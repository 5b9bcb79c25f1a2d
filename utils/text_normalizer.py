import re
from typing import List, Optional

from nltk.stem import PorterStemmer

# Closed list of English function words dropped before stemming
STOP_WORDS = frozenset(
    [
        "the",
        "and",
        "for",
        "are",
        "but",
        "not",
        "you",
        "all",
        "any",
        "can",
        "had",
        "her",
        "was",
        "one",
        "our",
        "out",
        "has",
        "have",
        "him",
        "his",
        "how",
        "its",
        "may",
        "she",
        "they",
        "them",
        "their",
        "there",
        "these",
        "this",
        "that",
        "those",
        "then",
        "than",
        "what",
        "when",
        "where",
        "which",
        "while",
        "who",
        "whom",
        "why",
        "with",
        "will",
        "would",
        "should",
        "could",
        "shall",
        "been",
        "being",
        "were",
        "does",
        "did",
        "doing",
        "from",
        "into",
        "onto",
        "upon",
        "your",
        "yours",
        "ours",
        "hers",
        "itself",
        "also",
        "because",
        "about",
    ]
)

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


class TextNormalizer:
    """
    Lowercase, strip punctuation, drop stop words and stem.
    Build once at startup and share; holds no per-call state.
    """

    def __init__(self, stop_words=STOP_WORDS, min_token_length: int = 3):
        self.stemmer = PorterStemmer()
        self.stop_words = frozenset(stop_words)
        self.min_token_length = min_token_length

        print("  ✓ TextNormalizer initialized (Porter stemmer)")

    def normalize(self, text: Optional[str]) -> List[str]:
        """Return stemmed content tokens for text (empty list for None/empty)."""
        tokens = []
        for word in self.raw_words(text):
            if word in self.stop_words or len(word) < self.min_token_length:
                continue
            tokens.append(self.stemmer.stem(word))
        return tokens

    def raw_words(self, text: Optional[str]) -> List[str]:
        """Lowercase words with punctuation removed, no stemming or filtering."""
        if not text:
            return []

        cleaned = _NON_WORD.sub(" ", text.lower())
        cleaned = _WHITESPACE.sub(" ", cleaned).strip()

        return cleaned.split(" ") if cleaned else []
