"""Tests for EntityExtractor: tag filtering, tokenizing and tagger model lookup."""

import nltk
import pytest

from utils.entity_extractor import TAGGER_RESOURCE, EntityExtractor

TAGS = {
    "The": "DT",
    "quick": "JJ",
    "students": "NNS",
    "Paris": "NNP",
    "visited": "VBD",
    "are": "VBP",
    "very": "RB",
    "happy": "JJ",
}


@pytest.fixture
def model_present(monkeypatch):
    monkeypatch.setattr(nltk.data, "find", lambda resource: f"/nltk_data/{resource}")


@pytest.fixture
def model_missing(monkeypatch):
    def find(resource):
        raise LookupError(f"Resource {resource} not found")

    monkeypatch.setattr(nltk.data, "find", find)


@pytest.fixture
def tagged_words(monkeypatch):
    """Replace the tagger with a fixed table and record what it was given."""
    seen = []

    def pos_tag(words, lang="eng"):
        seen.append(list(words))
        return [(w, TAGS.get(w, "NN")) for w in words]

    monkeypatch.setattr(nltk, "pos_tag", pos_tag)
    return seen


def test_keeps_nouns_and_verbs_only(model_present, tagged_words):
    extractor = EntityExtractor()
    result = extractor.extract("The quick students visited Paris, very happy.")

    assert result == {"students", "visited", "paris"}


def test_tokenizes_words_before_tagging(model_present, tagged_words):
    EntityExtractor().extract("Mother-in-law's cat, 42 dogs!")
    assert tagged_words == [["Mother-in-law's", "cat", "dogs"]]


def test_empty_text_skips_tagger(model_present, tagged_words):
    extractor = EntityExtractor()

    assert extractor.extract("") == set()
    assert extractor.extract(None) == set()
    assert extractor.extract("123 ...") == set()
    assert tagged_words == []


def test_model_present_is_ready(model_present):
    assert EntityExtractor().tagger_ready is True


def test_missing_model_without_download(model_missing, monkeypatch):
    downloads = []
    monkeypatch.setattr(nltk, "download", lambda *a, **kw: downloads.append(a) or True)

    extractor = EntityExtractor(auto_download=False)

    assert extractor.tagger_ready is False
    assert downloads == []


def test_missing_model_downloaded_when_allowed(model_missing, monkeypatch):
    downloads = []
    monkeypatch.setattr(nltk, "download", lambda *a, **kw: downloads.append(a) or True)

    assert EntityExtractor(auto_download=True).tagger_ready is True
    assert downloads == [(TAGGER_RESOURCE,)]


def test_failed_download_leaves_tagger_off(model_missing, monkeypatch):
    monkeypatch.setattr(nltk, "download", lambda *a, **kw: False)
    assert EntityExtractor(auto_download=True).tagger_ready is False


def test_tagging_errors_propagate(model_present, monkeypatch):
    def pos_tag(words, lang="eng"):
        raise LookupError("Resource averaged_perceptron_tagger_eng not found")

    monkeypatch.setattr(nltk, "pos_tag", pos_tag)

    with pytest.raises(LookupError):
        EntityExtractor().extract("Cells divide")


def test_real_tagger_drops_function_words():
    extractor = EntityExtractor()
    if not extractor.tagger_ready:
        pytest.skip("NLTK tagger model not installed")

    result = extractor.extract("The student writes an answer")
    assert "student" in result
    assert "answer" in result
    assert "the" not in result
    assert "an" not in result
