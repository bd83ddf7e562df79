import re
from typing import List

from ..data.lexicon import STOPWORDS

_PUNCTUATION_RE = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")
_MULTI_SPACE_RE = re.compile(r"\s{2,}")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """
    Normalize text for comparison.

    Lowercases, removes the punctuation class ``. , / # ! $ % ^ & * ; : { } = - _ ` ~ ( )``,
    collapses runs of whitespace and trims. Question marks, apostrophes and
    brackets are kept.

    Args:
        text: Raw text

    Returns:
        Normalized text ("" for empty input)
    """
    text = _PUNCTUATION_RE.sub("", text.lower())
    text = _MULTI_SPACE_RE.sub(" ", text)
    return text.strip()


def split_words(text: str) -> List[str]:
    """
    Split text on runs of whitespace.

    Unlike ``str.split()`` this keeps the empty token produced by a leading
    or trailing separator, so ``""`` is one (empty) word.
    """
    return _WHITESPACE_RE.split(text)


def extract_keywords(text: str) -> List[str]:
    """
    Extract the content words of a text.

    Tokens of length one and stopwords are dropped; case, punctuation,
    order and duplicates are preserved.

    Args:
        text: Text to extract keywords from

    Returns:
        List of keywords
    """
    return [
        word
        for word in split_words(text)
        if len(word) > 1 and word.lower() not in STOPWORDS
    ]
