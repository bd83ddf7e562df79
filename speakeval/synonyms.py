from typing import Mapping, Sequence, Tuple

from .data.lexicon import SYNONYMS


class SynonymTable:
    """
    Read-only lookup over a word -> synonyms mapping.

    The mapping is used as given; it is not symmetrized.
    """

    def __init__(self, synonyms: Mapping[str, Sequence[str]] = SYNONYMS):
        self._synonyms = {
            word.lower(): tuple(words) for word, words in synonyms.items()
        }

    def synonyms_of(self, word: str) -> Tuple[str, ...]:
        """Return the ordered synonyms of ``word``, or an empty tuple if unknown."""
        return self._synonyms.get(word.lower(), ())

    def __contains__(self, word: str) -> bool:
        return word.lower() in self._synonyms

    def __len__(self) -> int:
        return len(self._synonyms)


default_synonym_table = SynonymTable()


def synonyms_of(word: str) -> Tuple[str, ...]:
    """Look up ``word`` in the built-in synonym table."""
    return default_synonym_table.synonyms_of(word)
