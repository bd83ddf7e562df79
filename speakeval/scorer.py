import logging
from typing import Dict, Optional

from .config import SCORING_CONFIG
from .models import ScoreBreakdown
from .synonyms import SynonymTable, default_synonym_table
from .utils.text_utils import extract_keywords, normalize, split_words

logger = logging.getLogger(__name__)


class ResponseScorer:
    """
    Scores a response against one expected answer.

    The final score is a weighted sum of three sub-scores, each in [0, 100]:
    keyword coverage, structural similarity and set-based semantic similarity
    with synonym credit. Keyword and structure scores use the strings as
    passed; the semantic score normalizes both internally.
    """

    def __init__(
        self,
        synonym_table: Optional[SynonymTable] = None,
        config: Optional[Dict] = None,
    ):
        self.synonym_table = synonym_table or default_synonym_table
        config = config or SCORING_CONFIG
        self.weights = config["weights"]
        self.structure_config = config["structure"]
        self.semantic_config = config["semantic"]

    def keyword_score(self, response: str, expected: str) -> float:
        """Percentage of the expected keywords found as substrings of the response."""
        keywords = extract_keywords(expected)
        if not keywords:
            return 0.0

        found = sum(1 for keyword in keywords if keyword in response)
        return found / len(keywords) * 100

    def structure_score(self, response: str, expected: str) -> float:
        """Length similarity combined with same-position word matches."""
        response_words = split_words(response)
        expected_words = split_words(expected)

        length_diff = abs(len(response_words) - len(expected_words))
        length_score = max(
            0, 100 - length_diff * self.structure_config["length_penalty_per_word"]
        )

        order_score = 0.0
        min_length = min(len(response_words), len(expected_words))
        if min_length > 0:
            matches = sum(
                1
                for i in range(min_length)
                if response_words[i].lower() == expected_words[i].lower()
            )
            order_score = matches / min_length * 100

        return (
            length_score * self.structure_config["length_weight"]
            + order_score * self.structure_config["order_weight"]
        )

    def semantic_score(self, response: str, expected: str) -> float:
        """
        Jaccard similarity of the word sets plus credit for synonyms.

        A response word absent from the expected set earns one credit when
        any of its synonyms is in the expected set. Credit is directional:
        only the response word's own synonym list is consulted.
        """
        response_set = set(split_words(normalize(response)))
        expected_set = set(split_words(normalize(expected)))

        union = response_set | expected_set
        jaccard = len(response_set & expected_set) / len(union) if union else 0

        non_matching = [word for word in response_set if word not in expected_set]
        credited = 0
        for word in non_matching:
            for synonym in self.synonym_table.synonyms_of(word):
                if synonym in expected_set:
                    credited += 1
                    break

        # Perfect overlap leaves no words to credit and scores 0 here.
        synonym_score = credited / len(non_matching) * 100 if non_matching else 0

        return (
            jaccard * 100 * self.semantic_config["jaccard_weight"]
            + synonym_score * self.semantic_config["synonym_weight"]
        )

    def breakdown(self, response: str, expected: str) -> ScoreBreakdown:
        """Compute the three sub-scores and the weighted final score."""
        keyword = self.keyword_score(response, expected)
        structure = self.structure_score(response, expected)
        semantic = self.semantic_score(response, expected)

        final = (
            keyword * self.weights["keyword"]
            + structure * self.weights["structure"]
            + semantic * self.weights["semantic"]
        )
        # Clamp float drift from the weighted sums.
        final = min(100.0, max(0.0, final))

        return ScoreBreakdown(
            keyword_score=min(100.0, keyword),
            structure_score=min(100.0, structure),
            semantic_score=min(100.0, semantic),
            score=final,
        )

    def score(self, response: str, expected: str) -> float:
        """Weighted quality score of ``response`` against ``expected``, in [0, 100]."""
        return self.breakdown(response, expected).score


default_scorer = ResponseScorer()


def score(response: str, expected: str) -> float:
    """Score with the built-in synonym table and weights."""
    return default_scorer.score(response, expected)
