import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .data.phrases import EVALUATION_PHRASES, FALLBACK_RESPONSE, LEARNING_PHRASES
from .models import MatchMethod, PhraseMatch, QuestionSet

logger = logging.getLogger(__name__)


class PhraseBank:
    """
    Read-only store of acceptable answers for the learning and evaluation questions.

    Lookups never fail: a question that matches nothing resolves to a single
    generic fallback answer.
    """

    def __init__(
        self,
        learning: Mapping[str, Sequence[str]] = LEARNING_PHRASES,
        evaluation: Mapping[str, Sequence[str]] = EVALUATION_PHRASES,
        fallback: str = FALLBACK_RESPONSE,
    ):
        self._sets: Dict[QuestionSet, Dict[str, Tuple[str, ...]]] = {
            QuestionSet.LEARNING: {q: tuple(a) for q, a in learning.items()},
            QuestionSet.EVALUATION: {q: tuple(a) for q, a in evaluation.items()},
        }
        self.fallback = fallback

    def questions(self, question_set: QuestionSet) -> List[str]:
        """Return the known questions of a set in declaration order."""
        return list(self._sets[QuestionSet(question_set)])

    def get_expected_responses(self, question: str) -> Tuple[str, ...]:
        """
        Get the acceptable answers for a question.

        Args:
            question: Question text in any case

        Returns:
            Ordered answer templates, or a one-element fallback
        """
        return tuple(self.resolve(question).answers)

    def resolve(self, question: str) -> PhraseMatch:
        """
        Resolve a question against the bank.

        Containment is tried over the learning set then the evaluation set,
        then word overlap over the same two sets; the first hit wins.
        """
        normalized = question.lower().strip()

        for question_set in (QuestionSet.LEARNING, QuestionSet.EVALUATION):
            known = self._find_containing(question_set, normalized)
            if known is not None:
                return self._match(question_set, known, MatchMethod.CONTAINMENT)

        for question_set in (QuestionSet.LEARNING, QuestionSet.EVALUATION):
            known = self._find_overlapping(question_set, normalized)
            if known is not None:
                return self._match(question_set, known, MatchMethod.PARTIAL)

        logger.warning(f"No known question matches: {question[:50]}")
        return PhraseMatch(method=MatchMethod.FALLBACK, answers=[self.fallback])

    def _find_containing(
        self, question_set: QuestionSet, normalized: str
    ) -> Optional[str]:
        for known in self._sets[question_set]:
            lowered = known.lower()
            if normalized in lowered or lowered in normalized:
                return known
        return None

    def _find_overlapping(
        self, question_set: QuestionSet, normalized: str
    ) -> Optional[str]:
        input_words = normalized.split()
        for known in self._sets[question_set]:
            known_words = known.lower().split()
            common = [word for word in known_words if word in input_words]
            if len(common) >= len(known_words) * 0.5:
                return known
        return None

    def _match(
        self, question_set: QuestionSet, known: str, method: MatchMethod
    ) -> PhraseMatch:
        logger.debug(f"Matched '{known}' in {question_set.value} set by {method.value}")
        return PhraseMatch(
            question=known,
            question_set=question_set,
            method=method,
            answers=list(self._sets[question_set][known]),
        )
