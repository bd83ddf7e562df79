import logging
import concurrent.futures
from typing import List, Optional, Sequence

from .config import Config
from .models import EvaluateRequest, EvaluationResult
from .phrase_bank import PhraseBank
from .prompts.templates import UNKNOWN_CORRECTION
from .scorer import ResponseScorer
from .utils.text_utils import normalize

logger = logging.getLogger(__name__)


class ResponseEvaluator:
    """
    Core class for judging a spoken or typed answer to a practice question.
    """

    def __init__(
        self,
        phrase_bank: Optional[PhraseBank] = None,
        scorer: Optional[ResponseScorer] = None,
        pass_threshold: float = Config.PASS_THRESHOLD,
        neutral_score: float = Config.NEUTRAL_SCORE,
    ):
        self.phrase_bank = phrase_bank or PhraseBank()
        self.scorer = scorer or ResponseScorer()
        self.pass_threshold = pass_threshold
        self.neutral_score = neutral_score

    def get_expected_responses(self, question: str) -> Sequence[str]:
        """Acceptable answers for a question, as the phrase bank resolves them."""
        return self.phrase_bank.get_expected_responses(question)

    def score_response(self, question: str, response: str) -> float:
        """
        Compute the quality score of a response to a question.

        Args:
            question: The question that was asked
            response: The learner's answer

        Returns:
            Best score over the acceptable answers, 0 for an empty response and
            the neutral score when the question has no known answers
        """
        if not response or not response.strip():
            return 0.0

        normalized_question = normalize(question)
        normalized_response = normalize(response)

        match = self.phrase_bank.resolve(normalized_question)
        if match.is_fallback or not match.answers:
            logger.info(
                f"No expected answers for '{question[:50]}', using neutral score"
            )
            return self.neutral_score

        best_score = 0.0
        for expected in match.answers:
            score = self.scorer.score(normalized_response, expected)
            logger.debug(f"  {score:.1f} against '{expected}'")
            if score > best_score:
                best_score = score

        return best_score

    def evaluate(
        self, question: str, response: str, confidence: Optional[float] = None
    ) -> EvaluationResult:
        """
        Evaluate a response and attach a correction when it does not pass.

        ``confidence`` comes from the speech collaborator and is not used
        for scoring.
        """
        score = self.score_response(question, response)
        passed = score > self.pass_threshold

        correction = None
        if not passed:
            correction = self.generate_correction(question, response)

        logger.info(
            f"Evaluated answer to '{question[:50]}': score={score:.1f} passed={passed}"
        )
        return EvaluationResult(score=score, passed=passed, correction=correction)

    def generate_correction(self, question: str, response: str) -> str:
        """
        Pick the acceptable answer closest to the response.

        The first answer is the starting candidate with a baseline of 0 and is
        only replaced by a strictly higher score, so ties keep the earliest.
        """
        expected_responses = self.phrase_bank.get_expected_responses(question)
        if not expected_responses:
            return UNKNOWN_CORRECTION

        normalized_response = normalize(response)
        best_match = expected_responses[0]
        best_score = 0.0

        for expected in expected_responses:
            score = self.scorer.score(normalized_response, normalize(expected))
            if score > best_score:
                best_score = score
                best_match = expected

        return best_match


class BatchEvaluator:
    """
    Class for handling batch evaluation of answers.
    """

    def __init__(self, evaluator: ResponseEvaluator):
        self.evaluator = evaluator

    def evaluate_batch(
        self,
        items: List[EvaluateRequest],
        max_workers: int = Config.DEFAULT_MAX_WORKERS,
    ) -> List[Optional[EvaluationResult]]:
        """Evaluate many answers in parallel, keeping input order."""
        results: List[Optional[EvaluationResult]] = [None] * len(items)
        successful = 0
        failed = 0

        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_index = {
                executor.submit(
                    self.evaluator.evaluate,
                    item.question,
                    item.response,
                    item.confidence,
                ): index
                for index, item in enumerate(items)
            }

            for future in concurrent.futures.as_completed(future_to_index):
                index = future_to_index[future]
                try:
                    results[index] = future.result()
                    successful += 1
                except Exception as e:
                    logger.error(
                        f"Failed to evaluate item {index}: {items[index].question[:50]}... Error: {e}"
                    )
                    failed += 1

        logger.info(
            f"Batch evaluation complete. Successful: {successful}, Failed: {failed}"
        )
        return results


default_evaluator = ResponseEvaluator()


def evaluate(question: str, response: str) -> EvaluationResult:
    """Evaluate with the built-in phrase bank."""
    return default_evaluator.evaluate(question, response)


def generate_correction(question: str, response: str) -> str:
    """Correction from the built-in phrase bank."""
    return default_evaluator.generate_correction(question, response)


def get_expected_responses(question: str) -> Sequence[str]:
    """Acceptable answers from the built-in phrase bank."""
    return default_evaluator.get_expected_responses(question)
