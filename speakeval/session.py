"""
Practice sessions: walk a question set, evaluate each answer and build the
text spoken back to the learner.
"""

import logging
import math
from typing import List, Optional

from .config import LEVEL_THRESHOLDS
from .evaluator import ResponseEvaluator
from .models import (
    Feedback,
    ProficiencyLevel,
    QuestionSet,
    SessionSummary,
)
from .prompts.templates import (
    EVALUATION_COMPLETE_MESSAGE,
    LEARNING_COMPLETE_MESSAGE,
    get_feedback_text,
)

logger = logging.getLogger(__name__)


class SessionError(ValueError):
    """Raised when a session cannot perform the requested step."""


class SessionCompleteError(SessionError):
    """Raised when an answer is submitted after the last question."""


class AdvanceNotAllowedError(SessionError):
    """Raised when an evaluation session is asked to skip a question."""


def estimate_level(percentage: float) -> ProficiencyLevel:
    """Map the percentage of passed evaluation answers to a level."""
    for level, threshold in sorted(
        LEVEL_THRESHOLDS.items(), key=lambda x: x[1], reverse=True
    ):
        if percentage >= threshold:
            return ProficiencyLevel(level)
    return ProficiencyLevel.BEGINNER


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class PracticeSession:
    """
    One pass over the learning or evaluation questions.

    Learning sessions let the caller resubmit the current question until
    ``advance()`` is called; evaluation sessions move on after every answer.
    """

    def __init__(
        self,
        mode: QuestionSet = QuestionSet.LEARNING,
        evaluator: Optional[ResponseEvaluator] = None,
    ):
        self.mode = QuestionSet(mode)
        self.evaluator = evaluator or ResponseEvaluator()
        self.questions: List[str] = self.evaluator.phrase_bank.questions(self.mode)
        self.current_index = 0
        self.history: List[Feedback] = []
        self._passed_by_index = {}

    @property
    def is_complete(self) -> bool:
        return self.current_index >= len(self.questions)

    @property
    def current_question(self) -> Optional[str]:
        if self.is_complete:
            return None
        return self.questions[self.current_index]

    @property
    def correct_answers(self) -> int:
        return sum(1 for passed in self._passed_by_index.values() if passed)

    def submit(self, response: str, confidence: Optional[float] = None) -> Feedback:
        """
        Evaluate an answer to the current question.

        Raises:
            SessionCompleteError: If every question has already been asked
        """
        if self.is_complete:
            raise SessionCompleteError("Session is already complete")

        question = self.current_question
        result = self.evaluator.evaluate(question, response, confidence)
        feedback = Feedback(
            question=question,
            response=response,
            result=result,
            spoken_text=get_feedback_text(result.passed, result.correction),
        )
        self.history.append(feedback)
        self._passed_by_index[self.current_index] = result.passed

        if self.mode == QuestionSet.EVALUATION:
            self._next_question()

        return feedback

    def advance(self) -> Optional[str]:
        """
        Move a learning session to the next question.

        Returns:
            The next question, or None when finished

        Raises:
            AdvanceNotAllowedError: If this is an evaluation session, which
                only moves on when an answer is submitted
        """
        if self.mode == QuestionSet.EVALUATION:
            raise AdvanceNotAllowedError(
                "Evaluation sessions advance only when an answer is submitted"
            )
        return self._next_question()

    def _next_question(self) -> Optional[str]:
        if not self.is_complete:
            self.current_index += 1
        if self.is_complete:
            logger.info(f"{self.mode.value.capitalize()} session complete")
        return self.current_question

    def summary(self) -> SessionSummary:
        total = len(self.questions)
        correct = self.correct_answers
        percentage = correct / total * 100 if total else 0.0

        level = None
        message = None
        if self.is_complete:
            if self.mode == QuestionSet.EVALUATION:
                level = estimate_level(percentage)
                message = EVALUATION_COMPLETE_MESSAGE.format(
                    score=round_half_up(percentage), level=level.value
                )
            else:
                message = LEARNING_COMPLETE_MESSAGE

        return SessionSummary(
            mode=self.mode,
            total_questions=total,
            answered=len(self._passed_by_index),
            correct_answers=correct,
            percentage=percentage,
            level=level,
            message=message,
        )
