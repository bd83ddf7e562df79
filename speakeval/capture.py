"""
Boundary model for the speech capture collaborator.

The evaluation engine only consumes finished transcripts. This module gives
the capture side an explicit listener interface and a bounded-retry state
machine (Idle -> Listening -> Retrying(n) -> Fallback) so that a transcript
from a microphone and a manually typed answer reach the engine the same way.
"""

import logging
from enum import Enum
from typing import Optional, Protocol

from .config import Config
from .prompts.templates import get_capture_error_message

logger = logging.getLogger(__name__)


class CaptureState(str, Enum):
    IDLE = "idle"
    LISTENING = "listening"
    RETRYING = "retrying"
    FALLBACK = "fallback"


class SpeechCaptureListener(Protocol):
    def on_start(self) -> None: ...

    def on_result(self, text: str, confidence: float) -> None: ...

    def on_error(self, message: str) -> None: ...

    def on_end(self) -> None: ...


class CaptureController:
    """
    Drives one capture provider on behalf of a listener.

    Unexpected provider stops and provider errors consume the retry budget;
    once it is spent the controller enters fallback mode, where answers are
    typed and submitted with ``submit_manual``.
    """

    def __init__(
        self,
        listener: SpeechCaptureListener,
        max_retries: int = Config.MAX_CAPTURE_RETRIES,
        default_confidence: float = Config.DEFAULT_CONFIDENCE,
    ):
        self.listener = listener
        self.max_retries = max_retries
        self.default_confidence = default_confidence
        self.state = CaptureState.IDLE
        self.retry_count = 0
        self.transcript = ""

    @property
    def is_listening(self) -> bool:
        return self.state in (CaptureState.LISTENING, CaptureState.RETRYING)

    def start(self) -> bool:
        """Begin listening. Returns False in fallback mode."""
        if self.state == CaptureState.FALLBACK:
            return False
        if not self.is_listening:
            self.transcript = ""
            self.listener.on_start()
        self.state = CaptureState.LISTENING
        return True

    def update(self, transcript: str) -> None:
        """Record an interim transcript from the provider."""
        if self.is_listening:
            self.transcript = transcript
            if self.state == CaptureState.RETRYING:
                self.state = CaptureState.LISTENING

    def stop(self) -> Optional[str]:
        """
        Stop listening and deliver the transcript captured so far.

        Returns:
            The delivered transcript, or None if nothing was being captured
        """
        if not self.is_listening:
            return None

        text = self.transcript
        self.state = CaptureState.IDLE
        self.retry_count = 0
        self.listener.on_result(text, self.default_confidence)
        self.listener.on_end()
        return text

    def provider_ended(self) -> CaptureState:
        """Handle the provider stopping on its own while we were listening."""
        if self.is_listening:
            self._retry_or_fall_back()
        return self.state

    def fail(self, error_code: str) -> CaptureState:
        """Handle a provider error code."""
        message = get_capture_error_message(error_code)
        logger.warning(f"Speech capture error '{error_code}': {message}")
        self.listener.on_error(message)
        if self.is_listening:
            self._retry_or_fall_back()
        return self.state

    def submit_manual(self, text: str) -> bool:
        """Deliver a typed answer. Only accepted in fallback mode."""
        text = text.strip()
        if self.state != CaptureState.FALLBACK or not text:
            return False
        self.listener.on_result(text, 1.0)
        return True

    def _retry_or_fall_back(self) -> None:
        if self.retry_count >= self.max_retries:
            logger.error(
                f"Speech capture failed after {self.retry_count} retries, switching to manual input"
            )
            self.state = CaptureState.FALLBACK
            self.listener.on_end()
            return

        self.retry_count += 1
        logger.info(f"Restarting speech capture ({self.retry_count}/{self.max_retries})")
        self.state = CaptureState.RETRYING
