import pytest
from unittest.mock import Mock
from speakeval.capture import CaptureController, CaptureState
from speakeval.prompts.templates import DEFAULT_CAPTURE_ERROR, get_capture_error_message


class TestCaptureController:
    """Test cases for the speech capture state machine."""

    @pytest.fixture
    def listener(self):
        return Mock()

    @pytest.fixture
    def controller(self, listener):
        return CaptureController(listener, max_retries=3)

    def test_starts_idle(self, controller):
        assert controller.state == CaptureState.IDLE
        assert controller.is_listening is False

    def test_listen_and_stop_delivers_transcript(self, controller, listener):
        assert controller.start() is True
        assert controller.state == CaptureState.LISTENING
        listener.on_start.assert_called_once()

        controller.update("I live")
        controller.update("I live in Paris")
        assert controller.stop() == "I live in Paris"

        listener.on_result.assert_called_once_with("I live in Paris", 0.9)
        listener.on_end.assert_called_once()
        assert controller.state == CaptureState.IDLE

    def test_stop_when_idle_does_nothing(self, controller, listener):
        assert controller.stop() is None
        listener.on_result.assert_not_called()

    def test_provider_end_triggers_bounded_retries(self, controller, listener):
        controller.start()
        assert controller.provider_ended() == CaptureState.RETRYING
        assert controller.retry_count == 1

        controller.provider_ended()
        controller.provider_ended()
        assert controller.retry_count == 3
        assert controller.state == CaptureState.RETRYING

        assert controller.provider_ended() == CaptureState.FALLBACK
        listener.on_end.assert_called_once()

    def test_transcript_update_resumes_listening(self, controller):
        controller.start()
        controller.provider_ended()
        controller.update("hello")
        assert controller.state == CaptureState.LISTENING
        assert controller.transcript == "hello"

    def test_errors_report_messages_and_use_retry_budget(self, controller, listener):
        controller.start()
        controller.fail("no-speech")
        listener.on_error.assert_called_with("No speech was detected. Please try again.")
        assert controller.state == CaptureState.RETRYING

        controller.fail("network")
        controller.fail("network")
        assert controller.fail("not-allowed") == CaptureState.FALLBACK

    def test_error_while_idle_does_not_retry(self, controller, listener):
        controller.fail("aborted")
        listener.on_error.assert_called_once()
        assert controller.state == CaptureState.IDLE
        assert controller.retry_count == 0

    def test_successful_stop_resets_retries(self, controller):
        controller.start()
        controller.provider_ended()
        controller.stop()
        assert controller.retry_count == 0

    def test_fallback_accepts_manual_input(self, controller, listener):
        controller = CaptureController(listener, max_retries=0)
        controller.start()
        controller.provider_ended()
        assert controller.state == CaptureState.FALLBACK

        assert controller.start() is False
        assert controller.submit_manual("  I live in Tokyo ") is True
        listener.on_result.assert_called_once_with("I live in Tokyo", 1.0)
        assert controller.submit_manual("   ") is False

    def test_manual_input_rejected_outside_fallback(self, controller, listener):
        assert controller.submit_manual("hello") is False
        listener.on_result.assert_not_called()

    def test_unknown_error_code_message(self):
        assert get_capture_error_message("something-new") == DEFAULT_CAPTURE_ERROR


if __name__ == "__main__":
    pytest.main([__file__])
