CORRECT_FEEDBACK = "Perfect! You said it correctly."

CORRECTION_FEEDBACK = "Almost correct! The phrase should be: {correction}"

UNKNOWN_CORRECTION = "I'm not sure what the correct answer is."

LEARNING_COMPLETE_MESSAGE = (
    "Congratulations! You have completed this learning session."
)

EVALUATION_COMPLETE_MESSAGE = (
    "Your evaluation is complete. Your score is {score} percent. "
    "Your estimated level is {level}."
)

# Messages for speech provider error codes, shown and spoken to the learner.
CAPTURE_ERROR_MESSAGES = {
    "no-speech": "No speech was detected. Please try again.",
    "aborted": "Speech recognition was interrupted.",
    "audio-capture": "Unable to capture audio. Check your microphone.",
    "network": "Network problem. Check your internet connection.",
    "not-allowed": "Microphone access was denied. Please allow access in your browser settings.",
    "service-not-allowed": "Microphone access was denied. Please allow access in your browser settings.",
    "bad-grammar": "There was a problem with the recognition grammar.",
    "language-not-supported": "The selected language is not supported.",
}

DEFAULT_CAPTURE_ERROR = "An error occurred during speech recognition."


def get_feedback_text(passed: bool, correction: str = None) -> str:
    """Return the sentence spoken back after an answer"""
    if passed:
        return CORRECT_FEEDBACK
    return CORRECTION_FEEDBACK.format(correction=correction or UNKNOWN_CORRECTION)


def get_capture_error_message(error_code: str) -> str:
    """Get the user-facing message for a speech provider error code"""
    return CAPTURE_ERROR_MESSAGES.get(error_code, DEFAULT_CAPTURE_ERROR)
