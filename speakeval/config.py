"""
Configuration settings for the Speaking Practice Evaluation System.
"""

import os
from typing import Dict, Any
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Configuration class for the application."""

    # Server Configuration
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", 8000))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Evaluation Configuration
    PASS_THRESHOLD: float = float(os.getenv("PASS_THRESHOLD", 70))
    NEUTRAL_SCORE: float = 50.0

    # Speech capture boundary
    MAX_CAPTURE_RETRIES: int = int(os.getenv("MAX_CAPTURE_RETRIES", 3))
    DEFAULT_CONFIDENCE: float = 0.9

    # Optional JSON file replacing the built-in question bank
    PHRASE_BANK_PATH: str = os.getenv("PHRASE_BANK_PATH", "")

    # Batch Configuration
    MAX_BATCH_SIZE: int = 50
    DEFAULT_MAX_WORKERS: int = 3

    # Session Configuration
    MAX_SESSIONS: int = int(os.getenv("MAX_SESSIONS", 1000))

    @classmethod
    def get_scoring_weights(cls) -> Dict[str, float]:
        """
        Get the weights used to combine the three sub-scores.

        Returns:
            Dictionary with keyword, structure and semantic weights
        """
        return dict(SCORING_CONFIG["weights"])

    @classmethod
    def validate_configuration(cls) -> Dict[str, bool]:
        """
        Validate the configuration.

        Returns:
            Dictionary with validation results
        """
        validations = {}

        weights = cls.get_scoring_weights()
        validations["weights_sum_to_one"] = abs(sum(weights.values()) - 1.0) < 1e-9
        validations["threshold_in_range"] = 0 <= cls.PASS_THRESHOLD <= 100

        # Check optional configurations
        validations["custom_phrase_bank"] = bool(cls.PHRASE_BANK_PATH) and (
            os.path.exists(cls.PHRASE_BANK_PATH)
        )

        return validations


# Scoring configuration
SCORING_CONFIG: Dict[str, Any] = {
    "weights": {
        "keyword": 0.5,
        "structure": 0.2,
        "semantic": 0.3,
    },
    "structure": {
        "length_weight": 0.4,
        "order_weight": 0.6,
        "length_penalty_per_word": 10,
    },
    "semantic": {
        "jaccard_weight": 0.7,
        "synonym_weight": 0.3,
    },
}

# Estimated level from the percentage of evaluation answers passed,
# checked from the highest threshold down.
LEVEL_THRESHOLDS = {
    "Advanced": 90,
    "Upper Intermediate": 70,
    "Intermediate": 50,
    "Elementary": 30,
    "Beginner": 0,
}
