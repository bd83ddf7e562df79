import json
import csv
import logging
from typing import List, Dict, Any, Optional
from datetime import datetime

from ..models import QuestionSet
from ..phrase_bank import PhraseBank

logger = logging.getLogger(__name__)


def validate_phrase_bank_format(data: Dict[str, Any]) -> bool:
    """
    Validate that a phrase bank dictionary has the expected shape.

    Args:
        data: Dictionary with "learning" and "evaluation" question maps

    Returns:
        True if valid, False otherwise
    """
    if not isinstance(data, dict):
        return False

    for question_set in QuestionSet:
        phrases = data.get(question_set.value)
        if not isinstance(phrases, dict):
            return False
        for question, answers in phrases.items():
            if not isinstance(question, str) or not isinstance(answers, list):
                return False
            if not all(isinstance(answer, str) for answer in answers):
                return False

    return True


def load_phrase_bank_from_json(filepath: str) -> PhraseBank:
    """
    Load a phrase bank from a JSON file.

    Expected JSON format:
    {
        "learning": {"How are you today?": ["I am fine, thank you."]},
        "evaluation": {"What is your name?": ["My name is [Name]."]},
        "fallback": "optional generic answer"
    }

    Args:
        filepath: Path to JSON file

    Returns:
        PhraseBank built from the file
    """
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not validate_phrase_bank_format(data):
        raise ValueError(f"Invalid phrase bank format in {filepath}")

    kwargs = {
        "learning": data[QuestionSet.LEARNING.value],
        "evaluation": data[QuestionSet.EVALUATION.value],
    }
    if data.get("fallback"):
        kwargs["fallback"] = data["fallback"]

    return PhraseBank(**kwargs)


def validate_response_format(item: Any) -> bool:
    """
    Check that a response record can be evaluated.

    The question must be a string; the response must be present and be a
    string or null (an unanswered question).
    """
    if not isinstance(item, dict):
        return False
    if not isinstance(item.get("question"), str) or "response" not in item:
        return False
    return item["response"] is None or isinstance(item["response"], str)


def load_responses_from_json(filepath: str) -> List[Dict[str, Any]]:
    """
    Load question/response pairs from a JSON file.

    Expected JSON format:
    [
        {"question": "Where do you live?", "response": "I live in Paris."}
    ]

    Args:
        filepath: Path to JSON file

    Returns:
        List of response dictionaries
    """
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)

    return data if isinstance(data, list) else [data]


def _parse_confidence(value: Optional[str], line_number: int) -> Optional[float]:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric confidence {value!r} on line {line_number}")
        return None


def load_responses_from_csv(filepath: str) -> List[Dict[str, Any]]:
    """
    Load question/response pairs from a CSV file.

    Expected CSV format:
    question,response,confidence
    "Where do you live?","I live in Paris.",0.92

    Args:
        filepath: Path to CSV file

    Returns:
        List of response dictionaries
    """
    responses = []

    with open(filepath, "r", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for line_number, row in enumerate(reader, start=2):
            responses.append(
                {
                    "question": row["question"],
                    "response": row["response"],
                    "confidence": _parse_confidence(row.get("confidence"), line_number),
                }
            )

    return responses


def export_results_to_json(
    results: List[Dict[str, Any]],
    filepath: str = None,
    report: Optional[Dict[str, Any]] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Export evaluation results to a JSON file.

    The file holds an object with "evaluations", "report" and "metadata" keys.

    Args:
        results: List of flat result dictionaries
        filepath: Optional custom filepath
        report: Optional summary statistics
        metadata: Optional run information such as the input file

    Returns:
        The filepath where data was saved
    """
    if filepath is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = f"evaluation_results_{timestamp}.json"

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(
            {
                "evaluations": results,
                "report": report or {},
                "metadata": metadata or {},
            },
            f,
            indent=2,
            ensure_ascii=False,
        )

    return filepath


def export_results_to_csv(results: List[Dict[str, Any]], filepath: str = None) -> str:
    """
    Export evaluation results to CSV format.

    Args:
        results: List of flat result dictionaries
        filepath: Optional custom filepath

    Returns:
        The filepath where data was saved
    """
    if filepath is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = f"evaluation_results_{timestamp}.csv"

    fieldnames = ["question", "response", "score", "passed", "correction"]

    with open(filepath, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(results)

    return filepath
