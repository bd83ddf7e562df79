#!/usr/bin/env python3
"""
Batch Speaking Practice Evaluation

This script scores a file of recorded practice answers with the response
evaluation engine and writes detailed results plus a summary report.
Input is a JSON list or a CSV file with "question" and "response" columns
(and an optional "confidence").

Usage:
    python evaluation_runner.py [--input responses.json] [--output output_dir] [--phrase-bank bank.json]
"""

import sys
import argparse
import logging
import pandas as pd
from pathlib import Path
from datetime import datetime
from typing import List, Dict, Any, Optional
from tqdm import tqdm

from speakeval.evaluator import ResponseEvaluator
from speakeval.phrase_bank import PhraseBank
from speakeval.utils.data_utils import (
    export_results_to_csv,
    export_results_to_json,
    load_phrase_bank_from_json,
    load_responses_from_csv,
    load_responses_from_json,
    validate_response_format,
)
from evaluation_config import EVALUATION_CONFIG

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


class BatchEvaluationRunner:
    """Scores a response file and writes reports into an output directory"""

    def __init__(self, config: Dict[str, Any], evaluator: Optional[ResponseEvaluator] = None):
        self.config = config

        if evaluator is None:
            phrase_bank_file = config.get("phrase_bank_file")
            phrase_bank = (
                load_phrase_bank_from_json(phrase_bank_file)
                if phrase_bank_file
                else PhraseBank()
            )
            evaluator = ResponseEvaluator(phrase_bank=phrase_bank)
        self.evaluator = evaluator

        # Create output directory
        self.output_dir = Path(config.get("output_directory", "evaluation_results"))
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def load_responses(self, input_file: str) -> List[Dict[str, Any]]:
        """Load responses from a JSON or CSV file"""
        if input_file.lower().endswith(".csv"):
            return load_responses_from_csv(input_file)
        return load_responses_from_json(input_file)

    def process_responses(self, responses: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Evaluate every response with progress tracking"""
        evaluations = []
        skipped = 0
        include_corrections = self.config.get("include_corrections", True)

        for idx, item in enumerate(tqdm(responses, desc="Evaluating responses")):
            if not validate_response_format(item):
                logger.warning(
                    f"Skipping record {idx + 1}: question must be text and response text or null"
                )
                skipped += 1
                continue

            question = item["question"]
            response = item["response"] or ""
            result = self.evaluator.evaluate(question, response, item.get("confidence"))

            evaluations.append(
                {
                    "index": idx,
                    "question": question,
                    "response": response,
                    "score": round(result.score, 2),
                    "passed": result.passed,
                    "correction": result.correction if include_corrections else None,
                }
            )

        logger.info(f"Completed {len(evaluations)} evaluations, {skipped} skipped")
        return evaluations

    def generate_report(self, evaluations: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Generate summary statistics"""
        if not evaluations:
            return {}

        df = pd.DataFrame(evaluations)

        question_analysis = df.groupby("question")["score"].agg(["mean", "min", "max", "count"])
        pass_rates = df.groupby("question")["passed"].mean() * 100

        return {
            "total_evaluations": len(evaluations),
            "unique_questions": int(df["question"].nunique()),
            "mean_score": float(df["score"].mean()),
            "min_score": float(df["score"].min()),
            "max_score": float(df["score"].max()),
            "pass_rate": float(df["passed"].mean() * 100),
            "by_question": question_analysis.astype(float).to_dict("index"),
            "pass_rate_by_question": pass_rates.to_dict(),
        }

    def run(self, input_file: str) -> Optional[str]:
        """Run the complete evaluation pipeline"""
        logger.info(f"Processing file: {input_file}")

        evaluations = self.process_responses(self.load_responses(input_file))
        if not evaluations:
            logger.error("No responses could be evaluated")
            return None

        report = self.generate_report(evaluations)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        # Detailed results
        detailed_file = export_results_to_json(
            evaluations,
            str(self.output_dir / f"detailed_evaluation_{timestamp}.json"),
            report=report,
            metadata={
                "evaluated_at": datetime.now().isoformat(),
                "input_file": input_file,
            },
        )

        if self.config.get("generate_csv", True):
            export_results_to_csv(
                evaluations, str(self.output_dir / f"evaluation_results_{timestamp}.csv")
            )

        if self.config.get("generate_summary", True):
            self.create_text_summary(
                report, self.output_dir / f"evaluation_summary_{timestamp}.txt"
            )

        logger.info(f"Results saved to: {self.output_dir}")
        return detailed_file

    def create_text_summary(self, report: Dict[str, Any], summary_file: Path):
        """Create a human-readable text summary"""
        with open(summary_file, "w", encoding="utf-8") as f:
            f.write("=" * 60 + "\n")
            f.write("SPEAKING PRACTICE EVALUATION SUMMARY\n")
            f.write("=" * 60 + "\n\n")

            f.write(f"Evaluation Date: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
            f.write(f"Total Evaluations: {report['total_evaluations']}\n")
            f.write(f"Unique Questions: {report['unique_questions']}\n\n")

            f.write("OVERALL PERFORMANCE\n")
            f.write("-" * 20 + "\n")
            f.write(f"Average Score: {report['mean_score']:.2f}\n")
            f.write(f"Minimum Score: {report['min_score']:.2f}\n")
            f.write(f"Maximum Score: {report['max_score']:.2f}\n")
            f.write(f"Pass Rate: {report['pass_rate']:.1f}%\n\n")

            f.write("PERFORMANCE BY QUESTION\n")
            f.write("-" * 25 + "\n")
            for question, stats in sorted(
                report["by_question"].items(), key=lambda x: x[1]["mean"], reverse=True
            ):
                f.write(f"{question}: {stats['mean']:.2f} ({int(stats['count'])} answers)\n")

        logger.info(f"Summary report saved to: {summary_file}")


def main():
    """Main execution function"""
    parser = argparse.ArgumentParser(description="Score a file of practice answers")
    parser.add_argument(
        "--input", default=EVALUATION_CONFIG["input_file"], help="Input JSON or CSV file path"
    )
    parser.add_argument(
        "--output",
        default=EVALUATION_CONFIG["output_directory"],
        help="Output directory path",
    )
    parser.add_argument(
        "--phrase-bank",
        default=EVALUATION_CONFIG["phrase_bank_file"],
        help="Optional phrase bank JSON file",
    )

    args = parser.parse_args()

    config = EVALUATION_CONFIG.copy()
    config["output_directory"] = args.output
    config["phrase_bank_file"] = args.phrase_bank

    try:
        runner = BatchEvaluationRunner(config)
        result_file = runner.run(args.input)

        if result_file:
            print(f"\nEvaluation completed successfully!")
            print(f"Results saved to: {runner.output_dir}")
            print(f"Main results file: {result_file}")
        else:
            print("Evaluation failed. Check logs for details.")
            sys.exit(1)

    except Exception as e:
        logger.error(f"Evaluation failed: {e}")
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
