# Batch evaluation configuration
EVALUATION_CONFIG = {
    # File Paths
    "input_file": "responses.json",
    "output_directory": "evaluation_results",
    # Optional phrase bank JSON replacing the built-in questions
    "phrase_bank_file": None,
    # Evaluation Settings
    "include_corrections": True,
    # Report Settings
    "generate_csv": True,
    "generate_summary": True,
}
