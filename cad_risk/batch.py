"""Batch assessment step: score a CSV of patient submissions."""

import os

import pandas as pd

from cad_risk.scoring import assess, rules_from_config
from cad_risk.utils import load_config, write_csv, read_csv
from cad_risk.validation import AssessmentInputError

OUTPUT_COLUMNS = ['patient_id', 'label', 'score', 'error']


def assess_frame(patients: pd.DataFrame, rules=None) -> pd.DataFrame:
    """Assess every row of a patients DataFrame.

    Rows that fail validation are kept in the output with the error message
    and no label or score.

    Args:
        patients: One submission per row, columns named after the input fields.
        rules: Optional ScoringRules; defaults are used when omitted.

    Returns:
        DataFrame with columns patient_id, label, score, error.
    """
    records = []
    for row in patients.astype(object).where(pd.notna(patients), None).to_dict(orient='records'):
        patient_id = row.get('patient_id')
        try:
            result = assess(row, rules)
        except AssessmentInputError as e:
            records.append({'patient_id': patient_id, 'label': None, 'score': None, 'error': str(e)})
            continue
        records.append({'patient_id': patient_id, 'label': result.label, 'score': result.score, 'error': None})

    results = pd.DataFrame(records, columns=OUTPUT_COLUMNS)
    results['score'] = results['score'].astype('Int64')
    return results


def run_batch(config_path: str) -> str:
    """Run the batch assessment step.

    Reads the patients CSV named in the config, scores each row with the
    configured rules and writes risk_assessments.csv to the outputs directory.

    Args:
        config_path: Path to the configuration YAML file.

    Returns:
        Path to the output CSV file.

    Raises:
        FileNotFoundError: If the config or the patients CSV is missing.
    """
    print("[batch] Loading configuration...")
    config = load_config(config_path)

    paths = config.get('paths', {})
    outputs_dir = paths.get('outputs_dir', 'outputs')
    patients_path = paths.get('patients_csv', 'data/patients.csv')
    output_path = os.path.join(outputs_dir, 'risk_assessments.csv')

    rules = rules_from_config(config)
    print(f"[batch] Using threshold={rules.threshold}, smoking={rules.smoking_points}, "
          f"inactivity={rules.inactivity_points}, male={rules.male_points}")

    print(f"[batch] Reading patients from: {patients_path}")
    patients = read_csv(patients_path, dtype={'patient_id': str})
    print(f"[batch] Loaded {len(patients)} submissions")

    results = assess_frame(patients, rules)

    print(f"[batch] Writing output to: {output_path}")
    write_csv(results, output_path)

    rejected = int(results['error'].notna().sum())
    counts = results['label'].value_counts()
    print(f"\n[batch] Summary:")
    for label, count in counts.items():
        print(f"        - {label}: {count}")
    print(f"        - rejected: {rejected}")

    print(f"\n[batch] Done. {len(results) - rejected} of {len(results)} submissions scored.")
    return output_path
