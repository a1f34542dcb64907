"""Helpers for the YAML config and the patient CSV files."""

import os
from pathlib import Path
from typing import Optional

import pandas as pd
import yaml


def load_config(config_path: str) -> dict:
    """Load the YAML configuration used by the batch step, the CLI and the API.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the file is not valid YAML or its top level is not a mapping.
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file '{config_path}': {e}")

    if not isinstance(config, dict):
        raise ValueError(f"Config file '{config_path}' must contain a mapping of sections.")
    return config


def write_csv(df: pd.DataFrame, path: str) -> None:
    """Write results to CSV, creating the outputs directory on first use."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)


def read_csv(path: str, dtype: Optional[dict] = None) -> pd.DataFrame:
    """Read a patients CSV.

    Args:
        path: Path to the CSV file.
        dtype: Optional per-column dtypes, e.g. ``{'patient_id': str}`` so
            identifiers like ``007`` keep their leading zeros.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Patients file not found: {path}")
    return pd.read_csv(path, dtype=dtype)
