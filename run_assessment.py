#!/usr/bin/env python
"""Command-line entrypoint for CAD risk assessment."""

import argparse
import json
import sys

from cad_risk.batch import run_batch
from cad_risk.scoring import DEFAULT_RULES, assess, rules_from_config
from cad_risk.utils import load_config
from cad_risk.validation import REQUIRED_FIELDS, AssessmentInputError


def _add_assess_arguments(parser: argparse.ArgumentParser) -> None:
    # Every field is read as text and goes through the same validation gate
    # as the HTTP API, so an omitted flag is reported as missing input.
    for name in REQUIRED_FIELDS:
        parser.add_argument(f"--{name.replace('_', '-')}", dest=name, type=str, default=None)
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Optional YAML config whose scoring section overrides the default rules'
    )
    parser.add_argument('--json', action='store_true', help='Print the result as JSON')


def _run_assess(args) -> None:
    rules = rules_from_config(load_config(args.config)) if args.config else DEFAULT_RULES
    raw = {name: getattr(args, name) for name in REQUIRED_FIELDS}
    result = assess(raw, rules)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    print(f"Patient: {raw['patient_id']}")
    print(f"Result:  {result.label} (score {result.score}, threshold {rules.threshold})")
    print("Factors:")
    for factor, points in result.factors.items():
        print(f"  - {factor}: +{points}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Heuristic coronary artery disease (CAD) risk assessment."
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    assess_parser = subparsers.add_parser('assess', help='Assess a single patient')
    _add_assess_arguments(assess_parser)

    batch_parser = subparsers.add_parser('batch', help='Assess every patient in a CSV file')
    batch_parser.add_argument(
        '--config',
        type=str,
        default='config/config.yaml',
        help='Path to the configuration YAML file (default: config/config.yaml)'
    )
    return parser


def main(argv=None):
    """Run a single assessment or a batch of assessments."""
    args = build_parser().parse_args(argv)

    try:
        if args.command == 'assess':
            _run_assess(args)
        else:
            print(f"Running batch assessment with config: {args.config}")
            print("=" * 60)
            output_path = run_batch(args.config)
            print("\n" + "=" * 60)
            print(f"Batch assessment completed. Output: {output_path}")

    except AssessmentInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except (FileNotFoundError, ValueError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"\nUnexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
