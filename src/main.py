"""
Main entry point for headless wordfall runs.

Usage:
    python -m src.main config.yaml
    python -m src.main config.yaml --output results/run1.json --verbose
    python -m src.main --seed 7 --verbose
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

import yaml

from .session import GameRunner, RunConfig


def load_config(config_path: str) -> RunConfig:
    """Load run configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return RunConfig(**data)


def main():
    parser = argparse.ArgumentParser(
        description="Play a headless wordfall game with the greedy placement policy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  max_pieces: 300
  step_ms: 50
  drop_mode: soft
  data_dir: .wordfall
  game:
    width: 10
    height: 10
    seed: 42
    cascade_delay_ms: 450
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (defaults apply if omitted)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save results JSON (default: results/<timestamp>.json)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Override the tile generator seed"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress to stdout"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else RunConfig()
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    if args.seed is not None:
        config.game.seed = args.seed

    if args.output:
        output_path = Path(args.output)
    else:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = Path("results") / f"run_{timestamp}.json"

    runner = GameRunner.create(config=config)

    if args.verbose:
        print(f"Config: {args.config or '(defaults)'}")
        print(f"Output: {output_path}")
        print()

    try:
        result = runner.run(verbose=args.verbose)
    except KeyboardInterrupt:
        print("\nRun interrupted by user")
        runner.end_reason = "Interrupted by user"
        result = runner.get_result()

    runner.save_result(output_path)

    if args.verbose:
        print()
        print(f"Results saved to: {output_path}")

    print()
    print("=== Run Summary ===")
    print(f"Pieces played: {result.pieces_played}")
    print(f"Score: {result.score} (high score {result.high_score})")
    print(f"Level: {result.level}, words formed: {result.words_formed}")
    print(f"End reason: {result.end_reason}")
    print(f"Duration: {result.duration_seconds:.2f}s")

    return 0


if __name__ == "__main__":
    sys.exit(main())
