"""
Command-line interface for cscorrect.

Usage:
    # Correct sentences given as arguments
    cscorrect --dictionary counts.tsv --confusion confusion.yaml 我卖苹果

    # Correct stdin, one sentence per line, with ranked candidates as JSON
    cat input.txt | python -m cscorrect -d counts.tsv -c confusion.yaml --json

    # Override config file values
    cscorrect -d counts.tsv -c confusion.yaml --config cfg.yaml --beam-width 20 我卖苹果
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from cscorrect.config import DETECTION_STRATEGIES, CorrectionConfig, load_config
from cscorrect.exceptions import CSCError
from cscorrect.search.pipeline import create_corrector

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cscorrect",
        description="Correct wrongly substituted Chinese characters with a noisy channel model",
    )
    parser.add_argument("texts", nargs="*", help="Sentences to correct (default: read stdin)")
    parser.add_argument(
        "-d", "--dictionary", type=Path, required=True, help="token<TAB>count file"
    )
    parser.add_argument(
        "-c", "--confusion", type=Path, required=True, help="Confusion-set file (YAML or text)"
    )
    parser.add_argument("--config", type=Path, help="YAML config file")
    parser.add_argument("--beam-width", type=int, help="Hypotheses expanded per position")
    parser.add_argument("--max-results", type=int, help="Candidates returned per sentence")
    parser.add_argument("--detection", choices=DETECTION_STRATEGIES, help="Error location strategy")
    parser.add_argument("--json", action="store_true", help="Print JSON with ranked candidates")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    return parser


def resolve_config(args: argparse.Namespace) -> CorrectionConfig:
    """Config file values, overridden by explicit command-line options."""
    config = load_config(args.config) if args.config else CorrectionConfig()
    overrides = {
        "beam_width": args.beam_width,
        "max_results": args.max_results,
        "detection": args.detection,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if overrides:
        config = dataclasses.replace(config, **overrides)
    return config


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = resolve_config(args)
        corrector = create_corrector(args.dictionary, args.confusion, config)

        texts = args.texts or [line.rstrip("\n") for line in sys.stdin]
        for text in texts:
            if not text.strip():
                print(text)
                continue
            result = corrector.correct(text)
            if args.json:
                print(json.dumps(result.to_dict(), ensure_ascii=False))
            else:
                print(result.corrected_text)
    except CSCError as e:
        logger.error("%s", e)
        print(f"cscorrect: error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
