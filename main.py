"""CLI entrypoint for the browser crossword generator."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from webcross.core.exceptions import CrosswordError
from webcross.data.word_bank import load_word_bank
from webcross.engine.generator import DEFAULT_MAX_STEPS, CrosswordGenerator, GeneratorConfig
from webcross.engine.planner import PLANNERS
from webcross.io.html import render_page, write_page
from webcross.utils.logger import configure_logging, get_logger
from webcross.utils.pretty import format_grid, print_crossword_stats


LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Lay a word bank onto a crossword grid and render it as an HTML page",
    )
    parser.add_argument("--size", type=int, default=10, help="Starting grid size in cells (default 10)")
    parser.add_argument(
        "--max-size",
        type=int,
        default=15,
        help="Largest grid size to grow to when the words do not fit (default 15)",
    )
    parser.add_argument(
        "--words",
        nargs="+",
        metavar="WORD",
        help="Explicit words (format: WORD or WORD:Clue)",
    )
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="Word bank file: .json list, or one WORD:Clue entry per line (# comments ignored)",
    )
    parser.add_argument("--word-bank-url", type=str, metavar="URL", help="Download the word bank over HTTP(S)")
    parser.add_argument(
        "--strategy",
        type=str,
        choices=sorted(PLANNERS),
        default="backtracking",
        help="Layout strategy; greedy and random are best effort and may leave words out",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=DEFAULT_MAX_STEPS,
        help=f"Placement budget per layout attempt before giving up (default {DEFAULT_MAX_STEPS})",
    )
    parser.add_argument("--shuffle", action="store_true", help="Shuffle the bank and retry on failure")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--title", type=str, default="Crossword", help="Page title")
    parser.add_argument("--output", type=Path, metavar="FILE", help="Write the HTML page to FILE")
    parser.add_argument("--json", action="store_true", help="Print the layout as JSON instead of HTML")
    parser.add_argument("--show-answers", action="store_true", help="Pre-fill the inputs with the answers")
    parser.add_argument("--stats", action="store_true", help="Print the grid and layout stats to stderr")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.size < 1:
        parser.error("--size must be positive")
    if args.max_steps < 1:
        parser.error("--max-steps must be positive")

    config = GeneratorConfig(
        size=args.size,
        max_size=args.max_size,
        strategy=args.strategy,
        shuffle=args.shuffle,
        seed=args.seed,
        max_steps=args.max_steps,
    )

    try:
        bank = load_word_bank(words=args.words, words_file=args.words_file, url=args.word_bank_url)
        result = CrosswordGenerator(config).generate(bank)
    except CrosswordError as exc:
        LOGGER.error("Crossword generation failed: %s", exc)
        return 1

    LOGGER.debug("Final grid:\n%s", format_grid(result.grid))
    if args.stats:
        print_crossword_stats(result, stream=sys.stderr)

    if args.json:
        output_text = json.dumps(result.to_jsonable(), ensure_ascii=False, indent=2)
        if args.output:
            args.output.write_text(output_text, encoding="utf-8")
        else:
            print(output_text)
        return 0

    if args.output:
        write_page(args.output, result, args.title, show_answers=args.show_answers)
    else:
        print(render_page(result, args.title, show_answers=args.show_answers))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
