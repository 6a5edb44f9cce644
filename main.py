"""CLI entrypoint for the crossword auto-filler."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from crossfill.core.exceptions import FillError
from crossfill.data.dictionary import DictionaryConfig
from crossfill.engine.autofill import AutoFill
from crossfill.engine.config import FillConfig
from crossfill.engine.grid import CrosswordGrid
from crossfill.io.datamuse_client import DatamuseAPIError, DatamuseClient
from crossfill.utils.logger import configure_logging
from crossfill.utils.pretty import pretty_print_grid, print_fill_stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fill the open words of a crossword grid from a scored word list",
    )
    parser.add_argument(
        "--grid",
        type=Path,
        help="Grid file: one row per line, '#' black, '.' empty, letters pre-filled",
    )
    parser.add_argument(
        "--dictionary",
        type=Path,
        help="Word list file with one WORD or WORD;score entry per line",
    )
    parser.add_argument(
        "--lookup",
        type=str,
        metavar="PATTERN",
        help="Print Datamuse words matching PATTERN (e.g. C?T) and exit",
    )
    parser.add_argument(
        "--max-backtracks",
        type=int,
        default=FillConfig.max_backtracks,
        help="Backtrack budget of the first search attempt",
    )
    parser.add_argument("--pretty", action="store_true", help="Also print the grid and fill stats")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def run_lookup(pattern: str) -> Dict[str, Any]:
    client = DatamuseClient()
    return {"pattern": pattern.upper(), "words": client.search(pattern)}


def run_fill(args: argparse.Namespace) -> Dict[str, Any]:
    grid = CrosswordGrid.from_file(args.grid)
    filler = AutoFill(grid, FillConfig(max_backtracks=args.max_backtracks))
    filler.load_dictionary(DictionaryConfig(path=args.dictionary))
    result = filler.auto_fill_grid()
    grid_stats = filler.get_grid_stats()

    if args.pretty:
        pretty_print_grid(grid, stream=sys.stderr)
        print_fill_stats(result, filler.statistics, grid_stats, stream=sys.stderr)

    return {
        "success": result.success,
        "message": result.message,
        "rows": grid.to_rows(),
        "words": [
            {"slot": choice.slot_id, "word": choice.word, "score": choice.option.score}
            for choice in result.choices
        ],
        "statistics": filler.statistics.as_dict(),
        "grid_stats": grid_stats.__dict__,
    }


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.lookup is None and (args.grid is None or args.dictionary is None):
        parser.error("provide --grid and --dictionary, or --lookup PATTERN")
    if args.max_backtracks < 0:
        parser.error("--max-backtracks must be non-negative")

    try:
        payload = run_lookup(args.lookup) if args.lookup is not None else run_fill(args)
    except (FillError, DatamuseAPIError) as exc:
        parser.exit(1, f"error: {exc}\n")

    output_text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)


if __name__ == "__main__":  # pragma: no cover
    main()
