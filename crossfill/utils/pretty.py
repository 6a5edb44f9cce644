"""Pretty-print helpers for crossword grids."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Optional

from ..core.constants import BLACK_SYMBOL

if TYPE_CHECKING:
    from ..core.models import Cell, FillResult, FillStatistics, GridStats
    from ..engine.grid import CrosswordGrid


EMPTY_SYMBOL = "."


def cell_symbol(cell: Cell) -> str:
    if cell.black:
        return BLACK_SYMBOL
    return cell.letter or EMPTY_SYMBOL


def format_grid(grid: CrosswordGrid) -> str:
    width = grid.bounds.cols
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r in range(grid.bounds.rows):
        row_cells = [cell_symbol(grid.cell(r, c)) for c in range(width)]
        row_render = " ".join(f"{symbol:>2}" for symbol in row_cells)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_grid(grid: CrosswordGrid, *, label: str | None = None, stream=None) -> None:
    """Print the crossword grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def print_fill_stats(
    result: FillResult,
    statistics: FillStatistics,
    grid_stats: Optional[GridStats] = None,
    *,
    stream=None,
) -> None:
    """Print the outcome of one auto-fill run with its search counters."""

    stream = stream or sys.stdout
    print(file=stream)
    print(f"--- {result.message} ---", file=stream)
    print(f"  Words placed:          {len(result.choices)}", file=stream)
    print(f"  States:                {statistics.states}", file=stream)
    print(f"  Backtracks:            {statistics.backtracks}", file=stream)
    print(f"  Restricted branchings: {statistics.restricted_branchings}", file=stream)
    print(f"  Retries:               {statistics.retries}", file=stream)
    print(f"  Time:                  {statistics.total_time:.3f}s", file=stream)

    if grid_stats is not None:
        print(file=stream)
        print("--- Grid ---", file=stream)
        print(f"  Words:       {grid_stats.filled_words}/{grid_stats.total_words} filled", file=stream)
        print(f"  Completion:  {grid_stats.completion_percentage}%", file=stream)
