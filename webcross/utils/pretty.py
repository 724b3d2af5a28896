"""Pretty-print helpers for crossword grids."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine.generator import CrosswordResult
    from ..engine.grid import CrosswordGrid


EMPTY_SYMBOL = "#"


def format_grid(grid: CrosswordGrid) -> str:
    width = grid.size
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r in range(width):
        row_cells = [grid.letter_at(r, c) or EMPTY_SYMBOL for c in range(width)]
        row_render = " ".join(f"{symbol:>2}" for symbol in row_cells)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_grid(grid: CrosswordGrid, *, label: str | None = None, stream=None) -> None:
    """Print the crossword grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def print_crossword_stats(result: CrosswordResult, *, stream=None) -> None:
    """Print grid, clue lists and layout stats for a finished crossword."""

    stream = stream or sys.stdout
    print(format_grid(result.grid), file=stream)

    grid = result.grid
    total_cells = grid.size * grid.size
    letter_cells = grid.filled_count

    print(file=stream)
    print("--- Grid ---", file=stream)
    print(f"  Size:          {grid.size} x {grid.size} ({total_cells} cells)", file=stream)
    print(f"  Letters:       {letter_cells} ({letter_cells / total_cells * 100:.0f}%)", file=stream)
    print(f"  Strategy:      {result.strategy}", file=stream)

    lengths = [placement.length for placement in result.placements]
    print(file=stream)
    print("--- Words ---", file=stream)
    print(f"  Placed:        {len(result.placements)} ({len(result.across)} across, {len(result.down)} down)", file=stream)
    if lengths:
        dist_parts = [f"{l}:{c}" for l, c in sorted(Counter(lengths).items())]
        print(f"  Length range:  {min(lengths)}-{max(lengths)}", file=stream)
        print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)
    if result.skipped:
        print(f"  Skipped:       {', '.join(entry.word for entry in result.skipped)}", file=stream)

    for heading, lines in (("Across", result.across), ("Down", result.down)):
        print(file=stream)
        print(f"--- {heading} ---", file=stream)
        for line in lines:
            print(f"  {line.label}", file=stream)

    if result.validation_messages:
        print(file=stream)
        print("--- Validation ---", file=stream)
        for msg in result.validation_messages:
            print(f"  {msg}", file=stream)

    if result.seed is not None:
        print(file=stream)
        print(f"Seed: {result.seed}", file=stream)
