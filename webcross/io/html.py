"""HTML output: the editable grid table, the clue lists and full pages."""

from __future__ import annotations

import re
from html import escape
from html.parser import HTMLParser
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

from ..core.exceptions import RenderTargetError
from ..engine.grid import Coord, CrosswordGrid
from ..engine.numbering import cell_numbers
from ..utils.logger import get_logger
from .clues import ClueLine

if TYPE_CHECKING:
    from ..engine.generator import CrosswordResult


LOGGER = get_logger(__name__)

GRID_CONTAINER_ID = "grid-container"
CLUES_ID = "clues"

PAGE_CSS = """\
body { font-family: sans-serif; display: flex; flex-direction: column; align-items: center; margin: 20px; }
table.crossword { border-collapse: collapse; margin-bottom: 20px; }
table.crossword td { border: 1px solid #000; width: 32px; height: 32px; padding: 0; position: relative; }
table.crossword td.black { background-color: #000; }
table.crossword input { box-sizing: border-box; border: none; width: 100%; height: 100%; padding: 0;
  text-align: center; text-transform: uppercase; font-size: 18px; background: transparent; outline: none; }
table.crossword input:focus { background-color: #e0e0e0; }
table.crossword .number { position: absolute; top: 1px; left: 2px; font-size: 9px; }
#clues { display: flex; gap: 40px; }
#clues ol { list-style: none; padding: 0; }
"""


def render_grid_html(
    grid: CrosswordGrid,
    numbers: Dict[Coord, int] | None = None,
    show_answers: bool = False,
) -> str:
    """Render the grid as a ``<table>`` of one-letter inputs and black cells."""

    if numbers is None:
        numbers = cell_numbers(grid)
    lines: List[str] = ['<table class="crossword">']
    for r in range(grid.size):
        cells: List[str] = []
        for c in range(grid.size):
            letter = grid.letter_at(r, c)
            if letter is None:
                cells.append('<td class="black"></td>')
                continue
            badge = ""
            if (r, c) in numbers:
                badge = f'<span class="number">{numbers[(r, c)]}</span>'
            value = f' value="{escape(letter)}"' if show_answers else ""
            cells.append(
                f'<td>{badge}<input type="text" maxlength="1" '
                f'data-row="{r}" data-col="{c}"{value}></td>'
            )
        lines.append("  <tr>" + "".join(cells) + "</tr>")
    lines.append("</table>")
    return "\n".join(lines)


def _clue_list_html(heading: str, lines: Sequence[ClueLine]) -> str:
    items = "\n".join(
        f'    <li value="{line.number}">{escape(line.label)}</li>' for line in lines
    )
    return f"  <div>\n    <h3>{heading}</h3>\n    <ol>\n{items}\n    </ol>\n  </div>"


def render_clues_html(across: Sequence[ClueLine], down: Sequence[ClueLine]) -> str:
    return "\n".join([_clue_list_html("Across", across), _clue_list_html("Down", down)])


def render_page(result: CrosswordResult, title: str = "Crossword", show_answers: bool = False) -> str:
    """Return a standalone HTML document for ``result``."""

    numbers = {placement.start: placement.number for placement in result.placements}
    return "\n".join(
        [
            "<!DOCTYPE html>",
            '<html lang="en">',
            "<head>",
            '  <meta charset="UTF-8">',
            f"  <title>{escape(title)}</title>",
            f"  <style>\n{PAGE_CSS}  </style>",
            "</head>",
            "<body>",
            f"  <h1>{escape(title)}</h1>",
            f'  <div id="{GRID_CONTAINER_ID}">',
            render_grid_html(result.grid, numbers, show_answers=show_answers),
            "  </div>",
            f'  <div id="{CLUES_ID}">',
            render_clues_html(result.across, result.down),
            "  </div>",
            "</body>",
            "</html>",
            "",
        ]
    )


class _ElementLocator(HTMLParser):
    """Find the character range of the body of the element with a given id.

    Nested elements with the same tag name are balanced by depth, so the
    body ends at the matching close tag rather than the first one.
    """

    def __init__(self, source: str, element_id: str) -> None:
        super().__init__(convert_charrefs=False)
        self.element_id = element_id
        self.tag: Optional[str] = None
        self.depth = 0
        self.body_start: Optional[int] = None
        self.body_end: Optional[int] = None
        # HTMLParser reports (line, column); lines are split on "\n" only
        self._line_starts = [0] + [match.end() for match in re.finditer("\n", source)]

    def _offset(self) -> int:
        line, column = self.getpos()
        return self._line_starts[line - 1] + column

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        if self.body_end is not None:
            return
        if self.tag is None:
            if dict(attrs).get("id") == self.element_id:
                self.tag = tag
                self.depth = 1
                self.body_start = self._offset() + len(self.get_starttag_text() or "")
            return
        if tag == self.tag:
            self.depth += 1

    def handle_startendtag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        # <div/> neither opens nor closes a level
        return

    def handle_endtag(self, tag: str) -> None:
        if self.tag is None or self.body_end is not None or tag != self.tag:
            return
        self.depth -= 1
        if self.depth == 0:
            self.body_end = self._offset()


def _fill_element(template: str, element_id: str, content: str) -> str:
    locator = _ElementLocator(template, element_id)
    locator.feed(template)
    locator.close()
    if locator.body_start is None or locator.body_end is None:
        LOGGER.error("Error: element #%s not found in template", element_id)
        raise RenderTargetError(f"Template has no element with id '{element_id}'")
    return template[: locator.body_start] + "\n" + content + "\n" + template[locator.body_end:]


def render_into(template: str, result: CrosswordResult, show_answers: bool = False) -> str:
    """Insert the grid and clue lists into a caller-supplied page.

    The template must contain elements with ids ``grid-container`` and
    ``clues``; their current contents are replaced.
    """

    numbers = {placement.start: placement.number for placement in result.placements}
    page = _fill_element(
        template, GRID_CONTAINER_ID, render_grid_html(result.grid, numbers, show_answers=show_answers)
    )
    return _fill_element(page, CLUES_ID, render_clues_html(result.across, result.down))


def write_page(
    path: Path | str,
    result: CrosswordResult,
    title: str = "Crossword",
    show_answers: bool = False,
) -> Path:
    path = Path(path)
    path.write_text(render_page(result, title, show_answers=show_answers), encoding="utf-8")
    LOGGER.info("Wrote crossword page to %s", path)
    return path
