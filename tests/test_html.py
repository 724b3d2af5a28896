import tempfile
import unittest
from pathlib import Path

from webcross.core.exceptions import RenderTargetError
from webcross.data.word_bank import WordBank
from webcross.engine.generator import CrosswordGenerator, GeneratorConfig
from webcross.io.html import render_clues_html, render_grid_html, render_into, render_page, write_page

TEMPLATE = """<html><body>
<div id="grid-container"><p>Loading...</p></div>
<section id='clues'></section>
</body></html>"""

NESTED_TEMPLATE = """<div id="grid-container"></div>
<div id="clues"><div class="old">x</div><p>stale</p></div>
<footer>end</footer>"""


def _result():
    bank = WordBank.from_pairs([("CAT", "Pet <3"), ("CAR", "Vehicle"), ("ART", "")])
    return CrosswordGenerator(GeneratorConfig(max_size=None)).generate(bank)


class RenderGridTests(unittest.TestCase):
    def setUp(self) -> None:
        self.result = _result()

    def test_letter_cells_are_inputs(self) -> None:
        html = render_grid_html(self.result.grid)
        self.assertEqual(html.count('<input type="text" maxlength="1"'), 7)
        self.assertEqual(html.count('class="black"'), 93)
        self.assertEqual(html.count("<tr>"), 10)
        self.assertNotIn('value="', html)

    def test_number_badges(self) -> None:
        html = render_grid_html(self.result.grid)
        self.assertIn('<td><span class="number">1</span><input type="text" maxlength="1" data-row="3" data-col="6"', html)
        self.assertIn('<span class="number">2</span>', html)
        self.assertNotIn('<span class="number">3</span>', html)

    def test_show_answers(self) -> None:
        html = render_grid_html(self.result.grid, show_answers=True)
        self.assertIn('data-row="5" data-col="4" value="C"', html)

    def test_clue_lists_escape_text(self) -> None:
        html = render_clues_html(self.result.across, self.result.down)
        self.assertIn("<h3>Across</h3>", html)
        self.assertIn("<h3>Down</h3>", html)
        self.assertIn("2. Pet &lt;3 (3)", html)
        self.assertIn("1. No clue given (3)", html)


class RenderPageTests(unittest.TestCase):
    def setUp(self) -> None:
        self.result = _result()

    def test_render_page(self) -> None:
        page = render_page(self.result, title="Cats & Cars")
        self.assertTrue(page.startswith("<!DOCTYPE html>"))
        self.assertIn("<title>Cats &amp; Cars</title>", page)
        self.assertIn('id="grid-container"', page)
        self.assertIn('id="clues"', page)

    def test_render_into_template(self) -> None:
        page = render_into(TEMPLATE, self.result)
        self.assertNotIn("Loading...", page)
        self.assertIn('<table class="crossword">', page)
        self.assertIn("<h3>Across</h3>", page)
        self.assertTrue(page.rstrip().endswith("</body></html>"))
        self.assertLess(page.index("<h3>Across</h3>"), page.index("</section>"))

    def test_render_into_own_page_replaces_lists(self) -> None:
        page = render_page(self.result)
        again = render_into(page, self.result)

        self.assertEqual(again.count("<h3>Down</h3>"), 1)
        self.assertEqual(again.count("<h3>Across</h3>"), 1)
        self.assertEqual(again.count('<table class="crossword">'), 1)
        self.assertEqual(again.count("</div>"), page.count("</div>"))

    def test_render_into_nested_target(self) -> None:
        page = render_into(NESTED_TEMPLATE, self.result)

        self.assertNotIn("stale", page)
        self.assertNotIn('class="old"', page)
        self.assertEqual(page.count("</div>"), 4)
        self.assertTrue(page.endswith("<footer>end</footer>"))

    def test_missing_target_raises(self) -> None:
        with self.assertRaises(RenderTargetError):
            render_into('<div id="grid-container"></div>', self.result)
        with self.assertRaises(RenderTargetError):
            render_into("<div id='clues'></div>", self.result)

    def test_write_page(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_page(Path(tmpdir) / "puzzle.html", self.result, "Puzzle")
            content = path.read_text(encoding="utf-8")
        self.assertIn("<h1>Puzzle</h1>", content)


if __name__ == "__main__":
    unittest.main()
