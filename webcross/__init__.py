"""Crossword generator that lays a word bank onto a square grid for the browser.

This package exposes the public API surface via:

- ``webcross.engine.generator.CrosswordGenerator``: plans, numbers and labels a puzzle.
- ``webcross.data.word_bank.WordBank``: loads and normalizes (word, clue) pairs.
- ``webcross.io.html`` helpers: render the finished puzzle as an editable page.
"""

from .data.word_bank import WordBank, load_word_bank
from .engine.generator import CrosswordGenerator, CrosswordResult, GeneratorConfig

__all__ = [
    "CrosswordGenerator",
    "CrosswordResult",
    "GeneratorConfig",
    "WordBank",
    "load_word_bank",
]

__version__ = "0.1.0"
