"""Custom exception hierarchy for crossword generation."""


class CrosswordError(Exception):
    """Base exception for generator failures."""


class WordBankError(CrosswordError):
    """Raised when a word bank entry is invalid or the bank cannot be loaded."""


class SlotPlacementError(CrosswordError):
    """Raised when a word cannot be written into the grid cells it spans."""


class PlanningFailed(CrosswordError):
    """Raised when the word list cannot be laid out on the given grid."""


class ValidationError(CrosswordError):
    """Raised when the crossword integrity checks fail."""


class RenderTargetError(CrosswordError):
    """Raised when the HTML template has no element to render into."""
