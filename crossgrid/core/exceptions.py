"""Custom exception hierarchy for crossword layout."""


class CrosswordError(Exception):
    """Base exception for layout failures."""


class InsufficientInputError(CrosswordError):
    """Raised when too few usable entries are supplied to the layout driver."""


class LayoutUnderflowError(CrosswordError):
    """Raised when too few words could be connected into one grid."""


class ValidationError(CrosswordError):
    """Raised when the finished puzzle fails its integrity checks."""


class EntryGenerationError(CrosswordError):
    """Raised when an entry source returns unusable data."""
