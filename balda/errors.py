class BaldaError(Exception):
    """Base class for engine errors."""


class InvalidConfiguration(BaldaError, ValueError):
    """Malformed construction parameters (board size, seed word, strategy name)."""


class IllegalMove(BaldaError):
    """A move the game refuses: out of bounds, occupied cell, foreign letter or bad word path."""


class NoLegalMove(BaldaError):
    """Raised by a player that has nothing to place. The game treats it as a skip."""


class DictionaryLoadFailure(BaldaError):
    """The word source could not be read or produced no usable words."""
