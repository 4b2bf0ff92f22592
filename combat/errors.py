class CombatError(Exception):
    """Base class for all combat engine errors."""


class CombatStateError(CombatError, RuntimeError):
    """Engine state broke an invariant. Never recoverable."""


class MapFormatError(CombatError, ValueError):
    """Map text could not be turned into a battle."""

    def __init__(self, message: str, row: int = -1, col: int = -1):
        if row >= 0:
            message = f"{message} (row {row}, col {col})"
        super().__init__(message)
        self.row = row
        self.col = col


class NoWinningPowerError(CombatError, LookupError):
    """No attack power up to the search ceiling gives a clean win."""


class StalemateError(CombatError, RuntimeError):
    """A whole round passed without a move or an attack; it never ends."""
