class LudoError(Exception):
    """Base exception for rejected engine commands."""

    pass


class IllegalMoveError(LudoError):
    """Raised when a token cannot move by the given dice value."""

    def __init__(self, message: str, color=None, slot=None, dice=None):
        super().__init__(message)
        self.color = color
        self.slot = slot
        self.dice = dice


class OutOfTurnError(LudoError):
    """Raised when a color acts while it is not its turn."""

    def __init__(self, message: str, color=None, expected=None):
        super().__init__(message)
        self.color = color
        self.expected = expected


class InvalidStateError(LudoError):
    """Raised when a command does not fit the current game phase."""

    pass
