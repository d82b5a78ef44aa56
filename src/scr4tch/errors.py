"""Exceptions raised by the block-tree core."""


class Scr4tchError(Exception):
    """Base class for scr4tch errors."""


class InvariantViolation(Scr4tchError):
    """A state would break a structural rule of the block tree."""


class PersistError(Scr4tchError):
    """A store failed to commit pending changes."""


class DragStateError(Scr4tchError):
    """A drag session was driven through a transition it does not allow."""
