from __future__ import annotations


class FluxError(Exception):
    """Base class for errors raised by flux_actions."""


class InvalidArgument(FluxError, ValueError):
    """An operation was given an argument it cannot work with (e.g. a non-callable subscriber)."""


class ChildNameConflict(InvalidArgument):
    """A child name is already bound on the parent action, or shadows one of its attributes."""

    def __init__(self, name: str) -> None:
        super().__init__("child name already bound or reserved: %r" % name)
        self.name = name
