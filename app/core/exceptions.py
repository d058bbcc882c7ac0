"""
Domain errors raised by the core services.

All of them are recoverable: the service leaves the catalog untouched and the
host decides how to present the failure (see the handlers in app.main).
"""


class PlacementError(Exception):
    """Base class for every error the core reports to its caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(PlacementError):
    """A referenced user, opportunity or application id does not exist."""


class DuplicateApplication(PlacementError):
    """The student already has an application for this opportunity."""


class DeadlinePassed(PlacementError):
    """The opportunity's application deadline is behind us."""


class InvalidState(PlacementError):
    """Transition attempted from the wrong state or by the wrong role."""


class InvalidInput(PlacementError):
    """Malformed rating, blank required field and similar."""


class IdTaken(PlacementError):
    """A generated id is already in use. Services retry with a fresh one."""
