"""Exception hierarchy for the pod definition engine."""

from __future__ import annotations


class PodError(Exception):
    """Base exception for all mosaicpods errors."""


class SchemaLoadError(PodError):
    """Raised when the pod definitions source is missing or malformed.

    Fatal at startup: nothing can be built without a registry.
    """


class SchemaValidationError(PodError):
    """Raised by an explicit registry validation pass.

    Carries every problem found, not only the first one.
    """

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__("; ".join(self.problems) or "Invalid pod definitions")


class DefinitionParseError(PodError):
    """Raised when an advanced whole-definition override is not valid JSON.

    This is a user-correctable input error; the whole build is aborted.
    """
