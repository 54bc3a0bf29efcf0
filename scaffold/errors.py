"""Exception hierarchy for the scaffold generator."""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for every error the generator raises on purpose."""


class SpecLoadError(ScaffoldError):
    """The specification file could not be read or decoded."""


class SpecFormatError(ScaffoldError):
    """The decoded specification has the wrong shape (e.g. paths is not a mapping)."""
