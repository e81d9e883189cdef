"""Exception types raised by visgate."""

from __future__ import annotations


class VisgateError(Exception):
    """Base class for visgate errors."""


class DecodeError(VisgateError, ValueError):
    """Input bytes are not a decodable PNG image."""


class ValidationError(VisgateError, ValueError):
    """A pixel buffer or option violates its preconditions."""
