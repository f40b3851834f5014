"""Error kinds raised by the model and the codecs.

Both concrete errors subclass ``ValueError`` so callers that only care
about "bad input" can catch the builtin.
"""

from __future__ import annotations


class XrdError(Exception):
    """Base class for all xrdctl library errors."""


class ValidationError(XrdError, ValueError):
    """A model invariant was violated at construction time."""


class FormatError(XrdError, ValueError):
    """Encoded input does not have the expected wire shape."""
