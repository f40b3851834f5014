"""xrdctl: Extensible Resource Descriptor (XRD 1.0 / RFC 6415 JRD) codec."""

from __future__ import annotations

from xrdctl.domain.document import Document
from xrdctl.domain.errors import FormatError, ValidationError, XrdError
from xrdctl.domain.links import Link
from xrdctl.domain.properties import Property

__version__ = "0.3.0"

__all__ = [
    "Document",
    "FormatError",
    "Link",
    "Property",
    "ValidationError",
    "XrdError",
    "__version__",
]
