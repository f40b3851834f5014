"""Wire codecs: JSON (RFC 6415 JRD) and XML (OASIS XRD 1.0).

The two codecs never call each other; they share only the domain model.
This facade adds format detection and dispatch on top of them.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from xrdctl.codecs.json_codec import document_from_json, dumps_json
from xrdctl.codecs.xml_codec import document_from_xml, dumps_xml
from xrdctl.domain.document import Document
from xrdctl.domain.errors import FormatError


class DocumentFormat(StrEnum):
    """Supported wire formats."""

    JSON = "json"
    XML = "xml"


def detect_format(text: str | bytes) -> DocumentFormat:
    """Guess the wire format from the first non-whitespace character."""
    if isinstance(text, bytes):
        text = text.decode("utf-8-sig", errors="replace")
    stripped = text.lstrip("\ufeff \t\r\n")
    if stripped.startswith("{"):
        return DocumentFormat.JSON
    if stripped.startswith("<"):
        return DocumentFormat.XML
    msg = "Cannot detect document format: expected a JSON object or an XML document"
    raise FormatError(msg)


def load_document(text: str | bytes, fmt: DocumentFormat | str | None = None) -> Document:
    """Decode *text* in *fmt*, detecting the format when not given."""
    resolved = DocumentFormat(fmt) if fmt is not None else detect_format(text)
    if resolved is DocumentFormat.JSON:
        return document_from_json(text)
    return document_from_xml(text)


def dump_document(document: Document, fmt: DocumentFormat | str, **options: Any) -> str:
    """Encode *document* in *fmt*.

    Options are passed through: ``indent``/``ensure_ascii`` for JSON,
    ``pretty_print`` for XML.
    """
    if DocumentFormat(fmt) is DocumentFormat.JSON:
        return dumps_json(document, **options)
    return dumps_xml(document, **options)


__all__ = [
    "DocumentFormat",
    "detect_format",
    "dump_document",
    "load_document",
]
