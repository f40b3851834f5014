"""DocumentService: convert, inspect, and resolve XRD documents on disk.

Library errors (FormatError, ValidationError), text that cannot be
written as UTF-8 and file errors are turned into failed ServiceResults;
nothing propagates to the caller.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from xrdctl.codecs import DocumentFormat, detect_format, dump_document, load_document
from xrdctl.codecs.json_codec import link_to_json
from xrdctl.config.logging import document_context
from xrdctl.domain.errors import FormatError, ValidationError
from xrdctl.domain.properties import duplicate_types
from xrdctl.domain.timestamps import format_timestamp
from xrdctl.services.result import ErrorCode, ServiceError, ServiceResult
from xrdctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from xrdctl.config.settings import XrdSettings
    from xrdctl.domain.document import Document

logger = logging.getLogger(__name__)


class DocumentService:
    """File-level operations over XRD documents."""

    def __init__(self, settings: XrdSettings) -> None:
        self._settings = settings

    @traced
    def convert(
        self,
        source: Path,
        *,
        target: str | None = None,
        output: Path | None = None,
    ) -> ServiceResult:
        """Decode *source* and re-encode it as *target* (``json`` or ``xml``).

        Writes to *output* when given, otherwise returns the encoded text
        in ``data["content"]``.
        """
        op = "convert"
        with document_context(source, op):
            try:
                document, source_format = self._load(source)
                target_format = DocumentFormat(target or self._settings.convert.default_target)
                with trace_span("encode") as span:
                    content = dump_document(
                        document, target_format, **self._encode_options(target_format)
                    )
                    if span:
                        span.annotate("format", str(target_format))
                if output is not None:
                    output.parent.mkdir(parents=True, exist_ok=True)
                    output.write_text(content, encoding="utf-8")
            except (FormatError, ValidationError, UnicodeError, OSError) as exc:
                return _failure(op, exc, source)

        warnings: list[str] = []
        if target_format is DocumentFormat.JSON:
            warnings = _collapse_warnings(document)

        data: dict[str, Any] = {
            "source": str(source),
            "source_format": str(source_format),
            "target_format": str(target_format),
        }
        if output is not None:
            data["output"] = str(output)
        else:
            data["content"] = content
        logger.debug("Converted %s from %s to %s", source, source_format, target_format)
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    @traced
    def inspect(self, source: Path) -> ServiceResult:
        """Summarize *source*: subject, expiry, aliases, properties, links."""
        op = "inspect"
        with document_context(source, op):
            try:
                document, source_format = self._load(source)
            except (FormatError, ValidationError, UnicodeError, OSError) as exc:
                return _failure(op, exc, source)

        data: dict[str, Any] = {
            "source": str(source),
            "format": str(source_format),
            "subject": document.subject,
            "expires": format_timestamp(document.expires) if document.expires else None,
            "aliases": list(document.aliases) if document.aliases is not None else None,
            "properties": document.property_map,
            "links": [link_to_json(link) for link in document.links or ()],
        }
        return ServiceResult(ok=True, op=op, data=data, warnings=_collapse_warnings(document))

    @traced
    def resolve(self, source: Path, rel: str, *, resource: str | None = None) -> ServiceResult:
        """Find the preferred link with *rel* and build its href for *resource*.

        *resource* defaults to the document subject.
        """
        op = "resolve"
        with document_context(source, op):
            try:
                document, _fmt = self._load(source)
            except (FormatError, ValidationError, UnicodeError, OSError) as exc:
                return _failure(op, exc, source)

        link = document.link(rel)
        if link is None:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code=ErrorCode.NOT_FOUND,
                    message=f"No link with rel {rel!r}",
                    detail={"rel": rel, "source": str(source)},
                ),
            )

        target = resource if resource is not None else document.subject
        if link.template is not None and target is None:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code=ErrorCode.NO_RESOURCE,
                    message="Link has a template but no resource was given and the "
                    "document has no subject",
                    detail={"rel": rel, "template": link.template},
                ),
            )

        data = {
            "rel": rel,
            "resource": target,
            "href": link.resolve_href(target),
            "link": link_to_json(link),
            "alternatives": sum(1 for _ in document.all_links(rel)) - 1,
        }
        return ServiceResult(ok=True, op=op, data=data)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _load(self, source: Path) -> tuple[Document, DocumentFormat]:
        with trace_span("read") as span:
            raw = source.read_bytes()
            if span:
                span.annotate("bytes", len(raw))
        with trace_span("decode") as span:
            fmt = detect_format(raw)
            document = load_document(raw, fmt)
            if span:
                span.annotate("format", str(fmt))
        return document, fmt

    def _encode_options(self, fmt: DocumentFormat) -> dict[str, Any]:
        output = self._settings.output
        if fmt is DocumentFormat.JSON:
            return {"indent": output.json_indent, "ensure_ascii": output.ensure_ascii}
        return {"pretty_print": output.xml_pretty_print}


def _collapse_warnings(document: Document) -> list[str]:
    """Warn about property types the JSON map form cannot keep apart."""
    warnings = [
        f"Document property type {t!r} repeats; the map form keeps only the last value"
        for t in duplicate_types(document.properties)
    ]
    for link in document.links or ():
        warnings.extend(
            f"Link {link.rel!r} property type {t!r} repeats; "
            "the map form keeps only the last value"
            for t in duplicate_types(link.properties)
        )
    return warnings


def _failure(op: str, exc: Exception, source: Path) -> ServiceResult:
    if isinstance(exc, FormatError):
        code = ErrorCode.FORMAT_ERROR
    elif isinstance(exc, ValidationError):
        code = ErrorCode.VALIDATION_ERROR
    elif isinstance(exc, UnicodeError):
        code = ErrorCode.ENCODING_ERROR
    else:
        code = ErrorCode.IO_ERROR
    logger.debug("%s failed for %s: %s", op, source, exc)
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=str(exc), detail={"source": str(source)}),
    )
