"""JSON (JRD) codec: RFC 6415 Appendix A.

Wire shape::

    {
      "subject": "acct:bob@example.com",
      "expires": "2012-03-12T20:02:00Z",
      "aliases": ["http://example.com/bob"],
      "properties": {"http://example.com/ns/role": "admin"},
      "links": [
        {"rel": "...", "href": "...", "type": "...",
         "titles": {"en": "...", "default": "..."},
         "properties": {"...": null}}
      ]
    }

A key is emitted only when its field is set. Properties travel as an
object, so repeated property types collapse to the last value.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from xrdctl.domain.document import Document
from xrdctl.domain.errors import FormatError
from xrdctl.domain.links import Link
from xrdctl.domain.properties import (
    Property,
    duplicate_types,
    properties_from_map,
    properties_to_map,
)
from xrdctl.domain.timestamps import format_timestamp, parse_timestamp

logger = logging.getLogger(__name__)

_LINK_ATTRIBUTES = ("rel", "href", "template", "type")
_JSON_NAMES: dict[type, str] = {str: "string", list: "array", dict: "object"}


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------


def loads_json(text: str | bytes) -> dict[str, Any]:
    """Parse JSON text into an object, raising :class:`FormatError` on bad input."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        msg = f"Malformed JSON: {exc}"
        raise FormatError(msg) from exc
    if not isinstance(data, dict):
        msg = f"A JRD document must be a JSON object, got {type(data).__name__}"
        raise FormatError(msg)
    return data


def document_from_json(data: dict[str, Any] | str | bytes) -> Document:
    """Decode a JRD object (or its JSON text) into a :class:`Document`."""
    if not isinstance(data, dict):
        data = loads_json(data)

    expires = None
    if "expires" in data:
        expires = parse_timestamp(_expect(data, "expires", str))

    aliases = None
    if "aliases" in data:
        aliases = _expect(data, "aliases", list)
        for alias in aliases:
            if not isinstance(alias, str):
                msg = f"'aliases' entries must be strings, got {type(alias).__name__}"
                raise FormatError(msg)

    links = None
    if "links" in data:
        links = []
        for entry in _expect(data, "links", list):
            if not isinstance(entry, dict):
                msg = f"'links' entries must be objects, got {type(entry).__name__}"
                raise FormatError(msg)
            links.append(link_from_json(entry))

    document = Document(
        subject=_optional_str(data, "subject"),
        expires=expires,
        aliases=aliases,
        properties=_properties_from_json(data),
        links=links,
    )
    logger.debug(
        "Decoded JRD document for %s (%d links)",
        document.subject,
        len(document.links or ()),
    )
    return document


def link_from_json(data: dict[str, Any]) -> Link:
    """Decode one entry of the ``links`` array."""
    titles = None
    if "titles" in data:
        titles = _expect(data, "titles", dict)
        for lang, text in titles.items():
            if not isinstance(text, str):
                msg = f"Title {lang!r} must be a string, got {type(text).__name__}"
                raise FormatError(msg)
    attributes = {name: _optional_str(data, name) for name in _LINK_ATTRIBUTES}
    return Link(**attributes, titles=titles, properties=_properties_from_json(data))


def _properties_from_json(data: dict[str, Any]) -> tuple[Property, ...] | None:
    if "properties" not in data:
        return None
    mapping = _expect(data, "properties", dict)
    for key, value in mapping.items():
        if value is not None and not isinstance(value, str):
            msg = f"Property {key!r} must be a string or null, got {type(value).__name__}"
            raise FormatError(msg)
    return properties_from_map(mapping)


def _expect(data: dict[str, Any], key: str, kind: type) -> Any:
    value = data[key]
    if not isinstance(value, kind):
        msg = f"'{key}' must be a JSON {_JSON_NAMES[kind]}, got {type(value).__name__}"
        raise FormatError(msg)
    return value


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    if data.get(key) is None:
        return None
    return _expect(data, key, str)


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------


def document_to_json(document: Document) -> dict[str, Any]:
    """Encode *document* as a JRD object. Unset fields produce no key."""
    result: dict[str, Any] = {}
    if document.subject is not None:
        result["subject"] = document.subject
    if document.expires is not None:
        result["expires"] = format_timestamp(document.expires)
    if document.aliases is not None:
        result["aliases"] = list(document.aliases)
    if document.properties is not None:
        result["properties"] = _collapse(document.properties, owner="document")
    if document.links is not None:
        result["links"] = [link_to_json(link) for link in document.links]
    return result


def link_to_json(link: Link) -> dict[str, Any]:
    """Encode one link as a JRD ``links`` entry."""
    result: dict[str, Any] = {}
    for name in _LINK_ATTRIBUTES:
        value = getattr(link, name)
        if value is not None:
            result[name] = value
    if link.titles is not None:
        result["titles"] = dict(link.titles)
    if link.properties is not None:
        result["properties"] = _collapse(link.properties, owner=f"link {link.rel}")
    return result


def dumps_json(
    document: Document,
    *,
    indent: int | None = None,
    ensure_ascii: bool = False,
) -> str:
    """Encode *document* to JRD text."""
    return json.dumps(document_to_json(document), indent=indent, ensure_ascii=ensure_ascii)


def _collapse(properties: tuple[Property, ...], *, owner: str) -> dict[str, str | None]:
    dupes = duplicate_types(properties)
    if dupes:
        logger.debug("Collapsing repeated property types on %s: %s", owner, ", ".join(dupes))
    return properties_to_map(properties) or {}
