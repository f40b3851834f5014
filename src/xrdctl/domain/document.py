"""The XRD document: subject, expiry, aliases, properties, and links.

Every field is optional, and "absent" (None) is kept distinct from
"empty" so the JSON form can reproduce exactly what it was given.

Lookup tie-breaks differ:
- ``property(type)`` returns the LAST matching property (later
  properties override earlier ones, as in the map form).
- ``link(rel)`` returns the FIRST matching link (WebFinger: the first
  link of a relation is the one the subject prefers).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime

from xrdctl.domain.errors import ValidationError
from xrdctl.domain.links import Link
from xrdctl.domain.properties import (
    Property,
    PropertyInput,
    coerce_properties,
    properties_to_map,
)


@dataclass(frozen=True)
class LinkSelection:
    """Re-iterable view of the links carrying one relation, in document order."""

    links: tuple[Link, ...]
    rel: str | None

    def __iter__(self) -> Iterator[Link]:
        return (link for link in self.links if link.rel == self.rel)

    def __bool__(self) -> bool:
        return any(link.rel == self.rel for link in self.links)


@dataclass(frozen=True, init=False)
class Document:
    """An immutable XRD document."""

    subject: str | None = None
    expires: datetime | None = None
    aliases: tuple[str, ...] | None = None
    properties: tuple[Property, ...] | None = None
    links: tuple[Link, ...] | None = None

    def __init__(
        self,
        subject: str | None = None,
        expires: datetime | None = None,
        aliases: Iterable[str] | None = None,
        properties: PropertyInput | None = None,
        links: Iterable[Link] | None = None,
    ) -> None:
        if expires is not None and not isinstance(expires, datetime):
            msg = f"expires must be a datetime, got {type(expires).__name__}"
            raise ValidationError(msg)
        object.__setattr__(self, "subject", subject)
        object.__setattr__(self, "expires", expires)
        object.__setattr__(self, "aliases", _coerce_aliases(aliases))
        object.__setattr__(self, "properties", coerce_properties(properties))
        object.__setattr__(self, "links", _coerce_links(links))

    def __str__(self) -> str:
        return f"XRD document for {self.subject}"

    @property
    def property_map(self) -> dict[str, str | None] | None:
        """Properties as a map; the last property of a repeated type wins.

        See RFC 6415 Appendix A.
        """
        return properties_to_map(self.properties)

    def property(self, type: str) -> str | None:  # noqa: A002
        """Value of the last property with *type*, or None if none matches."""
        if self.properties is None:
            return None
        for prop in reversed(self.properties):
            if prop.type == type:
                return prop.value
        return None

    def link(self, rel: str) -> Link | None:
        """The preferred (first) link with relation *rel*, or None."""
        if self.links is None:
            return None
        for candidate in self.links:
            if candidate.rel == rel:
                return candidate
        return None

    def all_links(self, rel: str) -> LinkSelection:
        """All links with relation *rel*, in document order."""
        return LinkSelection(links=self.links or (), rel=rel)


def _coerce_aliases(aliases: Iterable[str] | None) -> tuple[str, ...] | None:
    if aliases is None:
        return None
    if isinstance(aliases, str):
        msg = "aliases must be a sequence of strings, not a single string"
        raise ValidationError(msg)
    items = tuple(aliases)
    for alias in items:
        if not isinstance(alias, str):
            msg = f"Alias entries must be strings, got {type(alias).__name__}"
            raise ValidationError(msg)
    return items


def _coerce_links(links: Iterable[Link] | None) -> tuple[Link, ...] | None:
    if links is None:
        return None
    items = tuple(links)
    for item in items:
        if not isinstance(item, Link):
            msg = f"links sequence contains a {type(item).__name__}, expected Link"
            raise ValidationError(msg)
    return items
