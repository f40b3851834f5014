"""Typed properties and the list <-> map collapsing rules.

XRD keeps properties as an ordered list; the JSON form (RFC 6415
Appendix A) keeps them as an object keyed by type. Converting the list
to a map is lossy: when several properties share a type, only the last
one survives.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from xrdctl.domain.errors import ValidationError


@dataclass(frozen=True)
class Property:
    """A single typed value. ``value=None`` is a nil property, distinct from ``""``."""

    type: str
    value: str | None = None

    def __str__(self) -> str:
        return f"{self.type}: {self.value}"


PropertyInput = Sequence[Property] | Mapping[str, str | None]


def properties_to_map(properties: Iterable[Property] | None) -> dict[str, str | None] | None:
    """Collapse *properties* into a ``type -> value`` dict.

    Later entries overwrite earlier ones with the same type. Returns
    None when *properties* is None so absence survives the conversion.
    """
    if properties is None:
        return None
    result: dict[str, str | None] = {}
    for prop in properties:
        result[prop.type] = prop.value
    return result


def properties_from_map(mapping: Mapping[str, str | None]) -> tuple[Property, ...]:
    """Expand a ``type -> value`` mapping into properties, in iteration order."""
    return tuple(Property(type=key, value=value) for key, value in mapping.items())


def duplicate_types(properties: Iterable[Property] | None) -> list[str]:
    """Return the types that occur more than once, in first-seen order."""
    if properties is None:
        return []
    seen: set[str] = set()
    dupes: list[str] = []
    for prop in properties:
        if prop.type in seen and prop.type not in dupes:
            dupes.append(prop.type)
        seen.add(prop.type)
    return dupes


def coerce_properties(value: PropertyInput | None) -> tuple[Property, ...] | None:
    """Resolve a constructor's properties argument to a tuple.

    Accepts a sequence of :class:`Property` or a mapping of type to
    value (``str`` or None). Anything else raises :class:`ValidationError`.
    """
    if value is None:
        return None
    if isinstance(value, Mapping):
        for key, item in value.items():
            if not isinstance(key, str):
                msg = f"Property types must be strings, got {type(key).__name__}"
                raise ValidationError(msg)
            if item is not None and not isinstance(item, str):
                msg = f"Property {key!r} must have a string or null value"
                raise ValidationError(msg)
        return properties_from_map(value)
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        msg = (
            "properties must be a sequence of Property or a mapping of str to str, "
            f"got {type(value).__name__}"
        )
        raise ValidationError(msg)
    items = tuple(value)
    for item in items:
        if not isinstance(item, Property):
            msg = f"properties sequence contains a {type(item).__name__}, expected Property"
            raise ValidationError(msg)
    return items
