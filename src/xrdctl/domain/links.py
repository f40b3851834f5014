"""XRD links: relation, target, media type, titles, and properties.

A link targets either a fixed ``href`` or a ``template`` containing the
``{uri}`` token, never both (XRD 1.0 section 2.4).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from xrdctl.domain.errors import ValidationError
from xrdctl.domain.properties import (
    Property,
    PropertyInput,
    coerce_properties,
    properties_to_map,
)

DEFAULT_TITLE_KEY = "default"
URI_TOKEN = "{uri}"


@dataclass(frozen=True, init=False)
class Link:
    """A typed link of an XRD document.

    ``properties`` may be passed as a sequence of :class:`Property` or a
    ``type -> value`` mapping; it is stored as a tuple. ``titles`` maps a
    language tag (``"default"`` when none is declared) to the title text.
    """

    rel: str | None = None
    href: str | None = None
    template: str | None = None
    type: str | None = None
    titles: Mapping[str, str] | None = None
    properties: tuple[Property, ...] | None = None

    def __init__(
        self,
        rel: str | None = None,
        href: str | None = None,
        template: str | None = None,
        type: str | None = None,  # noqa: A002
        titles: Mapping[str, str] | None = None,
        properties: PropertyInput | None = None,
    ) -> None:
        if href is not None and template is not None:
            msg = "An XRD Link must not contain both an href and a template"
            raise ValidationError(msg)
        object.__setattr__(self, "rel", rel)
        object.__setattr__(self, "href", href)
        object.__setattr__(self, "template", template)
        object.__setattr__(self, "type", type)
        object.__setattr__(self, "titles", _freeze_titles(titles))
        object.__setattr__(self, "properties", coerce_properties(properties))

    def __hash__(self) -> int:
        titles = frozenset(self.titles.items()) if self.titles is not None else None
        return hash((self.rel, self.href, self.template, self.type, titles, self.properties))

    @property
    def property_map(self) -> dict[str, str | None] | None:
        """Properties as a map; the last property of a repeated type wins."""
        return properties_to_map(self.properties)

    def property(self, type: str) -> str | None:  # noqa: A002
        """Value of the last property with *type*, or None.

        A link without a property list behaves like one with no match.
        """
        if self.properties is None:
            return None
        for prop in reversed(self.properties):
            if prop.type == type:
                return prop.value
        return None

    def title(self, lang: str = DEFAULT_TITLE_KEY) -> str | None:
        """Title for the language tag *lang*, or None."""
        if self.titles is None:
            return None
        return self.titles.get(lang)

    def resolve_href(self, resource: object) -> str | None:
        """Build the resource-specific href.

        The template's ``{uri}`` token is replaced textually by
        ``str(resource)``; without a template the fixed href is returned.
        """
        if self.template is not None:
            return self.template.replace(URI_TOKEN, str(resource))
        return self.href


def _freeze_titles(titles: Mapping[str, str] | None) -> Mapping[str, str] | None:
    if titles is None:
        return None
    if not isinstance(titles, Mapping):
        msg = f"titles must be a mapping of language tag to text, got {type(titles).__name__}"
        raise ValidationError(msg)
    for lang, text in titles.items():
        if not isinstance(lang, str) or not isinstance(text, str):
            msg = f"Title entries must map str to str, got {lang!r}: {text!r}"
            raise ValidationError(msg)
    return MappingProxyType(dict(titles))
