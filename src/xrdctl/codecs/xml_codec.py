"""XML codec: OASIS XRD 1.0.

Wire shape::

    <?xml version='1.0' encoding='UTF-8'?>
    <XRD xmlns="http://docs.oasis-open.org/ns/xri/xrd-1.0"
         xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
      <Subject>acct:bob@example.com</Subject>
      <Expires>2012-03-12T20:02:00Z</Expires>
      <Alias>http://example.com/bob</Alias>
      <Property type="http://example.com/ns/role">admin</Property>
      <Property type="http://example.com/ns/avatar" xsi:nil="true"/>
      <Link rel="..." template="http://example.com/lrdd?uri={uri}">
        <Property type="...">...</Property>
        <Title xml:lang="en">...</Title>
      </Link>
    </XRD>

``Subject`` and ``Expires`` occur at most once. XML has no way to tell an
empty list from an absent one, so zero ``Alias``/``Property``/``Link``/
``Title`` elements decode to None.
"""

from __future__ import annotations

import logging

from lxml import etree

from xrdctl.domain.document import Document
from xrdctl.domain.errors import FormatError
from xrdctl.domain.links import DEFAULT_TITLE_KEY, Link
from xrdctl.domain.properties import Property
from xrdctl.domain.timestamps import format_timestamp, parse_timestamp

logger = logging.getLogger(__name__)

XRD_NS = "http://docs.oasis-open.org/ns/xri/xrd-1.0"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
XML_NS = "http://www.w3.org/XML/1998/namespace"

_XSI_NIL = f"{{{XSI_NS}}}nil"
_XML_LANG = f"{{{XML_NS}}}lang"
_NIL_TRUE = ("true", "1")
_LINK_ATTRIBUTES = ("rel", "href", "template", "type")


def _q(name: str) -> str:
    """Clark-notation name of an element in the XRD namespace."""
    return f"{{{XRD_NS}}}{name}"


def _make_parser(encoding: str | None = None) -> etree.XMLParser:
    # One parser per call; no DTD entity expansion or network access.
    # An explicit encoding overrides the one declared in the document.
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        huge_tree=False,
        encoding=encoding,
    )


def _text(element: etree._Element) -> str:
    """Full text content of *element* (comments and PIs excluded)."""
    return str(element.xpath("string()"))


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------


def parse_xml(source: str | bytes) -> etree._ElementTree:
    """Parse XML text, raising :class:`FormatError` when it is malformed.

    ``str`` input is already decoded, so any encoding it declares is ignored.
    """
    encoding = None
    if isinstance(source, str):
        source = source.encode("utf-8")
        encoding = "utf-8"
    if not source.strip():
        msg = "Malformed XML: document is empty"
        raise FormatError(msg)
    try:
        root = etree.fromstring(source, parser=_make_parser(encoding))
    except etree.XMLSyntaxError as exc:
        msg = f"Malformed XML: {exc}"
        raise FormatError(msg) from exc
    return root.getroottree()


def document_from_xml(
    source: str | bytes | etree._ElementTree | etree._Element,
) -> Document:
    """Decode an XRD document from XML text or an already parsed tree."""
    if isinstance(source, (str, bytes)):
        tree = parse_xml(source)
    elif isinstance(source, etree._ElementTree):
        tree = source
    elif isinstance(source, etree._Element):
        tree = source.getroottree()
    else:
        msg = f"Cannot decode XRD from {type(source).__name__}"
        raise FormatError(msg)

    xrd = _xrd_element(tree)

    subject = None
    subject_element = _at_most_one(xrd, "Subject")
    if subject_element is not None:
        subject = _text(subject_element)

    expires = None
    expires_element = _at_most_one(xrd, "Expires")
    if expires_element is not None:
        expires = parse_timestamp(_text(expires_element))

    aliases = [_text(e) for e in xrd.findall(_q("Alias"))]
    properties = [_property_from_xml(e) for e in xrd.findall(_q("Property"))]
    links = [link_from_xml(e) for e in xrd.findall(_q("Link"))]

    document = Document(
        subject=subject,
        expires=expires,
        aliases=aliases or None,
        properties=properties or None,
        links=links or None,
    )
    logger.debug("Decoded XRD document for %s (%d links)", subject, len(links))
    return document


def link_from_xml(element: etree._Element) -> Link:
    """Decode a ``<Link>`` element."""
    titles: dict[str, str] = {}
    for title in element.findall(_q("Title")):
        titles[title.get(_XML_LANG, DEFAULT_TITLE_KEY)] = _text(title)
    properties = [_property_from_xml(e) for e in element.findall(_q("Property"))]
    attributes = {name: element.get(name) for name in _LINK_ATTRIBUTES}
    return Link(**attributes, titles=titles or None, properties=properties or None)


def _xrd_element(tree: etree._ElementTree) -> etree._Element:
    """Return the ``<XRD>`` root, checking it is the only substantive node."""
    root = tree.getroot()
    if root is None or root.tag != _q("XRD"):
        tag = None if root is None else root.tag
        msg = f"XRD document must have an <XRD> root element in namespace {XRD_NS}, got {tag}"
        raise FormatError(msg)
    for sibling in root.itersiblings(preceding=True):
        if sibling.tag is not etree.PI:
            msg = "Only processing instructions may precede the <XRD> element"
            raise FormatError(msg)
    if root.getnext() is not None:
        msg = "XRD document should contain exactly one <XRD> element and nothing after it"
        raise FormatError(msg)
    return root


def _at_most_one(xrd: etree._Element, name: str) -> etree._Element | None:
    found = xrd.findall(_q(name))
    if len(found) > 1:
        msg = f"XRD document should contain at most one <{name}> element, found {len(found)}"
        raise FormatError(msg)
    return found[0] if found else None


def _property_from_xml(element: etree._Element) -> Property:
    prop_type = element.get("type")
    if prop_type is None:
        msg = "<Property> element is missing its 'type' attribute"
        raise FormatError(msg)
    if element.get(_XSI_NIL, "").strip() in _NIL_TRUE:
        return Property(type=prop_type, value=None)
    return Property(type=prop_type, value=_text(element))


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------


def document_to_xml(document: Document) -> etree._ElementTree:
    """Build the XML tree of *document*."""
    nsmap: dict[str | None, str] = {None: XRD_NS}
    if _has_nil(document.properties) or any(
        _has_nil(link.properties) for link in document.links or ()
    ):
        nsmap["xsi"] = XSI_NS
    xrd = etree.Element(_q("XRD"), nsmap=nsmap)

    if document.subject is not None:
        _set_text(etree.SubElement(xrd, _q("Subject")), document.subject, "Subject")
    if document.expires is not None:
        etree.SubElement(xrd, _q("Expires")).text = format_timestamp(document.expires)
    for alias in document.aliases or ():
        _set_text(etree.SubElement(xrd, _q("Alias")), alias, "Alias")
    for prop in document.properties or ():
        _property_to_xml(xrd, prop)
    for link in document.links or ():
        link_to_xml(link, parent=xrd)
    return etree.ElementTree(xrd)


def link_to_xml(link: Link, parent: etree._Element | None = None) -> etree._Element:
    """Build a ``<Link>`` element, appended to *parent* when given."""
    if parent is None:
        nsmap: dict[str | None, str] = {None: XRD_NS}
        if _has_nil(link.properties):
            nsmap["xsi"] = XSI_NS
        element = etree.Element(_q("Link"), nsmap=nsmap)
    else:
        element = etree.SubElement(parent, _q("Link"))
    for name in _LINK_ATTRIBUTES:
        value = getattr(link, name)
        if value is not None:
            _set_attribute(element, name, value, f"Link {name}")

    for prop in link.properties or ():
        _property_to_xml(element, prop)
    for lang, text in (link.titles or {}).items():
        title = etree.SubElement(element, _q("Title"))
        if lang != DEFAULT_TITLE_KEY:
            _set_attribute(title, _XML_LANG, lang, "Title language")
        _set_text(title, text, f"Title {lang!r}")
    return element


def dumps_xml(document: Document, *, pretty_print: bool = False) -> str:
    """Encode *document* to XML text, starting with the XML declaration."""
    raw = etree.tostring(
        document_to_xml(document),
        xml_declaration=True,
        encoding="UTF-8",
        pretty_print=pretty_print,
    )
    return raw.decode("utf-8")


def _property_to_xml(parent: etree._Element, prop: Property) -> None:
    element = etree.SubElement(parent, _q("Property"))
    _set_attribute(element, "type", prop.type, "Property type")
    if prop.value is None:
        element.set(_XSI_NIL, "true")
    else:
        _set_text(element, prop.value, f"Property {prop.type!r}")


# lxml rejects control characters and lone surrogates with a bare ValueError.
def _set_text(element: etree._Element, text: str, field: str) -> None:
    try:
        element.text = text
    except ValueError as exc:
        msg = f"{field} value {text!r} cannot be encoded as XML: {exc}"
        raise FormatError(msg) from exc


def _set_attribute(element: etree._Element, name: str, value: str, field: str) -> None:
    try:
        element.set(name, value)
    except ValueError as exc:
        msg = f"{field} value {value!r} cannot be encoded as XML: {exc}"
        raise FormatError(msg) from exc


def _has_nil(properties: tuple[Property, ...] | None) -> bool:
    return any(prop.value is None for prop in properties or ())
