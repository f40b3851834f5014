"""Shared pytest fixtures for xrdctl tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from datetime import UTC, datetime
from pathlib import Path

import pytest
from click.testing import CliRunner

from xrdctl.domain.document import Document
from xrdctl.domain.links import Link
from xrdctl.domain.properties import Property
from xrdctl.services.telemetry import disable_telemetry

# RFC 6415 Appendix A example, XML form.
HOST_META_XML = """\
<?xml version='1.0' encoding='UTF-8'?>
<XRD xmlns="http://docs.oasis-open.org/ns/xri/xrd-1.0"
     xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <Subject>http://blog.example.com/article/id/314</Subject>
  <Expires>2010-01-30T09:30:00Z</Expires>
  <Alias>http://blog.example.com/cool_new_thing</Alias>
  <Alias>http://blog.example.com/steve/article/7</Alias>
  <Property type="http://blgx.example.net/ns/version">1.2</Property>
  <Property type="http://blgx.example.net/ns/version">1.3</Property>
  <Property type="http://blgx.example.net/ns/ext" xsi:nil="true" />
  <Link rel="author" type="text/html" href="http://blog.example.com/author/steve">
    <Title>About the Author</Title>
    <Title xml:lang="en-us">Author Information</Title>
    <Property type="http://example.com/role">editor</Property>
  </Link>
  <Link rel="author" href="http://example.com/author/john">
    <Title>The other guy</Title>
    <Title>The other author</Title>
  </Link>
  <Link rel="copyright" template="http://example.com/copyright?id={uri}" />
</XRD>
"""

# RFC 6415 Appendix A example, JSON form.
HOST_META_JSON = """\
{
  "subject": "http://blog.example.com/article/id/314",
  "expires": "2010-01-30T09:30:00Z",
  "aliases": [
    "http://blog.example.com/cool_new_thing",
    "http://blog.example.com/steve/article/7"
  ],
  "properties": {
    "http://blgx.example.net/ns/version": "1.3",
    "http://blgx.example.net/ns/ext": null
  },
  "links": [
    {
      "rel": "author",
      "type": "text/html",
      "href": "http://blog.example.com/author/steve",
      "titles": {"default": "About the Author", "en-us": "Author Information"},
      "properties": {"http://example.com/role": "editor"}
    },
    {
      "rel": "author",
      "href": "http://example.com/author/john",
      "titles": {"default": "The other author"}
    },
    {
      "rel": "copyright",
      "template": "http://example.com/copyright?id={uri}"
    }
  ]
}
"""

# A WebFinger-style document with no repeated property types.
WEBFINGER_JSON = """\
{
  "subject": "acct:carol@example.com",
  "aliases": ["http://example.com/~carol"],
  "properties": {"http://example.com/ns/role": "employee"},
  "links": [
    {"rel": "http://webfinger.net/rel/avatar", "href": "http://example.com/carol.jpg"},
    {"rel": "lrdd", "template": "http://example.com/lrdd?uri={uri}"}
  ]
}
"""


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep tests away from real config files, env vars, and global log state."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("XRDCTL_CONFIG", raising=False)
    root = logging.getLogger()
    handlers = root.handlers[:]
    root_level = root.level
    xrd_level = logging.getLogger("xrdctl").level
    yield
    root.handlers = handlers
    root.setLevel(root_level)
    logging.getLogger("xrdctl").setLevel(xrd_level)
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def full_document() -> Document:
    """A document using every field, without repeated property types."""
    return Document(
        subject="acct:bob@example.com",
        expires=datetime(2030, 5, 17, 12, 0, tzinfo=UTC),
        aliases=["http://example.com/bob", "http://example.com/~bob"],
        properties=[
            Property("http://example.com/ns/role", "admin"),
            Property("http://example.com/ns/nickname", ""),
            Property("http://example.com/ns/avatar", None),
        ],
        links=[
            Link(
                rel="http://webfinger.net/rel/profile-page",
                type="text/html",
                href="http://example.com/bob",
                titles={"default": "Bob's page", "de": "Bobs Seite"},
                properties=[Property("http://example.com/ns/visibility", "public")],
            ),
            Link(rel="lrdd", template="http://example.com/lrdd?uri={uri}"),
            Link(
                rel="http://webfinger.net/rel/avatar",
                href="http://example.com/bob.png",
                properties=[Property("http://example.com/ns/size", None)],
            ),
        ],
    )


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write *content* to ``tmp_path / name`` and return the path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def host_meta_xml() -> str:
    return HOST_META_XML


@pytest.fixture
def host_meta_json() -> str:
    return HOST_META_JSON


@pytest.fixture
def webfinger_json() -> str:
    return WEBFINGER_JSON
