"""Tests for DocumentService: convert, inspect, resolve."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from xrdctl.codecs.xml_codec import document_from_xml
from xrdctl.config.settings import XrdSettings
from xrdctl.services.documents import DocumentService
from xrdctl.services.telemetry import enable_telemetry

WriteFile = Callable[[str, str], Path]


@pytest.fixture
def service() -> DocumentService:
    return DocumentService(XrdSettings.from_cli())


class TestConvert:
    def test_xml_to_json(
        self,
        service: DocumentService,
        write_file: WriteFile,
        host_meta_xml: str,
        host_meta_json: str,
    ) -> None:
        source = write_file("host-meta.xml", host_meta_xml)
        result = service.convert(source)
        assert result.ok
        assert result.data["source_format"] == "xml"
        assert result.data["target_format"] == "json"
        assert json.loads(result.data["content"]) == json.loads(host_meta_json)

    def test_default_indent(
        self, service: DocumentService, write_file: WriteFile, webfinger_json: str
    ) -> None:
        source = write_file("carol.json", webfinger_json)
        content = service.convert(source).data["content"]
        assert content.startswith('{\n  "subject"')

    def test_collapse_warnings(
        self, service: DocumentService, write_file: WriteFile, host_meta_xml: str
    ) -> None:
        source = write_file("host-meta.xml", host_meta_xml)
        result = service.convert(source, target="json")
        assert len(result.warnings) == 1
        assert "http://blgx.example.net/ns/version" in result.warnings[0]

    def test_no_warnings_for_xml_target(
        self, service: DocumentService, write_file: WriteFile, host_meta_xml: str
    ) -> None:
        source = write_file("host-meta.xml", host_meta_xml)
        result = service.convert(source, target="xml")
        assert result.ok
        assert result.warnings == []
        assert document_from_xml(result.data["content"]) == document_from_xml(host_meta_xml)

    def test_json_to_xml(
        self, service: DocumentService, write_file: WriteFile, webfinger_json: str
    ) -> None:
        source = write_file("carol.json", webfinger_json)
        result = service.convert(source, target="xml")
        doc = document_from_xml(result.data["content"])
        assert doc.subject == "acct:carol@example.com"

    def test_writes_output_file(
        self,
        service: DocumentService,
        write_file: WriteFile,
        tmp_path: Path,
        webfinger_json: str,
    ) -> None:
        source = write_file("carol.json", webfinger_json)
        target = tmp_path / "out" / "carol.xml"
        result = service.convert(source, target="xml", output=target)
        assert result.ok
        assert result.data["output"] == str(target)
        assert "content" not in result.data
        assert target.read_text(encoding="utf-8").startswith("<?xml")

    def test_configured_default_target(self, write_file: WriteFile, webfinger_json: str) -> None:
        write_file("xrdctl.toml", '[convert]\ndefault_target = "xml"\n')
        service = DocumentService(XrdSettings.from_cli())
        source = write_file("carol.json", webfinger_json)
        assert service.convert(source).data["target_format"] == "xml"

    def test_configured_json_layout(self, write_file: WriteFile, webfinger_json: str) -> None:
        write_file("xrdctl.toml", "[output]\njson_indent = 4\nensure_ascii = true\n")
        service = DocumentService(XrdSettings.from_cli())
        source = write_file("carol.json", webfinger_json)
        assert service.convert(source).data["content"].startswith('{\n    "subject"')

    def test_missing_file(self, service: DocumentService, tmp_path: Path) -> None:
        result = service.convert(tmp_path / "nope.json")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "IO_ERROR"

    def test_malformed_input(self, service: DocumentService, write_file: WriteFile) -> None:
        result = service.convert(write_file("bad.xml", "<XRD"))
        assert result.error is not None
        assert result.error.code == "FORMAT_ERROR"
        assert result.error.detail["source"].endswith("bad.xml")

    def test_invalid_link(self, service: DocumentService, write_file: WriteFile) -> None:
        source = write_file("bad.json", '{"links": [{"href": "a", "template": "b"}]}')
        result = service.convert(source)
        assert result.error is not None
        assert result.error.code == "VALIDATION_ERROR"

    def test_control_character_to_xml(
        self, service: DocumentService, write_file: WriteFile
    ) -> None:
        source = write_file("ctl.json", '{"properties": {"t": "a\\u0001b"}}')
        result = service.convert(source, target="xml")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "FORMAT_ERROR"
        assert "Property 't'" in result.error.message

    def test_lone_surrogate_to_file(
        self, service: DocumentService, write_file: WriteFile, tmp_path: Path
    ) -> None:
        source = write_file("surrogate.json", '{"subject": "\\ud800"}')
        result = service.convert(source, target="json", output=tmp_path / "out.json")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "ENCODING_ERROR"


class TestInspect:
    def test_summary(
        self, service: DocumentService, write_file: WriteFile, host_meta_xml: str
    ) -> None:
        result = service.inspect(write_file("host-meta.xml", host_meta_xml))
        assert result.ok
        data = result.data
        assert data["format"] == "xml"
        assert data["subject"] == "http://blog.example.com/article/id/314"
        assert data["expires"] == "2010-01-30T09:30:00Z"
        assert len(data["aliases"]) == 2
        assert data["properties"]["http://blgx.example.net/ns/version"] == "1.3"
        assert [link["rel"] for link in data["links"]] == ["author", "author", "copyright"]
        assert len(result.warnings) == 1

    def test_absent_fields(self, service: DocumentService, write_file: WriteFile) -> None:
        data = service.inspect(write_file("empty.json", "{}")).data
        assert data["subject"] is None
        assert data["expires"] is None
        assert data["aliases"] is None
        assert data["properties"] is None
        assert data["links"] == []

    def test_unknown_format(self, service: DocumentService, write_file: WriteFile) -> None:
        result = service.inspect(write_file("notes.txt", "subject: bob"))
        assert result.error is not None
        assert result.error.code == "FORMAT_ERROR"


class TestResolve:
    def test_template_uses_subject(
        self, service: DocumentService, write_file: WriteFile, webfinger_json: str
    ) -> None:
        result = service.resolve(write_file("carol.json", webfinger_json), "lrdd")
        assert result.ok
        assert result.data["resource"] == "acct:carol@example.com"
        assert result.data["href"] == "http://example.com/lrdd?uri=acct:carol@example.com"
        assert result.data["alternatives"] == 0

    def test_explicit_resource(
        self, service: DocumentService, write_file: WriteFile, webfinger_json: str
    ) -> None:
        result = service.resolve(
            write_file("carol.json", webfinger_json), "lrdd", resource="acct:dave@example.com"
        )
        assert result.data["href"] == "http://example.com/lrdd?uri=acct:dave@example.com"

    def test_fixed_href(
        self, service: DocumentService, write_file: WriteFile, webfinger_json: str
    ) -> None:
        result = service.resolve(
            write_file("carol.json", webfinger_json), "http://webfinger.net/rel/avatar"
        )
        assert result.data["href"] == "http://example.com/carol.jpg"
        assert result.data["link"]["href"] == "http://example.com/carol.jpg"

    def test_first_link_preferred(
        self, service: DocumentService, write_file: WriteFile, host_meta_xml: str
    ) -> None:
        result = service.resolve(write_file("host-meta.xml", host_meta_xml), "author")
        assert result.data["href"] == "http://blog.example.com/author/steve"
        assert result.data["alternatives"] == 1

    def test_no_match(
        self, service: DocumentService, write_file: WriteFile, webfinger_json: str
    ) -> None:
        result = service.resolve(write_file("carol.json", webfinger_json), "missing")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_template_without_resource(
        self, service: DocumentService, write_file: WriteFile
    ) -> None:
        source = write_file("t.json", '{"links": [{"rel": "lrdd", "template": "x?u={uri}"}]}')
        result = service.resolve(source, "lrdd")
        assert result.error is not None
        assert result.error.code == "NO_RESOURCE"

    def test_href_without_resource(self, service: DocumentService, write_file: WriteFile) -> None:
        source = write_file("h.json", '{"links": [{"rel": "self", "href": "http://a"}]}')
        result = service.resolve(source, "self")
        assert result.ok
        assert result.data["resource"] is None
        assert result.data["href"] == "http://a"


class TestTelemetry:
    def test_verbose_spans(
        self, service: DocumentService, write_file: WriteFile, webfinger_json: str
    ) -> None:
        enable_telemetry()
        result = service.convert(write_file("carol.json", webfinger_json), target="xml")
        assert result.meta is not None
        telemetry = result.meta["telemetry"]
        assert telemetry["name"] == "DocumentService.convert"
        names = [child["name"] for child in telemetry["children"]]
        assert names == ["read", "decode", "encode"]

    def test_disabled_by_default(
        self, service: DocumentService, write_file: WriteFile, webfinger_json: str
    ) -> None:
        result = service.inspect(write_file("carol.json", webfinger_json))
        assert result.meta is None
