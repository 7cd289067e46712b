"""Tests for document loading."""

import json
from pathlib import Path

import pytest
import requests

from taggem.parser.loader import DocumentLoadError, is_remote, load_document, parse_document_text

_URL = "https://example.com/openapi.yaml"


def _response(url: str, status_code: int, content: bytes) -> requests.Response:
    response = requests.Response()
    response.url = url
    response.status_code = status_code
    response.encoding = "utf-8"
    response._content = content
    return response


class TestParseDocumentText:
    """Test parsing of document text."""

    def test_yaml(self) -> None:
        assert parse_document_text("openapi: 3.0.0\npaths: {}\n") == {"openapi": "3.0.0", "paths": {}}

    def test_json(self) -> None:
        assert parse_document_text(json.dumps({"swagger": "2.0"})) == {"swagger": "2.0"}

    @pytest.mark.parametrize("text", ["", "   \n", "- a\n- b\n", "just text", "key: [unclosed"])
    def test_unusable_text(self, text: str) -> None:
        with pytest.raises(DocumentLoadError, match="can't be processed"):
            parse_document_text(text)


class TestLoadDocument:
    """Test reading documents from disk and over HTTP."""

    def test_local_file(self, tmp_path: Path) -> None:
        source = tmp_path / "openapi.yaml"
        source.write_text("openapi: 3.0.0\n", encoding="utf-8")
        assert load_document(source) == {"openapi": "3.0.0"}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_document(tmp_path / "missing.yaml")

    def test_is_remote(self) -> None:
        assert is_remote(_URL)
        assert is_remote("http://localhost/spec.json")
        assert not is_remote("specs/openapi.yaml")

    def test_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        requested = []

        def fake_get(url: str, **_: object) -> requests.Response:
            requested.append(url)
            return _response(url, 200, b"openapi: 3.0.0\n")

        monkeypatch.setattr(requests, "get", fake_get)
        assert load_document(_URL) == {"openapi": "3.0.0"}
        assert requested == [_URL]

    def test_url_error_status(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(requests, "get", lambda url, **_: _response(url, 404, b"not found"))
        with pytest.raises(requests.HTTPError):
            load_document(_URL)
