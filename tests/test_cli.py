"""Tests for the modelparser command line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from modelparser import __version__
from modelparser.cli import app, flatten_paths

runner = CliRunner()

PAGE_YAML = """
version: 1
name: page
schema:
  - field: "@id"
    name: id
    transform: number
  - field: title
  - field: tag
    name: tags
    is_array: true
"""


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    path = tmp_path / "page.yaml"
    path.write_text(PAGE_YAML)
    return path


@pytest.fixture
def payload_file(tmp_path: Path) -> Path:
    path = tmp_path / "payload.json"
    path.write_text(json.dumps({"@id": "4", "title": "Home", "tag": "x", "extra": "1"}))
    return path


class TestValidate:
    def test_valid_schema(self, schema_file: Path) -> None:
        result = runner.invoke(app, ["validate", str(schema_file)])
        assert result.exit_code == 0
        assert "Valid schema" in result.stdout
        assert "page" in result.stdout

    def test_invalid_schema(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("schema:\n  - name: nope\n")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Validation failed" in result.stdout
        assert "schema[0].field" in result.stdout

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["validate", str(tmp_path / "missing.yaml")])
        assert result.exit_code != 0


class TestParse:
    def test_text_output_reports_unparsed(self, schema_file: Path, payload_file: Path) -> None:
        result = runner.invoke(app, ["parse", str(schema_file), str(payload_file)])
        assert result.exit_code == 0
        assert "Parsed with schema" in result.stdout
        assert '"id": 4' in result.stdout
        assert "1 unparsed property" in result.stdout
        assert "extra" in result.stdout
        assert "'1'" in result.stdout

    def test_no_unparsed_properties(self, schema_file: Path, tmp_path: Path) -> None:
        path = tmp_path / "clean.json"
        path.write_text(json.dumps({"@id": "4", "title": "Home"}))
        result = runner.invoke(app, ["parse", str(schema_file), str(path)])
        assert result.exit_code == 0
        assert "No unparsed properties" in result.stdout
        assert "unparsed property" not in result.stdout

    def test_no_unparsed_flag(self, schema_file: Path, payload_file: Path) -> None:
        result = runner.invoke(app, ["parse", str(schema_file), str(payload_file), "--no-unparsed"])
        assert result.exit_code == 0
        assert "unparsed propert" not in result.stdout
        assert "No unparsed properties" not in result.stdout
        assert "extra" not in result.stdout

    def test_json_output(self, schema_file: Path, payload_file: Path) -> None:
        result = runner.invoke(app, ["parse", str(schema_file), str(payload_file), "-o", "json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "id": 4,
            "title": "Home",
            "tags": ["x"],
            "__unparsed__": {"extra": "1"},
        }

    def test_parse_failure(self, schema_file: Path, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"@id": "55-55"}))
        result = runner.invoke(app, ["parse", str(schema_file), str(path)])
        assert result.exit_code == 1
        assert "Parse failed" in result.stdout
        assert "ConversionError" in result.stdout

    def test_invalid_json_payload(self, schema_file: Path, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{nope")
        result = runner.invoke(app, ["parse", str(schema_file), str(path)])
        assert result.exit_code == 1
        assert "PayloadError" in result.stdout

    def test_non_utf8_payload(self, schema_file: Path, tmp_path: Path) -> None:
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"title": "caf\xe9"}')
        result = runner.invoke(app, ["parse", str(schema_file), str(path)])
        assert result.exit_code == 1
        assert "PayloadError" in result.stdout


class TestMisc:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_info(self) -> None:
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "modelparser" in result.stdout


class TestFlattenPaths:
    def test_nested_keys(self) -> None:
        assert flatten_paths({"a": {"b": 1}, "c": 2}) == [("a.b", 1), ("c", 2)]

    def test_list_indices(self) -> None:
        assert flatten_paths({"result": {0: {"extra": 1}}}) == [("result[0].extra", 1)]

    def test_empty_dict_value_is_a_leaf(self) -> None:
        assert flatten_paths({"a": {}}) == [("a", {})]
