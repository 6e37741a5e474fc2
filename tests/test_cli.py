"""
Tests for the gqv command line interface.
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from graphql_query_visualizer.cli import app

runner = CliRunner()


@pytest.fixture
def cfg_path(tmp_path: Path) -> str:
    return str(tmp_path / "config.yaml")


def _write(dst_dir: Path, content: str, name: str = "query.graphql") -> Path:
    dst = dst_dir / name
    dst.write_text(content, encoding="utf-8")
    return dst


def test_show_json(tmp_path: Path, cfg_path: str) -> None:
    query = _write(tmp_path, "query getX { user { id name } }")

    result = runner.invoke(app, ["show", str(query), "--output", "json", "--config", cfg_path])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["tree"]["name"] == "getX"
    assert [c["name"] for c in data["tree"]["children"][0]["children"]] == ["id", "name"]
    assert data["stats"]["field_count"] == 3


def test_show_console(tmp_path: Path, cfg_path: str) -> None:
    query = _write(tmp_path, "query getX { user { id } }")

    result = runner.invoke(app, ["show", str(query), "--config", cfg_path])

    assert result.exit_code == 0, result.output
    assert "getX" in result.output
    assert "user" in result.output
    assert "node_1" in result.output


def test_show_envelope_with_variables(tmp_path: Path, cfg_path: str) -> None:
    body = {"query": "query Q($id: ID!){ node(id: $id){ name } }", "variables": {"id": "abc"}}
    query = _write(tmp_path, json.dumps(body), "request.json")

    result = runner.invoke(app, ["show", str(query), "--output", "json", "--config", cfg_path])

    assert result.exit_code == 0, result.output
    tree = json.loads(result.output)["tree"]
    assert tree["name"] == "Q($id: ID!)"
    assert tree["children"][0]["variablesPayload"] == {"id": "abc"}
    assert tree["children"][1]["name"] == "node(id: $id)"


def test_show_variables_file_overrides(tmp_path: Path, cfg_path: str) -> None:
    body = {"query": "query Q($id: ID!){ node(id: $id){ name } }", "variables": {"id": "abc"}}
    query = _write(tmp_path, json.dumps(body), "request.json")
    variables = _write(tmp_path, json.dumps({"id": "xyz", "n": 2}), "vars.json")

    result = runner.invoke(
        app, ["show", str(query), "--variables", str(variables), "--output", "json", "--config", cfg_path]
    )

    assert result.exit_code == 0, result.output
    tree = json.loads(result.output)["tree"]
    assert tree["children"][0]["variablesPayload"] == {"id": "xyz", "n": 2}


def test_show_syntax_error(tmp_path: Path, cfg_path: str) -> None:
    query = _write(tmp_path, "not graphql {{{")

    result = runner.invoke(app, ["show", str(query), "--config", cfg_path])

    assert result.exit_code == 1
    assert "Syntax Error" in result.output


def test_show_fragment_only(tmp_path: Path, cfg_path: str) -> None:
    query = _write(tmp_path, "fragment F on T { a }")

    result = runner.invoke(app, ["show", str(query), "--config", cfg_path])

    assert result.exit_code == 1
    assert "No operation definition found" in result.output


def test_generate_with_edits(tmp_path: Path, cfg_path: str) -> None:
    query = _write(tmp_path, "query getX { user(id: 1) { id name email } }")

    result = runner.invoke(
        app,
        ["generate", str(query), "--delete", "node_3", "--rename", "node_1=person", "--config", cfg_path],
    )

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "getX {\n  person(id: 1) {\n    id\n    email\n  }\n}"


def test_generate_envelope(tmp_path: Path, cfg_path: str) -> None:
    body = {"query": "query Q($id: ID!){ node(id: $id){ name } }", "variables": {"id": "abc"}}
    query = _write(tmp_path, json.dumps(body), "request.json")

    result = runner.invoke(app, ["generate", str(query), "--envelope", "--config", cfg_path])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["query"] == "Q($id: ID!) {\n  node(id: $id) {\n    name\n  }\n}"
    assert data["variables"] == {"id": "abc"}


def test_generate_unknown_id(tmp_path: Path, cfg_path: str) -> None:
    query = _write(tmp_path, "{ a }")

    result = runner.invoke(app, ["generate", str(query), "--delete", "node_9", "--config", cfg_path])

    assert result.exit_code == 1
    assert "node_9" in result.output


def test_generate_refuses_root_delete(tmp_path: Path, cfg_path: str) -> None:
    query = _write(tmp_path, "{ a }")

    result = runner.invoke(app, ["generate", str(query), "--delete", "node_0", "--config", cfg_path])

    assert result.exit_code == 1
    assert "root" in result.output


def test_generate_bad_rename(tmp_path: Path, cfg_path: str) -> None:
    query = _write(tmp_path, "{ a }")

    result = runner.invoke(app, ["generate", str(query), "--rename", "node_1", "--config", cfg_path])

    assert result.exit_code == 1
    assert "ID=NAME" in result.output


def test_generate_from_stdin(cfg_path: str) -> None:
    result = runner.invoke(app, ["generate", "-", "--config", cfg_path], input="{ a { b } }")

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "query {\n  a {\n    b\n  }\n}"


def test_config_init(tmp_path: Path) -> None:
    path = tmp_path / "gqv" / "config.yaml"

    result = runner.invoke(app, ["config", "init", "--path", str(path)])

    assert result.exit_code == 0, result.output
    assert path.exists()
