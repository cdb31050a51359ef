"""Tests for pagemap.emit."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from pagemap.emit import render_spec, write_spec
from tests._fixtures.pages_builder import PagesBuilder


def test_render_json_matches_document(pages_builder: PagesBuilder) -> None:
    pages_builder.pages(["index", "about"])
    spec = pages_builder.build()

    rendered = render_spec(spec, "json")

    assert rendered.endswith("\n")
    assert json.loads(rendered) == spec.to_dict()


def test_render_yaml_keeps_key_order(pages_builder: PagesBuilder) -> None:
    pages_builder.page("index")
    spec = pages_builder.build(serve=True)

    rendered = render_spec(spec, "yaml")

    assert yaml.safe_load(rendered) == spec.to_dict()
    keys = [line.split(":")[0] for line in rendered.splitlines() if line and not line.startswith((" ", "-"))]
    assert keys == ["mode", "entry", "output", "module", "plugins", "devServer"]


def test_render_is_byte_identical_across_runs(pages_builder: PagesBuilder) -> None:
    pages_builder.pages(["c", "a", "b/inner"])
    assert render_spec(pages_builder.build()) == render_spec(pages_builder.build())


def test_render_rejects_unknown_format(pages_builder: PagesBuilder) -> None:
    pages_builder.page("index")
    with pytest.raises(ValueError):
        render_spec(pages_builder.build(), "toml")


def test_write_spec_creates_parent_directories(pages_builder: PagesBuilder, tmp_path: Path) -> None:
    pages_builder.page("index")
    destination = tmp_path / "build" / "config" / "bundler.json"

    written = write_spec(pages_builder.build(), destination)

    assert written == destination
    assert json.loads(destination.read_text(encoding="utf-8"))["entry"] == {
        "index": "./src/pages/index/index.js"
    }
