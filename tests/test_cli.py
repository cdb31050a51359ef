"""CLI behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pagemap.cli import _build_parser, main
from tests._fixtures.pages_builder import PagesBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "build"])
    assert args.verbose is True
    assert args.command == "build"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["serve", "--verbose"])
    assert args.verbose is True
    assert args.command == "serve"


def test_cli_serve_flags_default_to_config() -> None:
    parser = _build_parser()
    args = parser.parse_args(["serve"])
    assert args.port is None
    assert args.hot is None
    assert args.open is None


def test_cli_serve_accepts_overrides() -> None:
    parser = _build_parser()
    args = parser.parse_args(["serve", "site", "--port", "8080", "--no-hot", "--no-open", "--format", "yaml"])
    assert args.path == "site"
    assert args.port == 8080
    assert args.hot is False
    assert args.open is False
    assert args.format == "yaml"


def test_cli_rejects_unknown_format() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["build", "--format", "toml"])


def test_build_prints_bundler_config(pages_builder: PagesBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    pages_builder.pages(["index", "about"])

    main(["build", str(pages_builder.root)])

    document = json.loads(capsys.readouterr().out)
    assert document["entry"] == {
        "about": "./src/pages/about/index.js",
        "index": "./src/pages/index/index.js",
    }
    assert [plugin.get("filename") for plugin in document["plugins"]] == [None, "about.html", "index.html"]
    assert "devServer" not in document


def test_serve_writes_config_with_overrides(pages_builder: PagesBuilder, tmp_path: Path) -> None:
    pages_builder.page("index")
    destination = tmp_path / "out" / "bundler.json"

    main(
        [
            "serve",
            str(pages_builder.root),
            "--output",
            str(destination),
            "--port",
            "4000",
            "--no-open",
            "--mode",
            "development",
        ]
    )

    document = json.loads(destination.read_text(encoding="utf-8"))
    assert document["mode"] == "development"
    assert document["devServer"]["port"] == 4000
    assert document["devServer"]["open"] is False
    assert document["devServer"]["hot"] is True


def test_build_honours_pages_root_override(pages_builder: PagesBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    pages_builder.write({"web/views/home/index.js": "console.log('home');\n"})

    main(["build", str(pages_builder.root), "--pages-root", "web/views"])

    document = json.loads(capsys.readouterr().out)
    assert document["entry"] == {"home": "./web/views/home/index.js"}


def test_strict_build_fails_on_orphan(pages_builder: PagesBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    pages_builder.page("worker", template=False)

    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(pages_builder.root), "--strict"])

    assert excinfo.value.code == 1
    assert "pagemap build failed" in capsys.readouterr().err


def test_build_fails_on_missing_pages_root(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "Pages root not found" in capsys.readouterr().err


def test_pages_lists_scripts_and_templates(pages_builder: PagesBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    pages_builder.page("index")
    pages_builder.page("worker", template=False)

    main(["pages", str(pages_builder.root)])

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "index\t./src/pages/index/index.js\t./src/pages/index/index.html -> index.html",
        "worker\t./src/pages/worker/index.js\t(no template)",
    ]


def test_pages_reports_empty_project(pages_builder: PagesBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    main(["pages", str(pages_builder.root)])
    assert "No pages found" in capsys.readouterr().out


def test_pages_lists_template_only_page(pages_builder: PagesBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    pages_builder.page("static", script=False)

    main(["pages", str(pages_builder.root)])

    assert capsys.readouterr().out.splitlines() == [
        "static\t(no script)\t./src/pages/static/index.html -> static.html",
    ]


def test_build_fails_when_named_config_is_missing(
    pages_builder: PagesBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    pages_builder.page("home")
    pages_builder.write({".pagemap.yml": "mode: development\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(pages_builder.root), "--config", str(pages_builder.root / "typo.yml")])

    captured = capsys.readouterr()
    assert excinfo.value.code == 1
    assert "Configuration file not found" in captured.err
    assert captured.out == ""


def test_cli_accepts_log_file_before_and_after_command() -> None:
    parser = _build_parser()
    assert parser.parse_args(["--log-file", "a.log", "pages"]).log_file == "a.log"
    assert parser.parse_args(["pages", "--log-file", "b.log"]).log_file == "b.log"
    assert parser.parse_args(["pages"]).log_file is None


def test_log_file_receives_warnings(
    pages_builder: PagesBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    pages_builder.page("worker", template=False)
    log_file = tmp_path / "logs" / "pagemap.log"
    log_file.parent.mkdir()

    main(["build", str(pages_builder.root), "--log-file", str(log_file)])

    capsys.readouterr()
    contents = log_file.read_text(encoding="utf-8")
    assert "WARNING pagemap.checks" in contents
    assert "has no page template" in contents
