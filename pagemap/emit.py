"""Serialise a BuildSpec into the document read by the bundler."""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from .models import BuildSpec

FORMATS = ("json", "yaml")


def render_spec(spec: BuildSpec, fmt: str = "json") -> str:
    """Return ``spec`` as a JSON or YAML document ending in a newline."""
    payload = spec.to_dict()
    if fmt == "json":
        return json.dumps(payload, indent=2) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(payload, sort_keys=False, default_flow_style=False)
    raise ValueError(f"Unknown output format: {fmt!r}")


def write_spec(spec: BuildSpec, destination: Path, fmt: str = "json") -> Path:
    """Write the rendered document to ``destination`` and return its path."""
    destination = destination.expanduser()
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(render_spec(spec, fmt), encoding="utf-8")
    return destination


__all__ = ["FORMATS", "render_spec", "write_spec"]
