"""Core data models shared across pagemap components."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

PageId = str
EntryMap = Dict[PageId, str]

POLICIES = ("ignore", "warn", "error")
FLATTEN_RULES = ("literal", "sanitize")


@dataclass(frozen=True)
class TemplateBinding:
    """Associates a page template with its rendered shell and script chunks."""

    page_id: PageId
    template_path: str
    output_filename: str
    chunks: Tuple[PageId, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "html",
            "template": self.template_path,
            "filename": self.output_filename,
            "chunks": list(self.chunks),
        }


@dataclass(frozen=True)
class ModuleRule:
    """A per-file-type processing rule handed to the bundler."""

    test: str
    use: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"test": self.test, "use": list(self.use)}


@dataclass(frozen=True)
class OutputSpec:
    """Where and how the bundler writes compiled scripts."""

    path: str = "dist"
    filename: str = "js/[name].[contenthash].js"
    clean: bool = True


@dataclass(frozen=True)
class DevServerConfig:
    """Development server settings passed through to the bundler."""

    static: str = "dist"
    compress: bool = True
    port: int = 3000
    hot: bool = True
    open: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "static": self.static,
            "compress": self.compress,
            "port": self.port,
            "hot": self.hot,
            "open": self.open,
        }


def _default_rules() -> Tuple[ModuleRule, ...]:
    return (ModuleRule(test=r"\.css$", use=("style-loader", "css-loader")),)


@dataclass(frozen=True)
class BundlerOptions:
    """Global options merged with the discovered pages into a BuildSpec."""

    mode: str = "production"
    entry_filenames: Tuple[str, ...] = ("index.js",)
    template_filenames: Tuple[str, ...] = ("index.html",)
    output: OutputSpec = field(default_factory=OutputSpec)
    rules: Tuple[ModuleRule, ...] = field(default_factory=_default_rules)
    dev_server: DevServerConfig = field(default_factory=DevServerConfig)
    on_duplicate: str = "warn"
    on_orphan: str = "warn"
    flatten: str = "literal"


@dataclass(frozen=True)
class DiscoveryIssue:
    """Non-fatal inconsistency found while assembling a BuildSpec."""

    kind: str  # "orphan-entry" | "orphan-template"
    page_id: PageId
    paths: Tuple[str, ...]
    message: str


@dataclass(frozen=True)
class BuildSpec:
    """Complete configuration handed to the external bundler for one run."""

    mode: str
    entries: Mapping[PageId, str]
    output: OutputSpec
    rules: Tuple[ModuleRule, ...]
    templates: Tuple[TemplateBinding, ...]
    dev_server: Optional[DevServerConfig] = None
    issues: Tuple[DiscoveryIssue, ...] = ()

    def __post_init__(self) -> None:
        # Freeze the entry mapping so the bundler-facing view cannot drift.
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    @property
    def page_ids(self) -> List[PageId]:
        ids = set(self.entries)
        ids.update(binding.page_id for binding in self.templates)
        return sorted(ids)

    def to_dict(self) -> Dict[str, Any]:
        """Render the document consumed by the bundler."""
        plugins: List[Dict[str, Any]] = []
        if self.output.clean:
            plugins.append({"type": "clean"})
        plugins.extend(binding.to_dict() for binding in self.templates)

        payload: Dict[str, Any] = {
            "mode": self.mode,
            "entry": dict(self.entries),
            "output": {"path": self.output.path, "filename": self.output.filename},
            "module": {"rules": [rule.to_dict() for rule in self.rules]},
            "plugins": plugins,
        }
        if self.dev_server is not None:
            payload["devServer"] = self.dev_server.to_dict()
        return payload


__all__ = [
    "BuildSpec",
    "BundlerOptions",
    "DevServerConfig",
    "DiscoveryIssue",
    "EntryMap",
    "FLATTEN_RULES",
    "ModuleRule",
    "OutputSpec",
    "POLICIES",
    "PageId",
    "TemplateBinding",
]
