"""Multi-page bundler configuration derived from a pages directory."""

from .assembler import build_spec, build_spec_from_config
from .errors import (
    ConfigError,
    DiscoveryError,
    DuplicatePageIdError,
    OrphanBindingError,
    PagemapError,
)
from .models import (
    BuildSpec,
    BundlerOptions,
    DevServerConfig,
    DiscoveryIssue,
    ModuleRule,
    OutputSpec,
    TemplateBinding,
)
from .page_ids import derive_page_id, output_filename
from .page_scanner import resolve_entries, resolve_templates

__all__ = [
    "BuildSpec",
    "BundlerOptions",
    "ConfigError",
    "DevServerConfig",
    "DiscoveryError",
    "DiscoveryIssue",
    "DuplicatePageIdError",
    "ModuleRule",
    "OrphanBindingError",
    "OutputSpec",
    "PagemapError",
    "TemplateBinding",
    "build_spec",
    "build_spec_from_config",
    "derive_page_id",
    "output_filename",
    "resolve_entries",
    "resolve_templates",
]
