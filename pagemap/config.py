"""Configuration loading for pagemap (.pagemap.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from .errors import ConfigError
from .models import (
    FLATTEN_RULES,
    POLICIES,
    BundlerOptions,
    DevServerConfig,
    ModuleRule,
    OutputSpec,
)

CONFIG_FILENAME = ".pagemap.yml"
DEFAULT_PAGES_ROOT = "src/pages"
_MODES = ("production", "development", "none")


@dataclass
class PagemapConfig:
    """Represents the project settings defined in .pagemap.yml."""

    root: Path
    pages_root: Path
    options: BundlerOptions = field(default_factory=BundlerOptions)


def load_config(config_path: Path, *, required: bool = False) -> PagemapConfig:
    """Load configuration from disk.

    A missing file yields the defaults unless ``required`` is set, as it is
    for a file named explicitly on the command line.
    """
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {config_path}")
        return PagemapConfig(root=root, pages_root=root / DEFAULT_PAGES_ROOT)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    defaults = BundlerOptions()

    pages_root_str = _as_str(data.get("pages_root")) or DEFAULT_PAGES_ROOT
    pages_root = (root / pages_root_str).resolve()

    mode = _as_str(data.get("mode")) or defaults.mode
    if mode not in _MODES:
        raise ConfigError(f"Unsupported mode '{mode}'; expected one of {', '.join(_MODES)}")

    pages_data = _as_dict(data.get("pages"))
    entry_filenames = tuple(_as_str_list(pages_data.get("entry"))) or defaults.entry_filenames
    template_filenames = (
        tuple(_as_str_list(pages_data.get("template"))) or defaults.template_filenames
    )
    flatten = _as_str(pages_data.get("flatten")) or defaults.flatten
    if flatten not in FLATTEN_RULES:
        raise ConfigError(
            f"Unsupported pages.flatten '{flatten}'; expected one of {', '.join(FLATTEN_RULES)}"
        )

    output_data = _as_dict(data.get("output"))
    output = OutputSpec(
        path=_as_str(output_data.get("path")) or defaults.output.path,
        filename=_as_str(output_data.get("filename")) or defaults.output.filename,
        clean=_coalesce(_as_bool(output_data.get("clean")), defaults.output.clean),
    )

    rules = defaults.rules
    if "rules" in data:
        rules = _parse_rules(data.get("rules"))

    server_data = _as_dict(data.get("dev_server"))
    dev_server = DevServerConfig(
        static=_as_str(server_data.get("static")) or output.path,
        compress=_coalesce(_as_bool(server_data.get("compress")), defaults.dev_server.compress),
        port=_coalesce(_as_int(server_data.get("port")), defaults.dev_server.port),
        hot=_coalesce(_as_bool(server_data.get("hot")), defaults.dev_server.hot),
        open=_coalesce(_as_bool(server_data.get("open")), defaults.dev_server.open),
    )

    checks_data = _as_dict(data.get("checks"))
    on_duplicate = _as_policy(checks_data.get("duplicates"), "checks.duplicates", defaults.on_duplicate)
    on_orphan = _as_policy(checks_data.get("orphans"), "checks.orphans", defaults.on_orphan)

    options = BundlerOptions(
        mode=mode,
        entry_filenames=entry_filenames,
        template_filenames=template_filenames,
        output=output,
        rules=rules,
        dev_server=dev_server,
        on_duplicate=on_duplicate,
        on_orphan=on_orphan,
        flatten=flatten,
    )
    return PagemapConfig(root=root, pages_root=pages_root, options=options)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _parse_rules(value: Any) -> Tuple[ModuleRule, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ConfigError("rules must be a list of {test, use} mappings")
    rules: List[ModuleRule] = []
    for index, item in enumerate(value):
        item_data = _as_dict(item)
        test = _as_str(item_data.get("test"))
        use = _as_str_list(item_data.get("use"))
        if not test or not use:
            raise ConfigError(f"rules[{index}] needs both 'test' and 'use'")
        rules.append(ModuleRule(test=test, use=tuple(use)))
    return tuple(rules)


def _as_policy(value: Any, key: str, default: str) -> str:
    policy = _as_str(value)
    if policy is None:
        return default
    policy = policy.lower()
    if policy not in POLICIES:
        raise ConfigError(f"Unsupported {key} '{policy}'; expected one of {', '.join(POLICIES)}")
    return policy


def _coalesce(value: Any, default: Any) -> Any:
    return default if value is None else value


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CONFIG_FILENAME", "PagemapConfig", "load_config"]
