"""Compose discovered pages and global options into a bundler BuildSpec."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .checks import enforce_orphan_policy, find_orphans
from .logging import get_logger
from .models import BuildSpec, BundlerOptions, DevServerConfig, OutputSpec
from .page_scanner import resolve_entries, resolve_templates

if TYPE_CHECKING:
    from .config import PagemapConfig

logger = get_logger("assembler")


def _absolute(path: str, base: Path) -> str:
    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        candidate = base / candidate
    return candidate.resolve().as_posix()


def build_spec(
    pages_root: str | Path,
    options: Optional[BundlerOptions] = None,
    *,
    project_root: str | Path | None = None,
    serve: bool = False,
) -> BuildSpec:
    """Scan ``pages_root`` and return the BuildSpec for one bundler run.

    Entry and template discovery run independently; any discovery or policy
    error propagates before a BuildSpec exists. Relative output and static
    paths are anchored at ``project_root`` (the current directory when
    omitted). ``serve`` adds the dev server settings.
    """
    options = options or BundlerOptions()
    base = Path(project_root).expanduser().resolve() if project_root is not None else Path.cwd().resolve()

    entries = resolve_entries(
        pages_root,
        entry_filename=options.entry_filenames,
        project_root=base,
        on_duplicate=options.on_duplicate,
    )
    templates = resolve_templates(
        pages_root,
        template_filename=options.template_filenames,
        project_root=base,
        flatten=options.flatten,
        on_duplicate=options.on_duplicate,
    )

    issues = enforce_orphan_policy(find_orphans(entries, templates), options.on_orphan)

    output = OutputSpec(
        path=_absolute(options.output.path, base),
        filename=options.output.filename,
        clean=options.output.clean,
    )
    dev_server: Optional[DevServerConfig] = None
    if serve:
        dev_server = replace(options.dev_server, static=_absolute(options.dev_server.static, base))

    logger.info(
        "Assembled %s build: %d entr%s, %d page template(s)",
        options.mode,
        len(entries),
        "y" if len(entries) == 1 else "ies",
        len(templates),
    )
    return BuildSpec(
        mode=options.mode,
        entries=entries,
        output=output,
        rules=options.rules,
        templates=templates,
        dev_server=dev_server,
        issues=issues,
    )


def build_spec_from_config(config: "PagemapConfig", *, serve: bool = False) -> BuildSpec:
    """Return the BuildSpec described by a loaded ``.pagemap.yml``."""
    return build_spec(
        config.pages_root,
        config.options,
        project_root=config.root,
        serve=serve,
    )


__all__ = ["build_spec", "build_spec_from_config"]
