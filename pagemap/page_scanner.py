"""Page discovery: script entry resolution and template binding."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterator, List, Sequence, Tuple

from .checks import apply_duplicate_policy
from .errors import DiscoveryError
from .logging import get_logger
from .models import EntryMap, PageId, TemplateBinding
from .page_ids import derive_page_id, output_filename

logger = get_logger("scanner")


def _normalise_filenames(filenames: str | Sequence[str]) -> Tuple[str, ...]:
    if isinstance(filenames, str):
        return (filenames,)
    names = tuple(filenames)
    if not names:
        raise ValueError("At least one page filename is required")
    return names


def _resolve_root(pages_root: str | Path) -> Path:
    root = Path(pages_root).expanduser().resolve()
    if not root.exists():
        raise FileNotFoundError(f"Pages root not found: {pages_root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Pages root is not a directory: {pages_root}")
    return root


def _iter_matches(root: Path, filenames: Sequence[str]) -> Iterator[Tuple[Path, str]]:
    """Yield ``(path, filename)`` for every ``**/<filename>`` under ``root``.

    Directories and files are visited in sorted order so repeated scans of an
    unchanged tree yield identical sequences. Dot-directories are skipped, as
    a default glob would.
    """
    wanted = set(filenames)
    for dirpath, dirnames, names in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if not name.startswith("."))
        current_dir = Path(dirpath)
        for name in sorted(names):
            if name in wanted:
                yield current_dir / name, name


def _display_path(path: Path, project_root: Path | None) -> str:
    if project_root is None:
        return path.as_posix()
    relative = Path(os.path.relpath(path, project_root)).as_posix()
    if relative.startswith("../"):
        return relative
    return f"./{relative}"


def _collect(
    pages_root: str | Path,
    filenames: str | Sequence[str],
    project_root: str | Path | None,
    kind: str,
) -> Dict[PageId, List[str]]:
    root = _resolve_root(pages_root)
    names = _normalise_filenames(filenames)
    base = Path(project_root).expanduser().resolve() if project_root is not None else None

    ranked: Dict[PageId, List[Tuple[int, str]]] = {}
    for path, name in _iter_matches(root, names):
        page_id = derive_page_id(path, root, name)
        ranked.setdefault(page_id, []).append((names.index(name), _display_path(path, base)))

    # Within a page, files are ordered by the configured filename preference.
    found = {page_id: [path for _, path in sorted(items)] for page_id, items in ranked.items()}

    logger.debug("Discovered %d %s file(s) under %s", sum(map(len, found.values())), kind, root)
    return found


def resolve_entries(
    pages_root: str | Path,
    *,
    entry_filename: str | Sequence[str] = "index.js",
    project_root: str | Path | None = None,
    on_duplicate: str = "warn",
) -> EntryMap:
    """Return the page id -> script path mapping for ``pages_root``.

    Paths are reported relative to ``project_root`` (``./src/pages/a/index.js``)
    when one is given, otherwise as absolute POSIX paths. An empty mapping is
    returned when no page holds an entry file.
    """
    found = _collect(pages_root, entry_filename, project_root, "entry")
    entries: EntryMap = {}
    for page_id in sorted(found):
        paths = found[page_id]
        entries[page_id] = apply_duplicate_policy(page_id, paths, on_duplicate, kind="entry")
    return entries


def resolve_templates(
    pages_root: str | Path,
    *,
    template_filename: str | Sequence[str] = "index.html",
    project_root: str | Path | None = None,
    flatten: str = "literal",
    on_duplicate: str = "warn",
) -> Tuple[TemplateBinding, ...]:
    """Return one binding per page template, ordered by page id.

    Each binding restricts its shell to the page's own chunk.
    """
    found = _collect(pages_root, template_filename, project_root, "template")

    bindings: List[TemplateBinding] = []
    claimed: Dict[str, PageId] = {}
    for page_id in sorted(found):
        template_path = apply_duplicate_policy(page_id, found[page_id], on_duplicate, kind="template")
        filename = output_filename(page_id, flatten)
        previous = claimed.get(filename)
        if previous is not None:
            raise DiscoveryError(
                f"Pages '{previous}' and '{page_id}' both render to {filename}",
                path=template_path,
            )
        claimed[filename] = page_id
        bindings.append(
            TemplateBinding(
                page_id=page_id,
                template_path=template_path,
                output_filename=filename,
                chunks=(page_id,),
            )
        )
    return tuple(bindings)


__all__ = ["resolve_entries", "resolve_templates"]
