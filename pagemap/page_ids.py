"""Page id derivation shared by the entry resolver and the template binder."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path, PurePosixPath
from typing import Pattern

from .errors import DiscoveryError
from .models import FLATTEN_RULES, PageId


def _as_posix(path: str | Path) -> str:
    text = Path(path).as_posix() if not isinstance(path, str) else path.replace("\\", "/")
    if len(text) > 1:
        text = text.rstrip("/")
    return text


def _check_filename(filename: str) -> None:
    if not filename or "/" in filename or "\\" in filename or filename in {".", ".."}:
        raise ValueError(f"Page filename must be a bare file name: {filename!r}")


@lru_cache(maxsize=64)
def page_pattern(pages_root: str, filename: str) -> Pattern[str]:
    """Return the compiled `<pages_root>/(.+)/<filename>` pattern."""
    _check_filename(filename)
    root = _as_posix(pages_root)
    prefix = "" if root == "/" else re.escape(root)
    return re.compile(rf"^{prefix}/(.+)/{re.escape(filename)}$")


def derive_page_id(path: str | Path, pages_root: str | Path, filename: str) -> PageId:
    """Return the page id for ``path`` or raise :class:`DiscoveryError`.

    The id is whatever sits between the pages root and the fixed filename,
    with ``/`` separators on every platform, so nested page groups such as
    ``admin/users`` keep their internal separator.
    """
    pattern = page_pattern(_as_posix(pages_root), filename)
    target = _as_posix(path)
    match = pattern.match(target)
    if match is None:
        raise DiscoveryError(
            f"Path {target} does not match page pattern {pattern.pattern}",
            path=target,
            pattern=pattern.pattern,
        )
    page_id = match.group(1)
    if any(part in {"", ".", ".."} for part in page_id.split("/")):
        raise DiscoveryError(
            f"Path {target} yields an unusable page id '{page_id}'",
            path=target,
            pattern=pattern.pattern,
        )
    return page_id


def output_filename(page_id: PageId, flatten: str = "literal") -> str:
    """Return the rendered shell filename for ``page_id``.

    ``literal`` keeps nested separators (``admin/users.html``) so the bundler
    writes into a subdirectory; ``sanitize`` joins the segments with ``-``
    (``admin-users.html``).
    """
    if flatten not in FLATTEN_RULES:
        raise ValueError(f"Unknown flatten rule: {flatten!r}")
    if flatten == "sanitize":
        return "-".join(PurePosixPath(page_id).parts) + ".html"
    return f"{page_id}.html"


__all__ = ["derive_page_id", "output_filename", "page_pattern"]
