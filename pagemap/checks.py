"""Consistency checks between discovered entries and template bindings."""

from __future__ import annotations

from typing import List, Mapping, Sequence, Tuple

from .errors import DuplicatePageIdError, OrphanBindingError
from .logging import get_logger
from .models import POLICIES, DiscoveryIssue, PageId, TemplateBinding

logger = get_logger("checks")


def _check_policy(policy: str) -> None:
    if policy not in POLICIES:
        raise ValueError(f"Unknown policy {policy!r}; expected one of {', '.join(POLICIES)}")


def apply_duplicate_policy(page_id: PageId, paths: Sequence[str], policy: str, *, kind: str) -> str:
    """Return the path that wins for ``page_id``.

    ``paths`` arrive in preference order and the first one wins; ``warn``
    logs the discarded paths and ``error`` refuses the duplicate.
    """
    _check_policy(policy)
    if len(paths) > 1:
        if policy == "error":
            raise DuplicatePageIdError(page_id, paths)
        if policy == "warn":
            logger.warning(
                "Duplicate %s for page '%s': %s overrides %s",
                kind,
                page_id,
                paths[0],
                ", ".join(paths[1:]),
            )
    return paths[0]


def find_orphans(
    entries: Mapping[PageId, str],
    templates: Sequence[TemplateBinding],
) -> Tuple[DiscoveryIssue, ...]:
    """Return issues for templates without a script and scripts without a template."""
    issues: List[DiscoveryIssue] = []
    template_ids = {binding.page_id for binding in templates}

    for binding in templates:
        missing = [chunk for chunk in binding.chunks if chunk not in entries]
        if missing:
            issues.append(
                DiscoveryIssue(
                    kind="orphan-template",
                    page_id=binding.page_id,
                    paths=(binding.template_path,),
                    message=(
                        f"Template {binding.template_path} references missing "
                        f"chunk(s): {', '.join(missing)}"
                    ),
                )
            )

    for page_id in sorted(entries):
        if page_id not in template_ids:
            issues.append(
                DiscoveryIssue(
                    kind="orphan-entry",
                    page_id=page_id,
                    paths=(entries[page_id],),
                    message=f"Entry {entries[page_id]} has no page template",
                )
            )
    return tuple(issues)


def enforce_orphan_policy(issues: Sequence[DiscoveryIssue], policy: str) -> Tuple[DiscoveryIssue, ...]:
    """Apply ``policy`` to orphan issues and return those worth recording."""
    _check_policy(policy)
    if policy == "ignore" or not issues:
        return ()
    if policy == "error":
        raise OrphanBindingError([issue.message for issue in issues])
    for issue in issues:
        logger.warning(issue.message)
    return tuple(issues)


__all__ = ["apply_duplicate_policy", "enforce_orphan_policy", "find_orphans"]
