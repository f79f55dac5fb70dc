"""Project catalog: Xcode documents open on this machine.

Uses osascript -l JavaScript to ask Xcode for its open
documents, keeps project and workspace bundles, and returns
them sorted by path so `select #` is reproducible.
"""
from __future__ import annotations

import json

from returns.io import IOFailure
from returns.unsafe import unsafe_perform_io

from xcf.xcf_modules import io_ops
from xcf.xcf_modules.errors import ErrorType
from xcf.xcf_modules.log import get_logger
from xcf.xcf_modules.types import PROJECT_EXTENSIONS, ProjectEntry

_logger = get_logger()

DOCUMENT_QUERY_SCRIPT = (
    'var app = Application("Xcode");'
    "var docs = app.documents();"
    "var result = [];"
    "for (var i = 0; i < docs.length; i++) {"
    "  var d = docs[i];"
    "  result.push({name: d.name(), path: d.path()});"
    "}"
    "JSON.stringify(result);"
)


def is_project_path(path: str) -> bool:
    """True for .xcodeproj and .xcworkspace bundle paths."""
    return path.rstrip("/").endswith(PROJECT_EXTENSIONS)


def parse_document_output(raw: str) -> list[ProjectEntry]:
    """Parse osascript JSON output into sorted project entries.

    Non-project documents, entries without a path and
    duplicates are dropped. Malformed output yields [].
    """
    if not raw or not raw.strip():
        return []
    try:
        documents = json.loads(raw.strip())
    except (json.JSONDecodeError, TypeError):
        _logger.warning("Unparseable document list: %r", raw[:200])
        return []
    if not isinstance(documents, list):
        return []

    paths: set[str] = set()
    for doc in documents:
        if not isinstance(doc, dict):
            continue
        path = doc.get("path")
        if isinstance(path, str) and is_project_path(path):
            paths.add(path.rstrip("/"))
    return [ProjectEntry.from_path(p) for p in sorted(paths)]


def list_projects(*, timeout: int = 10) -> list[ProjectEntry]:
    """List open Xcode projects and workspaces.

    Never fails: if the scan cannot run, the cause is logged
    as CatalogUnavailable and an empty list is returned.
    """
    result = io_ops.run_osascript(
        DOCUMENT_QUERY_SCRIPT, timeout=timeout,
    )
    if isinstance(result, IOFailure):
        err = unsafe_perform_io(result.failure())
        _logger.warning("%s: %s", ErrorType.CATALOG_UNAVAILABLE, err)
        return []

    shell = unsafe_perform_io(result.unwrap())
    if shell.return_code != 0:
        _logger.warning(
            "%s: osascript exited %d: %s",
            ErrorType.CATALOG_UNAVAILABLE,
            shell.return_code,
            shell.stderr.strip(),
        )
        return []

    entries = parse_document_output(shell.stdout)
    _logger.debug("Catalog found %d project(s)", len(entries))
    return entries


def find_entry(
    entries: list[ProjectEntry],
    path: str,
) -> ProjectEntry | None:
    """Return the entry with the given path, if still listed."""
    return next((e for e in entries if e.path == path), None)
