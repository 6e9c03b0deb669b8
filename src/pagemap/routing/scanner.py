"""Page file scanning.

Enumerates page files under a pages directory and turns them into
``ScannedFile`` records ready for the tree builder:

    pages/index.vue          -> ScannedFile("index.vue", "/abs/pages/index.vue")
    pages/users/[id].vue     -> ScannedFile("users/[id].vue", ...)

Relative paths always use forward slashes.  Dot-files and anything inside
a dot-directory are ignored.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from pyuca import Collator

from pagemap._errors import EnumerationError
from pagemap.cancellation import is_cancelled

if TYPE_CHECKING:
    from pagemap.cancellation import CancellationToken

DEFAULT_PATTERN = "**/*.{vue,js,ts,jsx,tsx}"

_BRACE_RE = re.compile(r"\{([^{}]*)\}")


@dataclass(frozen=True, slots=True)
class ScannedFile:
    """A page file found under the pages directory.

    Attributes:
        relative_path: Path relative to the pages directory, ``/``-separated.
        absolute_path: Absolute filesystem path.

    """

    relative_path: str
    absolute_path: str


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives into separate glob patterns.

    ``**/*.{vue,ts}`` -> ``["**/*.vue", "**/*.ts"]``

    """
    match = _BRACE_RE.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(head + option + tail))
    return expanded


def enumerate_page_files(
    root: str | Path,
    pattern: str = DEFAULT_PATTERN,
    token: CancellationToken | None = None,
) -> list[str]:
    """Return relative, ``/``-separated paths of files under *root* matching *pattern*.

    Returns an empty list when *root* does not exist.  Stops early once
    *token* is cancelled; the partial result is for the caller to discard.

    Raises:
        EnumerationError: If the directory tree cannot be read.

    """
    root_path = Path(root)
    if not root_path.is_dir():
        return []

    found: set[str] = set()
    try:
        for sub_pattern in expand_braces(pattern):
            for path in root_path.glob(sub_pattern):
                if is_cancelled(token):
                    return sorted(found)
                relative = path.relative_to(root_path)
                if any(part.startswith(".") for part in relative.parts):
                    continue
                if not path.is_file():
                    continue
                found.add(relative.as_posix())
    except OSError as exc:
        msg = f"Failed to scan pages directory {root_path}: {exc}"
        raise EnumerationError(msg) from exc

    return sorted(found)


@functools.cache
def _collator() -> Collator:
    return Collator()


def _locale_key(relative_path: str) -> tuple[tuple[int, ...], str]:
    # Default Unicode collation order (the en-US ordering), lowercase before
    # uppercase on ties.  The raw path breaks any remaining tie.
    return (_collator().sort_key(relative_path), relative_path)


def collect_scanned_files(
    pages_dir: str | Path,
    relative_paths: Iterable[str],
) -> list[ScannedFile]:
    """Build sorted, de-duplicated ``ScannedFile`` records.

    Duplicates are removed by exact relative-path equality; the first
    occurrence wins.

    """
    base = Path(pages_dir)
    seen: set[str] = set()
    files: list[ScannedFile] = []
    for relative in sorted(relative_paths, key=_locale_key):
        if relative in seen:
            continue
        seen.add(relative)
        files.append(ScannedFile(
            relative_path=relative,
            absolute_path=str(base / relative),
        ))
    return files
