# Copyright Rand Arete @ Ananke 2025
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================
"""Path normalization and filesystem probes.

Two normalization modes are supported:

- canonicalize: the real path, with every symlink resolved (the default)
- normalize_lexically: "." and ".." collapsed without touching the
  filesystem, so symlinked segments survive (--preserve-symlinks)

The probes (is_file, is_dir) treat a missing entry or an overlong name as
False and raise ResolutionIOError for any other filesystem error.
"""

from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import Union

from .errors import InvalidPathError, ResolutionIOError


PathLike = Union[str, Path]

CURRENT_DIR = "."
PARENT_DIR = ".."


def check_path(path: PathLike) -> str:
    """Return ``path`` as a string usable by the filesystem.

    Raises:
        InvalidPathError: If the path has a NUL byte or cannot be encoded
    """
    text = os.fspath(path)
    if "\x00" in text:
        raise InvalidPathError(f"Invalid path: {text!r} contains a NUL byte", path=Path(text))
    try:
        os.fsencode(text)
    except UnicodeEncodeError as e:
        raise InvalidPathError(f"Invalid path: {text!r}: {e}", path=Path(text)) from e
    return text


# Errors meaning the candidate cannot exist, so the probe answers False
_NOT_APPLICABLE_ERRNOS = frozenset({errno.ENAMETOOLONG})


def is_file(path: Path) -> bool:
    """Check if ``path`` is an existing regular file (following symlinks)."""
    try:
        return path.is_file()
    except OSError as e:
        if e.errno in _NOT_APPLICABLE_ERRNOS:
            return False
        raise ResolutionIOError("Failed to stat file", e, path=path) from e


def is_dir(path: Path) -> bool:
    """Check if ``path`` is an existing directory (following symlinks)."""
    try:
        return path.is_dir()
    except OSError as e:
        if e.errno in _NOT_APPLICABLE_ERRNOS:
            return False
        raise ResolutionIOError("Failed to stat directory", e, path=path) from e


def normalize_lexically(path: PathLike) -> Path:
    """Collapse "." and ".." components without touching the filesystem.

    Components are processed left to right: ".." pops the last component kept
    so far (and is dropped when there is nothing to pop), "." is dropped, and
    everything else is kept in order.

    Example:
        >>> normalize_lexically("/a/./b/../c")
        PosixPath('/a/c')
    """
    path = Path(path)
    anchor = path.anchor
    parts = path.parts[1:] if anchor else path.parts

    kept = []
    for part in parts:
        if part == CURRENT_DIR:
            continue
        if part == PARENT_DIR:
            if kept:
                kept.pop()
            continue
        kept.append(part)

    if not anchor and not kept:
        return Path(CURRENT_DIR)
    return Path(anchor, *kept)


def absolute_lexical(path: PathLike) -> Path:
    """Make ``path`` absolute against the cwd and normalize it lexically."""
    return normalize_lexically(Path(path).absolute())


def canonicalize(path: PathLike) -> Path:
    """Resolve ``path`` to its real path, following every symlink.

    Raises:
        ResolutionIOError: If the path does not exist, is a dangling link, or
            contains a symlink loop
    """
    path = Path(path)
    try:
        return path.resolve(strict=True)
    except OSError as e:
        raise ResolutionIOError("Failed to canonicalize path", e, path=path) from e
    except RuntimeError as e:
        # Symlink loops raise RuntimeError before Python 3.13
        loop = OSError(errno.ELOOP, str(e), str(path))
        raise ResolutionIOError("Failed to canonicalize path", loop, path=path) from e


def normalize_path(path: PathLike, preserve_symlinks: bool = False) -> Path:
    """Normalize a resolved path before it is handed back to the caller.

    Args:
        path: The resolved candidate
        preserve_symlinks: Normalize lexically instead of canonicalizing

    Returns:
        Absolute, normalized path
    """
    if preserve_symlinks:
        return absolute_lexical(path)
    return canonicalize(path)
