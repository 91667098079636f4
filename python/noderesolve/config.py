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
"""Resolver configuration.

A ResolverConfig is an immutable value. Changing an option produces a new
configuration and leaves the original untouched, so one configuration can be
shared between threads and cloned with overrides freely.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union


DEFAULT_EXTENSIONS: Tuple[str, ...] = (".js", ".json", ".node")
DEFAULT_MAIN_FIELDS: Tuple[str, ...] = ("main",)

# Directory searched for packages at every ancestor of the basedir
DEPENDENCY_FOLDER = "node_modules"
INDEX_BASENAME = "index"

PathLike = Union[str, Path]


def _as_tuple(values: Union[str, Iterable[str]]) -> Tuple[str, ...]:
    if isinstance(values, str):
        return (values,)
    return tuple(str(value) for value in values)


def normalize_extensions(extensions: Union[str, Iterable[str]]) -> Tuple[str, ...]:
    """Prefix each extension with "." if it is missing.

    Raises:
        ValueError: If an extension is empty
    """
    normalized = []
    for ext in _as_tuple(extensions):
        if not ext:
            raise ValueError(f"Invalid extension {ext!r}: extensions must not be empty")
        normalized.append(ext if ext.startswith(".") else f".{ext}")
    return tuple(normalized)


def normalize_main_fields(main_fields: Union[str, Iterable[str]]) -> Tuple[str, ...]:
    """Validate a main field priority list.

    Raises:
        ValueError: If a field name is empty
    """
    fields = _as_tuple(main_fields)
    for name in fields:
        if not name:
            raise ValueError("Invalid main field: field names must not be empty")
    return fields


@dataclass(frozen=True)
class ResolverConfig:
    """Options for resolving module specifiers.

    Attributes:
        basedir: Directory relative and bare specifiers are resolved against.
            Required before resolving anything other than core modules and
            absolute paths.

        extensions: Suffixes tried after a path, in priority order. The first
            extension that names an existing file wins.

        main_fields: package.json fields tried in order for the entry point.
            The first field holding a string wins.

        preserve_symlinks: If False, results are canonicalized through the
            filesystem (symlinks resolved). If True, results are only
            normalized lexically.

    Example:
        >>> config = ResolverConfig().with_extensions(["ts", ".js"])
        >>> config.extensions
        ('.ts', '.js')
    """

    basedir: Optional[Path] = None
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    main_fields: Tuple[str, ...] = DEFAULT_MAIN_FIELDS
    preserve_symlinks: bool = False

    def __post_init__(self):
        # Frozen, so normalized values are written through object.__setattr__
        if self.basedir is not None and not isinstance(self.basedir, Path):
            object.__setattr__(self, "basedir", Path(self.basedir))
        object.__setattr__(self, "extensions", normalize_extensions(self.extensions))
        object.__setattr__(self, "main_fields", normalize_main_fields(self.main_fields))
        object.__setattr__(self, "preserve_symlinks", bool(self.preserve_symlinks))

    def with_basedir(self, basedir: PathLike) -> "ResolverConfig":
        """Create a new configuration with a different basedir."""
        return replace(self, basedir=Path(basedir))

    def with_extensions(self, extensions: Union[str, Iterable[str]]) -> "ResolverConfig":
        """Create a new configuration with a different set of extensions."""
        return replace(self, extensions=normalize_extensions(extensions))

    def with_main_fields(self, main_fields: Union[str, Iterable[str]]) -> "ResolverConfig":
        """Create a new configuration with a different main field priority list."""
        return replace(self, main_fields=normalize_main_fields(main_fields))

    def with_preserve_symlinks(self, preserve_symlinks: bool) -> "ResolverConfig":
        """Create a new configuration with a different symlink option."""
        return replace(self, preserve_symlinks=preserve_symlinks)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "basedir": str(self.basedir) if self.basedir is not None else None,
            "extensions": list(self.extensions),
            "main_fields": list(self.main_fields),
            "preserve_symlinks": self.preserve_symlinks,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ResolverConfig":
        """Create from dictionary.

        Raises:
            ValueError: If ``d`` has keys that are not configuration options
        """
        unknown = set(d) - {"basedir", "extensions", "main_fields", "preserve_symlinks"}
        if unknown:
            raise ValueError(f"Unknown resolver options: {', '.join(sorted(unknown))}")

        basedir = d.get("basedir")
        return cls(
            basedir=Path(basedir) if basedir is not None else None,
            extensions=d.get("extensions", DEFAULT_EXTENSIONS),
            main_fields=d.get("main_fields", DEFAULT_MAIN_FIELDS),
            preserve_symlinks=d.get("preserve_symlinks", False),
        )


# Default configuration singleton
DEFAULT_CONFIG = ResolverConfig()
