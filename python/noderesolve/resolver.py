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
"""Resolve module specifiers in a Node-style ``require()`` to a full file path.

This module implements the Node.js CommonJS resolution algorithm:

- Core modules (fs, path, events, ...) resolve to themselves
- "/x", "./x" and "../x" resolve as a file, then as a directory
- Anything else is looked up in node_modules folders, nearest ancestor first
- Directories resolve through package.json main fields, then index files

Example:
    >>> resolve("abc")
    PosixPath('/path/to/cwd/node_modules/abc/index.js')
    >>> resolve_from("abc", Path("/other/path"))
    PosixPath('/other/path/node_modules/abc/index.js')

References:
    - Node.js Modules: https://nodejs.org/api/modules.html#all-together
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import FrozenSet, Iterable, Optional, Union

from .base import Resolution, first_resolved
from .config import (
    DEFAULT_CONFIG,
    DEPENDENCY_FOLDER,
    INDEX_BASENAME,
    ResolverConfig,
)
from .errors import (
    InvalidPathError,
    ManifestError,
    NotFoundError,
    UnconfiguredBasedirError,
)
from .manifest import MANIFEST_FILENAME, load_manifest
from .paths import (
    absolute_lexical,
    canonicalize,
    check_path,
    is_dir,
    is_file,
    normalize_path,
)
from .specifier import ROOT_PREFIX, SpecifierKind, classify_specifier, get_package_name

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Resolver:
    """Resolves ``require()`` specifiers against a ResolverConfig.

    A Resolver holds nothing but its configuration, so it can be reused for
    any number of resolutions and shared between threads. The ``with_*``
    methods return new resolvers and leave this one unchanged.

    Resolution order for a specifier X from basedir Y:
    1. X is a core module: return X
    2. X begins with "/": set Y to the filesystem root
    3. X begins with "./", "/" or "../": LOAD_AS_FILE(Y/X), then
       LOAD_AS_DIRECTORY(Y/X)
    4. Otherwise: LOAD_NODE_MODULES(X, Y)

    Example:
        >>> resolver = Resolver().with_basedir("/project").with_extensions([".ts", ".js"])
        >>> resolver.resolve("./src/app")
        PosixPath('/project/src/app.ts')
    """

    def __init__(self, config: Optional[ResolverConfig] = None):
        self._config = config if config is not None else DEFAULT_CONFIG

    @property
    def config(self) -> ResolverConfig:
        return self._config

    def with_basedir(self, basedir: PathLike) -> "Resolver":
        """Create a new resolver with a different basedir."""
        return Resolver(self._config.with_basedir(basedir))

    def with_extensions(self, extensions: Iterable[str]) -> "Resolver":
        """Create a new resolver with a different set of extensions."""
        return Resolver(self._config.with_extensions(extensions))

    def with_main_fields(self, main_fields: Iterable[str]) -> "Resolver":
        """Create a new resolver with a different main field priority list."""
        return Resolver(self._config.with_main_fields(main_fields))

    def with_preserve_symlinks(self, preserve_symlinks: bool) -> "Resolver":
        """Create a new resolver with a different symlink option."""
        return Resolver(self._config.with_preserve_symlinks(preserve_symlinks))

    def resolve(self, specifier: str) -> Path:
        """Resolve a ``require()`` argument.

        Args:
            specifier: The module specifier

        Returns:
            The absolute, normalized path of the module, or the bare name for
            a core module

        Raises:
            UnconfiguredBasedirError: If a basedir is needed but not set
            NotFoundError: If no file matches
            InvalidPathError: If the specifier cannot form a valid path
            ResolutionIOError: On filesystem errors other than missing entries
        """
        return self.try_resolve(specifier).unwrap()

    def try_resolve(self, specifier: str) -> Resolution:
        """Resolve a ``require()`` argument without raising for a miss.

        Configuration errors and filesystem errors are still raised.

        Returns:
            Resolution with the normalized path, or the error that ended the
            search
        """
        kind = classify_specifier(specifier)
        logger.debug(f"Resolving '{specifier}' as {kind.name.lower()}")

        if kind is SpecifierKind.CORE:
            return Resolution.resolved(Path(specifier), specifier=specifier, is_core=True)

        if kind is SpecifierKind.ABSOLUTE:
            basedir = Path(ROOT_PREFIX)
        else:
            basedir = self._get_basedir(specifier)

        if not specifier:
            return Resolution.failed(
                InvalidPathError("Empty module specifier", specifier=specifier), specifier
            )

        directory_only = _has_trailing_separator(specifier)
        if kind.is_path:
            result = self._resolve_path(absolute_lexical(basedir) / specifier, directory_only)
        else:
            result = self._resolve_node_modules(specifier, basedir, directory_only)

        if not result.success:
            error = result.error
            if isinstance(error, NotFoundError):
                error = NotFoundError(
                    f"Cannot find module '{specifier}' from '{basedir}'",
                    specifier=specifier,
                    path=basedir,
                )
            elif error.specifier is None:
                error.specifier = specifier
            return Resolution.failed(error, specifier)

        path = normalize_path(result.path, self._config.preserve_symlinks)
        logger.debug(f"Resolved '{specifier}' -> {path}")
        return Resolution.resolved(path, specifier=specifier)

    def _get_basedir(self, specifier: str) -> Path:
        if self._config.basedir is None:
            raise UnconfiguredBasedirError(specifier)
        return self._config.basedir

    def _resolve_path(
        self,
        path: Path,
        directory_only: bool = False,
        seen: FrozenSet[Path] = frozenset(),
    ) -> Resolution:
        """LOAD_AS_FILE(path), falling back to LOAD_AS_DIRECTORY(path)."""
        path = absolute_lexical(path)
        if directory_only:
            return self._resolve_as_directory(path, seen)
        return first_resolved((
            lambda: self._resolve_as_file(path),
            lambda: self._resolve_as_directory(path, seen),
        ))

    def _resolve_as_file(self, path: Path) -> Resolution:
        """Resolve a path as a file.

        If ``path`` refers to a file, it is returned; otherwise ``path`` + each
        extension is tried in order.
        """
        try:
            str_path = check_path(path)
        except InvalidPathError as e:
            return Resolution.failed(e)

        # 1. If X is a file, load X as JavaScript text.
        if is_file(path):
            return Resolution.resolved(path)

        # 2. If X.js, X.json, X.node (or any configured extension) is a file.
        for ext in self._config.extensions:
            ext_path = Path(f"{str_path}{ext}")
            if is_file(ext_path):
                return Resolution.resolved(ext_path)

        return Resolution.not_found(path)

    def _resolve_as_directory(
        self,
        path: Path,
        seen: FrozenSet[Path] = frozenset(),
    ) -> Resolution:
        """Resolve a path as a directory.

        Uses the package.json main fields if a usable one exists, or the
        index.EXT file otherwise. Manifest problems are not errors here: they
        only mean the index file is tried instead.

        Args:
            path: Candidate directory
            seen: Real paths of directories already being resolved through
                main fields in this chain
        """
        try:
            check_path(path)
        except InvalidPathError as e:
            return Resolution.failed(e)

        if not is_dir(path):
            return Resolution.not_found(path)

        real_path = canonicalize(path)
        if real_path in seen:
            logger.debug(f"Main field cycles back to {path}")
            return Resolution.not_found(path)

        # 1. If X/package.json is a file, use its main field.
        pkg_path = path / MANIFEST_FILENAME
        if is_file(pkg_path):
            main = self._resolve_package_main(pkg_path, seen | {real_path})
            if main.success or not main.recoverable:
                return main
            logger.debug(f"Falling back to index for {path}: {main.error}")

        # 2. LOAD_INDEX(X)
        return self._resolve_index(path)

    def _resolve_package_main(self, pkg_path: Path, seen: FrozenSet[Path]) -> Resolution:
        """Resolve using the first configured package.json main field."""
        try:
            manifest = load_manifest(pkg_path)
            entry = manifest.main_entry(self._config.main_fields)
        except ManifestError as e:
            return Resolution.failed(e)

        target = manifest.directory / entry
        logger.debug(f"{pkg_path} ({manifest.name or 'unnamed'}) points to {entry}")
        return self._resolve_path(target, seen=seen)

    def _resolve_index(self, path: Path) -> Resolution:
        """Resolve a directory to its index.EXT."""
        for ext in self._config.extensions:
            ext_path = path / f"{INDEX_BASENAME}{ext}"
            if is_file(ext_path):
                return Resolution.resolved(ext_path)

        return Resolution.not_found(path)

    def _resolve_node_modules(
        self,
        specifier: str,
        basedir: Path,
        directory_only: bool = False,
    ) -> Resolution:
        """Resolve by walking up node_modules folders.

        The nearest ancestor with a matching package wins. The walk is a loop
        over the basedir and its parents, ending at the filesystem root.
        """
        package = get_package_name(specifier)
        current = absolute_lexical(basedir)

        while True:
            node_modules = current / DEPENDENCY_FOLDER
            if is_dir(node_modules):
                logger.debug(f"Looking for '{package}' in {node_modules}")
                result = self._resolve_path(node_modules / specifier, directory_only)
                if result.success:
                    return result

            parent = current.parent
            if parent == current:
                break
            current = parent

        return Resolution.not_found(basedir, specifier=specifier)


def _has_trailing_separator(specifier: str) -> bool:
    """Whether the specifier can only name a directory ("dir/", "./x/..")."""
    return specifier.endswith(("/", "/.", "/..")) or specifier in (".", "..")


def create_resolver(
    basedir: Optional[PathLike] = None,
    extensions: Optional[Iterable[str]] = None,
    main_fields: Optional[Iterable[str]] = None,
    preserve_symlinks: bool = False,
) -> Resolver:
    """Create a resolver from keyword options.

    Args:
        basedir: Directory to resolve from (required for relative and bare
            specifiers)
        extensions: Extensions in priority order (default .js, .json, .node)
        main_fields: package.json fields in priority order (default "main")
        preserve_symlinks: Normalize results lexically instead of resolving
            symlinks

    Returns:
        Configured Resolver
    """
    config = DEFAULT_CONFIG.with_preserve_symlinks(preserve_symlinks)
    if basedir is not None:
        config = config.with_basedir(basedir)
    if extensions is not None:
        config = config.with_extensions(extensions)
    if main_fields is not None:
        config = config.with_main_fields(main_fields)
    return Resolver(config)


def resolve(specifier: str) -> Path:
    """Resolve a node.js module path relative to the current working directory.

    Returns the absolute path to the module, or raises a ResolutionError.
    """
    return Resolver().with_basedir(Path.cwd()).resolve(specifier)


def resolve_from(specifier: str, basedir: PathLike) -> Path:
    """Resolve a node.js module path relative to ``basedir``.

    Returns the absolute path to the module, or raises a ResolutionError.
    """
    return Resolver().with_basedir(basedir).resolve(specifier)
