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
"""Errors raised while resolving a module specifier.

All errors derive from ResolutionError. Manifest errors, NotFoundError and
InvalidPathError are recoverable: a resolver that has another candidate left
moves on to it. The rest end the resolution.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Tuple


class ResolutionError(Exception):
    """Error returned when a module could not be resolved."""

    def __init__(
        self,
        message: str,
        specifier: Optional[str] = None,
        path: Optional[Path] = None,
    ):
        super().__init__(message)
        self.message = message
        self.specifier = specifier
        self.path = path


class UnconfiguredBasedirError(ResolutionError):
    """A relative or bare specifier was resolved without a basedir."""

    def __init__(self, specifier: Optional[str] = None):
        super().__init__("Must set a basedir before resolving", specifier=specifier)


class InvalidPathError(ResolutionError):
    """A candidate path cannot be used as a filesystem path."""


class NotFoundError(ResolutionError):
    """No candidate matched."""


class ResolutionIOError(ResolutionError):
    """Filesystem error other than a missing entry."""

    def __init__(
        self,
        message: str,
        cause: OSError,
        specifier: Optional[str] = None,
        path: Optional[Path] = None,
    ):
        super().__init__(f"{message}: {cause}", specifier=specifier, path=path)
        self.cause = cause


class ManifestError(ResolutionError):
    """A package.json could not provide an entry point."""

    def __init__(self, message: str, manifest_path: Path):
        super().__init__(message, path=manifest_path)
        self.manifest_path = manifest_path


class ManifestReadError(ManifestError):
    """package.json could not be read."""


class ManifestParseError(ManifestError):
    """package.json is not valid JSON."""


class ManifestNotObjectError(ManifestError):
    """package.json top-level value is not an object."""

    def __init__(self, manifest_path: Path):
        super().__init__("package.json is not an object", manifest_path)


class ManifestMainFieldMissingError(ManifestError):
    """None of the configured main fields holds a string."""

    def __init__(self, manifest_path: Path, main_fields: Sequence[str]):
        fields = ", ".join(f'"{name}"' for name in main_fields)
        super().__init__(
            f"package.json does not contain a string in any of: {fields}",
            manifest_path,
        )
        self.main_fields = tuple(main_fields)


RECOVERABLE_ERRORS: Tuple[type, ...] = (
    NotFoundError,
    ManifestError,
    InvalidPathError,
)
