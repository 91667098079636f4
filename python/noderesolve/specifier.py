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
"""Classification of ``require()`` specifiers.

Every specifier falls into exactly one kind, decided from the string alone:

- CORE: an exact Node.js core module name ("fs", "events")
- ABSOLUTE: starts with "/"
- RELATIVE: starts with "./" or "../"
- BARE: anything else, a package in node_modules ("dep", "dep/lib/file")
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Tuple

from .core_modules import is_core_module


ROOT_PREFIX = "/"
RELATIVE_PREFIXES: Tuple[str, ...] = ("./", "../")
PATH_PREFIXES: Tuple[str, ...] = (ROOT_PREFIX,) + RELATIVE_PREFIXES


class SpecifierKind(Enum):
    """Kind of module specifier.

    Attributes:
        CORE: Node.js core module, resolved without the filesystem
        ABSOLUTE: Path from the filesystem root
        RELATIVE: Path relative to the basedir
        BARE: Package looked up in ancestor node_modules folders
    """

    CORE = auto()
    ABSOLUTE = auto()
    RELATIVE = auto()
    BARE = auto()

    @property
    def is_path(self) -> bool:
        """Whether this kind is resolved by joining onto a directory."""
        return self in (SpecifierKind.ABSOLUTE, SpecifierKind.RELATIVE)


def classify_specifier(specifier: str) -> SpecifierKind:
    """Classify a specifier.

    The core module check comes first and wins over every other rule.

    Args:
        specifier: The ``require()`` argument

    Returns:
        The SpecifierKind for ``specifier``
    """
    if is_core_module(specifier):
        return SpecifierKind.CORE
    if not specifier.startswith(PATH_PREFIXES):
        return SpecifierKind.BARE
    if specifier.startswith(ROOT_PREFIX):
        return SpecifierKind.ABSOLUTE
    return SpecifierKind.RELATIVE


def get_package_name(specifier: str) -> str:
    """Extract the package name from a bare specifier.

    Handles scoped packages (@org/pkg) and subpath imports (pkg/subpath).
    """
    parts = specifier.split("/")
    if specifier.startswith("@") and len(parts) >= 2:
        return f"{parts[0]}/{parts[1]}"
    return parts[0]
