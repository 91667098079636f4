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
"""Package manifest (package.json) parsing.

Only the entry point matters to the resolver: the manifest is read, checked to
be a JSON object, and asked for the first configured main field that holds a
string. The parsed manifest is discarded once the entry point is known.

References:
    - package.json "main": https://docs.npmjs.com/cli/configuring-npm/package-json#main
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from .errors import (
    ManifestMainFieldMissingError,
    ManifestNotObjectError,
    ManifestParseError,
    ManifestReadError,
)


MANIFEST_FILENAME = "package.json"


@dataclass(frozen=True)
class PackageManifest:
    """Parsed package.json.

    Attributes:
        path: Path to the package.json file
        data: Top-level JSON object
    """

    path: Path
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def directory(self) -> Path:
        """Directory containing the manifest; main targets are relative to it."""
        return self.path.parent

    @property
    def name(self) -> Optional[str]:
        """Package name, or None when the manifest has no string "name"."""
        return self.get_string("name")

    def get_string(self, name: str) -> Optional[str]:
        """Get a field's value if it is a string, None otherwise."""
        value = self.data.get(name)
        return value if isinstance(value, str) else None

    def main_entry(self, main_fields: Sequence[str]) -> str:
        """Select the entry point from the first main field holding a string.

        An empty string counts as absent, like a falsy "main" in Node.

        Args:
            main_fields: Field names in priority order

        Returns:
            The selected field's value

        Raises:
            ManifestMainFieldMissingError: If no field holds a non-empty string
        """
        for name in main_fields:
            value = self.get_string(name)
            if value:
                return value
        raise ManifestMainFieldMissingError(self.path, main_fields)


def load_manifest(path: Path) -> PackageManifest:
    """Read and parse a package.json file.

    Args:
        path: Path to package.json

    Returns:
        PackageManifest for the file

    Raises:
        ManifestReadError: If the file cannot be read
        ManifestParseError: If the file is not valid JSON
        ManifestNotObjectError: If the top-level value is not an object
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ManifestReadError(f"Failed to read {path}: {e}", path) from e

    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise ManifestParseError(f"Json parse error in {path}: {e}", path) from e

    if not isinstance(data, dict):
        raise ManifestNotObjectError(path)

    return PackageManifest(path=path, data=data)
