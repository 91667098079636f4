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
"""noderesolve: Node.js ``require()`` resolution without a JavaScript runtime.

Given a specifier and a starting directory, finds the file Node.js would load:

- resolve / resolve_from: one-shot resolution from the cwd or a basedir
- Resolver: reusable resolver over an immutable ResolverConfig
- is_core_module: check for Node.js core module names
"""

from __future__ import annotations

from .base import (
    Resolution,
    ResolutionStatus,
)
from .config import (
    DEFAULT_CONFIG,
    DEFAULT_EXTENSIONS,
    DEFAULT_MAIN_FIELDS,
    DEPENDENCY_FOLDER,
    ResolverConfig,
)
from .core_modules import (
    NODE_BUILTIN_MODULES,
    is_core_module,
)
from .errors import (
    RECOVERABLE_ERRORS,
    InvalidPathError,
    ManifestError,
    ManifestMainFieldMissingError,
    ManifestNotObjectError,
    ManifestParseError,
    ManifestReadError,
    NotFoundError,
    ResolutionError,
    ResolutionIOError,
    UnconfiguredBasedirError,
)
from .manifest import (
    MANIFEST_FILENAME,
    PackageManifest,
    load_manifest,
)
from .paths import (
    canonicalize,
    normalize_lexically,
    normalize_path,
)
from .resolver import (
    Resolver,
    create_resolver,
    resolve,
    resolve_from,
)
from .specifier import (
    PATH_PREFIXES,
    SpecifierKind,
    classify_specifier,
    get_package_name,
)

__all__ = [
    # Entry points
    "Resolver",
    "create_resolver",
    "resolve",
    "resolve_from",
    # Results
    "Resolution",
    "ResolutionStatus",
    # Configuration
    "ResolverConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_MAIN_FIELDS",
    "DEPENDENCY_FOLDER",
    # Specifiers
    "PATH_PREFIXES",
    "SpecifierKind",
    "classify_specifier",
    "get_package_name",
    "NODE_BUILTIN_MODULES",
    "is_core_module",
    # Manifests
    "MANIFEST_FILENAME",
    "PackageManifest",
    "load_manifest",
    # Paths
    "canonicalize",
    "normalize_lexically",
    "normalize_path",
    # Errors
    "ResolutionError",
    "UnconfiguredBasedirError",
    "InvalidPathError",
    "NotFoundError",
    "ResolutionIOError",
    "ManifestError",
    "ManifestReadError",
    "ManifestParseError",
    "ManifestNotObjectError",
    "ManifestMainFieldMissingError",
    "RECOVERABLE_ERRORS",
]
