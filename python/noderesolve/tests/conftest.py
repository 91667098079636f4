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
"""Pytest configuration for noderesolve tests.

Puts the ``python`` directory on the path so the tests run from a checkout
without installing the package, and provides fixture trees that mirror a small
Node.js project layout.
"""

import json
import os
import sys
from pathlib import Path
from typing import Callable, Dict, Union

import pytest

# Add the python directory to path so noderesolve imports from the checkout
python_dir = Path(__file__).parent.parent.parent
if str(python_dir) not in sys.path:
    sys.path.insert(0, str(python_dir))


FileSpec = Union[str, dict, list]


def write_tree(root: Path, files: Dict[str, FileSpec]) -> Path:
    """Create files under ``root``.

    Keys are relative paths. String values are written verbatim; dict and list
    values are written as JSON. A key ending in "/" creates an empty directory.
    """
    for rel_path, content in files.items():
        path = root / rel_path
        if rel_path.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, (dict, list)):
            content = json.dumps(content)
        path.write_text(content)
    return root


def symlink_or_skip(link: Path, target: Path, target_is_directory: bool = False) -> None:
    """Create a symlink, skipping the test where symlinks are unavailable."""
    try:
        os.symlink(target, link, target_is_directory=target_is_directory)
    except (OSError, NotImplementedError) as e:
        pytest.skip(f"symlinks not supported: {e}")


@pytest.fixture
def root(tmp_path) -> Path:
    """Real path of an empty temporary directory."""
    return tmp_path.resolve()


@pytest.fixture
def tree(root) -> Callable[[Dict[str, FileSpec]], Path]:
    """Factory writing a file tree into ``root`` and returning ``root``."""

    def _tree(files: Dict[str, FileSpec]) -> Path:
        return write_tree(root, files)

    return _tree


@pytest.fixture
def fixtures(root) -> Path:
    """Fixture project covering extensions, manifests and node_modules."""
    return write_tree(root, {
        # Extensions
        "extensions/js-file.js": "",
        "extensions/json-file.json": "{}",
        "extensions/native-file.node": "",
        "extensions/other-file.ext": "",
        "extensions/no-ext": "",
        # package.json main fields
        "package-json/main-file/package.json": {"main": "whatever.js"},
        "package-json/main-file/whatever.js": "",
        "package-json/main-file/index.js": "",
        "package-json/main-file-noext/package.json": {"main": "whatever"},
        "package-json/main-file-noext/whatever.js": "",
        "package-json/main-dir/package.json": {"main": "subdir"},
        "package-json/main-dir/subdir/index.js": "",
        "package-json/not-object/package.json": "[1, 2, 3]",
        "package-json/not-object/index.js": "",
        "package-json/invalid/package.json": "{ this is not json",
        "package-json/invalid/index.js": "",
        "package-json/main-none/package.json": {"name": "main-none"},
        "package-json/main-none/index.js": "",
        "package-json/main-missing-target/package.json": {"main": "gone.js"},
        "package-json/main-missing-target/index.js": "",
        # node_modules lookups
        "node-modules/same-dir/node_modules/a.js": "",
        "node-modules/parent-dir/node_modules/a/index.js": "",
        "node-modules/parent-dir/src/": "",
        "node-modules/package-json/node_modules/dep/package.json": {"main": "lib"},
        "node-modules/package-json/node_modules/dep/lib/index.js": "",
        "node-modules/walk/src/node_modules/not-ok/index.js": "",
        "node-modules/walk/node_modules/not-ok/index.js": "",
        "node-modules/walk/node_modules/ok/index.js": "",
    })


@pytest.fixture
def make_symlink() -> Callable[..., None]:
    """symlink_or_skip as a fixture."""
    return symlink_or_skip
