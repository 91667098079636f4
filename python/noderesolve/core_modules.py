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
"""Node.js core module registry.

Core modules are names reserved by the Node.js runtime. A ``require()`` of one
of these names never touches the filesystem, so the resolver must recognise
them before any path lookup happens.

References:
    - Node.js Modules: https://nodejs.org/api/modules.html#core-modules
"""

from __future__ import annotations

from typing import FrozenSet


# =============================================================================
# Node.js Built-in Modules
# =============================================================================

NODE_BUILTIN_MODULES: FrozenSet[str] = frozenset({
    "assert",
    "async_hooks",
    "buffer",
    "child_process",
    "cluster",
    "console",
    "constants",
    "crypto",
    "dgram",
    "diagnostics_channel",
    "dns",
    "domain",
    "events",
    "fs",
    "http",
    "http2",
    "https",
    "inspector",
    "module",
    "net",
    "os",
    "path",
    "perf_hooks",
    "process",
    "punycode",
    "querystring",
    "readline",
    "repl",
    "stream",
    "string_decoder",
    "sys",
    "timers",
    "tls",
    "trace_events",
    "tty",
    "url",
    "util",
    "v8",
    "vm",
    "wasi",
    "worker_threads",
    "zlib",
})


def is_core_module(name: str) -> bool:
    """Check if a string references a core module, such as "events".

    Only the exact bare name matches: ``"events/"``, ``"events/foo"`` and
    ``"./events"`` are not core modules.

    Args:
        name: The ``require()`` argument

    Returns:
        True if ``name`` is one of NODE_BUILTIN_MODULES
    """
    return name in NODE_BUILTIN_MODULES
