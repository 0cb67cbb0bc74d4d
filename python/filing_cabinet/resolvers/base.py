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
"""Shared contract and helpers for resolvers.

Every resolver is a plain callable with the same calling convention:

    resolver(request: ResolutionRequest) -> str

It returns the absolute path the request's partial resolves to, or an empty
string when the partial cannot be resolved. Returning "" is the normal
outcome for a missing module and must not be signalled with an exception.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Callable, Iterable, Optional

if TYPE_CHECKING:
    from ..core.request import ResolutionRequest

Resolver = Callable[["ResolutionRequest"], str]

UNRESOLVED = ""


# =============================================================================
# Node.js Built-in Modules
# =============================================================================

NODE_BUILTIN_MODULES = frozenset({
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


def is_node_builtin(partial: str) -> bool:
    """Check for a Node.js core module, including node: and subpath forms."""
    if partial.startswith("node:"):
        return True
    return partial.split("/", 1)[0] in NODE_BUILTIN_MODULES


def is_relative(partial: str) -> bool:
    """Check whether a partial is relative to the file containing it."""
    return (
        partial in (".", "..")
        or partial.startswith("./")
        or partial.startswith("../")
    )


def is_path_like(partial: str) -> bool:
    """Relative or absolute filesystem reference (not a bare specifier)."""
    return is_relative(partial) or os.path.isabs(partial)


def strip_loaders(partial: str) -> str:
    """Drop webpack/RequireJS loader prefixes and any query string.

    'hgn!resolve' -> 'resolve', '!!raw!./a.txt?x=1' -> './a.txt'
    """
    partial = partial.rsplit("!", 1)[-1]
    return partial.split("?", 1)[0]


def first_existing(candidates: Iterable[str]) -> Optional[str]:
    """Return the first candidate that is an existing regular file."""
    for candidate in candidates:
        if os.path.isfile(candidate):
            return candidate
    return None
