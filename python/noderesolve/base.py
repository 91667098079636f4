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
"""Outcome of a resolution step.

Each resolution strategy (file, index, directory, node_modules walk) returns a
Resolution instead of raising, so the resolver can chain alternatives in order
and stop at the first one that resolves.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Callable, Iterable, Optional

from .errors import RECOVERABLE_ERRORS, NotFoundError, ResolutionError


class ResolutionStatus(Enum):
    """Status of a resolution step.

    Attributes:
        RESOLVED: A path was found
        FAILED: No path was found; the error says why
    """

    RESOLVED = auto()
    FAILED = auto()


@dataclass(frozen=True)
class Resolution:
    """Result of resolving a specifier or a candidate path.

    Attributes:
        status: RESOLVED or FAILED
        specifier: The specifier being resolved (if known)
        path: The resolved path (if successful)
        error: Why resolution failed (if failed)
        is_core: Whether the specifier named a core module
    """

    status: ResolutionStatus
    specifier: Optional[str] = None
    path: Optional[Path] = None
    error: Optional[ResolutionError] = None
    is_core: bool = False

    @property
    def success(self) -> bool:
        return self.status == ResolutionStatus.RESOLVED

    @property
    def recoverable(self) -> bool:
        """Whether a fallback chain may move past this failure."""
        return not self.success and isinstance(self.error, RECOVERABLE_ERRORS)

    @classmethod
    def resolved(
        cls,
        path: Path,
        specifier: Optional[str] = None,
        is_core: bool = False,
    ) -> "Resolution":
        return cls(
            status=ResolutionStatus.RESOLVED,
            specifier=specifier,
            path=path,
            is_core=is_core,
        )

    @classmethod
    def failed(cls, error: ResolutionError, specifier: Optional[str] = None) -> "Resolution":
        return cls(status=ResolutionStatus.FAILED, specifier=specifier, error=error)

    @classmethod
    def not_found(cls, path: Optional[Path] = None, specifier: Optional[str] = None) -> "Resolution":
        """Failed resolution for a candidate that does not exist."""
        message = f"Not found: {path}" if path is not None else "Not found"
        return cls.failed(NotFoundError(message, specifier=specifier, path=path), specifier)

    def unwrap(self) -> Path:
        """Return the resolved path, or raise the error that ended resolution.

        Raises:
            ResolutionError: If resolution failed
        """
        if self.success:
            return self.path
        raise self.error if self.error is not None else NotFoundError(
            "Not found", specifier=self.specifier
        )


Strategy = Callable[[], Resolution]


def first_resolved(strategies: Iterable[Strategy]) -> Resolution:
    """Run strategies in order and return the first that resolves.

    A failure whose error is not one of RECOVERABLE_ERRORS ends the chain and
    is returned as is. When every strategy fails recoverably, the last failure
    is returned.
    """
    result = Resolution.not_found()
    for strategy in strategies:
        result = strategy()
        if result.success or not result.recoverable:
            return result
    return result
