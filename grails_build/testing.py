"""Test doubles for grails_build — use in unit and integration tests.

Usage::

    from grails_build.testing import FakeRepository, RecordingLauncher

    repo = FakeRepository()                                   # resolves everything
    repo = FakeRepository(unresolved={"org.example:broken"})  # reports as unresolved
    launcher = RecordingLauncher(exit_code=1)                 # every launch fails
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from grails_build.exceptions import ResolutionError
from grails_build.launcher import LaunchRequest
from grails_build.models.dependency import Dependency
from grails_build.repository import LenientResolution


class FakeRepository:
    """Repository that maps every coordinate to ``<root>/<file name>``.

    Parameters
    ----------
    unresolved:
        Coordinates (full notation or ``group:name``) to report as unresolved.
    root:
        Directory the fake artifact paths live under. Files are not created.
    """

    def __init__(self, unresolved: set[str] | None = None, root: Path | str = "/fake-repo") -> None:
        self.unresolved = set(unresolved or ())
        self.root = Path(root)
        self.calls: list[tuple[str, list[str]]] = []

    def _is_unresolved(self, dep: Dependency) -> bool:
        return str(dep) in self.unresolved or dep.module_id in self.unresolved

    def resolve_lenient(
        self, scope: str, dependencies: Sequence[Dependency]
    ) -> LenientResolution:
        self.calls.append((scope, [str(d) for d in dependencies]))
        result = LenientResolution()
        for dep in dependencies:
            if self._is_unresolved(dep):
                result.unresolved.append(dep)
            else:
                result.resolved[dep] = self.root / dep.file_name
        return result

    def resolve(self, scope: str, dependencies: Sequence[Dependency]) -> list[Path]:
        result = self.resolve_lenient(scope, dependencies)
        if result.has_unresolved:
            raise ResolutionError(scope, [str(d) for d in result.unresolved])
        return result.files


class RecordingLauncher:
    """Launcher that records requests and returns a fixed exit code."""

    def __init__(self, exit_code: int = 0) -> None:
        self.exit_code = exit_code
        self._requests: list[LaunchRequest] = []

    @property
    def requests(self) -> list[LaunchRequest]:
        """Requests received — useful for assertions in tests."""
        return self._requests

    def launch(self, request: LaunchRequest) -> int:
        self._requests.append(request)
        return self.exit_code
