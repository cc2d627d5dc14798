"""Dependency repository collaborator — strict and lenient resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

import structlog

from grails_build.core.config import DEFAULT_REPOSITORY
from grails_build.exceptions import ResolutionError
from grails_build.models.dependency import Dependency

log = structlog.get_logger("grails_build.repository")


@dataclass
class LenientResolution:
    """Resolution report: failures are data, not exceptions."""

    resolved: dict[Dependency, Path] = field(default_factory=dict)
    unresolved: list[Dependency] = field(default_factory=list)

    @property
    def files(self) -> list[Path]:
        return list(self.resolved.values())

    @property
    def has_unresolved(self) -> bool:
        return bool(self.unresolved)


@runtime_checkable
class DependencyRepository(Protocol):
    """Interface that every dependency repository must satisfy."""

    def resolve(self, scope: str, dependencies: Sequence[Dependency]) -> list[Path]: ...

    def resolve_lenient(
        self, scope: str, dependencies: Sequence[Dependency]
    ) -> LenientResolution: ...


class MavenLocalRepository:
    """Resolve artifacts from a local Maven-2 layout directory.

    ``org.grails:grails-bootstrap:2.4`` maps to
    ``<root>/org/grails/grails-bootstrap/2.4/grails-bootstrap-2.4.jar``.
    """

    def __init__(self, root: Path | str = DEFAULT_REPOSITORY) -> None:
        self.root = Path(root)

    def artifact_path(self, dep: Dependency) -> Path:
        path = self.root.joinpath(*dep.group.split("."), dep.name)
        if dep.version:
            path = path / dep.version
        return path / dep.file_name

    def resolve_lenient(
        self, scope: str, dependencies: Sequence[Dependency]
    ) -> LenientResolution:
        result = LenientResolution()
        for dep in dependencies:
            path = self.artifact_path(dep)
            if dep.version and path.is_file():
                result.resolved[dep] = path
            else:
                result.unresolved.append(dep)
        log.debug(
            "repository.resolved",
            scope=scope,
            resolved=len(result.resolved),
            unresolved=len(result.unresolved),
        )
        return result

    def resolve(self, scope: str, dependencies: Sequence[Dependency]) -> list[Path]:
        result = self.resolve_lenient(scope, dependencies)
        if result.has_unresolved:
            raise ResolutionError(scope, [str(d) for d in result.unresolved])
        return result.files
