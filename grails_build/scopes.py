"""Dependency scopes ("configurations") and their inheritance graph."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterator

import structlog

from grails_build.exceptions import CycleError
from grails_build.models.dependency import Dependency

if TYPE_CHECKING:
    from grails_build.repository import DependencyRepository, LenientResolution

log = structlog.get_logger("grails_build.scopes")


class DependencyScope:
    """A named, inheritable set of dependency declarations."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.dependencies: list[Dependency] = []
        self._parents: list[DependencyScope] = []

    def __repr__(self) -> str:
        return f"DependencyScope({self.name!r})"

    @property
    def parents(self) -> tuple[DependencyScope, ...]:
        return tuple(self._parents)

    @property
    def is_empty(self) -> bool:
        """True when this scope declares nothing itself (ancestors ignored)."""
        return not self.dependencies

    def add(self, dependency: Dependency | str) -> Dependency:
        if isinstance(dependency, str):
            dependency = Dependency.parse(dependency)
        if dependency not in self.dependencies:
            self.dependencies.append(dependency)
        return dependency

    def remove_if(self, predicate: Callable[[Dependency], bool]) -> list[Dependency]:
        removed = [d for d in self.dependencies if predicate(d)]
        self.dependencies = [d for d in self.dependencies if not predicate(d)]
        return removed

    def hierarchy(self) -> Iterator[DependencyScope]:
        """Yield this scope, then every ancestor once (depth-first)."""
        seen: set[str] = set()
        stack = [self]
        while stack:
            scope = stack.pop()
            if scope.name in seen:
                continue
            seen.add(scope.name)
            yield scope
            stack.extend(reversed(scope._parents))

    def all_dependencies(self) -> list[Dependency]:
        """Own declarations plus those of all ancestors, de-duplicated in order."""
        result: list[Dependency] = []
        for scope in self.hierarchy():
            for dep in scope.dependencies:
                if dep not in result:
                    result.append(dep)
        return result

    def resolve(self, repository: DependencyRepository) -> list[Path]:
        """Resolve the effective dependency set into classpath files."""
        return repository.resolve(self.name, self.all_dependencies())

    def resolve_lenient(self, repository: DependencyRepository) -> LenientResolution:
        return repository.resolve_lenient(self.name, self.all_dependencies())


class DependencyScopeGraph:
    """Registry of a project's dependency scopes."""

    def __init__(self) -> None:
        self._scopes: dict[str, DependencyScope] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._scopes

    def __getitem__(self, name: str) -> DependencyScope:
        return self._scopes[name]

    def __iter__(self) -> Iterator[DependencyScope]:
        return iter(self._scopes.values())

    def find(self, name: str) -> DependencyScope | None:
        return self._scopes.get(name)

    def get_or_create(self, name: str) -> DependencyScope:
        scope = self._scopes.get(name)
        if scope is None:
            scope = DependencyScope(name)
            self._scopes[name] = scope
            log.debug("scope.created", scope=name)
        return scope

    def extend(self, child: DependencyScope, parent: DependencyScope) -> None:
        """Make *child* inherit every declaration of *parent*."""
        if parent in child._parents:
            return
        # child -> parent closes a cycle iff child is already reachable from parent
        for ancestor in parent.hierarchy():
            if ancestor is child:
                path = [child.name] + self._path(parent, child)
                raise CycleError(path)
        child._parents.append(parent)

    @staticmethod
    def _path(start: DependencyScope, target: DependencyScope) -> list[str]:
        if start is target:
            return [start.name]
        for parent in start._parents:
            tail = DependencyScopeGraph._path(parent, target)
            if tail:
                return [start.name] + tail
        return []
