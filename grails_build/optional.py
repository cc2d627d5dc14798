"""Best-effort resolution of the optional reloading agent."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

import structlog

from grails_build.models.dependency import Dependency
from grails_build.repository import DependencyRepository
from grails_build.scopes import DependencyScope

log = structlog.get_logger("grails_build.optional")


@dataclass(frozen=True)
class Resolved:
    """The optional scope resolved completely and can be used as a classpath."""

    scope: DependencyScope


@dataclass(frozen=True)
class Disabled:
    """The optional scope did not resolve; the capability is absent."""

    dependency: Dependency
    unresolved: tuple[Dependency, ...] = ()


OptionalDependencyOutcome = Union[Resolved, Disabled]


class LenientOptionalDependencyResolver:
    """Resolve one scope leniently, degrading to :class:`Disabled` on failure.

    When the scope declares nothing, a default dependency is added from
    *coordinate_template* formatted with the version returned by
    *version_supplier* (read at resolve time). Nothing is cached: each call
    re-inspects the scope and asks the repository again.
    """

    def __init__(
        self,
        scope: DependencyScope,
        repository: DependencyRepository,
        coordinate_template: str,
        version_supplier: Callable[[], str],
    ) -> None:
        self.scope = scope
        self.repository = repository
        self.coordinate_template = coordinate_template
        self.version_supplier = version_supplier

    def default_dependency(self) -> Dependency:
        return Dependency.parse(self.coordinate_template.format(version=self.version_supplier()))

    def resolve(self) -> OptionalDependencyOutcome:
        if self.scope.is_empty:
            self.scope.add(self.default_dependency())

        lenient = self.scope.resolve_lenient(self.repository)
        if lenient.has_unresolved:
            first = self.scope.dependencies[0]
            log.warning(
                "optional_dependency.unresolved",
                scope=self.scope.name,
                dependency=str(first),
                impact="reloading disabled",
            )
            return Disabled(first, tuple(lenient.unresolved))
        return Resolved(self.scope)
