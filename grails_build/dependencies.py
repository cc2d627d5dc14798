"""Declare the framework's own artifacts into the bootstrap/compile/resources scopes."""

from __future__ import annotations

import structlog

from grails_build.models.dependency import Dependency
from grails_build.scopes import DependencyScope

log = structlog.get_logger("grails_build.dependencies")

GRAILS_GROUP = "org.grails"

BOOTSTRAP_MODULES = ("grails-bootstrap", "grails-scripts")
COMPILE_MODULES = ("grails-crud", "grails-gorm")
RESOURCES_MODULE = "grails-resources"


class GrailsDependenciesConfigurer:
    """Adds ``org.grails`` artifacts at one framework version.

    Artifacts this class manages are replaced when configured again, so a
    changed version never leaves the old coordinates behind. Anything else
    declared in the scope is left untouched.
    """

    def __init__(self, grails_version: str) -> None:
        self.grails_version = grails_version

    def _replace(self, scope: DependencyScope, modules: tuple[str, ...], ext: str = "jar") -> None:
        scope.remove_if(lambda d: d.group == GRAILS_GROUP and d.name in modules)
        for module in modules:
            scope.add(Dependency(GRAILS_GROUP, module, self.grails_version, ext=ext))
        log.debug("scope.configured", scope=scope.name, version=self.grails_version,
                  modules=list(modules))

    def configure_bootstrap_classpath(self, scope: DependencyScope) -> None:
        self._replace(scope, BOOTSTRAP_MODULES)

    def configure_compile_classpath(self, scope: DependencyScope) -> None:
        self._replace(scope, COMPILE_MODULES)

    def configure_resources(self, scope: DependencyScope) -> None:
        self._replace(scope, (RESOURCES_MODULE,), ext="zip")
