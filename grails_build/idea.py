"""IDE-metadata collaborator — IntelliJ IDEA module scopes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from grails_build.scopes import DependencyScope

if TYPE_CHECKING:
    from grails_build.project import Project

IDEA_PLUGIN_ID = "idea"

ScopeSpec = dict[str, list[DependencyScope]]


@dataclass
class IdeaModule:
    """Maps IDEA scope names to ``{"plus": [...], "minus": [...]}`` scope lists."""

    scopes: dict[str, ScopeSpec] = field(default_factory=dict)

    def dependencies(self, scope: str) -> list[str]:
        """Effective coordinates for one IDEA scope (plus minus minus)."""
        spec = self.scopes.get(scope, {})
        excluded = {d for s in spec.get("minus", []) for d in s.all_dependencies()}
        result: list[str] = []
        for s in spec.get("plus", []):
            for dep in s.all_dependencies():
                if dep not in excluded and str(dep) not in result:
                    result.append(str(dep))
        return result


@dataclass
class IdeaModel:
    module: IdeaModule = field(default_factory=IdeaModule)


class IdeaPlugin:
    """Adds an ``idea`` extension holding the module metadata."""

    id = IDEA_PLUGIN_ID

    def apply(self, project: Project) -> None:
        project.extensions.create("idea", IdeaModel)
