"""In-process project model the plugin attaches to."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Mapping, Protocol, TypeVar

import structlog

from grails_build.core.config import UNSPECIFIED_VERSION
from grails_build.exceptions import UserInputError
from grails_build.scopes import DependencyScopeGraph
from grails_build.tasks.base import TaskContainer

log = structlog.get_logger("grails_build.project")

E = TypeVar("E")


class Plugin(Protocol):
    id: str

    def apply(self, project: Project) -> None: ...


class ExtensionContainer:
    """Named extension objects attached to a project."""

    def __init__(self) -> None:
        self._extensions: dict[str, Any] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._extensions

    def create(self, name: str, factory: Callable[..., E], *args: Any) -> E:
        if name in self._extensions:
            raise UserInputError(f"Extension '{name}' already exists")
        extension = factory(*args)
        self._extensions[name] = extension
        return extension

    def add(self, name: str, extension: Any) -> None:
        if name in self._extensions:
            raise UserInputError(f"Extension '{name}' already exists")
        self._extensions[name] = extension

    def find(self, name: str) -> Any | None:
        return self._extensions.get(name)

    def get(self, name: str) -> Any:
        try:
            return self._extensions[name]
        except KeyError:
            raise UserInputError(f"Extension '{name}' does not exist") from None


class PluginContainer:
    """Applied plugins, with callbacks that fire whenever a plugin is applied."""

    def __init__(self, project: Project) -> None:
        self._project = project
        self._applied: dict[str, Plugin] = {}
        self._pending: dict[str, list[Callable[[Plugin], None]]] = {}

    def __contains__(self, plugin_id: object) -> bool:
        return plugin_id in self._applied

    def apply(self, plugin: Plugin) -> Plugin:
        if plugin.id in self._applied:
            return self._applied[plugin.id]
        plugin.apply(self._project)
        self._applied[plugin.id] = plugin
        log.debug("plugin.applied", plugin=plugin.id, project=self._project.name)
        for action in self._pending.pop(plugin.id, []):
            action(plugin)
        return plugin

    def find(self, plugin_id: str) -> Plugin | None:
        return self._applied.get(plugin_id)

    def with_plugin(self, plugin_id: str, action: Callable[[Plugin], None]) -> None:
        """Run *action* now if *plugin_id* is applied, else when it gets applied."""
        plugin = self._applied.get(plugin_id)
        if plugin is not None:
            action(plugin)
        else:
            self._pending.setdefault(plugin_id, []).append(action)


class Project:
    """A buildable project: directories, properties, scopes, tasks, plugins."""

    def __init__(
        self,
        project_dir: Path | str,
        name: str | None = None,
        version: str = UNSPECIFIED_VERSION,
        properties: Mapping[str, str] | None = None,
    ) -> None:
        self.project_dir = Path(project_dir)
        self.name = name or self.project_dir.name
        self.version = version
        self._build_dir: Path | None = None
        self._properties: dict[str, str] = dict(properties or {})
        self.extensions = ExtensionContainer()
        self.configurations = DependencyScopeGraph()
        self.tasks = TaskContainer(self)
        self.plugins = PluginContainer(self)

    def __repr__(self) -> str:
        return f"Project({self.name!r})"

    @property
    def build_dir(self) -> Path:
        if self._build_dir is not None:
            return self._build_dir
        return self.project_dir / "build"

    @build_dir.setter
    def build_dir(self, value: Path | str) -> None:
        self._build_dir = self.file(value)

    def file(self, path: Path | str) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.project_dir / path

    def has_property(self, name: str) -> bool:
        return name in self._properties

    def property(self, name: str) -> str:
        try:
            return self._properties[name]
        except KeyError:
            raise UserInputError(f"Could not find property '{name}' on {self!r}") from None

    def set_property(self, name: str, value: str) -> None:
        self._properties[name] = value
