"""GrailsTask — invoke one Grails command with convention-mapped inputs."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from grails_build.conventions import convention_property
from grails_build.exceptions import ConfigurationError, TaskExecutionError
from grails_build.launcher import GrailsLauncher, LaunchRequest
from grails_build.optional import Resolved
from grails_build.repository import DependencyRepository
from grails_build.scopes import DependencyScope
from grails_build.tasks.base import Task

if TYPE_CHECKING:
    from grails_build.project import Project


class GrailsTask(Task):
    """Runs ``grails <command> <args>`` through a :class:`GrailsLauncher`.

    Every path, version and classpath input is a convention property so the
    plugin can wire it lazily; nothing is read until the task executes.
    """

    grails_home = convention_property()
    project_dir = convention_property()
    project_work_dir = convention_property()
    grails_version = convention_property()

    bootstrap_classpath = convention_property()
    provided_classpath = convention_property()
    compile_classpath = convention_property()
    runtime_classpath = convention_property()
    test_classpath = convention_property()

    springloaded = convention_property()

    def __init__(self, name: str, project: Project) -> None:
        super().__init__(name, project)
        self.command = name
        self.env: str | None = None
        self._args: list[str] = []
        self.launcher: GrailsLauncher | None = None
        self.repository: DependencyRepository | None = None

    @property
    def args(self) -> list[str]:
        return list(self._args)

    @args.setter
    def args(self, value: str | list[str] | None) -> None:
        if value is None:
            self._args = []
        elif isinstance(value, str):
            # kept whole; the script runner tokenizes the command line itself
            self._args = [value] if value else []
        else:
            self._args = [str(v) for v in value]

    def _classpath(self, scope: DependencyScope | None) -> list[Path]:
        if scope is None:
            return []
        if self.repository is None:
            raise ConfigurationError(f"Task '{self.name}' has no dependency repository")
        return scope.resolve(self.repository)

    def _springloaded_classpath(self) -> list[Path] | None:
        outcome = self.springloaded
        if isinstance(outcome, Resolved):
            return self._classpath(outcome.scope)
        return None

    def launch_request(self) -> LaunchRequest:
        """Resolve every convention property into a :class:`LaunchRequest`."""
        if self.repository is None:
            raise ConfigurationError(f"Task '{self.name}' has no dependency repository")
        return LaunchRequest(
            command=self.command,
            args=self.args,
            env=self.env,
            grails_version=self.grails_version,
            grails_home=Path(self.grails_home),
            project_dir=Path(self.project_dir),
            project_work_dir=Path(self.project_work_dir),
            bootstrap_classpath=self._classpath(self.bootstrap_classpath),
            provided_classpath=self._classpath(self.provided_classpath),
            compile_classpath=self._classpath(self.compile_classpath),
            runtime_classpath=self._classpath(self.runtime_classpath),
            test_classpath=self._classpath(self.test_classpath),
            springloaded=self._springloaded_classpath(),
        )

    def run(self) -> None:
        if self.launcher is None:
            raise ConfigurationError(f"Task '{self.name}' has no Grails launcher")
        exit_code = self.launcher.launch(self.launch_request())
        if exit_code != 0:
            raise TaskExecutionError(self.name, self.command, exit_code)
