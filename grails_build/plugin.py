"""GrailsPlugin — wires scopes, the ``grails`` extension and Grails tasks into a project."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from grails_build.core.config import (
    GRAILS_ARGS_PROPERTY,
    GRAILS_ENV_PROPERTY,
    GRAILS_TASK_PREFIX,
    RESOURCES_DIR,
    SPRINGLOADED_COORDINATE,
    UNSPECIFIED_VERSION,
)
from grails_build.dependencies import GrailsDependenciesConfigurer
from grails_build.exceptions import ConfigurationError, ResolutionError, UserInputError
from grails_build.extension import GrailsExtension
from grails_build.idea import IDEA_PLUGIN_ID
from grails_build.launcher import GrailsLauncher, JavaProcessLauncher
from grails_build.optional import LenientOptionalDependencyResolver
from grails_build.repository import DependencyRepository, MavenLocalRepository
from grails_build.scopes import DependencyScope
from grails_build.tasks.grails import GrailsTask
from grails_build.tasks.unpack import UnpackResourcesTask

if TYPE_CHECKING:
    from grails_build.project import Plugin, Project

log = structlog.get_logger("grails_build.plugin")

PLUGIN_ID = "grails"
SCOPE_NAMES = ("bootstrap", "compile", "provided", "runtime", "test", "resources", "springloaded")
UNPACK_TASK_NAME = "unpackGrailsResources"


def command_for_task_name(name: str, prefix: str = GRAILS_TASK_PREFIX) -> str | None:
    """Return the Grails command a dynamic task name stands for, if any.

    >>> command_for_task_name("grails-run-app")
    'run-app'
    >>> command_for_task_name("run-app") is None
    True
    """
    if not name.startswith(prefix):
        return None
    command = name[len(prefix):]
    return command or None


class GrailsCommandRule:
    """Task rule: ``<prefix><command>`` creates a GrailsTask running ``command``."""

    def __init__(self, project: Project, prefix: str = GRAILS_TASK_PREFIX) -> None:
        self.project = project
        self.prefix = prefix

    @property
    def description(self) -> str:
        return f"Pattern: {self.prefix}<command>: runs the given Grails command"

    def __call__(self, name: str) -> None:
        command = command_for_task_name(name, self.prefix)
        if command is None:
            return
        project = self.project

        def configure(task: GrailsTask) -> None:
            task.command = command
            if project.has_property(GRAILS_ARGS_PROPERTY):
                task.args = project.property(GRAILS_ARGS_PROPERTY)
            if project.has_property(GRAILS_ENV_PROPERTY):
                task.env = project.property(GRAILS_ENV_PROPERTY)

        project.tasks.create(name, GrailsTask, configure=configure)
        log.info("task.synthesized", task=name, command=command)


class GrailsPlugin:
    """Install-time wiring for a Grails project.

    ``plugin_project`` selects what ``assemble`` builds: a plugin package
    (``package-plugin``) or a deployable war (``war``).
    """

    id = PLUGIN_ID

    def __init__(
        self,
        repository: DependencyRepository | None = None,
        launcher: GrailsLauncher | None = None,
        *,
        plugin_project: bool = False,
        task_prefix: str = GRAILS_TASK_PREFIX,
    ) -> None:
        self.repository = repository or MavenLocalRepository()
        self.launcher = launcher or JavaProcessLauncher()
        self.plugin_project = plugin_project
        self.task_prefix = task_prefix

    def apply(self, project: Project) -> None:
        grails = project.extensions.create("grails", GrailsExtension, project)
        grails.convention_mapping.map(
            project_dir=lambda: project.project_dir,
            project_work_dir=lambda: project.build_dir,
        )

        scopes = {name: project.configurations.get_or_create(name) for name in SCOPE_NAMES}
        project.configurations.extend(scopes["runtime"], scopes["compile"])
        project.configurations.extend(scopes["test"], scopes["runtime"])

        def on_version(version: str) -> None:
            configurer = GrailsDependenciesConfigurer(version)
            configurer.configure_bootstrap_classpath(scopes["bootstrap"])
            configurer.configure_compile_classpath(scopes["compile"])
            configurer.configure_resources(scopes["resources"])

        grails.on_set_grails_version(on_version)

        unpack = self._create_unpack_task(project, grails, scopes["resources"])

        springloaded = LenientOptionalDependencyResolver(
            scopes["springloaded"],
            self.repository,
            SPRINGLOADED_COORDINATE,
            lambda: grails.springloaded_version,
        )

        def configure_grails_task(task: GrailsTask) -> None:
            task.depends_on(unpack)
            task.repository = self.repository
            task.launcher = self.launcher
            task.convention_mapping.map(
                grails_home=lambda: unpack.destination_dir,
                project_dir=lambda: grails.project_dir,
                project_work_dir=lambda: grails.project_work_dir,
                grails_version=lambda: grails.grails_version,
                bootstrap_classpath=lambda: scopes["bootstrap"],
                provided_classpath=lambda: scopes["provided"],
                compile_classpath=lambda: scopes["compile"],
                runtime_classpath=lambda: scopes["runtime"],
                test_classpath=lambda: scopes["test"],
                springloaded=springloaded.resolve,
            )
            task.do_first(_require_grails_version)

        project.tasks.with_type(GrailsTask, configure_grails_task)

        self._create_static_tasks(project)
        rule = GrailsCommandRule(project, self.task_prefix)
        project.tasks.add_rule(rule.description, rule)

        project.plugins.with_plugin(IDEA_PLUGIN_ID, lambda _: configure_idea(project))
        log.info("plugin.installed", project=project.name, plugin_project=self.plugin_project)

    def _create_unpack_task(
        self, project: Project, grails: GrailsExtension, resources: DependencyScope
    ) -> UnpackResourcesTask:
        def archive() -> Path:
            files = resources.resolve(self.repository)
            if len(files) != 1:
                raise ResolutionError(
                    resources.name,
                    [f"expected exactly one resources archive, found {len(files)}"],
                )
            return files[0]

        def configure(task: UnpackResourcesTask) -> None:
            task.description = "Unpacks the Grails resources archive into the Grails home"
            task.convention_mapping.map(
                archive=archive,
                destination_dir=lambda: project.build_dir / RESOURCES_DIR,
            )
            task.do_first(lambda _: _check_grails_version(grails.grails_version))

        return project.tasks.create(UNPACK_TASK_NAME, UnpackResourcesTask, configure=configure)

    def _create_static_tasks(self, project: Project) -> None:
        def configure_init(task: GrailsTask) -> None:
            task.only_if(
                lambda _: not project.file("application.properties").exists()
                and not project.file("grails-app").exists()
            )
            task.do_first(_require_project_version)
            if project.has_property(GRAILS_ARGS_PROPERTY):
                app_name = project.property(GRAILS_ARGS_PROPERTY)
            else:
                app_name = project.project_dir.name
            task.command = "create-app"
            task.args = ["--inplace", f"--appVersion={project.version}", app_name]

        def configure_clean(task: GrailsTask) -> None:
            task.command = "clean"

        def configure_test(task: GrailsTask) -> None:
            task.command = "test-app"

        def configure_assemble(task: GrailsTask) -> None:
            task.command = "package-plugin" if self.plugin_project else "war"

        project.tasks.create("init", GrailsTask, configure=configure_init)
        project.tasks.create("clean", GrailsTask, overwrite=True, configure=configure_clean)
        project.tasks.create("test", GrailsTask, overwrite=True, configure=configure_test)
        project.tasks.create("assemble", GrailsTask, overwrite=True, configure=configure_assemble)


def _check_grails_version(version: str | None) -> None:
    if version is None:
        raise ConfigurationError(
            "You must set 'grails.grails_version' property before Grails tasks can be run"
        )


def _require_grails_version(task: GrailsTask) -> None:
    _check_grails_version(task.grails_version)


def _require_project_version(task: GrailsTask) -> None:
    if task.project.version == UNSPECIFIED_VERSION:
        raise UserInputError("Build file must specify a 'version' property")


def configure_idea(project: Project) -> None:
    """Map IDEA scopes onto the dependency scopes, mirroring their inheritance."""
    idea = project.extensions.get("idea")
    configurations = project.configurations
    idea.module.scopes = {
        "PROVIDED": {"plus": [configurations["provided"]], "minus": []},
        "COMPILE": {"plus": [configurations["compile"]], "minus": []},
        "RUNTIME": {"plus": [configurations["runtime"]], "minus": [configurations["compile"]]},
        "TEST": {"plus": [configurations["test"]], "minus": [configurations["runtime"]]},
    }


def apply_plugin(project: Project, plugin: Plugin | None = None) -> Plugin:
    """Apply *plugin* (a default :class:`GrailsPlugin` if omitted) to *project*."""
    return project.plugins.apply(plugin or GrailsPlugin())
