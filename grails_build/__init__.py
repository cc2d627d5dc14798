"""grails-build: drive the Grails command line from a build graph."""

__version__ = "0.1.0"

from grails_build.conventions import ConventionAware, ConventionMapping, convention_property
from grails_build.exceptions import (
    ConfigurationError,
    CycleError,
    GrailsBuildError,
    ResolutionError,
    TaskExecutionError,
    UnknownPropertyError,
    UnknownTaskError,
    UserInputError,
)
from grails_build.extension import GrailsExtension
from grails_build.models.dependency import Dependency
from grails_build.optional import Disabled, LenientOptionalDependencyResolver, Resolved
from grails_build.plugin import GrailsCommandRule, GrailsPlugin, command_for_task_name
from grails_build.project import Project
from grails_build.scopes import DependencyScope, DependencyScopeGraph
from grails_build.tasks import GrailsTask, Task, TaskContainer, UnpackResourcesTask

__all__ = [
    "ConfigurationError",
    "ConventionAware",
    "ConventionMapping",
    "CycleError",
    "Dependency",
    "DependencyScope",
    "DependencyScopeGraph",
    "Disabled",
    "GrailsBuildError",
    "GrailsCommandRule",
    "GrailsExtension",
    "GrailsPlugin",
    "GrailsTask",
    "LenientOptionalDependencyResolver",
    "Project",
    "ResolutionError",
    "Resolved",
    "Task",
    "TaskContainer",
    "TaskExecutionError",
    "UnknownPropertyError",
    "UnknownTaskError",
    "UnpackResourcesTask",
    "UserInputError",
    "convention_property",
]
