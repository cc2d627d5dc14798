"""Task types."""

from grails_build.tasks.base import Task, TaskContainer
from grails_build.tasks.grails import GrailsTask
from grails_build.tasks.unpack import UnpackResourcesTask

__all__ = ["GrailsTask", "Task", "TaskContainer", "UnpackResourcesTask"]
