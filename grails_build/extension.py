"""The ``grails`` project extension — settings read by every Grails task."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

import structlog

from grails_build.conventions import ConventionAware, convention_property
from grails_build.core.config import DEFAULT_SPRINGLOADED_VERSION

if TYPE_CHECKING:
    from grails_build.project import Project

log = structlog.get_logger("grails_build.extension")

VersionCallback = Callable[[str], None]


class GrailsExtension(ConventionAware):
    """Mutable per-project settings.

    ``grails_version`` is observable: assigning a new value fires every
    callback registered with :meth:`on_set_grails_version`, in registration
    order, with the new value. Re-assigning the current value is a no-op.
    Exceptions raised by a callback propagate to the assigner.
    """

    project_dir = convention_property()
    project_work_dir = convention_property()

    def __init__(self, project: Project) -> None:
        super().__init__()
        self.project = project
        self.springloaded_version = DEFAULT_SPRINGLOADED_VERSION
        self._grails_version: str | None = None
        self._version_callbacks: list[VersionCallback] = []

    @property
    def grails_version(self) -> str | None:
        return self._grails_version

    @grails_version.setter
    def grails_version(self, version: str | None) -> None:
        if version == self._grails_version:
            return
        self._grails_version = version
        if version is None:
            return
        log.debug("grails_version.set", version=version, callbacks=len(self._version_callbacks))
        for callback in tuple(self._version_callbacks):
            callback(version)

    def on_set_grails_version(self, callback: VersionCallback) -> None:
        self._version_callbacks.append(callback)
