"""UnpackResourcesTask — materialize the Grails home directory."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from grails_build.conventions import convention_property
from grails_build.core.config import LOG4J_TARGET
from grails_build.exceptions import ConfigurationError
from grails_build.tasks.base import Task
from grails_build.unpack import ArchiveUnpacker, ZipArchiveUnpacker

if TYPE_CHECKING:
    from grails_build.project import Project

LOG4J_TEMPLATE = Path(__file__).parent.parent / "resources" / "log4j.properties"


class UnpackResourcesTask(Task):
    """Unpack the resources archive into ``destination_dir``.

    After unpacking, ``scripts/log4j.properties`` is written into the
    destination so the forked command line has a logging configuration.
    """

    archive = convention_property()
    destination_dir = convention_property()

    def __init__(self, name: str, project: Project) -> None:
        super().__init__(name, project)
        self.unpacker: ArchiveUnpacker = ZipArchiveUnpacker()

    def run(self) -> None:
        if self.archive is None or self.destination_dir is None:
            raise ConfigurationError(f"Task '{self.name}' needs an archive and a destination")
        destination = Path(self.destination_dir)
        self.unpacker.unpack(Path(self.archive), destination)
        target = destination / LOG4J_TARGET
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(LOG4J_TEMPLATE, target)
