"""Archive-unpack collaborator for the Grails resources zip."""

from __future__ import annotations

import shutil
import zipfile
from pathlib import Path
from typing import Protocol, runtime_checkable

import structlog

from grails_build.exceptions import ConfigurationError

log = structlog.get_logger("grails_build.unpack")


@runtime_checkable
class ArchiveUnpacker(Protocol):
    def unpack(self, archive: Path, destination: Path) -> None: ...


class ZipArchiveUnpacker:
    """Extract a zip archive, replacing whatever was at the destination.

    The archive is opened and checked before the destination is touched, so a
    broken archive leaves an existing Grails home in place.
    """

    def unpack(self, archive: Path, destination: Path) -> None:
        try:
            zf = zipfile.ZipFile(archive)
        except (zipfile.BadZipFile, OSError) as e:
            raise ConfigurationError(f"Cannot read resources archive {archive}: {e}") from e
        with zf:
            bad = zf.testzip()
            if bad is not None:
                raise ConfigurationError(f"Corrupt entry '{bad}' in resources archive {archive}")
            if destination.exists():
                shutil.rmtree(destination)
            destination.mkdir(parents=True)
            zf.extractall(destination)
            log.info("unpack.done", archive=str(archive), destination=str(destination),
                     entries=len(zf.namelist()))
