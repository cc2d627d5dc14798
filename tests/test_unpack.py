"""Tests for the resources unpack collaborator and task."""

from __future__ import annotations

import zipfile

import pytest

from grails_build.exceptions import ConfigurationError
from grails_build.project import Project
from grails_build.tasks.unpack import UnpackResourcesTask
from grails_build.unpack import ZipArchiveUnpacker


@pytest.fixture
def archive(tmp_path):
    path = tmp_path / "grails-resources.zip"
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("conf/groovy-starter.conf", "starter")
        zf.writestr("src/grails/templates/war/web.xml", "<web-app/>")
    return path


class TestZipArchiveUnpacker:
    def test_extracts(self, archive, tmp_path):
        dest = tmp_path / "home"
        ZipArchiveUnpacker().unpack(archive, dest)
        assert (dest / "conf" / "groovy-starter.conf").read_text() == "starter"

    def test_sync_removes_stale_files(self, archive, tmp_path):
        dest = tmp_path / "home"
        dest.mkdir()
        (dest / "stale.txt").write_text("old")
        ZipArchiveUnpacker().unpack(archive, dest)
        assert not (dest / "stale.txt").exists()

    def test_invalid_archive_keeps_destination(self, tmp_path):
        broken = tmp_path / "grails-resources.zip"
        broken.write_bytes(b"not a zip")
        dest = tmp_path / "home"
        dest.mkdir()
        (dest / "keep.txt").write_text("kept")
        with pytest.raises(ConfigurationError, match="grails-resources.zip"):
            ZipArchiveUnpacker().unpack(broken, dest)
        assert (dest / "keep.txt").read_text() == "kept"


class TestUnpackResourcesTask:
    def test_writes_log4j_after_unpack(self, archive, tmp_path):
        project = Project(tmp_path / "p")
        task = project.tasks.create("unpack", UnpackResourcesTask)
        task.convention_mapping.map(
            archive=lambda: archive,
            destination_dir=lambda: project.build_dir / "grails" / "resources",
        )
        task.execute()
        home = project.build_dir / "grails" / "resources"
        assert (home / "src" / "grails" / "templates" / "war" / "web.xml").exists()
        log4j = (home / "scripts" / "log4j.properties").read_text()
        assert "log4j.rootLogger" in log4j

    def test_missing_inputs(self, tmp_path):
        task = Project(tmp_path / "p").tasks.create("unpack", UnpackResourcesTask)
        with pytest.raises(ConfigurationError):
            task.execute()
