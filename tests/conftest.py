"""Shared pytest fixtures for grails-build tests."""

from __future__ import annotations

import pytest

from grails_build.plugin import GrailsPlugin
from grails_build.project import Project
from grails_build.testing import FakeRepository, RecordingLauncher


@pytest.fixture
def repo():
    return FakeRepository()


@pytest.fixture
def launcher():
    return RecordingLauncher()


@pytest.fixture
def project(tmp_path):
    return Project(tmp_path / "demo", version="1.0")


@pytest.fixture
def grails_project(project, repo, launcher):
    """A project with the Grails plugin applied against fake collaborators."""
    project.plugins.apply(GrailsPlugin(repo, launcher))
    return project
