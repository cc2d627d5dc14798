"""Tests for MavenLocalRepository."""

from __future__ import annotations

import pytest

from grails_build.exceptions import ResolutionError
from grails_build.models.dependency import Dependency
from grails_build.repository import DependencyRepository, MavenLocalRepository
from grails_build.testing import FakeRepository


@pytest.fixture
def m2(tmp_path):
    root = tmp_path / "m2"
    jar = root / "org" / "grails" / "grails-bootstrap" / "2.4" / "grails-bootstrap-2.4.jar"
    jar.parent.mkdir(parents=True)
    jar.write_bytes(b"")
    return root


class TestMavenLocalRepository:
    def test_artifact_path_layout(self, tmp_path):
        repo = MavenLocalRepository(tmp_path)
        dep = Dependency.parse("org.grails:grails-resources:2.4@zip")
        assert repo.artifact_path(dep) == (
            tmp_path / "org" / "grails" / "grails-resources" / "2.4" / "grails-resources-2.4.zip"
        )

    def test_resolve_present(self, m2):
        files = MavenLocalRepository(m2).resolve(
            "bootstrap", [Dependency.parse("org.grails:grails-bootstrap:2.4")]
        )
        assert [f.name for f in files] == ["grails-bootstrap-2.4.jar"]

    def test_resolve_missing_raises(self, m2):
        with pytest.raises(ResolutionError) as exc:
            MavenLocalRepository(m2).resolve(
                "compile", [Dependency.parse("org.grails:grails-crud:2.4")]
            )
        assert exc.value.scope == "compile"
        assert exc.value.unresolved == ["org.grails:grails-crud:2.4"]

    def test_lenient_reports_instead_of_raising(self, m2):
        result = MavenLocalRepository(m2).resolve_lenient(
            "bootstrap",
            [
                Dependency.parse("org.grails:grails-bootstrap:2.4"),
                Dependency.parse("org.grails:grails-scripts:2.4"),
            ],
        )
        assert [f.name for f in result.files] == ["grails-bootstrap-2.4.jar"]
        assert [str(d) for d in result.unresolved] == ["org.grails:grails-scripts:2.4"]

    def test_versionless_dependency_unresolved(self, m2):
        result = MavenLocalRepository(m2).resolve_lenient(
            "compile", [Dependency.parse("org.grails:grails-bootstrap")]
        )
        assert result.has_unresolved

    def test_satisfies_protocol(self, tmp_path):
        assert isinstance(MavenLocalRepository(tmp_path), DependencyRepository)
        assert isinstance(FakeRepository(), DependencyRepository)
