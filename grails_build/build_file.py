"""Build-file schema — a JSON description of a Grails project."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from grails_build.core.config import UNSPECIFIED_VERSION
from grails_build.exceptions import UserInputError
from grails_build.models.dependency import Dependency
from grails_build.project import Project


class BuildFile(BaseModel):
    name: str | None = None
    version: str = UNSPECIFIED_VERSION
    grails_version: str | None = None
    springloaded_version: str | None = None
    plugin_project: bool = False
    project_dir: str | None = None
    build_dir: str | None = None
    dependencies: dict[str, list[str]] = Field(default_factory=dict)
    properties: dict[str, str] = Field(default_factory=dict)

    @field_validator("dependencies")
    @classmethod
    def _check_notation(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        for scope, notations in v.items():
            for notation in notations:
                try:
                    Dependency.parse(notation)
                except UserInputError as e:
                    raise ValueError(f"{scope}: {e}") from None
        return v

    @classmethod
    def load(cls, path: Path | str) -> BuildFile:
        path = Path(path)
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError as e:
            raise UserInputError(f"Invalid JSON in {path}: {e}") from e
        try:
            build = cls.model_validate(data)
        except ValidationError as e:
            messages = []
            for err in e.errors():
                loc = ".".join(str(part) for part in err["loc"])
                messages.append(f"{loc}: {err['msg']}")
            raise UserInputError(f"Invalid build file {path}: {'; '.join(messages)}") from e
        if build.project_dir is None:
            build.project_dir = str(path.resolve().parent)
        return build

    def create_project(self, extra_properties: dict[str, str] | None = None) -> Project:
        """Create the project model; plugin application is left to the caller."""
        properties = dict(self.properties)
        properties.update(extra_properties or {})
        project = Project(
            self.project_dir or ".",
            name=self.name,
            version=self.version,
            properties=properties,
        )
        if self.build_dir:
            project.build_dir = self.build_dir
        return project

    def declare_dependencies(self, project: Project) -> None:
        for scope_name, notations in self.dependencies.items():
            scope = project.configurations.get_or_create(scope_name)
            for notation in notations:
                scope.add(notation)


BUILD_FILE_TEMPLATE = {
    "name": "my-app",
    "version": "0.1",
    "grails_version": "2.4.4",
    "plugin_project": False,
    "dependencies": {
        "compile": ["org.example:example-lib:1.0"],
        "test": [],
    },
    "properties": {},
}
