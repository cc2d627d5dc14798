"""Dependency coordinate model."""

from __future__ import annotations

import re
from dataclasses import dataclass

from grails_build.exceptions import UserInputError

# group:name:version[:classifier][@ext]
_NOTATION_RE = re.compile(
    r"^([A-Za-z0-9._-]+)"  # group
    r":([A-Za-z0-9._-]+)"  # name
    r"(?::([A-Za-z0-9._+\-]+))?"  # optional version
    r"(?::([A-Za-z0-9._-]+))?"  # optional classifier
    r"(?:@([A-Za-z0-9]+))?$"  # optional extension
)


@dataclass(frozen=True)
class Dependency:
    """A single external module dependency declaration."""

    group: str
    name: str
    version: str | None = None
    classifier: str | None = None
    ext: str = "jar"

    @classmethod
    def parse(cls, notation: str) -> Dependency:
        """Parse ``group:name:version[:classifier][@ext]`` notation."""
        m = _NOTATION_RE.match(notation.strip())
        if not m:
            raise UserInputError(f"Invalid dependency notation: {notation!r}")
        group, name, version, classifier, ext = m.groups()
        return cls(
            group=group,
            name=name,
            version=version,
            classifier=classifier,
            ext=ext or "jar",
        )

    @property
    def module_id(self) -> str:
        return f"{self.group}:{self.name}"

    @property
    def file_name(self) -> str:
        suffix = f"-{self.classifier}" if self.classifier else ""
        version = f"-{self.version}" if self.version else ""
        return f"{self.name}{version}{suffix}.{self.ext}"

    def __str__(self) -> str:
        parts = [self.group, self.name]
        if self.version:
            parts.append(self.version)
        if self.classifier:
            parts.append(self.classifier)
        notation = ":".join(parts)
        if self.ext != "jar":
            notation += f"@{self.ext}"
        return notation
