"""Custom exceptions for grails-build."""

from __future__ import annotations


class GrailsBuildError(Exception):
    """Base exception for all grails-build errors."""


class ConfigurationError(GrailsBuildError):
    """Raised when a required setting is missing at task-execution time."""


class UserInputError(GrailsBuildError):
    """Raised when the build script supplies missing or invalid input."""


class UnknownTaskError(GrailsBuildError):
    """Raised when a task name matches no declared task and no rule."""

    def __init__(self, name: str, rules: list[str] | None = None):
        self.name = name
        self.rules = rules or []
        message = f"Task '{name}' not found in project"
        if self.rules:
            message += f" (rules tried: {', '.join(self.rules)})"
        super().__init__(message)


class UnknownPropertyError(GrailsBuildError):
    """Raised when a convention property is read or mapped but not declared."""

    def __init__(self, owner: str, name: str):
        self.owner = owner
        self.name = name
        super().__init__(f"{owner} has no convention property '{name}'")


class CycleError(GrailsBuildError):
    """Raised when an edge would introduce a cycle (scopes or task dependencies)."""

    def __init__(self, path: list[str]):
        self.path = path
        super().__init__(f"Circular dependency: {' -> '.join(path)}")


class ResolutionError(GrailsBuildError):
    """Raised when dependencies cannot be resolved against the repository."""

    def __init__(self, scope: str, unresolved: list[str]):
        self.scope = scope
        self.unresolved = unresolved
        super().__init__(
            f"Could not resolve all dependencies for '{scope}': {', '.join(unresolved)}"
        )


class TaskExecutionError(GrailsBuildError):
    """Raised when the external command exits with a non-zero status."""

    def __init__(self, task: str, command: str, exit_code: int):
        self.task = task
        self.command = command
        self.exit_code = exit_code
        super().__init__(
            f"Task '{task}' failed: grails {command} exited with status {exit_code}"
        )
