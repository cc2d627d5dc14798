"""Task-execution collaborator — run the Grails command line in a forked JVM."""

from __future__ import annotations

import os
import shlex
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

import structlog

from grails_build.exceptions import ConfigurationError

log = structlog.get_logger("grails_build.launcher")

SCRIPT_RUNNER_MAIN = "org.codehaus.groovy.grails.cli.GrailsScriptRunner"


@dataclass
class LaunchRequest:
    """Fully resolved inputs for one Grails command invocation."""

    command: str
    grails_version: str
    grails_home: Path
    project_dir: Path
    project_work_dir: Path
    args: list[str] = field(default_factory=list)
    env: str | None = None
    bootstrap_classpath: list[Path] = field(default_factory=list)
    provided_classpath: list[Path] = field(default_factory=list)
    compile_classpath: list[Path] = field(default_factory=list)
    runtime_classpath: list[Path] = field(default_factory=list)
    test_classpath: list[Path] = field(default_factory=list)
    springloaded: list[Path] | None = None  # None = reloading disabled

    @property
    def command_line(self) -> str:
        """``[env] command args`` as the script runner expects it."""
        parts = [self.env] if self.env else []
        parts.append(self.command)
        parts.extend(self.args)
        return " ".join(parts)


@runtime_checkable
class GrailsLauncher(Protocol):
    """Interface for anything that can execute a :class:`LaunchRequest`."""

    def launch(self, request: LaunchRequest) -> int: ...


def _join(paths: list[Path]) -> str:
    return os.pathsep.join(str(p) for p in paths)


class JavaProcessLauncher:
    """Launch ``GrailsScriptRunner`` with ``java`` via :mod:`subprocess`."""

    def __init__(self, java: str | None = None, jvm_args: list[str] | None = None) -> None:
        if java is None:
            java_home = os.environ.get("JAVA_HOME")
            java = str(Path(java_home) / "bin" / "java") if java_home else "java"
        self.java = java
        self.jvm_args = jvm_args or []

    def build_command(self, request: LaunchRequest) -> list[str]:
        cmd = [self.java, *self.jvm_args]
        if request.springloaded:
            cmd += [
                f"-javaagent:{request.springloaded[0]}",
                "-noverify",
                "-Dspringloaded=profile=grails",
            ]
        cmd += [
            f"-Dgrails.home={request.grails_home}",
            f"-Dbase.dir={request.project_dir}",
            f"-Dgrails.project.work.dir={request.project_work_dir}",
            f"-Dgrails.version={request.grails_version}",
            f"-Dgrails.build.classpath.provided={_join(request.provided_classpath)}",
            f"-Dgrails.build.classpath.compile={_join(request.compile_classpath)}",
            f"-Dgrails.build.classpath.runtime={_join(request.runtime_classpath)}",
            f"-Dgrails.build.classpath.test={_join(request.test_classpath)}",
            "-cp",
            _join(request.bootstrap_classpath),
            SCRIPT_RUNNER_MAIN,
            request.command_line,
        ]
        return cmd

    def launch(self, request: LaunchRequest) -> int:
        cmd = self.build_command(request)
        log.info("launcher.exec", command=request.command, cwd=str(request.project_dir))
        log.debug("launcher.command_line", argv=shlex.join(cmd))
        try:
            proc = subprocess.run(cmd, cwd=request.project_dir)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Java executable not found: {self.java}") from e
        return proc.returncode


class DryRunLauncher(JavaProcessLauncher):
    """Log the command line that would run instead of running it."""

    def __init__(self, java: str | None = None, jvm_args: list[str] | None = None) -> None:
        super().__init__(java, jvm_args)
        self.command_lines: list[list[str]] = []

    def launch(self, request: LaunchRequest) -> int:
        cmd = self.build_command(request)
        self.command_lines.append(cmd)
        log.info("launcher.dry_run", argv=shlex.join(cmd))
        return 0
