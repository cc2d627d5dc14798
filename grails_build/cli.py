"""CLI entry point: grails-build.

Subcommands:
    grails-build create-build -o build.json        # Generate build file template
    grails-build tasks build.json                  # List tasks and task rules
    grails-build run build.json grails-run-app     # Run tasks (dynamic names included)
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from grails_build.build_file import BUILD_FILE_TEMPLATE, BuildFile
from grails_build.core.config import DEFAULT_REPOSITORY
from grails_build.core.logging import setup_logging
from grails_build.exceptions import GrailsBuildError
from grails_build.launcher import DryRunLauncher, JavaProcessLauncher
from grails_build.plugin import GrailsPlugin
from grails_build.project import Project
from grails_build.repository import MavenLocalRepository


def _parse_properties(values: tuple[str, ...]) -> dict[str, str]:
    """Parse ``-P key=value`` options; a bare ``key`` maps to an empty string."""
    props: dict[str, str] = {}
    for item in values:
        key, _, value = item.partition("=")
        key = key.strip()
        if not key:
            raise click.BadParameter(f"invalid project property: {item!r}", param_hint="-P")
        props[key] = value
    return props


def load_project(
    build: BuildFile,
    properties: dict[str, str] | None = None,
    plugin: GrailsPlugin | None = None,
) -> Project:
    """Build the project model described by *build* and apply the plugin."""
    project = build.create_project(properties)
    plugin = plugin or GrailsPlugin(plugin_project=build.plugin_project)
    project.plugins.apply(plugin)
    build.declare_dependencies(project)
    grails = project.extensions.get("grails")
    if build.springloaded_version:
        grails.springloaded_version = build.springloaded_version
    if build.grails_version:
        grails.grails_version = build.grails_version
    return project


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """grails-build: run Grails commands from a build file."""
    setup_logging(verbose)


@main.command("create-build")
@click.option("-o", "--output", default="build.json", help="Output file path")
def create_build(output: str) -> None:
    """Generate a build file template."""
    Path(output).write_text(json.dumps(BUILD_FILE_TEMPLATE, indent=2) + "\n")
    click.echo(f"Build file template written to {output}")
    click.echo("Edit the file, then run: grails-build run " + output + " init")


@main.command("tasks")
@click.argument("build_file", type=click.Path(exists=True, dir_okay=False))
def list_tasks(build_file: str) -> None:
    """List declared tasks and task rules."""
    try:
        project = load_project(BuildFile.load(build_file))
    except GrailsBuildError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo("Tasks:")
    for name in project.tasks.names:
        task = project.tasks.find_by_name(name)
        command = getattr(task, "command", None)
        detail = f"grails {command}" if command else task.description
        click.echo(f"  {name:24s} {detail}")
    click.echo("\nRules:")
    for rule in project.tasks.rules:
        click.echo(f"  {rule}")


@main.command("run")
@click.argument("build_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("task_names", nargs=-1, required=True)
@click.option("-P", "properties", multiple=True, help="Project property key=value")
@click.option(
    "--repository",
    type=click.Path(file_okay=False),
    default=str(DEFAULT_REPOSITORY),
    show_default=True,
    help="Local Maven repository root",
)
@click.option("--java", default=None, help="java executable (default: $JAVA_HOME/bin/java)")
@click.option("--dry-run", is_flag=True, help="Print Grails command lines instead of running them")
def run(
    build_file: str,
    task_names: tuple[str, ...],
    properties: tuple[str, ...],
    repository: str,
    java: str | None,
    dry_run: bool,
) -> None:
    """Run TASK_NAMES (and their dependencies) from BUILD_FILE."""
    props = _parse_properties(properties)
    launcher = DryRunLauncher(java) if dry_run else JavaProcessLauncher(java)

    try:
        build = BuildFile.load(build_file)
        plugin = GrailsPlugin(
            MavenLocalRepository(repository),
            launcher,
            plugin_project=build.plugin_project,
        )
        project = load_project(build, props, plugin)
        executed = project.tasks.run(task_names)
    except GrailsBuildError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for task in executed:
        status = "SKIPPED" if task.skipped else "OK"
        click.echo(f"  [{status}] {task.name}")
    if dry_run:
        for argv in launcher.command_lines:
            click.echo(" ".join(argv))


if __name__ == "__main__":
    main()
