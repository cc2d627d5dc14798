"""Plugin settings — constants with environment overrides."""

from __future__ import annotations

import os
from pathlib import Path

# Prefix that turns an arbitrary task name into a Grails command
GRAILS_TASK_PREFIX = os.environ.get("GRAILS_BUILD_TASK_PREFIX", "grails-")

# Project properties forwarded into synthesized tasks
GRAILS_ARGS_PROPERTY = "grailsArgs"
GRAILS_ENV_PROPERTY = "grailsEnv"

# Optional runtime-reload agent
SPRINGLOADED_COORDINATE = "org.springsource.springloaded:springloaded-core:{version}"
DEFAULT_SPRINGLOADED_VERSION = os.environ.get("GRAILS_BUILD_SPRINGLOADED_VERSION", "1.1.3")

# Relative to the project build dir
RESOURCES_DIR = Path("grails") / "resources"
LOG4J_TARGET = Path("scripts") / "log4j.properties"

DEFAULT_REPOSITORY = Path(
    os.environ.get("GRAILS_BUILD_REPOSITORY", str(Path.home() / ".m2" / "repository"))
)

UNSPECIFIED_VERSION = "unspecified"
