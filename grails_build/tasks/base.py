"""Minimal task model and task container with name rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, TypeVar

import structlog

from grails_build.conventions import ConventionAware
from grails_build.exceptions import CycleError, UnknownTaskError, UserInputError

if TYPE_CHECKING:
    from grails_build.project import Project

log = structlog.get_logger("grails_build.tasks")

T = TypeVar("T", bound="Task")
TaskAction = Callable[["Task"], None]


class Task(ConventionAware):
    """A named unit of work with ordered actions and dependencies."""

    def __init__(self, name: str, project: Project) -> None:
        super().__init__()
        self.name = name
        self.project = project
        self.description = ""
        self._dependencies: list[Any] = []
        self._first_actions: list[TaskAction] = []
        self._last_actions: list[TaskAction] = []
        self._only_if: list[Callable[[Task], bool]] = []
        self.executed = False
        self.skipped = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def depends_on(self, *dependencies: Any) -> None:
        """Add dependencies: tasks or task names."""
        self._dependencies.extend(dependencies)

    @property
    def dependencies(self) -> list[Any]:
        return list(self._dependencies)

    def do_first(self, action: TaskAction) -> None:
        self._first_actions.append(action)

    def do_last(self, action: TaskAction) -> None:
        self._last_actions.append(action)

    def only_if(self, predicate: Callable[[Task], bool]) -> None:
        self._only_if.append(predicate)

    def run(self) -> None:
        """The task's own action; subclasses override."""

    def execute(self) -> None:
        if not all(predicate(self) for predicate in self._only_if):
            log.info("task.skipped", task=self.name)
            self.skipped = True
            return
        log.info("task.started", task=self.name)
        # Later do_first actions run before earlier ones
        for action in reversed(self._first_actions):
            action(self)
        self.run()
        for action in self._last_actions:
            action(self)
        self.executed = True


TaskRule = Callable[[str], None]


@dataclass
class _Rule:
    description: str
    apply: TaskRule


class TaskContainer:
    """Project task registry.

    Lookup by name is two-step: exact name first, then every registered rule
    in order. A rule may create the requested task; if none does, the lookup
    fails with :class:`UnknownTaskError`.
    """

    def __init__(self, project: Project) -> None:
        self._project = project
        self._tasks: dict[str, Task] = {}
        self._rules: list[_Rule] = []
        self._type_actions: list[tuple[type[Task], Callable[[Any], None]]] = []

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def names(self) -> list[str]:
        return sorted(self._tasks)

    @property
    def rules(self) -> list[str]:
        return [r.description for r in self._rules]

    def create(
        self,
        name: str,
        task_type: type[T] = Task,  # type: ignore[assignment]
        *,
        overwrite: bool = False,
        configure: Callable[[T], None] | None = None,
    ) -> T:
        if name in self._tasks and not overwrite:
            raise UserInputError(f"Cannot add task '{name}' as a task with that name already exists")
        task = task_type(name, self._project)
        self._tasks[name] = task
        # Type-wide actions run before the task's own configuration
        for wanted, action in self._type_actions:
            if isinstance(task, wanted):
                action(task)
        if configure is not None:
            configure(task)
        log.debug("task.created", task=name, type=task_type.__name__)
        return task

    def with_type(self, task_type: type[T], action: Callable[[T], None]) -> None:
        """Apply *action* to every existing and future task of *task_type*."""
        self._type_actions.append((task_type, action))
        for task in list(self._tasks.values()):
            if isinstance(task, task_type):
                action(task)

    def add_rule(self, description: str, rule: TaskRule) -> None:
        self._rules.append(_Rule(description, rule))

    def find_by_name(self, name: str) -> Task | None:
        return self._tasks.get(name)

    def get_by_name(self, name: str) -> Task:
        task = self._tasks.get(name)
        if task is not None:
            return task
        for rule in self._rules:
            rule.apply(name)
            task = self._tasks.get(name)
            if task is not None:
                log.debug("task.rule_matched", task=name, rule=rule.description)
                return task
        raise UnknownTaskError(name, self.rules)

    def _dependency_task(self, dependency: Any) -> Task:
        if isinstance(dependency, Task):
            return dependency
        if isinstance(dependency, str):
            return self.get_by_name(dependency)
        raise UserInputError(f"Cannot convert {dependency!r} to a task dependency")

    def execution_order(self, names: Iterable[str]) -> list[Task]:
        """Return requested tasks and their dependencies, dependencies first."""
        ordered: list[Task] = []
        done: set[str] = set()
        visiting: list[str] = []

        def visit(task: Task) -> None:
            if task.name in done:
                return
            if task.name in visiting:
                start = visiting.index(task.name)
                raise CycleError(visiting[start:] + [task.name])
            visiting.append(task.name)
            for dep in task.dependencies:
                visit(self._dependency_task(dep))
            visiting.pop()
            done.add(task.name)
            ordered.append(task)

        for name in names:
            visit(self.get_by_name(name))
        return ordered

    def run(self, names: Iterable[str]) -> list[Task]:
        plan = self.execution_order(names)
        for task in plan:
            task.execute()
        return plan
