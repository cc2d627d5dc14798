"""Tests for DependencyScope / DependencyScopeGraph."""

from __future__ import annotations

import pytest

from grails_build.exceptions import CycleError
from grails_build.models.dependency import Dependency
from grails_build.scopes import DependencyScopeGraph
from grails_build.testing import FakeRepository


@pytest.fixture
def graph():
    g = DependencyScopeGraph()
    compile_ = g.get_or_create("compile")
    runtime = g.get_or_create("runtime")
    test = g.get_or_create("test")
    g.extend(runtime, compile_)
    g.extend(test, runtime)
    return g


class TestGetOrCreate:
    def test_idempotent(self):
        g = DependencyScopeGraph()
        first = g.get_or_create("compile")
        assert g.get_or_create("compile") is first
        assert [s.name for s in g] == ["compile"]

    def test_new_scope_is_empty(self):
        scope = DependencyScopeGraph().get_or_create("bootstrap")
        assert scope.is_empty
        assert scope.all_dependencies() == []

    def test_find_and_contains(self):
        g = DependencyScopeGraph()
        g.get_or_create("compile")
        assert "compile" in g
        assert g.find("missing") is None
        assert g["compile"].name == "compile"


class TestInheritance:
    def test_effective_sets_are_nested(self, graph):
        graph["compile"].add("a:compile-lib:1.0")
        graph["runtime"].add("a:runtime-lib:1.0")
        graph["test"].add("a:test-lib:1.0")

        compile_set = set(graph["compile"].all_dependencies())
        runtime_set = set(graph["runtime"].all_dependencies())
        test_set = set(graph["test"].all_dependencies())
        assert compile_set <= runtime_set <= test_set
        assert Dependency.parse("a:test-lib:1.0") not in runtime_set

    def test_late_declaration_visible_downstream(self, graph):
        test_before = graph["test"].all_dependencies()
        assert test_before == []
        graph["compile"].add("a:late:1.0")
        assert Dependency.parse("a:late:1.0") in graph["test"].all_dependencies()

    def test_own_declarations_come_first_without_duplicates(self, graph):
        graph["compile"].add("a:shared:1.0")
        graph["test"].add("a:shared:1.0")
        graph["test"].add("a:only-test:1.0")
        names = [d.name for d in graph["test"].all_dependencies()]
        assert names == ["shared", "only-test"]

    def test_is_empty_ignores_ancestors(self, graph):
        graph["compile"].add("a:b:1")
        assert graph["test"].is_empty

    def test_hierarchy_order(self, graph):
        assert [s.name for s in graph["test"].hierarchy()] == ["test", "runtime", "compile"]

    def test_diamond_visits_shared_ancestor_once(self):
        g = DependencyScopeGraph()
        base, left, right, leaf = (g.get_or_create(n) for n in ("base", "left", "right", "leaf"))
        g.extend(left, base)
        g.extend(right, base)
        g.extend(leaf, left)
        g.extend(leaf, right)
        assert [s.name for s in leaf.hierarchy()].count("base") == 1

    def test_extend_twice_is_noop(self, graph):
        graph.extend(graph["runtime"], graph["compile"])
        assert len(graph["runtime"].parents) == 1


class TestCycles:
    def test_direct_cycle_rejected(self, graph):
        with pytest.raises(CycleError) as exc:
            graph.extend(graph["compile"], graph["runtime"])
        assert exc.value.path == ["compile", "runtime", "compile"]

    def test_transitive_cycle_rejected(self, graph):
        with pytest.raises(CycleError) as exc:
            graph.extend(graph["compile"], graph["test"])
        assert exc.value.path == ["compile", "test", "runtime", "compile"]
        assert graph["compile"].parents == ()

    def test_self_edge_rejected(self):
        g = DependencyScopeGraph()
        scope = g.get_or_create("x")
        with pytest.raises(CycleError):
            g.extend(scope, scope)


class TestScopeMutation:
    def test_add_deduplicates(self):
        scope = DependencyScopeGraph().get_or_create("compile")
        scope.add("a:b:1.0")
        scope.add(Dependency("a", "b", "1.0"))
        assert len(scope.dependencies) == 1

    def test_remove_if(self):
        scope = DependencyScopeGraph().get_or_create("compile")
        scope.add("a:keep:1.0")
        scope.add("a:drop:1.0")
        removed = scope.remove_if(lambda d: d.name == "drop")
        assert [d.name for d in removed] == ["drop"]
        assert [d.name for d in scope.dependencies] == ["keep"]


class TestResolve:
    def test_resolve_passes_effective_set(self, graph):
        graph["compile"].add("a:one:1.0")
        graph["test"].add("a:two:1.0")
        repo = FakeRepository(root="/r")
        files = graph["test"].resolve(repo)
        assert [f.name for f in files] == ["two-1.0.jar", "one-1.0.jar"]
        assert repo.calls == [("test", ["a:two:1.0", "a:one:1.0"])]

    def test_resolve_lenient_reports_unresolved(self, graph):
        graph["compile"].add("a:missing:1.0")
        result = graph["runtime"].resolve_lenient(FakeRepository(unresolved={"a:missing"}))
        assert result.has_unresolved
        assert [str(d) for d in result.unresolved] == ["a:missing:1.0"]
