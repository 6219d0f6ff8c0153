"""Tests for graph validation."""

from seedgraph.errors import CircularDependency, MissingDependency
from seedgraph.model import DependencyGraph, SeedUnit
from seedgraph.validator import validate_graph


def _graph(*declarations):
    return DependencyGraph(SeedUnit(identifier, tuple(deps)) for identifier, deps in declarations)


class TestValidateGraph:
    """Tests for validate_graph."""

    def test_valid_graph(self):
        """Test a resolvable graph has no errors."""
        graph = _graph(("A", []), ("B", ["A"]), ("C", ["A"]), ("D", ["B", "C"]))
        assert validate_graph(graph) == []

    def test_empty_graph(self):
        """Test an empty graph is valid."""
        assert validate_graph(DependencyGraph()) == []

    def test_reports_every_missing_dependency(self):
        """Test all missing dependencies are collected, not just the first."""
        graph = _graph(("A", ["M1"]), ("B", ["A", "M2"]), ("C", ["M1"]))

        errors = validate_graph(graph)

        assert errors == [
            MissingDependency(unit="A", missing="M1"),
            MissingDependency(unit="B", missing="M2"),
            MissingDependency(unit="C", missing="M1"),
        ]

    def test_reports_cycle(self):
        """Test a cycle is reported as data."""
        errors = validate_graph(_graph(("X", ["Y"]), ("Y", ["X"])))

        assert errors == [CircularDependency(cycle=("X", "Y", "X"))]
        assert errors[0].kind == "circular_dependency"
        assert "X → Y → X" in errors[0].message

    def test_reports_self_reference(self):
        """Test a self-reference is reported as a one-node cycle."""
        errors = validate_graph(_graph(("S", ["S"])))
        assert errors == [CircularDependency(cycle=("S", "S"))]

    def test_reports_cycles_and_missing_together(self):
        """Test different kinds of problems are all reported."""
        graph = _graph(("X", ["Y"]), ("Y", ["X"]), ("Z", ["Nope"]))

        errors = validate_graph(graph)

        assert errors == [
            CircularDependency(cycle=("X", "Y", "X")),
            MissingDependency(unit="Z", missing="Nope"),
        ]

    def test_reports_separate_cycles(self):
        """Test two unrelated cycles are both reported."""
        graph = _graph(("A", ["B"]), ("B", ["A"]), ("C", ["D"]), ("D", ["C"]))

        errors = validate_graph(graph)

        assert [error.cycle for error in errors] == [("A", "B", "A"), ("C", "D", "C")]

    def test_missing_message(self):
        """Test the missing dependency message names both units."""
        error = validate_graph(_graph(("Z", ["Missing"])))[0]

        assert error.kind == "missing_dependency"
        assert "'Z'" in error.message
        assert "'Missing'" in error.message

    def test_repeatable(self):
        """Test validation does not change the graph or its result."""
        graph = _graph(("X", ["Y"]), ("Y", ["X"]), ("Z", ["Nope"]))

        first = validate_graph(graph)
        second = validate_graph(graph)

        assert first == second
        assert graph.identifiers == ["X", "Y", "Z"]
