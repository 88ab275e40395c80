"""Tests for the Action Registry."""

from __future__ import annotations

from typing import Iterable, List

import pytest

from auditcov.audit import (
    ActionProvider,
    ActionRegistry,
    StaticActionProvider,
    create_registry,
)


class GeneratorProvider:
    """Provider that yields actions lazily, like a plugin module would."""

    def __init__(self, actions: List[str]) -> None:
        self._actions = actions
        self.calls = 0

    def actions(self) -> Iterable[str]:
        self.calls += 1
        yield from self._actions


class FailingProvider:
    """Provider that cannot enumerate its actions."""

    def actions(self) -> Iterable[str]:
        raise RuntimeError("plugin not initialized")


class TestStaticActionProvider:
    """Tests for StaticActionProvider."""

    def test_satisfies_protocol(self) -> None:
        """Test the provider is recognized as an ActionProvider."""
        assert isinstance(StaticActionProvider(["a"]), ActionProvider)

    def test_duplicates_collapse(self) -> None:
        """Test the provider stores a set."""
        provider = StaticActionProvider(["a", "a", "b"])
        assert provider.actions() == frozenset({"a", "b"})


class TestActionRegistry:
    """Tests for ActionRegistry."""

    def test_union_of_providers(self) -> None:
        """Test overlapping contributions collapse into one set."""
        registry = ActionRegistry(
            [StaticActionProvider(["a", "b"]), StaticActionProvider(["b", "c"])]
        )
        assert registry.actions == frozenset({"a", "b", "c"})
        assert len(registry) == 3

    def test_no_providers_is_empty(self) -> None:
        """Test an empty registry when nothing is contributed."""
        assert len(ActionRegistry()) == 0
        assert len(ActionRegistry([])) == 0
        assert not ActionRegistry().contains("a")

    def test_contains_exact_match(self) -> None:
        """Test membership is exact and case-sensitive."""
        registry = ActionRegistry([StaticActionProvider(["stream:delete"])])
        assert registry.contains("stream:delete")
        assert "stream:delete" in registry
        assert not registry.contains("Stream:Delete")
        assert not registry.contains("stream:delete ")
        assert not registry.contains("stream")

    def test_providers_read_once(self) -> None:
        """Test providers are enumerated at construction only."""
        provider = GeneratorProvider(["a"])
        registry = ActionRegistry([provider])
        registry.contains("a")
        registry.contains("b")
        assert provider.calls == 1

    def test_generator_provider(self) -> None:
        """Test lazily yielded actions are collected."""
        registry = ActionRegistry([GeneratorProvider(["x", "y"])])
        assert list(registry) == ["x", "y"]

    def test_iteration_sorted(self) -> None:
        """Test iteration order is deterministic."""
        registry = ActionRegistry([StaticActionProvider(["c", "a", "b"])])
        assert list(registry) == ["a", "b", "c"]

    def test_actions_immutable(self) -> None:
        """Test the exposed set cannot be changed."""
        registry = ActionRegistry([StaticActionProvider(["a"])])
        with pytest.raises(AttributeError):
            registry.actions.add("b")  # type: ignore[attr-defined]

    def test_provider_failure_propagates(self) -> None:
        """Test a failing provider is the caller's error."""
        with pytest.raises(RuntimeError, match="plugin not initialized"):
            ActionRegistry([FailingProvider()])


class TestCreateRegistry:
    """Tests for create_registry factory."""

    def test_default_empty(self) -> None:
        """Test factory without providers."""
        assert len(create_registry()) == 0

    def test_with_providers(self) -> None:
        """Test factory with providers."""
        registry = create_registry([StaticActionProvider(["a"])])
        assert isinstance(registry, ActionRegistry)
        assert registry.contains("a")
