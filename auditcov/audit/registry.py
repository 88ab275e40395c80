"""Action Registry.

The set of audit action identifiers that downstream consumers recognize.
Plugins contribute actions through ActionProvider objects; the registry
flattens all contributions once at construction and is read-only after
that, so any number of verifications can share it.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, Iterator, Optional, Protocol, runtime_checkable

from auditcov.core.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class ActionProvider(Protocol):
    """A plugin contribution of audit action identifiers."""

    def actions(self) -> Iterable[str]:
        """Return the action identifiers this provider registers."""
        ...


class StaticActionProvider:
    """ActionProvider over a fixed collection of identifiers."""

    def __init__(self, actions: Iterable[str], source: str = "static") -> None:
        self._actions = frozenset(actions)
        self.source = source

    def actions(self) -> FrozenSet[str]:
        return self._actions

    def __repr__(self) -> str:
        return f"StaticActionProvider(source={self.source!r}, actions={len(self._actions)})"


class ActionRegistry:
    """Immutable union of all provider contributions.

    Membership is exact and case-sensitive.
    """

    def __init__(self, providers: Optional[Iterable[ActionProvider]] = None) -> None:
        collected = set()
        provider_count = 0
        for provider in providers or ():
            collected.update(provider.actions())
            provider_count += 1

        self._actions: FrozenSet[str] = frozenset(collected)
        logger.debug(
            "Built audit action registry",
            providers=provider_count,
            actions=len(self._actions),
        )

    @property
    def actions(self) -> FrozenSet[str]:
        """All registered action identifiers."""
        return self._actions

    def contains(self, action_id: str) -> bool:
        """Check whether an action identifier is registered."""
        return action_id in self._actions

    def __contains__(self, action_id: object) -> bool:
        return action_id in self._actions

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._actions))

    def __repr__(self) -> str:
        return f"ActionRegistry(actions={len(self._actions)})"


def create_registry(
    providers: Optional[Iterable[ActionProvider]] = None,
) -> ActionRegistry:
    """Factory function to create an action registry.

    Args:
        providers: Action providers to flatten. None yields an empty registry.

    Returns:
        ActionRegistry instance.
    """
    return ActionRegistry(providers)
