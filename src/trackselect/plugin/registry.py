"""Registry of selection mutators.

The registry tracks mutators in registration order and runs the enabled
ones over a selection result. One failing mutator never breaks selection:
its error is logged and the result it was given is passed on unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from trackselect.domain import SelectionResult
from trackselect.plugin.events import SelectionContext
from trackselect.plugin.interfaces import SelectionMutator

logger = logging.getLogger(__name__)


class MutatorSource(Enum):
    """Where a mutator came from."""

    ENTRY_POINT = "entry_point"
    MANUAL = "manual"


@dataclass
class LoadedMutator:
    """Runtime representation of a registered mutator."""

    instance: SelectionMutator
    source: MutatorSource = MutatorSource.MANUAL
    enabled: bool = True
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def name(self) -> str:
        """Mutator name from the instance."""
        return self.instance.name


class MutatorRegistry:
    """Ordered registry of selection mutators."""

    def __init__(self, entry_point_group: str = "trackselect.mutators") -> None:
        self._mutators: dict[str, LoadedMutator] = {}
        self._entry_point_group = entry_point_group

    @property
    def entry_point_group(self) -> str:
        """Entry point group name for mutator discovery."""
        return self._entry_point_group

    def __len__(self) -> int:
        return len(self._mutators)

    def register(
        self,
        mutator: SelectionMutator,
        source: MutatorSource = MutatorSource.MANUAL,
    ) -> LoadedMutator | None:
        """Register a mutator at the end of the chain.

        Args:
            mutator: Object implementing SelectionMutator.
            source: Where the mutator came from.

        Returns:
            The LoadedMutator, or None if the name was already taken.
        """
        if mutator.name in self._mutators:
            existing = self._mutators[mutator.name]
            logger.warning(
                "Mutator '%s' already registered (from %s). Skipping duplicate "
                "(from %s).",
                mutator.name,
                existing.source.value,
                source.value,
            )
            return None

        loaded = LoadedMutator(instance=mutator, source=source)
        self._mutators[mutator.name] = loaded
        logger.info("Registered mutator: %s (%s)", mutator.name, source.value)
        return loaded

    def unregister(self, name: str) -> bool:
        """Unregister a mutator by name.

        Returns:
            True if the mutator was unregistered, False if not found.
        """
        if name in self._mutators:
            del self._mutators[name]
            logger.info("Unregistered mutator: %s", name)
            return True
        return False

    def get(self, name: str) -> LoadedMutator | None:
        """Get a registered mutator by name."""
        return self._mutators.get(name)

    def get_all(self) -> list[LoadedMutator]:
        """Get all registered mutators in chain order."""
        return list(self._mutators.values())

    def get_enabled(self) -> list[LoadedMutator]:
        """Get enabled mutators in chain order."""
        return [m for m in self._mutators.values() if m.enabled]

    def enable(self, name: str) -> bool:
        """Enable a registered mutator.

        Returns:
            True if the mutator was enabled, False if not found.
        """
        mutator = self._mutators.get(name)
        if mutator is None:
            return False
        mutator.enabled = True
        logger.info("Enabled mutator: %s", name)
        return True

    def disable(self, name: str) -> bool:
        """Disable a registered mutator.

        Returns:
            True if the mutator was disabled, False if not found.
        """
        mutator = self._mutators.get(name)
        if mutator is None:
            return False
        mutator.enabled = False
        logger.info("Disabled mutator: %s", name)
        return True

    def clear(self) -> None:
        """Remove every registered mutator."""
        self._mutators.clear()
        logger.debug("Cleared all mutators from registry")

    def apply(
        self, context: SelectionContext, result: SelectionResult
    ) -> SelectionResult:
        """Run enabled mutators in order over a selection result.

        Each mutator sees the result left by the one before it. A mutator
        that raises, returns something other than a SelectionResult, or
        selects an "off" subtitle track is skipped and the result it was
        given is kept.

        Args:
            context: Selection context passed to every mutator.
            result: Result produced by the resolvers.

        Returns:
            The result after all mutators ran.
        """
        current = result
        for mutator in self.get_enabled():
            try:
                proposed = mutator.instance.mutate(context, current)
            except Exception as e:
                logger.error("Mutator %s failed: %s", mutator.name, e)
                logger.debug("Mutator %s traceback", mutator.name, exc_info=True)
                continue

            if proposed is None:
                continue
            if not isinstance(proposed, SelectionResult):
                logger.error(
                    "Mutator %s returned %s instead of a SelectionResult",
                    mutator.name,
                    type(proposed).__name__,
                )
                continue
            if proposed.subtitle is not None and proposed.subtitle.is_off:
                logger.error(
                    'Mutator %s selected subtitle track %s with language "off"; '
                    "ignoring its result",
                    mutator.name,
                    proposed.subtitle.id,
                )
                continue

            if proposed != current:
                logger.debug("Mutator %s changed selection: %s", mutator.name, proposed)
            current = proposed
        return current
