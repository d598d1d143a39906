"""Mutator discovery from Python entry points.

Third-party packages expose mutators under the ``trackselect.mutators``
entry point group. An entry point may name a mutator instance or a class
that can be instantiated without arguments.
"""

from __future__ import annotations

import logging
from importlib.metadata import entry_points
from typing import Any

from trackselect.plugin.exceptions import PluginLoadError, PluginValidationError
from trackselect.plugin.interfaces import SelectionMutator
from trackselect.plugin.registry import LoadedMutator, MutatorRegistry, MutatorSource

logger = logging.getLogger(__name__)


def discover_entry_point_mutators(
    entry_point_group: str = "trackselect.mutators",
) -> list[tuple[str, Any]]:
    """Discover mutators from Python entry points.

    Entry points that fail to import are logged and skipped.

    Returns:
        List of (entry point name, loaded object) tuples.
    """
    discovered: list[tuple[str, Any]] = []
    for ep in entry_points(group=entry_point_group):
        try:
            obj = ep.load()
        except Exception as e:
            logger.warning("Failed to load entry point '%s': %s", ep.name, e)
            continue
        discovered.append((ep.name, obj))
        logger.debug("Discovered entry point mutator: %s", ep.name)
    return discovered


def get_mutator_instance(name: str, obj: Any) -> Any:
    """Instantiate obj if it is a class, otherwise return it as is.

    Raises:
        PluginLoadError: If the class cannot be instantiated.
    """
    if not isinstance(obj, type):
        return obj
    try:
        return obj()
    except Exception as e:
        raise PluginLoadError(name, f"instantiation failed: {e}") from e


def validate_mutator(name: str, instance: Any) -> SelectionMutator:
    """Check that instance implements SelectionMutator.

    Raises:
        PluginValidationError: With every problem found.
    """
    errors: list[str] = []
    mutator_name = getattr(instance, "name", None)
    if not isinstance(mutator_name, str) or not mutator_name:
        errors.append("missing or empty 'name' attribute")
    if not callable(getattr(instance, "mutate", None)):
        errors.append("missing 'mutate' method")
    if errors:
        raise PluginValidationError(name, errors)
    return instance


def load_entry_point_mutators(registry: MutatorRegistry) -> list[LoadedMutator]:
    """Discover, validate and register entry point mutators.

    Broken mutators are logged and skipped so one bad package cannot keep
    the others from loading.

    Returns:
        The mutators that were registered.
    """
    loaded: list[LoadedMutator] = []
    for name, obj in discover_entry_point_mutators(registry.entry_point_group):
        try:
            mutator = validate_mutator(name, get_mutator_instance(name, obj))
        except (PluginLoadError, PluginValidationError) as e:
            logger.warning("%s", e)
            continue
        registered = registry.register(mutator, MutatorSource.ENTRY_POINT)
        if registered is not None:
            loaded.append(registered)
    return loaded
