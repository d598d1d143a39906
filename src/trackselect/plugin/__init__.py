"""Plugin system for Track Select.

Selection mutators adjust the result of track selection after the
resolvers have run. They are registered in a MutatorRegistry, either
directly or from the ``trackselect.mutators`` entry point group.
"""

from trackselect.plugin.events import SelectionContext
from trackselect.plugin.exceptions import (
    PluginError,
    PluginLoadError,
    PluginValidationError,
)
from trackselect.plugin.interfaces import SelectionMutator
from trackselect.plugin.loader import (
    discover_entry_point_mutators,
    get_mutator_instance,
    load_entry_point_mutators,
    validate_mutator,
)
from trackselect.plugin.registry import LoadedMutator, MutatorRegistry, MutatorSource

__all__ = [
    # Context
    "SelectionContext",
    # Exceptions
    "PluginError",
    "PluginLoadError",
    "PluginValidationError",
    # Interfaces
    "SelectionMutator",
    # Loader
    "discover_entry_point_mutators",
    "get_mutator_instance",
    "load_entry_point_mutators",
    "validate_mutator",
    # Registry
    "LoadedMutator",
    "MutatorRegistry",
    "MutatorSource",
]
