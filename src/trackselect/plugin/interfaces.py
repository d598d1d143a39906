"""Plugin interface protocols.

A selection mutator gets the final say on a selection after the resolvers
have run. Typical uses are host policies the resolvers know nothing about,
such as dropping subtitles for a renderer that cannot display them.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from trackselect.domain import SelectionResult
from trackselect.plugin.events import SelectionContext


@runtime_checkable
class SelectionMutator(Protocol):
    """Protocol for plugins that adjust a selection result.

    Required attributes (can be class attributes or properties):
        name: str - Unique plugin identifier
    """

    name: str

    def mutate(
        self, context: SelectionContext, result: SelectionResult
    ) -> SelectionResult | None:
        """Return a replacement result, or None to keep the current one.

        Args:
            context: What is being resolved and with which configuration.
            result: Selection produced by the resolvers and earlier mutators.

        Returns:
            A new SelectionResult, or None for no change. A result whose
            subtitle has language "off" is rejected.
        """
        ...
