from typing import Protocol

from score_lookup.data import Usage


class TextOracle(Protocol):
    """Interface for a best-effort text-generation service."""

    async def complete(self, instructions: str, query: str) -> tuple[str, Usage]:
        """Return the raw generated text for *query* under *instructions*.

        Implementations may raise on missing credentials or transport errors;
        callers are expected to degrade gracefully.
        """
        ...
