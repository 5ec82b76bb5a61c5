from score_lookup.oracle.base import TextOracle
from score_lookup.oracle.claude import ClaudeOracle

__all__ = [
    "ClaudeOracle",
    "TextOracle",
]
