"""Query expansion through an external text-generation oracle."""

import json
import logging

from score_lookup.data import SearchQuery, Usage
from score_lookup.errors import OracleUnavailableError
from score_lookup.oracle.base import TextOracle

logger = logging.getLogger(__name__)

ORACLE_INTENT = "oracle suggestion"

DEFAULT_INSTRUCTIONS = """\
You help people find sheet music on IMSLP (the Petrucci Music Library).

Given a user's search for a musical work or composer, produce 5 to 8 page \
titles in IMSLP's naming style that are likely to exist, most likely first. \
IMSLP work titles look like "Violin Sonata No.6, Op.27 (Ysaÿe, Eugène)" or \
"Piano Sonata No.14, Op.27 No.2 (Beethoven, Ludwig van)". Include shorter \
forms without the composer suffix as well.

Respond with a JSON array of strings and nothing else.\
"""


def parse_title_list(raw: str) -> list[str]:
    """Parse oracle output as a flat JSON list of strings.

    Markdown code fences around the JSON are stripped. Non-string items are
    dropped; anything that is not a JSON array yields an empty list.
    """
    text = raw.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        text = text.rsplit("```", 1)[0]

    try:
        items = json.loads(text)
    except json.JSONDecodeError:
        logger.warning("Oracle output is not valid JSON: %.100s", raw)
        return []
    if not isinstance(items, list):
        logger.warning("Oracle output is not a JSON array: %.100s", raw)
        return []
    return [item.strip() for item in items if isinstance(item, str) and item.strip()]


class OracleQueryGenerator:
    """Ask a text oracle for archive-style title variants.

    The oracle is treated as unreliable: missing credentials, transport
    errors and unparseable output all produce an empty variant list rather
    than an exception.

    Args:
        oracle: Text oracle to consult.
        instructions: System instructions sent with every query. If *None*,
            ``DEFAULT_INSTRUCTIONS`` is used.
    """

    def __init__(self, oracle: TextOracle, *, instructions: str | None = None) -> None:
        self._oracle = oracle
        self._instructions = instructions or DEFAULT_INSTRUCTIONS

    async def generate(self, query: str) -> tuple[list[SearchQuery], Usage]:
        if not query.strip():
            return ([], Usage())

        try:
            raw, usage = await self._oracle.complete(self._instructions, query)
        except OracleUnavailableError as e:
            logger.debug("Skipping oracle expansion: %s", e)
            return ([], Usage())
        except Exception as e:
            logger.warning("Oracle expansion failed. Error: %s", e)
            return ([], Usage())

        queries = [SearchQuery(text=title, intent=ORACLE_INTENT) for title in parse_title_list(raw)]
        return (queries, usage)
