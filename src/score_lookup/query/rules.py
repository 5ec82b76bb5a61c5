"""Rule-based query expansion toward archive title conventions.

Archive pages are titled like ``Violin Sonata No.6, Op.27 (Ysaÿe, Eugène)``,
while users type things like ``ysaye 6 sonata``. Each rule in
``VARIANT_RULES`` looks for one textual feature and, when present, proposes
extra spellings of the query. Rules are independent and additive: a rule that
does not match contributes nothing.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from score_lookup.data import SearchQuery, Usage

ORIGINAL_INTENT = "original query"

# Checked in order; the first work type found in the query wins.
WORK_TYPES: tuple[str, ...] = (
    "Sonata",
    "Symphony",
    "Concerto",
    "Quartet",
    "Trio",
    "Suite",
    "Prelude",
    "Etude",
    "Nocturne",
    "Ballade",
    "Waltz",
    "Mazurka",
    "Polonaise",
    "Rhapsody",
    "Fantasia",
    "Fugue",
    "Overture",
    "Serenade",
    "Impromptu",
    "Scherzo",
)

# Guesses paired with a bare composer name and number.
FALLBACK_WORK_TYPES: tuple[str, ...] = ("Sonata", "Symphony", "Concerto")

_OPUS = re.compile(r"\bop\.?\s*(\d+)", re.IGNORECASE)
_NUMBER_SIGN = re.compile(r"\bno\.?\s*(\d+)", re.IGNORECASE)
_NUMBER = re.compile(r"\d+")
_MULTI_TOKEN = re.compile(r"\S+\s+\S")
_CATALOG_TOKEN = re.compile(r"^(?:no|op|opus)\.?$", re.IGNORECASE)


@dataclass(frozen=True)
class VariantRule:
    """One expansion rule: when ``pattern`` matches, ``expand`` proposes variants."""

    name: str
    pattern: re.Pattern[str]
    expand: Callable[[str, re.Match[str]], list[str]]


def find_work_type(query: str) -> str | None:
    """Return the first entry of ``WORK_TYPES`` found in *query*, ignoring case."""
    lowered = query.lower()
    for work_type in WORK_TYPES:
        if work_type.lower() in lowered:
            return work_type
    return None


def _expand_opus(query: str, match: re.Match[str]) -> list[str]:
    return [_OPUS.sub(r"Op. \1", query), _OPUS.sub(r"Opus \1", query)]


def _expand_number_sign(query: str, match: re.Match[str]) -> list[str]:
    return [_NUMBER_SIGN.sub(r"No. \1", query), _NUMBER_SIGN.sub(r"No.\1", query)]


def _expand_composer_only(query: str, match: re.Match[str]) -> list[str]:
    return [query.split()[0]]


def _residual_composer(query: str, match: re.Match[str], work_type: str) -> str:
    """Strip the number and the work-type word, leaving the composer part."""
    text = query[: match.start()] + " " + query[match.end() :]
    text = re.sub(rf"\w*{re.escape(work_type)}\w*", " ", text, count=1, flags=re.IGNORECASE)
    return " ".join(t for t in text.split() if not _CATALOG_TOKEN.match(t))


def _expand_work_type(query: str, match: re.Match[str]) -> list[str]:
    work_type = find_work_type(query)
    if work_type is None:
        return []
    number = match.group(0)
    composer = _residual_composer(query, match, work_type)
    return [
        f"{work_type} No. {number} {composer}",
        f"{composer} {work_type} No. {number}",
        f"{composer} {work_type}",
    ]


def _expand_guessed_work_type(query: str, match: re.Match[str]) -> list[str]:
    if find_work_type(query) is not None:
        return []
    composer = next((t for t in query.split() if not t.isdigit()), None)
    if composer is None:
        return []
    number = match.group(0)
    return [f"{composer} {work_type} No. {number}" for work_type in FALLBACK_WORK_TYPES]


VARIANT_RULES: tuple[VariantRule, ...] = (
    VariantRule("opus normalization", _OPUS, _expand_opus),
    VariantRule("number normalization", _NUMBER_SIGN, _expand_number_sign),
    VariantRule("composer isolation", _MULTI_TOKEN, _expand_composer_only),
    VariantRule("work type reordering", _NUMBER, _expand_work_type),
    VariantRule("work type guess", _NUMBER, _expand_guessed_work_type),
)


def expand_query(
    query: str, rules: tuple[VariantRule, ...] = VARIANT_RULES
) -> list[SearchQuery]:
    """Expand *query* into de-duplicated title variants.

    The original query is always the first variant. Blank input yields an
    empty list.

    Args:
        query: Raw user query.
        rules: Expansion rules to apply, in order.

    Returns:
        Variants in rule order, unique by text.
    """
    if not query.strip():
        return []

    variants = [SearchQuery(text=query, intent=ORIGINAL_INTENT)]
    seen = {query}
    for rule in rules:
        match = rule.pattern.search(query)
        if match is None:
            continue
        for candidate in rule.expand(query, match):
            text = " ".join(candidate.split())
            if text and text not in seen:
                seen.add(text)
                variants.append(SearchQuery(text=text, intent=rule.name))
    return variants


class RuleBasedQueryGenerator:
    """Query generator backed by the deterministic ``VARIANT_RULES`` table.

    No API calls are made, so usage is always empty.

    Args:
        rules: Expansion rules (defaults to ``VARIANT_RULES``).
    """

    def __init__(self, rules: tuple[VariantRule, ...] = VARIANT_RULES) -> None:
        self._rules = rules

    async def generate(self, query: str) -> tuple[list[SearchQuery], Usage]:
        return (expand_query(query, self._rules), Usage())
