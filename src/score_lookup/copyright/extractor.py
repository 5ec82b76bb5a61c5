"""Extract copyright facts from archive page wikitext."""

import re
from collections.abc import Callable
from dataclasses import dataclass

from score_lookup.data import ComposerDates, CopyrightFacts

COPYRIGHT_FIELD = re.compile(r"Copyright[ \t]*=[ \t]*([^\n|}]*)", re.IGNORECASE)
DEATH_FIELD = re.compile(r"\bDeath[ \t]*=[ \t]*(\d{4})", re.IGNORECASE)
BORN_FIELD = re.compile(r"\bBorn[ \t]*=[ \t]*(\d{4})", re.IGNORECASE)
LIFESPAN = re.compile(r"\((\d{4})\s*[–-]\s*(\d{4})\)")


@dataclass(frozen=True)
class DateRule:
    """A composer-date pattern and the function turning its match into dates."""

    name: str
    pattern: re.Pattern[str]
    build: Callable[[re.Match[str], str], ComposerDates]


def _from_fields(match: re.Match[str], markup: str) -> ComposerDates:
    born = BORN_FIELD.search(markup)
    return ComposerDates(
        death=int(match.group(1)),
        birth=int(born.group(1)) if born else None,
    )


def _from_lifespan(match: re.Match[str], markup: str) -> ComposerDates:
    return ComposerDates(birth=int(match.group(1)), death=int(match.group(2)))


# Tried in order; the first rule whose pattern matches decides.
DATE_RULES: tuple[DateRule, ...] = (
    DateRule("death field", DEATH_FIELD, _from_fields),
    DateRule("life span", LIFESPAN, _from_lifespan),
)


def extract_statuses(markup: str) -> tuple[str, ...]:
    """Collect distinct ``Copyright =`` values in first-seen order."""
    statuses: dict[str, None] = {}
    for match in COPYRIGHT_FIELD.finditer(markup):
        value = match.group(1).strip()
        if value:
            statuses.setdefault(value, None)
    return tuple(statuses)


def extract_composer_dates(
    markup: str, rules: tuple[DateRule, ...] = DATE_RULES
) -> ComposerDates | None:
    """Return composer dates from the first matching rule, or None."""
    for rule in rules:
        match = rule.pattern.search(markup)
        if match is not None:
            return rule.build(match, markup)
    return None


def extract_copyright_facts(markup: str | None) -> CopyrightFacts:
    """Parse page markup into copyright facts.

    Missing markup means nothing is known and yields empty facts.
    """
    if not markup:
        return CopyrightFacts()
    return CopyrightFacts(
        statuses=extract_statuses(markup),
        composer_dates=extract_composer_dates(markup),
    )
