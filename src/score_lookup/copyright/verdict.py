"""Reduce copyright facts to a single public-domain verdict.

Two signals are combined:

1. Declared copyright tags on the archive page. These are authoritative when
   present and decide the verdict first.
2. Years since the composer's death. Terms run for life+50 or life+70
   depending on the country, so this signal only sets the verdict when the
   tags were inconclusive, but its rationale is always reported.

The current year is an explicit argument; verdicts change as years pass.
"""

import re

from score_lookup.data import CopyrightFacts, CopyrightVerdict, Verdict

LONGEST_TERM_YEARS = 70
SHORTEST_TERM_YEARS = 50

# "Non-PD", "Not PD", "Non public domain", ...
NEGATED_PUBLIC_DOMAIN = re.compile(r"\bno[nt][\s-]*(?:pd|public[\s-]+domain)\b", re.IGNORECASE)

# Searched only after negated spans are removed from the tag.
PUBLIC_DOMAIN_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bpublic[\s-]+domain\b", re.IGNORECASE),
    re.compile(r"\bpd\b", re.IGNORECASE),
)
NON_PUBLIC_DOMAIN_PATTERNS: tuple[re.Pattern[str], ...] = (
    NEGATED_PUBLIC_DOMAIN,
    re.compile(r"\b(?:under\s+copyright|copyrighted)\b", re.IGNORECASE),
    re.compile(r"\ball rights reserved\b", re.IGNORECASE),
)
CREATIVE_COMMONS_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bcreative\s+commons\b", re.IGNORECASE),
    re.compile(r"\bcc[\s-]?(?:by|0)\b", re.IGNORECASE),
)

EDITION_NOTE = (
    "Specific editions, arrangements and recordings carry their own copyright, "
    "so check the license of each file before use."
)


def _matches_any(statuses: tuple[str, ...], patterns: tuple[re.Pattern[str], ...]) -> bool:
    return any(p.search(status) for status in statuses for p in patterns)


def _tag_verdict(statuses: tuple[str, ...]) -> tuple[Verdict, str]:
    tags = ", ".join(statuses)
    affirmed = tuple(NEGATED_PUBLIC_DOMAIN.sub(" ", status) for status in statuses)
    public_domain = _matches_any(affirmed, PUBLIC_DOMAIN_PATTERNS)
    restricted = _matches_any(statuses, NON_PUBLIC_DOMAIN_PATTERNS)
    open_license = _matches_any(statuses, CREATIVE_COMMONS_PATTERNS)

    if public_domain and not restricted:
        return (Verdict.YES, f"The archive marks this work as public domain ({tags}).")
    if public_domain and restricted:
        return (
            Verdict.PARTIALLY,
            f"The archive lists both public-domain and restricted material for this work ({tags}).",
        )
    if open_license:
        return (
            Verdict.OPEN_LICENSE,
            f"The archive lists this work under a Creative Commons license ({tags}).",
        )
    if restricted:
        return (Verdict.NO, f"The archive marks this work as not public domain ({tags}).")
    if statuses:
        return (Verdict.UNKNOWN, f"The archive's copyright tags are inconclusive ({tags}).")
    return (Verdict.UNKNOWN, "The archive page declares no copyright status.")


def decide_verdict(facts: CopyrightFacts, *, current_year: int) -> CopyrightVerdict:
    """Combine tag and life-span evidence into a verdict with rationale.

    Args:
        facts: Facts extracted from the archive page.
        current_year: Calendar year to measure copyright terms against.

    Returns:
        The verdict and a non-empty list of rationale sentences.
    """
    verdict, tag_reason = _tag_verdict(facts.statuses)
    rationale = [tag_reason]

    dates = facts.composer_dates
    # A death year after current_year is a misread date range, not a signal.
    if dates is not None and dates.death <= current_year:
        years = current_year - dates.death
        if years > LONGEST_TERM_YEARS:
            rationale.append(
                f"The composer died in {dates.death}, more than {LONGEST_TERM_YEARS} years ago, "
                "so the work is public domain in most countries."
            )
            if verdict is Verdict.UNKNOWN:
                verdict = Verdict.LIKELY_YES
        elif years >= SHORTEST_TERM_YEARS:
            rationale.append(
                f"The composer died in {dates.death}, {years} years ago: public domain in "
                f"life+{SHORTEST_TERM_YEARS} countries such as Canada, China, Japan and New Zealand, "
                f"but not yet in life+{LONGEST_TERM_YEARS} countries such as the EU, UK and Australia."
            )
            if verdict is Verdict.UNKNOWN:
                verdict = Verdict.DEPENDS_ON_COUNTRY
        else:
            rationale.append(
                f"The composer died in {dates.death}, only {years} years ago, "
                "so the work is likely still under copyright."
            )
            if verdict is Verdict.UNKNOWN:
                verdict = Verdict.LIKELY_NO

    if verdict is Verdict.UNKNOWN:
        rationale.append(
            "There is not enough information to decide; verify the status manually."
        )
    rationale.append(EDITION_NOTE)
    return CopyrightVerdict(verdict=verdict, rationale=tuple(rationale))
