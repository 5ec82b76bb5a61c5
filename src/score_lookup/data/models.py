"""Core data models for Score Lookup."""

from dataclasses import dataclass, field
from enum import StrEnum


class Verdict(StrEnum):
    """Public-domain verdict for a single archive page."""

    YES = "yes"
    NO = "no"
    PARTIALLY = "partially"
    OPEN_LICENSE = "open_license"
    LIKELY_YES = "likely_yes"
    LIKELY_NO = "likely_no"
    DEPENDS_ON_COUNTRY = "depends_on_country"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        """Short human-readable label, e.g. ``IT DEPENDS``."""
        return _VERDICT_LABELS[self]


_VERDICT_LABELS: dict[Verdict, str] = {
    Verdict.YES: "YES",
    Verdict.NO: "NO",
    Verdict.PARTIALLY: "PARTIALLY",
    Verdict.OPEN_LICENSE: "OPEN LICENSE",
    Verdict.LIKELY_YES: "LIKELY YES",
    Verdict.LIKELY_NO: "LIKELY NO",
    Verdict.DEPENDS_ON_COUNTRY: "IT DEPENDS",
    Verdict.UNKNOWN: "UNKNOWN",
}


@dataclass(frozen=True)
class SearchQuery:
    """A search variant derived from the user's query."""

    text: str
    intent: str


@dataclass(frozen=True)
class ArchiveResult:
    """A page found in the score archive's search index."""

    title: str
    snippet: str = ""
    link: str = ""


@dataclass(frozen=True)
class ComposerDates:
    """Composer life span. ``birth`` may be unknown."""

    death: int
    birth: int | None = None


@dataclass(frozen=True)
class CopyrightFacts:
    """Copyright evidence extracted from an archive page.

    - ``statuses``: distinct copyright tag values in first-seen order.
    - ``composer_dates``: life span of the composer, if the page states one.
    """

    statuses: tuple[str, ...] = ()
    composer_dates: ComposerDates | None = None


@dataclass(frozen=True)
class CopyrightVerdict:
    """A verdict paired with the sentences explaining it."""

    verdict: Verdict
    rationale: tuple[str, ...]


@dataclass(frozen=True)
class CopyrightCheck:
    """Public-domain check outcome for one archive page."""

    title: str
    link: str
    verdict: Verdict
    rationale: tuple[str, ...]
    facts: CopyrightFacts = field(default_factory=CopyrightFacts)

    @property
    def summary(self) -> str:
        """Verdict label followed by the rationale, as a single paragraph."""
        return f"{self.verdict.label}. " + " ".join(self.rationale)


@dataclass(frozen=True)
class APICallUsage:
    """Usage from a single oracle call."""

    model: str
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass
class Usage:
    """Accumulated external usage across pipeline components."""

    api_calls: list[APICallUsage] = field(default_factory=list)
    archive_searches: int = 0
    page_fetches: int = 0

    @property
    def input_tokens(self) -> int:
        return sum(c.input_tokens for c in self.api_calls)

    @property
    def output_tokens(self) -> int:
        return sum(c.output_tokens for c in self.api_calls)

    def __add__(self, other: "Usage") -> "Usage":
        return Usage(
            api_calls=self.api_calls + other.api_calls,
            archive_searches=self.archive_searches + other.archive_searches,
            page_fetches=self.page_fetches + other.page_fetches,
        )

    def __iadd__(self, other: "Usage") -> "Usage":
        self.api_calls.extend(other.api_calls)
        self.archive_searches += other.archive_searches
        self.page_fetches += other.page_fetches
        return self
