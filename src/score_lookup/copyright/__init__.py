from score_lookup.copyright.extractor import (
    DATE_RULES,
    DateRule,
    extract_composer_dates,
    extract_copyright_facts,
    extract_statuses,
)
from score_lookup.copyright.verdict import decide_verdict

__all__ = [
    "DATE_RULES",
    "DateRule",
    "decide_verdict",
    "extract_composer_dates",
    "extract_copyright_facts",
    "extract_statuses",
]
