from score_lookup.query.base import QueryGenerator
from score_lookup.query.oracle import DEFAULT_INSTRUCTIONS, OracleQueryGenerator
from score_lookup.query.rules import (
    VARIANT_RULES,
    WORK_TYPES,
    RuleBasedQueryGenerator,
    VariantRule,
    expand_query,
)

__all__ = [
    "DEFAULT_INSTRUCTIONS",
    "OracleQueryGenerator",
    "QueryGenerator",
    "RuleBasedQueryGenerator",
    "VARIANT_RULES",
    "VariantRule",
    "WORK_TYPES",
    "expand_query",
]
