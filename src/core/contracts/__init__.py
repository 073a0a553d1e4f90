"""
Contract Validation Module

Модуль для валидации JSON payload таблицы неттинга.
"""

from .validators import (
    ClaimGraphValidator,
    ContractValidator,
    CounterpartyClaimsValidator,
    NettingStatsValidator,
    SchemaLoader,
    validate_claim_graph,
    validate_counterparty_claims,
    validate_netting_stats,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ClaimGraphValidator",
    "NettingStatsValidator",
    "CounterpartyClaimsValidator",
    # Functions
    "validate_claim_graph",
    "validate_netting_stats",
    "validate_counterparty_claims",
]
