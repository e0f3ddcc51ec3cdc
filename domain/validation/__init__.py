"""
Validation pipeline for workout drafts.

Usage:
    from domain.validation import ValidationEngine, RuleConfig, DurationBounds

    engine = ValidationEngine(
        RuleConfig(
            duration_bounds={
                DocumentType.CONDITIONING: DurationBounds(min_seconds=600, max_seconds=5400)
            }
        )
    )
    result = await engine.validate(draft, players, teams, medical_lookup)
"""

from domain.validation.engine import ValidationEngine
from domain.validation.medical_compliance import (
    MedicalComplianceChecker,
    MedicalLookupFn,
    affected_player_ids,
    find_conflicts,
)
from domain.validation.rules import (
    VARIANT_RULES,
    DurationBounds,
    RuleConfig,
    VariantRules,
    check_structure,
)

__all__ = [
    "ValidationEngine",
    "MedicalComplianceChecker",
    "MedicalLookupFn",
    "affected_player_ids",
    "find_conflicts",
    "VARIANT_RULES",
    "DurationBounds",
    "RuleConfig",
    "VariantRules",
    "check_structure",
]
