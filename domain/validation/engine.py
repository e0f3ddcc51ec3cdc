"""
Validation Engine - decides whether a draft is ready to persist.

Runs the staged pipeline:
1. Scalar rules (name, document type, date)
2. Assignment rule
3. Variant structural rules
4. Medical compliance (async, warnings only, needs a medical lookup)

Stages 1-3 are synchronous and produce errors. Stage 4 produces warnings and
never affects ``is_valid``.
"""

import logging
from typing import Iterable, Optional

from domain.models import PlayerRef, TeamRef, ValidationResult, WorkoutDraft
from domain.validation.medical_compliance import MedicalComplianceChecker, MedicalLookupFn
from domain.validation.rules import RuleConfig, check_structure

logger = logging.getLogger(__name__)


class ValidationEngine:
    """
    Stateless validator; the same inputs always give the same result.

    Usage:
        >>> engine = ValidationEngine(RuleConfig(min_interval_seconds=10))
        >>> result = engine.validate_structure(draft)
        >>> result = await engine.validate(draft, players, teams, medical_lookup)
        >>> if not result.is_valid:
        ...     print([e.code for e in result.errors])
    """

    def __init__(self, config: Optional[RuleConfig] = None) -> None:
        self._config = config or RuleConfig()

    @property
    def config(self) -> RuleConfig:
        return self._config

    def validate_structure(
        self, draft: WorkoutDraft, *, version: Optional[int] = None
    ) -> ValidationResult:
        """Run the synchronous stages only."""
        errors = check_structure(draft, self._config)
        return ValidationResult(errors=errors, warnings=[], draft_version=version)

    async def validate(
        self,
        draft: WorkoutDraft,
        players: Iterable[PlayerRef] = (),
        teams: Iterable[TeamRef] = (),
        medical_lookup: Optional[MedicalLookupFn] = None,
        *,
        version: Optional[int] = None,
    ) -> ValidationResult:
        """
        Run the full pipeline.

        Args:
            draft: Draft to validate
            players: Player directory, used for names in warnings
            teams: Team directory, used to expand team assignments
            medical_lookup: Optional async lookup; None skips stage 4
            version: Draft version to tag the result with

        Returns:
            ValidationResult with errors from stages 1-3 and warnings from stage 4
        """
        result = self.validate_structure(draft, version=version)

        if medical_lookup is not None:
            checker = MedicalComplianceChecker(
                medical_lookup,
                heart_rate_threshold=self._config.medical_heart_rate_threshold,
            )
            warnings = await checker.check(draft, list(players), list(teams))
            result = result.merge(ValidationResult(warnings=warnings))

        if not result.is_valid:
            logger.debug(
                "Draft validation failed (version %s): %s",
                version,
                [e.code.value for e in result.errors],
            )
        return result
