"""Rule engine orchestrator for evaluating a quote against one loan product."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from app.core.enums import MatchStatus, RuleType
from app.models.domain.lender import LoanProduct
from app.models.domain.quote import Quote
from app.services.rule_engine.base import (
    DisqualificationReason,
    EvaluationContext,
    RuleEvaluator,
)
from app.services.rule_engine.evaluators import (
    CreditEvaluator,
    GeographicEvaluator,
    LoanEvaluator,
    PropertyEvaluator,
)


@dataclass
class ProductEvaluationResult:
    """
    Result of evaluating every rule for one loan product.

    Attributes:
        product: The loan product evaluated
        reasons: Disqualification reasons in rule order
    """

    product: LoanProduct
    reasons: List[DisqualificationReason] = field(default_factory=list)

    @property
    def match_status(self) -> MatchStatus:
        """Disqualified if and only if any reason was recorded."""
        if self.reasons:
            return MatchStatus.DISQUALIFIED
        return MatchStatus.QUALIFIED

    @property
    def is_qualified(self) -> bool:
        return self.match_status == MatchStatus.QUALIFIED


class RuleEngine:
    """
    Rule engine orchestrator for loan product eligibility.

    This class:
    - Maintains an ordered registry of rule evaluators
    - Runs every rule for a product without short-circuiting
    - Accumulates disqualification reasons in rule order
    """

    def __init__(self):
        """Initialize the rule engine with evaluator registry."""
        self._evaluators: Dict[RuleType, RuleEvaluator] = {}
        self._register_default_evaluators()

    def _register_default_evaluators(self):
        """Register default evaluators for all rule types."""
        loan_evaluator = LoanEvaluator()
        credit_evaluator = CreditEvaluator()
        geographic_evaluator = GeographicEvaluator()
        property_evaluator = PropertyEvaluator()

        self._evaluators[RuleType.LOAN_AMOUNT] = loan_evaluator
        self._evaluators[RuleType.CREDIT_SCORE] = credit_evaluator
        self._evaluators[RuleType.CITIZENSHIP] = credit_evaluator
        self._evaluators[RuleType.STATE] = geographic_evaluator
        self._evaluators[RuleType.SEASONING_PERIOD] = property_evaluator
        self._evaluators[RuleType.REHAB_LOANS] = property_evaluator
        self._evaluators[RuleType.LTV_RATIO] = loan_evaluator

    def register_evaluator(
        self, rule_type: RuleType, evaluator: RuleEvaluator
    ) -> None:
        """
        Replace the evaluator for a specific rule type.

        Args:
            rule_type: The rule type to handle
            evaluator: The evaluator instance
        """
        self._evaluators[rule_type] = evaluator

    def evaluate_product(
        self,
        quote: Quote,
        product: LoanProduct,
        now: Optional[datetime] = None,
    ) -> ProductEvaluationResult:
        """
        Evaluate all rules for a loan product against a quote.

        Args:
            quote: Quote with applicant_info and loan_details loaded
            product: Candidate loan product
            now: Evaluation time (defaults to the current UTC time)

        Returns:
            ProductEvaluationResult with every reason found
        """
        now = now or datetime.now(timezone.utc)
        result = ProductEvaluationResult(product=product)

        # Rules run in RuleType declaration order
        for rule_type in RuleType:
            evaluator = self._evaluators.get(rule_type)
            if evaluator is None:
                continue

            context = EvaluationContext(
                quote=quote,
                applicant_info=quote.applicant_info,
                loan_details=quote.loan_details,
                product=product,
                rule_type=rule_type,
                now=now,
            )
            result.reasons.extend(evaluator.evaluate(context))

        return result
