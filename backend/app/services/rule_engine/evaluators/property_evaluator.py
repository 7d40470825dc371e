"""Property rule evaluator for seasoning period and rehab acceptance."""

from datetime import datetime, time, timedelta, timezone
from typing import List

from app.core.enums import DisqualificationField, RuleType
from app.services.rule_engine.base import (
    DisqualificationReason,
    EvaluationContext,
    RuleEvaluator,
)

# Seasoning uses a fixed 30-day month, not calendar months
SEASONING_MONTH = timedelta(days=30)


class PropertyEvaluator(RuleEvaluator):
    """
    Evaluator for property-related rules.

    Handles:
    - SEASONING_PERIOD: Minimum months owned since purchase
    - REHAB_LOANS: Whether the product accepts rehab funding
    """

    def evaluate(self, context: EvaluationContext) -> List[DisqualificationReason]:
        """
        Evaluate property rules against the evaluation context.

        Raises:
            ValueError: If rule type is not property-related
        """
        if context.rule_type == RuleType.SEASONING_PERIOD:
            return self._evaluate_seasoning_period(context)
        elif context.rule_type == RuleType.REHAB_LOANS:
            return self._evaluate_rehab_loans(context)
        else:
            raise ValueError(
                f"PropertyEvaluator cannot handle rule type: {context.rule_type.value}"
            )

    @staticmethod
    def months_since(purchase_date, now: datetime) -> int:
        """
        Whole 30-day months elapsed between purchase_date and now.

        Args:
            purchase_date: Date (or datetime) the property was bought
            now: Timezone-aware evaluation time

        Returns:
            floor((now - purchase_date) / 30 days)
        """
        if isinstance(purchase_date, datetime):
            purchased_at = purchase_date
        else:
            purchased_at = datetime.combine(purchase_date, time.min)
        if purchased_at.tzinfo is None:
            purchased_at = purchased_at.replace(tzinfo=timezone.utc)
        return (now - purchased_at) // SEASONING_MONTH

    def _evaluate_seasoning_period(
        self, context: EvaluationContext
    ) -> List[DisqualificationReason]:
        required_months = context.product.seasoning_period_months
        loan_details = context.loan_details
        purchase_date = loan_details.property_purchase_date if loan_details else None

        if required_months is None or purchase_date is None:
            return []

        months_since_purchase = self.months_since(purchase_date, context.now)
        if months_since_purchase < required_months:
            return [
                DisqualificationReason(
                    field=DisqualificationField.SEASONING_PERIOD,
                    reason="Property seasoning period requirement not met",
                    lender_value=f"{required_months} months",
                    quote_value=f"{months_since_purchase} months",
                )
            ]
        return []

    def _evaluate_rehab_loans(
        self, context: EvaluationContext
    ) -> List[DisqualificationReason]:
        loan_details = context.loan_details
        has_rehab_funds = bool(loan_details and loan_details.has_rehab_funds_requested)

        if has_rehab_funds and not context.product.accepts_rehab_loans:
            return [
                DisqualificationReason(
                    field=DisqualificationField.REHAB_LOANS,
                    reason="Lender does not accept rehab loans",
                    lender_value=False,
                    quote_value=True,
                )
            ]
        return []
