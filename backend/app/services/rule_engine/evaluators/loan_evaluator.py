"""Loan rule evaluator for loan amount bounds and loan-to-value ratio."""

from decimal import Decimal
from typing import List

from app.core.enums import DisqualificationField, RuleType
from app.services.rule_engine.base import (
    DisqualificationReason,
    EvaluationContext,
    RuleEvaluator,
)


class LoanEvaluator(RuleEvaluator):
    """
    Evaluator for loan-related rules.

    Handles:
    - LOAN_AMOUNT: Requested amount within the product's min/max bounds
    - LTV_RATIO: Requested amount over purchase price within the maximum LTV
    """

    def evaluate(self, context: EvaluationContext) -> List[DisqualificationReason]:
        """
        Evaluate loan-related rules against the evaluation context.

        Args:
            context: EvaluationContext for one quote and one loan product

        Returns:
            Disqualification reasons (empty when the rule passes)

        Raises:
            ValueError: If rule type is not loan-related
        """
        if context.rule_type == RuleType.LOAN_AMOUNT:
            return self._evaluate_loan_amount(context)
        elif context.rule_type == RuleType.LTV_RATIO:
            return self._evaluate_ltv_ratio(context)
        else:
            raise ValueError(
                f"LoanEvaluator cannot handle rule type: {context.rule_type.value}"
            )

    def _evaluate_loan_amount(
        self, context: EvaluationContext
    ) -> List[DisqualificationReason]:
        """
        Evaluate the requested amount against min_loan_amount and max_loan_amount.

        The minimum and maximum are independent checks and may each produce
        a reason. Missing loan details produce a single reason.
        """
        product = context.product
        loan_details = context.loan_details

        if loan_details is None or not loan_details.requested_loan_amount:
            return [
                DisqualificationReason(
                    field=DisqualificationField.LOAN_DETAILS,
                    reason="Quote is missing loan details required for matching",
                    lender_value="required",
                    quote_value="missing",
                )
            ]

        raw_amount = loan_details.requested_loan_amount
        requested_amount = self._parse_decimal(raw_amount)
        if requested_amount is None:
            return [
                DisqualificationReason(
                    field=DisqualificationField.LOAN_AMOUNT,
                    reason="Invalid loan amount format",
                    lender_value="valid number",
                    quote_value=raw_amount,
                )
            ]

        reasons = []
        if (
            product.min_loan_amount is not None
            and requested_amount < product.min_loan_amount
        ):
            reasons.append(
                DisqualificationReason(
                    field=DisqualificationField.LOAN_AMOUNT,
                    reason="Requested loan amount is below lender minimum",
                    lender_value=self._format_decimal(product.min_loan_amount),
                    quote_value=self._to_number(requested_amount),
                )
            )
        if (
            product.max_loan_amount is not None
            and requested_amount > product.max_loan_amount
        ):
            reasons.append(
                DisqualificationReason(
                    field=DisqualificationField.LOAN_AMOUNT,
                    reason="Requested loan amount exceeds lender maximum",
                    lender_value=self._format_decimal(product.max_loan_amount),
                    quote_value=self._to_number(requested_amount),
                )
            )
        return reasons

    def _evaluate_ltv_ratio(
        self, context: EvaluationContext
    ) -> List[DisqualificationReason]:
        """
        Evaluate loan-to-value: requested_loan_amount / purchase_price * 100.

        Skipped when the product sets no maximum, the purchase price is
        missing or zero, or the requested amount is unusable (already
        reported by the loan amount rule).
        """
        product = context.product
        loan_details = context.loan_details

        if product.max_ltv_percentage is None or loan_details is None:
            return []
        if not loan_details.purchase_price:
            return []

        purchase_price = self._parse_decimal(loan_details.purchase_price)
        if purchase_price is None:
            return [
                DisqualificationReason(
                    field=DisqualificationField.LTV_RATIO,
                    reason="Invalid purchase price format",
                    lender_value="valid number",
                    quote_value=loan_details.purchase_price,
                )
            ]
        if purchase_price == 0:
            return []

        loan_amount = self._parse_decimal(loan_details.requested_loan_amount)
        if loan_amount is None:
            return []

        ltv = loan_amount / purchase_price * Decimal("100")
        max_ltv = product.max_ltv_percentage
        if ltv > max_ltv:
            return [
                DisqualificationReason(
                    field=DisqualificationField.LTV_RATIO,
                    reason="Loan-to-value ratio exceeds lender maximum",
                    lender_value=f"{self._format_decimal(max_ltv)}%",
                    quote_value=f"{ltv:.2f}%",
                )
            ]
        return []
