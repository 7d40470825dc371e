"""Borrower rule evaluator for credit score and citizenship."""

from typing import List

from app.core.enums import DisqualificationField, RuleType
from app.services.rule_engine.base import (
    DisqualificationReason,
    EvaluationContext,
    RuleEvaluator,
)


class CreditEvaluator(RuleEvaluator):
    """
    Evaluator for borrower-related rules.

    Handles:
    - CREDIT_SCORE: Minimum credit score requirements
    - CITIZENSHIP: Accepted citizenship types
    """

    def evaluate(self, context: EvaluationContext) -> List[DisqualificationReason]:
        """
        Evaluate borrower rules against the evaluation context.

        Raises:
            ValueError: If rule type is not borrower-related
        """
        if context.rule_type == RuleType.CREDIT_SCORE:
            return self._evaluate_credit_score(context)
        elif context.rule_type == RuleType.CITIZENSHIP:
            return self._evaluate_citizenship(context)
        else:
            raise ValueError(
                f"CreditEvaluator cannot handle rule type: {context.rule_type.value}"
            )

    def _evaluate_credit_score(
        self, context: EvaluationContext
    ) -> List[DisqualificationReason]:
        """
        Evaluate minimum credit score requirement.

        Only fires when both the product minimum and the applicant's score
        are known.
        """
        min_score = context.product.min_credit_score
        applicant = context.applicant_info
        credit_score = applicant.credit_score if applicant else None

        if min_score is None or credit_score is None:
            return []

        if credit_score < min_score:
            return [
                DisqualificationReason(
                    field=DisqualificationField.CREDIT_SCORE,
                    reason="Credit score is below lender minimum",
                    lender_value=min_score,
                    quote_value=credit_score,
                )
            ]
        return []

    def _evaluate_citizenship(
        self, context: EvaluationContext
    ) -> List[DisqualificationReason]:
        """
        Evaluate citizenship against the product's accepted requirements.

        Passes when the applicant's citizenship contains any accepted
        requirement string, case-insensitively.
        """
        requirements = context.product.citizen_requirements or []
        applicant = context.applicant_info
        citizenship = applicant.citizenship if applicant else None

        if not requirements or not citizenship:
            return []

        normalized = citizenship.lower()
        if any(req.lower() in normalized for req in requirements):
            return []

        return [
            DisqualificationReason(
                field=DisqualificationField.CITIZENSHIP,
                reason="Citizenship type not accepted by lender",
                lender_value=list(requirements),
                quote_value=citizenship,
            )
        ]
