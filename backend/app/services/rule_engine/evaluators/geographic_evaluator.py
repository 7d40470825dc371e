"""Geographic rule evaluator for lender state coverage."""

from typing import List

from app.core.enums import DisqualificationField, RuleType
from app.services.rule_engine.base import (
    DisqualificationReason,
    EvaluationContext,
    RuleEvaluator,
)


class GeographicEvaluator(RuleEvaluator):
    """
    Evaluator for geographic rules.

    Handles:
    - STATE: The property address must fall in a state the product funds

    The quote carries a free-text address, so the state is found by
    scanning its comma-separated segments rather than a dedicated field.
    """

    def evaluate(self, context: EvaluationContext) -> List[DisqualificationReason]:
        if context.rule_type != RuleType.STATE:
            raise ValueError(
                f"GeographicEvaluator cannot handle rule type: {context.rule_type.value}"
            )
        return self._evaluate_states_funded(context)

    def _evaluate_states_funded(
        self, context: EvaluationContext
    ) -> List[DisqualificationReason]:
        states_funded = context.product.states_funded or []
        address = context.quote.address

        if not states_funded or not address:
            return []

        address_parts = [part.strip().upper() for part in address.split(",")]
        normalized_states = [state.upper() for state in states_funded]

        state_match = any(
            state in part for part in address_parts for state in normalized_states
        )
        if state_match:
            return []

        return [
            DisqualificationReason(
                field=DisqualificationField.STATE,
                reason="Property state not serviced by lender",
                lender_value=list(states_funded),
                quote_value=address,
            )
        ]
