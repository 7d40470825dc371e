"""Matcher turning product evaluations into per-lender verdicts for a quote."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from app.core.enums import MatchStatus
from app.models.domain.lender import Lender, LoanProduct
from app.models.domain.quote import Quote
from app.services.rule_engine.base import DisqualificationReason
from app.services.rule_engine.engine import RuleEngine

logger = logging.getLogger(__name__)


@dataclass
class MatchVerdict:
    """
    Verdict for one candidate loan product.

    Attributes:
        lender: The lender owning the product
        loan_product_id: The evaluated product
        match_status: Qualified or disqualified
        disqualification_reasons: Reasons in rule order (empty when qualified)
    """

    lender: Lender
    loan_product_id: int
    match_status: MatchStatus
    disqualification_reasons: List[DisqualificationReason]

    @property
    def lender_id(self) -> int:
        return self.lender.id

    @property
    def is_qualified(self) -> bool:
        return self.match_status == MatchStatus.QUALIFIED

    def reasons_as_dicts(self) -> List[dict]:
        return [reason.to_dict() for reason in self.disqualification_reasons]


class Matcher:
    """
    Evaluates a quote against each candidate loan product independently.

    Products are evaluated in the order given; no product's outcome affects
    another's. Evaluation is pure: the caller loads the quote and products.
    """

    def __init__(self, rule_engine: Optional[RuleEngine] = None):
        self.rule_engine = rule_engine or RuleEngine()

    def match_quote_to_products(
        self,
        quote: Quote,
        products: Sequence[LoanProduct],
        now: Optional[datetime] = None,
    ) -> List[MatchVerdict]:
        """
        Evaluate every candidate product against the quote.

        Args:
            quote: Quote with applicant_info and loan_details loaded
            products: Candidate loan products with their lender loaded
            now: Evaluation time shared by all products

        Returns:
            One MatchVerdict per product, in input order
        """
        now = now or datetime.now(timezone.utc)
        verdicts = []

        for product in products:
            evaluation = self.rule_engine.evaluate_product(quote, product, now=now)
            verdicts.append(
                MatchVerdict(
                    lender=product.lender,
                    loan_product_id=product.id,
                    match_status=evaluation.match_status,
                    disqualification_reasons=evaluation.reasons,
                )
            )
            logger.debug(
                f"Quote {quote.id} vs loan product {product.id}: "
                f"{evaluation.match_status.value} ({len(evaluation.reasons)} reasons)"
            )

        return verdicts
