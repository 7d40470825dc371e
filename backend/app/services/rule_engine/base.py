"""Rule engine foundation with evaluation context, reasons, and base evaluator."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Union

from app.core.enums import DisqualificationField, RuleType
from app.models.domain.lender import LoanProduct
from app.models.domain.quote import Quote, QuoteApplicantInfo, QuoteLoanDetails

# Amounts with a decimal exponent beyond this are treated as malformed.
MAX_DECIMAL_EXPONENT = 15


@dataclass
class DisqualificationReason:
    """
    Why a loan product rejected a quote.

    Attributes:
        field: The quote field that failed the check
        reason: Human-readable explanation
        lender_value: The lender's requirement
        quote_value: The value found on the quote
    """

    field: DisqualificationField
    reason: str
    lender_value: Any
    quote_value: Any

    def to_dict(self) -> dict:
        """Serialize with the camelCase value keys clients expect."""
        return {
            "field": self.field.value,
            "reason": self.reason,
            "lenderValue": self.lender_value,
            "quoteValue": self.quote_value,
        }


@dataclass
class EvaluationContext:
    """
    Snapshot of everything a rule needs to evaluate one loan product.

    Attributes:
        quote: The quote being matched
        applicant_info: Applicant sub-record (may be missing)
        loan_details: Loan details sub-record (may be missing)
        product: The candidate loan product
        rule_type: The rule currently being evaluated
        now: Evaluation time, used for seasoning calculations
    """

    quote: Quote
    applicant_info: Optional[QuoteApplicantInfo]
    loan_details: Optional[QuoteLoanDetails]
    product: LoanProduct
    rule_type: RuleType
    now: datetime


class RuleEvaluator(ABC):
    """
    Abstract base class for rule evaluators using the Strategy pattern.

    Each concrete evaluator handles one family of rule types and returns the
    disqualification reasons it found. An empty list means the rule passed.
    Data-quality problems are reported as reasons, never raised.
    """

    @abstractmethod
    def evaluate(self, context: EvaluationContext) -> List[DisqualificationReason]:
        """
        Evaluate a rule against the provided context.

        Args:
            context: EvaluationContext for one quote and one loan product

        Returns:
            Disqualification reasons (empty when the rule passes)

        Raises:
            ValueError: If the evaluator does not handle context.rule_type
        """
        pass

    @staticmethod
    def _parse_decimal(value: Optional[str]) -> Optional[Decimal]:
        """
        Parse a decimal string transported from the client.

        Returns:
            The finite Decimal value, or None if the value is missing,
            malformed, NaN, infinite or of absurd magnitude
        """
        if value is None:
            return None
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation:
            return None
        if not parsed.is_finite():
            return None
        if abs(parsed.adjusted()) > MAX_DECIMAL_EXPONENT:
            return None
        return parsed

    @staticmethod
    def _format_decimal(value: Decimal) -> str:
        """Render a Decimal without trailing zeros or exponent notation."""
        normalized = value.normalize()
        return format(normalized, "f")

    @staticmethod
    def _to_number(value: Decimal) -> Union[int, float]:
        """Convert a Decimal to a JSON-friendly number, keeping integers whole."""
        if value == value.to_integral_value():
            return int(value)
        return float(value)
