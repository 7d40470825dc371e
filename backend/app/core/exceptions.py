"""Domain exceptions mapped to HTTP responses by the API layer."""

from typing import Any, Dict, Optional


class LenderMatchingError(Exception):
    """Base error carrying a client-safe message and an HTTP status code."""

    status_code: int = 500

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API error response."""
        result: Dict[str, Any] = {"error": self.message}
        if self.field:
            result["field"] = self.field
        return result


class ValidationError(LenderMatchingError):
    """Malformed input such as a non-numeric path parameter."""

    status_code = 400


class NotFoundError(LenderMatchingError):
    """Requested entity does not exist."""

    status_code = 404


class QuoteNotFoundError(NotFoundError):
    def __init__(self, quote_id: int):
        super().__init__("Quote not found")
        self.quote_id = quote_id


class QuoteRecordNotFoundError(NotFoundError):
    """A quote exists but the requested sub-record was never saved."""

    def __init__(self, quote_id: int, record: str):
        super().__init__(f"Quote {record} not found")
        self.quote_id = quote_id
        self.record = record


class LenderNotFoundError(NotFoundError):
    def __init__(self, lender_id: int):
        super().__init__("Lender not found")
        self.lender_id = lender_id


class LoanProductNotFoundError(NotFoundError):
    def __init__(self, loan_product_id: int):
        super().__init__("Loan product not found")
        self.loan_product_id = loan_product_id


class InternalError(LenderMatchingError):
    """Unexpected infrastructure failure; the cause is logged, never returned."""

    status_code = 500


class MatchPersistenceError(InternalError):
    """Saving a matching run failed and nothing was committed."""
