"""Rule evaluators for the loan product eligibility rules."""

from .credit_evaluator import CreditEvaluator
from .geographic_evaluator import GeographicEvaluator
from .loan_evaluator import LoanEvaluator
from .property_evaluator import PropertyEvaluator

__all__ = [
    "CreditEvaluator",
    "GeographicEvaluator",
    "LoanEvaluator",
    "PropertyEvaluator",
]
