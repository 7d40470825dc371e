"""Rule engine for evaluating quotes against lender loan products."""

from .base import DisqualificationReason, EvaluationContext, RuleEvaluator
from .engine import ProductEvaluationResult, RuleEngine
from .matcher import Matcher, MatchVerdict

__all__ = [
    "DisqualificationReason",
    "EvaluationContext",
    "Matcher",
    "MatchVerdict",
    "ProductEvaluationResult",
    "RuleEngine",
    "RuleEvaluator",
]
