"""Core enums for type safety across the application."""

from enum import Enum


class LoanType(str, Enum):
    """Loan types offered on the marketplace."""

    BRIDGE_FIX_AND_FLIP = "bridge_fix_and_flip"
    DSCR_RENTAL = "dscr_rental"


class QuoteStatus(str, Enum):
    """Quote workflow states."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    MATCHED = "matched"


class ExitPlan(str, Enum):
    """Exit strategy for bridge loans."""

    REFINANCE = "refinance"
    SELL = "sell"


class MatchStatus(str, Enum):
    """Outcome of evaluating a lender against a quote."""

    QUALIFIED = "qualified"
    DISQUALIFIED = "disqualified"


class RuleType(str, Enum):
    """Eligibility rules, declared in evaluation order."""

    LOAN_AMOUNT = "loan_amount"
    CREDIT_SCORE = "credit_score"
    CITIZENSHIP = "citizenship"
    STATE = "state"
    SEASONING_PERIOD = "seasoning_period"
    REHAB_LOANS = "rehab_loans"
    LTV_RATIO = "ltv_ratio"


class DisqualificationField(str, Enum):
    """Field names reported on disqualification reasons."""

    LOAN_DETAILS = "loan_details"
    LOAN_AMOUNT = "loan_amount"
    CREDIT_SCORE = "credit_score"
    CITIZENSHIP = "citizenship"
    STATE = "state"
    SEASONING_PERIOD = "seasoning_period"
    REHAB_LOANS = "rehab_loans"
    LTV_RATIO = "ltv_ratio"
