"""Persisted lender match results for quotes."""

import json
from typing import Optional

from sqlalchemy import (
    Enum as SQLEnum,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.enums import MatchStatus
from app.db.base import BaseModel, enum_values


class QuoteLenderMatch(BaseModel):
    """
    Latest matching verdict for one (quote, lender) pair.

    Rows are overwritten in place on every matching run for the quote.
    disqualification_reason holds the JSON-encoded reason list and is NULL
    when the lender qualified.
    """

    __tablename__ = "quote_lender_matches"
    __table_args__ = (
        UniqueConstraint("quote_id", "lender_id", name="uq_quote_lender_match"),
    )

    quote_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("quotes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    lender_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("lenders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    match_status: Mapped[MatchStatus] = mapped_column(
        SQLEnum(
            MatchStatus,
            name="match_status",
            values_callable=enum_values,
        ),
        nullable=False,
        index=True,
    )
    disqualification_reason: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True
    )

    # Relationships
    lender: Mapped["Lender"] = relationship("Lender")
    quote: Mapped["Quote"] = relationship("Quote")

    @property
    def disqualification_reasons(self) -> list[dict]:
        """Reason list parsed from its stored JSON form."""
        if not self.disqualification_reason:
            return []
        return json.loads(self.disqualification_reason)

    def __repr__(self) -> str:
        return (
            f"<QuoteLenderMatch(quote_id={self.quote_id}, lender_id={self.lender_id}, "
            f"status={self.match_status.value})>"
        )
