"""Repository for lender data access optimized for matching engine queries."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.enums import LoanType
from app.models.domain.lender import Lender, LoanProduct
from app.repositories.base import BaseRepository


class LenderRepository(BaseRepository[Lender]):
    """
    Repository for Lender and LoanProduct with specialized queries.

    Candidate product queries eagerly load the owning lender so the
    matcher can build verdicts without lazy loads.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the lender repository.

        Args:
            db: Async database session
        """
        super().__init__(Lender, db)

    async def get_by_email(self, email: str) -> Optional[Lender]:
        """
        Retrieve a lender by its (unique) email.

        Args:
            email: Lender email

        Returns:
            The lender if found, None otherwise
        """
        stmt = select(Lender).where(Lender.email == email)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id_with_products(self, id: int) -> Optional[Lender]:
        """
        Retrieve a lender by ID with its loan products eagerly loaded.

        Args:
            id: The ID of the lender

        Returns:
            The lender with loan_products loaded, or None if not found
        """
        stmt = (
            select(Lender)
            .where(Lender.id == id)
            .options(selectinload(Lender.loan_products))
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_loan_product(self, loan_product_id: int) -> Optional[LoanProduct]:
        """
        Retrieve a single loan product with its lender.

        Args:
            loan_product_id: The ID of the loan product

        Returns:
            The loan product, or None if not found
        """
        stmt = (
            select(LoanProduct)
            .where(LoanProduct.id == loan_product_id)
            .options(selectinload(LoanProduct.lender))
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_loan_products_by_type(
        self, loan_type: Optional[LoanType]
    ) -> List[LoanProduct]:
        """
        Retrieve candidate loan products for a quote's loan type.

        Args:
            loan_type: The quote's loan type; None matches every product

        Returns:
            Loan products with lender loaded, ordered by id
        """
        stmt = (
            select(LoanProduct)
            .options(selectinload(LoanProduct.lender))
            .order_by(LoanProduct.id)
            .execution_options(populate_existing=True)
        )
        if loan_type is not None:
            stmt = stmt.where(LoanProduct.loan_type == loan_type)

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_loan_products_by_lender(self, lender_id: int) -> List[LoanProduct]:
        """
        Retrieve all loan products owned by a lender.

        Args:
            lender_id: The ID of the lender

        Returns:
            The lender's loan products ordered by id
        """
        stmt = (
            select(LoanProduct)
            .where(LoanProduct.lender_id == lender_id)
            .options(selectinload(LoanProduct.lender))
            .order_by(LoanProduct.id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def delete_loan_product(self, loan_product: LoanProduct) -> None:
        await self.db.delete(loan_product)
        await self.db.flush()
