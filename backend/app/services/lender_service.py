"""Lender service for lender and loan product CRUD operations."""

import logging
from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    LenderNotFoundError,
    LoanProductNotFoundError,
    ValidationError,
)
from app.models.domain.lender import Lender, LoanProduct
from app.repositories.lender_repository import LenderRepository
from app.repositories.match_repository import MatchRepository

logger = logging.getLogger(__name__)


class LenderService:
    """
    Lender service for managing lenders and their loan products.

    Loan product criteria are the inputs of the matching engine, so bounds
    are validated here as well as in the request schemas.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the lender service.

        Args:
            db: Async database session
        """
        self.db = db
        self.repo = LenderRepository(db)

    # ===== Lender Operations =====

    async def create_lender(
        self,
        company_name: str,
        email: str,
        contact_name: str = None,
        phone_number: str = None,
        is_active: bool = True,
    ) -> Lender:
        """
        Create a new lender.

        Raises:
            ValidationError: If a lender with the same email already exists
        """
        existing = await self.repo.get_by_email(email)
        if existing:
            raise ValidationError(
                f"Lender with email '{email}' already exists", field="email"
            )

        lender = Lender(
            company_name=company_name,
            email=email,
            contact_name=contact_name,
            phone_number=phone_number,
            is_active=is_active,
        )
        self.db.add(lender)
        await self.db.commit()

        logger.info(f"Created lender {lender.id} ({company_name})")
        return await self.repo.get_by_id_with_products(lender.id)

    async def get_lender(self, lender_id: int) -> Lender:
        """
        Retrieve a lender with its loan products.

        Raises:
            LenderNotFoundError: If the lender does not exist
        """
        lender = await self.repo.get_by_id_with_products(lender_id)
        if lender is None:
            raise LenderNotFoundError(lender_id)
        return lender

    async def get_all_lenders(self, skip: int = 0, limit: int = 100) -> List[Lender]:
        return await self.repo.get_all(skip=skip, limit=limit, order_by=Lender.company_name)

    async def update_lender(self, lender_id: int, data: Dict[str, Any]) -> Lender:
        """
        Update a lender's contact details or active flag.

        Args:
            lender_id: ID of the lender
            data: Fields to update (only explicitly provided fields)

        Raises:
            LenderNotFoundError: If the lender does not exist
            ValidationError: If the new email belongs to another lender
        """
        lender = await self.get_lender(lender_id)

        email = data.get("email")
        if email is not None and email != lender.email:
            existing = await self.repo.get_by_email(email)
            if existing:
                raise ValidationError(
                    f"Lender with email '{email}' already exists", field="email"
                )

        for field, value in data.items():
            if value is not None:
                setattr(lender, field, value)

        await self.db.commit()
        return await self.repo.get_by_id_with_products(lender_id)

    async def disable_lender(self, lender_id: int) -> Lender:
        """
        Mark a lender inactive. Its loan products and match history are kept.

        Raises:
            LenderNotFoundError: If the lender does not exist
        """
        lender = await self.get_lender(lender_id)
        lender.is_active = False
        await self.db.commit()
        logger.info(f"Disabled lender {lender_id}")
        return lender

    async def delete_lender(self, lender_id: int) -> None:
        """
        Delete a lender together with its loan products and match results.

        Raises:
            LenderNotFoundError: If the lender does not exist
        """
        lender = await self.get_lender(lender_id)
        await MatchRepository(self.db).delete_for_lender(lender_id)
        await self.db.delete(lender)
        await self.db.commit()
        logger.info(f"Deleted lender {lender_id}")

    # ===== Loan Product Operations =====

    async def create_loan_product(
        self, lender_id: int, data: Dict[str, Any]
    ) -> LoanProduct:
        """
        Create a loan product for a lender.

        Args:
            lender_id: ID of the owning lender
            data: Loan product fields

        Returns:
            Created loan product

        Raises:
            LenderNotFoundError: If the lender does not exist
            ValidationError: If min_loan_amount exceeds max_loan_amount
        """
        if not await self.repo.exists(lender_id):
            raise LenderNotFoundError(lender_id)

        self._validate_amount_bounds(data.get("min_loan_amount"), data.get("max_loan_amount"))

        product = LoanProduct(lender_id=lender_id, **data)
        self.db.add(product)
        await self.db.commit()

        logger.info(f"Created loan product {product.id} for lender {lender_id}")
        return await self.repo.get_loan_product(product.id)

    async def get_loan_product(self, loan_product_id: int) -> LoanProduct:
        """
        Retrieve a loan product.

        Raises:
            LoanProductNotFoundError: If the loan product does not exist
        """
        product = await self.repo.get_loan_product(loan_product_id)
        if product is None:
            raise LoanProductNotFoundError(loan_product_id)
        return product

    async def get_loan_products_for_lender(self, lender_id: int) -> List[LoanProduct]:
        """
        Retrieve all loan products of a lender.

        Raises:
            LenderNotFoundError: If the lender does not exist
        """
        if not await self.repo.exists(lender_id):
            raise LenderNotFoundError(lender_id)
        return await self.repo.get_loan_products_by_lender(lender_id)

    async def update_loan_product(
        self, loan_product_id: int, data: Dict[str, Any]
    ) -> LoanProduct:
        """
        Update a loan product's criteria.

        Args:
            loan_product_id: ID of the loan product
            data: Fields to update (only explicitly provided fields)

        Returns:
            Updated loan product
        """
        product = await self.get_loan_product(loan_product_id)

        min_amount = data.get("min_loan_amount", product.min_loan_amount)
        max_amount = data.get("max_loan_amount", product.max_loan_amount)
        self._validate_amount_bounds(min_amount, max_amount)

        for field, value in data.items():
            setattr(product, field, value)

        await self.db.commit()
        return await self.repo.get_loan_product(loan_product_id)

    async def delete_loan_product(self, loan_product_id: int) -> None:
        """
        Delete a loan product.

        Raises:
            LoanProductNotFoundError: If the loan product does not exist
        """
        product = await self.get_loan_product(loan_product_id)
        await self.repo.delete_loan_product(product)
        await self.db.commit()
        logger.info(f"Deleted loan product {loan_product_id}")

    @staticmethod
    def _validate_amount_bounds(min_amount, max_amount) -> None:
        if min_amount is not None and max_amount is not None and min_amount > max_amount:
            raise ValidationError(
                "min_loan_amount cannot exceed max_loan_amount",
                field="min_loan_amount",
            )
