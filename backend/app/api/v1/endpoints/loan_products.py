"""Loan product endpoints addressed by product ID."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.deps import get_session, parse_path_id
from app.models.schemas.lender import LoanProductResponse, LoanProductUpdate
from app.services.lender_service import LenderService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/{loan_product_id}",
    response_model=LoanProductResponse,
    summary="Get loan product by ID",
)
async def get_loan_product(
    loan_product_id: str,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> LoanProductResponse:
    service = LenderService(db)
    product = await service.get_loan_product(
        parse_path_id(loan_product_id, "loan product")
    )
    return LoanProductResponse.model_validate(product)


@router.put(
    "/{loan_product_id}",
    response_model=LoanProductResponse,
    summary="Update loan product",
    description="Update a loan product's criteria (only provided fields change)",
)
async def update_loan_product(
    loan_product_id: str,
    product_data: LoanProductUpdate,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> LoanProductResponse:
    """
    Update a loan product.

    Changes apply to the next matching run; saved match results are not
    recomputed.
    """
    service = LenderService(db)
    product = await service.update_loan_product(
        parse_path_id(loan_product_id, "loan product"),
        product_data.model_dump(exclude_unset=True),
    )
    return LoanProductResponse.model_validate(product)


@router.delete(
    "/{loan_product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete loan product",
)
async def delete_loan_product(
    loan_product_id: str,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> None:
    service = LenderService(db)
    await service.delete_loan_product(parse_path_id(loan_product_id, "loan product"))
    logger.info(f"Loan product {loan_product_id} deleted via API")
