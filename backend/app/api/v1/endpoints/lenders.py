"""Lender management endpoints."""

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.deps import get_session, parse_path_id
from app.models.schemas.lender import (
    LenderCreate,
    LenderDetailResponse,
    LenderResponse,
    LenderUpdate,
    LoanProductCreate,
    LoanProductResponse,
    MessageResponse,
)
from app.services.lender_service import LenderService

logger = logging.getLogger(__name__)

router = APIRouter()


# ==================== Lender Endpoints ====================


@router.post(
    "/",
    response_model=LenderDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new lender",
    description="Create a new lender; loan products are added separately",
)
async def create_lender(
    lender_data: LenderCreate,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> LenderDetailResponse:
    """
    Create a new lender.

    The lender email must be unique. Eligibility criteria live on the
    lender's loan products, not on the lender itself.
    """
    service = LenderService(db)
    lender = await service.create_lender(**lender_data.model_dump())
    return LenderDetailResponse.model_validate(lender)


@router.get(
    "/",
    response_model=List[LenderResponse],
    summary="List all lenders",
    description="Retrieve lenders ordered by company name",
)
async def list_lenders(
    db: Annotated[AsyncSession, Depends(get_session)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=100)] = 100,
) -> List[LenderResponse]:
    service = LenderService(db)
    lenders = await service.get_all_lenders(skip=skip, limit=limit)
    return [LenderResponse.model_validate(lender) for lender in lenders]


@router.get(
    "/{lender_id}",
    response_model=LenderDetailResponse,
    summary="Get lender by ID",
    description="Retrieve a lender with all of its loan products",
)
async def get_lender(
    lender_id: str,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> LenderDetailResponse:
    service = LenderService(db)
    lender = await service.get_lender(parse_path_id(lender_id, "lender"))
    return LenderDetailResponse.model_validate(lender)


@router.put(
    "/{lender_id}",
    response_model=LenderDetailResponse,
    summary="Update lender",
    description="Update a lender's contact details or active flag (only provided fields change)",
)
async def update_lender(
    lender_id: str,
    lender_data: LenderUpdate,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> LenderDetailResponse:
    service = LenderService(db)
    lender = await service.update_lender(
        parse_path_id(lender_id, "lender"),
        lender_data.model_dump(exclude_unset=True),
    )
    return LenderDetailResponse.model_validate(lender)


@router.post(
    "/{lender_id}/disable",
    response_model=MessageResponse,
    summary="Disable lender",
    description="Mark a lender inactive without deleting its loan products",
)
async def disable_lender(
    lender_id: str,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> MessageResponse:
    service = LenderService(db)
    await service.disable_lender(parse_path_id(lender_id, "lender"))
    return MessageResponse(message="Lender disabled successfully")


@router.delete(
    "/{lender_id}",
    response_model=MessageResponse,
    summary="Delete lender",
    description="Delete a lender with its loan products and match results",
)
async def delete_lender(
    lender_id: str,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> MessageResponse:
    service = LenderService(db)
    await service.delete_lender(parse_path_id(lender_id, "lender"))
    logger.info(f"Lender {lender_id} deleted via API")
    return MessageResponse(message="Lender deleted successfully")


# ==================== Loan Product Endpoints ====================


@router.post(
    "/{lender_id}/loan-products",
    response_model=LoanProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a loan product",
    description="Add a loan product with its eligibility criteria to a lender",
)
async def create_loan_product(
    lender_id: str,
    product_data: LoanProductCreate,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> LoanProductResponse:
    """
    Create a loan product for a lender.

    Criteria left unset are not checked during matching:
    - Loan amount bounds
    - Minimum credit score
    - Accepted citizenship types and funded states (empty means any)
    - Seasoning period and maximum LTV
    """
    service = LenderService(db)
    product = await service.create_loan_product(
        parse_path_id(lender_id, "lender"), product_data.model_dump()
    )
    return LoanProductResponse.model_validate(product)


@router.get(
    "/{lender_id}/loan-products",
    response_model=List[LoanProductResponse],
    summary="List a lender's loan products",
)
async def list_loan_products(
    lender_id: str,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> List[LoanProductResponse]:
    service = LenderService(db)
    products = await service.get_loan_products_for_lender(
        parse_path_id(lender_id, "lender")
    )
    return [LoanProductResponse.model_validate(product) for product in products]
