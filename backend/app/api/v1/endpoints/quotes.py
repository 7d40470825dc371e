"""Quote endpoints: CRUD for quote records and lender matching."""

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import MatchStatus
from app.core.exceptions import (
    InternalError,
    NotFoundError,
    QuoteNotFoundError,
    ValidationError,
)
from app.deps import get_session, parse_path_id
from app.models.schemas.lender import LenderSummary
from app.models.schemas.match import (
    DisqualificationReasonResponse,
    MatchResultResponse,
    MatchRunResponse,
    QuoteMatchesResponse,
)
from app.models.schemas.quote import (
    ApplicantInfoBase,
    ApplicantInfoResponse,
    LoanDetailsBase,
    LoanDetailsResponse,
    PrioritiesBase,
    PrioritiesResponse,
    QuoteCreate,
    QuoteDetailResponse,
    QuoteStatusCountsResponse,
    QuoteUpdate,
    RentalInfoBase,
    RentalInfoResponse,
)
from app.services.matching_service import MatchingService
from app.services.quote_service import QuoteService
from app.services.rule_engine.matcher import MatchVerdict

logger = logging.getLogger(__name__)

router = APIRouter()


def _verdict_to_response(verdict: MatchVerdict) -> MatchResultResponse:
    return MatchResultResponse(
        lender_id=verdict.lender_id,
        loan_product_id=verdict.loan_product_id,
        lender=LenderSummary.model_validate(verdict.lender),
        match_status=verdict.match_status,
        disqualification_reasons=[
            DisqualificationReasonResponse.model_validate(reason)
            for reason in verdict.reasons_as_dicts()
        ],
    )


# ==================== Quote Endpoints ====================


@router.post(
    "/",
    response_model=QuoteDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new quote",
    description="Create a draft quote for a property",
)
async def create_quote(
    quote_data: QuoteCreate,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> QuoteDetailResponse:
    """
    Create a new draft quote.

    The loan type chosen here decides which loan products the quote is
    matched against and cannot be changed later.
    """
    service = QuoteService(db)
    quote = await service.create_quote(**quote_data.model_dump())
    return QuoteDetailResponse.model_validate(quote)


@router.get(
    "/count-by-status",
    response_model=QuoteStatusCountsResponse,
    summary="Count quotes by status",
    description="Number of quotes in each workflow state",
)
async def count_quotes_by_status(
    db: Annotated[AsyncSession, Depends(get_session)],
) -> QuoteStatusCountsResponse:
    service = QuoteService(db)
    counts = await service.count_by_status()
    return QuoteStatusCountsResponse(counts=counts, total=sum(counts.values()))


@router.get(
    "/{quote_id}",
    response_model=QuoteDetailResponse,
    summary="Get quote by ID",
    description="Retrieve a quote with applicant info, loan details and rental info",
)
async def get_quote(
    quote_id: str,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> QuoteDetailResponse:
    service = QuoteService(db)
    quote = await service.get_quote(parse_path_id(quote_id, "quote"))
    return QuoteDetailResponse.model_validate(quote)


@router.put(
    "/{quote_id}",
    response_model=QuoteDetailResponse,
    summary="Update quote",
    description="Update a quote's address or occupancy",
)
async def update_quote(
    quote_id: str,
    quote_data: QuoteUpdate,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> QuoteDetailResponse:
    service = QuoteService(db)
    quote = await service.update_quote(
        parse_path_id(quote_id, "quote"),
        quote_data.model_dump(exclude_unset=True),
    )
    return QuoteDetailResponse.model_validate(quote)


@router.put(
    "/{quote_id}/applicant-info",
    response_model=ApplicantInfoResponse,
    summary="Save applicant info",
    description="Create or replace the applicant's personal and company information",
)
async def save_applicant_info(
    quote_id: str,
    applicant_data: ApplicantInfoBase,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> ApplicantInfoResponse:
    service = QuoteService(db)
    applicant_info = await service.upsert_applicant_info(
        parse_path_id(quote_id, "quote"), applicant_data.model_dump()
    )
    return ApplicantInfoResponse.model_validate(applicant_info)


@router.put(
    "/{quote_id}/loan-details",
    response_model=LoanDetailsResponse,
    summary="Save loan details",
    description="Create or replace the requested loan amount, price and property details",
)
async def save_loan_details(
    quote_id: str,
    loan_data: LoanDetailsBase,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> LoanDetailsResponse:
    service = QuoteService(db)
    loan_details = await service.upsert_loan_details(
        parse_path_id(quote_id, "quote"), loan_data.model_dump()
    )
    return LoanDetailsResponse.model_validate(loan_details)


@router.put(
    "/{quote_id}/rental-info",
    response_model=RentalInfoResponse,
    summary="Save rental info",
    description="Create or replace rental income details (DSCR rental quotes only)",
)
async def save_rental_info(
    quote_id: str,
    rental_data: RentalInfoBase,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> RentalInfoResponse:
    service = QuoteService(db)
    rental_info = await service.upsert_rental_info(
        parse_path_id(quote_id, "quote"), rental_data.model_dump()
    )
    return RentalInfoResponse.model_validate(rental_info)


@router.put(
    "/{quote_id}/priorities",
    response_model=PrioritiesResponse,
    summary="Save priorities",
    description="Create or replace what the applicant values most in a lender",
)
async def save_priorities(
    quote_id: str,
    priorities_data: PrioritiesBase,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> PrioritiesResponse:
    service = QuoteService(db)
    priorities = await service.upsert_priorities(
        parse_path_id(quote_id, "quote"), priorities_data.model_dump()
    )
    return PrioritiesResponse.model_validate(priorities)


@router.get(
    "/{quote_id}/applicant-info",
    response_model=ApplicantInfoResponse,
    summary="Get applicant info",
)
async def get_applicant_info(
    quote_id: str,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> ApplicantInfoResponse:
    service = QuoteService(db)
    applicant_info = await service.get_applicant_info(parse_path_id(quote_id, "quote"))
    return ApplicantInfoResponse.model_validate(applicant_info)


@router.get(
    "/{quote_id}/loan-details",
    response_model=LoanDetailsResponse,
    summary="Get loan details",
)
async def get_loan_details(
    quote_id: str,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> LoanDetailsResponse:
    service = QuoteService(db)
    loan_details = await service.get_loan_details(parse_path_id(quote_id, "quote"))
    return LoanDetailsResponse.model_validate(loan_details)


@router.get(
    "/{quote_id}/rental-info",
    response_model=RentalInfoResponse,
    summary="Get rental info",
)
async def get_rental_info(
    quote_id: str,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> RentalInfoResponse:
    service = QuoteService(db)
    rental_info = await service.get_rental_info(parse_path_id(quote_id, "quote"))
    return RentalInfoResponse.model_validate(rental_info)


@router.get(
    "/{quote_id}/priorities",
    response_model=PrioritiesResponse,
    summary="Get priorities",
)
async def get_priorities(
    quote_id: str,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> PrioritiesResponse:
    service = QuoteService(db)
    priorities = await service.get_priorities(parse_path_id(quote_id, "quote"))
    return PrioritiesResponse.model_validate(priorities)


@router.post(
    "/{quote_id}/submit",
    response_model=QuoteDetailResponse,
    summary="Submit quote",
    description="Move a complete draft quote to submitted",
)
async def submit_quote(
    quote_id: str,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> QuoteDetailResponse:
    service = QuoteService(db)
    quote = await service.submit_quote(parse_path_id(quote_id, "quote"))
    return QuoteDetailResponse.model_validate(quote)


# ==================== Matching Endpoints ====================


@router.post(
    "/{quote_id}/match",
    response_model=MatchRunResponse,
    summary="Match quote with lenders",
    description="Evaluate the quote against every candidate loan product and save the results",
)
async def match_quote(
    quote_id: str,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> MatchRunResponse:
    """
    Run lender matching for a quote.

    This endpoint:
    1. Loads the quote with applicant info and loan details
    2. Evaluates it against every loan product of the quote's loan type
    3. Saves one result per lender, replacing any previous run
    4. Returns qualified and disqualified lenders with their reasons
    """
    try:
        parsed_id = parse_path_id(quote_id, "quote")
        service = MatchingService(db)

        verdicts = await service.match_quote(parsed_id)

        qualified: List[MatchResultResponse] = []
        disqualified: List[MatchResultResponse] = []
        for verdict in verdicts:
            target = qualified if verdict.is_qualified else disqualified
            target.append(_verdict_to_response(verdict))

        return MatchRunResponse(
            quote_id=parsed_id,
            total_lenders=len(verdicts),
            qualified_count=len(qualified),
            disqualified_count=len(disqualified),
            qualified_lenders=qualified,
            disqualified_lenders=disqualified,
        )

    except (ValidationError, NotFoundError):
        raise
    except Exception as e:
        logger.error(f"Error matching quote {quote_id}: {str(e)}", exc_info=True)
        raise InternalError("Failed to match quote with lenders") from e


@router.get(
    "/{quote_id}/matches",
    response_model=QuoteMatchesResponse,
    summary="Get lender matches",
    description="Retrieve the results of the last matching run for a quote",
)
async def get_quote_matches(
    quote_id: str,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> QuoteMatchesResponse:
    """
    Retrieve persisted lender matches for a quote.

    Results are read back from storage, not recomputed. A quote that has
    never been matched returns empty lists.
    """
    try:
        parsed_id = parse_path_id(quote_id, "quote")
        service = MatchingService(db)

        if not await service.quote_exists(parsed_id):
            raise QuoteNotFoundError(parsed_id)

        matches = await service.get_matches(parsed_id)

        qualified: List[MatchResultResponse] = []
        disqualified: List[MatchResultResponse] = []
        for match in matches:
            result = MatchResultResponse.model_validate(match)
            target = qualified if result.match_status == MatchStatus.QUALIFIED else disqualified
            target.append(result)

        return QuoteMatchesResponse(
            quote_id=parsed_id,
            total_matches=len(matches),
            qualified_count=len(qualified),
            disqualified_count=len(disqualified),
            qualified_lenders=qualified,
            disqualified_lenders=disqualified,
        )

    except (ValidationError, NotFoundError):
        raise
    except Exception as e:
        logger.error(
            f"Error getting matches for quote {quote_id}: {str(e)}", exc_info=True
        )
        raise InternalError("Failed to get lender matches") from e
