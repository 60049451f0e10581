from fastapi import APIRouter, Depends, status

from rental_engine.api.dependencies import get_use_cases
from rental_engine.api.schemas.pricing import (
    PriceBreakdownModel,
    QuoteResponse,
    RentalRequestPayload,
    VerifyPriceRequest,
    VerifyPriceResponse,
)
from rental_engine.domain.entities.price_breakdown import NotComputable

router = APIRouter()


@router.post(
    "/pricing/quote",
    response_model=QuoteResponse,
    status_code=status.HTTP_200_OK,
)
async def quote_price(
    payload: RentalRequestPayload,
    use_cases=Depends(get_use_cases),
) -> QuoteResponse:
    result = await use_cases["quote_price"].execute(payload.to_domain())
    if isinstance(result, NotComputable):
        return QuoteResponse(computable=False, missing=list(result.missing))
    return QuoteResponse(computable=True, breakdown=PriceBreakdownModel.from_domain(result))


@router.post(
    "/pricing/verify",
    response_model=VerifyPriceResponse,
    status_code=status.HTTP_200_OK,
)
async def verify_price(
    payload: VerifyPriceRequest,
    use_cases=Depends(get_use_cases),
) -> VerifyPriceResponse:
    """Recompute a client-submitted breakdown and report the fields that differ."""
    verification = await use_cases["quote_price"].verify(
        payload.request.to_domain(), payload.breakdown.to_domain()
    )
    recomputed = verification.recomputed
    return VerifyPriceResponse(
        matches=verification.matches,
        mismatched_fields=verification.mismatched_fields,
        recomputed=(
            None
            if isinstance(recomputed, NotComputable)
            else PriceBreakdownModel.from_domain(recomputed)
        ),
    )
