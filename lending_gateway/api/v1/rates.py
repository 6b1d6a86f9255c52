"""POST /v1/rates/quote - dynamic interest rate quote"""

from fastapi import APIRouter, Depends, Request

from lending_gateway.api.v1.schemas import RateQuoteResponse, RiskFactorsSchema
from lending_gateway.api.dependencies import get_request_id, get_settings
from lending_gateway.config import Settings
from lending_gateway.domain.interest_rates import calculate_rate
from lending_gateway.infrastructure.observability.metrics import record_rate_quote
from lending_gateway.infrastructure.observability.logging import log_rate_quote

router = APIRouter()


@router.post("/rates/quote", response_model=RateQuoteResponse)
def quote_rate(
    request_body: RiskFactorsSchema,
    request: Request,
    app_settings: Settings = Depends(get_settings),
):
    """Price a loan; explanations list the adjustments applied, in order"""
    quote = calculate_rate(
        request_body.to_domain(),
        base_rate=app_settings.base_interest_rate,
        minimum_rate=app_settings.minimum_interest_rate,
    )

    record_rate_quote(quote.rate, quote.floor_applied)
    log_rate_quote(get_request_id(request), quote.rate, len(quote.explanations), quote.floor_applied)

    return RateQuoteResponse.from_domain(quote)
