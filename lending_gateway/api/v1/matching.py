"""POST /v1/matches - borrower matching against lender criteria"""

from fastapi import APIRouter, Depends, Request

from lending_gateway.api.v1.schemas import (
    MatchItem,
    MatchRequest,
    MatchResponse,
    MatchScoreRequest,
    MatchScoreResponse,
)
from lending_gateway.api.dependencies import get_request_id, get_settings
from lending_gateway.config import Settings
from lending_gateway.domain.matching import calculate_match_score, find_matching_borrowers
from lending_gateway.infrastructure.observability.metrics import record_match_run
from lending_gateway.infrastructure.observability.logging import log_match_run

router = APIRouter()


@router.post("/matches", response_model=MatchResponse)
def match_borrowers(
    request_body: MatchRequest,
    request: Request,
    app_settings: Settings = Depends(get_settings),
):
    """
    Rank borrowers against a lender's criteria.

    Returns:
        Borrowers scoring at or above the match threshold, best first
    """
    matches = find_matching_borrowers(
        [b.to_domain() for b in request_body.borrowers],
        request_body.criteria.to_domain(),
        threshold=app_settings.match_score_threshold,
    )

    record_match_run(len(matches))
    log_match_run(get_request_id(request), len(request_body.borrowers), len(matches))

    return MatchResponse(
        matches=[
            MatchItem(**vars(m.borrower), match_score=m.match_score)
            for m in matches
        ]
    )


@router.post("/matches/score", response_model=MatchScoreResponse)
def score_borrower(request_body: MatchScoreRequest):
    """Compatibility score for a single borrower"""
    borrower = request_body.borrower.to_domain()
    score = calculate_match_score(borrower, request_body.criteria.to_domain())
    return MatchScoreResponse(borrower_id=borrower.id, match_score=score)
