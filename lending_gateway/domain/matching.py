"""Borrower-to-lender matching"""

from typing import List
from lending_gateway.domain.models import BorrowerMatch, BorrowerProfile, LoanMatchCriteria

MAX_CREDIT_SCORE = 850
MATCH_THRESHOLD = 60.0

CREDIT_WEIGHT = 40.0
AMOUNT_WEIGHT = 30.0
EMPLOYMENT_WEIGHT = 20.0
LOCATION_WEIGHT = 10.0


def calculate_match_score(borrower: BorrowerProfile, criteria: LoanMatchCriteria) -> float:
    """
    Score borrower compatibility with a lender's criteria, 0 to 100.

    Scoring weights:
    - 40: Credit score, scaled by score/850, only when at or above the minimum
    - 30: Requested amount within the lender's maximum
    - 20: Employment status among preferred types
    - 10: Location among accepted regions
    """
    score = 0.0

    if borrower.credit_score >= criteria.min_credit_score:
        score += CREDIT_WEIGHT * (borrower.credit_score / MAX_CREDIT_SCORE)

    if borrower.loan_amount <= criteria.max_loan_amount:
        score += AMOUNT_WEIGHT

    if borrower.employment_status in criteria.preferred_employment_types:
        score += EMPLOYMENT_WEIGHT

    if borrower.location in criteria.geographic_preference:
        score += LOCATION_WEIGHT

    return min(max(score, 0.0), 100.0)


def find_matching_borrowers(
    borrowers: List[BorrowerProfile],
    criteria: LoanMatchCriteria,
    threshold: float = MATCH_THRESHOLD,
) -> List[BorrowerMatch]:
    """Borrowers scoring at least threshold, best first; ties keep input order"""
    matches = [BorrowerMatch(borrower=b, match_score=calculate_match_score(b, criteria)) for b in borrowers]

    # sorted() is stable with reverse=True
    return sorted(
        (m for m in matches if m.match_score >= threshold),
        key=lambda m: m.match_score,
        reverse=True,
    )
