"""Dynamic interest rate pricing from borrower risk factors"""

from typing import List, Tuple
from lending_gateway.domain.models import InterestRate, RiskFactors

BASE_RATE = 12.0  # percent per annum
MINIMUM_RATE = 8.0

LARGE_LOAN_AMOUNT = 100_000
LONG_TERM_PERIODS = 24
COLLATERAL_COVERAGE = 1.5


def _adjustments(factors: RiskFactors) -> List[Tuple[float, str]]:
    """Triggered (delta, explanation) pairs in evaluation order"""
    adjustments: List[Tuple[float, str]] = []

    # Credit score: first matching band wins; 600-649 is neutral
    if factors.credit_score >= 750:
        adjustments.append((-2.0, "Excellent credit score (-2%)"))
    elif factors.credit_score >= 650:
        adjustments.append((-1.0, "Good credit score (-1%)"))
    elif factors.credit_score < 550:
        adjustments.append((4.0, "Poor credit score (+4%)"))
    elif factors.credit_score < 600:
        adjustments.append((2.0, "Fair credit score (+2%)"))

    if factors.debt_to_income_ratio > 0.4:
        adjustments.append((3.0, "High debt-to-income ratio (+3%)"))
    elif factors.debt_to_income_ratio < 0.2:
        adjustments.append((-1.0, "Low debt-to-income ratio (-1%)"))

    if factors.employment_stability >= 24:
        adjustments.append((-1.0, "Stable employment history (-1%)"))
    elif factors.employment_stability < 6:
        adjustments.append((2.0, "Short employment history (+2%)"))

    if factors.loan_amount > LARGE_LOAN_AMOUNT:
        adjustments.append((1.0, "Large loan amount (+1%)"))

    if factors.loan_term > LONG_TERM_PERIODS:
        adjustments.append((0.5, "Extended loan term (+0.5%)"))

    if factors.collateral_value and factors.collateral_value >= factors.loan_amount * COLLATERAL_COVERAGE:
        adjustments.append((-2.0, "Strong collateral coverage (-2%)"))

    return adjustments


def calculate_rate(
    factors: RiskFactors,
    base_rate: float = BASE_RATE,
    minimum_rate: float = MINIMUM_RATE,
) -> InterestRate:
    """
    Price a loan from its risk factors.

    Starts at base_rate, applies every triggered adjustment, then floors the
    result at minimum_rate. Explanations list only the triggered adjustments.

    Example:
        score 780, DTI 0.1, 30 months employed, 50,000 over 12 periods
        12 - 2 - 1 - 1 = 8%
    """
    adjustments = _adjustments(factors)
    adjusted = base_rate + sum(delta for delta, _ in adjustments)

    return InterestRate(
        rate=max(adjusted, minimum_rate),
        explanations=[text for _, text in adjustments],
        floor_applied=adjusted < minimum_rate,
    )


def calculate_dynamic_rate(factors: RiskFactors) -> float:
    return calculate_rate(factors).rate


def get_rate_explanation(factors: RiskFactors) -> List[str]:
    return calculate_rate(factors).explanations
