"""Credit scoring engine - maps an applicant record to a 300-850 score"""

import math
from typing import Dict, List
from lending_gateway.domain.models import (
    CreditApplication,
    CreditScore,
    EmploymentStatus,
    RepaymentHistory,
    RiskCategory,
)

MIN_SCORE = 300
MAX_SCORE = 850
BASE_SCORE = MIN_SCORE

EMPLOYMENT_POINTS: Dict[EmploymentStatus, int] = {
    EmploymentStatus.EMPLOYED_CIVIL_SERVANT: 200,
    EmploymentStatus.EMPLOYED_PRIVATE: 150,
    EmploymentStatus.BUSINESS_OWNER: 120,
    EmploymentStatus.SELF_EMPLOYED: 100,
    EmploymentStatus.RETIRED: 80,
    EmploymentStatus.UNEMPLOYED: 0,
}
UNKNOWN_EMPLOYMENT_POINTS = 50

REPAYMENT_POINTS: Dict[RepaymentHistory, int] = {
    RepaymentHistory.EXCELLENT: 180,
    RepaymentHistory.GOOD: 120,
    RepaymentHistory.FAIR: 60,
    RepaymentHistory.POOR: 0,
}
UNKNOWN_REPAYMENT_POINTS = 0  # no history on file scores like "poor"

DEFAULT_PENALTY = 100


def debt_to_income_ratio(existing_debts: float, monthly_income: float) -> float:
    """
    Monthly debt obligations divided by monthly income.

    Without income, any debt is an unbounded ratio and no debt is 0.0.
    """
    if monthly_income <= 0:
        return math.inf if existing_debts > 0 else 0.0
    return existing_debts / monthly_income


def months_of_runway(bank_balance: float, monthly_expenses: float) -> float:
    """Months of expenses covered by the bank balance (zero expenses counts as 1)"""
    return bank_balance / (monthly_expenses or 1)


def employment_points(status: str) -> int:
    try:
        return EMPLOYMENT_POINTS[EmploymentStatus(status)]
    except ValueError:
        return UNKNOWN_EMPLOYMENT_POINTS


def repayment_points(history: str) -> int:
    try:
        return REPAYMENT_POINTS[RepaymentHistory(history)]
    except ValueError:
        return UNKNOWN_REPAYMENT_POINTS


def _debt_ratio_points(ratio: float) -> int:
    if ratio < 0.2:
        return 150
    elif ratio < 0.4:
        return 100
    elif ratio < 0.6:
        return 50
    return 0


def _age_points(age: int) -> int:
    if 25 <= age <= 55:
        return 60
    elif 18 <= age < 25:
        return 30
    return 20


def _runway_points(months: float) -> int:
    if months >= 6:
        return 60
    elif months >= 3:
        return 40
    elif months >= 1:
        return 20
    return 0


def calculate_credit_score(application: CreditApplication) -> int:
    """
    Calculate a credit score between 300 and 850.

    Contributions on top of a 300 base:
    - Employment status: 0-200 (unknown status: 50)
    - Debt-to-income ratio: <0.2 +150, <0.4 +100, <0.6 +50
    - Repayment history: 0-180 (unknown history: 0)
    - Prior default: -100
    - Age: 25-55 +60, 18-24 +30, otherwise +20
    - Bank balance runway: >=6 months +60, >=3 +40, >=1 +20
    """
    employment = application.employment
    financial = application.financial

    score = BASE_SCORE
    score += employment_points(employment.status)
    score += _debt_ratio_points(debt_to_income_ratio(financial.existing_debts, employment.monthly_income))
    score += repayment_points(application.loan_history.repayment_history)

    if application.loan_history.default_history:
        score -= DEFAULT_PENALTY

    score += _age_points(application.personal_info.age)
    score += _runway_points(months_of_runway(financial.bank_balance, financial.monthly_expenses))

    return min(max(score, MIN_SCORE), MAX_SCORE)


def get_risk_category(score: int) -> RiskCategory:
    if score >= 700:
        return RiskCategory.LOW
    elif score >= 600:
        return RiskCategory.MEDIUM
    return RiskCategory.HIGH


def get_recommendations(application: CreditApplication, score: int) -> List[str]:
    """Improvement suggestions for the applicant; advisory only"""
    financial = application.financial
    recommendations = []

    if score < 600:
        recommendations.append("Consider building a stronger credit history with smaller loans")
        recommendations.append("Reduce existing debt to improve debt-to-income ratio")

    if debt_to_income_ratio(financial.existing_debts, application.employment.monthly_income) > 0.4:
        recommendations.append("Focus on reducing monthly debt obligations")

    if financial.bank_balance < financial.monthly_expenses * 3:
        recommendations.append("Build an emergency fund covering 3-6 months of expenses")

    if application.loan_history.default_history:
        recommendations.append("Maintain consistent payments to rebuild credit trust")

    return recommendations


def score_application(application: CreditApplication) -> CreditScore:
    """
    Main entry point: score an application and classify its risk.

    Returns CreditScore with score, risk category and recommendations.
    """
    score = calculate_credit_score(application)

    return CreditScore(
        score=score,
        risk_category=get_risk_category(score),
        recommendations=get_recommendations(application, score),
    )
