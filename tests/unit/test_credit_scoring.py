"""Unit tests for credit scoring logic"""

import math
import pytest
from dataclasses import replace
from lending_gateway.domain.models import CreditApplication, RiskCategory
from lending_gateway.domain.credit_scoring import (
    calculate_credit_score,
    debt_to_income_ratio,
    get_recommendations,
    get_risk_category,
    months_of_runway,
    score_application,
)


def _with(application: CreditApplication, **changes) -> CreditApplication:
    """Copy an application, overriding fields by section ("financial__existing_debts")"""
    sections = {}
    for key, value in changes.items():
        section, name = key.split("__")
        sections.setdefault(section, {})[name] = value
    return replace(
        application,
        **{section: replace(getattr(application, section), **fields) for section, fields in sections.items()},
    )


def test_strong_applicant_clamped_to_maximum(strong_application: CreditApplication):
    """300 + 200 + 150 + 120 + 60 + 60 = 890, clamped to 850"""
    assert calculate_credit_score(strong_application) == 850


def test_weak_applicant_clamped_to_minimum(weak_application: CreditApplication):
    """300 + 0 + 0 + 0 - 100 + 30 + 0 = 230, clamped to 300"""
    assert calculate_credit_score(weak_application) == 300


def test_unclamped_score_components(strong_application: CreditApplication):
    """Private employee, moderate debt, fair history, 2 months of runway"""
    application = _with(
        strong_application,
        employment__status="employed_private",
        financial__existing_debts=1500,  # ratio 0.3 -> +100
        financial__bank_balance=4000,  # 2 months -> +20
        loan_history__repayment_history="fair",
    )
    # 300 + 150 + 100 + 60 + 60 + 20
    assert calculate_credit_score(application) == 690


def test_unknown_employment_status_scores_baseline(strong_application: CreditApplication):
    known = _with(strong_application, employment__status="unemployed", financial__bank_balance=0)
    unknown = _with(strong_application, employment__status="astronaut", financial__bank_balance=0)

    assert calculate_credit_score(unknown) - calculate_credit_score(known) == 50


def test_unknown_repayment_history_scores_like_poor(strong_application: CreditApplication):
    poor = _with(strong_application, employment__status="retired", loan_history__repayment_history="poor")
    unknown = _with(strong_application, employment__status="retired", loan_history__repayment_history="n/a")

    assert calculate_credit_score(unknown) == calculate_credit_score(poor)


def test_default_history_penalty(strong_application: CreditApplication):
    base = _with(strong_application, employment__status="self_employed")
    defaulted = _with(base, loan_history__default_history=True)

    assert calculate_credit_score(base) - calculate_credit_score(defaulted) == 100


@pytest.mark.parametrize(
    "age,expected_points",
    [(17, 20), (18, 30), (24, 30), (25, 60), (55, 60), (56, 20), (70, 20)],
)
def test_age_bands(strong_application: CreditApplication, age: int, expected_points: int):
    application = _with(strong_application, employment__status="unemployed", personal_info__age=age)
    # 300 + 0 + 150 + 120 + age + 60
    assert calculate_credit_score(application) == 630 + expected_points


def test_zero_monthly_expenses_does_not_divide_by_zero(strong_application: CreditApplication):
    application = _with(strong_application, financial__monthly_expenses=0, financial__bank_balance=5)
    assert months_of_runway(5, 0) == 5
    assert 300 <= calculate_credit_score(application) <= 850


def test_zero_income_is_total(strong_application: CreditApplication):
    assert math.isinf(debt_to_income_ratio(500, 0))
    assert debt_to_income_ratio(0, 0) == 0.0

    application = _with(strong_application, employment__monthly_income=0)
    assert 300 <= calculate_credit_score(application) <= 850


def test_lower_debt_never_lowers_score(strong_application: CreditApplication):
    """Score is monotone non-increasing in existing debt"""
    base = _with(strong_application, employment__status="retired", loan_history__repayment_history="fair")
    scores = [
        calculate_credit_score(_with(base, financial__existing_debts=debt))
        for debt in range(4000, -1, -250)
    ]
    assert scores == sorted(scores)


@pytest.mark.parametrize(
    "score,category",
    [(850, RiskCategory.LOW), (700, RiskCategory.LOW), (699, RiskCategory.MEDIUM),
     (600, RiskCategory.MEDIUM), (599, RiskCategory.HIGH), (300, RiskCategory.HIGH)],
)
def test_risk_category_thresholds(score: int, category: RiskCategory):
    assert get_risk_category(score) == category


def test_recommendations_for_weak_applicant(weak_application: CreditApplication):
    recommendations = get_recommendations(weak_application, 300)

    assert len(recommendations) == 5
    assert "Focus on reducing monthly debt obligations" in recommendations
    assert "Build an emergency fund covering 3-6 months of expenses" in recommendations
    assert recommendations[-1] == "Maintain consistent payments to rebuild credit trust"


def test_recommendations_do_not_affect_score(strong_application: CreditApplication):
    result = score_application(strong_application)

    assert result.score == 850
    assert result.risk_category == RiskCategory.LOW
    assert result.recommendations == []


def test_score_application_weak(weak_application: CreditApplication):
    result = score_application(weak_application)

    assert result.score == 300
    assert result.risk_category == RiskCategory.HIGH
    assert len(result.recommendations) == 5
