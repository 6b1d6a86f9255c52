"""Integration tests for API endpoints"""

import uuid
import pytest
from fastapi.testclient import TestClient
from lending_gateway.domain.models import CommissionStatus
from lending_gateway.infrastructure.database.repositories import CommissionRepository


@pytest.fixture
def application_payload() -> dict:
    return {
        "applicant_id": "applicant-1",
        "personal_info": {"age": 30, "marital_status": "married", "dependents": 2},
        "employment": {
            "status": "employed_civil_servant",
            "monthly_income": 5000,
            "years_employed": 6,
            "employer": "Ministry of Finance",
        },
        "financial": {"existing_debts": 500, "bank_balance": 15000, "monthly_expenses": 2000},
        "loan_history": {"previous_loans": 2, "repayment_history": "good", "default_history": False},
    }


def _create_commission(client: TestClient, **overrides) -> dict:
    payload = {
        "distributor_id": "dist-1",
        "lender_id": "lender-a",
        "subscription_plan": "professional",
        "monthly_amount": 300,
        "period_start": "2024-06-01",
    }
    payload.update(overrides)
    response = client.post("/v1/commissions", json=payload)
    assert response.status_code == 201
    return response.json()


def test_health_endpoint(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_request_id_header(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"
    assert client.get("/health").headers["X-Request-ID"]


def test_metrics_endpoint(client: TestClient, application_payload: dict):
    client.post("/v1/credit/score", json=application_payload)

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "lending_credit_assessment_total" in response.text


def test_credit_score_endpoint(client: TestClient, application_payload: dict):
    response = client.post("/v1/credit/score", json=application_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["score"] == 850
    assert data["risk_category"] == "Low Risk"
    assert data["recommendations"] == []
    assert data["assessment_id"]


def test_credit_score_unknown_status_is_scored(client: TestClient, application_payload: dict):
    application_payload["employment"]["status"] = "freelance_artist"
    application_payload["loan_history"]["repayment_history"] = "unknown"

    response = client.post("/v1/credit/score", json=application_payload)

    assert response.status_code == 200
    # 300 + 50 + 150 + 0 + 60 + 60
    assert response.json()["score"] == 620


def test_credit_score_validation(client: TestClient, application_payload: dict):
    del application_payload["financial"]
    response = client.post("/v1/credit/score", json=application_payload)
    assert response.status_code == 422


def test_credit_history_endpoint(client: TestClient, application_payload: dict):
    client.post("/v1/credit/score", json=application_payload)
    application_payload["loan_history"]["default_history"] = True
    client.post("/v1/credit/score", json=application_payload)

    response = client.get("/v1/credit/history?applicant_id=applicant-1")

    assert response.status_code == 200
    data = response.json()
    assert data["applicant_id"] == "applicant-1"
    assert sorted(a["score"] for a in data["assessments"]) == [790, 850]


def test_rate_quote_endpoint(client: TestClient):
    response = client.post(
        "/v1/rates/quote",
        json={
            "credit_score": 780,
            "debt_to_income_ratio": 0.1,
            "employment_stability": 30,
            "loan_amount": 50000,
            "loan_term": 12,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["rate"] == 8.0
    assert data["floor_applied"] is False
    assert len(data["explanations"]) == 3


def test_rate_quote_rejects_non_positive_amount(client: TestClient):
    response = client.post(
        "/v1/rates/quote",
        json={
            "credit_score": 700,
            "debt_to_income_ratio": 0.1,
            "employment_stability": 30,
            "loan_amount": 0,
            "loan_term": 12,
        },
    )
    assert response.status_code == 422


def test_matches_endpoint(client: TestClient):
    criteria = {
        "min_credit_score": 600,
        "max_loan_amount": 50000,
        "preferred_employment_types": ["employed_private"],
        "geographic_preference": ["Lusaka"],
    }
    borrowers = [
        {"id": "b1", "credit_score": 700, "employment_status": "employed_private",
         "monthly_income": 4000, "location": "Lusaka", "loan_amount": 20000, "purpose": "business"},
        {"id": "b2", "credit_score": 850, "employment_status": "employed_private",
         "monthly_income": 9000, "location": "Lusaka", "loan_amount": 40000},
        {"id": "b3", "credit_score": 500, "employment_status": "retired",
         "monthly_income": 1000, "location": "Kitwe", "loan_amount": 90000},
    ]

    response = client.post("/v1/matches", json={"criteria": criteria, "borrowers": borrowers})

    assert response.status_code == 200
    matches = response.json()["matches"]
    assert [m["id"] for m in matches] == ["b2", "b1"]
    assert matches[0]["match_score"] == 100.0
    assert matches[1]["purpose"] == "business"


def test_match_score_endpoint(client: TestClient):
    response = client.post(
        "/v1/matches/score",
        json={
            "criteria": {"min_credit_score": 600, "max_loan_amount": 50000},
            "borrower": {"id": "b9", "credit_score": 550, "employment_status": "retired",
                         "monthly_income": 1000, "location": "Kitwe", "loan_amount": 10000},
        },
    )

    assert response.status_code == 200
    assert response.json() == {"borrower_id": "b9", "match_score": 30.0}


def test_create_commission_endpoint(client: TestClient):
    data = _create_commission(client)

    assert data["status"] == "pending"
    assert data["commission_rate"] == 25
    assert data["commission_amount"] == 75
    assert data["period_end"] == "2024-06-30"


def test_create_commission_rejects_inverted_period(client: TestClient):
    response = client.post(
        "/v1/commissions",
        json={
            "distributor_id": "dist-1",
            "lender_id": "lender-a",
            "subscription_plan": "starter",
            "monthly_amount": 100,
            "period_start": "2024-06-01",
            "period_end": "2024-05-01",
        },
    )
    assert response.status_code == 400


def test_commission_round_trip(client: TestClient):
    created = _create_commission(client, monthly_amount=123.45, subscription_plan="enterprise")

    listed = client.get("/v1/commissions?distributor_id=dist-1").json()["commissions"]

    assert listed == [created]


def test_pay_and_cancel_commission(client: TestClient):
    first = _create_commission(client)
    second = _create_commission(client, lender_id="lender-b")

    paid = client.post(f"/v1/commissions/{first['id']}/pay")
    assert paid.status_code == 200
    assert paid.json()["status"] == "paid"

    cancelled = client.post(f"/v1/commissions/{second['id']}/cancel")
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"


def test_commission_update_time_set_on_transition(client: TestClient):
    commission = _create_commission(client)
    assert commission["created_at"]
    assert commission["updated_at"] is None

    paid = client.post(f"/v1/commissions/{commission['id']}/pay").json()

    assert paid["updated_at"] is not None
    assert paid["created_at"] == commission["created_at"]


def test_commission_changed_by_another_session_rejects_transition(client: TestClient, session_factory):
    commission = _create_commission(client)
    other = session_factory()
    try:
        repo = CommissionRepository(other)
        assert repo.transition_status(uuid.UUID(commission["id"]), CommissionStatus.PENDING, CommissionStatus.CANCELLED)
        other.commit()
    finally:
        other.close()

    response = client.post(f"/v1/commissions/{commission['id']}/pay")

    assert response.status_code == 409
    listed = client.get("/v1/commissions?distributor_id=dist-1").json()["commissions"]
    assert listed[0]["status"] == "cancelled"


def test_terminal_commission_cannot_transition(client: TestClient):
    commission = _create_commission(client)
    client.post(f"/v1/commissions/{commission['id']}/pay")

    response = client.post(f"/v1/commissions/{commission['id']}/cancel")

    assert response.status_code == 409
    listed = client.get("/v1/commissions?distributor_id=dist-1").json()["commissions"]
    assert listed[0]["status"] == "paid"


def test_commission_transition_not_found(client: TestClient):
    response = client.post("/v1/commissions/00000000-0000-0000-0000-000000000000/pay")
    assert response.status_code == 404

    response = client.post("/v1/commissions/not-a-uuid/pay")
    assert response.status_code == 400


def test_commission_summary_endpoint(client: TestClient):
    first = _create_commission(client, subscription_plan="starter", monthly_amount=450)
    _create_commission(client, lender_id="lender-b", subscription_plan="enterprise", monthly_amount=1000)
    client.post(f"/v1/commissions/{first['id']}/pay")

    response = client.get("/v1/commissions/summary?distributor_id=dist-1")

    assert response.status_code == 200
    data = response.json()
    assert data["paid_amount"] == pytest.approx(90)
    assert data["pending_amount"] == pytest.approx(300)
    assert data["total_referrals"] == 2
    assert data["monthly_recurring"] == pytest.approx(390)
    assert data["annual_projection"] == pytest.approx(4680)
    assert data["tier"] == {"tier": "Bronze", "bonus": 0.0, "next_tier_target": 10000}


def test_commission_tier_endpoint(client: TestClient):
    response = client.get("/v1/commissions/tier?total_earned=100000")
    assert response.json() == {"tier": "Diamond", "bonus": 0.05, "next_tier_target": None}


def test_commission_projection_endpoint(client: TestClient):
    response = client.get("/v1/commissions/projection?referrals=10")

    assert response.status_code == 200
    data = response.json()
    assert data["monthly"] == pytest.approx(720)
    assert len(data["breakdown"]) == 3


def test_plans_endpoints(client: TestClient):
    plans = client.get("/v1/plans").json()
    assert [p["name"] for p in plans] == ["Starter", "Growth", "Wealth", "Fortune"]

    growth = client.get("/v1/plans/growth").json()
    assert growth["is_popular"] is True
    assert growth["annual_savings_zmw"] == 1900
    assert growth["limits"]["max_branches"] == 2

    assert client.get("/v1/plans/platinum").status_code == 404
