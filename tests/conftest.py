"""Pytest fixtures for testing"""

import os

# Point the app at SQLite before lending_gateway.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from lending_gateway.api.main import create_app
from lending_gateway.infrastructure.database.models import Base
from lending_gateway.infrastructure.database.session import get_db
from lending_gateway.domain.models import (
    BorrowerProfile,
    CreditApplication,
    Employment,
    FinancialPosition,
    LoanHistory,
    LoanMatchCriteria,
    PersonalInfo,
)


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(db: Session) -> sessionmaker:
    """Opens extra sessions on the test database, for interleaving with db"""
    return TestingSessionLocal


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def strong_application() -> CreditApplication:
    """Civil servant, low debt, good history, 7.5 months of runway"""
    return CreditApplication(
        personal_info=PersonalInfo(age=30, marital_status="married", dependents=2),
        employment=Employment(
            status="employed_civil_servant",
            monthly_income=5000,
            years_employed=6,
            employer="Ministry of Finance",
        ),
        financial=FinancialPosition(existing_debts=500, bank_balance=15000, monthly_expenses=2000),
        loan_history=LoanHistory(previous_loans=2, repayment_history="good", default_history=False),
    )


@pytest.fixture
def weak_application() -> CreditApplication:
    """Unemployed, heavily indebted, prior default, no savings"""
    return CreditApplication(
        personal_info=PersonalInfo(age=19),
        employment=Employment(status="unemployed", monthly_income=1000),
        financial=FinancialPosition(existing_debts=900, bank_balance=100, monthly_expenses=800),
        loan_history=LoanHistory(previous_loans=3, repayment_history="poor", default_history=True),
    )


@pytest.fixture
def lender_criteria() -> LoanMatchCriteria:
    return LoanMatchCriteria(
        min_credit_score=600,
        max_loan_amount=50_000,
        preferred_employment_types=["employed_civil_servant", "employed_private"],
        geographic_preference=["Lusaka", "Ndola"],
        risk_tolerance="medium",
    )


@pytest.fixture
def borrower_pool() -> list[BorrowerProfile]:
    return [
        BorrowerProfile("b1", 700, "employed_private", 4000, "Lusaka", 20_000, "business"),
        BorrowerProfile("b2", 850, "employed_civil_servant", 9000, "Ndola", 40_000, "housing"),
        BorrowerProfile("b3", 550, "self_employed", 3000, "Kitwe", 80_000, "farming"),
        BorrowerProfile("b4", 700, "employed_private", 4500, "Lusaka", 10_000, "education"),
        BorrowerProfile("b5", 620, "business_owner", 6000, "Livingstone", 30_000, "business"),
    ]
