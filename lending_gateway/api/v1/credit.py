"""POST /v1/credit/score and GET /v1/credit/history - credit scoring endpoints"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from lending_gateway.api.v1.schemas import (
    AssessmentHistoryResponse,
    AssessmentItem,
    CreditApplicationSchema,
    CreditScoreResponse,
)
from lending_gateway.api.dependencies import get_request_id, get_settings
from lending_gateway.config import Settings
from lending_gateway.infrastructure.database.session import get_db
from lending_gateway.infrastructure.database.repositories import AssessmentRepository
from lending_gateway.domain.credit_scoring import score_application
from lending_gateway.infrastructure.observability.metrics import record_credit_assessment
from lending_gateway.infrastructure.observability.logging import log_credit_assessment

router = APIRouter()


@router.post("/credit/score", response_model=CreditScoreResponse)
def create_credit_assessment(
    request_body: CreditApplicationSchema,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Score a credit application.

    Flow:
    1. Score the application and classify its risk
    2. Persist the assessment
    3. Return score, risk category and recommendations
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        application = request_body.to_domain()
        result = score_application(application)

        db_assessment = AssessmentRepository(db).create_assessment(
            applicant_id=request_body.applicant_id,
            application=application,
            result=result,
        )
        db.commit()

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_credit_assessment(result.risk_category.value)
    log_credit_assessment(request_id, request_body.applicant_id, result.score, result.risk_category.value, duration_ms)

    return CreditScoreResponse.from_domain(str(db_assessment.id), result)


@router.get("/credit/history", response_model=AssessmentHistoryResponse)
def get_assessment_history(
    applicant_id: str = Query(..., description="Applicant identifier"),
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_settings),
):
    """Retrieve recent credit assessments for an applicant"""
    assessments = AssessmentRepository(db).get_assessments_by_applicant(
        applicant_id, limit=app_settings.history_limit
    )

    items = [
        AssessmentItem(
            assessment_id=str(a.id),
            score=a.score,
            risk_category=a.risk_category,
            created_at=a.created_at.isoformat(),
        )
        for a in assessments
    ]

    return AssessmentHistoryResponse(applicant_id=applicant_id, assessments=items)
