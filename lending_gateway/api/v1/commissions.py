"""Distributor commission endpoints: records, status transitions, tiers and projections"""

import uuid
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from lending_gateway.api.v1.schemas import (
    CommissionCreateRequest,
    CommissionListResponse,
    CommissionSchema,
    CommissionSummaryResponse,
    CommissionTierSchema,
    ProjectionResponse,
)
from lending_gateway.api.dependencies import get_request_id
from lending_gateway.infrastructure.database.session import get_db
from lending_gateway.infrastructure.database.repositories import CommissionRepository, to_commission_record
from lending_gateway.domain.models import CommissionStatus
from lending_gateway.domain.commissions import (
    calculate_annual_commission,
    calculate_projected_earnings,
    create_commission_record,
    get_commission_tier,
    summarize_commissions,
    transition_commission,
)
from lending_gateway.domain.exceptions import InvalidCommissionTransitionError
from lending_gateway.infrastructure.observability.metrics import record_commission_status
from lending_gateway.infrastructure.observability.logging import log_commission_transition

router = APIRouter()


@router.post("/commissions", response_model=CommissionSchema, status_code=201)
def create_commission(request_body: CommissionCreateRequest, db: Session = Depends(get_db)):
    """Record a pending commission for a billed referral subscription"""
    if request_body.period_end is not None and request_body.period_end < request_body.period_start:
        raise HTTPException(status_code=400, detail="period_end precedes period_start")

    record = create_commission_record(
        distributor_id=request_body.distributor_id,
        lender_id=request_body.lender_id,
        subscription_plan=request_body.subscription_plan,
        monthly_amount=request_body.monthly_amount,
        period_start=request_body.period_start,
        period_end=request_body.period_end,
    )

    db_commission = CommissionRepository(db).create_commission(record)
    db.commit()
    record_commission_status(record.status.value)

    return CommissionSchema.from_domain(to_commission_record(db_commission))


@router.get("/commissions", response_model=CommissionListResponse)
def list_commissions(
    distributor_id: str = Query(..., description="Distributor identifier"),
    db: Session = Depends(get_db),
):
    rows = CommissionRepository(db).get_commissions_by_distributor(distributor_id)
    return CommissionListResponse(
        distributor_id=distributor_id,
        commissions=[CommissionSchema.from_domain(to_commission_record(row)) for row in rows],
    )


@router.get("/commissions/summary", response_model=CommissionSummaryResponse)
def get_commission_summary(
    distributor_id: str = Query(..., description="Distributor identifier"),
    db: Session = Depends(get_db),
):
    """
    Aggregate a distributor's earnings.

    Returns:
        Totals by status, referral counts, monthly recurring commission,
        its annual projection and the earnings tier
    """
    rows = CommissionRepository(db).get_commissions_by_distributor(distributor_id)
    summary = summarize_commissions([to_commission_record(row) for row in rows])
    tier = get_commission_tier(summary.total_earned)

    return CommissionSummaryResponse(
        distributor_id=distributor_id,
        total_earned=summary.total_earned,
        pending_amount=summary.pending_amount,
        paid_amount=summary.paid_amount,
        total_referrals=summary.total_referrals,
        active_referrals=summary.active_referrals,
        average_commission_per_referral=summary.average_commission_per_referral,
        monthly_recurring=summary.monthly_recurring,
        annual_projection=calculate_annual_commission(summary.monthly_recurring),
        tier=CommissionTierSchema.from_domain(tier),
    )


@router.get("/commissions/tier", response_model=CommissionTierSchema)
def get_tier(total_earned: float = Query(..., description="Lifetime commission earned")):
    return CommissionTierSchema.from_domain(get_commission_tier(total_earned))


@router.get("/commissions/projection", response_model=ProjectionResponse)
def get_projection(referrals: int = Query(..., ge=0, description="Number of referred lenders")):
    return ProjectionResponse.from_domain(referrals, calculate_projected_earnings(referrals))


def _change_status(commission_id: str, new_status: CommissionStatus, request: Request, db: Session) -> CommissionSchema:
    request_id = get_request_id(request)

    try:
        commission_uuid = uuid.UUID(commission_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid commission ID format")

    repo = CommissionRepository(db)
    db_commission = repo.get_commission_by_id(commission_uuid)
    if not db_commission:
        raise HTTPException(status_code=404, detail="Commission not found")

    record = to_commission_record(db_commission)
    previous = record.status

    try:
        transition_commission(record, new_status)
    except InvalidCommissionTransitionError as e:
        logging.warning(f"Rejected commission transition: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))

    if not repo.transition_status(commission_uuid, previous, record.status):
        db.rollback()
        logging.warning(
            f"Commission {commission_id} changed status concurrently", extra={"request_id": request_id}
        )
        raise HTTPException(status_code=409, detail="Commission status changed concurrently")
    db.commit()
    db.refresh(db_commission)

    record_commission_status(record.status.value)
    log_commission_transition(request_id, commission_id, previous.value, record.status.value)

    return CommissionSchema.from_domain(to_commission_record(db_commission))


@router.post("/commissions/{commission_id}/pay", response_model=CommissionSchema)
def pay_commission(commission_id: str, request: Request, db: Session = Depends(get_db)):
    """Mark a pending commission as paid"""
    return _change_status(commission_id, CommissionStatus.PAID, request, db)


@router.post("/commissions/{commission_id}/cancel", response_model=CommissionSchema)
def cancel_commission(commission_id: str, request: Request, db: Session = Depends(get_db)):
    """Cancel a pending commission"""
    return _change_status(commission_id, CommissionStatus.CANCELLED, request, db)
