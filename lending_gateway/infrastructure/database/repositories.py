"""Data access layer for assessments and commissions"""

import math
import uuid
from dataclasses import asdict
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.sql import func
from lending_gateway.infrastructure.database.models import CreditAssessment, DistributorCommission
from lending_gateway.domain.models import (
    CommissionRecord,
    CommissionStatus,
    CreditApplication,
    CreditScore,
)
from lending_gateway.domain.credit_scoring import debt_to_income_ratio


class AssessmentRepository:
    """Repository for scored credit applications"""

    def __init__(self, db: Session):
        self.db = db

    def create_assessment(
        self,
        applicant_id: Optional[str],
        application: CreditApplication,
        result: CreditScore,
    ) -> CreditAssessment:
        """Persist a credit assessment"""
        ratio = debt_to_income_ratio(
            application.financial.existing_debts,
            application.employment.monthly_income,
        )
        db_assessment = CreditAssessment(
            applicant_id=applicant_id,
            score=result.score,
            risk_category=result.risk_category.value,
            employment_status=application.employment.status,
            debt_to_income_ratio=None if math.isinf(ratio) else ratio,
            default_history=application.loan_history.default_history,
            recommendations=list(result.recommendations),
            application=asdict(application),
        )
        self.db.add(db_assessment)
        self.db.flush()  # Get ID without committing
        return db_assessment

    def get_assessments_by_applicant(self, applicant_id: str, limit: int = 10) -> List[CreditAssessment]:
        """Fetch recent assessments for an applicant"""
        return (
            self.db.query(CreditAssessment)
            .filter(CreditAssessment.applicant_id == applicant_id)
            .order_by(CreditAssessment.created_at.desc())
            .limit(limit)
            .all()
        )


class CommissionRepository:
    """Repository for distributor commissions"""

    def __init__(self, db: Session):
        self.db = db

    def create_commission(self, record: CommissionRecord) -> DistributorCommission:
        db_commission = DistributorCommission(
            distributor_id=record.distributor_id,
            lender_id=record.lender_id,
            subscription_plan=record.subscription_plan,
            monthly_amount=record.monthly_amount,
            commission_rate=record.commission_rate,
            commission_amount=record.commission_amount,
            period_start=record.period_start,
            period_end=record.period_end,
            status=CommissionStatus(record.status).value,
        )
        self.db.add(db_commission)
        self.db.flush()
        return db_commission

    def get_commission_by_id(self, commission_id: uuid.UUID) -> Optional[DistributorCommission]:
        return (
            self.db.query(DistributorCommission)
            .filter(DistributorCommission.id == commission_id)
            .first()
        )

    def get_commissions_by_distributor(self, distributor_id: str) -> List[DistributorCommission]:
        """All commissions for a distributor, newest period first"""
        return (
            self.db.query(DistributorCommission)
            .filter(DistributorCommission.distributor_id == distributor_id)
            .order_by(DistributorCommission.period_start.desc(), DistributorCommission.created_at.desc())
            .all()
        )

    def transition_status(
        self,
        commission_id: uuid.UUID,
        from_status: CommissionStatus,
        to_status: CommissionStatus,
    ) -> bool:
        """
        Move a commission between statuses with a single conditional UPDATE.

        The row only changes while it still holds from_status, so two
        concurrent transitions cannot both succeed.

        Returns:
            False when the row no longer holds from_status
        """
        updated = (
            self.db.query(DistributorCommission)
            .filter(
                DistributorCommission.id == commission_id,
                DistributorCommission.status == from_status.value,
            )
            .update(
                {
                    DistributorCommission.status: to_status.value,
                    DistributorCommission.updated_at: func.now(),
                },
                synchronize_session=False,
            )
        )
        return updated == 1


def to_commission_record(db_commission: DistributorCommission) -> CommissionRecord:
    """Map an ORM row back to the domain record"""
    return CommissionRecord(
        id=str(db_commission.id),
        distributor_id=db_commission.distributor_id,
        lender_id=db_commission.lender_id,
        subscription_plan=db_commission.subscription_plan,
        monthly_amount=db_commission.monthly_amount,
        commission_rate=db_commission.commission_rate,
        commission_amount=db_commission.commission_amount,
        period_start=db_commission.period_start,
        period_end=db_commission.period_end,
        status=CommissionStatus(db_commission.status),
        created_at=db_commission.created_at,
        updated_at=db_commission.updated_at,
    )
