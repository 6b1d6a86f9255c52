"""SQLAlchemy ORM models for stored assessments and commissions"""

import uuid
from sqlalchemy import Column, Boolean, Float, DateTime, Date, Integer, Text, JSON, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class CreditAssessment(Base):
    """Scored credit application"""

    __tablename__ = "credit_assessment"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    applicant_id = Column(Text, nullable=True, index=True)
    score = Column(Integer, nullable=False)
    risk_category = Column(Text, nullable=False)
    employment_status = Column(Text, nullable=False)
    debt_to_income_ratio = Column(Float, nullable=True)  # NULL when income is zero
    default_history = Column(Boolean, nullable=False)
    recommendations = Column(JSON, nullable=False, default=list)
    application = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class DistributorCommission(Base):
    """Referral commission owed to a distributor for one billing period"""

    __tablename__ = "distributor_commission"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    distributor_id = Column(Text, nullable=False, index=True)
    lender_id = Column(Text, nullable=False, index=True)
    subscription_plan = Column(Text, nullable=False)
    monthly_amount = Column(Float, nullable=False)
    commission_rate = Column(Float, nullable=False)
    commission_amount = Column(Float, nullable=False)
    period_start = Column(Date, nullable=False)
    period_end = Column(Date, nullable=False)
    status = Column(Text, nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())  # NULL until the first status change
