"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from lending_gateway.domain.models import (
    BorrowerProfile,
    CommissionRecord,
    CommissionStatus,
    CommissionTier,
    CreditApplication,
    CreditScore,
    Employment,
    FinancialPosition,
    InterestRate,
    LoanHistory,
    LoanMatchCriteria,
    PersonalInfo,
    PlanEarnings,
    ProjectedEarnings,
    RiskCategory,
    RiskFactors,
)


class PersonalInfoSchema(BaseModel):
    age: int = Field(..., ge=0)
    marital_status: str = "single"
    dependents: int = Field(0, ge=0)


class EmploymentSchema(BaseModel):
    # Free-form so unrecognized statuses reach the scorer's default
    status: str
    monthly_income: float = Field(..., ge=0)
    years_employed: float = Field(0.0, ge=0)
    employer: str = ""


class FinancialSchema(BaseModel):
    existing_debts: float = Field(..., ge=0, description="Monthly debt obligations")
    bank_balance: float
    monthly_expenses: float = Field(..., ge=0)


class LoanHistorySchema(BaseModel):
    previous_loans: int = Field(0, ge=0)
    repayment_history: str = "fair"
    default_history: bool = False


class CreditApplicationSchema(BaseModel):
    """Request body for POST /v1/credit/score"""

    applicant_id: Optional[str] = Field(None, description="Caller's applicant identifier")
    personal_info: PersonalInfoSchema
    employment: EmploymentSchema
    financial: FinancialSchema
    loan_history: LoanHistorySchema = Field(default_factory=LoanHistorySchema)

    def to_domain(self) -> CreditApplication:
        return CreditApplication(
            personal_info=PersonalInfo(**self.personal_info.model_dump()),
            employment=Employment(**self.employment.model_dump()),
            financial=FinancialPosition(**self.financial.model_dump()),
            loan_history=LoanHistory(**self.loan_history.model_dump()),
        )


class CreditScoreResponse(BaseModel):
    """Response for POST /v1/credit/score"""

    assessment_id: str
    score: int
    risk_category: str
    recommendations: List[str]

    @classmethod
    def from_domain(cls, assessment_id: str, result: CreditScore) -> "CreditScoreResponse":
        return cls(
            assessment_id=assessment_id,
            score=result.score,
            risk_category=result.risk_category.value,
            recommendations=list(result.recommendations),
        )

    def to_domain(self) -> CreditScore:
        return CreditScore(
            score=self.score,
            risk_category=RiskCategory(self.risk_category),
            recommendations=list(self.recommendations),
        )


class AssessmentItem(BaseModel):
    assessment_id: str
    score: int
    risk_category: str
    created_at: str


class AssessmentHistoryResponse(BaseModel):
    """Response for GET /v1/credit/history"""

    applicant_id: str
    assessments: List[AssessmentItem]


class RiskFactorsSchema(BaseModel):
    """Request body for POST /v1/rates/quote"""

    credit_score: int
    debt_to_income_ratio: float = Field(..., ge=0)
    employment_stability: int = Field(..., ge=0, description="Months with current employer")
    loan_amount: float = Field(..., gt=0)
    loan_term: int = Field(..., gt=0, description="Repayment periods")
    collateral_value: Optional[float] = Field(None, ge=0)

    def to_domain(self) -> RiskFactors:
        return RiskFactors(**self.model_dump())


class RateQuoteResponse(BaseModel):
    rate: float
    explanations: List[str]
    floor_applied: bool

    @classmethod
    def from_domain(cls, quote: InterestRate) -> "RateQuoteResponse":
        return cls(rate=quote.rate, explanations=list(quote.explanations), floor_applied=quote.floor_applied)

    def to_domain(self) -> InterestRate:
        return InterestRate(rate=self.rate, explanations=list(self.explanations), floor_applied=self.floor_applied)


class BorrowerProfileSchema(BaseModel):
    id: str = Field(..., min_length=1)
    credit_score: int
    employment_status: str
    monthly_income: float = Field(..., ge=0)
    location: str
    loan_amount: float = Field(..., gt=0)
    purpose: str = ""

    def to_domain(self) -> BorrowerProfile:
        return BorrowerProfile(**self.model_dump())


class MatchCriteriaSchema(BaseModel):
    min_credit_score: int
    max_loan_amount: float = Field(..., gt=0)
    preferred_employment_types: List[str] = []
    geographic_preference: List[str] = []
    risk_tolerance: Literal["low", "medium", "high"] = "medium"

    def to_domain(self) -> LoanMatchCriteria:
        return LoanMatchCriteria(**self.model_dump())


class MatchRequest(BaseModel):
    """Request body for POST /v1/matches"""

    criteria: MatchCriteriaSchema
    borrowers: List[BorrowerProfileSchema]


class MatchScoreRequest(BaseModel):
    """Request body for POST /v1/matches/score"""

    criteria: MatchCriteriaSchema
    borrower: BorrowerProfileSchema


class MatchItem(BorrowerProfileSchema):
    match_score: float


class MatchResponse(BaseModel):
    matches: List[MatchItem]


class MatchScoreResponse(BaseModel):
    borrower_id: str
    match_score: float


class CommissionCreateRequest(BaseModel):
    """Request body for POST /v1/commissions"""

    distributor_id: str = Field(..., min_length=1)
    lender_id: str = Field(..., min_length=1)
    subscription_plan: str = Field(..., min_length=1)
    monthly_amount: float = Field(..., ge=0)
    period_start: date
    period_end: Optional[date] = None


class CommissionSchema(BaseModel):
    id: str
    distributor_id: str
    lender_id: str
    subscription_plan: str
    monthly_amount: float
    commission_rate: float
    commission_amount: float
    period_start: date
    period_end: date
    status: Literal["pending", "paid", "cancelled"]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, record: CommissionRecord) -> "CommissionSchema":
        return cls(
            id=record.id,
            distributor_id=record.distributor_id,
            lender_id=record.lender_id,
            subscription_plan=record.subscription_plan,
            monthly_amount=record.monthly_amount,
            commission_rate=record.commission_rate,
            commission_amount=record.commission_amount,
            period_start=record.period_start,
            period_end=record.period_end,
            status=CommissionStatus(record.status).value,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def to_domain(self) -> CommissionRecord:
        fields = self.model_dump()
        fields["status"] = CommissionStatus(fields["status"])
        return CommissionRecord(**fields)


class CommissionListResponse(BaseModel):
    distributor_id: str
    commissions: List[CommissionSchema]


class CommissionTierSchema(BaseModel):
    tier: str
    bonus: float
    next_tier_target: Optional[float] = None

    @classmethod
    def from_domain(cls, tier: CommissionTier) -> "CommissionTierSchema":
        return cls(tier=tier.tier, bonus=tier.bonus, next_tier_target=tier.next_tier_target)

    def to_domain(self) -> CommissionTier:
        return CommissionTier(tier=self.tier, bonus=self.bonus, next_tier_target=self.next_tier_target)


class CommissionSummaryResponse(BaseModel):
    """Response for GET /v1/commissions/summary"""

    distributor_id: str
    total_earned: float
    pending_amount: float
    paid_amount: float
    total_referrals: int
    active_referrals: int
    average_commission_per_referral: float
    monthly_recurring: float
    annual_projection: float
    tier: CommissionTierSchema


class PlanEarningsSchema(BaseModel):
    plan: str
    count: int
    commission: float


class ProjectionResponse(BaseModel):
    referrals: int
    monthly: float
    annual: float
    breakdown: List[PlanEarningsSchema]

    @classmethod
    def from_domain(cls, referrals: int, projection: ProjectedEarnings) -> "ProjectionResponse":
        return cls(
            referrals=referrals,
            monthly=projection.monthly,
            annual=projection.annual,
            breakdown=[PlanEarningsSchema(**vars(item)) for item in projection.breakdown],
        )

    def to_domain(self) -> ProjectedEarnings:
        return ProjectedEarnings(
            monthly=self.monthly,
            annual=self.annual,
            breakdown=[PlanEarnings(**item.model_dump()) for item in self.breakdown],
        )


class PlanLimitsSchema(BaseModel):
    max_branches: int
    max_users: int
    max_loans: int
    max_savings: int


class SubscriptionPlanSchema(BaseModel):
    name: str
    description: str
    monthly_price: str
    annual_price: str
    monthly_price_zmw: int
    annual_price_zmw: int
    annual_savings_zmw: int
    annual_discount: str
    is_popular: bool
    limits: PlanLimitsSchema
    features: List[str]
    commission_rate: float
