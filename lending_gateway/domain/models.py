"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional


class EmploymentStatus(str, Enum):
    EMPLOYED_CIVIL_SERVANT = "employed_civil_servant"
    EMPLOYED_PRIVATE = "employed_private"
    BUSINESS_OWNER = "business_owner"
    SELF_EMPLOYED = "self_employed"
    RETIRED = "retired"
    UNEMPLOYED = "unemployed"


class RepaymentHistory(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class RiskCategory(str, Enum):
    LOW = "Low Risk"
    MEDIUM = "Medium Risk"
    HIGH = "High Risk"


class CommissionPlan(str, Enum):
    STARTER = "starter"
    PROFESSIONAL = "professional"
    ENTERPRISE = "enterprise"


class CommissionStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


@dataclass
class PersonalInfo:
    age: int
    marital_status: str = "single"
    dependents: int = 0


@dataclass
class Employment:
    status: str  # EmploymentStatus value; unknown values score a fixed baseline
    monthly_income: float
    years_employed: float = 0.0
    employer: str = ""


@dataclass
class FinancialPosition:
    existing_debts: float  # monthly debt obligations
    bank_balance: float
    monthly_expenses: float


@dataclass
class LoanHistory:
    previous_loans: int = 0
    repayment_history: str = RepaymentHistory.FAIR.value
    default_history: bool = False


@dataclass
class CreditApplication:
    """Applicant record captured by the intake form"""

    personal_info: PersonalInfo
    employment: Employment
    financial: FinancialPosition
    loan_history: LoanHistory


@dataclass
class CreditScore:
    """Output of credit scoring"""

    score: int
    risk_category: RiskCategory
    recommendations: List[str] = field(default_factory=list)


@dataclass
class RiskFactors:
    """Inputs to interest rate pricing"""

    credit_score: int
    debt_to_income_ratio: float
    employment_stability: int  # months with current employer
    loan_amount: float
    loan_term: int  # repayment periods
    collateral_value: Optional[float] = None


@dataclass
class InterestRate:
    """Annualized rate with the adjustments that produced it"""

    rate: float
    explanations: List[str]
    floor_applied: bool = False


@dataclass
class BorrowerProfile:
    id: str
    credit_score: int
    employment_status: str
    monthly_income: float
    location: str
    loan_amount: float
    purpose: str = ""


@dataclass
class LoanMatchCriteria:
    """Lender-side acceptance thresholds"""

    min_credit_score: int
    max_loan_amount: float
    preferred_employment_types: List[str] = field(default_factory=list)
    geographic_preference: List[str] = field(default_factory=list)
    risk_tolerance: str = "medium"  # low | medium | high, informational only


@dataclass
class BorrowerMatch:
    borrower: BorrowerProfile
    match_score: float


@dataclass
class CommissionTier:
    tier: str
    bonus: float
    next_tier_target: Optional[float]  # None once the top tier is reached


@dataclass
class CommissionRecord:
    """Referral commission owed to a distributor for one billing period"""

    distributor_id: str
    lender_id: str
    subscription_plan: str
    monthly_amount: float
    commission_rate: float  # percent
    commission_amount: float
    period_start: date
    period_end: date
    status: CommissionStatus = CommissionStatus.PENDING
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class CommissionSummary:
    total_earned: float
    pending_amount: float
    paid_amount: float
    total_referrals: int
    active_referrals: int
    average_commission_per_referral: float
    monthly_recurring: float


@dataclass
class PlanEarnings:
    plan: str
    count: int
    commission: float


@dataclass
class ProjectedEarnings:
    monthly: float
    annual: float
    breakdown: List[PlanEarnings]


@dataclass
class PlanLimits:
    """Resource caps; -1 means unlimited"""

    max_branches: int
    max_users: int
    max_loans: int
    max_savings: int


@dataclass
class SubscriptionPlan:
    """Catalog entry for a lender subscription"""

    name: str
    description: str
    monthly_price_zmw: int
    annual_price_zmw: int
    limits: PlanLimits
    features: List[str]
    annual_discount: str = "17%"
    is_popular: bool = False

    @property
    def monthly_price(self) -> str:
        return f"ZMW {self.monthly_price_zmw:,}"

    @property
    def annual_price(self) -> str:
        return f"ZMW {self.annual_price_zmw:,}"
