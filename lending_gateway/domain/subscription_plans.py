"""Static catalog of lender subscription plans"""

from typing import List, Optional
from lending_gateway.domain.models import PlanLimits, SubscriptionPlan
from lending_gateway.domain.exceptions import PlanNotFoundError

UNLIMITED = -1

_CORE_FEATURES = [
    "14-day free trial",
    "Quick self-signup process",
    "All core lending features included",
]

SUBSCRIPTION_PLANS: List[SubscriptionPlan] = [
    SubscriptionPlan(
        name="Starter",
        description="Perfect for new lending institutions",
        monthly_price_zmw=450,
        annual_price_zmw=4500,
        limits=PlanLimits(max_branches=1, max_users=2, max_loans=150, max_savings=100),
        features=_CORE_FEATURES + [
            "Loan management system",
            "Borrower profiles & credit scoring",
            "Payment tracking & collections",
            "Basic reporting & analytics",
            "SMS & email notifications",
        ],
    ),
    SubscriptionPlan(
        name="Growth",
        description="For growing microfinance institutions",
        monthly_price_zmw=950,
        annual_price_zmw=9500,
        limits=PlanLimits(max_branches=2, max_users=5, max_loans=350, max_savings=250),
        features=_CORE_FEATURES + [
            "Multi-branch management",
            "Staff role management",
            "Advanced reporting suite",
            "Automated loan calculations",
            "Guarantor management",
        ],
        is_popular=True,
    ),
    SubscriptionPlan(
        name="Wealth",
        description="For established lending businesses",
        monthly_price_zmw=1800,
        annual_price_zmw=18000,
        limits=PlanLimits(max_branches=5, max_users=15, max_loans=750, max_savings=500),
        features=_CORE_FEATURES + [
            "Multi-location management",
            "Advanced user permissions",
            "Comprehensive analytics",
            "API integrations",
            "Custom reporting",
        ],
    ),
    SubscriptionPlan(
        name="Fortune",
        description="Enterprise solution for major institutions",
        monthly_price_zmw=5000,
        annual_price_zmw=50000,
        limits=PlanLimits(
            max_branches=UNLIMITED,
            max_users=UNLIMITED,
            max_loans=UNLIMITED,
            max_savings=UNLIMITED,
        ),
        features=[
            "14-day free trial",
            "White-glove onboarding",
            "All core lending features included",
            "Unlimited everything",
            "Complete customization",
            "24/7 dedicated support",
            "On-premise deployment options",
            "Custom development",
        ],
    ),
]


def get_subscription_plan(plan_name: str) -> Optional[SubscriptionPlan]:
    """Case-insensitive catalog lookup"""
    return next((p for p in SUBSCRIPTION_PLANS if p.name.lower() == plan_name.lower()), None)


def require_subscription_plan(plan_name: str) -> SubscriptionPlan:
    plan = get_subscription_plan(plan_name)
    if plan is None:
        raise PlanNotFoundError(f"Unknown subscription plan: {plan_name}")
    return plan


def get_plan_limits(plan_name: str) -> Optional[PlanLimits]:
    plan = get_subscription_plan(plan_name)
    return plan.limits if plan else None


def calculate_annual_savings(plan: SubscriptionPlan) -> int:
    """Saving from paying annually instead of twelve monthly payments"""
    return plan.monthly_price_zmw * 12 - plan.annual_price_zmw
