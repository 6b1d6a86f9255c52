"""GET /v1/plans - subscription plan catalog"""

from typing import List
from fastapi import APIRouter, HTTPException

from lending_gateway.api.v1.schemas import PlanLimitsSchema, SubscriptionPlanSchema
from lending_gateway.domain.models import SubscriptionPlan
from lending_gateway.domain.subscription_plans import (
    SUBSCRIPTION_PLANS,
    calculate_annual_savings,
    require_subscription_plan,
)
from lending_gateway.domain.commissions import get_commission_rate
from lending_gateway.domain.exceptions import PlanNotFoundError

router = APIRouter()


def _to_schema(plan: SubscriptionPlan) -> SubscriptionPlanSchema:
    return SubscriptionPlanSchema(
        name=plan.name,
        description=plan.description,
        monthly_price=plan.monthly_price,
        annual_price=plan.annual_price,
        monthly_price_zmw=plan.monthly_price_zmw,
        annual_price_zmw=plan.annual_price_zmw,
        annual_savings_zmw=calculate_annual_savings(plan),
        annual_discount=plan.annual_discount,
        is_popular=plan.is_popular,
        limits=PlanLimitsSchema(**vars(plan.limits)),
        features=plan.features,
        commission_rate=get_commission_rate(plan.name),
    )


@router.get("/plans", response_model=List[SubscriptionPlanSchema])
def list_plans():
    return [_to_schema(plan) for plan in SUBSCRIPTION_PLANS]


@router.get("/plans/{plan_name}", response_model=SubscriptionPlanSchema)
def get_plan(plan_name: str):
    """Case-insensitive plan lookup"""
    try:
        plan = require_subscription_plan(plan_name)
    except PlanNotFoundError:
        raise HTTPException(status_code=404, detail="Plan not found")

    return _to_schema(plan)
