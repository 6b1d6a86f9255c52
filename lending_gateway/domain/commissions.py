"""Distributor referral commissions and earnings tiers"""

import math
from datetime import date
from typing import Dict, List, Optional
from lending_gateway.domain.models import (
    CommissionPlan,
    CommissionRecord,
    CommissionStatus,
    CommissionSummary,
    CommissionTier,
    PlanEarnings,
    ProjectedEarnings,
)
from lending_gateway.domain.exceptions import InvalidCommissionTransitionError
from lending_gateway.utils.date_utils import billing_period

COMMISSION_RATES: Dict[CommissionPlan, float] = {
    CommissionPlan.STARTER: 0.20,
    CommissionPlan.PROFESSIONAL: 0.25,
    CommissionPlan.ENTERPRISE: 0.30,
}
DEFAULT_COMMISSION_RATE = 0.20

# (threshold, tier, bonus, next tier target), highest first
COMMISSION_TIERS = [
    (100_000, "Diamond", 0.05, None),
    (50_000, "Platinum", 0.03, 100_000),
    (25_000, "Gold", 0.02, 50_000),
    (10_000, "Silver", 0.01, 25_000),
    (0, "Bronze", 0.0, 10_000),
]

# Reference monthly subscription prices used for earnings projections
PROJECTION_PRICES: Dict[CommissionPlan, float] = {
    CommissionPlan.STARTER: 150,
    CommissionPlan.PROFESSIONAL: 300,
    CommissionPlan.ENTERPRISE: 500,
}

ALLOWED_TRANSITIONS = {
    CommissionStatus.PENDING: {CommissionStatus.PAID, CommissionStatus.CANCELLED},
    CommissionStatus.PAID: set(),
    CommissionStatus.CANCELLED: set(),
}


def commission_fraction(plan: str) -> float:
    """
    Commission as a fraction of the subscription.

    Plan names match exactly, so "Enterprise" is an unknown plan and earns
    the default like any other.
    """
    try:
        return COMMISSION_RATES[CommissionPlan(plan)]
    except ValueError:
        return DEFAULT_COMMISSION_RATE


def calculate_commission(subscription_amount: float, plan: str) -> float:
    return subscription_amount * commission_fraction(plan)


def get_commission_rate(plan: str) -> float:
    """Commission rate as a percentage (20, 25, 30)"""
    return round(commission_fraction(plan) * 100, 2)


def calculate_annual_commission(monthly_commission: float) -> float:
    return monthly_commission * 12


def get_commission_tier(total_earned: float) -> CommissionTier:
    """
    Classify lifetime earnings into a bonus tier.

    - >= 100,000: Diamond (+5%), top tier
    - >= 50,000:  Platinum (+3%)
    - >= 25,000:  Gold (+2%)
    - >= 10,000:  Silver (+1%)
    - otherwise:  Bronze (no bonus)
    """
    for threshold, tier, bonus, next_target in COMMISSION_TIERS:
        if total_earned >= threshold:
            return CommissionTier(tier=tier, bonus=bonus, next_tier_target=next_target)

    # Negative totals land in the bottom tier
    _, tier, bonus, next_target = COMMISSION_TIERS[-1]
    return CommissionTier(tier=tier, bonus=bonus, next_tier_target=next_target)


def calculate_projected_earnings(referrals: int) -> ProjectedEarnings:
    """
    Project monthly and annual commission for a number of referrals.

    Assumes 40% starter, 40% professional and the remainder enterprise.
    Negative referral counts project as zero.
    """
    referrals = max(referrals, 0)
    starter = math.floor(referrals * 0.4)
    professional = math.floor(referrals * 0.4)
    enterprise = referrals - starter - professional

    breakdown = [
        PlanEarnings(
            plan=plan.value,
            count=count,
            commission=count * calculate_commission(PROJECTION_PRICES[plan], plan.value),
        )
        for plan, count in (
            (CommissionPlan.STARTER, starter),
            (CommissionPlan.PROFESSIONAL, professional),
            (CommissionPlan.ENTERPRISE, enterprise),
        )
    ]
    monthly = sum(item.commission for item in breakdown)

    return ProjectedEarnings(monthly=monthly, annual=calculate_annual_commission(monthly), breakdown=breakdown)


def create_commission_record(
    distributor_id: str,
    lender_id: str,
    subscription_plan: str,
    monthly_amount: float,
    period_start: date,
    period_end: Optional[date] = None,
) -> CommissionRecord:
    """Build a pending commission for a billed referral subscription"""
    if period_end is None:
        _, period_end = billing_period(period_start)

    return CommissionRecord(
        distributor_id=distributor_id,
        lender_id=lender_id,
        subscription_plan=subscription_plan,
        monthly_amount=monthly_amount,
        commission_rate=get_commission_rate(subscription_plan),
        commission_amount=calculate_commission(monthly_amount, subscription_plan),
        period_start=period_start,
        period_end=period_end,
        status=CommissionStatus.PENDING,
    )


def transition_commission(record: CommissionRecord, new_status: CommissionStatus) -> CommissionRecord:
    """
    Move a commission to a new status.

    Only pending -> paid and pending -> cancelled are allowed; paid and
    cancelled are terminal.

    Raises:
        InvalidCommissionTransitionError: transition not allowed
    """
    current = CommissionStatus(record.status)
    new_status = CommissionStatus(new_status)

    if new_status not in ALLOWED_TRANSITIONS[current]:
        raise InvalidCommissionTransitionError(current.value, new_status.value)

    record.status = new_status
    return record


def summarize_commissions(records: List[CommissionRecord]) -> CommissionSummary:
    """
    Aggregate a distributor's commission records.

    Cancelled records count toward referrals but not earnings. Monthly
    recurring is the latest-period commission of each active referral.
    """
    pending = sum(r.commission_amount for r in records if r.status == CommissionStatus.PENDING)
    paid = sum(r.commission_amount for r in records if r.status == CommissionStatus.PAID)
    total_earned = pending + paid

    referrals = {r.lender_id for r in records}

    latest_by_lender: Dict[str, CommissionRecord] = {}
    for r in records:
        if r.status == CommissionStatus.CANCELLED:
            continue
        current = latest_by_lender.get(r.lender_id)
        if current is None or r.period_start > current.period_start:
            latest_by_lender[r.lender_id] = r

    return CommissionSummary(
        total_earned=total_earned,
        pending_amount=pending,
        paid_amount=paid,
        total_referrals=len(referrals),
        active_referrals=len(latest_by_lender),
        average_commission_per_referral=total_earned / len(referrals) if referrals else 0.0,
        monthly_recurring=sum(r.commission_amount for r in latest_by_lender.values()),
    )
