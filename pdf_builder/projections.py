"""
Retirement projection arithmetic used by the retirement templates.

Everything here is plain compound-interest math on a handful of form inputs:
a lifestyle-based income replacement target, a recommended 15% savings rate,
7% growth while working and a 4% withdrawal rate in retirement.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping

GROWTH_RATE = 0.07
WITHDRAWAL_RATE = 0.04
SAVINGS_RATE = 0.15
RETIREMENT_YEARS = 30
PLANNING_WINDOW_YEARS = 5
WEALTH_TRANSFER_AFTER_YEARS = 25
# Growth applied to the remaining balance while drawing it down.
DRAWDOWN_GROWTH_FACTOR = 0.6
MAX_RECOMMENDATIONS = 4

LIFESTYLE_REPLACEMENT = {
    "modest": 0.7,
    "comfortable": 0.8,
    "luxury": 1.0,
}
DEFAULT_REPLACEMENT = 0.8


def parse_int(value: Any, default: int) -> int:
    """
    Coerce form input to an int; blanks, garbage, zero and non-finite numbers
    (``inf``, ``1e400``, ``nan``) fall back to ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(str(value).replace(",", "").replace("$", "").strip())
    except (ValueError, OverflowError):
        return default
    if not math.isfinite(number):
        return default
    return int(number) or default


@dataclass
class RetirementInputs:
    name: str = "Client"
    age: int = 30
    income: int = 50000
    savings: int = 100000
    retire_age: int = 65
    lifestyle: str = "comfortable"
    email: str = ""
    phone: str = ""
    summary: str = ""
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @classmethod
    def from_form(cls, form: Mapping[str, Any] | None) -> "RetirementInputs":
        """Normalize web-form / JSON input, accepting the capitalized form field names too."""
        form = form or {}
        timestamp = form.get("timestamp")
        return cls(
            name=str(form.get("Name") or form.get("name") or "Client"),
            age=parse_int(form.get("Age", form.get("age")), 30),
            income=parse_int(form.get("Income", form.get("income")), 50000),
            savings=parse_int(form.get("Savings", form.get("savings")), 100000),
            retire_age=parse_int(form.get("RetireAge", form.get("retireAge")), 65),
            lifestyle=str(form.get("lifestyle") or "comfortable"),
            email=str(form.get("userEmail") or form.get("email") or ""),
            phone=str(form.get("userPhone") or form.get("phone") or ""),
            summary=str(form.get("summary") or ""),
            **({"timestamp": str(timestamp)} if timestamp else {}),
        )

    @property
    def replacement_ratio(self) -> float:
        return LIFESTYLE_REPLACEMENT.get(self.lifestyle.lower(), DEFAULT_REPLACEMENT)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["retireAge"] = data.pop("retire_age")
        return data


@dataclass
class LifecyclePoint:
    age: int
    phase: str
    total: float


@dataclass
class Projections:
    years_to_retire: int
    target_income: float
    recommended_contribution: float
    current_trajectory: float
    total_at_retirement: float
    projected_income: float
    lifecycle: List[LifecyclePoint] = field(default_factory=list)

    @property
    def monthly_target_income(self) -> float:
        return self.target_income / 12

    @property
    def monthly_projected_income(self) -> float:
        return self.projected_income / 12

    @property
    def status(self) -> str:
        return "on_track" if self.total_at_retirement > self.target_income * 25 else "needs_attention"

    @property
    def on_track(self) -> bool:
        return self.status == "on_track"


def future_value(savings: float, contribution: float, years: int, rate: float = GROWTH_RATE) -> float:
    """Lump sum plus a level annual contribution compounded for ``years``."""
    growth = (1 + rate) ** years
    return savings * growth + contribution * ((growth - 1) / rate)


def build_lifecycle(inputs: RetirementInputs, projected_income: float) -> List[LifecyclePoint]:
    """Year-by-year balance: accumulation to retirement, then drawdown."""
    years = max(inputs.retire_age - inputs.age, 0)
    contribution = inputs.income * SAVINGS_RATE
    points: List[LifecyclePoint] = []

    for i in range(years + 1):
        phase = "accumulation" if i < years - PLANNING_WINDOW_YEARS else "planning"
        points.append(LifecyclePoint(inputs.age + i, phase, future_value(inputs.savings, contribution, i)))

    remaining = points[-1].total
    for i in range(1, RETIREMENT_YEARS + 1):
        remaining = max(0.0, (remaining - projected_income) * (1 + GROWTH_RATE * DRAWDOWN_GROWTH_FACTOR))
        phase = "wealth_transfer" if i > WEALTH_TRANSFER_AFTER_YEARS else "distribution"
        points.append(LifecyclePoint(inputs.retire_age + i, phase, remaining))
    return points


def calculate_projections(inputs: RetirementInputs) -> Projections:
    years = max(inputs.retire_age - inputs.age, 0)
    contribution = inputs.income * SAVINGS_RATE
    total = future_value(inputs.savings, contribution, years)
    projected_income = total * WITHDRAWAL_RATE
    return Projections(
        years_to_retire=years,
        target_income=inputs.income * inputs.replacement_ratio,
        recommended_contribution=contribution,
        current_trajectory=inputs.savings * (1 + GROWTH_RATE) ** years,
        total_at_retirement=total,
        projected_income=projected_income,
        lifecycle=build_lifecycle(inputs, projected_income),
    )


def generate_recommendations(inputs: RetirementInputs, projections: Projections) -> List[Dict[str, str]]:
    """Pick up to four plain-language recommendations for the client."""
    recommendations: List[Dict[str, str]] = []

    if projections.projected_income < projections.target_income:
        shortfall = projections.target_income - projections.projected_income
        additional_needed = shortfall / WITHDRAWAL_RATE
        monthly_increase = additional_needed / max(projections.years_to_retire, 1) / 12
        recommendations.append({
            "title": "Increase Your Savings Rate",
            "description": (
                f"You're projected to have a retirement income shortfall of ${shortfall:,.0f} annually. "
                f"Consider increasing your monthly savings by ${monthly_increase:,.0f} to bridge this gap."
            ),
        })

    if inputs.age < 35:
        recommendations.append({
            "title": "Take Advantage of Time",
            "description": (
                "You have time on your side! Even small increases in savings now will compound significantly. "
                "Consider maxing out your 401(k) employer match and opening a Roth IRA for tax-free growth."
            ),
        })
    elif inputs.age >= 50:
        recommendations.append({
            "title": "Utilize Catch-Up Contributions",
            "description": (
                'At age 50+, you can make additional "catch-up" contributions to your 401(k) and IRA. '
                "This allows you to save more and potentially reduce your current tax burden."
            ),
        })

    savings_rate = (inputs.savings / inputs.income) * 100 if inputs.income else 0
    if savings_rate < 10:
        recommendations.append({
            "title": "Build Your Emergency Fund First",
            "description": (
                "Before increasing retirement savings, ensure you have 3-6 months of expenses in an emergency fund. "
                "This prevents you from having to tap retirement accounts during financial emergencies."
            ),
        })

    recommendations.append({
        "title": "Review Your Investment Mix",
        "description": (
            "Ensure your portfolio is properly diversified across stocks, bonds, and international investments "
            "based on your age and risk tolerance. Consider low-cost index funds for broad market exposure."
        ),
    })

    if inputs.age >= 55:
        recommendations.append({
            "title": "Plan Your Social Security Strategy",
            "description": (
                "Delaying Social Security beyond full retirement age increases your benefit by approximately "
                "8% per year until age 70. This can significantly boost your retirement income."
            ),
        })

    return recommendations[:MAX_RECOMMENDATIONS]


__all__ = [
    "RetirementInputs",
    "Projections",
    "LifecyclePoint",
    "calculate_projections",
    "build_lifecycle",
    "future_value",
    "generate_recommendations",
    "parse_int",
]
