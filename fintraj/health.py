"""
Financial health score.

Scores a current financial snapshot out of 100 from four ratios:

    savings rate       30 pts   (>= 20%: 30, >= 10%: 15)
    emergency fund     25 pts   (>= 6 months of expenses: 25, >= 3: 15)
    debt-to-income     25 pts   (<= 10% of yearly income: 25, <= 36%: 15)
    net worth          20 pts   (> 50 000: 20, > 0: 10)

Outputs are machine-readable codes; wording belongs to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .constants import MONTHS_PER_YEAR
from .totals import FinancialSnapshot

__all__ = [
    "HealthReport",
    "assess_health",
]

COMFORTABLE_NET_WORTH = 50_000.0


@dataclass(frozen=True)
class HealthReport:
    score: int
    savings_rate: float
    months_of_coverage: Optional[float]
    debt_to_income: Optional[float]
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    @property
    def status(self) -> str:
        if self.score >= 80:
            return "healthy"
        if self.score >= 50:
            return "watch"
        if self.score >= 25:
            return "at_risk"
        return "critical"


def assess_health(snapshot: FinancialSnapshot) -> HealthReport:
    """Score *snapshot*; never raises (zero income/expenses are handled)."""
    income = snapshot.total_income()
    expenses = snapshot.total_expenses()
    debts = snapshot.total_debts()
    score = 0
    strengths: List[str] = []
    weaknesses: List[str] = []
    recommendations: List[str] = []

    # savings rate, clamped to [0, 100] by the snapshot
    rate = snapshot.savings_rate()
    if rate >= 20:
        score += 30
        strengths.append("high_savings_rate")
    elif rate >= 10:
        score += 15
        strengths.append("fair_savings_rate")
    else:
        weaknesses.append("low_savings_rate")
        recommendations.append("increase_savings_rate")

    coverage = None
    if expenses > 0:
        coverage = snapshot.total_savings() / expenses
        if coverage >= 6:
            score += 25
            strengths.append("solid_emergency_fund")
        elif coverage >= 3:
            score += 15
            strengths.append("emergency_fund")
        else:
            weaknesses.append("thin_emergency_fund")
            recommendations.append("build_emergency_fund")
    else:
        score += 25
        strengths.append("no_expenses")

    dti = None
    if income > 0:
        dti = debts / (income * MONTHS_PER_YEAR)
        if dti <= 0.1:
            score += 25
            strengths.append("low_debt")
        elif dti <= 0.36:
            score += 15
            strengths.append("manageable_debt")
        else:
            weaknesses.append("high_debt_ratio")
            recommendations.append("pay_down_debt")
    elif debts == 0:
        score += 25
        strengths.append("no_debt")
    else:
        weaknesses.append("debt_without_income")
        recommendations.append("find_income_for_debt")

    net_worth = snapshot.net_worth()
    if net_worth > COMFORTABLE_NET_WORTH:
        score += 20
        strengths.append("strong_net_worth")
    elif net_worth > 0:
        score += 10
        strengths.append("positive_net_worth")
    else:
        weaknesses.append("negative_net_worth")
        recommendations.append("grow_net_worth")

    return HealthReport(
        score=score,
        savings_rate=rate,
        months_of_coverage=coverage,
        debt_to_income=dti,
        strengths=strengths,
        weaknesses=weaknesses,
        recommendations=recommendations,
    )
