"""
Current-totals provider for FinTraj.

Purpose
-------
Sums a user's current line items (incomes, expenses, savings, investments,
debts) into the year-0 seed of a projection and into the monthly figures
used to size crisis shocks. The projection engine never computes these
itself.

Line items are validated with Pydantic (values must be positive numbers;
decimal commas are accepted in strings). Totals are plain sums of item
values, as entered.

Example
-------
>>> snap = FinancialSnapshot.model_validate({
...     "incomes": [{"value": 2500, "category": "Salary"}],
...     "expenses": [{"value": "1200,50", "category": "Rent"}],
...     "savings": [{"value": 4000, "category": "Livret A"}],
... })
>>> snap.total_expenses()
1200.5
>>> snap.to_seed().income
30000.0
"""

from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import MONTHS_PER_YEAR, SAVINGS_RATE_BOUNDS
from .model import ProjectionSeed
from .utils import clamp

__all__ = [
    "FinancialItem",
    "FinancialSnapshot",
]

Frequency = Literal["daily", "weekly", "monthly", "quarterly", "yearly", "once"]


class FinancialItem(BaseModel):
    """A single income/expense/savings/debt line item."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: Optional[str] = None
    value: float = Field(gt=0, description="Amount (positive)")
    category: str = Field(min_length=1)
    description: Optional[str] = None
    frequency: Frequency = "monthly"
    is_recurring: bool = Field(default=True, alias="isRecurring")

    @field_validator("value", mode="before")
    @classmethod
    def parse_amount(cls, v: Union[str, float]):
        """Accept "1 200,50"-style strings from data-entry forms."""
        if isinstance(v, str):
            text = v.strip().replace(" ", "").replace(",", ".")
            if not text:
                raise ValueError("amount is required")
            return text
        return v

    @field_validator("category")
    @classmethod
    def strip_category(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("category is required")
        return v


class FinancialSnapshot(BaseModel):
    """
    Current financial position: lists of line items per kind.

    Attributes
    ----------
    incomes, expenses : list of FinancialItem
        Monthly flows.
    savings, investments, debts : list of FinancialItem
        Balances.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    incomes: List[FinancialItem] = Field(default_factory=list)
    expenses: List[FinancialItem] = Field(default_factory=list)
    savings: List[FinancialItem] = Field(default_factory=list)
    debts: List[FinancialItem] = Field(default_factory=list)
    investments: List[FinancialItem] = Field(default_factory=list)

    @staticmethod
    def _sum(items: List[FinancialItem]) -> float:
        return float(sum(item.value for item in items))

    # -------------------- Totals --------------------
    def total_income(self) -> float:
        """Current monthly income."""
        return self._sum(self.incomes)

    def total_expenses(self) -> float:
        """Current monthly expenses."""
        return self._sum(self.expenses)

    def total_savings(self) -> float:
        return self._sum(self.savings)

    def total_investments(self) -> float:
        return self._sum(self.investments)

    def total_debts(self) -> float:
        return self._sum(self.debts)

    def net_worth(self) -> float:
        """Assets (savings + investments) minus liabilities (debts)."""
        return self.total_savings() + self.total_investments() - self.total_debts()

    def savings_rate(self) -> float:
        """Share of income left after expenses, in percent, clamped to [0, 100].

        Returns 0 when there is no income.
        """
        income = self.total_income()
        if income <= 0:
            return 0.0
        rate = (income - self.total_expenses()) / income * 100.0
        return clamp(rate, SAVINGS_RATE_BOUNDS)

    # -------------------- Seeds --------------------
    def to_seed(self) -> ProjectionSeed:
        """Year-0 seed: annualized income/expenses, current savings and net worth."""
        return ProjectionSeed(
            income=self.total_income() * MONTHS_PER_YEAR,
            expenses=self.total_expenses() * MONTHS_PER_YEAR,
            savings=self.total_savings(),
            net_worth=self.net_worth(),
        )
