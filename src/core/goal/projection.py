"""
Projeção de Metas.

Dado um conjunto de cenários de aporte mensal, calcula para cada um:
- Meses até concluir e data prevista de conclusão
- Valor projetado na data alvo, déficit e superávit
- Progresso projetado na data alvo

E, para a meta como um todo, o aporte mínimo e o recomendado
(mínimo com margem de 10%).

Cenário sem aporte nunca conclui: meses = -1 e data = ``date.max``.
"""

import calendar
import math
from dataclasses import dataclass, field
from datetime import MAXYEAR, date, datetime
from decimal import Decimal
from typing import List, Optional

from src.core.shared.value_objects import Money, Numeric, Percentage

from .entities import Goal


NEVER_COMPLETES = -1
RECOMMENDED_MARGIN = Decimal("1.1")


def months_between(start: date, end: date) -> int:
    """
    Meses de calendário entre duas datas (mês parcial conta como inteiro).

    Example:
        months_between(date(2025, 1, 15), date(2025, 3, 15))  # 2
        months_between(date(2025, 1, 15), date(2025, 3, 16))  # 3
    """
    total = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day > start.day:
        total += 1
    return max(total, 0)


def add_months(start: date, months: int) -> date:
    """
    Soma meses limitando o dia ao último dia do mês de destino.

    Resultado além do ano 9999 satura em ``date.max``.
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    if year > MAXYEAR:
        return date.max
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


# =============================================================================
# Estruturas
# =============================================================================

@dataclass(frozen=True)
class ProjectionScenario:
    """Cenário: aporte mensal fixo com um rótulo."""

    monthly_contribution: Money
    scenario_name: str

    def to_dict(self) -> dict:
        return {
            "scenario_name": self.scenario_name,
            "monthly_contribution": float(self.monthly_contribution.amount),
            "currency": self.monthly_contribution.currency,
        }


@dataclass(frozen=True)
class ProjectionResult:
    scenario: ProjectionScenario
    projected_completion_date: date
    months_to_complete: int
    total_monthly_contributions_needed: Money
    will_meet_target_date: bool
    projected_amount: Money
    shortfall: Money
    surplus: Money
    progress_at_target_date: Percentage

    def to_dict(self) -> dict:
        return {
            "scenario": self.scenario.to_dict(),
            "projected_completion_date": self.projected_completion_date.isoformat(),
            "months_to_complete": self.months_to_complete,
            "total_monthly_contributions_needed": float(self.total_monthly_contributions_needed.amount),
            "will_meet_target_date": self.will_meet_target_date,
            "projected_amount": float(self.projected_amount.amount),
            "shortfall": float(self.shortfall.amount),
            "surplus": float(self.surplus.amount),
            "progress_at_target_date": round(self.progress_at_target_date.value, 2),
        }


@dataclass(frozen=True)
class GoalProjectionAnalysis:
    """Resultado completo da projeção de uma meta."""

    goal_id: str
    projections: List[ProjectionResult]
    recommended_monthly_contribution: Money
    minimum_monthly_contribution: Money
    current_monthly_requirement: Money
    analysis_date: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "goal_id": self.goal_id,
            "projections": [p.to_dict() for p in self.projections],
            "recommended_monthly_contribution": float(self.recommended_monthly_contribution.amount),
            "minimum_monthly_contribution": float(self.minimum_monthly_contribution.amount),
            "current_monthly_requirement": float(self.current_monthly_requirement.amount),
            "analysis_date": self.analysis_date.isoformat(),
        }


# =============================================================================
# Cenários
# =============================================================================

class GoalProjectionScenarios:
    """
    Fábrica dos cenários nomeados, sempre na moeda da meta.

    Example:
        scenarios = GoalProjectionScenarios.multiple("BRL", 500, 1000, 2000)
    """

    CONSERVATIVE = "Conservative"
    MODERATE = "Moderate"
    AGGRESSIVE = "Aggressive"

    @staticmethod
    def _scenario(currency: str, amount: Numeric, name: str) -> ProjectionScenario:
        return ProjectionScenario(
            monthly_contribution=Money.create(amount, currency),
            scenario_name=name,
        )

    @classmethod
    def conservative(cls, currency: str, amount: Numeric) -> ProjectionScenario:
        return cls._scenario(currency, amount, cls.CONSERVATIVE)

    @classmethod
    def moderate(cls, currency: str, amount: Numeric) -> ProjectionScenario:
        return cls._scenario(currency, amount, cls.MODERATE)

    @classmethod
    def aggressive(cls, currency: str, amount: Numeric) -> ProjectionScenario:
        return cls._scenario(currency, amount, cls.AGGRESSIVE)

    @classmethod
    def multiple(
        cls,
        currency: str,
        conservative_amount: Numeric,
        moderate_amount: Numeric,
        aggressive_amount: Numeric,
    ) -> List[ProjectionScenario]:
        return [
            cls.conservative(currency, conservative_amount),
            cls.moderate(currency, moderate_amount),
            cls.aggressive(currency, aggressive_amount),
        ]


# =============================================================================
# Cálculo
# =============================================================================

def project_scenario(
    goal: Goal,
    scenario: ProjectionScenario,
    today: Optional[date] = None,
) -> ProjectionResult:
    today = today or date.today()
    currency = goal.target_amount.currency
    contribution = scenario.monthly_contribution
    remaining = goal.remaining_amount

    if contribution.is_zero():
        months_to_complete = NEVER_COMPLETES
        completion_date = date.max
        contributions_needed = Money.zero(currency)
    else:
        months_to_complete = math.ceil(remaining.amount / contribution.amount)
        completion_date = add_months(today, months_to_complete)
        contributions_needed = contribution.multiply(months_to_complete)

    months_until_target = months_between(today, goal.target_date)
    projected_amount = goal.current_amount.add(contribution.multiply(months_until_target))

    difference = projected_amount.subtract(goal.target_amount, allow_negative=True)
    if difference.is_negative():
        shortfall = Money(-difference.amount, currency)
        surplus = Money.zero(currency)
    else:
        shortfall = Money.zero(currency)
        surplus = difference

    fraction = min(projected_amount.amount / goal.target_amount.amount, 1)

    return ProjectionResult(
        scenario=scenario,
        projected_completion_date=completion_date,
        months_to_complete=months_to_complete,
        total_monthly_contributions_needed=contributions_needed,
        will_meet_target_date=(
            months_to_complete != NEVER_COMPLETES and completion_date <= goal.target_date
        ),
        projected_amount=projected_amount,
        shortfall=shortfall,
        surplus=surplus,
        progress_at_target_date=Percentage.from_decimal(fraction),
    )


def minimum_contribution(goal: Goal, today: Optional[date] = None) -> Money:
    """Aporte mensal que atinge o alvo exatamente na data (prazo vencido: todo o restante)."""
    months = months_between(today or date.today(), goal.target_date)
    if months <= 0:
        return goal.remaining_amount
    return goal.remaining_amount.divide(months).rounded()


def recommended_contribution(goal: Goal, today: Optional[date] = None) -> Money:
    months = months_between(today or date.today(), goal.target_date)
    if months <= 0:
        return goal.remaining_amount
    return goal.remaining_amount.multiply(RECOMMENDED_MARGIN).divide(months).rounded()


def analyze(
    goal: Goal,
    scenarios: List[ProjectionScenario],
    today: Optional[date] = None,
) -> GoalProjectionAnalysis:
    today = today or date.today()
    minimum = minimum_contribution(goal, today)

    return GoalProjectionAnalysis(
        goal_id=str(goal.id),
        projections=[project_scenario(goal, scenario, today) for scenario in scenarios],
        recommended_monthly_contribution=recommended_contribution(goal, today),
        minimum_monthly_contribution=minimum,
        current_monthly_requirement=minimum,
    )
