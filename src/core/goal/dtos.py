"""
Data Transfer Objects (DTOs) do Domínio de Metas.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Tuple

from src.core.shared.value_objects import Numeric

from .entities import Goal
from .projection import ProjectionScenario


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class RegisterInvestmentGoalInputDTO:
    """
    DTO de entrada para cadastrar meta.

    Attributes:
        investor_id: Dono da meta
        name: Nome da meta
        target_amount: Valor alvo (> 0)
        target_date: Data alvo (deve estar no futuro)
        priority: "High", "Medium" ou "Low"
        description: Descrição opcional
        currency: Moeda da meta
    """

    investor_id: str
    name: str
    target_amount: Numeric
    target_date: date
    priority: str = "Medium"
    description: str = ""
    currency: str = "BRL"


@dataclass(frozen=True)
class EditInvestmentGoalInputDTO:
    """Pelo menos um campo de edição deve ser informado."""

    investor_id: str
    goal_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    target_amount: Optional[Numeric] = None
    target_date: Optional[date] = None
    priority: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class MarkGoalAsAchievedInputDTO:
    investor_id: str
    goal_id: str
    reason: str = ""


@dataclass(frozen=True)
class UpdateGoalProgressInputDTO:
    """
    Sem aporte nem resgate, apenas consulta o progresso atual.
    """

    investor_id: str
    goal_id: str
    contribution: Optional[Numeric] = None
    withdrawal: Optional[Numeric] = None


@dataclass(frozen=True)
class CalculateGoalProjectionInputDTO:
    investor_id: str
    goal_id: str
    scenarios: Tuple[ProjectionScenario, ...] = ()


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class GoalOutputDTO:
    id: str
    investor_id: str
    name: str
    description: str
    target_amount: Decimal
    current_amount: Decimal
    remaining_amount: Decimal
    currency: str
    target_date: date
    priority: str
    status: str
    progress: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, entity: Goal) -> "GoalOutputDTO":
        return cls(
            id=str(entity.id),
            investor_id=str(entity.investor_id),
            name=entity.name,
            description=entity.description,
            target_amount=entity.target_amount.amount,
            current_amount=entity.current_amount.amount,
            remaining_amount=entity.remaining_amount.amount,
            currency=entity.target_amount.currency,
            target_date=entity.target_date,
            priority=entity.priority.value,
            status=entity.status.value,
            progress=entity.progress.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "investor_id": self.investor_id,
            "name": self.name,
            "description": self.description,
            "target_amount": float(self.target_amount),
            "current_amount": float(self.current_amount),
            "remaining_amount": float(self.remaining_amount),
            "currency": self.currency,
            "target_date": self.target_date.isoformat(),
            "priority": self.priority,
            "status": self.status,
            "progress": round(self.progress, 2),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass
class GoalProgressOutputDTO:
    goal_id: str
    progress: float
    current_amount: Decimal
    remaining_amount: Decimal
    status: str

    @classmethod
    def from_entity(cls, entity: Goal) -> "GoalProgressOutputDTO":
        return cls(
            goal_id=str(entity.id),
            progress=entity.progress.value,
            current_amount=entity.current_amount.amount,
            remaining_amount=entity.remaining_amount.amount,
            status=entity.status.value,
        )

    def to_dict(self) -> dict:
        return {
            "goal_id": self.goal_id,
            "progress": round(self.progress, 2),
            "current_amount": float(self.current_amount),
            "remaining_amount": float(self.remaining_amount),
            "status": self.status,
        }
