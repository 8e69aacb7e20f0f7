"""
Entidades do Domínio de Metas de Investimento.

Entidades:
- Goal: Meta financeira do investidor

Regras de Negócio Encapsuladas:
- Valor alvo sempre > 0
- Progresso limitado a 100%
- Aporte que atinge o alvo marca a meta como alcançada
- Resgate abaixo do alvo reativa uma meta alcançada
- Transições de status controladas

A data alvo NÃO é validada aqui: metas persistidas podem ser
reidratadas com data passada. A exigência de data futura é do
RegisterInvestmentGoalService.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from src.core.shared.entity import Entity, UniqueEntityID
from src.core.shared.exceptions import CurrencyMismatchError, NotAllowedError, ValidationError
from src.core.shared.value_objects import Money, Percentage


class GoalPriority(Enum):
    """Prioridade da meta."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def from_string(cls, value: str) -> "GoalPriority":
        """
        Raises:
            ValueError: Se valor inválido
        """
        try:
            return cls[value.upper()]
        except KeyError:
            pass

        for priority in cls:
            if priority.value.lower() == value.lower():
                return priority

        raise ValueError(f"Prioridade inválida: {value}")


class GoalStatus(Enum):
    """
    Estados possíveis de uma meta.

    Fluxo de Estados:
        ACTIVE → ACHIEVED
        ACTIVE → CANCELLED
        ACHIEVED/CANCELLED → ACTIVE (reativar)
    """

    ACTIVE = "Active"
    ACHIEVED = "Achieved"
    CANCELLED = "Cancelled"

    @classmethod
    def from_string(cls, value: str) -> "GoalStatus":
        """
        Aceita "Completed" como sinônimo de ACHIEVED.

        Raises:
            ValueError: Se valor inválido
        """
        if value.strip().lower() == "completed":
            return cls.ACHIEVED

        try:
            return cls[value.upper()]
        except KeyError:
            pass

        for status in cls:
            if status.value.lower() == value.lower():
                return status

        raise ValueError(f"Status inválido: {value}")


STATUS_TRANSITIONS = {
    GoalStatus.ACTIVE: [GoalStatus.ACHIEVED, GoalStatus.CANCELLED],
    GoalStatus.ACHIEVED: [GoalStatus.ACTIVE],
    GoalStatus.CANCELLED: [GoalStatus.ACTIVE],
}


@dataclass(eq=False)
class Goal(Entity):
    """
    Entidade de Domínio: Meta de Investimento.

    Attributes:
        investor_id: Dono da meta
        name: Nome da meta
        target_amount: Valor a ser atingido
        target_date: Data limite
        description: Descrição opcional
        current_amount: Valor acumulado
        priority: Prioridade
        status: Status atual
    """

    investor_id: UniqueEntityID
    name: str
    target_amount: Money
    target_date: date
    description: str = ""
    current_amount: Money = field(default_factory=Money.zero)
    priority: GoalPriority = GoalPriority.MEDIUM
    status: GoalStatus = GoalStatus.ACTIVE
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None
    id: UniqueEntityID = field(default_factory=UniqueEntityID)

    NAME_MAX_LENGTH = 100
    ATTENTION_WINDOW_DAYS = 30

    @classmethod
    def create(
        cls,
        investor_id: Union[str, UniqueEntityID],
        name: str,
        target_amount: Money,
        target_date: Union[date, datetime],
        description: str = "",
        priority: GoalPriority = GoalPriority.MEDIUM,
        current_amount: Optional[Money] = None,
        status: Optional[GoalStatus] = None,
        created_at: Optional[datetime] = None,
        entity_id: Optional[Union[str, UniqueEntityID]] = None,
    ) -> "Goal":
        """
        Factory method para criar meta.

        Raises:
            ValidationError: Se nome vazio ou valor alvo <= 0
            CurrencyMismatchError: Se valor atual em outra moeda
        """
        cls.validate_name(name)
        cls.validate_target_amount(target_amount)

        current_amount = current_amount or Money.zero(target_amount.currency)
        cls._ensure_same_currency(current_amount, target_amount)

        if isinstance(target_date, datetime):
            target_date = target_date.date()

        return cls(
            investor_id=UniqueEntityID(investor_id),
            name=name.strip(),
            target_amount=target_amount,
            target_date=target_date,
            description=(description or "").strip(),
            current_amount=current_amount,
            priority=priority,
            status=status or GoalStatus.ACTIVE,
            created_at=created_at or datetime.now(),
            id=UniqueEntityID.from_optional(entity_id),
        )

    @classmethod
    def validate_name(cls, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Nome da meta é obrigatório.", field="name")

        if len(name.strip()) > cls.NAME_MAX_LENGTH:
            raise ValidationError(
                f"Nome da meta deve ter no máximo {cls.NAME_MAX_LENGTH} caracteres.",
                field="name"
            )

    @staticmethod
    def validate_target_amount(target_amount: Money) -> None:
        if target_amount.amount <= 0:
            raise ValidationError(
                "Valor alvo deve ser maior que zero.",
                field="target_amount"
            )

    @staticmethod
    def _ensure_same_currency(current_amount: Money, target_amount: Money) -> None:
        if current_amount.currency != target_amount.currency:
            raise CurrencyMismatchError(
                f"Valor atual ({current_amount.currency}) e valor alvo "
                f"({target_amount.currency}) devem estar na mesma moeda."
            )

    # -------------------------------------------------------------------------
    # Cálculos
    # -------------------------------------------------------------------------

    @property
    def progress(self) -> Percentage:
        """Progresso em percentual, limitado a 100%."""
        if self.target_amount.is_zero():
            return Percentage.zero()

        fraction = self.current_amount.amount / self.target_amount.amount
        return Percentage.from_decimal(min(fraction, 1))

    @property
    def remaining_amount(self) -> Money:
        remaining = self.target_amount.subtract(self.current_amount, allow_negative=True)
        if remaining.is_negative():
            return Money.zero(self.target_amount.currency)
        return remaining

    def days_until_target(self, today: Optional[date] = None) -> int:
        today = today or date.today()
        return (self.target_date - today).days

    def is_overdue(self, today: Optional[date] = None) -> bool:
        return self.is_active() and self.days_until_target(today) < 0

    def is_achieved(self) -> bool:
        return self.status is GoalStatus.ACHIEVED or self.progress.value >= 100

    def requires_immediate_attention(self, today: Optional[date] = None) -> bool:
        """Meta ativa com prioridade alta, prazo em até 30 dias ou atrasada."""
        if not self.is_active():
            return False
        return (
            self.is_high_priority()
            or self.days_until_target(today) <= self.ATTENTION_WINDOW_DAYS
        )

    # -------------------------------------------------------------------------
    # Movimentação de valores
    # -------------------------------------------------------------------------

    def add_contribution(self, amount: Money) -> None:
        """
        Soma um aporte ao valor atual.

        Meta ativa que atinge o alvo passa para ACHIEVED.

        Raises:
            CurrencyMismatchError: Se moeda diferente da meta
        """
        self.current_amount = self.current_amount.add(amount)
        self._achieve_if_reached()
        self._touch()

    def withdraw(self, amount: Money) -> None:
        """
        Subtrai um resgate do valor atual.

        Meta alcançada que volta a ficar abaixo do alvo é reativada.

        Raises:
            NegativeBalanceError: Se resgate maior que o valor atual
            CurrencyMismatchError: Se moeda diferente da meta
        """
        self.current_amount = self.current_amount.subtract(amount)

        if (
            self.status is GoalStatus.ACHIEVED
            and self.current_amount.is_less_than(self.target_amount)
        ):
            self.status = GoalStatus.ACTIVE

        self._touch()

    def _achieve_if_reached(self) -> None:
        if self.is_active() and not self.current_amount.is_less_than(self.target_amount):
            self.status = GoalStatus.ACHIEVED

    # -------------------------------------------------------------------------
    # Atualizações
    # -------------------------------------------------------------------------

    def update_name(self, name: str) -> None:
        self.validate_name(name)
        self.name = name.strip()
        self._touch()

    def update_description(self, description: str) -> None:
        self.description = (description or "").strip()
        self._touch()

    def update_target_amount(self, target_amount: Money) -> None:
        """
        Raises:
            ValidationError: Se valor alvo <= 0
            CurrencyMismatchError: Se moeda diferente do valor atual
        """
        self.validate_target_amount(target_amount)
        self._ensure_same_currency(self.current_amount, target_amount)

        self.target_amount = target_amount
        self._achieve_if_reached()
        self._touch()

    def update_target_date(self, target_date: Union[date, datetime]) -> None:
        if isinstance(target_date, datetime):
            target_date = target_date.date()
        self.target_date = target_date
        self._touch()

    def update_priority(self, priority: GoalPriority) -> None:
        self.priority = priority
        self._touch()

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    def can_transition_to(self, new_status: GoalStatus) -> bool:
        return new_status in STATUS_TRANSITIONS.get(self.status, [])

    def change_status(self, new_status: GoalStatus) -> None:
        """
        Altera status com validação de transição.

        Raises:
            NotAllowedError: Se transição inválida
        """
        if not self.can_transition_to(new_status):
            raise NotAllowedError(
                f"Transição de {self.status.value} para {new_status.value} não é permitida.",
                rule="transicao_status_invalida"
            )

        self.status = new_status
        self._touch()

    def mark_as_achieved(self) -> None:
        self.change_status(GoalStatus.ACHIEVED)

    def cancel(self) -> None:
        self.change_status(GoalStatus.CANCELLED)

    def reactivate(self) -> None:
        self.change_status(GoalStatus.ACTIVE)

    # -------------------------------------------------------------------------
    # Consultas
    # -------------------------------------------------------------------------

    def belongs_to(self, investor_id: Union[str, UniqueEntityID]) -> bool:
        return self.investor_id == UniqueEntityID(investor_id)

    def is_high_priority(self) -> bool:
        return self.priority is GoalPriority.HIGH

    def is_active(self) -> bool:
        return self.status is GoalStatus.ACTIVE

    def is_cancelled(self) -> bool:
        return self.status is GoalStatus.CANCELLED

    def _touch(self) -> None:
        self.updated_at = datetime.now()

    def __repr__(self) -> str:
        return (
            f"Goal(id={self.id}, name={self.name!r}, "
            f"progress={self.progress}, status={self.status.value})"
        )
