"""
Domain Events do Domínio de Metas.

Eventos:
- GoalRegisteredEvent: Meta cadastrada
- GoalUpdatedEvent: Campos da meta editados
- GoalAchievedEvent: Meta passou para o status ACHIEVED
"""

from dataclasses import dataclass, field
from typing import List

from src.core.shared.events import DomainEvent


@dataclass
class GoalRegisteredEvent(DomainEvent):
    investor_id: str = ""
    name: str = ""
    target_amount: str = "0"
    target_date: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Goal"


@dataclass
class GoalUpdatedEvent(DomainEvent):
    """
    Evento: Meta editada.

    Attributes:
        investor_id: Dono da meta
        changed_fields: Nomes dos campos alterados
    """

    investor_id: str = ""
    changed_fields: List[str] = field(default_factory=list)

    @property
    def aggregate_type(self) -> str:
        return "Goal"


@dataclass
class GoalAchievedEvent(DomainEvent):
    """
    Evento: Meta alcançada.

    Consumido pelo handler assíncrono que gera a notificação
    GoalProgress para o investidor.
    """

    investor_id: str = ""
    name: str = ""
    target_amount: str = "0"
    current_amount: str = "0"

    @property
    def aggregate_type(self) -> str:
        return "Goal"
