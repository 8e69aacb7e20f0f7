"""
Domain Events - Comunicação Assíncrona entre Domínios.

Eventos registram fatos relevantes (transação registrada, meta
atingida...) para que outras partes do sistema reajam sem acoplamento
direto com o agregado que os gerou.

Características:
- Auto-geração de ID e timestamp
- Serializáveis (to_dict/from_dict) para transporte via Celery
- Rastreáveis via aggregate_id

Fluxo:
    - Use case enfileira evento no UoW
    - UoW publica após commit
    - Handlers (Celery) processam de forma assíncrona
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict
import uuid


@dataclass
class DomainEvent(ABC):
    """
    Classe base abstrata para Domain Events.

    Nomeados no passado (TransactionRecorded, não RecordTransaction)
    e contendo apenas dados primitivos, para serializar sem adaptação.

    Attributes:
        event_id: Identificador único do evento
        aggregate_id: ID do agregado que gerou o evento
        occurred_at: Momento em que o evento ocorreu
        version: Versão do schema do evento

    Example:
        @dataclass
        class GoalAchievedEvent(DomainEvent):
            investor_id: str = ""

            @property
            def aggregate_type(self) -> str:
                return "Goal"
    """

    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    aggregate_id: str = ""
    occurred_at: datetime = field(default_factory=datetime.now)
    version: int = 1

    def __post_init__(self):
        if not self.aggregate_id:
            raise ValueError("aggregate_id é obrigatório")
        self.aggregate_id = str(self.aggregate_id)

    @property
    @abstractmethod
    def aggregate_type(self) -> str:
        """Nome do tipo do agregado (ex: "Goal", "Transaction")."""
        ...

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializa evento para dicionário.

        Decimals viram string para não perder precisão no broker.
        """
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "aggregate_id": self.aggregate_id,
            "aggregate_type": self.aggregate_type,
            "occurred_at": self.occurred_at.isoformat(),
            "version": self.version,
            "data": {
                key: str(value) if isinstance(value, Decimal) else value
                for key, value in self._get_event_data().items()
            },
        }

    def _get_event_data(self) -> Dict[str, Any]:
        """Campos específicos do evento (tudo exceto os da base)."""
        base_fields = {"event_id", "aggregate_id", "occurred_at", "version"}
        return {
            key: value
            for key, value in self.__dict__.items()
            if key not in base_fields and not key.startswith("_")
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DomainEvent":
        """
        Reconstrói evento a partir de dicionário.

        Args:
            data: Dicionário produzido por ``to_dict``

        Returns:
            Instância do evento reconstruída
        """
        event_data = data.get("data", {})
        return cls(
            event_id=data.get("event_id", str(uuid.uuid4())),
            aggregate_id=data["aggregate_id"],
            occurred_at=datetime.fromisoformat(data["occurred_at"]),
            version=data.get("version", 1),
            **event_data,
        )

    def __repr__(self) -> str:
        return (
            f"{self.event_type}("
            f"event_id={self.event_id[:8]}..., "
            f"aggregate_id={self.aggregate_id}, "
            f"occurred_at={self.occurred_at.isoformat()}"
            f")"
        )
