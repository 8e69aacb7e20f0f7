"""
Interfaces (Ports) - Contratos entre Core e Adapters.

São os "Ports" da Arquitetura Hexagonal: o Core define os contratos,
os Adapters implementam. O fluxo de dependência sempre aponta para o Core.

Ports compartilhados:
- UnitOfWork: transação atômica + fila de eventos
- EventPublisher: publicação de eventos pós-commit
- HashGenerator / HashComparer: hash de senha (colaborador externo)
- PaginationParams: paginação das consultas (1-based)

Repositórios específicos ficam no ``ports.py`` de cada domínio.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Protocol, runtime_checkable

from .events import DomainEvent
from .exceptions import ValidationError


DEFAULT_PAGE_SIZE = 20


class UnitOfWork(ABC):
    """
    Unit of Work - Coordena transações atômicas.

    Pattern: Context Manager
        with uow:
            repo.create(entity)
            uow.publish_event(event)
        # Commit automático ao sair sem erro
        # Rollback automático se exceção

    Eventos só são publicados após commit bem-sucedido.
    Se a transação falhar, são descartados.
    """

    def __init__(self):
        self._events: List[DomainEvent] = []

    def __enter__(self) -> "UnitOfWork":
        self._begin_transaction()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        return False  # Não suprime exceções

    @abstractmethod
    def _begin_transaction(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def commit(self) -> None:
        """
        Persiste mudanças e publica eventos.

        Ordem de execução:
        1. Commit da transação
        2. Publicação de eventos enfileirados
        3. Limpeza de estado interno
        """
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        """Desfaz mudanças e descarta eventos."""
        raise NotImplementedError

    def publish_event(self, event: DomainEvent) -> None:
        """
        Enfileira evento para publicação após commit.

        Example:
            with uow:
                goal.add_contribution(amount)
                repo.update(goal)
                uow.publish_event(GoalAchievedEvent(aggregate_id=str(goal.id)))
            # Evento publicado aqui, após commit
        """
        self._events.append(event)

    def collect_events(self) -> List[DomainEvent]:
        """Eventos pendentes (para testing/debugging)."""
        return list(self._events)

    def clear_events(self) -> None:
        self._events.clear()


class EventPublisher(ABC):
    """
    Interface para publicação de eventos.

    Implementações em ``src.adapters.events.publishers``
    (logging, memória, Celery).
    """

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        raise NotImplementedError

    @abstractmethod
    def publish_batch(self, events: List[DomainEvent]) -> None:
        raise NotImplementedError


@runtime_checkable
class HashGenerator(Protocol):
    """Gera hash de senha em texto puro."""

    def hash(self, plain: str) -> str:
        ...


@runtime_checkable
class HashComparer(Protocol):
    """Compara senha em texto puro com hash armazenado."""

    def compare(self, plain: str, hashed: str) -> bool:
        ...


@dataclass(frozen=True)
class PaginationParams:
    """
    Parâmetros de paginação.

    Páginas começam em 1; ``offset`` é o índice do primeiro item.
    """

    page: int = 1
    per_page: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        if self.page < 1:
            raise ValidationError("Página deve ser maior ou igual a 1.", field="page")
        if self.per_page < 1:
            raise ValidationError("Itens por página deve ser positivo.", field="per_page")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    def slice(self, items: list) -> list:
        """Recorta a página de uma lista já ordenada."""
        return items[self.offset:self.offset + self.per_page]


# Type alias para facilitar tipagem
UoW = UnitOfWork
