"""
Unit of Work - Implementação em memória.

Usada pelo container padrão (repositórios em memória) e pelos testes.

Responsabilidades:
- Marcar início/fim da operação
- Publicar eventos apenas após commit bem-sucedido
- Descartar eventos em rollback

Repositórios em memória gravam direto no dicionário: o rollback
descarta eventos, não desfaz escritas já feitas. Os serviços validam
tudo antes de entrar no bloco ``with uow``.
"""

from typing import List, Optional
import logging

from src.core.shared.events import DomainEvent
from src.core.shared.interfaces import EventPublisher, UnitOfWork

logger = logging.getLogger(__name__)


class InMemoryUnitOfWork(UnitOfWork):
    """
    Unit of Work em memória.

    Example:
        uow = InMemoryUnitOfWork(event_publisher=InMemoryEventPublisher())
        with uow:
            repo.create(goal)
            uow.publish_event(GoalRegisteredEvent(aggregate_id=str(goal.id)))
        # Commit + evento entregue ao publisher

    Example com rollback:
        with uow:
            uow.publish_event(event)
            raise RuntimeError("Erro!")
        # Evento descartado
    """

    def __init__(self, event_publisher: Optional[EventPublisher] = None):
        super().__init__()
        self._event_publisher = event_publisher
        self._committed = False
        self._rolled_back = False
        self._published_events: List[DomainEvent] = []

    def _begin_transaction(self) -> None:
        self._committed = False
        self._rolled_back = False
        logger.debug("Transaction started")

    def commit(self) -> None:
        self._committed = True
        logger.debug("Transaction committed")

        if self._events:
            self._publish_events()

    def rollback(self) -> None:
        self._rolled_back = True
        self.clear_events()
        logger.debug("Transaction rolled back")

    def _publish_events(self) -> None:
        """
        Entrega eventos ao publisher.

        Falha do publisher é logada e não desfaz o commit.
        """
        events = self.collect_events()
        self.clear_events()

        for event in events:
            logger.info(
                f"Publishing event: {event.event_type} "
                f"for aggregate {event.aggregate_id}"
            )
            self._published_events.append(event)

            if self._event_publisher:
                try:
                    self._event_publisher.publish(event)
                except Exception as e:
                    logger.error(f"Failed to publish event {event.event_type}: {e}")

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def rolled_back(self) -> bool:
        return self._rolled_back

    @property
    def published_events(self) -> List[DomainEvent]:
        """Eventos publicados desde a criação (ou último ``reset``)."""
        return list(self._published_events)

    def reset(self) -> None:
        self._committed = False
        self._rolled_back = False
        self._published_events.clear()
        self.clear_events()
