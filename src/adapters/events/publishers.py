"""
Event Publishers - Publicadores de Eventos de Domínio.

Recebem os eventos entregues pelo Unit of Work após o commit.
Implementações:
- LoggingEventPublisher: Loga e executa handlers locais (modo "sync")
- CeleryEventPublisher: Despacha para o Celery (modo "celery")
- InMemoryEventPublisher: Armazena para verificação (modo "memory")
- CompositeEventPublisher: Repassa para vários publishers
"""

from typing import Callable, Dict, List, Optional
import json
import logging

from src.core.shared.events import DomainEvent
from src.core.shared.interfaces import EventPublisher

logger = logging.getLogger(__name__)


EventHandler = Callable[[DomainEvent], None]


class _HandlerRegistry:
    """Handlers síncronos por tipo de evento."""

    def __init__(self):
        self._handlers: Dict[str, List[EventHandler]] = {}

    def register_handler(self, event_type: str, handler: EventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def _dispatch_to_handlers(self, event: DomainEvent) -> None:
        """Falha de um handler é logada e não interrompe os demais."""
        for handler in self._handlers.get(event.event_type, []):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Erro em handler para {event.event_type}: {e}", exc_info=True)


class LoggingEventPublisher(_HandlerRegistry, EventPublisher):
    """
    Publisher que loga eventos e executa handlers locais.

    Usado em desenvolvimento e no modo síncrono, sem broker.
    """

    def __init__(self, log_level: int = logging.INFO):
        super().__init__()
        self._log_level = log_level

    def publish(self, event: DomainEvent) -> None:
        logger.log(
            self._log_level,
            f"[EVENT] {event.event_type} | "
            f"aggregate={event.aggregate_id} | "
            f"data={json.dumps(event.to_dict()['data'], default=str)}"
        )
        self._dispatch_to_handlers(event)

    def publish_batch(self, events: List[DomainEvent]) -> None:
        for event in events:
            self.publish(event)


class CeleryEventPublisher(EventPublisher):
    """
    Publisher que envia eventos para o Celery.

    Falha no broker é logada e não quebra o fluxo principal.
    """

    def __init__(self, also_log: bool = True):
        self._also_log = also_log

    def publish(self, event: DomainEvent) -> None:
        if self._also_log:
            logger.info(
                f"[EVENT->CELERY] {event.event_type} | "
                f"aggregate={event.aggregate_id}"
            )

        try:
            from src.adapters.events.handlers import dispatch_domain_event
            dispatch_domain_event.delay(event.event_type, event.to_dict())
        except Exception as e:
            logger.error(f"Falha ao publicar evento no Celery: {e}", exc_info=True)

    def publish_batch(self, events: List[DomainEvent]) -> None:
        for event in events:
            self.publish(event)


class InMemoryEventPublisher(_HandlerRegistry, EventPublisher):
    """
    Publisher em memória para testes.

    Armazena eventos publicados para verificação.
    """

    def __init__(self):
        super().__init__()
        self._published_events: List[DomainEvent] = []

    def publish(self, event: DomainEvent) -> None:
        self._published_events.append(event)
        self._dispatch_to_handlers(event)

    def publish_batch(self, events: List[DomainEvent]) -> None:
        for event in events:
            self.publish(event)

    @property
    def published_events(self) -> List[DomainEvent]:
        return self._published_events.copy()

    def get_events_by_type(self, event_type: str) -> List[DomainEvent]:
        return [e for e in self._published_events if e.event_type == event_type]

    def clear(self) -> None:
        self._published_events.clear()


class CompositeEventPublisher(EventPublisher):
    """Publisher que delega para múltiplos publishers."""

    def __init__(self, publishers: Optional[List[EventPublisher]] = None):
        self._publishers = publishers or []

    def add_publisher(self, publisher: EventPublisher) -> None:
        self._publishers.append(publisher)

    def publish(self, event: DomainEvent) -> None:
        for publisher in self._publishers:
            try:
                publisher.publish(event)
            except Exception as e:
                logger.error(
                    f"Erro ao publicar em {publisher.__class__.__name__}: {e}"
                )

    def publish_batch(self, events: List[DomainEvent]) -> None:
        for publisher in self._publishers:
            try:
                publisher.publish_batch(events)
            except Exception as e:
                logger.error(
                    f"Erro ao publicar batch em {publisher.__class__.__name__}: {e}"
                )


PUBLISHER_MODES = ("sync", "celery", "memory")


def get_event_publisher(mode: str = "sync") -> EventPublisher:
    """
    Factory para obter o publisher do modo configurado.

    Args:
        mode: "sync" (log + handlers locais), "celery" ou "memory"

    Raises:
        ValueError: Se modo desconhecido
    """
    mode = (mode or "sync").strip().lower()

    if mode == "celery":
        return CeleryEventPublisher()

    if mode == "memory":
        return InMemoryEventPublisher()

    if mode == "sync":
        from src.adapters.events.handlers import EVENT_HANDLERS

        publisher = LoggingEventPublisher()
        for event_type, handler in EVENT_HANDLERS.items():
            publisher.register_handler(
                event_type, lambda event, handler=handler: handler(event.to_dict())
            )
        return publisher

    raise ValueError(
        f"Modo de publicação inválido: {mode} (use {', '.join(PUBLISHER_MODES)})"
    )
