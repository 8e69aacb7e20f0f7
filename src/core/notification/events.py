"""
Domain Events do Domínio de Notificações.
"""

from dataclasses import dataclass

from src.core.shared.events import DomainEvent


@dataclass
class AlertTriggeredEvent(DomainEvent):
    """Evento: Alerta disparado por um preço observado."""

    user_id: str = ""
    asset_id: str = ""
    alert_type: str = ""
    threshold: str = "0"
    price: str = "0"

    @property
    def aggregate_type(self) -> str:
        return "Alert"


@dataclass
class NotificationCreatedEvent(DomainEvent):
    user_id: str = ""
    notification_type: str = ""
    title: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Notification"
