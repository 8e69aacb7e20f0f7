"""
Domínio de Notificações.

- Entidades (Alert, AlertType, Notification, NotificationType)
- Use Cases (RegisterAlert, UpdateAlert, EvaluatePriceAlerts,
  MarkNotificationAsRead, FetchUnreadNotifications, NotifyGoalAchieved)
- Domain Events (AlertTriggered, NotificationCreated)
- Ports (AlertRepository, NotificationRepository)
"""

from .entities import Alert, AlertType, Notification, NotificationType
from .events import AlertTriggeredEvent, NotificationCreatedEvent
from .dtos import AlertOutputDTO, NotificationOutputDTO
from .ports import (
    AlertRepository,
    NotificationRepository,
    InMemoryAlertRepository,
    InMemoryNotificationRepository,
)

__all__ = [
    "Alert",
    "AlertType",
    "Notification",
    "NotificationType",
    "AlertTriggeredEvent",
    "NotificationCreatedEvent",
    "AlertOutputDTO",
    "NotificationOutputDTO",
    "AlertRepository",
    "NotificationRepository",
    "InMemoryAlertRepository",
    "InMemoryNotificationRepository",
]
