"""Ports (Interfaces) do Domínio de Notificações."""

from typing import Dict, List, Optional, Protocol, runtime_checkable

from src.core.shared.interfaces import PaginationParams

from .entities import Alert, Notification


@runtime_checkable
class AlertRepository(Protocol):
    """Interface para persistência de Alertas."""

    def find_by_id(self, alert_id: str) -> Optional[Alert]:
        ...

    def find_many_active_by_asset_id(self, asset_id: str) -> List[Alert]:
        ...

    def find_many_by_user_id(self, user_id: str) -> List[Alert]:
        ...

    def create(self, alert: Alert) -> None:
        ...

    def update(self, alert: Alert) -> None:
        ...

    def delete(self, alert_id: str) -> None:
        ...


@runtime_checkable
class NotificationRepository(Protocol):
    """Interface para persistência de Notificações."""

    def find_by_id(self, notification_id: str) -> Optional[Notification]:
        ...

    def find_many_unread_by_user_id(
        self, user_id: str, params: PaginationParams
    ) -> List[Notification]:
        ...

    def find_by_source_event_id(self, event_id: str) -> Optional[Notification]:
        ...

    def create(self, notification: Notification) -> None:
        ...

    def update(self, notification: Notification) -> None:
        ...

    def delete(self, notification_id: str) -> None:
        ...


class InMemoryAlertRepository:
    """Implementação em memória do AlertRepository."""

    def __init__(self):
        self._alerts: Dict[str, Alert] = {}

    def find_by_id(self, alert_id: str) -> Optional[Alert]:
        return self._alerts.get(str(alert_id))

    def find_many_active_by_asset_id(self, asset_id: str) -> List[Alert]:
        return [
            a for a in self._alerts.values()
            if a.is_active and str(a.asset_id) == str(asset_id)
        ]

    def find_many_by_user_id(self, user_id: str) -> List[Alert]:
        return [a for a in self._alerts.values() if a.belongs_to(user_id)]

    def create(self, alert: Alert) -> None:
        self._alerts[str(alert.id)] = alert

    def update(self, alert: Alert) -> None:
        self._alerts[str(alert.id)] = alert

    def delete(self, alert_id: str) -> None:
        self._alerts.pop(str(alert_id), None)

    def clear(self) -> None:
        self._alerts.clear()


class InMemoryNotificationRepository:
    """Implementação em memória do NotificationRepository (mais recentes primeiro)."""

    def __init__(self):
        self._notifications: Dict[str, Notification] = {}

    def find_by_id(self, notification_id: str) -> Optional[Notification]:
        return self._notifications.get(str(notification_id))

    def find_many_unread_by_user_id(
        self, user_id: str, params: PaginationParams
    ) -> List[Notification]:
        unread = [
            n for n in self._notifications.values()
            if not n.is_read and n.belongs_to(user_id)
        ]
        unread.sort(key=lambda n: n.created_at, reverse=True)
        return params.slice(unread)

    def find_by_source_event_id(self, event_id: str) -> Optional[Notification]:
        return next(
            (n for n in self._notifications.values() if n.source_event_id == event_id),
            None,
        )

    def create(self, notification: Notification) -> None:
        self._notifications[str(notification.id)] = notification

    def update(self, notification: Notification) -> None:
        self._notifications[str(notification.id)] = notification

    def delete(self, notification_id: str) -> None:
        self._notifications.pop(str(notification_id), None)

    def list_all(self) -> List[Notification]:
        return list(self._notifications.values())

    def clear(self) -> None:
        self._notifications.clear()
