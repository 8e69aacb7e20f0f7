"""
Data Transfer Objects (DTOs) do Domínio de Notificações.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from src.core.shared.value_objects import Numeric

from .entities import Alert, Notification


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class RegisterAlertInputDTO:
    """
    Attributes:
        user_id: Investidor dono do alerta
        asset_id: Ativo monitorado
        alert_type: "PriceAbove", "PriceBelow" ou "VolumeChange"
        threshold: Limite (> 0)
    """

    user_id: str
    asset_id: str
    alert_type: str
    threshold: Numeric


@dataclass(frozen=True)
class UpdateAlertInputDTO:
    """Tipo e limite só podem mudar com o alerta ativo."""

    user_id: str
    alert_id: str
    alert_type: Optional[str] = None
    threshold: Optional[Numeric] = None
    is_active: Optional[bool] = None


@dataclass(frozen=True)
class EvaluatePriceAlertsInputDTO:
    asset_id: str
    price: Numeric


@dataclass(frozen=True)
class MarkNotificationAsReadInputDTO:
    user_id: str
    notification_id: str


@dataclass(frozen=True)
class FetchUnreadNotificationsInputDTO:
    user_id: str
    page: int = 1


@dataclass(frozen=True)
class NotifyGoalAchievedInputDTO:
    goal_id: str
    event_id: Optional[str] = None


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class AlertOutputDTO:
    id: str
    user_id: str
    asset_id: str
    alert_type: str
    threshold: Decimal
    is_active: bool

    @classmethod
    def from_entity(cls, entity: Alert) -> "AlertOutputDTO":
        return cls(
            id=str(entity.id),
            user_id=str(entity.user_id),
            asset_id=str(entity.asset_id),
            alert_type=entity.alert_type.value,
            threshold=entity.threshold,
            is_active=entity.is_active,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "asset_id": self.asset_id,
            "alert_type": self.alert_type,
            "threshold": float(self.threshold),
            "is_active": self.is_active,
        }


@dataclass
class NotificationOutputDTO:
    id: str
    user_id: str
    notification_type: str
    title: str
    message: str
    is_read: bool
    created_at: datetime
    read_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, entity: Notification) -> "NotificationOutputDTO":
        return cls(
            id=str(entity.id),
            user_id=str(entity.user_id),
            notification_type=entity.notification_type.value,
            title=entity.title,
            message=entity.message,
            is_read=entity.is_read,
            created_at=entity.created_at,
            read_at=entity.read_at,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "notification_type": self.notification_type,
            "title": self.title,
            "message": self.message,
            "is_read": self.is_read,
            "created_at": self.created_at.isoformat(),
            "read_at": self.read_at.isoformat() if self.read_at else None,
        }
