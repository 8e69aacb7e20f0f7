"""
Entidades do Domínio de Notificações.

Entidades:
- Alert: Alerta de preço/volume configurado pelo investidor
- Notification: Mensagem entregue ao investidor

Regras de Negócio Encapsuladas:
- Limite do alerta sempre > 0
- Tipo e limite só mudam enquanto o alerta está ativo
- ``read_at`` é registrado uma única vez, na primeira leitura
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from src.core.shared.entity import Entity, UniqueEntityID
from src.core.shared.exceptions import NotAllowedError, ValidationError
from src.core.shared.value_objects import Numeric, to_decimal


def _from_string(enum_cls, value: str, label: str):
    for member in enum_cls:
        if value.lower() in (member.name.lower(), member.value.lower()):
            return member
    raise ValueError(f"{label} inválido: {value}")


class AlertType(Enum):
    PRICE_ABOVE = "PriceAbove"
    PRICE_BELOW = "PriceBelow"
    VOLUME_CHANGE = "VolumeChange"

    @classmethod
    def from_string(cls, value: str) -> "AlertType":
        """
        Raises:
            ValueError: Se valor inválido
        """
        return _from_string(cls, value, "Tipo de alerta")

    @property
    def is_price_based(self) -> bool:
        return self in (AlertType.PRICE_ABOVE, AlertType.PRICE_BELOW)


class NotificationType(Enum):
    PRICE_ALERT = "PriceAlert"
    GOAL_PROGRESS = "GoalProgress"
    REBALANCING = "Rebalancing"

    @classmethod
    def from_string(cls, value: str) -> "NotificationType":
        """
        Raises:
            ValueError: Se valor inválido
        """
        return _from_string(cls, value, "Tipo de notificação")


# =============================================================================
# Alert
# =============================================================================

@dataclass(eq=False)
class Alert(Entity):
    """
    Entidade de Domínio: Alerta.

    Attributes:
        user_id: Investidor dono do alerta
        asset_id: Ativo monitorado
        alert_type: PriceAbove, PriceBelow ou VolumeChange
        threshold: Limite que dispara o alerta
        is_active: Apenas alertas ativos disparam
    """

    user_id: UniqueEntityID
    asset_id: UniqueEntityID
    alert_type: AlertType
    threshold: Decimal
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None
    id: UniqueEntityID = field(default_factory=UniqueEntityID)

    @classmethod
    def create(
        cls,
        user_id: Union[str, UniqueEntityID],
        asset_id: Union[str, UniqueEntityID],
        alert_type: AlertType,
        threshold: Numeric,
        entity_id: Optional[Union[str, UniqueEntityID]] = None,
    ) -> "Alert":
        """
        Raises:
            ValidationError: Se limite <= 0
        """
        return cls(
            user_id=UniqueEntityID(user_id),
            asset_id=UniqueEntityID(asset_id),
            alert_type=alert_type,
            threshold=cls.validate_threshold(threshold),
            id=UniqueEntityID.from_optional(entity_id),
        )

    @staticmethod
    def validate_threshold(threshold: Numeric) -> Decimal:
        value = to_decimal(threshold, "threshold")
        if value <= 0:
            raise ValidationError("Limite do alerta deve ser maior que zero.", field="threshold")
        return value

    def update_threshold(self, threshold: Numeric) -> None:
        """
        Raises:
            NotAllowedError: Se alerta inativo
            ValidationError: Se limite <= 0
        """
        self._ensure_active()
        self.threshold = self.validate_threshold(threshold)
        self._touch()

    def update_alert_type(self, alert_type: AlertType) -> None:
        """
        Raises:
            NotAllowedError: Se alerta inativo
        """
        self._ensure_active()
        self.alert_type = alert_type
        self._touch()

    def activate(self) -> None:
        self.is_active = True
        self._touch()

    def deactivate(self) -> None:
        self.is_active = False
        self._touch()

    def is_triggered_by(self, value: Numeric) -> bool:
        """
        Verifica se o valor observado dispara o alerta.

        Para PriceAbove/PriceBelow ``value`` é o preço; para
        VolumeChange é a variação de volume observada.
        """
        if not self.is_active:
            return False

        value = to_decimal(value, "value")
        if self.alert_type is AlertType.PRICE_BELOW:
            return value <= self.threshold
        return value >= self.threshold

    def belongs_to(self, user_id: Union[str, UniqueEntityID]) -> bool:
        return self.user_id == UniqueEntityID(user_id)

    def _ensure_active(self) -> None:
        if not self.is_active:
            raise NotAllowedError(
                "Alerta inativo não pode ser alterado.",
                rule="alerta_ativo"
            )

    def _touch(self) -> None:
        self.updated_at = datetime.now()


# =============================================================================
# Notification
# =============================================================================

@dataclass(eq=False)
class Notification(Entity):
    """
    Entidade de Domínio: Notificação.

    Attributes:
        user_id: Destinatário
        notification_type: PriceAlert, GoalProgress ou Rebalancing
        title: Título
        message: Corpo da mensagem
        is_read: Se já foi lida
        read_at: Momento da primeira leitura
        source_event_id: Evento de origem (evita duplicar em reentregas)
    """

    user_id: UniqueEntityID
    notification_type: NotificationType
    title: str
    message: str
    is_read: bool = False
    created_at: datetime = field(default_factory=datetime.now)
    read_at: Optional[datetime] = None
    source_event_id: Optional[str] = None
    id: UniqueEntityID = field(default_factory=UniqueEntityID)

    TITLE_MAX_LENGTH = 200

    @classmethod
    def create(
        cls,
        user_id: Union[str, UniqueEntityID],
        notification_type: NotificationType,
        title: str,
        message: str,
        created_at: Optional[datetime] = None,
        entity_id: Optional[Union[str, UniqueEntityID]] = None,
        source_event_id: Optional[str] = None,
    ) -> "Notification":
        """
        Raises:
            ValidationError: Se título ou mensagem vazios
        """
        cls._validate_title(title)
        cls._validate_message(message)

        return cls(
            user_id=UniqueEntityID(user_id),
            notification_type=notification_type,
            title=title.strip(),
            message=message.strip(),
            created_at=created_at or datetime.now(),
            source_event_id=source_event_id,
            id=UniqueEntityID.from_optional(entity_id),
        )

    @classmethod
    def _validate_title(cls, title: str) -> None:
        if not title or not title.strip():
            raise ValidationError("Título é obrigatório.", field="title")
        if len(title.strip()) > cls.TITLE_MAX_LENGTH:
            raise ValidationError(
                f"Título deve ter no máximo {cls.TITLE_MAX_LENGTH} caracteres.",
                field="title"
            )

    @staticmethod
    def _validate_message(message: str) -> None:
        if not message or not message.strip():
            raise ValidationError("Mensagem é obrigatória.", field="message")

    def mark_as_read(self, now: Optional[datetime] = None) -> None:
        """Marca como lida; ``read_at`` só é registrado na primeira vez."""
        self.is_read = True
        if self.read_at is None:
            self.read_at = now or datetime.now()

    def mark_as_unread(self) -> None:
        self.is_read = False

    def update_title(self, title: str) -> None:
        self._validate_title(title)
        self.title = title.strip()

    def update_message(self, message: str) -> None:
        self._validate_message(message)
        self.message = message.strip()

    def update_type(self, notification_type: NotificationType) -> None:
        self.notification_type = notification_type

    def belongs_to(self, user_id: Union[str, UniqueEntityID]) -> bool:
        return self.user_id == UniqueEntityID(user_id)
