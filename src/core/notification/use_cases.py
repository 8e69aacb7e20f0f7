"""
Use Cases (Application Services) do Domínio de Notificações.

Use Cases implementados:
- RegisterAlertService: Cadastra alerta de preço/volume
- UpdateAlertService: Altera tipo, limite ou ativação do alerta
- EvaluatePriceAlertsService: Gera notificações para alertas disparados
- MarkNotificationAsReadService: Marca notificação como lida
- FetchUnreadNotificationsService: Lista não lidas (paginado)
- NotifyGoalAchievedService: Notifica investidor sobre meta alcançada

Todos retornam ``Result`` (Ok/Err).
"""

import logging

from src.core.asset.ports import AssetRepository
from src.core.asset.use_cases import asset_not_found
from src.core.goal.ports import GoalRepository
from src.core.investor.ports import InvestorRepository
from src.core.investor.use_cases import investor_not_found
from src.core.shared.exceptions import (
    DomainException,
    NotAllowedError,
    ResourceNotFoundError,
    ValidationError,
)
from src.core.shared.interfaces import DEFAULT_PAGE_SIZE, PaginationParams, UnitOfWork
from src.core.shared.result import Err, Ok, Result
from src.core.shared.value_objects import to_decimal

from .dtos import (
    AlertOutputDTO,
    EvaluatePriceAlertsInputDTO,
    FetchUnreadNotificationsInputDTO,
    MarkNotificationAsReadInputDTO,
    NotificationOutputDTO,
    NotifyGoalAchievedInputDTO,
    RegisterAlertInputDTO,
    UpdateAlertInputDTO,
)
from .entities import Alert, AlertType, Notification, NotificationType
from .events import AlertTriggeredEvent, NotificationCreatedEvent
from .ports import AlertRepository, NotificationRepository


logger = logging.getLogger(__name__)


def _parse_alert_type(value: str) -> AlertType:
    try:
        return AlertType.from_string(value or "")
    except ValueError as e:
        raise ValidationError(str(e), field="alert_type")


def _notification_created(notification: Notification) -> NotificationCreatedEvent:
    return NotificationCreatedEvent(
        aggregate_id=str(notification.id),
        user_id=str(notification.user_id),
        notification_type=notification.notification_type.value,
        title=notification.title,
    )


class RegisterAlertService:
    """
    Use Case: Cadastrar alerta.

    Regras:
    - Investidor e ativo devem existir
    - Limite > 0
    """

    def __init__(
        self,
        investor_repo: InvestorRepository,
        asset_repo: AssetRepository,
        alert_repo: AlertRepository,
        uow: UnitOfWork,
    ):
        self.investor_repo = investor_repo
        self.asset_repo = asset_repo
        self.alert_repo = alert_repo
        self.uow = uow

    def execute(self, input_dto: RegisterAlertInputDTO) -> Result:
        investor = self.investor_repo.find_by_id(input_dto.user_id)
        if investor is None:
            return Err(investor_not_found(input_dto.user_id))

        asset = self.asset_repo.find_by_id(input_dto.asset_id)
        if asset is None:
            return Err(asset_not_found(input_dto.asset_id))

        try:
            alert = Alert.create(
                user_id=investor.id,
                asset_id=asset.id,
                alert_type=_parse_alert_type(input_dto.alert_type),
                threshold=input_dto.threshold,
            )
        except DomainException as e:
            return Err(e)

        with self.uow:
            self.alert_repo.create(alert)

        logger.info(
            f"Alerta {alert.alert_type.value} {alert.id} cadastrado para {asset.symbol}"
        )
        return Ok(AlertOutputDTO.from_entity(alert))


class UpdateAlertService:
    """
    Use Case: Alterar alerta.

    Regras:
    - Alerta deve pertencer ao investidor
    - Pelo menos um campo informado
    - Tipo/limite só mudam com o alerta ativo (ou sendo reativado
      na mesma operação)
    """

    def __init__(self, alert_repo: AlertRepository, uow: UnitOfWork):
        self.alert_repo = alert_repo
        self.uow = uow

    def execute(self, input_dto: UpdateAlertInputDTO) -> Result:
        alert = self.alert_repo.find_by_id(input_dto.alert_id)
        if alert is None:
            return Err(ResourceNotFoundError(
                "Alerta não encontrado.",
                entity_type="Alert",
                entity_id=input_dto.alert_id,
            ))

        if not alert.belongs_to(input_dto.user_id):
            return Err(NotAllowedError(
                "Alerta não pertence a este investidor.",
                rule="alerta_do_investidor"
            ))

        fields = (input_dto.alert_type, input_dto.threshold, input_dto.is_active)
        if all(value is None for value in fields):
            return Err(NotAllowedError("Informe ao menos um campo do alerta."))

        changes_values = input_dto.alert_type is not None or input_dto.threshold is not None
        if changes_values and not alert.is_active and input_dto.is_active is not True:
            return Err(NotAllowedError(
                "Alerta inativo não pode ser alterado.",
                rule="alerta_ativo"
            ))

        try:
            alert_type = (
                _parse_alert_type(input_dto.alert_type)
                if input_dto.alert_type is not None else None
            )
            threshold = (
                Alert.validate_threshold(input_dto.threshold)
                if input_dto.threshold is not None else None
            )
        except DomainException as e:
            return Err(e)

        if input_dto.is_active is True:
            alert.activate()
        if alert_type is not None:
            alert.update_alert_type(alert_type)
        if threshold is not None:
            alert.update_threshold(threshold)
        if input_dto.is_active is False:
            alert.deactivate()

        with self.uow:
            self.alert_repo.update(alert)

        logger.info(f"Alerta {alert.id} atualizado")
        return Ok(AlertOutputDTO.from_entity(alert))


class EvaluatePriceAlertsService:
    """
    Use Case: Avaliar alertas de preço de um ativo.

    Para cada alerta ativo de preço (PriceAbove/PriceBelow) disparado
    pelo preço observado, cria uma notificação PriceAlert e desativa
    o alerta (disparo único).

    Returns:
        Ok(lista de NotificationOutputDTO criadas)
    """

    def __init__(
        self,
        alert_repo: AlertRepository,
        notification_repo: NotificationRepository,
        uow: UnitOfWork,
    ):
        self.alert_repo = alert_repo
        self.notification_repo = notification_repo
        self.uow = uow

    def execute(self, input_dto: EvaluatePriceAlertsInputDTO) -> Result:
        try:
            price = to_decimal(input_dto.price, "price")
        except DomainException as e:
            return Err(e)

        if price <= 0:
            return Err(ValidationError("Preço deve ser maior que zero.", field="price"))

        triggered = [
            alert for alert in self.alert_repo.find_many_active_by_asset_id(input_dto.asset_id)
            if alert.alert_type.is_price_based and alert.is_triggered_by(price)
        ]
        if not triggered:
            return Ok([])

        notifications = []
        with self.uow:
            for alert in triggered:
                notification = Notification.create(
                    user_id=alert.user_id,
                    notification_type=NotificationType.PRICE_ALERT,
                    title="Alerta de preço disparado",
                    message=self._message(alert, price),
                )
                alert.deactivate()

                self.alert_repo.update(alert)
                self.notification_repo.create(notification)
                self.uow.publish_event(
                    AlertTriggeredEvent(
                        aggregate_id=str(alert.id),
                        user_id=str(alert.user_id),
                        asset_id=str(alert.asset_id),
                        alert_type=alert.alert_type.value,
                        threshold=str(alert.threshold),
                        price=str(price),
                    )
                )
                self.uow.publish_event(_notification_created(notification))
                notifications.append(notification)

        logger.info(
            f"{len(notifications)} alerta(s) disparado(s) para o ativo {input_dto.asset_id}"
        )
        return Ok([NotificationOutputDTO.from_entity(n) for n in notifications])

    @staticmethod
    def _message(alert: Alert, price) -> str:
        direction = "acima de" if alert.alert_type is AlertType.PRICE_ABOVE else "abaixo de"
        return f"Preço {price} ficou {direction} {alert.threshold}."


class MarkNotificationAsReadService:
    """Use Case: Marcar notificação como lida (idempotente)."""

    def __init__(self, notification_repo: NotificationRepository, uow: UnitOfWork):
        self.notification_repo = notification_repo
        self.uow = uow

    def execute(self, input_dto: MarkNotificationAsReadInputDTO) -> Result:
        notification = self.notification_repo.find_by_id(input_dto.notification_id)
        if notification is None:
            return Err(ResourceNotFoundError(
                "Notificação não encontrada.",
                entity_type="Notification",
                entity_id=input_dto.notification_id,
            ))

        if not notification.belongs_to(input_dto.user_id):
            return Err(NotAllowedError(
                "Notificação não pertence a este investidor.",
                rule="notificacao_do_investidor"
            ))

        notification.mark_as_read()

        with self.uow:
            self.notification_repo.update(notification)

        return Ok(NotificationOutputDTO.from_entity(notification))


class FetchUnreadNotificationsService:
    """Use Case: Listar notificações não lidas (mais recentes primeiro)."""

    def __init__(
        self,
        notification_repo: NotificationRepository,
        per_page: int = DEFAULT_PAGE_SIZE,
    ):
        self.notification_repo = notification_repo
        self.per_page = per_page

    def execute(self, input_dto: FetchUnreadNotificationsInputDTO) -> Result:
        try:
            params = PaginationParams(page=input_dto.page, per_page=self.per_page)
        except DomainException as e:
            return Err(e)

        notifications = self.notification_repo.find_many_unread_by_user_id(
            input_dto.user_id, params
        )
        return Ok([NotificationOutputDTO.from_entity(n) for n in notifications])


class NotifyGoalAchievedService:
    """
    Use Case: Notificar investidor sobre meta alcançada.

    Disparado pelo handler de GoalAchievedEvent. Com ``event_id``
    informado, a reentrega do mesmo evento devolve a notificação já
    criada em vez de gerar outra.
    """

    def __init__(
        self,
        goal_repo: GoalRepository,
        notification_repo: NotificationRepository,
        uow: UnitOfWork,
    ):
        self.goal_repo = goal_repo
        self.notification_repo = notification_repo
        self.uow = uow

    def execute(self, input_dto: NotifyGoalAchievedInputDTO) -> Result:
        goal = self.goal_repo.find_by_id(input_dto.goal_id)
        if goal is None:
            return Err(ResourceNotFoundError(
                "Meta não encontrada.",
                entity_type="Goal",
                entity_id=input_dto.goal_id,
            ))

        if input_dto.event_id is not None:
            existing = self.notification_repo.find_by_source_event_id(input_dto.event_id)
            if existing is not None:
                logger.info(f"Evento {input_dto.event_id} já notificado")
                return Ok(NotificationOutputDTO.from_entity(existing))

        notification = Notification.create(
            user_id=goal.investor_id,
            notification_type=NotificationType.GOAL_PROGRESS,
            title="Meta alcançada",
            message=(
                f"Parabéns! A meta \"{goal.name}\" atingiu "
                f"{goal.current_amount} de {goal.target_amount}."
            ),
            source_event_id=input_dto.event_id,
        )

        with self.uow:
            self.notification_repo.create(notification)
            self.uow.publish_event(_notification_created(notification))

        logger.info(f"Notificação de meta alcançada enviada para {goal.investor_id}")
        return Ok(NotificationOutputDTO.from_entity(notification))
