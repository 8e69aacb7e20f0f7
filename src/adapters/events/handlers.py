"""
Event Handlers - Processadores de Eventos de Domínio.

Cada handler é uma função comum que recebe o evento serializado
(``DomainEvent.to_dict()``) e aciona o use case correspondente.
As tasks Celery apenas envolvem essas funções, de modo que o mesmo
handler roda no worker (modo "celery") ou no próprio processo
(modo "sync", via LoggingEventPublisher).

Roteamento:
- GoalAchievedEvent → NotifyGoalAchievedService
- TransactionRecordedEvent → UpdateInvestmentAfterTransactionService
  e EvaluatePriceAlertsService

Padrão:
    @shared_task(bind=True, ...)
    def handle_<evento>_task(self, event_data: dict) -> None:
        handle_<evento>(event_data)
"""

from typing import Any, Callable, Dict
import logging

from celery import shared_task

from src.core.notification.dtos import EvaluatePriceAlertsInputDTO, NotifyGoalAchievedInputDTO
from src.core.portfolio.dtos import UpdateInvestmentAfterTransactionInputDTO
from src.core.transaction.entities import TransactionType

logger = logging.getLogger(__name__)


def _container():
    from src.config.container import get_container
    return get_container()


# =============================================================================
# Handlers
# =============================================================================

def handle_goal_achieved(event_data: Dict[str, Any]) -> None:
    """Gera a notificação GoalProgress para o dono da meta."""
    goal_id = event_data["aggregate_id"]
    logger.info(f"[HANDLER] GoalAchieved: {goal_id}")

    result = _container().notify_goal_achieved_service().execute(
        NotifyGoalAchievedInputDTO(goal_id=goal_id, event_id=event_data.get("event_id"))
    )
    if result.is_err():
        logger.warning(f"[HANDLER] GoalAchieved {goal_id} ignorado: {result.error}")


def handle_transaction_recorded(event_data: Dict[str, Any]) -> None:
    """
    Aplica a transação na posição e avalia alertas de preço do ativo.

    Dividendos não alteram preço, portanto não disparam alertas.
    """
    transaction_id = event_data["aggregate_id"]
    data = event_data.get("data", {})
    container = _container()

    logger.info(
        f"[HANDLER] TransactionRecorded: {transaction_id} | "
        f"tipo={data.get('transaction_type')} | ativo={data.get('asset_id')}"
    )

    applied = container.update_investment_after_transaction_service().execute(
        UpdateInvestmentAfterTransactionInputDTO(
            investor_id=data["investor_id"],
            transaction_id=transaction_id,
        )
    )
    if applied.is_err():
        logger.warning(
            f"[HANDLER] Transação {transaction_id} não aplicada na posição: {applied.error}"
        )

    if data.get("transaction_type") == TransactionType.DIVIDEND.value:
        return

    evaluated = container.evaluate_price_alerts_service().execute(
        EvaluatePriceAlertsInputDTO(asset_id=data["asset_id"], price=data["price"])
    )
    if evaluated.is_err():
        logger.warning(f"[HANDLER] Alertas não avaliados: {evaluated.error}")


EVENT_HANDLERS: Dict[str, Callable[[Dict[str, Any]], None]] = {
    "GoalAchievedEvent": handle_goal_achieved,
    "TransactionRecordedEvent": handle_transaction_recorded,
}


# =============================================================================
# Celery Tasks
# =============================================================================

@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    autoretry_for=(Exception,),
    acks_late=True,
)
def handle_goal_achieved_task(self, event_data: Dict[str, Any]) -> None:
    try:
        handle_goal_achieved(event_data)
    except Exception as e:
        logger.error(f"Erro no handler GoalAchieved: {e}", exc_info=True)
        raise


@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    autoretry_for=(Exception,),
    acks_late=True,
)
def handle_transaction_recorded_task(self, event_data: Dict[str, Any]) -> None:
    try:
        handle_transaction_recorded(event_data)
    except Exception as e:
        logger.error(f"Erro no handler TransactionRecorded: {e}", exc_info=True)
        raise


TASKS = {
    "GoalAchievedEvent": handle_goal_achieved_task,
    "TransactionRecordedEvent": handle_transaction_recorded_task,
}


@shared_task(bind=True, max_retries=5, default_retry_delay=30)
def dispatch_domain_event(self, event_type: str, event_data: Dict[str, Any]) -> None:
    """
    Dispatcher central para Domain Events.

    Ponto de entrada de todos os eventos publicados pelo
    CeleryEventPublisher; eventos sem handler são apenas logados.

    Args:
        event_type: Tipo do evento (ex: 'GoalAchievedEvent')
        event_data: Evento serializado
    """
    task = TASKS.get(event_type)

    if task:
        logger.info(f"[DISPATCHER] Roteando {event_type} para handler")
        task.delay(event_data)
    else:
        logger.debug(f"[DISPATCHER] Nenhum handler para {event_type}")
