"""
Dependency Injection Container.

Configura e gerencia todas as dependências da aplicação.
Usa dependency-injector para lazy-loading e injeção automática.

Padrões:
- Singleton: Uma instância para toda app (repositories, publisher, hasher)
- Factory: Nova instância por chamada (services, UoW)
- Configuration: Valores de ``settings.as_dict()``

Repositórios padrão são os em memória; um adapter de banco
substitui os providers via ``container.<repo>.override(...)``.
"""

from typing import Optional

from dependency_injector import containers, providers

from src.adapters.cryptography import BcryptPasswordHasher
from src.adapters.events.publishers import get_event_publisher
from src.adapters.memory.unit_of_work import InMemoryUnitOfWork
from src.core.asset.ports import InMemoryAssetRepository
from src.core.asset.use_cases import GetAssetService, RegisterAssetService
from src.core.goal.ports import InMemoryGoalRepository
from src.core.goal.use_cases import (
    CalculateGoalProjectionService,
    EditInvestmentGoalService,
    MarkGoalAsAchievedService,
    RegisterInvestmentGoalService,
    UpdateGoalProgressService,
)
from src.core.investor.ports import InMemoryInvestorRepository
from src.core.investor.use_cases import (
    DeactivateInvestorService,
    RegisterInvestorService,
    UpdateInvestorService,
)
from src.core.notification.ports import InMemoryAlertRepository, InMemoryNotificationRepository
from src.core.notification.use_cases import (
    EvaluatePriceAlertsService,
    FetchUnreadNotificationsService,
    MarkNotificationAsReadService,
    NotifyGoalAchievedService,
    RegisterAlertService,
    UpdateAlertService,
)
from src.core.portfolio.ports import InMemoryInvestmentRepository, InMemoryPortfolioRepository
from src.core.portfolio.use_cases import (
    AddInvestmentToPortfolioService,
    CreatePortfolioService,
    FetchAllInvestmentsByPortfolioIdService,
    GetInvestmentByAssetIdService,
    UpdateInvestmentAfterTransactionService,
)
from src.core.transaction.ports import InMemoryTransactionRepository
from src.core.transaction.use_cases import (
    FetchTransactionsHistoryByAssetIdService,
    FetchTransactionsHistoryByPortfolioIdService,
    RecordBuyTransactionService,
    RecordDividendTransactionService,
    RecordSellTransactionService,
    TransactionValidator,
    UpdateTransactionService,
)


class Container(containers.DeclarativeContainer):
    """
    Container principal de Dependency Injection.

    Organização:
    - Configuration: Variáveis de ambiente/settings
    - Infrastructure: Publisher de eventos, hasher
    - Repositories: Persistência
    - Unit of Work: Transações
    - Services: Use Cases

    Example:
        from src.config.container import get_container

        container = get_container()
        service = container.register_investor_service()
        result = service.execute(input_dto)
    """

    # =========================================================================
    # Configuration
    # =========================================================================

    config = providers.Configuration()

    # =========================================================================
    # Infrastructure
    # =========================================================================

    event_publisher = providers.Singleton(
        get_event_publisher,
        mode=config.event_publisher_mode,
    )

    password_hasher = providers.Singleton(
        BcryptPasswordHasher,
        rounds=config.password_hash_rounds,
    )

    # =========================================================================
    # Repositories (Singleton - uma instância por app)
    # =========================================================================

    investor_repository = providers.Singleton(InMemoryInvestorRepository)
    asset_repository = providers.Singleton(InMemoryAssetRepository)
    portfolio_repository = providers.Singleton(InMemoryPortfolioRepository)
    investment_repository = providers.Singleton(InMemoryInvestmentRepository)
    transaction_repository = providers.Singleton(InMemoryTransactionRepository)
    goal_repository = providers.Singleton(InMemoryGoalRepository)
    alert_repository = providers.Singleton(InMemoryAlertRepository)
    notification_repository = providers.Singleton(InMemoryNotificationRepository)

    # =========================================================================
    # Unit of Work (Factory - nova instância por operação)
    # =========================================================================

    unit_of_work = providers.Factory(
        InMemoryUnitOfWork,
        event_publisher=event_publisher,
    )

    # =========================================================================
    # Services / Use Cases - Investidor
    # =========================================================================

    register_investor_service = providers.Factory(
        RegisterInvestorService,
        investor_repo=investor_repository,
        hash_generator=password_hasher,
        uow=unit_of_work,
    )

    update_investor_service = providers.Factory(
        UpdateInvestorService,
        investor_repo=investor_repository,
        uow=unit_of_work,
    )

    deactivate_investor_service = providers.Factory(
        DeactivateInvestorService,
        investor_repo=investor_repository,
        uow=unit_of_work,
    )

    # =========================================================================
    # Services / Use Cases - Ativo
    # =========================================================================

    register_asset_service = providers.Factory(
        RegisterAssetService,
        asset_repo=asset_repository,
        uow=unit_of_work,
    )

    # Leitura (sem UoW)
    get_asset_service = providers.Factory(
        GetAssetService,
        asset_repo=asset_repository,
    )

    # =========================================================================
    # Services / Use Cases - Carteira
    # =========================================================================

    create_portfolio_service = providers.Factory(
        CreatePortfolioService,
        portfolio_repo=portfolio_repository,
        investor_repo=investor_repository,
        uow=unit_of_work,
    )

    add_investment_to_portfolio_service = providers.Factory(
        AddInvestmentToPortfolioService,
        portfolio_repo=portfolio_repository,
        asset_repo=asset_repository,
        investment_repo=investment_repository,
        investor_repo=investor_repository,
        uow=unit_of_work,
    )

    update_investment_after_transaction_service = providers.Factory(
        UpdateInvestmentAfterTransactionService,
        investor_repo=investor_repository,
        investment_repo=investment_repository,
        transaction_repo=transaction_repository,
        asset_repo=asset_repository,
        portfolio_repo=portfolio_repository,
        uow=unit_of_work,
    )

    get_investment_by_asset_id_service = providers.Factory(
        GetInvestmentByAssetIdService,
        investor_repo=investor_repository,
        asset_repo=asset_repository,
        portfolio_repo=portfolio_repository,
        investment_repo=investment_repository,
    )

    fetch_all_investments_by_portfolio_id_service = providers.Factory(
        FetchAllInvestmentsByPortfolioIdService,
        investor_repo=investor_repository,
        portfolio_repo=portfolio_repository,
        investment_repo=investment_repository,
        per_page=config.page_size,
    )

    # =========================================================================
    # Services / Use Cases - Transação
    # =========================================================================

    transaction_validator = providers.Factory(
        TransactionValidator,
        investor_repo=investor_repository,
        asset_repo=asset_repository,
        portfolio_repo=portfolio_repository,
    )

    record_buy_transaction_service = providers.Factory(
        RecordBuyTransactionService,
        transaction_repo=transaction_repository,
        validator=transaction_validator,
        uow=unit_of_work,
    )

    record_sell_transaction_service = providers.Factory(
        RecordSellTransactionService,
        transaction_repo=transaction_repository,
        investment_repo=investment_repository,
        validator=transaction_validator,
        uow=unit_of_work,
    )

    record_dividend_transaction_service = providers.Factory(
        RecordDividendTransactionService,
        transaction_repo=transaction_repository,
        validator=transaction_validator,
        uow=unit_of_work,
    )

    update_transaction_service = providers.Factory(
        UpdateTransactionService,
        investor_repo=investor_repository,
        transaction_repo=transaction_repository,
        portfolio_repo=portfolio_repository,
        uow=unit_of_work,
    )

    fetch_transactions_history_by_portfolio_id_service = providers.Factory(
        FetchTransactionsHistoryByPortfolioIdService,
        investor_repo=investor_repository,
        portfolio_repo=portfolio_repository,
        transaction_repo=transaction_repository,
        per_page=config.page_size,
    )

    fetch_transactions_history_by_asset_id_service = providers.Factory(
        FetchTransactionsHistoryByAssetIdService,
        investor_repo=investor_repository,
        portfolio_repo=portfolio_repository,
        transaction_repo=transaction_repository,
        per_page=config.page_size,
    )

    # =========================================================================
    # Services / Use Cases - Metas
    # =========================================================================

    register_investment_goal_service = providers.Factory(
        RegisterInvestmentGoalService,
        investor_repo=investor_repository,
        goal_repo=goal_repository,
        uow=unit_of_work,
    )

    edit_investment_goal_service = providers.Factory(
        EditInvestmentGoalService,
        investor_repo=investor_repository,
        goal_repo=goal_repository,
        uow=unit_of_work,
    )

    mark_goal_as_achieved_service = providers.Factory(
        MarkGoalAsAchievedService,
        investor_repo=investor_repository,
        goal_repo=goal_repository,
        uow=unit_of_work,
    )

    update_goal_progress_service = providers.Factory(
        UpdateGoalProgressService,
        investor_repo=investor_repository,
        goal_repo=goal_repository,
        uow=unit_of_work,
    )

    calculate_goal_projection_service = providers.Factory(
        CalculateGoalProjectionService,
        investor_repo=investor_repository,
        goal_repo=goal_repository,
    )

    # =========================================================================
    # Services / Use Cases - Notificações
    # =========================================================================

    register_alert_service = providers.Factory(
        RegisterAlertService,
        investor_repo=investor_repository,
        asset_repo=asset_repository,
        alert_repo=alert_repository,
        uow=unit_of_work,
    )

    update_alert_service = providers.Factory(
        UpdateAlertService,
        alert_repo=alert_repository,
        uow=unit_of_work,
    )

    evaluate_price_alerts_service = providers.Factory(
        EvaluatePriceAlertsService,
        alert_repo=alert_repository,
        notification_repo=notification_repository,
        uow=unit_of_work,
    )

    mark_notification_as_read_service = providers.Factory(
        MarkNotificationAsReadService,
        notification_repo=notification_repository,
        uow=unit_of_work,
    )

    fetch_unread_notifications_service = providers.Factory(
        FetchUnreadNotificationsService,
        notification_repo=notification_repository,
        per_page=config.page_size,
    )

    notify_goal_achieved_service = providers.Factory(
        NotifyGoalAchievedService,
        goal_repo=goal_repository,
        notification_repo=notification_repository,
        uow=unit_of_work,
    )


# =============================================================================
# Container Global (Singleton)
# =============================================================================

_container: Optional[Container] = None


def create_container(overrides: Optional[dict] = None) -> Container:
    """
    Cria container configurado a partir de ``settings.as_dict()``.

    Args:
        overrides: Valores que substituem os de settings (testes)
    """
    from src.config import settings

    container = Container()
    config = settings.as_dict()
    config.update(overrides or {})
    container.config.from_dict(config)
    return container


def get_container() -> Container:
    """
    Retorna instância global do container.

    Cria se não existir (lazy initialization).
    """
    global _container

    if _container is None:
        _container = create_container()

    return _container


def reset_container() -> None:
    """
    Reset do container (para testes).

    Permite criar novo container limpo.
    """
    global _container
    _container = None
