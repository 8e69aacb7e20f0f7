"""
Testes de Integração End-to-End.

Fluxo completo com o container em modo "sync":
Use Case → Unit of Work → LoggingEventPublisher → Handler → Use Case

Repositórios em memória; nenhum broker é necessário.
"""

from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import patch

import pytest

from src.config.container import create_container
from src.core.asset.entities import Asset, AssetType
from src.core.goal.dtos import RegisterInvestmentGoalInputDTO, UpdateGoalProgressInputDTO
from src.core.notification.dtos import FetchUnreadNotificationsInputDTO, RegisterAlertInputDTO
from src.core.portfolio.dtos import CreatePortfolioInputDTO, GetInvestmentByAssetIdInputDTO
from src.core.transaction.dtos import RecordDividendInputDTO, RecordTransactionInputDTO


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def container():
    """Container isolado com publisher síncrono."""
    container = create_container({
        "event_publisher_mode": "sync",
        "password_hash_rounds": 4,
        "page_size": 20,
    })
    with patch("src.adapters.events.handlers._container", return_value=container):
        yield container


@pytest.fixture
def investor(container, investor_factory):
    investor = investor_factory()
    container.investor_repository().create(investor)
    container.create_portfolio_service().execute(
        CreatePortfolioInputDTO(investor_id=str(investor.id), name="Carteira Principal")
    )
    return investor


@pytest.fixture
def asset(container):
    asset = Asset.create("PETR4", "Petrobras PN", AssetType.STOCK)
    container.asset_repository().create(asset)
    return asset


def trade(container, investor, asset, transaction_type, quantity, price):
    service = (
        container.record_buy_transaction_service()
        if transaction_type == "Buy"
        else container.record_sell_transaction_service()
    )
    return service.execute(RecordTransactionInputDTO(
        investor_id=str(investor.id),
        asset_id=str(asset.id),
        transaction_type=transaction_type,
        quantity=quantity,
        price=price,
        fees="4.90",
    ))


def position(container, investor, asset):
    return container.get_investment_by_asset_id_service().execute(
        GetInvestmentByAssetIdInputDTO(investor_id=str(investor.id), asset_id=str(asset.id))
    ).value


def unread(container, investor):
    return container.fetch_unread_notifications_service().execute(
        FetchUnreadNotificationsInputDTO(user_id=str(investor.id))
    ).value


# =============================================================================
# Testes de Fluxo Completo
# =============================================================================

class TestTransactionFlow:
    """Transações registradas atualizam a posição via evento."""

    def test_compra_abre_posicao(self, container, investor, asset):
        result = trade(container, investor, asset, "Buy", 10, "30.00")

        assert result.is_ok()
        holding = position(container, investor, asset)
        assert holding.quantity == Decimal("10")
        assert holding.average_price == Decimal("30.00")

    def test_compras_e_venda(self, container, investor, asset):
        trade(container, investor, asset, "Buy", 10, 20)
        trade(container, investor, asset, "Buy", 10, 30)
        trade(container, investor, asset, "Sell", 5, 35)

        holding = position(container, investor, asset)
        assert holding.quantity == Decimal("15")
        assert holding.average_price == Decimal("25")
        assert holding.current_price == Decimal("35")
        assert holding.profit_loss == Decimal("150")

    def test_venda_acima_da_posicao_rejeitada(self, container, investor, asset):
        trade(container, investor, asset, "Buy", 3, 30)

        result = trade(container, investor, asset, "Sell", 4, 30)

        assert result.is_err()
        assert position(container, investor, asset).quantity == Decimal("3")

    def test_dividendo_registra_rendimento(self, container, investor, asset):
        trade(container, investor, asset, "Buy", 10, 30)

        result = container.record_dividend_transaction_service().execute(RecordDividendInputDTO(
            investor_id=str(investor.id),
            asset_id=str(asset.id),
            price=31,
            income="12.00",
        ))

        assert result.is_ok()
        holding = position(container, investor, asset)
        assert holding.quantity == Decimal("10")
        assert holding.current_price == Decimal("31")


class TestNotificationFlow:
    """Eventos geram notificações para o investidor."""

    def test_alerta_de_preco_disparado_por_transacao(self, container, investor, asset):
        container.register_alert_service().execute(RegisterAlertInputDTO(
            user_id=str(investor.id),
            asset_id=str(asset.id),
            alert_type="PriceAbove",
            threshold="40.00",
        ))

        trade(container, investor, asset, "Buy", 1, "39.00")
        assert unread(container, investor) == []

        trade(container, investor, asset, "Buy", 1, "41.00")
        notifications = unread(container, investor)
        assert [n.title for n in notifications] == ["Alerta de preço disparado"]

        trade(container, investor, asset, "Buy", 1, "42.00")
        assert len(unread(container, investor)) == 1

    def test_meta_alcancada_gera_notificacao(self, container, investor):
        goal = container.register_investment_goal_service().execute(RegisterInvestmentGoalInputDTO(
            investor_id=str(investor.id),
            name="Viagem",
            target_amount=1000,
            target_date=date.today() + timedelta(days=180),
        )).value

        container.update_goal_progress_service().execute(UpdateGoalProgressInputDTO(
            investor_id=str(investor.id), goal_id=goal.id, contribution=1000
        ))

        notifications = unread(container, investor)
        assert len(notifications) == 1
        assert notifications[0].title == "Meta alcançada"
        assert notifications[0].notification_type == "GoalProgress"
