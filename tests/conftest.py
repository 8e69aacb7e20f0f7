"""
Configurações globais do Pytest para o InvestTrack.

Este arquivo é carregado automaticamente pelo pytest e
fornece fixtures e configurações compartilhadas.
"""

from datetime import date
from typing import List
import sys
from pathlib import Path

import pytest

# Adicionar raiz do projeto ao path para imports ``src.*``
project_path = Path(__file__).parent.parent
sys.path.insert(0, str(project_path))

from src.core.asset.entities import Asset, AssetType
from src.core.asset.ports import InMemoryAssetRepository
from src.core.goal.ports import InMemoryGoalRepository
from src.core.investor.entities import Investor
from src.core.investor.ports import InMemoryInvestorRepository
from src.core.notification.ports import InMemoryAlertRepository, InMemoryNotificationRepository
from src.core.portfolio.entities import Portfolio
from src.core.portfolio.ports import InMemoryInvestmentRepository, InMemoryPortfolioRepository
from src.core.shared.events import DomainEvent
from src.core.shared.value_objects import CPF, DateOfBirth, Email, Name
from src.core.transaction.ports import InMemoryTransactionRepository


class FakeUnitOfWork:
    """
    Fake Unit of Work para testes.

    Permite testar:
    - Comportamento de commit/rollback
    - Eventos publicados
    - Isolamento de transações
    """

    def __init__(self):
        self._events: List[DomainEvent] = []
        self._committed = False
        self._rolled_back = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        return False

    def commit(self):
        self._committed = True

    def rollback(self):
        self._rolled_back = True
        self._events.clear()

    def publish_event(self, event: DomainEvent):
        self._events.append(event)

    def collect_events(self) -> List[DomainEvent]:
        return list(self._events)

    def events_of(self, event_class) -> List[DomainEvent]:
        return [e for e in self._events if isinstance(e, event_class)]

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def rolled_back(self) -> bool:
        return self._rolled_back


class FakeHasher:
    """Hasher previsível para testes de use case."""

    def hash(self, plain: str) -> str:
        return f"hashed:{plain}"

    def compare(self, plain: str, hashed: str) -> bool:
        return hashed == f"hashed:{plain}"


# =============================================================================
# Infraestrutura
# =============================================================================

@pytest.fixture(scope="session")
def project_root():
    """Retorna o caminho raiz do projeto."""
    return project_path


@pytest.fixture
def uow():
    """Fixture para Unit of Work fake."""
    return FakeUnitOfWork()


@pytest.fixture
def hasher():
    return FakeHasher()


@pytest.fixture(autouse=True)
def reset_singletons():
    """
    Reset de singletons entre testes.

    Garante que cada teste inicia com container limpo.
    """
    yield
    from src.config.container import reset_container
    reset_container()


# =============================================================================
# Repositórios em memória
# =============================================================================

@pytest.fixture
def investor_repo():
    return InMemoryInvestorRepository()


@pytest.fixture
def asset_repo():
    return InMemoryAssetRepository()


@pytest.fixture
def portfolio_repo():
    return InMemoryPortfolioRepository()


@pytest.fixture
def investment_repo():
    return InMemoryInvestmentRepository()


@pytest.fixture
def transaction_repo():
    return InMemoryTransactionRepository()


@pytest.fixture
def goal_repo():
    return InMemoryGoalRepository()


@pytest.fixture
def alert_repo():
    return InMemoryAlertRepository()


@pytest.fixture
def notification_repo():
    return InMemoryNotificationRepository()


# =============================================================================
# Agregados de exemplo
# =============================================================================

def make_investor(
    name: str = "Maria Silva",
    email: str = "maria@exemplo.com",
    cpf: str = "529.982.247-25",
    birth: date = date(1990, 5, 17),
) -> Investor:
    return Investor.create(
        name=Name(name),
        email=Email(email),
        cpf=CPF(cpf),
        date_of_birth=DateOfBirth.create(birth),
        password_hash="hashed:Senha@123",
    )


@pytest.fixture
def investor_factory():
    """Cria investidores válidos (sem persistir)."""
    return make_investor


@pytest.fixture
def investor(investor_repo):
    """Investidor cadastrado no repositório."""
    investor = make_investor()
    investor_repo.create(investor)
    return investor


@pytest.fixture
def other_investor(investor_repo):
    investor = make_investor(
        name="João Souza",
        email="joao@exemplo.com",
        cpf="111.444.777-35",
    )
    investor_repo.create(investor)
    return investor


@pytest.fixture
def asset(asset_repo):
    """Ativo PETR4 cadastrado no repositório."""
    asset = Asset.create(
        symbol="PETR4",
        name="Petrobras PN",
        asset_type=AssetType.STOCK,
        sector="Energia",
        exchange="B3",
    )
    asset_repo.create(asset)
    return asset


@pytest.fixture
def portfolio(portfolio_repo, investor):
    """Carteira do investidor ``investor``."""
    portfolio = Portfolio.create(investor_id=investor.id, name="Carteira Principal")
    portfolio_repo.create(portfolio)
    return portfolio


def pytest_configure(config):
    """Configuração do pytest."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modifica coleção de testes."""
    skip_integration = pytest.mark.skip(reason="need --run-integration option to run")

    for item in items:
        if item.get_closest_marker("integration") is not None:
            if not config.getoption("--run-integration", default=False):
                item.add_marker(skip_integration)


def pytest_addoption(parser):
    """Adiciona opções de linha de comando."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="run integration tests",
    )
