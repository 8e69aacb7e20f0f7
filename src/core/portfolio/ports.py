"""
Ports (Interfaces) do Domínio de Carteiras.

- PortfolioRepository: carteiras (uma por investidor)
- InvestmentRepository: posições, com listagem paginada por carteira
"""

from typing import Dict, List, Optional, Protocol, runtime_checkable

from src.core.shared.interfaces import PaginationParams

from .entities import Investment, Portfolio


@runtime_checkable
class PortfolioRepository(Protocol):
    """Interface para persistência de Carteiras."""

    def find_by_id(self, portfolio_id: str) -> Optional[Portfolio]:
        ...

    def find_by_investor_id(self, investor_id: str) -> Optional[Portfolio]:
        ...

    def create(self, portfolio: Portfolio) -> None:
        ...

    def update(self, portfolio: Portfolio) -> None:
        ...

    def delete(self, portfolio_id: str) -> None:
        ...


@runtime_checkable
class InvestmentRepository(Protocol):
    """Interface para persistência de Investimentos."""

    def find_by_id(self, investment_id: str) -> Optional[Investment]:
        ...

    def find_by_portfolio_id_and_asset_id(
        self,
        portfolio_id: str,
        asset_id: str,
    ) -> Optional[Investment]:
        ...

    def find_many_by_portfolio(
        self,
        portfolio_id: str,
        params: PaginationParams,
    ) -> List[Investment]:
        ...

    def create(self, investment: Investment) -> None:
        ...

    def update(self, investment: Investment) -> None:
        ...

    def delete(self, investment_id: str) -> None:
        ...


class InMemoryPortfolioRepository:
    """Implementação em memória do PortfolioRepository."""

    def __init__(self):
        self._portfolios: Dict[str, Portfolio] = {}

    def find_by_id(self, portfolio_id: str) -> Optional[Portfolio]:
        return self._portfolios.get(str(portfolio_id))

    def find_by_investor_id(self, investor_id: str) -> Optional[Portfolio]:
        return next(
            (p for p in self._portfolios.values() if str(p.investor_id) == str(investor_id)),
            None,
        )

    def create(self, portfolio: Portfolio) -> None:
        self._portfolios[str(portfolio.id)] = portfolio

    def update(self, portfolio: Portfolio) -> None:
        self._portfolios[str(portfolio.id)] = portfolio

    def delete(self, portfolio_id: str) -> None:
        self._portfolios.pop(str(portfolio_id), None)

    def list_all(self) -> List[Portfolio]:
        return list(self._portfolios.values())

    def clear(self) -> None:
        self._portfolios.clear()


class InMemoryInvestmentRepository:
    """Implementação em memória do InvestmentRepository."""

    def __init__(self):
        self._investments: Dict[str, Investment] = {}

    def find_by_id(self, investment_id: str) -> Optional[Investment]:
        return self._investments.get(str(investment_id))

    def find_by_portfolio_id_and_asset_id(
        self,
        portfolio_id: str,
        asset_id: str,
    ) -> Optional[Investment]:
        return next(
            (
                i for i in self._investments.values()
                if str(i.portfolio_id) == str(portfolio_id)
                and str(i.asset_id) == str(asset_id)
            ),
            None,
        )

    def find_many_by_portfolio(
        self,
        portfolio_id: str,
        params: PaginationParams,
    ) -> List[Investment]:
        items = [
            i for i in self._investments.values()
            if str(i.portfolio_id) == str(portfolio_id)
        ]
        return params.slice(items)

    def create(self, investment: Investment) -> None:
        self._investments[str(investment.id)] = investment

    def update(self, investment: Investment) -> None:
        self._investments[str(investment.id)] = investment

    def delete(self, investment_id: str) -> None:
        self._investments.pop(str(investment_id), None)

    def list_all(self) -> List[Investment]:
        return list(self._investments.values())

    def clear(self) -> None:
        self._investments.clear()
