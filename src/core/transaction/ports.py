"""
Ports (Interfaces) do Domínio de Transações.

Consultas de histórico são paginadas (``PaginationParams``, 20 por
página por padrão) e devolvem a ordem de registro.
"""

from typing import Dict, List, Optional, Protocol, runtime_checkable

from src.core.shared.interfaces import PaginationParams

from .entities import Transaction


@runtime_checkable
class TransactionRepository(Protocol):
    """
    Interface para persistência de Transações.

    ``update`` recebe o snapshot corrigido (mesmo ID) e substitui
    o registro anterior.
    """

    def find_by_id(self, transaction_id: str) -> Optional[Transaction]:
        ...

    def find_many_by_portfolio_id(
        self,
        portfolio_id: str,
        params: PaginationParams,
    ) -> List[Transaction]:
        ...

    def find_many_by_portfolio_and_asset(
        self,
        portfolio_id: str,
        asset_id: str,
        params: PaginationParams,
    ) -> List[Transaction]:
        ...

    def create(self, transaction: Transaction) -> None:
        ...

    def update(self, transaction: Transaction) -> None:
        ...

    def delete(self, transaction_id: str) -> None:
        ...


class InMemoryTransactionRepository:
    """Implementação em memória do TransactionRepository."""

    def __init__(self):
        self._transactions: Dict[str, Transaction] = {}

    def find_by_id(self, transaction_id: str) -> Optional[Transaction]:
        return self._transactions.get(str(transaction_id))

    def find_many_by_portfolio_id(
        self,
        portfolio_id: str,
        params: PaginationParams,
    ) -> List[Transaction]:
        items = [
            t for t in self._transactions.values()
            if str(t.portfolio_id) == str(portfolio_id)
        ]
        return params.slice(items)

    def find_many_by_portfolio_and_asset(
        self,
        portfolio_id: str,
        asset_id: str,
        params: PaginationParams,
    ) -> List[Transaction]:
        items = [
            t for t in self._transactions.values()
            if str(t.portfolio_id) == str(portfolio_id)
            and str(t.asset_id) == str(asset_id)
        ]
        return params.slice(items)

    def create(self, transaction: Transaction) -> None:
        self._transactions[str(transaction.id)] = transaction

    def update(self, transaction: Transaction) -> None:
        # dict preserva a posição original da chave
        self._transactions[str(transaction.id)] = transaction

    def delete(self, transaction_id: str) -> None:
        self._transactions.pop(str(transaction_id), None)

    def list_all(self) -> List[Transaction]:
        return list(self._transactions.values())

    def clear(self) -> None:
        self._transactions.clear()
