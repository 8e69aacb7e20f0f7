"""
Ports (Interfaces) do Domínio de Investidores.

Define o contrato de persistência de investidores e sua
implementação em memória (testes e container padrão).
"""

from typing import Dict, List, Optional, Protocol, runtime_checkable

from src.core.shared.value_objects import CPF

from .entities import Investor


@runtime_checkable
class InvestorRepository(Protocol):
    """
    Interface para persistência de Investidores.

    Contratos:
    - find_* retornam None quando não encontrado
    - create/update/delete não retornam valor
    """

    def find_by_id(self, investor_id: str) -> Optional[Investor]:
        ...

    def find_by_email(self, email: str) -> Optional[Investor]:
        ...

    def find_by_cpf(self, cpf: str) -> Optional[Investor]:
        """Aceita CPF formatado ou apenas dígitos."""
        ...

    def create(self, investor: Investor) -> None:
        ...

    def update(self, investor: Investor) -> None:
        ...

    def delete(self, investor_id: str) -> None:
        ...


class InMemoryInvestorRepository:
    """
    Implementação em memória do InvestorRepository.

    Útil para testes unitários e desenvolvimento local.
    Não usar em produção!
    """

    def __init__(self):
        self._investors: Dict[str, Investor] = {}

    def find_by_id(self, investor_id: str) -> Optional[Investor]:
        return self._investors.get(str(investor_id))

    def find_by_email(self, email: str) -> Optional[Investor]:
        email = (email or "").strip().lower()
        for investor in self._investors.values():
            if investor.email.value.lower() == email:
                return investor
        return None

    def find_by_cpf(self, cpf: str) -> Optional[Investor]:
        digits = CPF.clean(cpf)
        for investor in self._investors.values():
            if investor.cpf.value == digits:
                return investor
        return None

    def create(self, investor: Investor) -> None:
        self._investors[str(investor.id)] = investor

    def update(self, investor: Investor) -> None:
        self._investors[str(investor.id)] = investor

    def delete(self, investor_id: str) -> None:
        self._investors.pop(str(investor_id), None)

    def list_all(self) -> List[Investor]:
        return list(self._investors.values())

    def clear(self) -> None:
        """Limpa todos os dados (útil para testes)."""
        self._investors.clear()
