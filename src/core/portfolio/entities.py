"""
Entidades do Domínio de Carteiras.

Entidades:
- Portfolio: Carteira do investidor (valor total + alocações)
- Investment: Posição em um ativo dentro da carteira
- InvestmentTransaction: Lançamento de compra/venda na posição
- InvestmentYield: Rendimento (dividendo) recebido pela posição

Regras de Negócio Encapsuladas:
- Quantidade da posição = soma das compras - soma das vendas
- Venda acima da posição é rejeitada antes de qualquer registro
- Preço médio ponderado apenas pelas compras
- Valor total da carteira nunca fica negativo
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union

from src.core.shared.entity import Entity, UniqueEntityID
from src.core.shared.exceptions import ValidationError
from src.core.shared.value_objects import Money, Percentage, Quantity
from src.core.transaction.entities import Transaction, TransactionType


# =============================================================================
# Portfolio
# =============================================================================

@dataclass(eq=False)
class Portfolio(Entity):
    """
    Entidade de Domínio: Carteira.

    Um investidor possui uma única carteira (garantido pelo
    CreatePortfolioService).

    Attributes:
        investor_id: Dono da carteira
        name: Nome da carteira
        description: Descrição opcional
        total_value: Valor aportado acumulado
        allocations: IDs dos investimentos alocados (sem duplicatas)
    """

    investor_id: UniqueEntityID
    name: str
    description: str = ""
    total_value: Money = field(default_factory=Money.zero)
    allocations: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None
    id: UniqueEntityID = field(default_factory=UniqueEntityID)

    NAME_MAX_LENGTH = 100

    @classmethod
    def create(
        cls,
        investor_id: Union[str, UniqueEntityID],
        name: str,
        description: str = "",
        total_value: Optional[Money] = None,
        entity_id: Optional[str] = None,
    ) -> "Portfolio":
        """
        Raises:
            ValidationError: Se nome vazio ou muito longo
        """
        cls._validate_name(name)

        return cls(
            investor_id=UniqueEntityID(investor_id),
            name=name.strip(),
            description=(description or "").strip(),
            total_value=total_value or Money.zero(),
            id=UniqueEntityID.from_optional(entity_id),
        )

    @classmethod
    def _validate_name(cls, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Nome da carteira é obrigatório.", field="name")

        if len(name.strip()) > cls.NAME_MAX_LENGTH:
            raise ValidationError(
                f"Nome da carteira deve ter no máximo {cls.NAME_MAX_LENGTH} caracteres.",
                field="name"
            )

    def update_description(self, description: str) -> None:
        self.description = (description or "").strip()
        self._touch()

    def add_allocation(self, investment_id: Union[str, UniqueEntityID]) -> None:
        investment_id = str(investment_id)
        if investment_id not in self.allocations:
            self.allocations.append(investment_id)
            self._touch()

    def increase_total_value(self, quantity: Quantity, price: Money) -> None:
        self.total_value = self.total_value.add(price.multiply(quantity.value))
        self._touch()

    def decrease_total_value(self, quantity: Quantity, price: Money) -> None:
        """
        Raises:
            NegativeBalanceError: Se o valor total ficaria negativo
        """
        self.total_value = self.total_value.subtract(price.multiply(quantity.value))
        self._touch()

    def belongs_to(self, investor_id: Union[str, UniqueEntityID]) -> bool:
        return self.investor_id == UniqueEntityID(investor_id)

    def _touch(self) -> None:
        self.updated_at = datetime.now()


# =============================================================================
# Investment
# =============================================================================

@dataclass(frozen=True)
class InvestmentTransaction:
    """Lançamento de compra/venda que compõe a posição."""

    transaction_id: UniqueEntityID
    transaction_type: TransactionType
    quantity: Quantity
    price: Money
    date: datetime


@dataclass(frozen=True)
class InvestmentYield:
    """Rendimento recebido (dividendo)."""

    yield_id: UniqueEntityID
    transaction_id: UniqueEntityID
    income: Money
    date: datetime


@dataclass(eq=False)
class Investment(Entity):
    """
    Entidade de Domínio: Investimento (posição em um ativo).

    Invariante central: ``quantity`` é sempre igual ao acumulado
    de compras menos vendas dos lançamentos. Por isso a quantidade
    só muda via ``record_transaction``.

    Example:
        investment = Investment.create(
            portfolio_id=portfolio.id,
            asset_id=asset.id,
            current_price=Money.create(30),
            initial_quantity=Quantity(10),
        )
        investment.record_transaction(
            transaction_id=UniqueEntityID(),
            transaction_type=TransactionType.SELL,
            quantity=Quantity(4),
            price=Money.create(35),
        )
        investment.quantity          # 6
        investment.profit_loss       # BRL 30.00
    """

    portfolio_id: UniqueEntityID
    asset_id: UniqueEntityID
    current_price: Money
    quantity: Quantity = field(default_factory=Quantity.zero)
    transactions: List[InvestmentTransaction] = field(default_factory=list)
    yields: List[InvestmentYield] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None
    id: UniqueEntityID = field(default_factory=UniqueEntityID)

    @classmethod
    def create(
        cls,
        portfolio_id: Union[str, UniqueEntityID],
        asset_id: Union[str, UniqueEntityID],
        current_price: Money,
        initial_quantity: Optional[Quantity] = None,
        transaction_id: Optional[Union[str, UniqueEntityID]] = None,
        date_at: Optional[datetime] = None,
        entity_id: Optional[str] = None,
    ) -> "Investment":
        """
        Cria a posição.

        Com ``initial_quantity`` > 0, registra um lançamento de compra
        de abertura ao ``current_price``.
        """
        investment = cls(
            portfolio_id=UniqueEntityID(portfolio_id),
            asset_id=UniqueEntityID(asset_id),
            current_price=current_price,
            id=UniqueEntityID.from_optional(entity_id),
        )

        if initial_quantity is not None and not initial_quantity.is_zero():
            investment.record_transaction(
                transaction_id=UniqueEntityID.from_optional(
                    str(transaction_id) if transaction_id else None
                ),
                transaction_type=TransactionType.BUY,
                quantity=initial_quantity,
                price=current_price,
                date=date_at,
            )

        return investment

    # -------------------------------------------------------------------------
    # Mutação
    # -------------------------------------------------------------------------

    def record_transaction(
        self,
        transaction_id: UniqueEntityID,
        transaction_type: TransactionType,
        quantity: Quantity,
        price: Money,
        date: Optional[datetime] = None,
        income: Optional[Money] = None,
    ) -> None:
        """
        Aplica um lançamento na posição e atualiza o preço atual.

        - BUY: soma quantidade
        - SELL: subtrai quantidade (InsufficientQuantityError se exceder,
          nada é registrado nesse caso)
        - DIVIDEND: registra rendimento; quantidade inalterada
        """
        date = date or datetime.now()

        if transaction_type is TransactionType.DIVIDEND:
            self.yields.append(
                InvestmentYield(
                    yield_id=UniqueEntityID(),
                    transaction_id=transaction_id,
                    income=income or Money.zero(price.currency),
                    date=date,
                )
            )
        else:
            if transaction_type is TransactionType.BUY:
                new_quantity = self.quantity.add(quantity)
            else:
                new_quantity = self.quantity.subtract(quantity)

            self.transactions.append(
                InvestmentTransaction(
                    transaction_id=transaction_id,
                    transaction_type=transaction_type,
                    quantity=quantity,
                    price=price,
                    date=date,
                )
            )
            self.quantity = new_quantity

        if not price.is_zero():
            self.current_price = price
        self._touch()

    def apply_transaction(self, transaction: Transaction) -> None:
        """Aplica uma Transaction registrada (ver ``record_transaction``)."""
        self.record_transaction(
            transaction_id=transaction.id,
            transaction_type=transaction.transaction_type,
            quantity=transaction.quantity,
            price=transaction.price,
            date=transaction.date_at,
            income=transaction.income,
        )

    def update_current_price(self, price: Money) -> None:
        self.current_price = price
        self._touch()

    # -------------------------------------------------------------------------
    # Cálculos
    # -------------------------------------------------------------------------

    @property
    def average_price(self) -> Money:
        """Preço médio ponderado das compras (preço atual se não houver)."""
        buys = [
            t for t in self.transactions
            if t.transaction_type is TransactionType.BUY
        ]

        total_quantity = sum((t.quantity.value for t in buys), Decimal("0"))
        if total_quantity == 0:
            return self.current_price

        total_value = Money.zero(self.current_price.currency)
        for t in buys:
            total_value = total_value.add(t.price.multiply(t.quantity.value))

        return total_value.divide(total_quantity)

    @property
    def total_invested(self) -> Money:
        return self.average_price.multiply(self.quantity.value)

    @property
    def current_value(self) -> Money:
        return self.current_price.multiply(self.quantity.value)

    @property
    def profit_loss(self) -> Money:
        """Lucro (positivo) ou prejuízo (negativo)."""
        return self.current_value.subtract(self.total_invested, allow_negative=True)

    @property
    def profit_loss_percentage(self) -> Percentage:
        total_invested = self.total_invested
        if total_invested.is_zero():
            return Percentage.zero()
        return Percentage.from_decimal(self.profit_loss.amount / total_invested.amount)

    @property
    def total_income(self) -> Money:
        total = Money.zero(self.current_price.currency)
        for y in self.yields:
            total = total.add(y.income)
        return total

    def has_quantity(self) -> bool:
        return not self.quantity.is_zero()

    def is_in_profit(self) -> bool:
        return self.profit_loss.amount > 0

    def is_in_loss(self) -> bool:
        return self.profit_loss.is_negative()

    def belongs_to_portfolio(self, portfolio_id: Union[str, UniqueEntityID]) -> bool:
        return self.portfolio_id == UniqueEntityID(portfolio_id)

    def _touch(self) -> None:
        self.updated_at = datetime.now()

    def __repr__(self) -> str:
        return (
            f"Investment(id={self.id}, asset_id={self.asset_id}, "
            f"quantity={self.quantity}, current_price={self.current_price})"
        )
