"""
Entidades do Domínio de Transações.

Entidades:
- Transaction: Fato registrado de compra, venda ou dividendo
- TransactionType: Tipos de transação

Regras de Negócio Encapsuladas:
- Compra/Venda: quantidade > 0, total = preço × quantidade, sem rendimento
- Dividendo: quantidade forçada a zero, rendimento > 0, total e taxas zerados
- Data da transação não pode estar no futuro
- Transação registrada é imutável: correções geram um novo snapshot
  com o mesmo ID (``corrected``), persistido via repositório
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from src.core.shared.entity import Entity, UniqueEntityID
from src.core.shared.exceptions import ValidationError
from src.core.shared.value_objects import Money, Quantity


class TransactionType(Enum):
    """Tipos de transação sobre um ativo."""

    BUY = "Buy"
    SELL = "Sell"
    DIVIDEND = "Dividend"

    @classmethod
    def from_string(cls, value: str) -> "TransactionType":
        """
        Converte string (nome ou valor do enum) para TransactionType.

        Raises:
            ValueError: Se tipo inválido
        """
        try:
            return cls[value.upper()]
        except KeyError:
            pass

        for transaction_type in cls:
            if transaction_type.value.lower() == value.lower():
                return transaction_type

        raise ValueError(f"Tipo de transação inválido: {value}")

    @property
    def moves_quantity(self) -> bool:
        """Compra e venda alteram a posição; dividendo não."""
        return self is not TransactionType.DIVIDEND


@dataclass(frozen=True, eq=False)
class Transaction(Entity):
    """
    Entidade de Domínio: Transação.

    Imutável após a criação (frozen). Para corrigir um registro,
    use ``corrected(...)``, que devolve uma nova instância validada
    com o mesmo ``id``.

    Attributes:
        portfolio_id: Carteira onde a transação foi registrada
        asset_id: Ativo negociado
        transaction_type: Compra, venda ou dividendo
        quantity: Quantidade negociada (zero para dividendos)
        price: Preço unitário
        fees: Taxas de corretagem/emolumentos
        income: Rendimento recebido (apenas dividendos)
        total_amount: Valor bruto (preço × quantidade; zero para dividendos)
        date_at: Data/hora em que a operação ocorreu
        notes: Observações livres
        created_at: Data/hora do registro
        updated_at: Data/hora da última correção
        id: Identificador único

    Example:
        buy = Transaction.create(
            portfolio_id=portfolio.id,
            asset_id=asset.id,
            transaction_type=TransactionType.BUY,
            quantity=Quantity(100),
            price=Money.create("32.50"),
            fees=Money.create("4.90"),
        )
        buy.total_amount   # BRL 3250.00
        buy.net_amount     # BRL 3245.10
    """

    portfolio_id: UniqueEntityID
    asset_id: UniqueEntityID
    transaction_type: TransactionType
    quantity: Quantity
    price: Money
    fees: Money
    income: Money
    total_amount: Money
    date_at: datetime
    notes: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None
    id: UniqueEntityID = field(default_factory=UniqueEntityID)

    @classmethod
    def create(
        cls,
        portfolio_id: Union[str, UniqueEntityID],
        asset_id: Union[str, UniqueEntityID],
        transaction_type: TransactionType,
        price: Money,
        quantity: Optional[Quantity] = None,
        fees: Optional[Money] = None,
        income: Optional[Money] = None,
        date_at: Optional[Union[date, datetime]] = None,
        notes: str = "",
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        entity_id: Optional[Union[str, UniqueEntityID]] = None,
        now: Optional[datetime] = None,
    ) -> "Transaction":
        """
        Factory method com as regras por tipo de transação.

        Args:
            now: Referência de "agora" para validar ``date_at`` (testes)

        Raises:
            ValidationError: Se quantidade, rendimento ou data inválidos
        """
        now = now or datetime.now()
        date_at = cls._normalize_date(date_at) if date_at is not None else now

        if date_at > cls._align_now(now, date_at):
            raise ValidationError(
                "Data da transação não pode estar no futuro.",
                field="date_at"
            )

        zero = Money.zero(price.currency)

        if transaction_type is TransactionType.DIVIDEND:
            if income is None or income.is_zero():
                raise ValidationError(
                    "Rendimento do dividendo deve ser maior que zero.",
                    field="income"
                )
            quantity = Quantity.zero()
            fees = zero
            total_amount = zero
        else:
            if quantity is None or quantity.is_zero():
                raise ValidationError(
                    "Quantidade deve ser maior que zero.",
                    field="quantity"
                )
            fees = fees or zero
            income = zero
            total_amount = price.multiply(quantity.value)

        return cls(
            portfolio_id=UniqueEntityID(portfolio_id),
            asset_id=UniqueEntityID(asset_id),
            transaction_type=transaction_type,
            quantity=quantity,
            price=price,
            fees=fees,
            income=income,
            total_amount=total_amount,
            date_at=date_at,
            notes=(notes or "").strip(),
            created_at=created_at or now,
            updated_at=updated_at,
            id=UniqueEntityID.from_optional(entity_id),
        )

    @staticmethod
    def _normalize_date(value: Union[date, datetime]) -> datetime:
        if isinstance(value, datetime):
            return value
        return datetime.combine(value, datetime.min.time())

    @staticmethod
    def _align_now(now: datetime, date_at: datetime) -> datetime:
        """Alinha ``now`` ao fuso de ``date_at``; datetime sem fuso é hora local."""
        if date_at.tzinfo is not None and now.tzinfo is None:
            return now.astimezone()
        if date_at.tzinfo is None and now.tzinfo is not None:
            return now.astimezone().replace(tzinfo=None)
        return now

    @property
    def gross_amount(self) -> Money:
        return self.price.multiply(self.quantity.value)

    @property
    def net_amount(self) -> Money:
        """Valor bruto menos taxas (pode ser negativo em operações pequenas)."""
        return self.gross_amount.subtract(self.fees, allow_negative=True)

    def is_buy(self) -> bool:
        return self.transaction_type is TransactionType.BUY

    def is_sell(self) -> bool:
        return self.transaction_type is TransactionType.SELL

    def is_dividend(self) -> bool:
        return self.transaction_type is TransactionType.DIVIDEND

    def corrected(
        self,
        transaction_type: Optional[TransactionType] = None,
        quantity: Optional[Quantity] = None,
        price: Optional[Money] = None,
        fees: Optional[Money] = None,
        income: Optional[Money] = None,
        notes: Optional[str] = None,
    ) -> "Transaction":
        """
        Retorna nova versão da transação com os campos corrigidos.

        Todas as regras de ``create`` são reaplicadas; o original
        permanece inalterado.
        """
        return Transaction.create(
            portfolio_id=self.portfolio_id,
            asset_id=self.asset_id,
            transaction_type=transaction_type or self.transaction_type,
            price=price or self.price,
            quantity=quantity or self.quantity,
            fees=fees or self.fees,
            income=income or self.income,
            date_at=self.date_at,
            notes=self.notes if notes is None else notes,
            created_at=self.created_at,
            updated_at=datetime.now(),
            entity_id=self.id,
        )

    def __repr__(self) -> str:
        return (
            f"Transaction(id={self.id}, type={self.transaction_type.value}, "
            f"quantity={self.quantity}, price={self.price})"
        )
