"""
Use Cases (Application Services) do Domínio de Transações.

Use Cases implementados:
- TransactionValidator: Validação comum (investidor, ativo, carteira, valores)
- RecordBuyTransactionService: Registra compra
- RecordSellTransactionService: Registra venda (limitada à posição)
- RecordDividendTransactionService: Registra dividendo
- UpdateTransactionService: Corrige transação (novo snapshot)
- FetchTransactionsHistoryByPortfolioIdService: Histórico da carteira
- FetchTransactionsHistoryByAssetIdService: Histórico de um ativo

Regras comuns de compra/venda:
- Quantidade > 0 e preço > 0
- Taxas > 0 (toda operação em bolsa tem custo de corretagem/emolumentos)
"""

from dataclasses import dataclass
from typing import Optional
import logging

from src.core.asset.entities import Asset
from src.core.asset.ports import AssetRepository
from src.core.asset.use_cases import asset_not_found
from src.core.investor.entities import Investor
from src.core.investor.ports import InvestorRepository
from src.core.investor.use_cases import investor_not_found
from src.core.portfolio.entities import Portfolio
from src.core.portfolio.ports import InvestmentRepository, PortfolioRepository
from src.core.portfolio.use_cases import find_investor_portfolio, portfolio_not_found
from src.core.shared.exceptions import (
    DomainException,
    InsufficientQuantityError,
    NotAllowedError,
    ResourceNotFoundError,
    ValidationError,
)
from src.core.shared.interfaces import DEFAULT_PAGE_SIZE, PaginationParams, UnitOfWork
from src.core.shared.result import Err, Ok, Result
from src.core.shared.value_objects import Money, Numeric, Quantity

from .dtos import (
    FetchTransactionsHistoryInputDTO,
    RecordDividendInputDTO,
    RecordTransactionInputDTO,
    TransactionOutputDTO,
    UpdateTransactionInputDTO,
)
from .entities import Transaction, TransactionType
from .events import TransactionCorrectedEvent, TransactionRecordedEvent
from .ports import TransactionRepository


logger = logging.getLogger(__name__)


def _parse_type(value: str) -> TransactionType:
    try:
        return TransactionType.from_string(value or "")
    except ValueError as e:
        raise ValidationError(str(e), field="transaction_type")


@dataclass(frozen=True)
class ValidatedTransaction:
    """Contexto validado de uma transação."""

    investor: Investor
    asset: Asset
    portfolio: Portfolio
    quantity: Quantity
    price: Money
    fees: Money
    income: Money


class TransactionValidator:
    """
    Validação comum aos registros de transação.

    Ordem:
    1. Investidor existe
    2. Ativo existe
    3. Investidor possui carteira
    4. Valores normalizados em value objects (moeda do ativo)
    5. Preço > 0
    """

    def __init__(
        self,
        investor_repo: InvestorRepository,
        asset_repo: AssetRepository,
        portfolio_repo: PortfolioRepository,
    ):
        self.investor_repo = investor_repo
        self.asset_repo = asset_repo
        self.portfolio_repo = portfolio_repo

    def validate(
        self,
        investor_id: str,
        asset_id: str,
        price: Numeric,
        quantity: Optional[Numeric] = None,
        fees: Optional[Numeric] = None,
        income: Optional[Numeric] = None,
    ) -> Result:
        investor = self.investor_repo.find_by_id(investor_id)
        if investor is None:
            return Err(investor_not_found(investor_id))

        asset = self.asset_repo.find_by_id(asset_id)
        if asset is None:
            return Err(asset_not_found(asset_id))

        portfolio = self.portfolio_repo.find_by_investor_id(str(investor.id))
        if portfolio is None:
            return Err(portfolio_not_found(investor_id))

        currency = asset.currency
        try:
            validated = ValidatedTransaction(
                investor=investor,
                asset=asset,
                portfolio=portfolio,
                quantity=Quantity.create(quantity) if quantity is not None else Quantity.zero(),
                price=Money.create(price, currency),
                fees=Money.create(fees, currency) if fees is not None else Money.zero(currency),
                income=Money.create(income, currency) if income is not None else Money.zero(currency),
            )
        except DomainException as e:
            return Err(e)

        if validated.price.is_zero():
            return Err(NotAllowedError("Preço deve ser maior que zero."))

        return Ok(validated)


class _RecordTransactionService:
    """Fluxo comum: persistir transação e disparar TransactionRecorded."""

    transaction_type: TransactionType

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        validator: TransactionValidator,
        uow: UnitOfWork,
    ):
        self.transaction_repo = transaction_repo
        self.validator = validator
        self.uow = uow

    def _check_type(self, transaction_type: str) -> Optional[Err]:
        try:
            requested = _parse_type(transaction_type)
        except ValidationError as e:
            return Err(e)

        if requested is not self.transaction_type:
            return Err(NotAllowedError(
                f"Apenas transações do tipo {self.transaction_type.value} "
                f"são permitidas nesta operação.",
                rule="tipo_de_transacao"
            ))
        return None

    def _save(self, transaction: Transaction, investor: Investor) -> Result:
        with self.uow:
            self.transaction_repo.create(transaction)
            self.uow.publish_event(
                TransactionRecordedEvent(
                    aggregate_id=str(transaction.id),
                    investor_id=str(investor.id),
                    portfolio_id=str(transaction.portfolio_id),
                    asset_id=str(transaction.asset_id),
                    transaction_type=transaction.transaction_type.value,
                    quantity=str(transaction.quantity.value),
                    price=str(transaction.price.amount),
                    currency=transaction.price.currency,
                )
            )

        logger.info(
            f"Transação {transaction.transaction_type.value} {transaction.id} "
            f"registrada na carteira {transaction.portfolio_id}"
        )
        return Ok(TransactionOutputDTO.from_entity(transaction))

    def _validate_trade(self, input_dto: RecordTransactionInputDTO) -> Result:
        type_error = self._check_type(input_dto.transaction_type)
        if type_error:
            return type_error

        validation = self.validator.validate(
            investor_id=input_dto.investor_id,
            asset_id=input_dto.asset_id,
            price=input_dto.price,
            quantity=input_dto.quantity,
            fees=input_dto.fees,
        )
        if validation.is_err():
            return validation

        validated = validation.value
        if validated.quantity.is_zero():
            return Err(NotAllowedError("Quantidade deve ser maior que zero."))
        if validated.fees.is_zero():
            return Err(NotAllowedError("Taxas devem ser maiores que zero."))

        return validation

    def _build(self, validated: ValidatedTransaction, input_dto) -> Result:
        try:
            transaction = Transaction.create(
                portfolio_id=validated.portfolio.id,
                asset_id=validated.asset.id,
                transaction_type=self.transaction_type,
                price=validated.price,
                quantity=validated.quantity,
                fees=validated.fees,
                income=validated.income,
                date_at=input_dto.date_at,
                notes=input_dto.notes,
            )
        except DomainException as e:
            return Err(e)
        return Ok(transaction)


class RecordBuyTransactionService(_RecordTransactionService):
    """
    Use Case: Registrar compra.

    Example:
        result = service.execute(RecordTransactionInputDTO(
            investor_id=investor_id,
            asset_id=asset_id,
            transaction_type="Buy",
            quantity=100,
            price="32.50",
            fees="4.90",
        ))
    """

    transaction_type = TransactionType.BUY

    def execute(self, input_dto: RecordTransactionInputDTO) -> Result:
        validation = self._validate_trade(input_dto)
        if validation.is_err():
            return validation

        built = self._build(validation.value, input_dto)
        if built.is_err():
            return built

        return self._save(built.value, validation.value.investor)


class RecordSellTransactionService(_RecordTransactionService):
    """
    Use Case: Registrar venda.

    Além das regras de compra, a quantidade vendida não pode
    exceder a posição atual do ativo na carteira.
    """

    transaction_type = TransactionType.SELL

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        investment_repo: InvestmentRepository,
        validator: TransactionValidator,
        uow: UnitOfWork,
    ):
        super().__init__(transaction_repo, validator, uow)
        self.investment_repo = investment_repo

    def execute(self, input_dto: RecordTransactionInputDTO) -> Result:
        validation = self._validate_trade(input_dto)
        if validation.is_err():
            return validation
        validated = validation.value

        investment = self.investment_repo.find_by_portfolio_id_and_asset_id(
            str(validated.portfolio.id), str(validated.asset.id)
        )
        held = investment.quantity if investment else Quantity.zero()
        if validated.quantity.is_greater_than(held):
            return Err(InsufficientQuantityError(
                f"Quantidade insuficiente de {validated.asset.symbol}: "
                f"disponível {held}, solicitado {validated.quantity}."
            ))

        built = self._build(validated, input_dto)
        if built.is_err():
            return built

        return self._save(built.value, validated.investor)


class RecordDividendTransactionService(_RecordTransactionService):
    """
    Use Case: Registrar recebimento de dividendo.

    Rendimento deve ser > 0; quantidade e taxas são zeradas
    pela entidade.
    """

    transaction_type = TransactionType.DIVIDEND

    def execute(self, input_dto: RecordDividendInputDTO) -> Result:
        type_error = self._check_type(input_dto.transaction_type)
        if type_error:
            return type_error

        validation = self.validator.validate(
            investor_id=input_dto.investor_id,
            asset_id=input_dto.asset_id,
            price=input_dto.price,
            income=input_dto.income,
        )
        if validation.is_err():
            return validation
        validated = validation.value

        if validated.income.is_zero():
            return Err(NotAllowedError("Rendimento deve ser maior que zero."))

        built = self._build(validated, input_dto)
        if built.is_err():
            return built

        return self._save(built.value, validated.investor)


class UpdateTransactionService:
    """
    Use Case: Corrigir transação de compra/venda.

    A transação registrada não é alterada: ``Transaction.corrected``
    gera um novo snapshot (mesmo ID) que substitui o anterior no
    repositório.

    Regras:
    - Investidor existe e ao menos um campo foi informado
    - Transação existe e pertence à carteira do investidor
    - Dividendos não são corrigíveis por aqui
    - Quantidade, preço e taxas informados devem ser > 0
    """

    def __init__(
        self,
        investor_repo: InvestorRepository,
        transaction_repo: TransactionRepository,
        portfolio_repo: PortfolioRepository,
        uow: UnitOfWork,
    ):
        self.investor_repo = investor_repo
        self.transaction_repo = transaction_repo
        self.portfolio_repo = portfolio_repo
        self.uow = uow

    def execute(self, input_dto: UpdateTransactionInputDTO) -> Result:
        investor = self.investor_repo.find_by_id(input_dto.investor_id)
        if investor is None:
            return Err(investor_not_found(input_dto.investor_id))

        fields = (
            input_dto.transaction_type,
            input_dto.quantity,
            input_dto.price,
            input_dto.fees,
            input_dto.notes,
        )
        if all(value is None for value in fields):
            return Err(NotAllowedError("Informe ao menos um campo da transação."))

        transaction = self.transaction_repo.find_by_id(input_dto.transaction_id)
        if transaction is None:
            return Err(ResourceNotFoundError(
                "Transação não encontrada.",
                entity_type="Transaction",
                entity_id=input_dto.transaction_id,
            ))

        portfolio = self.portfolio_repo.find_by_id(str(transaction.portfolio_id))
        if portfolio is None or not portfolio.belongs_to(investor.id):
            return Err(NotAllowedError(
                "Transação não pertence à carteira do investidor.",
                rule="carteira_do_investidor"
            ))

        try:
            corrected = self._correct(transaction, input_dto)
        except DomainException as e:
            return Err(e)

        with self.uow:
            self.transaction_repo.update(corrected)
            self.uow.publish_event(
                TransactionCorrectedEvent(
                    aggregate_id=str(corrected.id),
                    investor_id=str(investor.id),
                    transaction_type=corrected.transaction_type.value,
                    quantity=str(corrected.quantity.value),
                    price=str(corrected.price.amount),
                    fees=str(corrected.fees.amount),
                )
            )

        logger.info(f"Transação {corrected.id} corrigida")
        return Ok(TransactionOutputDTO.from_entity(corrected))

    def _correct(self, transaction: Transaction, input_dto: UpdateTransactionInputDTO) -> Transaction:
        """
        Raises:
            NotAllowedError: Dividendo envolvido ou valor zerado
            ValidationError: Tipo ou valores malformados
        """
        new_type = None
        if input_dto.transaction_type is not None:
            new_type = _parse_type(input_dto.transaction_type)

        if transaction.is_dividend() or new_type is TransactionType.DIVIDEND:
            raise NotAllowedError(
                "Apenas compras e vendas podem ser corrigidas.",
                rule="correcao_compra_venda"
            )

        currency = transaction.price.currency
        quantity = price = fees = None

        if input_dto.quantity is not None:
            quantity = Quantity.create(input_dto.quantity)
            if quantity.is_zero():
                raise NotAllowedError("Quantidade deve ser maior que zero.")

        if input_dto.price is not None:
            price = Money.create(input_dto.price, currency)
            if price.is_zero():
                raise NotAllowedError("Preço deve ser maior que zero.")

        if input_dto.fees is not None:
            fees = Money.create(input_dto.fees, currency)
            if fees.is_zero():
                raise NotAllowedError("Taxas devem ser maiores que zero.")

        return transaction.corrected(
            transaction_type=new_type,
            quantity=quantity,
            price=price,
            fees=fees,
            notes=input_dto.notes,
        )


class FetchTransactionsHistoryByPortfolioIdService:
    """Use Case: Histórico paginado da carteira do investidor."""

    def __init__(
        self,
        investor_repo: InvestorRepository,
        portfolio_repo: PortfolioRepository,
        transaction_repo: TransactionRepository,
        per_page: int = DEFAULT_PAGE_SIZE,
    ):
        self.investor_repo = investor_repo
        self.portfolio_repo = portfolio_repo
        self.transaction_repo = transaction_repo
        self.per_page = per_page

    def execute(self, input_dto: FetchTransactionsHistoryInputDTO) -> Result:
        try:
            params = PaginationParams(page=input_dto.page, per_page=self.per_page)
        except DomainException as e:
            return Err(e)

        lookup = find_investor_portfolio(
            self.investor_repo, self.portfolio_repo, input_dto.investor_id
        )
        if lookup.is_err():
            return lookup
        _, portfolio = lookup.value

        transactions = self.transaction_repo.find_many_by_portfolio_id(str(portfolio.id), params)
        return Ok([TransactionOutputDTO.from_entity(t) for t in transactions])


class FetchTransactionsHistoryByAssetIdService:
    """Use Case: Histórico paginado de um ativo na carteira do investidor."""

    def __init__(
        self,
        investor_repo: InvestorRepository,
        portfolio_repo: PortfolioRepository,
        transaction_repo: TransactionRepository,
        per_page: int = DEFAULT_PAGE_SIZE,
    ):
        self.investor_repo = investor_repo
        self.portfolio_repo = portfolio_repo
        self.transaction_repo = transaction_repo
        self.per_page = per_page

    def execute(self, input_dto: FetchTransactionsHistoryInputDTO) -> Result:
        if not input_dto.asset_id:
            return Err(ValidationError("Ativo é obrigatório.", field="asset_id"))

        try:
            params = PaginationParams(page=input_dto.page, per_page=self.per_page)
        except DomainException as e:
            return Err(e)

        lookup = find_investor_portfolio(
            self.investor_repo, self.portfolio_repo, input_dto.investor_id
        )
        if lookup.is_err():
            return lookup
        _, portfolio = lookup.value

        transactions = self.transaction_repo.find_many_by_portfolio_and_asset(
            str(portfolio.id), input_dto.asset_id, params
        )
        return Ok([TransactionOutputDTO.from_entity(t) for t in transactions])
