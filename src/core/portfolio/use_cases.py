"""
Use Cases (Application Services) do Domínio de Carteiras.

Use Cases implementados:
- CreatePortfolioService: Cria a carteira do investidor
- AddInvestmentToPortfolioService: Aloca novo investimento
- UpdateInvestmentAfterTransactionService: Aplica transação na posição
- GetInvestmentByAssetIdService: Obtém posição de um ativo
- FetchAllInvestmentsByPortfolioIdService: Lista posições (paginado)

Todos retornam ``Result`` (Ok/Err).
"""

import logging

from src.core.asset.ports import AssetRepository
from src.core.asset.use_cases import asset_not_found
from src.core.investor.ports import InvestorRepository
from src.core.investor.use_cases import investor_not_found
from src.core.shared.exceptions import (
    DomainException,
    NotAllowedError,
    ResourceNotFoundError,
)
from src.core.shared.interfaces import DEFAULT_PAGE_SIZE, PaginationParams, UnitOfWork
from src.core.shared.result import Err, Ok, Result
from src.core.shared.value_objects import Money, Quantity
from src.core.transaction.entities import TransactionType
from src.core.transaction.ports import TransactionRepository

from .dtos import (
    AddInvestmentToPortfolioInputDTO,
    CreatePortfolioInputDTO,
    FetchAllInvestmentsByPortfolioIdInputDTO,
    GetInvestmentByAssetIdInputDTO,
    InvestmentOutputDTO,
    PortfolioOutputDTO,
    UpdateInvestmentAfterTransactionInputDTO,
)
from .entities import Investment, Portfolio
from .events import InvestmentAddedEvent, InvestmentUpdatedEvent, PortfolioCreatedEvent
from .ports import InvestmentRepository, PortfolioRepository


logger = logging.getLogger(__name__)


def portfolio_not_found(investor_id: str) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Carteira não encontrada.",
        entity_type="Portfolio",
        entity_id=investor_id,
    )


def find_investor_portfolio(
    investor_repo: InvestorRepository,
    portfolio_repo: PortfolioRepository,
    investor_id: str,
) -> Result:
    """
    Localiza investidor e sua carteira.

    Returns:
        Ok((investor, portfolio)) ou Err(ResourceNotFoundError)
    """
    investor = investor_repo.find_by_id(investor_id)
    if investor is None:
        return Err(investor_not_found(investor_id))

    portfolio = portfolio_repo.find_by_investor_id(str(investor.id))
    if portfolio is None:
        return Err(portfolio_not_found(investor_id))

    return Ok((investor, portfolio))


class CreatePortfolioService:
    """
    Use Case: Criar carteira.

    Regras:
    - Investidor deve existir
    - Um investidor possui no máximo uma carteira
    """

    def __init__(
        self,
        portfolio_repo: PortfolioRepository,
        investor_repo: InvestorRepository,
        uow: UnitOfWork,
    ):
        self.portfolio_repo = portfolio_repo
        self.investor_repo = investor_repo
        self.uow = uow

    def execute(self, input_dto: CreatePortfolioInputDTO) -> Result:
        investor = self.investor_repo.find_by_id(input_dto.investor_id)
        if investor is None:
            return Err(investor_not_found(input_dto.investor_id))

        if self.portfolio_repo.find_by_investor_id(str(investor.id)):
            return Err(NotAllowedError(
                "Investidor já possui uma carteira.",
                rule="carteira_unica"
            ))

        try:
            portfolio = Portfolio.create(
                investor_id=investor.id,
                name=input_dto.name,
                description=input_dto.description,
            )
        except DomainException as e:
            return Err(e)

        with self.uow:
            self.portfolio_repo.create(portfolio)
            self.uow.publish_event(
                PortfolioCreatedEvent(
                    aggregate_id=str(portfolio.id),
                    investor_id=str(investor.id),
                    name=portfolio.name,
                )
            )

        logger.info(f"Carteira {portfolio.id} criada para investidor {investor.id}")
        return Ok(PortfolioOutputDTO.from_entity(portfolio))


class AddInvestmentToPortfolioService:
    """
    Use Case: Alocar novo investimento na carteira.

    Fluxo:
    1. Validar investidor, ativo e carteira
    2. Normalizar quantidade e preço
    3. Criar Investment com lançamento de abertura
    4. Registrar alocação e aumentar valor total da carteira
    5. Persistir e disparar InvestmentAdded
    """

    def __init__(
        self,
        portfolio_repo: PortfolioRepository,
        asset_repo: AssetRepository,
        investment_repo: InvestmentRepository,
        investor_repo: InvestorRepository,
        uow: UnitOfWork,
    ):
        self.portfolio_repo = portfolio_repo
        self.asset_repo = asset_repo
        self.investment_repo = investment_repo
        self.investor_repo = investor_repo
        self.uow = uow

    def execute(self, input_dto: AddInvestmentToPortfolioInputDTO) -> Result:
        investor = self.investor_repo.find_by_id(input_dto.investor_id)
        if investor is None:
            return Err(investor_not_found(input_dto.investor_id))

        asset = self.asset_repo.find_by_id(input_dto.asset_id)
        if asset is None:
            return Err(asset_not_found(input_dto.asset_id))

        portfolio = self.portfolio_repo.find_by_investor_id(str(investor.id))
        if portfolio is None:
            return Err(portfolio_not_found(input_dto.investor_id))

        if self.investment_repo.find_by_portfolio_id_and_asset_id(str(portfolio.id), str(asset.id)):
            return Err(NotAllowedError(
                f"Carteira já possui investimento em {asset.symbol}.",
                rule="investimento_unico_por_ativo"
            ))

        try:
            quantity = Quantity.create(input_dto.quantity)
            price = Money.create(input_dto.current_price, asset.currency)
        except DomainException as e:
            return Err(e)

        with self.uow:
            investment = Investment.create(
                portfolio_id=portfolio.id,
                asset_id=asset.id,
                current_price=price,
                initial_quantity=quantity,
            )
            self.investment_repo.create(investment)

            portfolio.add_allocation(investment.id)
            portfolio.increase_total_value(quantity, price)
            self.portfolio_repo.update(portfolio)

            self.uow.publish_event(
                InvestmentAddedEvent(
                    aggregate_id=str(portfolio.id),
                    investment_id=str(investment.id),
                    asset_id=str(asset.id),
                    quantity=str(quantity.value),
                    price=str(price.amount),
                )
            )

        logger.info(f"Investimento {investment.id} ({asset.symbol}) alocado na carteira {portfolio.id}")
        return Ok(InvestmentOutputDTO.from_entity(investment))


class UpdateInvestmentAfterTransactionService:
    """
    Use Case: Atualizar posição após uma transação registrada.

    - Posição existente: compra soma, venda subtrai, dividendo
      registra rendimento; preço atual passa a ser o da transação
    - Sem posição: apenas compra abre um novo investimento
    - A mesma transação não é aplicada duas vezes
    """

    def __init__(
        self,
        investor_repo: InvestorRepository,
        investment_repo: InvestmentRepository,
        transaction_repo: TransactionRepository,
        asset_repo: AssetRepository,
        portfolio_repo: PortfolioRepository,
        uow: UnitOfWork,
    ):
        self.investor_repo = investor_repo
        self.investment_repo = investment_repo
        self.transaction_repo = transaction_repo
        self.asset_repo = asset_repo
        self.portfolio_repo = portfolio_repo
        self.uow = uow

    def execute(self, input_dto: UpdateInvestmentAfterTransactionInputDTO) -> Result:
        investor = self.investor_repo.find_by_id(input_dto.investor_id)
        if investor is None:
            return Err(investor_not_found(input_dto.investor_id))

        transaction = self.transaction_repo.find_by_id(input_dto.transaction_id)
        if transaction is None:
            return Err(ResourceNotFoundError(
                "Transação não encontrada.",
                entity_type="Transaction",
                entity_id=input_dto.transaction_id,
            ))

        if self.asset_repo.find_by_id(str(transaction.asset_id)) is None:
            return Err(asset_not_found(str(transaction.asset_id)))

        portfolio = self.portfolio_repo.find_by_id(str(transaction.portfolio_id))
        if portfolio is None or not portfolio.belongs_to(investor.id):
            return Err(NotAllowedError(
                "Transação não pertence à carteira do investidor.",
                rule="carteira_do_investidor"
            ))

        investment = self.investment_repo.find_by_portfolio_id_and_asset_id(
            str(transaction.portfolio_id),
            str(transaction.asset_id),
        )

        if investment is None:
            return self._open_investment(portfolio, transaction)

        applied = {str(t.transaction_id) for t in investment.transactions}
        applied.update(str(y.transaction_id) for y in investment.yields)
        if str(transaction.id) in applied:
            return Err(NotAllowedError(
                "Transação já aplicada ao investimento.",
                rule="transacao_aplicada_uma_vez"
            ))

        try:
            with self.uow:
                investment.apply_transaction(transaction)
                self.investment_repo.update(investment)
                self._publish(investment, transaction)
        except DomainException as e:
            return Err(e)

        logger.info(
            f"Investimento {investment.id} atualizado por "
            f"{transaction.transaction_type.value} {transaction.id}"
        )
        return Ok(InvestmentOutputDTO.from_entity(investment))

    def _open_investment(self, portfolio, transaction) -> Result:
        if transaction.transaction_type is not TransactionType.BUY:
            return Err(NotAllowedError(
                "Apenas compras podem abrir um novo investimento.",
                rule="abertura_por_compra"
            ))

        with self.uow:
            investment = Investment.create(
                portfolio_id=transaction.portfolio_id,
                asset_id=transaction.asset_id,
                current_price=transaction.price,
            )
            investment.apply_transaction(transaction)
            self.investment_repo.create(investment)

            portfolio.add_allocation(investment.id)
            self.portfolio_repo.update(portfolio)

            self._publish(investment, transaction)

        logger.info(f"Investimento {investment.id} aberto pela compra {transaction.id}")
        return Ok(InvestmentOutputDTO.from_entity(investment))

    def _publish(self, investment, transaction) -> None:
        self.uow.publish_event(
            InvestmentUpdatedEvent(
                aggregate_id=str(investment.id),
                transaction_id=str(transaction.id),
                transaction_type=transaction.transaction_type.value,
                quantity=str(investment.quantity.value),
                current_price=str(investment.current_price.amount),
            )
        )


class GetInvestmentByAssetIdService:
    """
    Use Case: Obter a posição do investidor em um ativo.

    Retorna ``Ok(None)`` quando o investidor não possui o ativo.
    """

    def __init__(
        self,
        investor_repo: InvestorRepository,
        asset_repo: AssetRepository,
        portfolio_repo: PortfolioRepository,
        investment_repo: InvestmentRepository,
    ):
        self.investor_repo = investor_repo
        self.asset_repo = asset_repo
        self.portfolio_repo = portfolio_repo
        self.investment_repo = investment_repo

    def execute(self, input_dto: GetInvestmentByAssetIdInputDTO) -> Result:
        if self.investor_repo.find_by_id(input_dto.investor_id) is None:
            return Err(investor_not_found(input_dto.investor_id))

        if self.asset_repo.find_by_id(input_dto.asset_id) is None:
            return Err(asset_not_found(input_dto.asset_id))

        lookup = find_investor_portfolio(
            self.investor_repo, self.portfolio_repo, input_dto.investor_id
        )
        if lookup.is_err():
            return lookup
        _, portfolio = lookup.value

        investment = self.investment_repo.find_by_portfolio_id_and_asset_id(
            str(portfolio.id), input_dto.asset_id
        )
        return Ok(InvestmentOutputDTO.from_entity(investment) if investment else None)


class FetchAllInvestmentsByPortfolioIdService:
    """Use Case: Listar posições da carteira do investidor (paginado)."""

    def __init__(
        self,
        investor_repo: InvestorRepository,
        portfolio_repo: PortfolioRepository,
        investment_repo: InvestmentRepository,
        per_page: int = DEFAULT_PAGE_SIZE,
    ):
        self.investor_repo = investor_repo
        self.portfolio_repo = portfolio_repo
        self.investment_repo = investment_repo
        self.per_page = per_page

    def execute(self, input_dto: FetchAllInvestmentsByPortfolioIdInputDTO) -> Result:
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

        investments = self.investment_repo.find_many_by_portfolio(str(portfolio.id), params)
        return Ok([InvestmentOutputDTO.from_entity(i) for i in investments])
