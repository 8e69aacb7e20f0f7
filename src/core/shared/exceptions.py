"""
Exceções de Domínio do InvestTrack.

Este módulo define exceções específicas do domínio que permitem
comunicar erros de forma clara e tipada entre as camadas.

Hierarquia:
    DomainException (base)
    ├── ValidationError (entrada malformada em value objects)
    │   ├── InvalidCPFError
    │   ├── InvalidDateOfBirthError
    │   └── InvalidPeriodError
    ├── InvariantViolationError (invariante de agregado/valor violada)
    │   ├── InsufficientQuantityError
    │   ├── NegativeBalanceError
    │   └── CurrencyMismatchError
    ├── ResourceNotFoundError (agregado não existe)
    ├── NotAllowedError (regra de negócio/autorização)
    └── WrongCredentialsError (credenciais inválidas)

Value objects lançam estas exceções na construção. Os use cases
as convertem em ``Err`` (ver ``result.py``) para o chamador.
"""

from typing import Optional


class DomainException(Exception):
    """
    Exceção base para todos os erros de domínio.

    Todas as exceções específicas do domínio devem herdar desta classe.
    Isso permite capturar qualquer erro de domínio de forma genérica.

    Example:
        try:
            quantity.subtract(other)
        except DomainException as e:
            logger.error(f"Erro de domínio: {e}")
    """

    default_message = "Erro de domínio."

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None):
        self.message = message or self.default_message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        """Serializa exceção para dicionário (útil para APIs)."""
        return {
            "error": self.code,
            "message": self.message,
        }


class ValidationError(DomainException):
    """
    Erro de validação de dados de entrada.

    Lançada quando um value object recebe dados que não atendem
    aos requisitos mínimos (CPF, nome, email, senha, datas...).

    Example:
        if len(name) < 2:
            raise ValidationError("Nome deve ter pelo menos 2 caracteres", field="name")
    """

    default_message = "Dados inválidos."

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        self.field = field
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class InvalidCPFError(ValidationError):
    """CPF malformado ou com dígitos verificadores incorretos."""

    default_message = "CPF inválido."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, field="cpf")


class InvalidDateOfBirthError(ValidationError):
    """Data de nascimento futura ou de investidor menor de idade."""

    default_message = "Data de nascimento inválida."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, field="date_of_birth")


class InvalidPeriodError(ValidationError):
    """Período fora do conjunto permitido."""

    default_message = "Período inválido."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, field="period")


class InvariantViolationError(DomainException):
    """
    Violação de invariante de um agregado ou value object.

    Diferente de ValidationError, os dados de entrada são bem formados,
    mas a operação levaria o objeto a um estado proibido.

    Example:
        if self.value < other.value:
            raise InsufficientQuantityError()
    """

    default_message = "Invariante de domínio violada."

    def __init__(self, message: Optional[str] = None, rule: Optional[str] = None):
        self.rule = rule
        super().__init__(message, "INVARIANT_VIOLATION")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.rule:
            result["rule"] = self.rule
        return result


class InsufficientQuantityError(InvariantViolationError):
    """Subtração deixaria a quantidade negativa."""

    default_message = "Quantidade insuficiente para a operação."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, rule="quantidade_nao_negativa")


class NegativeBalanceError(InvariantViolationError):
    """Operação resultaria em saldo monetário negativo."""

    default_message = "Operação resultaria em saldo negativo."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, rule="saldo_nao_negativo")


class CurrencyMismatchError(InvariantViolationError):
    """Operação entre valores de moedas diferentes."""

    default_message = "Não é possível operar com moedas diferentes."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, rule="mesma_moeda")


class ResourceNotFoundError(DomainException):
    """
    Agregado não encontrado no repositório.

    Example:
        investor = repo.find_by_id(investor_id)
        if investor is None:
            return Err(ResourceNotFoundError("Investidor não encontrado.", "Investor", investor_id))
    """

    default_message = "Recurso não encontrado."

    def __init__(
        self,
        message: Optional[str] = None,
        entity_type: Optional[str] = None,
        entity_id: Optional[str] = None,
    ):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message, "RESOURCE_NOT_FOUND")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.entity_id:
            result["entity_id"] = self.entity_id
        return result


class NotAllowedError(DomainException):
    """
    Operação não permitida pelas regras de negócio.

    Ex: editar meta de outro investidor, registrar segunda carteira.
    """

    default_message = "Operação não permitida."

    def __init__(self, message: Optional[str] = None, rule: Optional[str] = None):
        self.rule = rule
        super().__init__(message, "NOT_ALLOWED")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.rule:
            result["rule"] = self.rule
        return result


class WrongCredentialsError(DomainException):
    """Credenciais não conferem (preocupação de fronteira)."""

    default_message = "Credenciais inválidas."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, "WRONG_CREDENTIALS")
