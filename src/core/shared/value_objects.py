"""
Value Objects do Domínio de Investimentos.

Objetos imutáveis, sem identidade, definidos apenas por seus atributos
e validados na construção. Toda operação retorna uma nova instância.

Value Objects:
- Money: valor monetário (Decimal) + moeda ISO de 3 letras
- Quantity: quantidade de ativos, nunca negativa
- Percentage: percentual com igualdade tolerante (0.001)
- CPF: cadastro de pessoa física com dígitos verificadores (mod 11)
- DateOfBirth: data de nascimento de investidor maior de idade
- Name, Email, Password: dados cadastrais do investidor
- Period: janela de análise ({1M, 3M, 6M, 1Y, 3Y, 5Y, YTD})

Política de saldo negativo (Money):
    Por padrão, nenhuma operação produz Money negativo. Quem modela
    valores com sinal (ex: lucro/prejuízo) precisa pedir explicitamente
    ``subtract(..., allow_negative=True)``.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import List, Optional, Union
import re

from .exceptions import (
    ValidationError,
    InvalidCPFError,
    InvalidDateOfBirthError,
    InvalidPeriodError,
    InsufficientQuantityError,
    NegativeBalanceError,
    CurrencyMismatchError,
)


Numeric = Union[int, float, str, Decimal]

DEFAULT_CURRENCY = "BRL"


def to_decimal(value: Numeric, field: str) -> Decimal:
    """Converte entrada numérica para Decimal sem herdar ruído de float."""
    if isinstance(value, bool):
        raise ValidationError(f"Valor numérico inválido: {value!r}", field=field)
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(value)
        except (InvalidOperation, TypeError, ValueError):
            raise ValidationError(f"Valor numérico inválido: {value!r}", field=field)

    if not result.is_finite():
        raise ValidationError(f"Valor numérico inválido: {value!r}", field=field)
    return result


# =============================================================================
# Money
# =============================================================================

@dataclass(frozen=True)
class Money:
    """
    Valor monetário.

    Use ``Money.create`` para construir a partir de entrada externa:
    o construtor direto apenas normaliza os campos.

    Invariantes:
    - Moeda é um código de 3 letras (maiúsculo)
    - Operações aritméticas exigem a mesma moeda
    - Resultado negativo só existe com ``allow_negative=True``

    Example:
        price = Money.create("32.50")
        total = price.multiply(100)          # BRL 3250.00
        total.subtract(Money.create(5000))   # NegativeBalanceError
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self):
        object.__setattr__(self, "amount", to_decimal(self.amount, "amount"))

        currency = (self.currency or "").strip().upper()
        if len(currency) != 3 or not currency.isalpha():
            raise ValidationError(
                "Moeda deve ser um código de 3 letras.",
                field="currency"
            )
        object.__setattr__(self, "currency", currency)

    @classmethod
    def create(
        cls,
        amount: Numeric,
        currency: str = DEFAULT_CURRENCY,
        allow_negative: bool = False,
    ) -> "Money":
        """
        Factory method com validação de sinal.

        Raises:
            NegativeBalanceError: Se amount < 0 e allow_negative=False
            ValidationError: Se amount ou moeda inválidos
        """
        money = cls(amount, currency)
        if money.amount < 0 and not allow_negative:
            raise NegativeBalanceError("Valor monetário não pode ser negativo.")
        return money

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> "Money":
        return cls(Decimal("0"), currency)

    def get_amount(self) -> Decimal:
        return self.amount

    def get_currency(self) -> str:
        return self.currency

    def add(self, other: "Money") -> "Money":
        self._ensure_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: "Money", allow_negative: bool = False) -> "Money":
        """
        Subtrai ``other`` deste valor.

        Raises:
            CurrencyMismatchError: Se moedas diferentes
            NegativeBalanceError: Se resultado < 0 e allow_negative=False
        """
        self._ensure_same_currency(other)

        result = self.amount - other.amount
        if result < 0 and not allow_negative:
            raise NegativeBalanceError(
                f"Não é possível subtrair {other} de {self}."
            )
        return Money(result, self.currency)

    def multiply(self, factor: Numeric) -> "Money":
        factor = to_decimal(factor, "factor")
        if factor < 0:
            raise ValidationError(
                "Fator de multiplicação não pode ser negativo.",
                field="factor"
            )
        return Money(self.amount * factor, self.currency)

    def divide(self, divisor: Numeric) -> "Money":
        divisor = to_decimal(divisor, "divisor")
        if divisor <= 0:
            raise ValidationError(
                "Divisor deve ser maior que zero.",
                field="divisor"
            )
        return Money(self.amount / divisor, self.currency)

    def rounded(self, places: int = 2) -> "Money":
        """Arredonda para ``places`` casas (ROUND_HALF_UP)."""
        exponent = Decimal(1).scaleb(-places)
        return Money(self.amount.quantize(exponent, rounding=ROUND_HALF_UP), self.currency)

    def is_greater_than(self, other: "Money") -> bool:
        self._ensure_same_currency(other)
        return self.amount > other.amount

    def is_less_than(self, other: "Money") -> bool:
        self._ensure_same_currency(other)
        return self.amount < other.amount

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def _ensure_same_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(
                f"Não é possível operar com moedas diferentes: "
                f"{self.currency} e {other.currency}."
            )

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:.2f}"


# =============================================================================
# Quantity
# =============================================================================

@dataclass(frozen=True)
class Quantity:
    """
    Quantidade de um ativo (aceita frações, ex: cripto).

    Invariante: nunca negativa.
    """

    value: Decimal

    def __post_init__(self):
        value = to_decimal(self.value, "quantity")
        if value < 0:
            raise ValidationError("Quantidade não pode ser negativa.", field="quantity")
        object.__setattr__(self, "value", value)

    @classmethod
    def create(cls, value: Numeric) -> "Quantity":
        return cls(value)

    @classmethod
    def zero(cls) -> "Quantity":
        return cls(Decimal("0"))

    def get_value(self) -> Decimal:
        return self.value

    def add(self, other: "Quantity") -> "Quantity":
        return Quantity(self.value + other.value)

    def subtract(self, other: "Quantity") -> "Quantity":
        """
        Raises:
            InsufficientQuantityError: Se other > self
        """
        if other.value > self.value:
            raise InsufficientQuantityError(
                f"Quantidade insuficiente: disponível {self.value}, "
                f"solicitado {other.value}."
            )
        return Quantity(self.value - other.value)

    def multiply(self, factor: Numeric) -> "Quantity":
        factor = to_decimal(factor, "factor")
        if factor < 0:
            raise ValidationError(
                "Fator de multiplicação não pode ser negativo.",
                field="factor"
            )
        return Quantity(self.value * factor)

    def is_zero(self) -> bool:
        return self.value == 0

    def is_greater_than(self, other: "Quantity") -> bool:
        return self.value > other.value

    def __str__(self) -> str:
        return str(self.value)


# =============================================================================
# Percentage
# =============================================================================

@dataclass(frozen=True, eq=False)
class Percentage:
    """
    Percentual em escala 0-100 (10.5 == 10,5%).

    Igualdade com tolerância de 0.001 (três casas decimais),
    por isso instâncias não são hasheáveis.
    """

    value: float

    TOLERANCE = 0.001

    def __post_init__(self):
        object.__setattr__(self, "value", float(self.value))

    @classmethod
    def create(cls, value: Numeric) -> "Percentage":
        return cls(float(value))

    @classmethod
    def zero(cls) -> "Percentage":
        return cls(0.0)

    @classmethod
    def from_decimal(cls, decimal: Numeric) -> "Percentage":
        """Converte fração (0.15) para percentual (15.0)."""
        return cls(float(decimal) * 100)

    def get_value(self) -> float:
        return self.value

    def get_decimal(self) -> float:
        return self.value / 100

    def is_positive(self) -> bool:
        return self.value > 0

    def is_negative(self) -> bool:
        return self.value < 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Percentage):
            return NotImplemented
        return abs(self.value - other.value) < self.TOLERANCE

    def __str__(self) -> str:
        return f"{self.value:.2f}%"


# =============================================================================
# CPF
# =============================================================================

@dataclass(frozen=True)
class CPF:
    """
    Cadastro de Pessoa Física.

    Aceita entrada formatada ("529.982.247-25") ou apenas dígitos;
    armazena somente os 11 dígitos.

    Regras:
    - Exatamente 11 dígitos
    - Não pode ser sequência repetida (ex: 111.111.111-11)
    - Dois dígitos verificadores pelo algoritmo mod 11
    """

    value: str

    def __post_init__(self):
        digits = self.clean(self.value)
        if not self.is_valid(digits):
            raise InvalidCPFError(f"CPF inválido: {self.value}")
        object.__setattr__(self, "value", digits)

    @classmethod
    def create(cls, raw: str) -> "CPF":
        return cls(raw)

    @staticmethod
    def clean(raw: Optional[str]) -> str:
        return re.sub(r"\D", "", raw or "")

    @classmethod
    def is_valid(cls, raw: Optional[str]) -> bool:
        cleaned = cls.clean(raw)

        if len(cleaned) != 11 or len(set(cleaned)) == 1:
            return False

        digits = [int(d) for d in cleaned]

        if cls.calculate_verifier_digit(digits, 10) != digits[9]:
            return False

        return cls.calculate_verifier_digit(digits, 11) == digits[10]

    @staticmethod
    def calculate_verifier_digit(digits: List[int], factor: int) -> int:
        """
        Calcula dígito verificador.

        factor=10 pondera digits[0..8] com pesos 10..2;
        factor=11 pondera digits[0..9] com pesos 11..2.
        """
        total = sum(
            digit * (factor - index)
            for index, digit in enumerate(digits[:factor - 1])
        )
        remainder = (total * 10) % 11
        return 0 if remainder == 10 else remainder

    @property
    def formatted(self) -> str:
        v = self.value
        return f"{v[:3]}.{v[3:6]}.{v[6:9]}-{v[9:]}"

    def get_value(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.formatted


# =============================================================================
# DateOfBirth
# =============================================================================

@dataclass(frozen=True)
class DateOfBirth:
    """
    Data de nascimento de investidor.

    ``create`` valida contra a data atual (ou ``today`` informado):
    - Não pode estar no futuro
    - Idade mínima de 18 anos, calculada pelo calendário
    """

    value: date

    MINIMUM_AGE = 18

    def __post_init__(self):
        object.__setattr__(self, "value", self._as_date(self.value))

    @classmethod
    def create(cls, value: Union[date, datetime], today: Optional[date] = None) -> "DateOfBirth":
        """
        Raises:
            InvalidDateOfBirthError: Se futura ou menor de idade
        """
        birth = cls._as_date(value)
        today = today or date.today()

        if birth > today:
            raise InvalidDateOfBirthError("Data de nascimento não pode estar no futuro.")

        if cls.calculate_age(birth, today) < cls.MINIMUM_AGE:
            raise InvalidDateOfBirthError(
                f"Investidor deve ter pelo menos {cls.MINIMUM_AGE} anos."
            )

        return cls(birth)

    @classmethod
    def is_valid(cls, value: Union[date, datetime], today: Optional[date] = None) -> bool:
        try:
            cls.create(value, today)
        except InvalidDateOfBirthError:
            return False
        return True

    @classmethod
    def calculate_age(cls, value: Union[date, datetime], today: Optional[date] = None) -> int:
        birth = cls._as_date(value)
        today = today or date.today()

        age = today.year - birth.year
        if (today.month, today.day) < (birth.month, birth.day):
            age -= 1
        return age

    def age(self, today: Optional[date] = None) -> int:
        return self.calculate_age(self.value, today)

    def get_value(self) -> date:
        return self.value

    @staticmethod
    def _as_date(value: Union[date, datetime]) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        raise InvalidDateOfBirthError(f"Data de nascimento inválida: {value!r}")


# =============================================================================
# Name / Email / Password
# =============================================================================

_NAME_PATTERN = re.compile(r"^[A-Za-zÀ-ÖØ-öø-ÿ ]+$")
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PASSWORD_SYMBOLS = re.compile(r"""[!@#$%^&*()_+\-=\[\]{};':"\\|,.<>/?]""")


@dataclass(frozen=True)
class Name:
    """Nome próprio: letras (inclusive acentuadas) e espaços, mínimo 2."""

    value: str

    MIN_LENGTH = 2

    def __post_init__(self):
        trimmed = (self.value or "").strip()

        if len(trimmed) < self.MIN_LENGTH:
            raise ValidationError(
                f"Nome deve ter pelo menos {self.MIN_LENGTH} caracteres.",
                field="name"
            )
        if not _NAME_PATTERN.match(trimmed):
            raise ValidationError("Nome deve conter apenas letras e espaços.", field="name")

        object.__setattr__(self, "value", trimmed)

    @classmethod
    def create(cls, value: str) -> "Name":
        return cls(value)

    def get_value(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Email:
    """Email no formato local@dominio.tld."""

    value: str

    def __post_init__(self):
        email = (self.value or "").strip()
        if not _EMAIL_PATTERN.match(email):
            raise ValidationError(f"Email inválido: {self.value}", field="email")
        object.__setattr__(self, "value", email)

    @classmethod
    def create(cls, value: str) -> "Email":
        return cls(value)

    def get_value(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Password:
    """
    Senha em texto puro, validada quanto à força.

    Hash fica a cargo do HashGenerator (colaborador externo).
    """

    value: str

    MIN_LENGTH = 6

    def __post_init__(self):
        password = self.value or ""

        if not password.strip():
            raise ValidationError("Senha é obrigatória.", field="password")
        if len(password) < self.MIN_LENGTH:
            raise ValidationError(
                f"Senha deve ter no mínimo {self.MIN_LENGTH} caracteres.",
                field="password"
            )
        if not re.search(r"[A-Z]", password):
            raise ValidationError(
                "Senha deve conter pelo menos uma letra maiúscula.",
                field="password"
            )
        if not _PASSWORD_SYMBOLS.search(password):
            raise ValidationError(
                "Senha deve conter pelo menos um símbolo.",
                field="password"
            )

    @classmethod
    def create(cls, value: str) -> "Password":
        return cls(value)

    def get_value(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return "Password(***)"


# =============================================================================
# Period
# =============================================================================

ALLOWED_PERIODS = ("1M", "3M", "6M", "1Y", "3Y", "5Y", "YTD")


@dataclass(frozen=True)
class Period:
    """Janela de análise de desempenho."""

    value: str

    def __post_init__(self):
        if self.value not in ALLOWED_PERIODS:
            raise InvalidPeriodError(
                f"Período inválido: {self.value}. "
                f"Permitidos: {', '.join(ALLOWED_PERIODS)}"
            )

    @classmethod
    def create(cls, value: str) -> "Period":
        return cls(value)

    def get_value(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value
