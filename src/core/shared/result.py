"""
Result - Retorno tipado dos Use Cases.

Use cases retornam ``Ok(valor)`` ou ``Err(erro)`` em vez de lançar
exceções para falhas de negócio esperadas. O chamador (controller,
handler) decide como apresentar cada caso.

Exceções inesperadas (bugs, falhas de infraestrutura) continuam
sendo propagadas normalmente.

Example:
    result = service.execute(input_dto)
    if result.is_err():
        return error_response(result.error.to_dict())
    return success_response(result.value)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .exceptions import DomainException


T = TypeVar("T")
E = TypeVar("E", bound=DomainException)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Resultado de sucesso."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err(Generic[E]):
    """Resultado de falha com erro de domínio."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


Result = Union[Ok[T], Err[E]]
