"""
Shared Domain Components.

Contém componentes compartilhados entre todos os domínios:
- Exceções de domínio e Result (Ok/Err)
- Identidade de entidades
- Value Objects
- Interfaces (Ports)
- Base classes para Domain Events
"""

from .exceptions import (
    DomainException,
    ValidationError,
    InvariantViolationError,
    ResourceNotFoundError,
    NotAllowedError,
    WrongCredentialsError,
)
from .result import Ok, Err, Result
from .entity import Entity, UniqueEntityID
from .events import DomainEvent
from .interfaces import UnitOfWork, EventPublisher, PaginationParams
from .value_objects import Money, Quantity, Percentage

__all__ = [
    "DomainException",
    "ValidationError",
    "InvariantViolationError",
    "ResourceNotFoundError",
    "NotAllowedError",
    "WrongCredentialsError",
    "Ok",
    "Err",
    "Result",
    "Entity",
    "UniqueEntityID",
    "DomainEvent",
    "UnitOfWork",
    "EventPublisher",
    "PaginationParams",
    "Money",
    "Quantity",
    "Percentage",
]
