"""
Identidade de Entidades.

- UniqueEntityID: identificador opaco (string), gerado se ausente
- Entity: mixin de igualdade/hash por identidade

Agregados são dataclasses com ``eq=False`` que herdam de Entity,
para que dois objetos com o mesmo ``id`` sejam considerados a
mesma entidade independente do estado.
"""

from dataclasses import dataclass, field
from typing import Optional
import uuid


@dataclass(frozen=True)
class UniqueEntityID:
    """
    Identificador único de entidade.

    Example:
        UniqueEntityID()            # gera UUID4
        UniqueEntityID("abc-123")   # reaproveita valor existente
    """

    value: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        if self.value is None:
            object.__setattr__(self, "value", str(uuid.uuid4()))
        else:
            object.__setattr__(self, "value", str(self.value))

    @classmethod
    def from_optional(cls, value: Optional[str]) -> "UniqueEntityID":
        return cls(value) if value else cls()

    def __str__(self) -> str:
        return self.value


class Entity:
    """Igualdade e hash baseados no atributo ``id``."""

    id: UniqueEntityID

    def __eq__(self, other: object) -> bool:
        """Comparação por ID (identidade de entidade)."""
        if not isinstance(other, Entity) or type(self) is not type(other):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash baseado em ID."""
        return hash(self.id)
