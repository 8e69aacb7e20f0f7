"""
Hash de senhas.

Implementa os ports HashGenerator/HashComparer com bcrypt. O custo
(rounds) fica embutido no próprio hash, então hashes gerados com
outro custo continuam conferindo.
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt considera apenas os primeiros 72 bytes da senha
MAX_PASSWORD_BYTES = 72


class BcryptPasswordHasher:
    """
    Hasher bcrypt com salt aleatório por senha.

    Example:
        hasher = BcryptPasswordHasher(rounds=12)
        hashed = hasher.hash("Senha@123")
        hasher.compare("Senha@123", hashed)  # True
    """

    DEFAULT_ROUNDS = 12

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        if not 4 <= rounds <= 31:
            raise ValueError("rounds deve estar entre 4 e 31")
        self.rounds = rounds

    def hash(self, plain: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(self._encode(plain), salt).decode("ascii")

    def compare(self, plain: str, hashed: str) -> bool:
        """Hash malformado ou de outro algoritmo nunca confere."""
        try:
            return bcrypt.checkpw(self._encode(plain), hashed.encode("ascii"))
        except (AttributeError, UnicodeEncodeError, ValueError):
            logger.warning("Hash de senha em formato inválido")
            return False

    @staticmethod
    def _encode(plain: str) -> bytes:
        return plain.encode("utf-8")[:MAX_PASSWORD_BYTES]
