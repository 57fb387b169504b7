# storefront/domain/principal.py
from dataclasses import dataclass

ROLES = ("user", "admin")


@dataclass(frozen=True)
class Principal:
    """Authenticated actor, as handed over by the token verifier."""

    id: int
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
