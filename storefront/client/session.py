# storefront/client/session.py
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class SessionContext:
    """
    Credential and user info of one client session.

    Passed explicitly to every CartMirror call instead of being read from
    well-known storage keys.
    """

    token: str | None = None
    user: Dict[str, Any] = field(default_factory=dict)

    @property
    def authenticated(self) -> bool:
        return bool(self.token)

    def auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    def login(self, token: str, user: Dict[str, Any] | None = None) -> None:
        self.token = token
        self.user = dict(user or {})

    def logout(self) -> None:
        self.token = None
        self.user = {}
