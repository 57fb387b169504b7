# storefront/client/cart_mirror.py
import json
import uuid
from dataclasses import dataclass, asdict
from decimal import Decimal
from pathlib import Path
from typing import Any, List

import requests

from storefront.client.session import SessionContext
from storefront.utils.settings import STOREFRONT_API_URL, CLIENT_TIMEOUT
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

LOCAL_PREFIX = "local-"


@dataclass
class MirrorLine:
    id: str
    product_name: str
    unit_price: Decimal
    quantity: int = 1
    display_name: str | None = None

    @property
    def is_local(self) -> bool:
        return self.id.startswith(LOCAL_PREFIX)

    @classmethod
    def from_server(cls, data: dict) -> "MirrorLine":
        return cls(
            id=str(data["id"]),
            product_name=data["productName"],
            unit_price=Decimal(str(data["unitPrice"])),
            quantity=int(data.get("quantity") or 1),
            display_name=data.get("displayName"),
        )


class CartMirror:
    """
    Local copy of the cart.

    Guests only ever use the local lines. With a credential, every mutation
    goes to the server first and the mirror is then re-synced from it; when
    the request fails the mutation is applied locally instead and the two
    may diverge until the next successful reconcile.
    """

    def __init__(
        self,
        base_url: str | None = None,
        http: Any = None,
        storage_path: str | Path | None = None,
        timeout: float | None = None,
    ):
        self.base_url = (STOREFRONT_API_URL if base_url is None else base_url).rstrip("/")
        self.http = http or requests.Session()
        self.timeout = timeout or CLIENT_TIMEOUT
        self.storage_path = Path(storage_path) if storage_path else None
        self.items: List[MirrorLine] = self._load()

    # ------------------------------------------------------------ persistence

    def _load(self) -> List[MirrorLine]:
        if not self.storage_path or not self.storage_path.exists():
            return []
        try:
            raw = json.loads(self.storage_path.read_text())
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable cart file {self.storage_path}: {e}")
            return []
        return [
            MirrorLine(
                id=r["id"],
                product_name=r["product_name"],
                unit_price=Decimal(r["unit_price"]),
                quantity=r.get("quantity", 1),
                display_name=r.get("display_name"),
            )
            for r in raw
        ]

    def _save(self) -> None:
        if not self.storage_path:
            return
        rows = [{**asdict(i), "unit_price": str(i.unit_price)} for i in self.items]
        self.storage_path.write_text(json.dumps(rows))

    # ------------------------------------------------------------ http

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api/cart{path}"

    def _call(self, method: str, path: str, session: SessionContext, **kwargs):
        """Returns the response on 2xx, None on any failure."""
        try:
            resp = getattr(self.http, method)(
                self._url(path),
                headers=session.auth_headers(),
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            logger.warning(f"Cart request {method.upper()} {path or '/'} failed: {e}")
            return None
        if not 200 <= resp.status_code < 300:
            logger.warning(f"Cart request {method.upper()} {path or '/'} returned {resp.status_code}")
            return None
        return resp

    # ------------------------------------------------------------ protocol

    def reconcile(self, session: SessionContext) -> bool:
        """
        Single hook for app start, login and logout.

        No credential: the mirror is emptied. Credential: the server cart
        replaces the mirror wholesale (last fetch wins). Returns True when
        the mirror now matches the server or the guest state.
        """
        if not session.authenticated:
            self.items = []
            self._save()
            logger.info("No credential, local cart cleared")
            return True

        resp = self._call("get", "", session)
        if resp is None:
            return False

        self.items = [MirrorLine.from_server(row) for row in resp.json()]
        self._save()
        logger.info(f"Cart synced: {len(self.items)} lines")
        return True

    def add(self, session: SessionContext, product_name: str, unit_price, quantity: int = 1) -> None:
        if session.authenticated:
            body = {"productName": product_name, "price": str(unit_price), "quantity": quantity}
            if self._call("post", "", session, json=body) is not None:
                self.reconcile(session)
                return

        logger.info(f"Adding {product_name!r} to local cart")
        self.items.append(
            MirrorLine(
                id=f"{LOCAL_PREFIX}{uuid.uuid4().hex}",
                product_name=product_name,
                unit_price=Decimal(str(unit_price)),
                quantity=quantity,
            )
        )
        self._save()

    def remove_one(self, session: SessionContext, line_id) -> None:
        line_id = str(line_id)
        if session.authenticated and not line_id.startswith(LOCAL_PREFIX):
            if self._call("delete", f"/{line_id}", session) is not None:
                self.reconcile(session)
                return

        self.items = [i for i in self.items if i.id != line_id]
        self._save()

    def clear(self, session: SessionContext) -> None:
        if session.authenticated:
            if self._call("delete", "", session) is not None:
                self.reconcile(session)
                return

        self.items = []
        self._save()

    # ------------------------------------------------------------ views

    def total(self) -> Decimal:
        return sum((i.unit_price * (i.quantity or 1) for i in self.items), Decimal("0"))

    def count(self) -> int:
        return sum(i.quantity or 1 for i in self.items)
