"""Session management: one cart, order list and checkout per shopper"""

import re
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional
from dataclasses import dataclass

from fastapi import Header, HTTPException, Request

from .config import Settings
from .storage import FileKeyValueStore, KeyValueStore
from ..database.carts import CartStore
from ..database.orders import OrderStore
from ..services.checkout import CheckoutOrchestrator
from ..services.payment import PaymentGateway

logger = logging.getLogger(__name__)

SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


@dataclass
class StorefrontSession:
    """Stores owned by one shopper session"""
    session_id: str
    created_at: datetime
    storage: KeyValueStore
    cart: CartStore
    orders: OrderStore
    checkout: CheckoutOrchestrator


class SessionManager:
    """
    Builds the stores for each session once and hands out the same objects
    for the rest of the process lifetime.
    """

    def __init__(
        self,
        settings: Settings,
        gateway: PaymentGateway,
        storage_factory: Optional[Callable[[str], KeyValueStore]] = None,
    ):
        self.settings = settings
        self.gateway = gateway
        self.storage_factory = storage_factory or self._file_storage
        self.sessions: dict[str, StorefrontSession] = {}

    def _file_storage(self, session_id: str) -> KeyValueStore:
        return FileKeyValueStore(Path(self.settings.storage_dir) / session_id)

    def create_session(self, session_id: str) -> StorefrontSession:
        """Open a session, loading whatever it persisted before"""
        storage = self.storage_factory(session_id)
        cart = CartStore(storage, key=self.settings.cart_storage_key)
        orders = OrderStore(storage, key=self.settings.order_storage_key)
        session = StorefrontSession(
            session_id=session_id,
            created_at=datetime.now(timezone.utc),
            storage=storage,
            cart=cart,
            orders=orders,
            checkout=CheckoutOrchestrator(
                cart_store=cart,
                order_store=orders,
                gateway=self.gateway,
                payment_timeout=self.settings.payment_timeout_seconds,
            ),
        )
        self.sessions[session_id] = session
        logger.info(f"Session {session_id} opened with {cart.get_total_items()} item(s) in cart")
        return session

    def get_session(self, session_id: str) -> Optional[StorefrontSession]:
        """Get an open session by ID"""
        return self.sessions.get(session_id)

    def get_or_create_session(self, session_id: Optional[str] = None) -> StorefrontSession:
        """Get an open session or open it"""
        session_id = session_id or self.settings.default_session_id
        if session_id in self.sessions:
            return self.sessions[session_id]
        return self.create_session(session_id)

    def end_session(self, session_id: str) -> bool:
        """Drop a session's in-memory handles; its persisted state stays"""
        if session_id in self.sessions:
            del self.sessions[session_id]
            return True
        return False

    async def close(self) -> None:
        """Tear down all sessions and the payment gateway"""
        self.sessions.clear()
        await self.gateway.close()


def get_session(
    request: Request,
    x_session_id: Optional[str] = Header(None),
) -> StorefrontSession:
    """Resolve the caller's session from the X-Session-Id header"""
    if x_session_id is not None and not SESSION_ID_PATTERN.match(x_session_id):
        raise HTTPException(status_code=400, detail="Invalid session id")
    manager: SessionManager = request.app.state.session_manager
    return manager.get_or_create_session(x_session_id)
