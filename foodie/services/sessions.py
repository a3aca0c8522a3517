"""
Storefront Sessions

Each diner's cart, checkout progress, last fetched menu and scanned
table live in a StorefrontSession, kept in process memory and looked up
by the random id in the `foodie_session` cookie.

Sessions are not persisted: a restart empties every cart.
"""

import logging
import secrets
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime
from functools import lru_cache
from typing import Callable, Iterable, Optional

from fastapi import Request

from foodie.core.config import get_settings
from foodie.schemas import LocationContext, MenuItem, QRCodeData
from foodie.services.cart import Cart
from foodie.services.checkout import CheckoutFlow
from foodie.services.payment import get_payment_service

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "foodie_session"


@dataclass
class StorefrontSession:
    id: str
    checkout: CheckoutFlow
    menu: dict[str, MenuItem] = field(default_factory=dict)
    outlet_id: Optional[str] = None
    location: Optional[LocationContext] = None
    qr: Optional[QRCodeData] = None
    created_at: datetime = field(default_factory=datetime.now)
    last_seen: float = 0.0

    @property
    def cart(self) -> Cart:
        return self.checkout.cart

    def remember_menu(self, outlet_id: str, items: Iterable[MenuItem]) -> None:
        """Cache the outlet's menu so cart adds can look items up by id."""
        if self.outlet_id != outlet_id:
            self.menu = {}
        self.outlet_id = outlet_id
        for item in items:
            self.menu[item.id] = item


class SessionStore:
    """
    Thread-safe in-memory map of session id to StorefrontSession.

    Entries are kept in least-recently-used order. Sessions idle for longer
    than `idle_seconds` are evicted on every lookup, and the oldest ones go
    first once `max_active` sessions exist.
    """

    def __init__(
        self,
        idle_seconds: Optional[float] = None,
        max_active: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        settings = get_settings()
        self.idle_seconds = idle_seconds if idle_seconds is not None else settings.session_idle_minutes * 60
        self.max_active = max_active or settings.session_max_active
        self._clock = clock
        self._sessions: OrderedDict[str, StorefrontSession] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def _new_session(self, session_id: str) -> StorefrontSession:
        settings = get_settings()
        checkout = CheckoutFlow(
            Cart(),
            get_payment_service(),
            otp_delay_seconds=settings.otp_verify_delay_seconds,
            delivery_minutes=settings.delivery_estimate_minutes,
        )
        return StorefrontSession(id=session_id, checkout=checkout)

    def _evict_idle(self, now: float) -> None:
        # Oldest first, so the scan stops at the first live session
        while self._sessions:
            session_id, session = next(iter(self._sessions.items()))
            if now - session.last_seen < self.idle_seconds:
                break
            del self._sessions[session_id]
            logger.debug(f"Sessions: Evicted idle {session_id[:8]}")

    def _touch(self, session: StorefrontSession, now: float) -> StorefrontSession:
        session.last_seen = now
        self._sessions.move_to_end(session.id)
        return session

    def get(self, session_id: Optional[str]) -> Optional[StorefrontSession]:
        """Live session for `session_id`, or None. Never creates one."""
        with self._lock:
            now = self._clock()
            self._evict_idle(now)
            session = self._sessions.get(session_id) if session_id else None
            return self._touch(session, now) if session is not None else None

    def get_or_create(self, session_id: Optional[str]) -> StorefrontSession:
        with self._lock:
            now = self._clock()
            self._evict_idle(now)
            session = self._sessions.get(session_id) if session_id else None
            if session is not None:
                return self._touch(session, now)

            while len(self._sessions) >= self.max_active:
                evicted, _ = self._sessions.popitem(last=False)
                logger.warning(f"Sessions: Limit of {self.max_active} reached, dropped {evicted[:8]}")

            session = self._new_session(secrets.token_urlsafe(24))
            self._sessions[session.id] = session
            logger.debug(f"Sessions: Created {session.id[:8]} ({len(self._sessions)} active)")
            return self._touch(session, now)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()


@lru_cache()
def get_session_store() -> SessionStore:
    return SessionStore()


async def session_cookie_middleware(request: Request, call_next):
    """
    Issue the session cookie for sessions created during this request.

    Runs outside the exception handlers, so a request that fails after
    creating a session still hands its id to the client.
    """
    response = await call_next(request)
    session_id = getattr(request.state, "new_session_id", None)
    if session_id:
        response.set_cookie(SESSION_COOKIE_NAME, session_id, httponly=True, samesite="lax")
    return response
