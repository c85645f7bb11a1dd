"""
Caller identity

Resolves who is calling on every request. Credentials are checked upstream
(the API gateway / auth provider); by default the gateway's identity headers
are trusted. Requests without identity headers are anonymous guests.
"""

import logging
from typing import Callable, Optional, Protocol

from fastapi import Request
from pydantic import BaseModel
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from ..core.errors import AuthenticationRequired, Forbidden

logger = logging.getLogger(__name__)

CUSTOMER_ID_HEADER = "X-Customer-Id"
CUSTOMER_ROLE_HEADER = "X-Customer-Role"

ADMIN_ROLE = "admin"
CUSTOMER_ROLE = "customer"


class Identity(BaseModel):
    """Authenticated caller, or an anonymous one"""
    customer_id: Optional[str] = None
    role: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.customer_id is not None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


ANONYMOUS = Identity()


class IdentityProvider(Protocol):
    def identify(self, request: Request) -> Identity: ...


class HeaderIdentityProvider:
    """Trusts the identity headers set by the gateway"""

    def identify(self, request: Request) -> Identity:
        customer_id = (request.headers.get(CUSTOMER_ID_HEADER) or "").strip()
        if not customer_id:
            return ANONYMOUS
        role = (request.headers.get(CUSTOMER_ROLE_HEADER) or CUSTOMER_ROLE).strip().lower()
        return Identity(customer_id=customer_id, role=role)


class IdentityMiddleware(BaseHTTPMiddleware):
    """
    Middleware that attaches the caller identity to ``request.state``.

    It never rejects a request; routes decide what they need through
    ``IdentityDependency``.
    """

    def __init__(self, app, provider: Optional[IdentityProvider] = None):
        super().__init__(app)
        self.provider = provider or HeaderIdentityProvider()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        identity = self.provider.identify(request)
        request.state.identity = identity

        if identity.is_authenticated:
            logger.debug(f"Request from customer {identity.customer_id} ({identity.role})")

        response = await call_next(request)
        return response


class IdentityDependency:
    """
    FastAPI dependency for route-level access control.
    """

    def __init__(self, require_customer: bool = False, require_admin: bool = False):
        """
        Args:
            require_customer: If True, reject anonymous callers
            require_admin: If True, also require the admin role
        """
        self.require_customer = require_customer or require_admin
        self.require_admin = require_admin

    async def __call__(self, request: Request) -> Identity:
        identity = getattr(request.state, "identity", ANONYMOUS)

        if self.require_customer and not identity.is_authenticated:
            raise AuthenticationRequired()

        if self.require_admin and not identity.is_admin:
            logger.warning(f"Admin access denied for customer {identity.customer_id}")
            raise Forbidden("Admin access required")

        return identity


# Dependency instances
require_customer = IdentityDependency(require_customer=True)
require_admin = IdentityDependency(require_admin=True)
