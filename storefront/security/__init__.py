from .identity import (
    Identity,
    IdentityDependency,
    IdentityMiddleware,
    IdentityProvider,
    HeaderIdentityProvider,
    require_admin,
    require_customer,
)

__all__ = [
    "Identity",
    "IdentityDependency",
    "IdentityMiddleware",
    "IdentityProvider",
    "HeaderIdentityProvider",
    "require_admin",
    "require_customer",
]
