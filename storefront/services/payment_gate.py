"""
Payment gate

Only cash on delivery is accepted. The accepted set is an explicit allow-list
and each accepted method has a handler in ``PAYMENT_HANDLERS``; adding a
method means adding it to both, without touching the order flow.
No external payment network is contacted.
"""

import logging
import random
import string
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from ..core.errors import PaymentMethodDisabled, PaymentNotFound
from ..models.checkout import CustomerInfo
from ..models.payment import PaymentAuthorization, PaymentMethodInfo, TransactionStatusResponse

logger = logging.getLogger(__name__)

CASH_ON_DELIVERY = "CASH_ON_DELIVERY"
PENDING_DELIVERY = "PENDING_DELIVERY"

ALLOWED_PAYMENT_METHODS: tuple[str, ...] = (CASH_ON_DELIVERY,)

PaymentHandler = Callable[[Optional[CustomerInfo]], PaymentAuthorization]


def _random_suffix(length: int) -> str:
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=length))


def cash_on_delivery(customer_info: Optional[CustomerInfo]) -> PaymentAuthorization:
    """Issue a COD settlement reference; money is collected by the courier"""
    millis = int(time.time() * 1000)
    return PaymentAuthorization(
        method=CASH_ON_DELIVERY,
        transaction_id=f"COD_{millis}_{_random_suffix(6)}",
        status=PENDING_DELIVERY,
        instructions=(
            "Le livreur vous contactera pour confirmer la livraison "
            "et le paiement en espèces."
        ),
        created_at=datetime.now(timezone.utc),
    )


PAYMENT_HANDLERS: dict[str, PaymentHandler] = {
    CASH_ON_DELIVERY: cash_on_delivery,
}

PAYMENT_METHODS: dict[str, PaymentMethodInfo] = {
    CASH_ON_DELIVERY: PaymentMethodInfo(
        id=CASH_ON_DELIVERY,
        name_ar="الدفع عند الاستلام",
        name_fr="Paiement à la livraison",
        description="Payez en espèces lors de la livraison",
        is_default=True,
    ),
}


class PaymentGate:
    """Allow-list policy in front of the settlement handlers"""

    def __init__(
        self,
        allowed_methods: tuple[str, ...] = ALLOWED_PAYMENT_METHODS,
        handlers: Optional[dict[str, PaymentHandler]] = None,
    ):
        self.handlers = dict(PAYMENT_HANDLERS if handlers is None else handlers)
        # A method is usable only if it is both allowed and handled.
        self.allowed_methods = tuple(m for m in allowed_methods if m in self.handlers)

    def is_enabled(self, method: str) -> bool:
        return method in self.allowed_methods

    def validate(
        self, method: str, customer_info: Optional[CustomerInfo] = None
    ) -> PaymentAuthorization:
        """
        Accept an allow-listed method and return its settlement reference.

        Raises:
            PaymentMethodDisabled: any method outside the allow-list
        """
        if not self.is_enabled(method):
            logger.warning(f"Rejected payment method: {method}")
            raise PaymentMethodDisabled(method, list(self.allowed_methods))

        authorization = self.handlers[method](customer_info)
        logger.info(f"Payment authorized: {authorization.transaction_id} ({method})")
        return authorization

    def list_methods(self) -> list[PaymentMethodInfo]:
        """Descriptors of the enabled methods"""
        return [PAYMENT_METHODS[m] for m in self.allowed_methods if m in PAYMENT_METHODS]

    def verify(self, transaction_id: str) -> TransactionStatusResponse:
        """Status of a settlement reference issued by this gate"""
        if transaction_id.startswith("COD_") and self.is_enabled(CASH_ON_DELIVERY):
            return TransactionStatusResponse(
                transaction_id=transaction_id,
                method=CASH_ON_DELIVERY,
                status=PENDING_DELIVERY,
                message="Commande en cours de livraison - Paiement à la réception",
            )
        raise PaymentNotFound(transaction_id)
