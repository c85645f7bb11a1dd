"""Tests for the payment gate."""

import re
from datetime import datetime, timezone

import pytest

from storefront.core.errors import PaymentMethodDisabled, PaymentNotFound
from storefront.models.payment import PaymentAuthorization
from storefront.services.payment_gate import CASH_ON_DELIVERY, PENDING_DELIVERY, PaymentGate


class TestPaymentGate:
    def test_cash_on_delivery_accepted(self):
        authorization = PaymentGate().validate(CASH_ON_DELIVERY)

        assert authorization.method == CASH_ON_DELIVERY
        assert authorization.status == PENDING_DELIVERY
        assert re.fullmatch(r"COD_\d{13}_[a-z0-9]{6}", authorization.transaction_id)
        assert authorization.instructions

    @pytest.mark.parametrize("method", ["CREDIT_CARD", "cash_on_delivery", "", "CIB"])
    def test_other_methods_rejected(self, method):
        with pytest.raises(PaymentMethodDisabled) as exc_info:
            PaymentGate().validate(method)
        assert exc_info.value.available == [CASH_ON_DELIVERY]

    def test_transaction_ids_are_unique(self):
        gate = PaymentGate()
        ids = {gate.validate(CASH_ON_DELIVERY).transaction_id for _ in range(50)}
        assert len(ids) == 50

    def test_allowed_method_without_handler_is_disabled(self):
        gate = PaymentGate(allowed_methods=(CASH_ON_DELIVERY, "EDAHABIA"))
        assert gate.is_enabled("EDAHABIA") is False

    def test_new_method_is_a_table_entry(self):
        def edahabia(customer_info):
            return PaymentAuthorization(
                method="EDAHABIA",
                transaction_id="EDH_1",
                status="AUTHORIZED",
                created_at=datetime.now(timezone.utc),
            )

        gate = PaymentGate(
            allowed_methods=(CASH_ON_DELIVERY, "EDAHABIA"),
            handlers={"EDAHABIA": edahabia},
        )
        assert gate.validate("EDAHABIA").transaction_id == "EDH_1"
        assert gate.is_enabled(CASH_ON_DELIVERY) is False

    def test_list_methods(self):
        methods = PaymentGate().list_methods()
        assert [m.id for m in methods] == [CASH_ON_DELIVERY]
        assert methods[0].is_default is True

    def test_verify_cod_reference(self):
        gate = PaymentGate()
        reference = gate.validate(CASH_ON_DELIVERY).transaction_id

        status = gate.verify(reference)
        assert status.status == PENDING_DELIVERY
        assert status.method == CASH_ON_DELIVERY

    def test_verify_unknown_reference(self):
        with pytest.raises(PaymentNotFound):
            PaymentGate().verify("CARD_123")
