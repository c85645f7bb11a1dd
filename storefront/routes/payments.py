"""Payment API routes"""

from fastapi import APIRouter, Depends

from ..bootstrap import Services
from ..models.payment import PaymentMethodsResponse, TransactionStatusResponse
from .dependencies import get_services

router = APIRouter(prefix="/api/payments", tags=["Payments"])


@router.get("/methods", response_model=PaymentMethodsResponse)
async def list_payment_methods(services: Services = Depends(get_services)):
    """Payment methods offered at checkout"""
    return PaymentMethodsResponse(data=services.payments.list_methods())


@router.get("/verify/{transaction_id}", response_model=TransactionStatusResponse)
async def verify_payment(transaction_id: str, services: Services = Depends(get_services)):
    return services.payments.verify(transaction_id)
