"""Payment models"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class PaymentMethodInfo(BaseModel):
    """Payment method offered at checkout"""
    id: str
    name_ar: str
    name_fr: str
    description: str
    is_default: bool = False


class PaymentAuthorization(BaseModel):
    """Settlement reference issued by the payment gate"""
    method: str
    transaction_id: str
    status: str
    instructions: Optional[str] = None
    created_at: datetime


class PaymentMethodsResponse(BaseModel):
    success: bool = True
    data: list[PaymentMethodInfo]


class TransactionStatusResponse(BaseModel):
    transaction_id: str
    method: str
    status: str
    message: str
