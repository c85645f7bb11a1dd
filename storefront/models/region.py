"""Region (wilaya) models"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class Region(BaseModel):
    """Algerian wilaya with its delivery cost"""
    code: str = Field(pattern=r"^\d{2}$")
    name: str
    name_ar: str
    shipping_cost: Decimal = Field(ge=0)
    active: bool = True


class RegionListResponse(BaseModel):
    """Response listing active wilayas"""
    success: bool = True
    data: list[Region]
    count: int


class ShippingQuote(BaseModel):
    """Shipping cost for one region code"""
    region_code: str
    region_name: Optional[str] = None
    shipping_cost: Decimal
    is_fallback: bool = False


class ShippingCostResponse(BaseModel):
    """Response from the shipping cost endpoint"""
    region_code: str
    shipping_cost: Decimal
    is_fallback: bool
    free_shipping_threshold: Optional[Decimal] = None
    subtotal: Optional[Decimal] = None
    effective_shipping_cost: Optional[Decimal] = None
