from typing import List, Optional
from datetime import date, datetime
from pydantic import BaseModel, Field, validator


class ETAOut(BaseModel):
    min_date: date
    max_date: date
    min_days: int
    max_days: int
    message: str
    rule_id: Optional[int] = None
    rule_name: Optional[str] = None
    carrier: Optional[str] = None
    tone: str = "info"

    class Config:
        from_attributes = True


class ETAResponse(BaseModel):
    """success flag plus either the estimate or an error classification."""
    success: bool
    eta: Optional[ETAOut] = None
    code: Optional[str] = None  # no_rule_matched|not_enabled
    error: Optional[str] = None


class CalculateETARequest(BaseModel):
    """admin calculation; country_code is checked in the route so a missing one is a 400."""
    country_code: Optional[str] = Field(None, description="ISO 3166-1 alpha-2 country code")
    region: Optional[str] = Field(None, description="Province/state code")
    postal_code: Optional[str] = None
    product_id: Optional[str] = None
    variant_id: Optional[str] = None
    order_date: Optional[datetime] = Field(None, description="Order timestamp; defaults to now (UTC)")


class ProductETARequest(BaseModel):
    country_code: Optional[str] = None
    region: Optional[str] = None
    postal_code: Optional[str] = None
    product_id: Optional[str] = None
    variant_id: Optional[str] = None


class CartLineItem(BaseModel):
    product_id: Optional[str] = None
    variant_id: Optional[str] = None
    quantity: int = 1

    @validator('quantity')
    def validate_quantity(cls, v):
        if v <= 0:
            raise ValueError('Quantity must be greater than 0')
        return v


class CartETARequest(BaseModel):
    items: List[CartLineItem] = []
    country_code: Optional[str] = None
    region: Optional[str] = None
    postal_code: Optional[str] = None


class ShippingAddress(BaseModel):
    country_code: Optional[str] = None
    province: Optional[str] = None
    zip: Optional[str] = None


class CheckoutETARequest(BaseModel):
    items: List[CartLineItem] = []
    shipping_address: Optional[ShippingAddress] = None
    country_code: Optional[str] = None  # used when the address has no country
