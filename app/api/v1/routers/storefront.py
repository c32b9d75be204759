import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app import models
from app.core.security import get_storefront_store
from app.schemas.eta import (
    CartETARequest, CartLineItem, CheckoutETARequest, ETAOut, ETAResponse, ProductETARequest
)
from app.services.delivery import (
    AggregationPolicy, DeliverySnapshot, Destination, ETAResult, aggregate, calculate, load_snapshot
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/storefront", tags=["storefront"])

NO_RULE_MESSAGE = "No delivery rules matched"


def get_order_time() -> datetime:
    """storefront estimates are always for an order placed right now."""
    return datetime.now(timezone.utc)


def surface_enabled(store: models.Store, surface: str) -> bool:
    """per-surface widget flags; a store without settings shows everywhere."""
    store_settings = store.settings
    if store_settings is None:
        return True
    if surface == "product":
        return bool(store_settings.show_on_product_page)
    if surface == "cart":
        return bool(store_settings.cart_enabled)
    if surface == "checkout":
        return bool(store_settings.checkout_enabled)
    return False


def aggregation_policy(store: models.Store) -> AggregationPolicy:
    raw = store.settings.aggregation if store.settings else settings.DEFAULT_AGGREGATION
    try:
        return AggregationPolicy(raw)
    except ValueError:
        logger.warning(f"Unknown aggregation policy {raw!r} for store {store.shop}, using latest")
        return AggregationPolicy.LATEST


def build_destination(country_code: Optional[str], region: Optional[str] = None, postal_code: Optional[str] = None) -> Destination:
    if not country_code or not country_code.strip():
        raise HTTPException(status_code=400, detail="Country code is required")
    return Destination(country_code=country_code, region=region, postal_code=postal_code)


def estimate_items(
    snapshot: DeliverySnapshot,
    destination: Destination,
    items: List[CartLineItem],
    order_ts: datetime,
) -> List[ETAResult]:
    """per-line estimates; lines without a matching rule are dropped."""
    results = []
    for item in items:
        result = calculate(snapshot, destination, order_ts, item.product_id, item.variant_id)
        if result is not None:
            results.append(result)
    return results


def not_enabled(surface: str) -> ETAResponse:
    return ETAResponse(success=False, code="not_enabled", error=f"{surface.capitalize()} ETA not enabled")


def no_rule() -> ETAResponse:
    return ETAResponse(success=False, code="no_rule_matched", error=NO_RULE_MESSAGE)


@router.post("/eta", response_model=ETAResponse)
def product_eta(
    payload: ProductETARequest,
    db: Session = Depends(get_db),
    store: models.Store = Depends(get_storefront_store),
    order_ts: datetime = Depends(get_order_time),
):
    """estimate for a single product page."""
    destination = build_destination(payload.country_code, payload.region, payload.postal_code)
    if not surface_enabled(store, "product"):
        return not_enabled("product")

    snapshot = load_snapshot(db, store)
    result = calculate(snapshot, destination, order_ts, payload.product_id, payload.variant_id)
    if result is None:
        return no_rule()
    return ETAResponse(success=True, eta=ETAOut.model_validate(result))


@router.post("/cart-eta", response_model=ETAResponse)
def cart_eta(
    payload: CartETARequest,
    db: Session = Depends(get_db),
    store: models.Store = Depends(get_storefront_store),
    order_ts: datetime = Depends(get_order_time),
):
    """one estimate for the whole cart, per the store's aggregation policy."""
    if not payload.items:
        raise HTTPException(status_code=400, detail="No items in cart")
    destination = build_destination(payload.country_code, payload.region, payload.postal_code)
    if not surface_enabled(store, "cart"):
        return not_enabled("cart")

    snapshot = load_snapshot(db, store)
    combined = aggregate(estimate_items(snapshot, destination, payload.items, order_ts), aggregation_policy(store))
    if combined is None:
        logger.info(f"Cart ETA for {store.shop}: no rule for {destination.country_code}")
        return no_rule()
    return ETAResponse(success=True, eta=ETAOut.model_validate(combined))


@router.post("/checkout-eta", response_model=ETAResponse)
def checkout_eta(
    payload: CheckoutETARequest,
    db: Session = Depends(get_db),
    store: models.Store = Depends(get_storefront_store),
    order_ts: datetime = Depends(get_order_time),
):
    """checkout estimate using the shipping address for region/postal matching."""
    if not payload.items:
        raise HTTPException(status_code=400, detail="No items in checkout")
    address = payload.shipping_address
    destination = build_destination(
        (address.country_code if address else None) or payload.country_code,
        address.province if address else None,
        address.zip if address else None,
    )
    if not surface_enabled(store, "checkout"):
        return not_enabled("checkout")

    snapshot = load_snapshot(db, store)
    combined = aggregate(estimate_items(snapshot, destination, payload.items, order_ts), aggregation_policy(store))
    if combined is None:
        logger.info(f"Checkout ETA for {store.shop}: no rule for {destination.country_code}")
        return no_rule()
    return ETAResponse(success=True, eta=ETAOut.model_validate(combined))
