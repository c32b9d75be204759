import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.security import get_current_store
from app.db.session import get_db
from app import models
from app.schemas.eta import CalculateETARequest, ETAOut, ETAResponse
from app.services.delivery import Destination, calculate, load_snapshot

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/eta", tags=["admin"])

NO_RULE_MESSAGE = "No delivery rule found for this location"


@router.post("/calculate", response_model=ETAResponse)
def calculate_eta(
    payload: CalculateETARequest,
    db: Session = Depends(get_db),
    store: models.Store = Depends(get_current_store),
):
    """preview the estimate a shopper would see for a destination/product."""
    if not payload.country_code or not payload.country_code.strip():
        raise HTTPException(status_code=400, detail="Country code is required")

    destination = Destination(
        country_code=payload.country_code,
        region=payload.region,
        postal_code=payload.postal_code,
    )
    order_ts = payload.order_date or datetime.now(timezone.utc)

    snapshot = load_snapshot(db, store)
    result = calculate(snapshot, destination, order_ts, payload.product_id, payload.variant_id)
    if result is None:
        logger.info(f"Admin ETA preview for {store.shop}: no rule for {destination.country_code}")
        return ETAResponse(success=False, code="no_rule_matched", error=NO_RULE_MESSAGE)

    return ETAResponse(success=True, eta=ETAOut.model_validate(result))
