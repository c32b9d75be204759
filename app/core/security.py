from datetime import datetime, timedelta, timezone
from typing import Optional
from urllib.parse import urlparse

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app import models


# admin tokens are issued by the platform login flow; `sub` is the shop domain
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = {
        "sub": subject,
        "iat": int(datetime.now(tz=timezone.utc).timestamp()),
    }
    expire = datetime.now(tz=timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRES_MIN))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm="HS256")


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])
    except JWTError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from e


def find_store(db: Session, shop: str) -> Optional[models.Store]:
    """shop domains compare case-insensitively."""
    return db.query(models.Store).filter(func.lower(models.Store.shop) == shop.strip().lower()).first()


def get_current_store(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> models.Store:
    """merchant admin auth: resolve the store named by the token."""
    payload = decode_token(token)
    shop = payload.get("sub")
    if not shop:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")
    store = find_store(db, shop)
    if not store:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Store not found")
    return store


def shop_from_headers(shop_domain: Optional[str], referer: Optional[str]) -> Optional[str]:
    if shop_domain and shop_domain.strip():
        return shop_domain.strip().lower()
    if referer:
        host = urlparse(referer).hostname
        if host:
            return host.lower()
    return None


def get_storefront_store(
    x_shop_domain: Optional[str] = Header(None),
    referer: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> models.Store:
    """public storefront calls: identify the shop by header, no auth."""
    shop = shop_from_headers(x_shop_domain, referer)
    if not shop:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Shop domain not found")
    store = find_store(db, shop)
    if not store or not store.is_active or not store.app_enabled:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Store not found or inactive")
    return store
