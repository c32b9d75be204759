from datetime import datetime, date
from typing import Optional
from sqlalchemy import Integer, String, DateTime, Date, Boolean, ForeignKey, Text, UniqueConstraint, JSON
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.db.base import Base


# helpers
now = datetime.utcnow


class Store(Base):
    __tablename__ = "stores"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    shop: Mapped[str] = mapped_column(String(255), unique=True, index=True)  # e.g. "my-shop.myshopify.com"
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    app_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    active_template_id: Mapped[int | None] = mapped_column(ForeignKey("message_templates.id", ondelete="SET NULL"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=now, onupdate=now)

    settings: Mapped["StoreSettings"] = relationship("StoreSettings", back_populates="store", uselist=False, cascade="all, delete-orphan")
    delivery_rules: Mapped[list["DeliveryRule"]] = relationship("DeliveryRule", back_populates="store", cascade="all, delete-orphan")
    holidays: Mapped[list["Holiday"]] = relationship("Holiday", back_populates="store", cascade="all, delete-orphan")
    product_targeting: Mapped[list["ProductTargeting"]] = relationship("ProductTargeting", back_populates="store", cascade="all, delete-orphan")
    active_template: Mapped[Optional["MessageTemplate"]] = relationship("MessageTemplate", foreign_keys=[active_template_id])


class StoreSettings(Base):
    __tablename__ = "store_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id", ondelete="CASCADE"), unique=True)
    show_on_product_page: Mapped[bool] = mapped_column(Boolean, default=True)
    cart_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    checkout_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    aggregation: Mapped[str] = mapped_column(String(16), default="latest")  # latest|earliest
    date_format: Mapped[str] = mapped_column(String(16), default="short")  # short|long
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=now, onupdate=now)

    store: Mapped[Store] = relationship("Store", back_populates="settings")


class DeliveryRule(Base):
    __tablename__ = "delivery_rules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(255))
    # JSON-encoded lists as written by the admin app, e.g. '["DE", "AT"]' or '["*"]'
    countries: Mapped[str] = mapped_column(Text, default="[]")
    regions: Mapped[str | None] = mapped_column(Text, nullable=True)
    postal_codes: Mapped[str | None] = mapped_column(Text, nullable=True)
    carrier: Mapped[str | None] = mapped_column(String(255), nullable=True)
    shipping_method: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cutoff_time: Mapped[str | None] = mapped_column(String(5), nullable=True)  # HH:MM
    timezone: Mapped[str | None] = mapped_column(String(64), nullable=True)  # IANA name, UTC if unset
    min_days: Mapped[int] = mapped_column(Integer, default=0)
    max_days: Mapped[int] = mapped_column(Integer, default=0)
    processing_days: Mapped[int] = mapped_column(Integer, default=0)
    exclude_weekends: Mapped[bool] = mapped_column(Boolean, default=True)
    exclude_holidays: Mapped[bool] = mapped_column(Boolean, default=True)
    message_template: Mapped[str | None] = mapped_column(Text, nullable=True)
    display: Mapped[dict | None] = mapped_column(JSON, nullable=True)  # {"tone": "info", "icon": "truck", ...}
    priority: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=now, onupdate=now)

    store: Mapped[Store] = relationship("Store", back_populates="delivery_rules")
    product_targeting: Mapped[list["ProductTargeting"]] = relationship("ProductTargeting", back_populates="rule", cascade="all, delete-orphan")


class Holiday(Base):
    __tablename__ = "holidays"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(255))
    holiday_date: Mapped[date] = mapped_column("date", Date)
    is_recurring: Mapped[bool] = mapped_column(Boolean, default=False)
    country_code: Mapped[str | None] = mapped_column(String(2), nullable=True)  # None = all countries
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now)

    store: Mapped[Store] = relationship("Store", back_populates="holidays")


class MessageTemplate(Base):
    __tablename__ = "message_templates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    store_id: Mapped[int | None] = mapped_column(Integer, nullable=True)  # None for built-in templates
    template_key: Mapped[str | None] = mapped_column(String(64), nullable=True)
    name: Mapped[str] = mapped_column(String(255))
    message: Mapped[str] = mapped_column(Text)
    tone_default: Mapped[str] = mapped_column(String(16), default="info")  # info|success|warning
    is_built_in: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now)


class ProductTargeting(Base):
    __tablename__ = "product_targeting"
    __table_args__ = (
        UniqueConstraint("rule_id", "product_id", "variant_id", name="uq_product_targeting_rule_product_variant"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id", ondelete="CASCADE"), index=True)
    rule_id: Mapped[int] = mapped_column(ForeignKey("delivery_rules.id", ondelete="CASCADE"))
    product_id: Mapped[str] = mapped_column(String(64), index=True)
    variant_id: Mapped[str | None] = mapped_column(String(64), nullable=True)  # None = every variant
    override_min_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    override_max_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    override_processing_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now)

    store: Mapped[Store] = relationship("Store", back_populates="product_targeting")
    rule: Mapped[DeliveryRule] = relationship("DeliveryRule", back_populates="product_targeting")
