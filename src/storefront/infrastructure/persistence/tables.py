"""ORM rows. Mapped to and from domain objects inside the repositories."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.infrastructure.persistence.database import Base

MONEY = Numeric(10, 2)


class SupplierRow(Base):
    __tablename__ = "suppliers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class ShippingMethodRow(Base):
    __tablename__ = "shipping_methods"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    base_price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    estimated_days: Mapped[str | None] = mapped_column(String(100), nullable=True)


class SupplierShippingMethodRow(Base):
    """The composite primary key makes each (supplier, method) pair unique."""

    __tablename__ = "supplier_shipping_methods"

    supplier_id: Mapped[int] = mapped_column(
        ForeignKey("suppliers.id"), primary_key=True
    )
    method_id: Mapped[int] = mapped_column(
        ForeignKey("shipping_methods.id"), primary_key=True, index=True
    )
    custom_price: Mapped[Decimal | None] = mapped_column(MONEY, nullable=True)
    is_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class ProductRow(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    supplier_id: Mapped[int | None] = mapped_column(
        ForeignKey("suppliers.id"), nullable=True, index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class CreditBalanceRow(Base):
    __tablename__ = "credit_balances"
    __table_args__ = (
        CheckConstraint("available_credits >= 0", name="available_not_negative"),
        CheckConstraint("available_credits <= total_credits", name="available_within_total"),
    )

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    total_credits: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0"))
    available_credits: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0"))
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)


class CreditTransactionRow(Base):
    """Append-only; nothing in the code base updates or deletes these rows."""

    __tablename__ = "credit_transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    order_id: Mapped[int | None] = mapped_column(
        ForeignKey("orders.id"), nullable=True, index=True
    )
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class OrderRow(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    subtotal: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    shipping_cost: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    vat_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    vatable_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    vat_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    pre_total: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    credit_applied: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    final_total: Mapped[Decimal] = mapped_column(MONEY, nullable=False)

    items: Mapped[list[OrderItemRow]] = relationship(
        back_populates="order", cascade="all, delete-orphan", order_by="OrderItemRow.id"
    )
    shipments: Mapped[list[OrderShipmentRow]] = relationship(
        back_populates="order", cascade="all, delete-orphan", order_by="OrderShipmentRow.id"
    )


class OrderItemRow(Base):
    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(ForeignKey("orders.id"), nullable=False, index=True)
    product_id: Mapped[int] = mapped_column(Integer, nullable=False)
    product_name: Mapped[str] = mapped_column(String(200), nullable=False)
    supplier_id: Mapped[int] = mapped_column(Integer, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)

    order: Mapped[OrderRow] = relationship(back_populates="items")


class OrderShipmentRow(Base):
    """One row per supplier group; row order is invoice line order."""

    __tablename__ = "order_shipments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(ForeignKey("orders.id"), nullable=False, index=True)
    supplier_id: Mapped[int] = mapped_column(Integer, nullable=False)
    supplier_name: Mapped[str] = mapped_column(String(200), nullable=False)
    method_id: Mapped[int] = mapped_column(Integer, nullable=False)
    method_name: Mapped[str] = mapped_column(String(200), nullable=False)
    cost: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    item_count: Mapped[int] = mapped_column(Integer, nullable=False)

    order: Mapped[OrderRow] = relationship(back_populates="shipments")
