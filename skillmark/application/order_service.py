import logging
import random
from datetime import datetime, timezone
from typing import Optional

import pytz

from skillmark.domain.errors import NotFoundError, ValidationError
from skillmark.domain.models import INITIAL_STATUS, MAX_FIELD_LENGTH, ORDER_ID_PREFIX, Order, OrderCreate
from skillmark.interfaces.IOrderRepository import IOrderRepository

logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS = ("name", "email", "phone", "payment_method", "certificate_type")
TEXT_FIELDS = REQUIRED_TEXT_FIELDS + ("whatsapp", "amount")


def format_amount(amount) -> str:
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. 2025-03-01T10:20:30.123Z"""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class OrderService:
    def __init__(self, order_repo: IOrderRepository, order_timezone: str = "UTC"):
        self.order_repo = order_repo
        self.timezone = pytz.timezone(order_timezone)

    def generate_order_id(self) -> str:
        """
        ED + four-digit year + six random digits, e.g. ED2025001234.
        Uniqueness is not checked against the store; two orders can share an ID.
        """
        year = datetime.now(self.timezone).year
        rand = random.randint(0, 999999)
        return f"{ORDER_ID_PREFIX}{year}{rand:06d}"

    def validate(self, payload: OrderCreate) -> None:
        if any(not getattr(payload, field) for field in REQUIRED_TEXT_FIELDS):
            raise ValidationError("Missing required fields")
        # Explicit None check: an amount of 0 is a valid order
        if payload.amount is None:
            raise ValidationError("Missing required fields")
        if isinstance(payload.amount, bool):
            raise ValidationError("Invalid order fields")
        if any(len(str(getattr(payload, field) or "")) > MAX_FIELD_LENGTH for field in TEXT_FIELDS):
            raise ValidationError("Invalid order fields")

    async def create_order(self, payload: OrderCreate) -> Order:
        self.validate(payload)

        order = Order(
            order_id=self.generate_order_id(),
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            whatsapp=payload.whatsapp or "",
            payment_method=payload.payment_method,
            certificate_type=payload.certificate_type,
            amount=format_amount(payload.amount),
            status=INITIAL_STATUS,
            created_at=utc_timestamp(),
        )

        await self.order_repo.append(order)
        logger.info(f"Order placed: {order.order_id} ({order.certificate_type})")
        return order

    async def get_order(self, order_id: str) -> Order:
        order = await self.order_repo.find_by_id(order_id)
        if order is None:
            logger.info(f"Order lookup miss: {order_id}")
            raise NotFoundError("Order not found")
        return order
