from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt

INITIAL_STATUS = "Order Placed"
ORDER_ID_PREFIX = "ED"
MAX_FIELD_LENGTH = 1000

# Column order of the orders CSV. Also the key order of a looked-up record.
ORDER_FIELDS = [
    "orderId",
    "name",
    "email",
    "phone",
    "whatsapp",
    "paymentMethod",
    "certificateType",
    "amount",
    "status",
    "createdAt",
]


class OrderCreate(BaseModel):
    """
    Body of POST /orders.
    Every field is optional here; required-ness is checked by the OrderService
    so that a missing field becomes a 400 "Missing required fields".
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    payment_method: Optional[str] = Field(None, alias="paymentMethod")
    certificate_type: Optional[str] = Field(None, alias="certificateType")
    # bool is listed first so True/False are never coerced to 1/0
    amount: Union[StrictBool, StrictInt, StrictFloat, str, None] = None


class Order(BaseModel):
    """One certificate order as persisted in the CSV (every value is text)."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    order_id: str = Field(alias="orderId")
    name: str
    email: str
    phone: str
    whatsapp: str = ""
    payment_method: str = Field(alias="paymentMethod")
    certificate_type: str = Field(alias="certificateType")
    amount: str
    status: str = INITIAL_STATUS
    created_at: str = Field(alias="createdAt")

    def to_row(self) -> list:
        record = self.model_dump(by_alias=True)
        return [record[field] for field in ORDER_FIELDS]

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)


class OrderPlaced(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "Order placed successfully"
    order_id: str = Field(alias="orderId")
    status: str
