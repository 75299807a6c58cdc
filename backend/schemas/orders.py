# backend/schemas/orders.py
from typing import List, Optional, Literal
from datetime import datetime
from pydantic import BaseModel, Field

OrderStatus = Literal["pending", "preparing", "ready_for_pickup", "out_for_delivery", "delivered", "cancelled"]
PaymentMethod = Literal["card", "cash", "wallet"]
PaymentStatus = Literal["pending", "confirmed", "failed"]

class OrderItemIn(BaseModel):
    product_id: int = Field(gt=0)
    quantity: int

class OrderCreate(BaseModel):
    supplier_id: int = Field(gt=0)
    delivery_address_id: int = Field(gt=0)
    items: List[OrderItemIn]
    payment_method: PaymentMethod = "cash"
    special_instructions: Optional[str] = None

class OrderStatusUpdate(BaseModel):
    status: OrderStatus

class AssignCourier(BaseModel):
    courier_id: int = Field(gt=0)

class OrderItemResponse(BaseModel):
    id: int
    product_id: Optional[int] = None
    product_name: str
    quantity: int
    unit_price: float
    total_price: float

class OrderResponse(BaseModel):
    id: int
    tracking_number: str
    client_id: int
    client_name: Optional[str] = None
    supplier_id: int
    supplier_name: Optional[str] = None
    courier_id: Optional[int] = None
    courier_name: Optional[str] = None
    delivery_address_id: Optional[int] = None
    delivery_address: Optional[str] = None
    status: OrderStatus
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    subtotal: float
    service_fee: float
    delivery_fee: float
    total_amount: float
    amount_paid: float
    special_instructions: Optional[str] = None
    created_at: datetime
    paid_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    items: List[OrderItemResponse] = []

class StatusChangeOut(BaseModel):
    old_status: Optional[OrderStatus] = None
    new_status: OrderStatus
    changed_by: Optional[int] = None
    changed_at: datetime
    class Config: from_attributes = True

class OrderList(BaseModel):
    data: List[OrderResponse]
    total: int
