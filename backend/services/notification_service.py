# backend/services/notification_service.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from config import settings
from models.notification_model import Notification

logger = logging.getLogger(__name__)

# event -> (title, message template, type, priority)
TEMPLATES = {
    "order_confirmed": (
        "Order confirmed",
        "Your order #{order_id} has been confirmed and is being prepared.",
        "order", "normal",
    ),
    "courier_assigned": (
        "Courier assigned",
        "{courier_name} has been assigned to your order and is on the way.",
        "order", "high",
    ),
    "order_on_the_way": (
        "Order on the way",
        "Your order #{order_id} is out for delivery!",
        "order", "high",
    ),
    "order_delivered": (
        "Order delivered",
        "Your order #{order_id} has been delivered. Enjoy!",
        "order", "normal",
    ),
    "new_order": (
        "New order",
        "New order #{order_id} for {amount} {currency}.",
        "order", "urgent",
    ),
    "order_cancelled": (
        "Order cancelled",
        "Order #{order_id} was cancelled by the {cancelled_by}.",
        "cancellation", "high",
    ),
    "new_delivery": (
        "New delivery",
        "Delivery to {address} - {amount} {currency}",
        "order", "urgent",
    ),
    "order_ready": (
        "Order ready",
        "Your order at {supplier_name} is ready for pickup.",
        "order", "high",
    ),
    "pickup_ready": (
        "Pickup ready",
        "Order #{order_id} at {supplier_name} is ready to be picked up.",
        "order", "high",
    ),
    "payment_confirmed": (
        "Payment confirmed",
        "Payment of {amount} {currency} confirmed.",
        "payment", "normal",
    ),
    "payment_failed": (
        "Payment failed",
        "The pending payment for order #{order_id} was cancelled and will not be collected.",
        "payment", "high",
    ),
}


def render(event: str, **params) -> dict:
    if event not in TEMPLATES:
        raise ValueError(f"unknown notification event: {event}")
    title, message, type_, priority = TEMPLATES[event]
    params.setdefault("currency", settings.CURRENCY)
    return {
        "title": title,
        "message": message.format(**params),
        "type": type_,
        "priority": priority,
    }


def notify(db: Session, user_id: int, event: str, link: Optional[str] = None, **params) -> Notification:
    """Adds one notification row; it is committed together with the caller's transaction."""
    n = Notification(user_id=user_id, event=event, link=link, **render(event, **params))
    db.add(n)
    logger.debug("Queued %s notification for user %s", event, user_id)
    return n
