# backend/schemas/__init__.py

# users / auth
from .users import (
    RegisterPayload, RegisterResponse, LoginPayload, LoginResponse,
    UserOut, RoleSpecificData, Role, UserStatus,
)

# sessions
from .sessions import (
    SessionOut, SessionList, VerifySessionPayload, VerifySessionResponse,
    ExtendSessionResponse, ActionResult, CleanupResult,
)

# catalog
from .products import ProductCreate, ProductUpdate, ProductOut, TopProductOut, CategoryOut

# orders
from .orders import (
    OrderCreate, OrderResponse, OrderStatus, PaymentMethod, PaymentStatus,
    OrderItemIn, OrderItemResponse, OrderStatusUpdate, AssignCourier,
    StatusChangeOut, OrderList,
)

# role spaces
from .addresses import AddressIn, AddressOut
from .clients import ClientProfileOut, FavoriteIn
from .suppliers import SupplierStats, SupplierProfileOut, SupplierProfileUpdate, LowStockAlert
from .couriers import Availability, CourierProfileOut, CourierProfileUpdate
from .admin import AdminUserCreate, UserStatusUpdate, UserList, PlatformStats, AuditLogOut

# reviews
from .reviews import ReviewIn, ReviewOut

# notifications / payments
from .notifications import NotificationOut, NotificationPage
from .payments import PaymentOut

__all__ = [
    # users / auth
    "RegisterPayload", "RegisterResponse", "LoginPayload", "LoginResponse",
    "UserOut", "RoleSpecificData", "Role", "UserStatus",
    # sessions
    "SessionOut", "SessionList", "VerifySessionPayload", "VerifySessionResponse",
    "ExtendSessionResponse", "ActionResult", "CleanupResult",
    # catalog
    "ProductCreate", "ProductUpdate", "ProductOut", "TopProductOut", "CategoryOut",
    # orders
    "OrderCreate", "OrderResponse", "OrderStatus", "PaymentMethod", "PaymentStatus",
    "OrderItemIn", "OrderItemResponse", "OrderStatusUpdate", "AssignCourier",
    "StatusChangeOut", "OrderList",
    # role spaces
    "AddressIn", "AddressOut", "ClientProfileOut", "FavoriteIn",
    "SupplierStats", "SupplierProfileOut", "SupplierProfileUpdate", "LowStockAlert",
    "Availability", "CourierProfileOut", "CourierProfileUpdate",
    "AdminUserCreate", "UserStatusUpdate", "UserList", "PlatformStats", "AuditLogOut",
    # notifications / payments
    "NotificationOut", "NotificationPage", "PaymentOut",
    # reviews
    "ReviewIn", "ReviewOut",
]
