# backend/gateway/gateway_router.py
from fastapi import APIRouter

# auth / sessions
from routers.auth_router import router as auth_router
from routers.sessions_router import router as sessions_router

# shared business routers
from routers.orders_router import router as orders_router
from routers.products_router import router as products_router
from routers.categories_router import router as categories_router
from routers.notifications_router import router as notifications_router
from routers.payments_router import router as payments_router
from routers.reviews_router import router as reviews_router

# role spaces
from routers.client_router import router as client_router
from routers.supplier_router import router as supplier_router
from routers.courier_router import router as courier_router
from routers.admin_router import router as admin_router

gateway_router = APIRouter()

gateway_router.include_router(auth_router)            # /api/auth/...
gateway_router.include_router(sessions_router)        # /api/sessions/...
gateway_router.include_router(orders_router)          # /api/commandes/...
gateway_router.include_router(products_router)        # /api/produits/...
gateway_router.include_router(categories_router)      # /api/categories
gateway_router.include_router(notifications_router)   # /api/notifications/...
gateway_router.include_router(payments_router)        # /api/paiements
gateway_router.include_router(reviews_router)         # /api/avis/...

gateway_router.include_router(client_router)          # /api/client/...
gateway_router.include_router(supplier_router)        # /api/fournisseur/...
gateway_router.include_router(courier_router)         # /api/livreur/...
gateway_router.include_router(admin_router)           # /api/admin/...
