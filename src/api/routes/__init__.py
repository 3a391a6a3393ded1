"""Routers of the Saleor apps."""

from src.api.routes.avatax import router as avatax_router
from src.api.routes.typesense import router as typesense_router

__all__ = ["avatax_router", "typesense_router"]
