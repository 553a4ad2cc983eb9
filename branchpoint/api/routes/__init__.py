"""API route modules"""
from branchpoint.api.routes.decisions import router as decisions_router
from branchpoint.api.routes.generation import router as generation_router
from branchpoint.api.routes.simulations import router as simulations_router

__all__ = ["decisions_router", "generation_router", "simulations_router"]
