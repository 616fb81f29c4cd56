"""
Health check and status endpoints.
"""
import time
from fastapi import APIRouter, Depends

from generation import GearGenerator
from .gear import get_generator

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "timestamp": time.time()}


@router.get("/healthz")
async def healthz_check():
    """Alternative health check endpoint (Kubernetes style)"""
    return {"status": "ok", "timestamp": time.time()}


@router.get("/auth/status")
async def auth_status(generator: GearGenerator = Depends(get_generator)):
    """Credential mode and token cache state, without secrets"""
    return generator.status()
