"""FastAPI hashing router — factory that creates endpoints bound to a HashFort instance."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

import hashfort
from hashfort.core.schemas import (
    BatchHashRequest,
    BatchHashResponse,
    ConfigResponse,
    HashRequest,
    HashResponse,
    HealthResponse,
    OverviewResponse,
    VerifyRequest,
    VerifyResponse,
)

if TYPE_CHECKING:
    from hashfort.hashfort import HashFort

ENDPOINTS = {
    "/": "API overview (GET)",
    "/hash": "Hash a password (POST)",
    "/verify": "Verify a password against a hash (POST)",
    "/batch-hash": "Hash multiple passwords (POST)",
    "/config": "Get default configuration and limits (GET)",
    "/health": "Service health check (GET)",
}


def get_client_ip(request: Request, trust_proxy: bool) -> str | None:
    """Direct peer address, or the first X-Forwarded-For hop when behind a trusted proxy."""
    if trust_proxy:
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else None


def _create_rate_limit_dep(hf: HashFort, endpoint_name: str):
    """Create a FastAPI dependency that charges one unit per request."""

    async def check_rate_limit(request: Request):
        await hf.check_rate_limit(endpoint_name, get_client_ip(request, hf.config.trust_proxy))

    return check_rate_limit


def create_hash_router(hf: HashFort) -> APIRouter:
    """Create a FastAPI router with the hashing endpoints.

    Errors are raised as HashFortError subclasses; install the handlers from
    hashfort.integrations.fastapi.errors on the app to render them.
    """
    router = APIRouter(tags=["hashing"])
    trust_proxy = hf.config.trust_proxy
    max_batch = hf.config.limits.batch_size_max

    @router.get("/", response_model=OverviewResponse)
    async def overview_endpoint():
        """API status, version, and the list of endpoints."""
        return OverviewResponse(
            status="ok",
            message="Argon2id Password Hashing API",
            version=hashfort.__version__,
            endpoints=ENDPOINTS,
        )

    @router.post(
        "/hash",
        response_model=HashResponse,
        dependencies=[Depends(_create_rate_limit_dep(hf, "hash"))],
    )
    async def hash_endpoint(data: HashRequest):
        """Hash a single password with optional cost overrides."""
        return HashResponse(hash=await hf.hash(data.password, data.options))

    @router.post(
        "/verify",
        response_model=VerifyResponse,
        dependencies=[Depends(_create_rate_limit_dep(hf, "verify"))],
    )
    async def verify_endpoint(data: VerifyRequest):
        """Verify a password against a tagged Argon2 hash."""
        return VerifyResponse(isValid=await hf.verify(data.hash, data.password))

    @router.post("/batch-hash", response_model=BatchHashResponse)
    async def batch_hash_endpoint(data: BatchHashRequest, request: Request):
        """Hash up to the configured batch size of passwords with one cost profile."""
        # Oversized and empty batches are rejected by batch_hash without charging.
        if isinstance(data.passwords, list) and 0 < len(data.passwords) <= max_batch:
            await hf.check_rate_limit(
                "batch_hash", get_client_ip(request, trust_proxy), cost=len(data.passwords),
            )
        return await hf.batch_hash(data.passwords, data.options)

    @router.get("/config", response_model=ConfigResponse)
    async def config_endpoint():
        """Default options and allowed parameter ranges."""
        return hf.get_config()

    @router.get("/health", response_model=HealthResponse)
    async def health_endpoint():
        return HealthResponse(status="ok")

    return router
