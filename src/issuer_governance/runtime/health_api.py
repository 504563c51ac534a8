from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import FastAPI

from issuer_governance.chain import queries
from issuer_governance.chain.client import ChainClient
from issuer_governance.chain.cosmwasm import build_chain_client
from issuer_governance.config import AppSettings, get_settings
from issuer_governance.errors import QueryError
from issuer_governance.observability.logging import get_logger
from issuer_governance.proposals.routing import RoutingTable
from issuer_governance.types import ContractRole

HealthProbe = Callable[[], Awaitable[bool]]


def chain_probe(client: ChainClient, issuer_address: str) -> HealthProbe:
    logger = get_logger("health")

    async def probe() -> bool:
        try:
            await client.query(issuer_address, queries.denom())
        except QueryError as exc:
            logger.warning("readiness_probe_failed", error=exc.message)
            return False
        return True

    return probe


def build_health_app(
    settings: AppSettings,
    routing: RoutingTable,
    probe: HealthProbe | None = None,
) -> FastAPI:
    app = FastAPI(title=f"{settings.app_name}-health", version="0.1.0")

    @app.get("/livez")
    async def livez() -> dict[str, str]:
        return {"status": "ok", "app": settings.app_name}

    @app.get("/readyz")
    async def readyz() -> dict[str, Any]:
        missing = sorted(role.value for role in ContractRole if role not in routing)
        if probe is None:
            rpc_status = "unchecked"
        else:
            rpc_status = "ok" if await probe() else "failed"
        return {
            "chain_id": settings.chain_id,
            "rpc_status": rpc_status,
            "contracts": routing.as_dict(),
            "missing_roles": missing,
            "ready": not missing and rpc_status != "failed",
        }

    return app


def default_health_app() -> FastAPI:
    settings = get_settings()
    routing = settings.routing_table()
    probe = None
    if ContractRole.ISSUER in routing:
        probe = chain_probe(build_chain_client(settings), routing[ContractRole.ISSUER])
    return build_health_app(settings, routing, probe)
