#!/usr/bin/env python3
"""
DockWatch Backend - Container Image Update Detection
Reports which running containers have a newer image published upstream

Endpoints:
    GET /containers  - running containers annotated with update status
    GET /health      - liveness probe
"""

import logging
from contextlib import asynccontextmanager
from typing import List

import aiohttp
import docker
import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request

from config.settings import AppConfig, HealthCheckFilter, setup_logging
from docker_monitor.container_inventory import ContainerInventory
from models.container_models import ContainerInfo
from updates import (
    DigestComparison,
    FailurePolicy,
    FallbackResolver,
    RegistryClient,
    UpdateChecker,
    UpdateCheckError,
)

# Configure logging
setup_logging()
logger = logging.getLogger(__name__)


async def dump_containers(checker: UpdateChecker, inventory: ContainerInventory) -> List[ContainerInfo]:
    """Run one full check and log a line per container (startup diagnostic)."""
    containers = await checker.list_containers(inventory)
    for c in containers:
        logger.info(
            f"ID: {c.id}, Name: {c.name}, Image: {c.image}, BuildAt: {c.build_at.isoformat()}, "
            f"LatestSHA: {c.latest_sha}, Updatable: {c.updatable}, Status: {c.status}, "
            f"RepoTags: {c.image_info.repo_tags}"
        )
    return containers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    # Validate configuration early to fail fast on misconfiguration
    AppConfig.validate()

    logger.info("Starting DockWatch backend...")

    # Reapply health check filter to uvicorn access logger (must be done after uvicorn starts)
    uvicorn_access = logging.getLogger("uvicorn.access")
    uvicorn_access.addFilter(HealthCheckFilter())

    docker_client = docker.from_env()
    # One session shared by every concurrent registry lookup
    session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=AppConfig.REGISTRY_TIMEOUT))

    registry = RegistryClient(
        session,
        auth_url=AppConfig.REGISTRY_AUTH_URL,
        registry_url=AppConfig.REGISTRY_URL,
        service=AppConfig.REGISTRY_SERVICE,
    )
    app.state.inventory = ContainerInventory(docker_client)
    app.state.update_checker = UpdateChecker(
        registry,
        FallbackResolver(docker_client),
        failure_policy=FailurePolicy(AppConfig.FAILURE_POLICY),
        digest_comparison=DigestComparison(AppConfig.DIGEST_COMPARISON),
        max_concurrency=AppConfig.MAX_CONCURRENT_CHECKS,
    )
    logger.info(
        f"Update checker ready (policy={AppConfig.FAILURE_POLICY}, "
        f"comparison={AppConfig.DIGEST_COMPARISON}, max_concurrency={AppConfig.MAX_CONCURRENT_CHECKS or 'unbounded'})"
    )

    if AppConfig.STARTUP_DUMP:
        try:
            await dump_containers(app.state.update_checker, app.state.inventory)
        except UpdateCheckError as e:
            logger.error(f"Startup container check failed: {e}")

    yield

    logger.info("Shutting down DockWatch backend...")
    await session.close()
    docker_client.close()


app = FastAPI(
    title="DockWatch",
    description="Container image update detection",
    lifespan=lifespan,
)


def get_update_checker(request: Request) -> UpdateChecker:
    return request.app.state.update_checker


def get_inventory(request: Request) -> ContainerInventory:
    return request.app.state.inventory


@app.get("/health")
async def health_check():
    """Liveness probe"""
    return {"status": "ok"}


@app.get("/containers", response_model=List[ContainerInfo])
async def get_containers(
    checker: UpdateChecker = Depends(get_update_checker),
    inventory: ContainerInventory = Depends(get_inventory),
):
    """Get all running containers annotated with update status"""
    try:
        return await checker.list_containers(inventory)
    except UpdateCheckError as e:
        logger.error(f"Container update check aborted: {e}")
        raise HTTPException(status_code=500, detail=str(e))


if __name__ == "__main__":
    uvicorn.run(app, host=AppConfig.HOST, port=AppConfig.PORT)
