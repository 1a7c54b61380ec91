"""
Update Checker Service

Checks every running container for an available image update.

Workflow:
1. Take a fresh container inventory from the Docker daemon
2. For each container, concurrently:
   - Parse the first RepoTag into a registry reference
   - Resolve the latest digest via the registry (daemon fallback if empty)
   - Compare it against the image's RepoDigests
3. Join all checks and return the annotated containers in inventory order
"""

import asyncio
import logging
from typing import List, Optional

from models.container_models import ContainerInfo
from updates.errors import MalformedReferenceError, UpdateCheckError
from updates.reference import parse_repo_tag
from updates.types import DigestComparison, FailurePolicy
from updates.update_evaluator import is_updatable

logger = logging.getLogger(__name__)


class UpdateChecker:
    """
    Fans out one update check per container and joins the results.

    Each check writes only its own result slot, so the returned list is
    index-aligned with the input regardless of registry latency.
    """

    def __init__(
        self,
        registry,
        fallback=None,
        failure_policy: FailurePolicy = FailurePolicy.ISOLATE,
        digest_comparison: DigestComparison = DigestComparison.ANY_MISMATCH,
        max_concurrency: int = 0,
    ):
        self.registry = registry
        self.fallback = fallback
        self.failure_policy = failure_policy
        self.digest_comparison = digest_comparison
        self.max_concurrency = max_concurrency

    async def check_container(self, container: ContainerInfo) -> ContainerInfo:
        """
        Check if an update is available for a single container.

        Args:
            container: Container snapshot from the inventory

        Returns:
            New ContainerInfo with latest_sha and updatable filled in

        Raises:
            UpdateCheckError: Malformed reference or registry failure
        """
        digests = container.image_info.digests
        if not digests:
            # Locally built or never pulled, nothing to compare against
            logger.debug(f"No RepoDigests for {container.name}, skipping registry lookup")
            return container.model_copy(update={"latest_sha": "", "updatable": False})

        if not container.image_info.repo_tags:
            raise MalformedReferenceError(f"Image {container.image_info.id} has digests but no repository tag")

        repo_tag = container.image_info.repo_tags[0]
        reference = parse_repo_tag(repo_tag)

        latest_digest = await self.registry.get_latest_digest(reference.repository, reference.tag)
        if not latest_digest and self.fallback is not None:
            logger.info(f"Registry returned no digest for {reference}, falling back for {container.name}")
            latest_digest = await self.fallback.get_digest(repo_tag)

        updatable = is_updatable(digests, latest_digest, self.digest_comparison)

        logger.debug(f"{container.name}: latest={latest_digest[:19]} updatable={updatable}")

        return container.model_copy(update={"latest_sha": latest_digest, "updatable": updatable})

    async def _check_slot(self, container: ContainerInfo, semaphore: Optional[asyncio.Semaphore]) -> ContainerInfo:
        """Run one check under the concurrency bound and apply the failure policy."""
        try:
            if semaphore is None:
                return await self.check_container(container)
            async with semaphore:
                return await self.check_container(container)
        except UpdateCheckError as e:
            if self.failure_policy is FailurePolicy.ABORT:
                raise
            logger.error(f"Update check failed for {container.name}: {e}")
            return container.model_copy(update={
                "latest_sha": "",
                "updatable": False,
                "status": "unknown",
                "error": str(e),
            })

    async def check_containers(self, containers: List[ContainerInfo]) -> List[ContainerInfo]:
        """
        Check all containers concurrently.

        Args:
            containers: Container snapshots in inventory order

        Returns:
            Annotated containers, result[i] belonging to containers[i]

        Raises:
            UpdateCheckError: First failure when the policy is ABORT
        """
        logger.info(f"Starting update check for {len(containers)} containers")

        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency > 0 else None
        tasks = [
            asyncio.create_task(self._check_slot(container, semaphore))
            for container in containers
        ]

        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            # Abort the batch: stop whatever is still in flight before re-raising
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        stats = {
            "total": len(results),
            "updates_found": sum(1 for c in results if c.updatable),
            "errors": sum(1 for c in results if c.error),
        }
        logger.info(f"Update check complete: {stats}")
        return list(results)

    async def list_containers(self, inventory) -> List[ContainerInfo]:
        """Take a fresh inventory and annotate it with update status."""
        containers = await inventory.list_containers()
        return await self.check_containers(containers)
