"""
Fallback digest resolution through the Docker daemon.

Used only when the registry client gets no digest back. The daemon's
distribution endpoint already handles alternate registries and the
credentials stored with `docker login`, at the cost of a slower round trip.
"""

import logging

from docker.errors import DockerException
from requests.exceptions import RequestException

from updates.errors import RegistryQueryError
from utils.async_docker import async_docker_call

logger = logging.getLogger(__name__)


class FallbackResolver:
    """Resolves repository:tag digests via DockerClient.images.get_registry_data()."""

    def __init__(self, client):
        self.client = client

    async def get_digest(self, repo_tag: str) -> str:
        """
        Resolve a full repository:tag reference to its registry digest.

        Args:
            repo_tag: Reference as found in RepoTags (e.g., "ghcr.io/org/app:latest")

        Returns:
            Digest string (e.g., "sha256:abc123...")

        Raises:
            RegistryQueryError: If the daemon could not look the reference up or
                did not answer (docker-py raises requests errors for transport failures)
        """
        logger.info(f"Using daemon fallback to resolve {repo_tag}")
        try:
            registry_data = await async_docker_call(self.client.images.get_registry_data, repo_tag)
        except (DockerException, RequestException) as e:
            raise RegistryQueryError(f"Fallback lookup failed for {repo_tag}: {e}") from e

        return registry_data.id or ""
