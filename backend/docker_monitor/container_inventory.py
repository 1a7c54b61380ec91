"""
Container inventory for the local Docker host.

Reads the running containers and the metadata of the images they were
started from. A fresh inventory is taken on every request.
"""

import logging
from datetime import datetime, timezone
from typing import List

from docker.errors import DockerException
from requests.exceptions import RequestException

from models.container_models import ContainerInfo, ImageInfo
from updates.errors import RuntimeCollaboratorError
from updates.reference import normalize_repo_tags
from utils.async_docker import async_containers_list, async_image_get

logger = logging.getLogger(__name__)


class ContainerInventory:
    """Lists running containers through a Docker SDK client."""

    def __init__(self, client):
        self.client = client

    async def get_image_info(self, image_id: str) -> ImageInfo:
        """
        Inspect an image and keep what update detection needs.

        Raises:
            RuntimeCollaboratorError: If the daemon cannot inspect the image
        """
        try:
            image = await async_image_get(self.client, image_id)
        except (DockerException, RequestException) as e:
            raise RuntimeCollaboratorError(f"Failed to inspect image {image_id}: {e}") from e

        attrs = image.attrs
        return ImageInfo(
            id=attrs.get('Id', image_id),
            repo_tags=normalize_repo_tags(attrs.get('RepoTags') or []),
            digests=list(attrs.get('RepoDigests') or []),
            created=attrs.get('Created'),
        )

    async def list_containers(self) -> List[ContainerInfo]:
        """
        Get all running containers with their image metadata.

        Returns:
            ContainerInfo snapshots with no update verdict yet

        Raises:
            RuntimeCollaboratorError: If listing or inspecting fails
        """
        try:
            # sparse=True keeps the list endpoint fields (Names, ImageID, epoch Created)
            docker_containers = await async_containers_list(self.client, sparse=True)
        except (DockerException, RequestException) as e:
            raise RuntimeCollaboratorError(f"Failed to list containers: {e}") from e

        containers = []
        for dc in docker_containers:
            attrs = dc.attrs
            names = attrs.get('Names') or []
            image_info = await self.get_image_info(attrs['ImageID'])

            containers.append(ContainerInfo(
                id=attrs['Id'],
                name=names[0] if names else '',
                image=attrs.get('Image', ''),
                build_at=datetime.fromtimestamp(attrs.get('Created', 0), tz=timezone.utc),
                status=attrs.get('State', ''),
                image_info=image_info,
            ))

        logger.debug(f"Inventory found {len(containers)} running containers")
        return containers
