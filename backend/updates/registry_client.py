"""
Registry Client for Docker Image Update Detection

Resolves an image tag to the digest of its currently published manifest
using the Docker Registry v2 token flow:

1. Fetch a pull-scoped bearer token from the auth endpoint
2. HEAD the manifest endpoint with that token
3. Read the Docker-Content-Digest response header

HEAD is enough because only the digest is needed, not the manifest body.
"""

import asyncio
import logging

import aiohttp

from updates.errors import RegistryAuthError, RegistryQueryError
from updates.reference import namespaced

logger = logging.getLogger(__name__)

DEFAULT_AUTH_URL = "https://auth.docker.io/token"
DEFAULT_SERVICE = "registry.docker.io"
DEFAULT_REGISTRY_URL = "https://registry-1.docker.io"

# Multi-arch images resolve to a manifest list digest, so both types are required
MANIFEST_ACCEPT_TYPES = (
    "application/vnd.docker.distribution.manifest.v2+json",
    "application/vnd.docker.distribution.manifest.list.v2+json",
)

DIGEST_HEADER = "Docker-Content-Digest"


class RegistryClient:
    """
    Primary digest resolver for the default public registry.

    The aiohttp session is owned by the caller and shared by every
    concurrent resolution; this class never opens or closes it.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        auth_url: str = DEFAULT_AUTH_URL,
        registry_url: str = DEFAULT_REGISTRY_URL,
        service: str = DEFAULT_SERVICE,
    ):
        self.session = session
        self.auth_url = auth_url
        self.registry_url = registry_url.rstrip("/")
        self.service = service

    def _get_manifest_url(self, repository: str, tag: str) -> str:
        """Construct manifest URL using the Registry v2 API format."""
        return f"{self.registry_url}/v2/{repository}/manifests/{tag}"

    async def fetch_token(self, repository: str) -> str:
        """
        Get a pull-scoped bearer token for a repository.

        Args:
            repository: Namespaced repository (e.g., "library/nginx")

        Returns:
            Raw token string (without the "Bearer " prefix)

        Raises:
            RegistryAuthError: Endpoint unreachable, non-200 status, or body without a token
        """
        params = {
            "service": self.service,
            "scope": f"repository:{repository}:pull",
        }

        try:
            async with self.session.get(self.auth_url, params=params) as response:
                if response.status != 200:
                    body = await response.text(errors="replace")
                    raise RegistryAuthError(
                        f"Token request for '{repository}' failed with status {response.status}: {body[:200]}",
                        status=response.status,
                    )
                data = await response.json()
        # ContentTypeError subclasses ClientError; UnicodeDecodeError and JSONDecodeError are ValueErrors
        except (aiohttp.ContentTypeError, ValueError) as e:
            raise RegistryAuthError(f"Token response for '{repository}' is not valid JSON") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RegistryAuthError(f"Token endpoint {self.auth_url} unreachable: {e}") from e

        token = data.get("token") if isinstance(data, dict) else None
        if not isinstance(token, str):
            raise RegistryAuthError(f"Token endpoint returned 200 but no token for '{repository}'")

        logger.debug(f"Obtained registry token for '{repository}'")
        return token

    async def get_latest_digest(self, repository: str, tag: str) -> str:
        """
        Resolve repository:tag to the digest of its current manifest.

        Args:
            repository: Repository name; unqualified names get the default namespace
            tag: Tag name (e.g., "1.25")

        Returns:
            Digest string (e.g., "sha256:abc123...") or "" when the registry
            does not send a Docker-Content-Digest header

        Raises:
            RegistryAuthError: Token could not be obtained
            RegistryQueryError: Manifest request failed at transport level
        """
        repository = namespaced(repository)
        token = await self.fetch_token(repository)

        manifest_url = self._get_manifest_url(repository, tag)
        headers = {
            "Accept": ", ".join(MANIFEST_ACCEPT_TYPES),
            "Authorization": f"Bearer {token}",
        }

        try:
            async with self.session.head(manifest_url, headers=headers) as response:
                digest = response.headers.get(DIGEST_HEADER, "")
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RegistryQueryError(f"Manifest request failed for {manifest_url}: {e}") from e

        if not digest:
            logger.warning(f"No {DIGEST_HEADER} header for {repository}:{tag} (status {status})")
            return ""

        logger.debug(f"Resolved {repository}:{tag} → {digest[:19]}...")
        return digest
