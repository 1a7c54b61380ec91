"""
Container Models for DockWatch
Pydantic models for containers annotated with image update status
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ImageInfo(BaseModel):
    """Metadata of the image a container runs"""
    id: str
    repo_tags: list[str] = Field(default_factory=list)  # repository:tag only
    digests: list[str] = Field(default_factory=list)  # e.g., ["nginx@sha256:abc..."]
    created: Optional[str] = None  # As reported by Docker, not parsed


class ContainerInfo(BaseModel):
    """Running container with its update verdict"""
    id: str
    name: str
    image: str
    latest_sha: str = ""
    updatable: bool = False
    build_at: datetime
    status: str = ""  # Runtime state, or 'unknown' when the update check failed
    error: Optional[str] = None
    image_info: ImageInfo
