"""Video metadata resolution module."""

from .metadata_resolver import MetadataResolver, resolve_video_metadata
from .sources import ContentDataEntry, ContentSignals, VideoParams

__all__ = [
    "MetadataResolver",
    "resolve_video_metadata",
    "ContentDataEntry",
    "ContentSignals",
    "VideoParams",
]
