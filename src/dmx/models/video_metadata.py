"""Video metadata model sent alongside each bid request."""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

Number = Union[int, float]


@dataclass(frozen=True)
class VideoContext:
    """Player and page context of the video."""

    site_or_app_cat: tuple = ()
    site_or_app_content_cat: tuple = ()
    video_views_in_session: Optional[int] = None  # None = unknown
    autoplay: Optional[bool] = None
    player_name: str = ''
    player_volume: Optional[Number] = None  # 0-10

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'siteOrAppCat': list(self.site_or_app_cat),
            'siteOrAppContentCat': list(self.site_or_app_content_cat),
            'videoViewsInSession': self.video_views_in_session,
            'autoplay': self.autoplay,
            'playerName': self.player_name,
            'playerVolume': self.player_volume,
        }


@dataclass(frozen=True)
class VideoMetadata:
    """
    Canonical description of the video the ad will run against.

    This represents the output of the Metadata Resolver: publisher-declared
    values merged with the OpenRTB content object of the auction.
    """

    description: str = ''
    duration: Number = 0  # seconds
    iabcat1: tuple = ()  # IAB content taxonomy 1.x
    iabcat2: tuple = ()  # IAB content taxonomy 2.x
    id: str = ''
    lang: str = ''
    private: bool = False
    tags: str = ''
    title: str = ''
    url: str = ''
    topics: str = ''
    livestream: bool = False
    is_created_for_kids: Optional[bool] = None  # None = unknown
    context: VideoContext = field(default_factory=VideoContext)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the `video_metadata` payload shape."""
        return {
            'description': self.description,
            'duration': self.duration,
            'iabcat1': list(self.iabcat1),
            'iabcat2': list(self.iabcat2),
            'id': self.id,
            'lang': self.lang,
            'private': self.private,
            'tags': self.tags,
            'title': self.title,
            'url': self.url,
            'topics': self.topics,
            'livestream': self.livestream,
            'isCreatedForKids': self.is_created_for_kids,
            'context': self.context.to_dict(),
        }
