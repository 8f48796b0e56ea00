"""
Metadata Resolver for video bid requests.

Merges publisher-declared video metadata with the OpenRTB content object
of the auction and resolves IAB content categories from the taxonomies
available in either source.
"""

from typing import Any

from ..models.video_metadata import VideoContext, VideoMetadata
from ..utils.constants import (
    CATTAX_V2_VALUES,
    SEGTAX_IAB_CONTENT_V1,
    SEGTAX_IAB_CONTENT_V2,
)
from .sources import ContentSignals, VideoParams


class MetadataResolver:
    """
    Resolves the canonical video metadata of a bid request.

    Publisher params take precedence over contextual signals, with the
    exception of the duration, for which the content length wins.
    Never raises: missing or malformed values fall back to defaults.
    """

    def resolve(
        self,
        video_params: VideoParams,
        content: ContentSignals,
    ) -> VideoMetadata:
        """
        Resolve video metadata from both sources.

        Args:
            video_params: Normalised `params.video` of the bid request
            content: Normalised site or app content of the auction

        Returns:
            VideoMetadata with every field resolved or defaulted
        """
        iabcat1, iabcat2 = self._resolve_categories(video_params, content)

        return VideoMetadata(
            description=video_params.description or '',
            duration=self._resolve_duration(video_params, content),
            iabcat1=iabcat1,
            iabcat2=iabcat2,
            id=video_params.id or content.id or '',
            lang=video_params.lang or content.language or '',
            private=video_params.private,
            tags=video_params.tags or content.keywords or '',
            title=video_params.title or content.title or '',
            url=video_params.url or content.url or '',
            topics=video_params.topics or '',
            livestream=video_params.livestream or content.livestream,
            is_created_for_kids=video_params.is_created_for_kids,
            context=VideoContext(
                site_or_app_cat=content.site_or_app_cat,
                site_or_app_content_cat=content.cat or (),
                video_views_in_session=video_params.video_views_in_session,
                autoplay=video_params.autoplay,
                player_name=video_params.player_name or '',
                player_volume=video_params.player_volume,
            ),
        )

    def _resolve_duration(self, video_params: VideoParams, content: ContentSignals):
        """Content length overrides the declared duration."""
        if content.length is not None:
            return content.length
        if video_params.duration is not None:
            return video_params.duration
        return 0

    def _resolve_categories(
        self,
        video_params: VideoParams,
        content: ContentSignals,
    ) -> tuple[tuple, tuple]:
        """
        Resolve the (iabcat1, iabcat2) pair.

        Priority per slot:
        1. Non-empty `params.video.iabcat1` / `iabcat2`
        2. `content.cat`, placed by its taxonomy (`cattax`), with the other
           slot filled from segment data
        3. Segment data alone: segtax 4 -> iabcat1, segtax 5 -> iabcat2
        """
        derived1, derived2 = self._derive_categories(content)
        return (
            video_params.iabcat1 or derived1,
            video_params.iabcat2 or derived2,
        )

    def _derive_categories(self, content: ContentSignals) -> tuple[tuple, tuple]:
        if content.cat:
            if content.cattax is None or content.cattax == 1:
                return content.cat, content.segment_ids(SEGTAX_IAB_CONTENT_V2)
            if content.cattax in CATTAX_V2_VALUES:
                return content.segment_ids(SEGTAX_IAB_CONTENT_V1), content.cat

        return (
            content.segment_ids(SEGTAX_IAB_CONTENT_V1),
            content.segment_ids(SEGTAX_IAB_CONTENT_V2),
        )


def resolve_video_metadata(video_params: Any, ortb2: Any) -> VideoMetadata:
    """
    Convenience function to resolve metadata from raw host objects.

    Args:
        video_params: The `params.video` object of a bid request
        ortb2: The first party OpenRTB fragment of the auction

    Returns:
        Resolved VideoMetadata
    """
    return MetadataResolver().resolve(
        VideoParams.from_dict(video_params),
        ContentSignals.from_ortb2(ortb2),
    )
