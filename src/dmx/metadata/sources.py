"""
Metadata sources for video metadata resolution.

Two sources describe the same video:
- `params.video` of the bid request, set explicitly by the publisher
- `ortb2.site.content` / `ortb2.app.content`, the contextual signal of the
  auction

Both are normalised here into records that only hold values of the expected
type, so that the resolver can apply precedence rules without re-checking.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

from ..utils.constants import PLAYER_VOLUME_MAX, PLAYER_VOLUME_MIN

Number = Union[int, float]


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def non_empty_str(value: Any) -> Optional[str]:
    """Return the value if it is a non-empty string."""
    return value if isinstance(value, str) and value else None


def non_empty_list(value: Any) -> Optional[tuple]:
    """Return the value as a tuple if it is a non-empty list."""
    return tuple(value) if isinstance(value, list) and value else None


def strict_bool(value: Any) -> Optional[bool]:
    """Return the value if it is an actual boolean ('true' is rejected)."""
    return value if isinstance(value, bool) else None


def non_negative_number(value: Any) -> Optional[Number]:
    return value if _is_number(value) and value >= 0 else None


def non_negative_int(value: Any) -> Optional[int]:
    return value if isinstance(value, int) and not isinstance(value, bool) and value >= 0 else None


def player_volume(value: Any) -> Optional[Number]:
    """Return the volume if it is within the player's 0-10 scale."""
    if _is_number(value) and PLAYER_VOLUME_MIN <= value <= PLAYER_VOLUME_MAX:
        return value
    return None


@dataclass(frozen=True)
class ContentDataEntry:
    """
    A data provider entry of `content.data`.

    Only entries declaring a segment taxonomy and a segment list are kept.
    """

    name: str
    segtax: int
    segment_ids: tuple

    @classmethod
    def parse(cls, data: Any) -> Optional["ContentDataEntry"]:
        """Parse an entry, returning None when it cannot feed categories."""
        if not isinstance(data, dict):
            return None

        segtax = _as_dict(data.get("ext")).get("segtax")
        segments = data.get("segment")
        if not isinstance(segtax, int) or isinstance(segtax, bool):
            return None
        if not isinstance(segments, list):
            return None

        # Ids are kept as provided, without type coercion
        segment_ids = tuple(
            segment["id"]
            for segment in segments
            if isinstance(segment, dict) and segment.get("id") is not None
        )

        name = data.get("name")
        return cls(
            name=name if isinstance(name, str) else "",
            segtax=segtax,
            segment_ids=segment_ids,
        )


@dataclass(frozen=True)
class VideoParams:
    """Publisher-declared video metadata from `params.video`."""

    description: Optional[str] = None
    duration: Optional[Number] = None
    iabcat1: Optional[tuple] = None
    iabcat2: Optional[tuple] = None
    id: Optional[str] = None
    lang: Optional[str] = None
    private: bool = False
    tags: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    topics: Optional[str] = None
    livestream: bool = False
    is_created_for_kids: Optional[bool] = None
    video_views_in_session: Optional[int] = None
    autoplay: Optional[bool] = None
    player_name: Optional[str] = None
    player_volume: Optional[Number] = None

    @classmethod
    def from_dict(cls, data: Any) -> "VideoParams":
        """Create from the `params.video` object of a bid request."""
        data = _as_dict(data)
        return cls(
            description=non_empty_str(data.get("description")),
            duration=non_negative_number(data.get("duration")),
            iabcat1=non_empty_list(data.get("iabcat1")),
            iabcat2=non_empty_list(data.get("iabcat2")),
            id=non_empty_str(data.get("id")),
            lang=non_empty_str(data.get("lang")),
            private=strict_bool(data.get("private")) or False,
            tags=non_empty_str(data.get("tags")),
            title=non_empty_str(data.get("title")),
            url=non_empty_str(data.get("url")),
            topics=non_empty_str(data.get("topics")),
            livestream=bool(data.get("livestream")),
            is_created_for_kids=strict_bool(data.get("isCreatedForKids")),
            video_views_in_session=non_negative_int(data.get("videoViewsInSession")),
            autoplay=strict_bool(data.get("autoplay")),
            player_name=non_empty_str(data.get("playerName")),
            player_volume=player_volume(data.get("playerVolume")),
        )


@dataclass(frozen=True)
class ContentSignals:
    """Contextual video signals from the OpenRTB site or app object."""

    id: Optional[str] = None
    language: Optional[str] = None
    keywords: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    length: Optional[Number] = None
    livestream: bool = False
    cat: Optional[tuple] = None
    cattax: Optional[int] = None
    site_or_app_cat: tuple = ()
    data: tuple[ContentDataEntry, ...] = ()

    @classmethod
    def from_ortb2(cls, ortb2: Any) -> "ContentSignals":
        """
        Extract content signals from a first party OpenRTB fragment.

        The site object wins over the app object when both are set.
        """
        ortb2 = _as_dict(ortb2)
        site = _as_dict(ortb2.get("site"))
        app = _as_dict(ortb2.get("app"))
        site_or_app = site if site else app
        content = _as_dict(site_or_app.get("content"))

        cattax = content.get("cattax")
        entries = content.get("data")
        parsed_entries = (
            [ContentDataEntry.parse(entry) for entry in entries]
            if isinstance(entries, list)
            else []
        )

        return cls(
            id=non_empty_str(content.get("id")),
            language=non_empty_str(content.get("language")),
            keywords=non_empty_str(content.get("keywords")),
            title=non_empty_str(content.get("title")),
            url=non_empty_str(content.get("url")),
            length=non_negative_number(content.get("len")),
            livestream=bool(content.get("livestream")),
            cat=non_empty_list(content.get("cat")),
            cattax=cattax if isinstance(cattax, int) and not isinstance(cattax, bool) else None,
            site_or_app_cat=non_empty_list(site_or_app.get("cat")) or (),
            data=tuple(entry for entry in parsed_entries if entry is not None),
        )

    def segment_ids(self, segtax: int) -> tuple:
        """
        Collect segment ids of every entry with the given taxonomy.

        Duplicates are dropped, first occurrence order is kept.
        """
        ids = []
        for entry in self.data:
            if entry.segtax != segtax:
                continue
            for segment_id in entry.segment_ids:
                if not _contains(ids, segment_id):
                    ids.append(segment_id)
        return tuple(ids)


def _contains(values: list, candidate: Any) -> bool:
    # Ids may be unhashable, and 1 must not match '1'
    return any(type(value) is type(candidate) and value == candidate for value in values)
