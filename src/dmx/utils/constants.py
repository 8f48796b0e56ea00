"""Adapter Constants and Configuration Values."""

# Adapter identity
BIDDER_CODE: str = "dailymotion"
DEFAULT_ENDPOINT_URL: str = "https://pb.dmxleo.com"

# IAB Global Vendor List ID
DEFAULT_GVL_ID: int = 573

# Version string echoed to the endpoint as `pbv`
LIBRARY_VERSION: str = "$prebid.version$"

# Media types
VIDEO: str = "video"
INSTREAM: str = "instream"

SUPPORTED_MEDIA_TYPES: list[str] = [VIDEO]

# TCF v2 purposes that must be satisfied before cookies can be read
REQUIRED_PURPOSES: tuple[int, ...] = (1, 2, 3, 4, 7, 9, 10)

# Segment taxonomy ids (content.data[].ext.segtax)
SEGTAX_IAB_CONTENT_V1: int = 4  # feeds iabcat1
SEGTAX_IAB_CONTENT_V2: int = 5  # feeds iabcat2

# Category taxonomy ids (content.cattax) where content.cat is IAB 2.x
CATTAX_V2_VALUES: frozenset[int] = frozenset({2, 5, 6})

# Player volume bounds (inclusive)
PLAYER_VOLUME_MIN: int = 0
PLAYER_VOLUME_MAX: int = 10

# OpenRTB 2.6 video object attributes copied from mediaTypes.video
ORTB_VIDEO_PARAMS: tuple[str, ...] = (
    "mimes",
    "minduration",
    "maxduration",
    "startdelay",
    "maxseq",
    "poddur",
    "protocols",
    "w",
    "h",
    "podid",
    "podseq",
    "rqddurs",
    "placement",
    "plcmt",
    "linearity",
    "skip",
    "skipmin",
    "skipafter",
    "sequence",
    "slotinpod",
    "mincpmpersec",
    "battr",
    "maxextended",
    "minbitrate",
    "maxbitrate",
    "boxingallowed",
    "playbackmethod",
    "playbackend",
    "delivery",
    "pos",
    "api",
    "companiontype",
    "poddedupe",
)

# User sync types
SYNC_IMAGE: str = "image"
SYNC_IFRAME: str = "iframe"
