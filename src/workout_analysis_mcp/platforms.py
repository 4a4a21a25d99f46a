"""Social video URL classification and structural validation.

``classify`` reports the platform from the host alone, so a profile link
still reads as Instagram. ``is_supported`` additionally requires the path or
query shape of a single video. Both are pure and perform no network access.
"""

from __future__ import annotations

import re
from urllib.parse import urlparse

from .errors import ErrorCategory, ValidationError
from .models.workout import PlatformKind

_INSTAGRAM_VIDEO = re.compile(r"^/(?:p|reel|tv)/(?P<id>[^/?#]+)")
_TIKTOK_VIDEO = re.compile(r"^/@(?P<handle>[^/?#]+)/video/(?P<id>\d+)")
_YOUTUBE_SHORT = re.compile(r"^/(?P<id>[^/?#&]+)")
_YOUTUBE_WATCH_ID = re.compile(r"(?:^|&)v=(?P<id>[^&#]+)")

_HOST_PLATFORMS: tuple[tuple[str, PlatformKind], ...] = (
    ("instagram.com", PlatformKind.INSTAGRAM),
    ("tiktok.com", PlatformKind.TIKTOK),
    ("youtube.com", PlatformKind.YOUTUBE),
    ("youtu.be", PlatformKind.YOUTUBE),
)


def _host(url: str) -> str:
    """Return the lowercase hostname of *url*, accepting scheme-less input."""
    candidate = url.strip()
    if "://" not in candidate:
        candidate = f"//{candidate}"
    try:
        return (urlparse(candidate).hostname or "").lower()
    except ValueError:
        return ""


def _matches_domain(host: str, domain: str) -> bool:
    return host == domain or host.endswith(f".{domain}")


def classify(url: str) -> PlatformKind:
    """Map *url* to a platform by its host. Never raises."""
    if not url:
        return PlatformKind.UNKNOWN
    host = _host(url)
    for domain, platform in _HOST_PLATFORMS:
        if _matches_domain(host, domain):
            return platform
    return PlatformKind.UNKNOWN


def extract_content_id(url: str) -> str | None:
    """Return the platform-native video ID, or None when the shape is wrong.

    Instagram shortcode, numeric TikTok video ID, or YouTube video ID.
    """
    platform = classify(url)
    if platform is PlatformKind.UNKNOWN:
        return None

    candidate = url.strip()
    if "://" not in candidate:
        candidate = f"//{candidate}"
    try:
        parsed = urlparse(candidate)
    except ValueError:
        return None

    match: re.Match[str] | None = None
    if platform is PlatformKind.INSTAGRAM:
        match = _INSTAGRAM_VIDEO.match(parsed.path)
    elif platform is PlatformKind.TIKTOK:
        match = _TIKTOK_VIDEO.match(parsed.path)
    elif _matches_domain(_host(url), "youtu.be"):
        match = _YOUTUBE_SHORT.match(parsed.path)
    elif parsed.path.rstrip("/") == "/watch":
        match = _YOUTUBE_WATCH_ID.search(parsed.query)
    return match.group("id") if match else None


def is_supported(url: str) -> bool:
    """True when *url* points at a single Instagram, TikTok, or YouTube video."""
    return extract_content_id(url) is not None


def validate_url(url: str | None) -> PlatformKind:
    """Classify *url* and require a supported video shape.

    Raises:
        ValidationError: If the URL is empty, on an unknown platform, or on a
            known platform but not a single-video link (e.g. a profile page).
    """
    if not url or not url.strip():
        raise ValidationError("URL is required")

    platform = classify(url)
    if platform is PlatformKind.UNKNOWN:
        raise ValidationError(
            "Invalid social media URL. Please provide a valid Instagram, TikTok, or YouTube URL."
        )
    if not is_supported(url):
        raise ValidationError(
            f"Unsupported {platform.value} URL — link to a single video, not a profile or feed",
            category=ErrorCategory.URL_UNSUPPORTED,
        )
    return platform
