"""Typed request, metadata and result models for format selection."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from media.formats import CaptionTrack, FormatDescriptor

QUALITY_MAX = "max"
CONTAINER_AUTO = "auto"
DEFAULT_CODEC = "h264"

# Wire key -> attribute name for the request payload.
_REQUEST_KEYS = {
    "id": "id",
    "quality": "quality",
    "codec": "codec",
    "isAudioOnly": "is_audio_only",
    "dubLang": "dub_lang",
    "subtitleLang": "subtitle_lang",
    "container": "container",
    "dispatcher": "dispatcher",
}


def _caption_map(raw: Any) -> dict[str, list[CaptionTrack]]:
    if not isinstance(raw, dict):
        return {}
    tracks: dict[str, list[CaptionTrack]] = {}
    for lang, entries in raw.items():
        if not isinstance(entries, list):
            continue
        tracks[str(lang)] = [CaptionTrack.from_info(entry) for entry in entries if isinstance(entry, dict)]
    return tracks


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class MetadataRecord:
    """The subset of a yt-dlp info dict the selector reads."""

    id: str | None
    title: str | None = None
    uploader: str | None = None
    channel: str | None = None
    description: str | None = None
    duration: float | None = None
    is_live: bool = False
    formats: list[FormatDescriptor] = field(default_factory=list)
    subtitles: dict[str, list[CaptionTrack]] = field(default_factory=dict)
    automatic_captions: dict[str, list[CaptionTrack]] = field(default_factory=dict)
    thumbnail: str | None = None

    @classmethod
    def from_info(cls, info: dict[str, Any]) -> "MetadataRecord":
        raw_formats = info.get("formats")
        formats = []
        if isinstance(raw_formats, list):
            formats = [FormatDescriptor.from_info(entry) for entry in raw_formats if isinstance(entry, dict)]
        duration = info.get("duration")
        return cls(
            id=_optional_text(info.get("id")),
            title=_optional_text(info.get("title")),
            uploader=_optional_text(info.get("uploader")),
            channel=_optional_text(info.get("channel")),
            description=_optional_text(info.get("description")),
            duration=float(duration) if isinstance(duration, (int, float)) and not isinstance(duration, bool) else None,
            is_live=bool(info.get("is_live")),
            formats=formats,
            subtitles=_caption_map(info.get("subtitles")),
            automatic_captions=_caption_map(info.get("automatic_captions")),
            thumbnail=_optional_text(info.get("thumbnail")) or None,
        )

    @property
    def author_name(self) -> str:
        return self.uploader or self.channel or ""


@dataclass(frozen=True)
class RequestDescriptor:
    """A caller's selection request.

    ``quality`` is kept exactly as supplied (``"max"`` or a height, possibly as
    a string). ``dispatcher`` is an opaque transport handle that is never
    echoed. Requests built from a wire mapping keep that mapping in ``raw`` and
    echo it back as sent; the typed fields only drive selection.
    """

    id: str
    quality: str | int = QUALITY_MAX
    codec: str = DEFAULT_CODEC
    is_audio_only: bool = False
    dub_lang: str | None = None
    subtitle_lang: str | None = None
    container: str = CONTAINER_AUTO
    dispatcher: Any = None
    extras: dict[str, Any] = field(default_factory=dict)
    raw: dict[str, Any] | None = field(default=None, compare=False)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "RequestDescriptor":
        if not isinstance(payload, dict):
            raise TypeError("request payload must be a mapping")
        values: dict[str, Any] = {}
        extras: dict[str, Any] = {}
        snake_keys = set(_REQUEST_KEYS.values())
        for key, value in payload.items():
            if key in _REQUEST_KEYS:
                values[_REQUEST_KEYS[key]] = value
            elif key in snake_keys:
                values[key] = value
            else:
                extras[key] = value
        if not values.get("id"):
            raise ValueError("request id is required")
        return cls(
            id=str(values["id"]),
            quality=values.get("quality") if values.get("quality") is not None else QUALITY_MAX,
            codec=values.get("codec") or DEFAULT_CODEC,
            is_audio_only=bool(values.get("is_audio_only")),
            dub_lang=values.get("dub_lang") or None,
            subtitle_lang=values.get("subtitle_lang") or None,
            container=values.get("container") or CONTAINER_AUTO,
            dispatcher=values.get("dispatcher"),
            extras=extras,
            raw=dict(payload),
        )

    @property
    def wants_max_quality(self) -> bool:
        return str(self.quality) == QUALITY_MAX

    @property
    def target_height(self) -> int | None:
        """Requested height, or ``None`` for the ``"max"`` sentinel.

        Raises ``ValueError`` for a quality that is neither.
        """
        if self.wants_max_quality:
            return None
        return int(self.quality)

    def without_transport(self) -> "RequestDescriptor":
        return replace(self, dispatcher=None)

    def to_payload(self) -> dict[str, Any]:
        if self.raw is not None:
            return dict(self.raw, dispatcher=self.dispatcher)
        payload = dict(self.extras)
        for wire_key, attr in _REQUEST_KEYS.items():
            payload[wire_key] = getattr(self, attr)
        return payload


@dataclass(frozen=True)
class FileMetadata:
    title: str
    artist: str
    album: str | None = None
    copyright: str | None = None
    date: str | None = None
    sublanguage: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": self.title, "artist": self.artist}
        for key in ("album", "copyright", "date", "sublanguage"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        return payload


@dataclass(frozen=True)
class FilenameAttributes:
    id: str
    title: str
    author: str
    service: str = "youtube"
    youtube_dub_name: str | None = None
    resolution: str | None = None
    quality_label: str | None = None
    youtube_format: str | None = None
    extension: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "service": self.service,
            "id": self.id,
            "title": self.title,
            "author": self.author,
        }
        optional = (
            ("youtubeDubName", self.youtube_dub_name),
            ("resolution", self.resolution),
            ("qualityLabel", self.quality_label),
            ("youtubeFormat", self.youtube_format),
            ("extension", self.extension),
        )
        for key, value in optional:
            if value is not None:
                payload[key] = value
        return payload


@dataclass(frozen=True)
class AudioResult:
    url: str
    filename_attributes: FilenameAttributes
    file_metadata: FileMetadata
    best_audio: str
    original_request: RequestDescriptor
    cover: str
    crop_cover: bool

    def to_payload(self) -> dict[str, Any]:
        return {
            "type": "audio",
            "isAudioOnly": True,
            "urls": self.url,
            "filenameAttributes": self.filename_attributes.to_payload(),
            "fileMetadata": self.file_metadata.to_payload(),
            "bestAudio": self.best_audio,
            "isHLS": False,
            "originalRequest": self.original_request.to_payload(),
            "cover": self.cover,
            "cropCover": self.crop_cover,
        }


@dataclass(frozen=True)
class MergeResult:
    video_url: str
    audio_url: str
    filename_attributes: FilenameAttributes
    file_metadata: FileMetadata
    is_hls: bool
    original_request: RequestDescriptor
    subtitles: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": "merge",
            "urls": [self.video_url, self.audio_url],
            "filenameAttributes": self.filename_attributes.to_payload(),
            "fileMetadata": self.file_metadata.to_payload(),
            "isHLS": self.is_hls,
            "originalRequest": self.original_request.to_payload(),
        }
        if self.subtitles is not None:
            payload["subtitles"] = self.subtitles
        return payload


__all__ = [
    "AudioResult",
    "FileMetadata",
    "FilenameAttributes",
    "MergeResult",
    "MetadataRecord",
    "RequestDescriptor",
]
