"""Format selection over a yt-dlp metadata record.

``FormatSelector.select`` is a pure function of a ``MetadataRecord`` and a
``RequestDescriptor``: it validates the record, derives file metadata and picks
either one audio stream or a video+audio pair. Failures are raised as
``SelectionError`` and turned into error payloads by the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from config.settings import DURATION_LIMIT_SECONDS
from engine.errors import (
    ERROR_FETCH_FAIL,
    ERROR_LIVE,
    ERROR_NO_MATCHING_FORMAT,
    ERROR_TOO_LONG,
    SelectionError,
)
from engine.json_utils import log_event
from media.formats import (
    CaptionTrack,
    FormatDescriptor,
    audio_candidates,
    audio_codec_label,
    find_dubbed_audio,
    is_hls_url,
    normalize_quality,
    pick_default_audio,
    video_candidates,
)
from metadata.description import extract_file_metadata, is_topic_channel
from metadata.types import (
    CONTAINER_AUTO,
    AudioResult,
    FileMetadata,
    FilenameAttributes,
    MergeResult,
    MetadataRecord,
    RequestDescriptor,
)

logger = logging.getLogger(__name__)

COVER_FALLBACK_URL = "https://i.ytimg.com/vi/{video_id}/maxresdefault.jpg"
SUBTITLE_EXT = "vtt"


@dataclass(frozen=True)
class CodecProfile:
    name: str
    video_codec: str
    audio_codec: str
    container: str
    # Substring expected in a format's vcodec for this family.
    family_marker: str


CODEC_PROFILES = {
    "h264": CodecProfile("h264", "avc1", "m4a", "mp4", "avc"),
    "av1": CodecProfile("av1", "av01", "opus", "webm", "av01"),
    "vp9": CodecProfile("vp9", "vp9", "opus", "webm", "vp9"),
}
DEFAULT_CODEC_PROFILE = CODEC_PROFILES["h264"]


def resolve_codec_profile(codec: str | None) -> CodecProfile:
    return CODEC_PROFILES.get(str(codec or "").strip().lower(), DEFAULT_CODEC_PROFILE)


def validate_record(record: MetadataRecord, video_id: str, duration_limit: float) -> None:
    """Reject live streams, over-long media and records for a different video."""
    if record.is_live:
        raise SelectionError(ERROR_LIVE)
    if record.duration is not None and record.duration > duration_limit:
        raise SelectionError(ERROR_TOO_LONG)
    if record.id != video_id:
        # The extractor answered for another resource; retrying will not help.
        raise SelectionError(ERROR_FETCH_FAIL, critical=True)


class FormatSelector:
    """Picks the streams to hand to the downloader for one request."""

    def __init__(self, duration_limit: float | None = None) -> None:
        self.duration_limit = DURATION_LIMIT_SECONDS if duration_limit is None else duration_limit

    def select(self, record: MetadataRecord, request: RequestDescriptor) -> AudioResult | MergeResult:
        validate_record(record, request.id, self.duration_limit)
        file_metadata = extract_file_metadata(record)
        filename_attributes = FilenameAttributes(
            id=request.id,
            title=file_metadata.title,
            author=file_metadata.artist,
        )
        if request.is_audio_only:
            result = self.select_audio_only(record, request, file_metadata, filename_attributes)
        else:
            result = self.select_video(record, request, file_metadata, filename_attributes)
        log_event(
            logging.INFO,
            "selection_completed",
            video_id=request.id,
            audio_only=request.is_audio_only,
            dub_name=result.filename_attributes.youtube_dub_name,
            quality_label=result.filename_attributes.quality_label,
        )
        return result

    @staticmethod
    def _pick_audio(
        record: MetadataRecord,
        candidates: list[FormatDescriptor],
        dub_lang: str | None,
    ) -> tuple[FormatDescriptor | None, str | None]:
        """Default audio pick, replaced by a dubbed track when one is requested and found."""
        dubbed = find_dubbed_audio(record.formats, dub_lang)
        if dubbed is not None:
            return dubbed, dubbed.language
        return pick_default_audio(candidates), None

    def select_audio_only(
        self,
        record: MetadataRecord,
        request: RequestDescriptor,
        file_metadata: FileMetadata,
        filename_attributes: FilenameAttributes,
    ) -> AudioResult:
        candidates = audio_candidates(record.formats)
        if not candidates:
            raise SelectionError(ERROR_NO_MATCHING_FORMAT)

        audio, dub_name = self._pick_audio(record, candidates, request.dub_lang)
        if audio is None or not audio.url:
            raise SelectionError(ERROR_NO_MATCHING_FORMAT)

        log_event(
            logging.DEBUG,
            "formats_picked",
            video_id=request.id,
            audio_format_id=audio.format_id,
            audio_protocol=audio.protocol,
        )
        return AudioResult(
            url=audio.url,
            filename_attributes=replace(filename_attributes, youtube_dub_name=dub_name),
            file_metadata=file_metadata,
            best_audio=audio_codec_label(audio),
            original_request=request.without_transport(),
            cover=record.thumbnail or COVER_FALLBACK_URL.format(video_id=request.id),
            crop_cover=is_topic_channel(record),
        )

    def select_video(
        self,
        record: MetadataRecord,
        request: RequestDescriptor,
        file_metadata: FileMetadata,
        filename_attributes: FilenameAttributes,
    ) -> MergeResult:
        profile = resolve_codec_profile(request.codec)
        videos = video_candidates(record.formats, profile.family_marker)
        audios = audio_candidates(record.formats)
        if not videos or not audios:
            log_event(
                logging.INFO,
                "selection_rejected",
                video_id=request.id,
                codec=profile.name,
                video_candidates=len(videos),
                audio_candidates=len(audios),
            )
            raise SelectionError(ERROR_NO_MATCHING_FORMAT)

        video = self._pick_video(videos, request)
        audio, dub_name = self._pick_audio(record, audios, request.dub_lang)
        if video is None or audio is None or not video.url or not audio.url:
            raise SelectionError(ERROR_NO_MATCHING_FORMAT)

        tier = normalize_quality(video.height)
        extension = profile.container if request.container == CONTAINER_AUTO else request.container
        subtitle_track = None
        if request.subtitle_lang:
            subtitle_track = self._find_subtitles(record, request.subtitle_lang)
            if subtitle_track is not None:
                file_metadata = replace(file_metadata, sublanguage=request.subtitle_lang)

        log_event(
            logging.DEBUG,
            "formats_picked",
            video_id=request.id,
            video_format_id=video.format_id,
            video_protocol=video.protocol,
            audio_format_id=audio.format_id,
            audio_protocol=audio.protocol,
            subtitle_track=subtitle_track.name if subtitle_track is not None else None,
        )

        return MergeResult(
            video_url=video.url,
            audio_url=audio.url,
            filename_attributes=replace(
                filename_attributes,
                youtube_dub_name=dub_name,
                resolution=f"{video.width or 0}x{video.height or 0}",
                quality_label=f"{tier}p",
                youtube_format=profile.name,
                extension=extension,
            ),
            file_metadata=file_metadata,
            # Manifests are filtered out above; kept as a consistency flag.
            is_hls=is_hls_url(video.url) or is_hls_url(audio.url),
            original_request=request.without_transport(),
            subtitles=subtitle_track.url if subtitle_track is not None else None,
        )

    @staticmethod
    def _pick_video(videos: list[FormatDescriptor], request: RequestDescriptor) -> FormatDescriptor | None:
        """Exact tier first, then the tallest below the request, then the lowest available.

        Never picks a format taller than a numeric request unless nothing at or
        below it exists.
        """
        target = request.target_height
        if target is None:
            return videos[0]
        for fmt in videos:
            if normalize_quality(fmt.height) == target:
                return fmt
        for fmt in videos:
            if fmt.height is not None and fmt.height <= target:
                return fmt
        return videos[-1]

    @staticmethod
    def _find_subtitles(record: MetadataRecord, lang: str) -> CaptionTrack | None:
        tracks = record.subtitles.get(lang) or record.automatic_captions.get(lang) or []
        for track in tracks:
            if track.ext == SUBTITLE_EXT and track.url:
                return track
        return None
