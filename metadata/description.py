"""Descriptive file metadata derived from a video's metadata record."""

from __future__ import annotations

import logging

from metadata.types import FileMetadata, MetadataRecord

logger = logging.getLogger(__name__)

TOPIC_MARKER = "- Topic"
MUSIC_DESCRIPTION_PREFIX = "Provided to YouTube by"
RELEASE_DATE_PREFIX = "Released on:"

_SEGMENT_SEPARATOR = "\n\n"
_MUSIC_SEGMENT_COUNT = 5


def _strip_topic(name: str | None) -> str:
    return (name or "").replace(TOPIC_MARKER, "", 1).strip()


def parse_music_description(description: str | None) -> dict[str, str]:
    """Pull album, copyright and release date out of an auto-generated music description.

    Distributor descriptions read, block by block: distributor line, track
    line, album, copyright, "Released on: <date>", with further blocks after
    that ignored. Any other shape yields an empty dict.
    """
    if not description or not description.startswith(MUSIC_DESCRIPTION_PREFIX):
        return {}
    segments = description.split(_SEGMENT_SEPARATOR)[:_MUSIC_SEGMENT_COUNT]
    if len(segments) != _MUSIC_SEGMENT_COUNT:
        logger.debug("music description has %d segments; skipping enrichment", len(segments))
        return {}
    fields = {"album": segments[2], "copyright": segments[3]}
    if segments[4].startswith(RELEASE_DATE_PREFIX):
        fields["date"] = segments[4][len(RELEASE_DATE_PREFIX):].strip()
    return fields


def extract_file_metadata(record: MetadataRecord) -> FileMetadata:
    title = (record.title or "").strip() or "untitled"
    artist = _strip_topic(record.uploader) or _strip_topic(record.channel) or "unknown"
    return FileMetadata(title=title, artist=artist, **parse_music_description(record.description))


def is_topic_channel(record: MetadataRecord) -> bool:
    """Auto-generated music channels carry square artwork centred in a wide thumbnail."""
    return record.author_name.endswith(TOPIC_MARKER)
