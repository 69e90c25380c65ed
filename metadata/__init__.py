from .description import extract_file_metadata, parse_music_description
from .types import (
    AudioResult,
    FileMetadata,
    FilenameAttributes,
    MergeResult,
    MetadataRecord,
    RequestDescriptor,
)

__all__ = [
    "AudioResult",
    "FileMetadata",
    "FilenameAttributes",
    "MergeResult",
    "MetadataRecord",
    "RequestDescriptor",
    "extract_file_metadata",
    "parse_music_description",
]
