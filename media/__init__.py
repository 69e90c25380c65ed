from .formats import CaptionTrack, FormatDescriptor, normalize_quality

__all__ = ["CaptionTrack", "FormatDescriptor", "normalize_quality"]
