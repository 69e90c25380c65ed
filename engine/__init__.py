from .cookies import CookieStore
from .errors import ExtractionError, SelectionError, classify_extraction_error
from .runtime import get_runtime_info
from .selector import FormatSelector, resolve_codec_profile, validate_record
from .ytdlp_invoker import ExtractionInvoker, YtDlpInvoker, build_extraction_opts

__all__ = [
    "CookieStore",
    "ExtractionError",
    "ExtractionInvoker",
    "FormatSelector",
    "SelectionError",
    "YtDlpInvoker",
    "build_extraction_opts",
    "classify_extraction_error",
    "get_runtime_info",
    "resolve_codec_profile",
    "validate_record",
]
