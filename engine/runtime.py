import os
import sys

from yt_dlp.version import __version__ as ytdlp_version

from config.settings import DURATION_LIMIT_SECONDS


def get_runtime_info():
    """Versions and limits reported alongside extraction failures."""
    return {
        "app_version": os.environ.get("STREAMPICK_VERSION", "0.1.0"),
        "python_version": sys.version.split()[0],
        "yt_dlp_version": ytdlp_version,
        "duration_limit_seconds": DURATION_LIMIT_SECONDS,
    }
