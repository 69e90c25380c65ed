import os
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parent.parent

def _is_container_runtime():
    if os.path.exists("/.dockerenv"):
        return True
    return os.path.isdir("/data")


def _default_tokens_dir():
    if _is_container_runtime():
        return Path("/tokens")
    return PROJECT_ROOT / "data" / "tokens"


TOKENS_DIR = Path(os.environ.get("STREAMPICK_TOKENS_DIR", _default_tokens_dir())).resolve()


def _is_within_base(path, base_dir):
    real = os.path.realpath(path)
    base = os.path.realpath(base_dir)
    return os.path.commonpath([real, base]) == base


def resolve_dir(path, base_dir):
    if not path:
        return base_dir
    if os.path.isabs(path):
        resolved = os.path.abspath(path)
    else:
        resolved = os.path.abspath(os.path.join(base_dir, path))
    if not _is_within_base(resolved, base_dir):
        # Cookie reads stay under the tokens directory.
        raise ValueError(f"Path must be within base directory: {base_dir}")
    return resolved
