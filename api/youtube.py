"""Async entry point resolving a YouTube request into downloadable stream urls."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from engine.cookies import CookieStore
from engine.errors import (
    ERROR_FETCH_FAIL,
    SelectionError,
    classify_extraction_error,
    error_payload,
)
from engine.json_utils import log_event
from engine.runtime import get_runtime_info
from engine.selector import FormatSelector
from engine.ytdlp_invoker import (
    ExtractionInvoker,
    YtDlpInvoker,
    build_extraction_opts,
    build_watch_url,
)
from metadata.types import MetadataRecord, RequestDescriptor

logger = logging.getLogger(__name__)

COOKIE_PLATFORM = "youtube"


def _parse_document(output: Any) -> dict[str, Any] | None:
    if not output:
        return None
    try:
        info = json.loads(output)
    except (TypeError, ValueError):
        return None
    return info if isinstance(info, dict) else None


async def fetch_youtube(
    request,
    *,
    invoker: ExtractionInvoker | None = None,
    cookie_store: CookieStore | None = None,
    duration_limit: float | None = None,
) -> Dict[str, Any]:
    """Resolve one request into an ``audio`` or ``merge`` payload, or an error payload.

    ``request`` is a ``RequestDescriptor`` or its wire mapping. No exception
    escapes: extraction failures are classified from the extractor's message,
    selection failures carry their own kind, and anything unexpected becomes
    ``fetch.fail``.
    """
    invoker = invoker or YtDlpInvoker()
    cookie_store = cookie_store or CookieStore()
    try:
        if not isinstance(request, RequestDescriptor):
            request = RequestDescriptor.from_payload(request)

        opts = build_extraction_opts(cookie_store.get_cookie(COOKIE_PLATFORM))
        try:
            output = await invoker.extract(build_watch_url(request.id), opts)
        except Exception as exc:
            kind = classify_extraction_error(str(exc))
            log_event(
                logging.WARNING,
                "extraction_failed",
                video_id=request.id,
                error=kind,
                detail=str(exc),
                runtime=get_runtime_info(),
            )
            return error_payload(kind)

        info = _parse_document(output)
        if info is None:
            log_event(logging.WARNING, "extraction_empty", video_id=request.id)
            return error_payload(ERROR_FETCH_FAIL)

        record = MetadataRecord.from_info(info)
        result = FormatSelector(duration_limit).select(record, request)
        return result.to_payload()
    except SelectionError as exc:
        log_event(
            logging.INFO,
            "selection_rejected",
            video_id=getattr(request, "id", None),
            error=exc.kind,
            critical=exc.critical,
        )
        return exc.to_payload()
    except Exception:
        logger.exception("youtube request processing failed")
        return error_payload(ERROR_FETCH_FAIL)
