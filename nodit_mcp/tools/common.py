"""Helpers shared by the Nodit tools."""

from __future__ import annotations

import json
import logging
from typing import Dict, Optional

from nodit_mcp.nodit_api import (
    MalformedResponseError,
    MissingApiKeyError,
    NoditApiError,
    RequestTimeoutError,
    TransportError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = (
    "The request took longer than expected and has been terminated. This may be due to "
    "high server load or because the requested data is taking longer to process. "
    "Please try again later."
)

STATUS_GUIDANCE: Dict[int, str] = {
    400: "Help the user identify what went wrong in their request. Explain the likely issue "
    "based on the error message, and provide a corrected example if possible.",
    403: "Let the user know that this API is only available to paid plan users. Explain that "
    "their current plan does not include access, and suggest upgrading to a paid tier via "
    "https://nodit.io/pricing .",
    404: "Let the user know that no data was found for the provided ID or address. This "
    "usually means the resource doesn't exist or hasn't been indexed yet. Suggest "
    "double-checking the input or trying again later.",
    429: "Inform the user that they've reached their current plan's usage limit. Recommend "
    "reviewing their usage or upgrading via https://nodit.io/pricing. Optionally mention "
    "the Referral Program: https://developer.nodit.io/docs/referral-program.",
    500: "This is not the user's fault. Let them know it's likely a temporary issue. Suggest "
    "retrying soon or contacting support at https://developer.nodit.io/discuss if the "
    "problem continues.",
    503: "Inform the user that the service may be under maintenance or experiencing high "
    "load. Suggest retrying shortly, and checking the Notice section in the Nodit "
    "Developer Portal (https://developer.nodit.io).",
}


def tool_error(message: str, tool_name: str) -> Dict[str, str]:
    logger.warning("Tool Error (%s): %s", tool_name, message, extra={"tool": tool_name})
    return {"error": f"Tool Error: {message}"}


def normalize_description(description: Optional[str]) -> str:
    """Drop markdown callout lines (``> ...``) from an operation description."""
    if not description:
        return "No description available."
    lines = [line for line in description.split("\n") if not line.lstrip().startswith(">")]
    return "\n".join(lines).strip()


def upstream_error_message(status_code: Optional[int], body: Optional[str]) -> str:
    body = body or ""
    guidance = STATUS_GUIDANCE.get(status_code or 0)
    if guidance:
        return f"{body}. {guidance}"
    try:
        details = f"Error Details (JSON):\n{json.dumps(json.loads(body), indent=2)}"
    except ValueError:
        details = f"Raw error response: {body}"
    return f"API Error (Status {status_code}). {details}"


def describe_api_error(exc: NoditApiError) -> str:
    if isinstance(exc, MissingApiKeyError):
        return str(exc)
    if isinstance(exc, RequestTimeoutError):
        return f"Network/fetch error calling API: {TIMEOUT_MESSAGE}"
    if isinstance(exc, TransportError):
        return f"Network/fetch error calling API: {exc}"
    if isinstance(exc, UpstreamError):
        return upstream_error_message(exc.status_code, exc.body)
    if isinstance(exc, MalformedResponseError):
        return f"API returned OK status but body was not valid JSON. Raw response: {exc.body}"
    return f"Nodit API error: {exc}"
