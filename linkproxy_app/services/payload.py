"""
Translate loosely-typed form input into the Short.io link schema.

Browsers post whatever the form holds: every value is a string, optional
fields arrive empty, tags are one comma-separated string. Short.io wants
typed JSON, so each field gets its own coercion rule below.
"""

import logging
import math
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from linkproxy_app.exceptions import InvalidPayloadError
from linkproxy_app.schemas.link import LinkPayload

logger = logging.getLogger("linkproxy.payload")

# input key -> upstream key
STRING_FIELDS = {
    "originalURL": "originalURL",
    "originalUrl": "originalURL",
    "title": "title",
    "path": "path",
    "description": "description",
    "utmSource": "utmSource",
    "utmMedium": "utmMedium",
    "utmCampaign": "utmCampaign",
    "utmTerm": "utmTerm",
    "utmContent": "utmContent",
    "iosURL": "iosURL",
    "androidURL": "androidURL",
    "password": "password",
}

# Clearing these is meaningful, so an empty string is forwarded
BLANKABLE_FIELDS = {"title", "path", "description"}

TRUE_STRINGS = {"true", "1"}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _clean_str(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def split_tags(value: Any) -> Optional[List[str]]:
    """Accept a list of tags or a comma-separated string; blanks are dropped"""
    if isinstance(value, (list, tuple)):
        tags = [str(tag).strip() for tag in value if tag is not None]
        return [tag for tag in tags if tag]
    if isinstance(value, str) and value.strip():
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    return None


def parse_redirect_type(value: Any) -> Optional[int]:
    """Parse the leading integer ("301", " 302 ", 307.0); None if there is none"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    return None


def parse_bool(value: Any) -> bool:
    if value is True:
        return True
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    if isinstance(value, int) and not isinstance(value, bool):
        return value == 1
    return False


def parse_expires_at(value: Any) -> Optional[datetime]:
    """
    Parse an expiration timestamp into an aware UTC datetime.

    Accepts ISO-8601 strings (``datetime-local`` inputs carry no offset
    and are read as server-local time, bare dates as UTC midnight) and
    epoch milliseconds. Returns None when the value cannot be parsed.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    try:
        if parsed.tzinfo is None:
            if "T" not in text and " " not in text:
                parsed = parsed.replace(tzinfo=timezone.utc)
            else:
                parsed = parsed.astimezone()
        return parsed.astimezone(timezone.utc)
    except (OverflowError, ValueError, OSError):
        # Valid ISO text whose UTC equivalent falls outside year 1..9999
        return None


def normalize_link_payload(
    data: Any,
    domain: str,
    require_original: bool = False
) -> Dict[str, Any]:
    """
    Build the upstream link body from browser input.

    Args:
        data: Decoded JSON body (anything; non-objects carry no fields)
        domain: Short domain every link is created under
        require_original: Reject input without an original URL (create)

    Returns:
        Upstream JSON body. Only keys present in the input are included,
        plus ``domain``.

    Raises:
        InvalidPayloadError: original URL required but missing or blank
    """
    fields: Dict[str, Any] = {"domain": domain}

    if not isinstance(data, dict):
        data = {}

    for key, target in STRING_FIELDS.items():
        if key not in data:
            continue
        # originalURL wins over the lower-case spelling
        if key == "originalUrl" and "originalURL" in fields:
            continue
        value = _clean_str(data[key])
        if value is None:
            continue
        if value == "" and key not in BLANKABLE_FIELDS:
            continue
        fields[target] = value

    if "tags" in data:
        tags = split_tags(data["tags"])
        if tags is not None:
            fields["tags"] = tags

    if data.get("redirectType") is not None:
        redirect_type = parse_redirect_type(data["redirectType"])
        if redirect_type is not None:
            fields["redirectType"] = redirect_type

    if data.get("allowDuplicates") is not None:
        fields["allowDuplicates"] = parse_bool(data["allowDuplicates"])

    if "expiresAt" in data:
        raw_expires = data["expiresAt"]
        if not raw_expires:
            fields["expiresAt"] = None
        else:
            expires_at = parse_expires_at(raw_expires)
            if expires_at is not None:
                fields["expiresAt"] = expires_at
            else:
                logger.debug(f"Ignoring unparsable expiresAt: {raw_expires!r}")

    if require_original and not fields.get("originalURL"):
        raise InvalidPayloadError("originalURL is required")

    return LinkPayload.model_validate(fields).to_upstream()
