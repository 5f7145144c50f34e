"""Share-link codec for user input records.

Tokens are ``base64(percent-encode(json))``, the format produced by the
browser form (``btoa(encodeURIComponent(JSON.stringify(input)))``), so links
made by either side decode on the other.
"""
from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any, Dict, Mapping
from urllib.parse import quote, unquote

from ..data_model import (
    UserInput,
    default_payload,
    merge_with_defaults,
    user_input_from_payload,
    validate_user_input,
)
from ..errors import InvalidInputError
from .storage import _sanitize_json_compat

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves untouched.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_share(payload: Mapping[str, Any]) -> str:
    text = json.dumps(_sanitize_json_compat(dict(payload)), ensure_ascii=False, separators=(",", ":"))
    quoted = quote(text, safe=_URI_COMPONENT_SAFE)
    return base64.b64encode(quoted.encode("ascii")).decode("ascii")


def decode_share(token: str, current_year: int) -> Dict[str, Any]:
    """Decode a share token into a payload with missing fields defaulted.

    A token that does not decode to a JSON object yields the default payload.
    """
    try:
        quoted = base64.b64decode(token.strip(), validate=True).decode("ascii")
        data = json.loads(unquote(quoted))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError, AttributeError, ValueError) as exc:
        logger.warning("Falling back to defaults for undecodable share token: %s", exc)
        return default_payload(current_year)
    if not isinstance(data, dict):
        logger.warning("Falling back to defaults: share token holds %s, not an object", type(data).__name__)
        return default_payload(current_year)
    return merge_with_defaults(data, current_year)


def restore_user_input(token: str, current_year: int) -> UserInput:
    """Rebuild a valid ``UserInput`` from a share token, or the defaults if it cannot be."""
    payload = decode_share(token, current_year)
    try:
        user_input = user_input_from_payload(payload)
        validate_user_input(user_input, current_year)
    except InvalidInputError as exc:
        logger.warning("Shared input rejected (%s); using defaults", exc)
        user_input = user_input_from_payload(default_payload(current_year))
    return user_input
