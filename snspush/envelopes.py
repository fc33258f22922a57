"""
Conversion of message bodies into SNS platform envelopes.

SNS expects ``MessageStructure="json"`` payloads whose keys name the target
platform and whose values are themselves JSON strings, e.g.::

    {"GCM": "{\\"data\\": {\\"message\\": \\"hi\\"}}"}
"""

import json
from collections.abc import Mapping
from typing import Any

from .config import Platform
from .exceptions import ValidationError

MULTI_PLATFORM_FORMAT_ERROR = 'Argument "message" must be in SNS multi-platform publishing format.'

Message = str | Mapping[str, Any]


def _dumps(value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"Message is not JSON serializable: {e!s}", field="message", original_error=e
        ) from e


def to_gcm(message: Message) -> dict[str, str]:
    """Android: strings are wrapped as ``{"data": {"message": ...}}``."""
    if isinstance(message, str):
        return {"GCM": _dumps({"data": {"message": message}})}
    if isinstance(message, Mapping):
        return {"GCM": _dumps(dict(message))}
    raise ValidationError(
        "Unable to convert message to GCM format. Message must be str or dict.",
        field="message",
        value=message,
    )


def to_apns(message: Message, sandbox: bool = False) -> dict[str, str]:
    """iOS: strings are wrapped as ``{"aps": {"alert": ...}}``."""
    key = "APNS_SANDBOX" if sandbox else "APNS"
    if isinstance(message, str):
        return {key: _dumps({"aps": {"alert": message}})}
    if isinstance(message, Mapping):
        return {key: _dumps(dict(message))}
    raise ValidationError(
        "Unable to convert message to APNS format. Message must be str or dict.",
        field="message",
        value=message,
    )


def to_adm(message: Message) -> dict[str, str]:
    """Kindle: same shape as GCM under the ADM key."""
    if isinstance(message, str):
        return {"ADM": _dumps({"data": {"message": message}})}
    if isinstance(message, Mapping):
        return {"ADM": _dumps(dict(message))}
    raise ValidationError(
        "Unable to convert message to ADM format. Message must be str or dict.",
        field="message",
        value=message,
    )


def to_envelope(platform: Platform | str, message: Message, sandbox: bool = False) -> dict[str, str]:
    """
    Builds the platform envelope for a single-endpoint publish.

    Raises:
        UnsupportedPlatformError: If the platform is unknown
        ValidationError: If the message is neither a string nor a mapping
    """
    resolved = Platform.parse(platform)
    if resolved is Platform.ANDROID:
        return to_gcm(message)
    if resolved is Platform.IOS:
        return to_apns(message, sandbox=sandbox)
    return to_adm(message)


def to_topic_envelope(message: Any) -> dict[str, str]:
    """
    Validates a multi-platform topic payload.

    The payload must be a mapping with a string ``"default"`` entry. Platform
    entries given as dicts are JSON-encoded, strings are passed through.

    Raises:
        ValidationError: If the payload is not in multi-platform format
    """
    if not isinstance(message, Mapping) or not isinstance(message.get("default"), str):
        raise ValidationError(MULTI_PLATFORM_FORMAT_ERROR, field="message", value=message)

    envelope: dict[str, str] = {}
    for key, value in message.items():
        if isinstance(value, str):
            envelope[key] = value
        elif isinstance(value, Mapping):
            envelope[key] = _dumps(dict(value))
        else:
            raise ValidationError(MULTI_PLATFORM_FORMAT_ERROR, field=key, value=value)
    return envelope


def to_attribute_values(attributes: Mapping[str, Any]) -> dict[str, str]:
    """
    Stringifies endpoint attributes for SetEndpointAttributes.

    SNS only accepts string values: dicts and lists become JSON,
    booleans become ``"true"``/``"false"``.

    Raises:
        ValidationError: If no attributes are given
    """
    if not attributes:
        raise ValidationError("At least one endpoint attribute is required", field="attributes")

    result: dict[str, str] = {}
    for key, value in attributes.items():
        if isinstance(value, bool):
            result[key] = "true" if value else "false"
        elif isinstance(value, (dict, list)):
            result[key] = _dumps(value)
        elif value is None:
            raise ValidationError(
                f"Endpoint attribute '{key}' cannot be None", field=key, value=value
            )
        else:
            result[key] = str(value)
    return result
