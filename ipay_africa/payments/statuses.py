"""
iPay status codes and their mapping onto webhook actions.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Any, Mapping

from .exceptions import PaymentValidationException

# Status codes are opaque tokens assigned by iPay
STATUS_SUCCESS = 'aei7p7yrx4ae34'
STATUS_PENDING = 'bdi6p2yy76etrs'
STATUS_FAILED = 'fe2707etr5s4wq'
STATUS_LESS_AMOUNT = 'dtfi4p7yty45wq'
STATUS_USED_CODE = 'cr5i3pgy9867e1'


class WebhookAction(str, Enum):
    """Actions the host understands for a webhook event."""
    AUTHORIZED = 'authorized'
    FAILED = 'failed'
    NOT_SUPPORTED = 'not_supported'


STATUS_ACTIONS = {
    STATUS_SUCCESS: WebhookAction.AUTHORIZED,
    # pending leaves the session untouched
    STATUS_PENDING: WebhookAction.NOT_SUPPORTED,
    STATUS_FAILED: WebhookAction.FAILED,
    STATUS_LESS_AMOUNT: WebhookAction.FAILED,
    STATUS_USED_CODE: WebhookAction.FAILED,
}

STATUS_DESCRIPTIONS = {
    STATUS_SUCCESS: 'success',
    STATUS_PENDING: 'pending',
    STATUS_FAILED: 'failed',
    STATUS_LESS_AMOUNT: 'less amount',
    STATUS_USED_CODE: 'used code',
}


def is_known_status(code: Any) -> bool:
    return code in STATUS_ACTIONS


def map_status(code: Any) -> WebhookAction:
    """
    Translate an iPay status code into a webhook action.

    Unknown or missing codes map to NOT_SUPPORTED.
    """
    return STATUS_ACTIONS.get(code, WebhookAction.NOT_SUPPORTED)


def describe_status(code: Any) -> str:
    return STATUS_DESCRIPTIONS.get(code, 'unknown')


def parse_amount(payload: Mapping[str, Any]) -> int:
    """
    Extract the paid amount from a callback payload in minor units.

    Uses ``mc`` (amount paid), then ``ttl`` (amount requested), then 0.

    Raises:
        PaymentValidationException: If the amount is not numeric
    """
    raw = payload.get('mc') or payload.get('ttl') or '0'
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation:
        raise PaymentValidationException(f"Invalid amount in callback: {raw!r}")
    if not value.is_finite():
        raise PaymentValidationException(f"Invalid amount in callback: {raw!r}")

    try:
        return int((value * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise PaymentValidationException(f"Amount out of range in callback: {raw!r}")
