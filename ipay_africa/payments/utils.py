"""
Payment System Utilities
Helper functions for iPay payment processing.
"""

import hashlib
import hmac
import secrets
import string
import time
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Any, Iterable, Optional

# Outbound checkout fields in the order iPay hashes them
HASH_FIELD_ORDER = (
    'live', 'oid', 'inv', 'ttl', 'tel', 'eml', 'vid', 'curr',
    'p1', 'p2', 'p3', 'p4', 'cbk', 'cst', 'crl',
)

_BASE36 = string.digits + string.ascii_lowercase


def sign_fields(ordered_fields: Iterable[Optional[str]], secret: str) -> str:
    """
    Compute the iPay request signature.

    The fields are concatenated without delimiters, the secret is appended
    and the result is SHA-1 hashed. Missing values count as empty strings.

    Args:
        ordered_fields: Field values in protocol order
        secret: iPay hash key

    Returns:
        Lowercase hex digest (40 characters)
    """
    data = ''.join('' if value is None else str(value) for value in ordered_fields)
    return hashlib.sha1(f"{data}{secret}".encode('utf-8')).hexdigest()


def sign_payment_data(payment_data: Dict[str, Any], secret: str) -> str:
    """Sign a checkout payload using HASH_FIELD_ORDER."""
    return sign_fields((payment_data.get(name) for name in HASH_FIELD_ORDER), secret)


def sign_search_request(order_id: str, vendor_id: str, secret: str) -> str:
    """HMAC-SHA256 signature for the transaction search API (oid + vid)."""
    return hmac.new(
        secret.encode('utf-8'),
        f"{order_id}{vendor_id}".encode('utf-8'),
        hashlib.sha256
    ).hexdigest()


def generate_order_id() -> str:
    """
    Generate a unique order ID for a checkout initiation.

    Returns:
        ID of the form order_<epoch ms>_<9 base36 characters>
    """
    timestamp = int(time.time() * 1000)
    suffix = ''.join(secrets.choice(_BASE36) for _ in range(9))
    return f"order_{timestamp}_{suffix}"


def generate_invoice_id(order_id: str) -> str:
    return f"INV_{order_id}"


def format_major_amount(amount_minor: Any) -> str:
    """
    Render an amount in minor units as a plain major-unit decimal string.

    10000 -> "100", 10050 -> "100.5", 1 -> "0.01"
    """
    value = (Decimal(str(amount_minor)) / 100).normalize()
    return format(value, 'f')


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def format_payment_response(success: bool, message: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Format a standardized payment API response.

    Args:
        success: Whether the operation was successful
        message: Response message
        data: Additional response data

    Returns:
        Formatted response dictionary
    """
    response = {
        'success': success,
        'message': message,
        'timestamp': utc_timestamp()
    }

    if data:
        response.update(data)

    return response


def mask_payment_reference(reference: Optional[str]) -> str:
    """
    Mask payment reference for display (show only first and last few characters).

    Args:
        reference: Payment reference

    Returns:
        Masked reference string
    """
    if not reference:
        return ''
    if len(reference) <= 8:
        return reference

    return f"{reference[:4]}****{reference[-4:]}"
