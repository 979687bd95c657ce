"""
iPay callback payloads.

Webhook and redirect callbacks arrive as flat string mappings. They are
parsed once at the HTTP boundary into either an ``IPayCallback`` or an
``UnrecognizedCallback``; neither raises on missing or malformed fields.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Union

from .statuses import STATUS_SUCCESS, WebhookAction, map_status


@dataclass(frozen=True)
class IPayCallback:
    id: Optional[str] = None
    status: Optional[str] = None
    txncd: Optional[str] = None
    mc: Optional[str] = None
    ivm: Optional[str] = None
    qwh: Optional[str] = None
    afd: Optional[str] = None
    poi: Optional[str] = None
    uyt: Optional[str] = None
    ifd: Optional[str] = None
    agt: Optional[str] = None
    p1: Optional[str] = None
    p2: Optional[str] = None
    p3: Optional[str] = None
    p4: Optional[str] = None
    msisdn_id: Optional[str] = None
    msisdn_idnum: Optional[str] = None
    # echoed back from the checkout request in some callback modes
    oid: Optional[str] = None
    ttl: Optional[str] = None

    @property
    def session_id(self) -> str:
        return self.p1 or self.oid or ''

    @property
    def action(self) -> WebhookAction:
        return map_status(self.status)

    @property
    def is_successful(self) -> bool:
        return self.status == STATUS_SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in CALLBACK_FIELDS if getattr(self, name) is not None}


@dataclass(frozen=True)
class UnrecognizedCallback:
    """A payload carrying none of the iPay callback fields."""
    raw: Dict[str, Any] = field(default_factory=dict)

    id = None
    status = None
    txncd = None
    mc = None
    session_id = ''
    action = WebhookAction.NOT_SUPPORTED
    is_successful = False

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.raw)


Callback = Union[IPayCallback, UnrecognizedCallback]

CALLBACK_FIELDS = tuple(f.name for f in fields(IPayCallback))


def _clean(value: Any) -> Optional[str]:
    # query strings and form posts may repeat a key
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    return str(value)


def parse_callback(payload: Optional[Mapping[str, Any]]) -> Callback:
    """
    Parse a raw callback mapping.

    Args:
        payload: JSON body, form data or query string as a mapping

    Returns:
        IPayCallback when at least one known field is present,
        UnrecognizedCallback otherwise
    """
    if not payload:
        return UnrecognizedCallback()
    if not isinstance(payload, Mapping):
        return UnrecognizedCallback(raw={'payload': payload})

    known = {name: _clean(payload[name]) for name in CALLBACK_FIELDS if name in payload}
    if not known:
        return UnrecognizedCallback(raw=dict(payload))

    return IPayCallback(**known)
