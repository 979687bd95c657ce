"""
Payment System Configuration
iPay gateway options and fixed protocol settings.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Mapping, Optional


def _as_bool(value: Any, default: bool = False) -> bool:
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class EnabledChannels:
    """Checkout channels offered on the iPay hosted page."""
    mpesa: bool = True
    airtel: bool = True
    creditcard: bool = True
    pesalink: bool = True

    def to_dict(self) -> Dict[str, bool]:
        return {
            'mpesa': self.mpesa,
            'airtel': self.airtel,
            'creditcard': self.creditcard,
            'pesalink': self.pesalink,
        }


@dataclass(frozen=True)
class IPayOptions:
    """
    iPay provider options.

    Built once at startup and passed to the gateway; never mutated.
    The secret key is kept out of repr() so the options can be logged.
    """
    vendor_id: str
    secret_key: str = field(repr=False)
    live_mode: bool = False
    callback_base_url: str = 'http://localhost:9000'
    enabled_channels: EnabledChannels = field(default_factory=EnabledChannels)
    request_timeout: int = 30


class PaymentConfig:
    """
    Fixed iPay protocol settings.
    Credentials are not stored here; see IPayOptions.
    """

    # Hosted checkout endpoint (iPay uses the same URL for live and demo)
    IPAY_GATEWAY_URL = 'https://www.ipayafrica.com/ipn/'

    # Transaction search API used for polling
    IPAY_TRANSACTION_SEARCH_URL = 'https://apis.ipayafrica.com/payments/v2/transaction/search'

    # Path the gateway calls back on, appended to the callback base URL
    WEBHOOK_PATH = '/webhooks/ipay'

    # Browser redirect targets after a GET callback
    PAYMENT_SUCCESS_URL = '/payment/success'
    PAYMENT_FAILURE_URL = '/payment/failed'

    REQUEST_TIMEOUT = 30  # seconds, default for IPayOptions.request_timeout

    @classmethod
    def get_gateway_config(cls, gateway_name: str, settings: Mapping[str, Any]) -> Optional[IPayOptions]:
        """
        Build gateway options from a configuration mapping (usually app.config).

        Args:
            gateway_name: Name of the payment gateway
            settings: Mapping holding IPAY_* / BACKEND_URL keys

        Returns:
            IPayOptions, or None for an unknown gateway
        """
        if gateway_name.lower() != 'ipay':
            return None

        channels = EnabledChannels(
            mpesa=_as_bool(settings.get('IPAY_CHANNEL_MPESA'), True),
            airtel=_as_bool(settings.get('IPAY_CHANNEL_AIRTEL'), True),
            creditcard=_as_bool(settings.get('IPAY_CHANNEL_CREDITCARD'), True),
            pesalink=_as_bool(settings.get('IPAY_CHANNEL_PESALINK'), True),
        )

        return IPayOptions(
            vendor_id=settings.get('IPAY_VID') or '',
            secret_key=settings.get('IPAY_HASH_KEY') or '',
            live_mode=_as_bool(settings.get('IPAY_LIVE')),
            callback_base_url=(settings.get('BACKEND_URL') or 'http://localhost:9000').rstrip('/'),
            enabled_channels=channels,
            request_timeout=int(settings.get('IPAY_REQUEST_TIMEOUT') or cls.REQUEST_TIMEOUT),
        )

    @classmethod
    def is_gateway_enabled(cls, options: Optional[IPayOptions]) -> bool:
        """Check if the gateway has both a vendor id and a hash key."""
        return bool(options and options.vendor_id and options.secret_key)


# Channel display names
CHANNEL_DISPLAY_NAMES = {
    'mpesa': 'M-PESA',
    'airtel': 'Airtel Money',
    'creditcard': 'Credit / Debit Card',
    'pesalink': 'PesaLink',
}
