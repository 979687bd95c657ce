"""
Payment Gateway Integrations
All payment gateway implementations are in this package.
"""

import logging
from typing import Optional

from .base import BasePaymentGateway
from .ipay import IPayGateway
from ipay_africa.payments.exceptions import PaymentMethodNotSupportedException

__all__ = [
    'BasePaymentGateway',
    'IPayGateway',
    'get_gateway',
]

GATEWAYS = {
    IPayGateway.identifier: IPayGateway,
}


def get_gateway(method: str, options, logger: Optional[logging.Logger] = None) -> BasePaymentGateway:
    """
    Get the payment gateway instance for a given method.

    Args:
        method: Payment method name (ipay)
        options: Gateway options
        logger: Optional logger passed to the gateway

    Returns:
        Payment gateway instance
    """
    gateway_class = GATEWAYS.get(method.lower())
    if not gateway_class:
        raise PaymentMethodNotSupportedException(f"Unsupported payment method: {method}")

    return gateway_class(options, logger=logger)
