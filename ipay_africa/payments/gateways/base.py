"""
Base Payment Gateway
Abstract base class for payment provider implementations.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

import requests

from ipay_africa.payments.exceptions import PaymentGatewayException


class BasePaymentGateway(ABC):
    """
    Abstract base class for payment gateway implementations.

    A gateway is a stateless transformer over records supplied by the host:
    every lifecycle method receives the host's payment data and returns an
    updated copy. Persistence stays with the caller.
    """

    identifier: str = ''

    def __init__(self, options, logger: Optional[logging.Logger] = None):
        """
        Initialize the payment gateway.

        Args:
            options: Gateway options built at startup
            logger: Logger for gateway events (defaults to the module logger)
        """
        self.validate_options(options)
        self.options = options
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    @abstractmethod
    def validate_options(options) -> None:
        """
        Check that the options are complete.

        Raises:
            PaymentGatewayNotConfiguredException: If a required option is missing
        """
        pass

    @abstractmethod
    def initiate_payment(self, amount: int, currency_code: str,
                         context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Start a checkout.

        Args:
            amount: Amount in minor units
            currency_code: ISO currency code
            context: Customer and order details

        Returns:
            Dictionary with the session data under 'data'
        """
        pass

    @abstractmethod
    def authorize_payment(self, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def capture_payment(self, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def cancel_payment(self, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def refund_payment(self, data: Optional[Dict[str, Any]], amount: Any) -> Dict[str, Any]:
        """
        Record a refund request.

        Args:
            data: Payment session data
            amount: Refund amount in minor units

        Returns:
            Dictionary with the updated session data under 'data'
        """
        pass

    @abstractmethod
    def retrieve_payment(self, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def update_payment(self, data: Optional[Dict[str, Any]], amount: Any,
                       currency_code: Optional[str]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def delete_payment(self, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def get_payment_status(self, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def get_webhook_action_and_data(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Translate a webhook payload into a host action.

        Args:
            payload: Webhook envelope with the callback fields under 'data'

        Returns:
            Dictionary with 'action' and 'data' (session_id, amount)
        """
        pass

    def verify_payment(self, order_id: str) -> Dict[str, Any]:
        """
        Query the gateway for the state of a transaction.

        Raises:
            PaymentGatewayException: If verification fails
        """
        raise NotImplementedError("Verification not supported for this payment method")

    def _make_request(self, url: str, method: str = 'POST',
                      data: Optional[Dict[str, Any]] = None,
                      timeout: int = 30) -> Dict[str, Any]:
        """
        Make HTTP request to payment gateway API.

        Args:
            url: API URL
            method: HTTP method (GET, POST)
            data: Form fields or query parameters
            timeout: Request timeout in seconds

        Returns:
            API response as dictionary

        Raises:
            PaymentGatewayException: If request fails
        """
        try:
            if method.upper() == 'POST':
                response = requests.post(url, data=data, timeout=timeout)
            else:
                response = requests.get(url, params=data, timeout=timeout)

            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            raise PaymentGatewayException(
                f"Payment gateway request failed: {str(e)}",
                gateway_response={'error': str(e)}
            )
        except ValueError as e:
            raise PaymentGatewayException(
                f"Payment gateway returned invalid JSON: {str(e)}",
                gateway_response={'error': str(e)}
            )
