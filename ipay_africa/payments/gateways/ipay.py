"""
iPay Africa Payment Gateway Integration
Hosted checkout with M-PESA, Airtel Money, card and PesaLink channels.
"""

from typing import Dict, Any, Optional

from .base import BasePaymentGateway
from ipay_africa.payments.callbacks import IPayCallback, parse_callback
from ipay_africa.payments.config import PaymentConfig, IPayOptions
from ipay_africa.payments.exceptions import (
    PaymentGatewayException,
    PaymentGatewayNotConfiguredException,
)
from ipay_africa.payments.statuses import (
    WebhookAction,
    describe_status,
    is_known_status,
    map_status,
    parse_amount,
)
from ipay_africa.payments.utils import (
    format_major_amount,
    generate_invoice_id,
    generate_order_id,
    mask_payment_reference,
    sign_payment_data,
    sign_search_request,
    utc_timestamp,
)


class IPayGateway(BasePaymentGateway):
    """iPay Africa payment gateway implementation."""

    identifier = 'ipay'

    options: IPayOptions

    @staticmethod
    def validate_options(options) -> None:
        if options is None or not getattr(options, 'vendor_id', None):
            raise PaymentGatewayNotConfiguredException("iPay VID is required")
        if not getattr(options, 'secret_key', None):
            raise PaymentGatewayNotConfiguredException("iPay hash key is required")

    @property
    def gateway_url(self) -> str:
        return PaymentConfig.IPAY_GATEWAY_URL

    @property
    def callback_url(self) -> str:
        return f"{self.options.callback_base_url.rstrip('/')}{PaymentConfig.WEBHOOK_PATH}"

    def build_payment_request(self, amount: int, currency_code: str,
                              customer: Optional[Dict[str, Any]] = None,
                              order_ref: Optional[str] = None) -> Dict[str, Any]:
        """
        Assemble and sign the hosted checkout form fields.

        Args:
            amount: Amount in minor units
            currency_code: ISO currency code
            customer: Customer contact details (email, phone, id)
            order_ref: Host order reference, echoed back as p1

        Returns:
            Checkout fields including the 'hsh' signature
        """
        customer = customer or {}
        order_id = generate_order_id()
        mode = '1' if self.options.live_mode else '0'

        payment_data = {
            'oid': order_id,
            'inv': generate_invoice_id(order_id),
            'ttl': format_major_amount(amount),
            'tel': customer.get('phone') or '',
            'eml': customer.get('email') or '',
            'vid': self.options.vendor_id,
            'curr': currency_code.upper(),
            'p1': order_ref or '',
            'p2': customer.get('id') or '',
            'p3': '',
            'p4': '',
            'cbk': self.callback_url,
            'cst': mode,
            'crl': '1',
            'live': mode,
            'hsh': '',
        }
        payment_data['hsh'] = sign_payment_data(payment_data, self.options.secret_key)
        return payment_data

    def initiate_payment(self, amount: int, currency_code: str,
                         context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Start an iPay hosted checkout.

        Returns:
            {'data': {id, payment_data, gateway_url, status, amount, currency_code, channels}}
        """
        context = context or {}
        customer = context.get('customer') or {}
        order = context.get('order') or {}

        payment_data = self.build_payment_request(
            amount=amount,
            currency_code=currency_code,
            customer=customer,
            order_ref=order.get('id'),
        )

        self.logger.info(
            "iPay checkout initiated: oid=%s amount=%s %s live=%s",
            payment_data['oid'], payment_data['ttl'], payment_data['curr'], payment_data['live']
        )

        return {
            'data': {
                'id': payment_data['oid'],
                'payment_data': payment_data,
                'gateway_url': self.gateway_url,
                'status': 'pending',
                'amount': amount,
                'currency_code': currency_code,
                'channels': self.options.enabled_channels.to_dict(),
            }
        }

    def _tag(self, data: Optional[Dict[str, Any]], status: str) -> Dict[str, Any]:
        return {**(data or {}), 'status': status, f'{status}_at': utc_timestamp()}

    def authorize_payment(self, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return {
            'status': 'authorized',
            'data': self._tag(data, 'authorized'),
        }

    def capture_payment(self, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return {'data': self._tag(data, 'captured')}

    def cancel_payment(self, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return {'data': self._tag(data, 'cancelled')}

    def refund_payment(self, data: Optional[Dict[str, Any]], amount: Any) -> Dict[str, Any]:
        """
        Record a refund request on the session data.

        iPay has no refund API; refunds are settled from the merchant
        dashboard, so this only flags the request for the host.
        """
        data = data or {}
        self.logger.info("Refund requested for payment %s: %s", data.get('id'), amount)

        return {
            'data': {
                **data,
                'refund_requested': True,
                'refund_amount': amount,
                'refund_requested_at': utc_timestamp(),
            }
        }

    def retrieve_payment(self, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return data or {}

    def update_payment(self, data: Optional[Dict[str, Any]], amount: Any,
                       currency_code: Optional[str]) -> Dict[str, Any]:
        data = data or {}
        previous = data.get('amount')
        if previous and previous != amount:
            self.logger.info("Payment amount updated from %s to %s", previous, amount)

        return {
            **data,
            'amount': amount,
            'currency_code': currency_code,
            'updated_at': utc_timestamp(),
        }

    def delete_payment(self, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return {'data': data}

    def get_payment_status(self, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return {'status': (data or {}).get('status') or 'pending'}

    def get_webhook_action_and_data(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Translate an iPay callback into a host webhook action.

        Never raises: any error is logged and reported as a failed action.

        Args:
            payload: Webhook envelope, callback fields under 'data'

        Returns:
            {'action': ..., 'data': {'session_id': ..., 'amount': ...}}
        """
        try:
            callback = parse_callback(payload.get('data'))
            action = callback.action

            # unknown codes carry no amount
            amount = 0
            if isinstance(callback, IPayCallback) and is_known_status(callback.status):
                amount = parse_amount(callback.to_dict())

            self.logger.info(
                "iPay webhook %s (%s) for session %s -> %s",
                mask_payment_reference(callback.id), describe_status(callback.status),
                callback.session_id, action.value
            )

            return {
                'action': action.value,
                'data': {
                    'session_id': callback.session_id,
                    'amount': amount,
                }
            }
        except Exception as e:
            self.logger.error("Error processing iPay webhook: %s", e)
            # error results never carry a session id
            return {
                'action': WebhookAction.FAILED.value,
                'data': {
                    'session_id': '',
                    'amount': 0,
                }
            }

    def verify_payment(self, order_id: str) -> Dict[str, Any]:
        """
        Poll the iPay transaction search API for an order.

        Args:
            order_id: The oid sent at checkout

        Returns:
            Verification result with the mapped action

        Raises:
            PaymentGatewayException: If the search request fails
        """
        request_data = {
            'oid': order_id,
            'vid': self.options.vendor_id,
            'hash': sign_search_request(order_id, self.options.vendor_id, self.options.secret_key),
        }

        response = self._make_request(
            PaymentConfig.IPAY_TRANSACTION_SEARCH_URL, 'POST', request_data,
            timeout=self.options.request_timeout
        )

        if response.get('header_status') not in (None, 200, '200'):
            raise PaymentGatewayException(
                f"iPay transaction search failed: {response.get('error') or response.get('header_status')}",
                gateway_response=response
            )

        transaction = response.get('data') or {}
        status = transaction.get('status')
        action = map_status(status)

        return {
            'success': action == WebhookAction.AUTHORIZED,
            'action': action.value,
            'status': status,
            'order_id': order_id,
            'transaction_code': transaction.get('transaction_code'),
            'amount': transaction.get('transaction_amount'),
            'payment_mode': transaction.get('payment_mode'),
            'paid_at': transaction.get('paid_at'),
        }
