"""
Payment Routes
iPay callback endpoints and storefront payment API.
"""

from flask import request, jsonify, current_app, redirect

from ipay_africa.payments import payment_bp, webhook_bp
from ipay_africa.payments.callbacks import parse_callback
from ipay_africa.payments.config import PaymentConfig, CHANNEL_DISPLAY_NAMES
from ipay_africa.payments.exceptions import (
    PaymentException,
    PaymentGatewayException,
    PaymentValidationException,
)
from ipay_africa.payments.statuses import describe_status
from ipay_africa.payments.utils import format_payment_response, utc_timestamp


def _gateway():
    return current_app.extensions['ipay_gateway']


def _error_response(e: Exception):
    return jsonify({
        'error': 'Internal server error',
        'message': str(e) or 'Unknown error'
    }), 500


def _log_callback(kind: str, callback):
    # identifiers only; the signature fields are never logged
    current_app.logger.info(
        "iPay %s received: %s",
        kind,
        {
            'id': callback.id,
            'status': callback.status,
            'txncd': callback.txncd,
            'mc': callback.mc,
            'timestamp': utc_timestamp(),
        }
    )


def _process_callback(kind: str, payload):
    callback = parse_callback(payload)
    _log_callback(kind, callback)

    result = _gateway().get_webhook_action_and_data({
        'data': callback.to_dict(),
        'headers': dict(request.headers),
    })

    current_app.logger.info(
        "Payment %s %s (%s): action=%s",
        callback.id, describe_status(callback.status), callback.status, result['action']
    )
    return callback, result


@webhook_bp.route('/ipay', methods=['POST'])
def ipay_webhook():
    """
    Server-to-server callback from iPay.

    Accepts JSON or form-encoded bodies.
    """
    try:
        payload = request.get_json(silent=True)
        if payload is None:
            payload = request.form.to_dict()

        _process_callback('webhook', payload)

        return jsonify({
            'message': 'Webhook processed successfully',
            'received': True
        }), 200

    except Exception as e:
        current_app.logger.error(f"Error processing iPay webhook: {str(e)}")
        return _error_response(e)


@webhook_bp.route('/ipay', methods=['GET'])
def ipay_callback():
    """
    Browser redirect back from the iPay hosted page.

    Sends the shopper to the success page only for the success status.
    """
    try:
        callback, _ = _process_callback('GET callback', request.args.to_dict())

        if callback.is_successful:
            target = current_app.config.get('PAYMENT_SUCCESS_URL') or PaymentConfig.PAYMENT_SUCCESS_URL
        else:
            target = current_app.config.get('PAYMENT_FAILURE_URL') or PaymentConfig.PAYMENT_FAILURE_URL

        return redirect(target)

    except Exception as e:
        current_app.logger.error(f"Error processing iPay GET callback: {str(e)}")
        return _error_response(e)


@payment_bp.route('/ipay/initiate', methods=['POST'])
def initiate_payment():
    """
    Build a signed iPay checkout request.

    Expected JSON payload:
    {
        "amount": 10000,
        "currency_code": "KES",
        "context": {
            "customer": {"email": "customer@example.com", "phone": "+254700000000", "id": "cus_1"},
            "order": {"id": "order_123"}
        }
    }
    """
    try:
        data = request.get_json(silent=True) or {}

        required_fields = ['amount', 'currency_code']
        if not all(data.get(field) not in (None, '') for field in required_fields):
            return jsonify(format_payment_response(
                success=False,
                message='Missing required fields',
                data={'required': required_fields}
            )), 400

        try:
            amount = int(data['amount'])
        except (TypeError, ValueError):
            raise PaymentValidationException(f"Invalid payment amount: {data['amount']}")
        if amount <= 0:
            raise PaymentValidationException(f"Invalid payment amount: {data['amount']}")

        result = _gateway().initiate_payment(
            amount=amount,
            currency_code=str(data['currency_code']),
            context=data.get('context') or {}
        )

        return jsonify(format_payment_response(
            success=True,
            message='Payment initiated successfully',
            data=result
        )), 200

    except PaymentValidationException as e:
        return jsonify(format_payment_response(
            success=False,
            message=str(e)
        )), 400
    except PaymentException as e:
        return jsonify(format_payment_response(
            success=False,
            message=str(e)
        )), 500
    except Exception as e:
        current_app.logger.error(f"Error in initiate_payment: {str(e)}")
        return jsonify(format_payment_response(
            success=False,
            message='An error occurred while initiating payment'
        )), 500


@payment_bp.route('/ipay/verify/<order_id>', methods=['GET'])
def verify_payment(order_id):
    """
    Poll iPay for the state of a checkout.
    """
    try:
        result = _gateway().verify_payment(order_id)
        return jsonify(format_payment_response(
            success=True,
            message='Payment status retrieved successfully',
            data=result
        )), 200

    except PaymentGatewayException as e:
        current_app.logger.error(f"Error verifying iPay payment {order_id}: {str(e)}")
        return jsonify(format_payment_response(
            success=False,
            message=str(e)
        )), 502
    except Exception as e:
        current_app.logger.error(f"Error in verify_payment: {str(e)}")
        return jsonify(format_payment_response(
            success=False,
            message='An error occurred while verifying payment'
        )), 500


@payment_bp.route('/ipay/methods', methods=['GET'])
def get_payment_methods():
    """
    Get list of checkout channels.
    """
    channels = _gateway().options.enabled_channels.to_dict()

    methods = []
    for code, enabled in channels.items():
        methods.append({
            'code': code,
            'name': CHANNEL_DISPLAY_NAMES.get(code, code.upper()),
            'enabled': enabled
        })

    return jsonify(format_payment_response(
        success=True,
        message='Payment methods retrieved successfully',
        data={'methods': methods}
    )), 200


@payment_bp.route('/ipay/config', methods=['GET'])
def get_payment_config():
    """
    Non-sensitive view of the iPay configuration. The hash key is never returned.
    """
    gateway = _gateway()
    options = gateway.options

    return jsonify(format_payment_response(
        success=True,
        message='Payment configuration retrieved successfully',
        data={
            'config': {
                'vid': options.vendor_id,
                'live': options.live_mode,
                'hash_key_configured': PaymentConfig.is_gateway_enabled(options),
                'callback_url': gateway.callback_url,
                'gateway_url': gateway.gateway_url,
                'enabled_channels': options.enabled_channels.to_dict(),
            }
        }
    )), 200
