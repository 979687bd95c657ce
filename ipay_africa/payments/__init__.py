"""
Payment System Package
All payment-related functionality is contained in this package.
"""

from flask import Blueprint

from .config import PaymentConfig
from .exceptions import PaymentGatewayNotConfiguredException

# Gateway callbacks live outside the storefront prefix
webhook_bp = Blueprint('ipay_webhooks', __name__, url_prefix='/webhooks')
payment_bp = Blueprint('payments', __name__, url_prefix='/payments')

# Import routes to register them with the blueprints
from . import routes  # noqa: E402,F401


def init_payment_system(app, options=None):
    """
    Initialize the payment system with the Flask app.

    Args:
        app: Flask application
        options: IPayOptions; built from app.config when omitted

    Raises:
        PaymentGatewayNotConfiguredException: If the iPay options are incomplete
    """
    from .gateways import get_gateway

    if options is None:
        options = PaymentConfig.get_gateway_config('ipay', app.config)

    gateway = get_gateway('ipay', options, logger=app.logger)
    app.extensions['ipay_gateway'] = gateway

    app.register_blueprint(webhook_bp)
    app.register_blueprint(payment_bp)

    app.logger.info(
        "iPay payments enabled: vid=%s live=%s callback=%s",
        options.vendor_id, options.live_mode, gateway.callback_url
    )
    return app


__all__ = [
    'webhook_bp',
    'payment_bp',
    'init_payment_system',
    'PaymentGatewayNotConfiguredException',
]
