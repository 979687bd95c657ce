import logging

from flask import Flask

from .config import Config
from .payments import init_payment_system


def create_app(config_class: type[Config] | None = None, options=None):
    """
    Application factory.

    Args:
        config_class: Flask config class (defaults to Config)
        options: Explicit IPayOptions, overriding the IPAY_* settings
    """
    app = Flask(__name__)

    config_obj = config_class or Config
    app.config.from_object(config_obj)

    log_level = app.config.get("LOG_LEVEL") or logging.INFO
    if isinstance(log_level, str):
        log_level = log_level.strip().upper()
    app.logger.setLevel(log_level)
    logging.getLogger("werkzeug").setLevel(log_level)

    init_payment_system(app, options=options)

    return app
