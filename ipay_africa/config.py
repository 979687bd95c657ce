import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base Flask configuration shared across environments."""

    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-key-change-this-in-production"

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Timeout in seconds for calls to the iPay transaction search API
    IPAY_REQUEST_TIMEOUT = int(os.environ.get("IPAY_REQUEST_TIMEOUT", 30))

    # Public URL of this backend; iPay calls back on BACKEND_URL + /webhooks/ipay
    BACKEND_URL = os.environ.get("BACKEND_URL", "http://localhost:9000")

    # iPay credentials. The defaults are the public demo account and must be
    # replaced in production.
    IPAY_VID = os.environ.get("IPAY_VID", "demo")
    IPAY_HASH_KEY = os.environ.get("IPAY_HASH_KEY", "demoCHANGED")
    IPAY_LIVE = os.environ.get("IPAY_LIVE", "false").lower() == "true"

    IPAY_CHANNEL_MPESA = os.environ.get("IPAY_CHANNEL_MPESA", "true")
    IPAY_CHANNEL_AIRTEL = os.environ.get("IPAY_CHANNEL_AIRTEL", "true")
    IPAY_CHANNEL_CREDITCARD = os.environ.get("IPAY_CHANNEL_CREDITCARD", "true")
    IPAY_CHANNEL_PESALINK = os.environ.get("IPAY_CHANNEL_PESALINK", "true")

    # Where the shopper lands after the GET callback
    PAYMENT_SUCCESS_URL = os.environ.get("PAYMENT_SUCCESS_URL", "/payment/success")
    PAYMENT_FAILURE_URL = os.environ.get("PAYMENT_FAILURE_URL", "/payment/failed")


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    BACKEND_URL = "http://localhost:9000"
    IPAY_VID = "test_vid"
    IPAY_HASH_KEY = "test_hash_key"
    IPAY_LIVE = False
    LOG_LEVEL = "DEBUG"
