import logging

import pytest

from ipay_africa import create_app
from ipay_africa.config import TestingConfig
from ipay_africa.payments.config import EnabledChannels, IPayOptions
from ipay_africa.payments.gateways import IPayGateway


@pytest.fixture
def options():
    return IPayOptions(
        vendor_id="test_vid",
        secret_key="test_hash_key",
        live_mode=False,
        callback_base_url="http://localhost:9000",
        enabled_channels=EnabledChannels(mpesa=True, airtel=True, creditcard=True, pesalink=True),
    )


@pytest.fixture
def gateway(options):
    return IPayGateway(options, logger=logging.getLogger("tests.ipay"))


@pytest.fixture
def app():
    return create_app(TestingConfig)


@pytest.fixture
def client(app):
    return app.test_client()
