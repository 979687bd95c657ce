import logging
from unittest.mock import Mock, patch

import pytest
import requests

from ipay_africa import create_app
from ipay_africa.config import TestingConfig
from ipay_africa.payments.config import IPayOptions
from ipay_africa.payments.exceptions import PaymentGatewayNotConfiguredException
from ipay_africa.payments.statuses import STATUS_FAILED, STATUS_PENDING, STATUS_SUCCESS

ACK = {"message": "Webhook processed successfully", "received": True}


class TestWebhookPost:

    @pytest.mark.parametrize("payload", [
        {"id": "order_test_123", "status": STATUS_SUCCESS, "txncd": "test_txn_123", "mc": "100.00"},
        {"id": "order_test_456", "status": STATUS_PENDING, "txncd": "test_txn_456", "mc": "50.00"},
        {"id": "order_test_789", "status": STATUS_FAILED, "txncd": "test_txn_789", "mc": "75.00"},
        {"invalid": "data"},
        {},
    ])
    def test_acknowledges(self, client, payload):
        response = client.post("/webhooks/ipay", json=payload)

        assert response.status_code == 200
        assert response.get_json() == ACK

    def test_form_encoded_body(self, client):
        response = client.post("/webhooks/ipay", data={"id": "order_1", "status": STATUS_SUCCESS, "mc": "10"})

        assert response.status_code == 200
        assert response.get_json() == ACK

    def test_success_translates_to_authorized(self, app, client):
        gateway = app.extensions["ipay_gateway"]
        with patch.object(gateway, "get_webhook_action_and_data", wraps=gateway.get_webhook_action_and_data) as translate:
            client.post("/webhooks/ipay", json={
                "id": "order_test_123", "status": STATUS_SUCCESS, "p1": "sess_1", "mc": "100.00"
            })

        envelope = translate.call_args.args[0]
        assert envelope["data"]["status"] == STATUS_SUCCESS
        assert gateway.get_webhook_action_and_data(envelope) == {
            "action": "authorized",
            "data": {"session_id": "sess_1", "amount": 10000},
        }

    def test_logs_summary_without_signature_fields(self, app, client, caplog):
        with caplog.at_level(logging.INFO):
            client.post("/webhooks/ipay", json={
                "id": "order_test_123", "status": STATUS_SUCCESS, "txncd": "T1", "mc": "1.00",
                "msisdn_idnum": "254700000000", "qwh": "sig-part-qwh",
            })

        assert "order_test_123" in caplog.text
        assert "sig-part-qwh" not in caplog.text
        assert "test_hash_key" not in caplog.text

    def test_unexpected_error_returns_500(self, app, client):
        app.extensions["ipay_gateway"] = Mock(
            get_webhook_action_and_data=Mock(side_effect=RuntimeError("boom"))
        )

        response = client.post("/webhooks/ipay", json={"status": STATUS_SUCCESS})

        assert response.status_code == 500
        assert response.get_json() == {"error": "Internal server error", "message": "boom"}

    def test_error_without_message(self, app, client):
        app.extensions["ipay_gateway"] = Mock(
            get_webhook_action_and_data=Mock(side_effect=RuntimeError())
        )

        response = client.post("/webhooks/ipay", json={})

        assert response.get_json()["message"] == "Unknown error"


class TestCallbackGet:

    def test_success_redirect(self, client):
        response = client.get("/webhooks/ipay", query_string={"id": "order_1", "status": STATUS_SUCCESS})

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/payment/success")

    def test_failed_redirect(self, client):
        response = client.get("/webhooks/ipay", query_string={"id": "order_1", "status": STATUS_FAILED})

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/payment/failed")

    def test_pending_redirects_to_failed(self, client):
        response = client.get("/webhooks/ipay", query_string={"status": STATUS_PENDING})
        assert response.headers["Location"].endswith("/payment/failed")

    def test_no_query_parameters(self, client):
        response = client.get("/webhooks/ipay")

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/payment/failed")

    def test_redirect_ignores_amount_errors(self, client):
        response = client.get("/webhooks/ipay", query_string={"status": STATUS_SUCCESS, "mc": "bad"})
        assert response.headers["Location"].endswith("/payment/success")

    def test_unexpected_error_returns_500(self, app, client):
        app.extensions["ipay_gateway"] = Mock(
            get_webhook_action_and_data=Mock(side_effect=ValueError("bad callback"))
        )

        response = client.get("/webhooks/ipay", query_string={"status": STATUS_SUCCESS})

        assert response.status_code == 500
        assert response.get_json() == {"error": "Internal server error", "message": "bad callback"}


class TestPaymentApi:

    def test_initiate(self, client):
        response = client.post("/payments/ipay/initiate", json={
            "amount": 10000,
            "currency_code": "kes",
            "context": {"customer": {"email": "a@example.com"}, "order": {"id": "order_9"}},
        })

        body = response.get_json()
        assert response.status_code == 200
        assert body["success"] is True
        payment_data = body["data"]["payment_data"]
        assert payment_data["ttl"] == "100"
        assert payment_data["curr"] == "KES"
        assert payment_data["p1"] == "order_9"
        assert len(payment_data["hsh"]) == 40

    def test_initiate_missing_fields(self, client):
        response = client.post("/payments/ipay/initiate", json={"amount": 100})

        assert response.status_code == 400
        assert response.get_json()["required"] == ["amount", "currency_code"]

    @pytest.mark.parametrize("amount", ["abc", -5])
    def test_initiate_invalid_amount(self, client, amount):
        response = client.post("/payments/ipay/initiate", json={"amount": amount, "currency_code": "KES"})

        assert response.status_code == 400
        assert response.get_json()["success"] is False

    def test_methods(self, client):
        body = client.get("/payments/ipay/methods").get_json()
        codes = {method["code"]: method for method in body["methods"]}

        assert set(codes) == {"mpesa", "airtel", "creditcard", "pesalink"}
        assert codes["mpesa"]["name"] == "M-PESA"
        assert codes["mpesa"]["enabled"] is True

    def test_config_hides_hash_key(self, client):
        response = client.get("/payments/ipay/config")
        body = response.get_json()

        assert response.status_code == 200
        assert body["config"]["vid"] == "test_vid"
        assert body["config"]["hash_key_configured"] is True
        assert body["config"]["callback_url"] == "http://localhost:9000/webhooks/ipay"
        assert "test_hash_key" not in response.get_data(as_text=True)

    def test_verify(self, app, client):
        gateway = app.extensions["ipay_gateway"]
        with patch.object(gateway, "verify_payment", return_value={"success": True, "action": "authorized"}):
            response = client.get("/payments/ipay/verify/order_1")

        assert response.status_code == 200
        assert response.get_json()["action"] == "authorized"

    def test_verify_gateway_failure(self, client):
        with patch(
            "ipay_africa.payments.gateways.base.requests.post",
            side_effect=requests.exceptions.Timeout("timed out"),
        ):
            response = client.get("/payments/ipay/verify/order_1")

        assert response.status_code == 502
        assert response.get_json()["success"] is False


class TestAppFactory:

    def test_explicit_options_override_config(self):
        app = create_app(TestingConfig, options=IPayOptions(vendor_id="injected", secret_key="k"))
        assert app.extensions["ipay_gateway"].options.vendor_id == "injected"

    def test_missing_credentials_are_fatal(self):
        class BrokenConfig(TestingConfig):
            IPAY_HASH_KEY = ""

        with pytest.raises(PaymentGatewayNotConfiguredException, match="iPay hash key is required"):
            create_app(BrokenConfig)

    def test_timeout_setting_reaches_gateway(self):
        class SlowGatewayConfig(TestingConfig):
            IPAY_REQUEST_TIMEOUT = 5

        app = create_app(SlowGatewayConfig)
        assert app.extensions["ipay_gateway"].options.request_timeout == 5

    def test_log_level_is_case_insensitive(self):
        class LowercaseLogConfig(TestingConfig):
            LOG_LEVEL = "debug"

        app = create_app(LowercaseLogConfig)
        assert app.logger.level == logging.DEBUG
