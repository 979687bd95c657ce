from ipay_africa.payments.callbacks import IPayCallback, UnrecognizedCallback, parse_callback
from ipay_africa.payments.statuses import STATUS_SUCCESS, WebhookAction


def test_parse_known_fields():
    callback = parse_callback({
        "id": "order_test_123",
        "status": STATUS_SUCCESS,
        "txncd": "test_txn_123",
        "mc": "100.00",
        "p1": "order_abc",
        "extra": "ignored",
    })

    assert isinstance(callback, IPayCallback)
    assert callback.session_id == "order_abc"
    assert callback.is_successful
    assert callback.action == WebhookAction.AUTHORIZED
    assert "extra" not in callback.to_dict()


def test_session_id_falls_back_to_oid():
    assert parse_callback({"oid": "order_1"}).session_id == "order_1"
    assert parse_callback({"status": "x"}).session_id == ""


def test_repeated_query_values_use_first():
    callback = parse_callback({"status": [STATUS_SUCCESS, "other"]})
    assert callback.status == STATUS_SUCCESS


def test_empty_and_unknown_payloads_are_unrecognized():
    for payload in (None, {}, {"invalid": "data"}, ["status"]):
        callback = parse_callback(payload)
        assert isinstance(callback, UnrecognizedCallback)
        assert callback.action == WebhookAction.NOT_SUPPORTED
        assert callback.session_id == ""
        assert not callback.is_successful


def test_unrecognized_keeps_raw_payload():
    assert parse_callback({"invalid": "data"}).to_dict() == {"invalid": "data"}
