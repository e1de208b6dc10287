"""
Unit tests for MtnMomoClient
"""

import re
import uuid

import pytest
import requests
from requests_mock import Mocker

from mtn_momo import AuthError, MtnMomoClient, NetworkError, ServiceUnavailableError
from mtn_momo.exceptions import TimeoutError as MomoTimeoutError

BASE = "https://sandbox.momodeveloper.mtn.com"
TRANSFER = {
    "amount": "500",
    "currency": "RWF",
    "externalId": "tx1",
    "payee": {"partyIdType": "MSISDN", "partyId": "250788123456"},
}


@pytest.fixture
def sync_client():
    """Sandbox disbursement credentials"""
    client = MtnMomoClient(
        {
            "environment": "sandbox",
            "product": "disbursement",
            "subscriptionKey": "k",
            "apiUser": "u",
            "apiKey": "p",
        }
    )
    yield client
    client.close()


def any_reference(prefix):
    return re.compile(re.escape(prefix) + r"[0-9a-f-]+$")


def mock_token(m, product="disbursement", **kwargs):
    kwargs.setdefault("json", {"access_token": "tok_123", "expires_in": 3600})
    m.post(f"{BASE}/{product}/token/", **kwargs)


def test_transfer_success(sync_client):
    with Mocker() as m:
        mock_token(m)
        m.post(f"{BASE}/disbursement/v1_0/transfer", status_code=202, text="")

        reference_id = sync_client.transfer(TRANSFER)

        assert str(uuid.UUID(reference_id)) == reference_id
        last_request = m.last_request
        assert last_request.headers["X-Reference-Id"] == reference_id
        assert last_request.headers["Authorization"] == "Bearer tok_123"
        assert last_request.headers["Ocp-Apim-Subscription-Key"] == "k"
        assert last_request.headers["X-Target-Environment"] == "sandbox"
        assert last_request.json() == TRANSFER
        assert last_request.timeout == 20

        token_request = m.request_history[0]
        assert token_request.headers["Authorization"] == "Basic dTpw"
        assert token_request.timeout == 10


def test_transfer_server_error_includes_reference_id(sync_client):
    with Mocker() as m:
        mock_token(m)
        m.post(f"{BASE}/disbursement/v1_0/transfer", status_code=500, text="")

        with pytest.raises(ServiceUnavailableError) as exc_info:
            sync_client.transfer(TRANSFER)

        sent_reference_id = m.last_request.headers["X-Reference-Id"]
        assert "reference ID" in str(exc_info.value)
        assert sent_reference_id in str(exc_info.value)


def test_invalid_credentials(sync_client):
    with Mocker() as m:
        mock_token(m, status_code=401, json={"error": "login_failed"})

        with pytest.raises(AuthError) as exc_info:
            sync_client.get_access_token()

        assert "dTpw" not in str(exc_info.value)


def test_transaction_status(sync_client):
    with Mocker() as m:
        mock_token(m)
        m.get(
            f"{BASE}/disbursement/v1_0/transfer/ref-1",
            json={"status": "PENDING", "externalId": "tx1"},
        )

        status = sync_client.get_transaction_status("ref-1")

        assert status == {"status": "PENDING", "externalId": "tx1"}


def test_request_to_pay_and_status_for_collection():
    client = MtnMomoClient(
        {
            "product": "collection",
            "subscriptionKey": "k",
            "apiUser": "u",
            "apiKey": "p",
        }
    )
    with Mocker() as m:
        mock_token(m, product="collection")
        m.post(f"{BASE}/collection/v1_0/requesttopay", status_code=202)
        m.get(
            any_reference(f"{BASE}/collection/v1_0/requesttopay/"),
            json={"status": "SUCCESSFUL"},
        )

        reference_id = client.request_to_pay(
            {
                "amount": "100",
                "currency": "EUR",
                "externalId": "inv-1",
                "payer": {"partyId": "46733123453"},
            }
        )
        status = client.get_transaction_status(reference_id)

        assert status["status"] == "SUCCESSFUL"
        assert m.last_request.path == f"/collection/v1_0/requesttopay/{reference_id}"


def test_balance_and_validation(sync_client):
    with Mocker() as m:
        mock_token(m)
        m.get(
            f"{BASE}/disbursement/v1_0/account/balance",
            json={"availableBalance": "250", "currency": "RWF"},
        )
        m.get(
            f"{BASE}/disbursement/v1_0/accountholder/msisdn/250788123456/active",
            json={"result": False},
        )

        assert sync_client.get_account_balance()["availableBalance"] == "250"
        assert sync_client.validate_account_holder("250788123456") == {"result": False}


def test_timeout_translated(sync_client):
    with Mocker() as m:
        mock_token(m)
        m.get(f"{BASE}/disbursement/v1_0/account/balance", exc=requests.exceptions.ReadTimeout)

        with pytest.raises(MomoTimeoutError) as exc_info:
            sync_client.get_account_balance()

        assert exc_info.value.reference_id is None
        assert "timed out after 10s" in str(exc_info.value)


def test_connection_error_translated(sync_client):
    with Mocker() as m:
        m.post(f"{BASE}/disbursement/token/", exc=requests.exceptions.ConnectionError)

        with pytest.raises(NetworkError):
            sync_client.get_access_token()
