"""
End-to-end tests against a local mock MoMo server

Exercises the real aiohttp transport: headers on the wire, empty 202
bodies, error translation and timeouts.
"""

import asyncio
import base64
import uuid

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from mtn_momo import ClientConfig, MtnMomoApiClient, ServiceUnavailableError
from mtn_momo.exceptions import TimeoutError as MomoTimeoutError

CREDENTIALS = {
    "environment": "sandbox",
    "product": "disbursement",
    "subscriptionKey": "k",
    "apiUser": "u",
    "apiKey": "p",
}

TRANSFER = {
    "amount": "500",
    "currency": "RWF",
    "externalId": "tx1",
    "payee": {"partyIdType": "MSISDN", "partyId": "250788123456"},
}


def make_app(received, transfer_status=202, transfer_delay=0.0, transfer_body=None):
    async def token(request):
        received.append(("token", dict(request.headers), None))
        expected = "Basic " + base64.b64encode(b"u:p").decode()
        if request.headers.get("Authorization") != expected:
            return web.json_response({"error": "login_failed"}, status=401)
        return web.json_response({"access_token": "tok_abc", "expires_in": 3600})

    async def transfer(request):
        received.append(("transfer", dict(request.headers), await request.json()))
        if transfer_delay:
            await asyncio.sleep(transfer_delay)
        return web.Response(
            status=transfer_status, body=transfer_body, content_type="text/html", charset="utf-8"
        )

    async def status(request):
        received.append(("status", dict(request.headers), None))
        return web.json_response(
            {"status": "SUCCESSFUL", "externalId": "tx1", "financialTransactionId": "42"}
        )

    app = web.Application()
    app.router.add_post("/disbursement/token/", token)
    app.router.add_post("/disbursement/v1_0/transfer", transfer)
    app.router.add_get("/disbursement/v1_0/transfer/{reference_id}", status)
    return app


async def run_against(app, coro_factory, config_kwargs=None):
    server = TestServer(app)
    await server.start_server()
    try:
        config = ClientConfig(base_url=str(server.make_url("")), **(config_kwargs or {}))
        async with MtnMomoApiClient(CREDENTIALS, config) as client:
            return await coro_factory(client)
    finally:
        await server.close()


@pytest.mark.asyncio
async def test_transfer_accepted():
    received = []

    reference_id = await run_against(make_app(received), lambda c: c.transfer(TRANSFER))

    assert str(uuid.UUID(reference_id)) == reference_id
    name, headers, body = received[-1]
    assert name == "transfer"
    assert headers["X-Reference-Id"] == reference_id
    assert headers["Authorization"] == "Bearer tok_abc"
    assert headers["Ocp-Apim-Subscription-Key"] == "k"
    assert headers["X-Target-Environment"] == "sandbox"
    assert body == TRANSFER


@pytest.mark.asyncio
async def test_transfer_server_error_reports_reference_id():
    received = []

    with pytest.raises(ServiceUnavailableError) as exc_info:
        await run_against(
            make_app(received, transfer_status=500), lambda c: c.transfer(TRANSFER)
        )

    sent_reference_id = received[-1][1]["X-Reference-Id"]
    assert "reference ID" in str(exc_info.value)
    assert sent_reference_id in str(exc_info.value)


@pytest.mark.asyncio
async def test_transfer_then_status():
    received = []

    async def flow(client):
        reference_id = await client.transfer(TRANSFER)
        return reference_id, await client.get_transaction_status(reference_id)

    reference_id, status = await run_against(make_app(received), flow)

    assert status["status"] == "SUCCESSFUL"
    assert [name for name, _, _ in received] == ["token", "transfer", "token", "status"]


@pytest.mark.asyncio
async def test_transfer_timeout():
    received = []

    with pytest.raises(MomoTimeoutError) as exc_info:
        await run_against(
            make_app(received, transfer_delay=0.6),
            lambda c: c.transfer(TRANSFER),
            config_kwargs={"payment_timeout": 0.2},
        )

    assert exc_info.value.reference_id == received[-1][1]["X-Reference-Id"]


@pytest.mark.asyncio
async def test_transfer_server_error_with_undecodable_body():
    received = []

    with pytest.raises(ServiceUnavailableError) as exc_info:
        await run_against(
            make_app(received, transfer_status=500, transfer_body=b"\xff\xfe gateway error"),
            lambda c: c.transfer(TRANSFER),
        )

    sent_reference_id = received[-1][1]["X-Reference-Id"]
    assert exc_info.value.reference_id == sent_reference_id
    assert sent_reference_id in str(exc_info.value)
    assert "gateway error" in exc_info.value.body["raw"]
