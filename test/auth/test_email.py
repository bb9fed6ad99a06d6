import asyncio

import aiohttp
import pytest
from auth.email import (
    SEND_URL,
    EmailDeliveryError,
    VerificationEmailSender,
    compose_verification_email,
)


class FakeResponse:
    def __init__(self, status: int, body: str = "", headers: dict | None = None):
        self.status = status
        self.body = body
        self.headers = headers or {}

    async def text(self):
        return self.body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeClient:
    """Stands in for aiohttp.ClientSession.post"""

    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.closed = False
        self.calls = []

    def post(self, url, json=None, headers=None):
        self.calls.append({"url": url, "json": json, "headers": headers})
        if self.error:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True


def make_sender(client, api_key="SG.test-key"):
    return VerificationEmailSender(
        api_key=api_key,
        from_email="menu@example.com",
        from_name="Digital Menu",
        ttl_minutes=10,
        client=client,
    )


def test_compose_mentions_code_and_ttl():
    subject, html = compose_verification_email("123456", 10)

    assert subject == "Your Verification Code"
    assert "123456" in html
    assert "10 minutes" in html


def test_payload_has_text_and_html_parts():
    payload = make_sender(None).build_payload("owner@example.com", "654321")

    assert payload["personalizations"] == [{"to": [{"email": "owner@example.com"}]}]
    assert payload["from"] == {"email": "menu@example.com", "name": "Digital Menu"}
    types = [part["type"] for part in payload["content"]]
    assert types == ["text/plain", "text/html"]
    plain = payload["content"][0]["value"]
    assert "654321" in plain
    assert "<" not in plain


@pytest.mark.asyncio
async def test_dev_mode_does_not_send(caplog):
    client = FakeClient(FakeResponse(202))
    sender = make_sender(client, api_key="")

    with caplog.at_level("INFO", logger="menu.auth.email"):
        await sender.send_verification_code("owner@example.com", "111222")

    assert client.calls == []
    assert "111222" in caplog.text


@pytest.mark.asyncio
async def test_accepted_message():
    client = FakeClient(FakeResponse(202, headers={"X-Message-Id": "abc"}))
    sender = make_sender(client)

    await sender.send_verification_code("owner@example.com", "111222")

    assert len(client.calls) == 1
    call = client.calls[0]
    assert call["url"] == SEND_URL
    assert call["headers"]["Authorization"] == "Bearer SG.test-key"


@pytest.mark.asyncio
async def test_rejected_message_raises():
    sender = make_sender(FakeClient(FakeResponse(401, body="unauthorized")))

    with pytest.raises(EmailDeliveryError, match="401"):
        await sender.send_verification_code("owner@example.com", "111222")


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [aiohttp.ClientConnectionError("boom"), asyncio.TimeoutError()])
async def test_transport_failures_raise(error):
    sender = make_sender(FakeClient(error=error))

    with pytest.raises(EmailDeliveryError):
        await sender.send_verification_code("owner@example.com", "111222")


@pytest.mark.asyncio
async def test_close_closes_client():
    client = FakeClient(FakeResponse(202))
    sender = make_sender(client)

    await sender.close()

    assert client.closed
