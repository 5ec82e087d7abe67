import json

import httpx
import pytest

from madarik_identity.adapter.services.resend_mail_transport import ResendMailTransport


def make_transport(handler, api_key="re_test", from_email="noreply@madarik.com"):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ResendMailTransport(
        api_key=api_key,
        from_email=from_email,
        from_name="Madarik",
        client=client,
    )


@pytest.mark.asyncio
async def test_posts_message_to_resend():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "email_123"})

    transport = make_transport(handler)

    result = await transport.send_email("a@x.com", "Hello", "<p>Hi</p>", "Hi")

    assert result.is_ok()
    assert captured["auth"] == "Bearer re_test"
    assert captured["body"] == {
        "from": "Madarik <noreply@madarik.com>",
        "to": ["a@x.com"],
        "subject": "Hello",
        "html": "<p>Hi</p>",
        "text": "Hi",
    }


@pytest.mark.asyncio
async def test_provider_rejection_is_returned_as_error():
    transport = make_transport(lambda request: httpx.Response(422, json={"message": "bad"}))

    result = await transport.send_email("a@x.com", "Hello", "<p>Hi</p>")

    assert result.is_err()
    assert result.error.code == "MAIL_DELIVERY_FAILED"


@pytest.mark.asyncio
async def test_network_failure_is_returned_as_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = await make_transport(handler).send_email("a@x.com", "Hello", "<p>Hi</p>")

    assert result.is_err()
    assert result.error.code == "MAIL_DELIVERY_FAILED"


@pytest.mark.asyncio
async def test_unconfigured_transport_skips_sending():
    def handler(request):
        raise AssertionError("should not be called")

    transport = make_transport(handler, api_key="")

    result = await transport.send_email("a@x.com", "Hello", "<p>Hi</p>")

    assert result.is_ok()
    assert transport.is_configured is False
