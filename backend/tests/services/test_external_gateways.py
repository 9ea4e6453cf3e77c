"""External gateways — Stripe error mapping and AI provider short-circuits.

Invariants:
    - stripe.InvalidRequestError → PaymentProviderError 400; other StripeError → 502
    - A provider without an API key returns None without building a client
    - Signed-but-garbled webhook bodies → 400 "Invalid payload"
"""

import pytest
import stripe

from app.core.ai_messages import ProviderConfig
from app.core.errors import PaymentProviderError, RequestRejectedError
from app.infrastructure.ai_providers import AIProviders
from app.infrastructure.stripe_gateway import StripeGateway
from tests.services.fakes import WEBHOOK_SECRET, sign_payload


@pytest.fixture
def gateway():
    return StripeGateway("sk_test_fake", "2024-12-18.acacia", WEBHOOK_SECRET)


async def test_invalid_request_maps_to_400(gateway, monkeypatch):
    def fail(**kwargs):
        raise stripe.InvalidRequestError("No such price", "price")

    monkeypatch.setattr(stripe.checkout.Session, "create", fail)

    with pytest.raises(PaymentProviderError) as exc:
        await gateway.create_checkout_session({"mode": "payment"})
    assert exc.value.http_status == 400


async def test_api_error_maps_to_502(gateway, monkeypatch):
    def fail(**kwargs):
        raise stripe.APIConnectionError("network down")

    monkeypatch.setattr(stripe.Customer, "create", fail)

    with pytest.raises(PaymentProviderError) as exc:
        await gateway.create_customer("a@example.com", "u1")
    assert exc.value.http_status == 502
    assert exc.value.context.provider == "stripe"


async def test_calls_pass_credentials_explicitly(gateway, monkeypatch):
    seen = {}

    class _Session:
        id = "cs_1"
        url = "https://checkout.stripe.test/cs_1"

    def create(**kwargs):
        seen.update(kwargs)
        return _Session()

    monkeypatch.setattr(stripe.checkout.Session, "create", create)

    assert await gateway.create_checkout_session({"mode": "payment"}) == (
        "cs_1", "https://checkout.stripe.test/cs_1",
    )
    assert seen["api_key"] == "sk_test_fake"
    assert seen["stripe_version"] == "2024-12-18.acacia"


def test_construct_event_rejects_garbled_body(gateway):
    payload = b"not json"
    with pytest.raises(RequestRejectedError):
        gateway.construct_event(payload, sign_payload(payload))


def test_construct_event_decodes_signed_body(gateway):
    payload = b'{"id": "evt_1", "type": "invoice.payment_failed"}'
    event = gateway.construct_event(payload, sign_payload(payload))
    assert event["type"] == "invoice.payment_failed"


async def test_providers_skip_without_key():
    providers = AIProviders()
    config = ProviderConfig(api_key=None, model="any")

    assert await providers.openai_complete(config, [], max_tokens=10, temperature=0) is None
    assert await providers.anthropic_complete(config, "", [], max_tokens=10) is None
