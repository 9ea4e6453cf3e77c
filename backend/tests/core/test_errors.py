"""Error Hierarchy — verifies status codes and the response envelope."""

import pytest

from app.core.errors import (
    AIServiceUnavailableError, AuthenticationError, InsufficientCreditsError,
    PaymentProviderError, PermissionDeniedError, ResourceNotFoundError,
    TaskManagerError, WebhookSignatureError,
)


@pytest.mark.parametrize("error, status", [
    (AuthenticationError("Invalid user"), 401),
    (PermissionDeniedError(), 403),
    (ResourceNotFoundError("Note", "abc"), 404),
    (InsufficientCreditsError(3, 10), 402),
    (WebhookSignatureError(), 400),
    (AIServiceUnavailableError(), 503),
])
def test_http_status(error, status):
    assert isinstance(error, TaskManagerError)
    assert error.http_status == status


def test_envelope_shape():
    body = ResourceNotFoundError("Note", "abc").to_response()
    assert body["error"]["code"] == "RESOURCE_NOT_FOUND"
    assert body["error"]["message"] == "Note 'abc' not found"
    assert body["error"]["category"] == "resource_not_found"
    assert "timestamp" in body["error"]


def test_insufficient_credits_carries_balance():
    body = InsufficientCreditsError(3, 10).to_response()
    assert body["error"]["credits"] == 3
    assert body["error"]["required"] == 10


def test_payment_provider_invalid_request_is_client_error():
    assert PaymentProviderError("bad price", "invalid_request").http_status == 400
    assert PaymentProviderError("down", "api_error").http_status == 502
