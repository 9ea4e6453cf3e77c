"""AI Routes — verifies provider fallback, reply cleanup and admin settings.

Invariants:
    - OpenAI answers first; Anthropic only when OpenAI yields nothing
    - Neither provider → 503 with guidance to check admin settings
    - Settings endpoints and prompt generation are admin-only; secrets are masked
"""

import pytest


@pytest.fixture
async def configure(client, admin_headers):
    async def _set(key: str, value: str):
        res = await client.put(
            f"/api/v1/ai/settings/{key}", json={"setting_value": value},
            headers=admin_headers,
        )
        assert res.status_code == 200
    return _set


async def test_chat_uses_openai_first(client, auth_headers, configure, ai_providers):
    await configure("openai_api_key", "sk-openai-test-1234")
    await configure("system_prompt", "Be brief")
    ai_providers.openai_reply = "**Hello** there"
    ai_providers.anthropic_reply = "unused"

    res = await client.post(
        "/api/v1/ai/chat",
        json={"message": " hi ", "conversation_history": [{"role": "assistant", "content": "Welcome"}]},
        headers=auth_headers,
    )

    assert res.status_code == 200
    assert res.json() == {"message": "Hello there", "provider": "openai"}
    [call] = ai_providers.openai_calls
    assert call["messages"] == [
        {"role": "system", "content": "Be brief"},
        {"role": "assistant", "content": "Welcome"},
        {"role": "user", "content": "hi"},
    ]
    assert ai_providers.anthropic_calls == []


async def test_chat_falls_back_to_anthropic(client, auth_headers, configure, ai_providers):
    await configure("anthropic_api_key", "ak-test-5678")
    await configure("system_prompt", "Be brief")
    ai_providers.anthropic_reply = "From Claude"

    res = await client.post("/api/v1/ai/chat", json={"message": "hi"}, headers=auth_headers)

    assert res.json() == {"message": "From Claude", "provider": "anthropic"}
    [call] = ai_providers.anthropic_calls
    assert call["system"] == "Be brief"
    assert all(m["role"] != "system" for m in call["messages"])


async def test_chat_without_providers_is_503(client, auth_headers):
    res = await client.post("/api/v1/ai/chat", json={"message": "hi"}, headers=auth_headers)

    assert res.status_code == 503
    assert "admin settings" in res.json()["error"]["message"]


async def test_chat_rejects_blank_message(client, auth_headers):
    res = await client.post("/api/v1/ai/chat", json={"message": "   "}, headers=auth_headers)
    assert res.status_code == 400


async def test_generate_prompt_requires_admin(client, auth_headers):
    res = await client.post(
        "/api/v1/ai/generate-prompt", json={"prompt": "You help."}, headers=auth_headers,
    )
    assert res.status_code == 403


async def test_generate_prompt_without_key(client, admin_headers):
    res = await client.post(
        "/api/v1/ai/generate-prompt", json={"prompt": "You help."}, headers=admin_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "OpenAI API key not configured"


async def test_generate_prompt(client, admin_headers, configure, ai_providers):
    await configure("openai_api_key", "sk-openai-test-1234")
    ai_providers.openai_reply = "You are a concise, helpful assistant."

    res = await client.post(
        "/api/v1/ai/generate-prompt", json={"prompt": "You help."}, headers=admin_headers,
    )

    assert res.json() == {"prompt": "You are a concise, helpful assistant."}
    [call] = ai_providers.openai_calls
    assert call["messages"][1]["content"].endswith("You help.")


async def test_generate_prompt_provider_failure(client, admin_headers, configure):
    await configure("openai_api_key", "sk-openai-test-1234")

    res = await client.post(
        "/api/v1/ai/generate-prompt", json={"prompt": "You help."}, headers=admin_headers,
    )

    assert res.status_code == 500
    assert res.json()["error"]["message"] == "Failed to generate improved prompt"


async def test_settings_list_masks_secrets(client, admin_headers, configure):
    await configure("openai_api_key", "sk-openai-test-1234")
    await configure("openai_model", "gpt-4o")

    res = await client.get("/api/v1/ai/settings", headers=admin_headers)

    settings = {s["setting_key"]: s for s in res.json()}
    assert settings["openai_api_key"]["setting_value"].endswith("1234")
    assert "openai" not in settings["openai_api_key"]["setting_value"]
    assert settings["openai_api_key"]["is_sensitive"] is True
    assert settings["openai_model"]["setting_value"] == "gpt-4o"


async def test_settings_upsert_overwrites(client, admin_headers, configure):
    await configure("openai_model", "gpt-4o")
    await configure("openai_model", "gpt-4o-mini")

    res = await client.get("/api/v1/ai/settings", headers=admin_headers)

    assert [s["setting_value"] for s in res.json()] == ["gpt-4o-mini"]


async def test_settings_require_admin(client, auth_headers):
    assert (await client.get("/api/v1/ai/settings", headers=auth_headers)).status_code == 403


async def test_settings_key_pattern(client, admin_headers):
    res = await client.put(
        "/api/v1/ai/settings/Bad-Key", json={"setting_value": "x"}, headers=admin_headers,
    )
    assert res.status_code == 400
