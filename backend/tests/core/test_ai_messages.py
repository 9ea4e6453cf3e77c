"""AI Message Assembly — verifies provider config, transcripts and masking.

Tests:
    - Provider configs fall back to default models; blank keys mean "not configured"
    - Transcript = [system] + history + trimmed message
    - Anthropic split drops system messages and folds unknown roles into user
    - strip_bold removes only **bold** markers
    - Sensitive setting values masked except the last four characters
"""

from app.core.ai_messages import (
    ANTHROPIC_DEFAULT_MODEL, OPENAI_DEFAULT_MODEL,
    anthropic_config, build_chat_messages, improve_prompt_messages,
    is_sensitive_setting, map_settings, masked_setting_value, openai_config,
    split_for_anthropic, strip_bold, system_prompt,
)


def test_map_settings_nulls_become_empty():
    assert map_settings([("a", None), ("b", "x")]) == {"a": "", "b": "x"}


def test_openai_config_defaults():
    config = openai_config({"openai_api_key": "   "})
    assert config.api_key is None
    assert config.model == OPENAI_DEFAULT_MODEL


def test_provider_configs_read_overrides():
    settings = {
        "openai_api_key": "sk-1", "openai_model": "gpt-4o",
        "anthropic_api_key": "ak-1",
    }
    assert openai_config(settings).model == "gpt-4o"
    assert anthropic_config(settings).api_key == "ak-1"
    assert anthropic_config(settings).model == ANTHROPIC_DEFAULT_MODEL


def test_system_prompt_blank_is_none():
    assert system_prompt({"system_prompt": "  "}) is None
    assert system_prompt({"system_prompt": "Be brief"}) == "Be brief"


def test_build_chat_messages_order():
    messages = build_chat_messages(
        "Be brief",
        [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}],
        "  what now?  ",
    )
    assert messages == [
        {"role": "system", "content": "Be brief"},
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "hello"},
        {"role": "user", "content": "what now?"},
    ]


def test_build_chat_messages_without_prompt():
    messages = build_chat_messages(None, [], "hi")
    assert messages == [{"role": "user", "content": "hi"}]


def test_split_for_anthropic():
    system, conversation = split_for_anthropic([
        {"role": "system", "content": "Be brief"},
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "hello"},
    ])
    assert system == "Be brief"
    assert [m["role"] for m in conversation] == ["user", "assistant"]


def test_split_for_anthropic_explicit_prompt_wins():
    system, _ = split_for_anthropic(
        [{"role": "system", "content": "old"}], prompt="new",
    )
    assert system == "new"


def test_strip_bold_keeps_other_markdown():
    assert strip_bold("**Hi** _there_ `code` **x**") == "Hi _there_ `code` x"


def test_improve_prompt_messages_embed_prompt():
    messages = improve_prompt_messages("You are helpful.")
    assert messages[0]["role"] == "system"
    assert messages[1]["content"].endswith("You are helpful.")


def test_sensitive_settings():
    assert is_sensitive_setting("openai_api_key")
    assert is_sensitive_setting("webhook_secret")
    assert not is_sensitive_setting("openai_model")


def test_masked_long_secret_shows_last_four():
    assert masked_setting_value("openai_api_key", "sk-abcdefgh1234") == "*" * 11 + "1234"


def test_masked_short_secret_fully_hidden():
    assert masked_setting_value("openai_api_key", "abc") == "********"


def test_non_sensitive_value_unchanged():
    assert masked_setting_value("system_prompt", "Be brief") == "Be brief"
    assert masked_setting_value("openai_api_key", "") == ""
