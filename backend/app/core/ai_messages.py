"""AI Message Assembly — pure helpers for the chat proxy.

Invariants:
    - Settings rows collapse to a key → value map; later rows win
    - Chat transcript order: [system prompt] + history + trimmed user message
    - Anthropic receives no system-role messages (system is a separate parameter)
    - Only **bold** markers are stripped from replies; other markdown is preserved

Design Decisions:
    - Plain dicts for messages ({"role", "content"}): both SDKs accept them directly
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from app.core.domain_types import MessageRole

OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
ANTHROPIC_DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
CHAT_MAX_TOKENS = 1000
CHAT_TEMPERATURE = 0.7
PROMPT_MAX_TOKENS = 2000

PROMPT_IMPROVER_SYSTEM = (
    "You are an expert at writing clear, effective system prompts for AI "
    "assistants. Improve the given prompt while maintaining its core intent "
    "and structure."
)

_BOLD = re.compile(r"\*\*(.*?)\*\*")

SENSITIVE_SETTING_SUFFIXES = ("_api_key", "_secret")


@dataclass(frozen=True)
class ProviderConfig:
    api_key: str | None
    model: str


def map_settings(rows: Iterable[tuple[str, str | None]]) -> dict[str, str]:
    """Collapse (setting_key, setting_value) rows into a dict."""
    return {key: value or "" for key, value in rows}


def _setting(settings: dict[str, str], key: str) -> str:
    return (settings.get(key) or "").strip()


def openai_config(settings: dict[str, str]) -> ProviderConfig:
    return ProviderConfig(
        api_key=_setting(settings, "openai_api_key") or None,
        model=_setting(settings, "openai_model") or OPENAI_DEFAULT_MODEL,
    )


def anthropic_config(settings: dict[str, str]) -> ProviderConfig:
    return ProviderConfig(
        api_key=_setting(settings, "anthropic_api_key") or None,
        model=_setting(settings, "anthropic_model") or ANTHROPIC_DEFAULT_MODEL,
    )


def system_prompt(settings: dict[str, str]) -> str | None:
    return _setting(settings, "system_prompt") or None


def build_chat_messages(
    prompt: str | None, history: Iterable[dict], message: str,
) -> list[dict]:
    """Assemble the OpenAI-style transcript for one chat turn."""
    messages: list[dict] = []
    if prompt:
        messages.append({"role": MessageRole.SYSTEM.value, "content": prompt})
    messages.extend(
        {"role": m["role"], "content": m["content"]} for m in history
    )
    messages.append({"role": MessageRole.USER.value, "content": message.strip()})
    return messages


def split_for_anthropic(
    messages: list[dict], prompt: str | None = None,
) -> tuple[str, list[dict]]:
    """Separate the system prompt and fold every other role into user/assistant."""
    system = prompt or next(
        (m["content"] for m in messages if m["role"] == MessageRole.SYSTEM.value),
        "",
    )
    conversation = [
        {
            "role": (
                MessageRole.ASSISTANT.value
                if m["role"] == MessageRole.ASSISTANT.value
                else MessageRole.USER.value
            ),
            "content": m["content"],
        }
        for m in messages
        if m["role"] != MessageRole.SYSTEM.value
    ]
    return system, conversation


def strip_bold(text: str) -> str:
    return _BOLD.sub(r"\1", text)


def improve_prompt_messages(prompt: str) -> list[dict]:
    return [
        {"role": MessageRole.SYSTEM.value, "content": PROMPT_IMPROVER_SYSTEM},
        {
            "role": MessageRole.USER.value,
            "content": (
                "Please improve the following system prompt while keeping its "
                f"structure and main purpose:\n\n{prompt}"
            ),
        },
    ]


def is_sensitive_setting(key: str) -> bool:
    return key.endswith(SENSITIVE_SETTING_SUFFIXES)


def masked_setting_value(key: str, value: str) -> str:
    """Hide all but the last four characters of secrets."""
    if not is_sensitive_setting(key) or not value:
        return value
    if len(value) <= 8:
        return "*" * 8
    return "*" * (len(value) - 4) + value[-4:]
