"""Inline action execution.

Text statistics are computed locally. Translation, conversion and dictionary
actions are answered by a DashScope chat model (``qwen-turbo`` by default),
one short instruction per action kind, with the captured text as the user
message.
"""

from __future__ import annotations

import asyncio
import math
import os
from typing import Any, Optional

from errors import AUTH_FAILED, NETWORK_ERROR, PROVIDER_ERROR, UNSUPPORTED_ACTION, ProviderError
from models import ActionKind, ActionResult, ActionType

try:
    import dashscope
except Exception:  # pragma: no cover
    dashscope = None  # type: ignore

WORDS_PER_MINUTE = 200

_LANGUAGE_NAMES = {
    "en": "English", "zh": "Chinese", "es": "Spanish", "fr": "French", "de": "German",
    "ar": "Arabic", "pt": "Portuguese", "ru": "Russian", "ja": "Japanese", "hi": "Hindi",
    "it": "Italian", "nl": "Dutch", "pl": "Polish", "tr": "Turkish", "hy": "Armenian",
    "fa": "Persian", "vi": "Vietnamese", "id": "Indonesian", "ko": "Korean", "bn": "Bengali",
    "ur": "Urdu", "th": "Thai", "sv": "Swedish", "da": "Danish", "fi": "Finnish",
    "hu": "Hungarian",
}


def analyze_text(target: str, text: str) -> str:
    words = len(text.split())
    if target == "words":
        return f"{words} words"
    if target == "characters":
        return f"{len(text)} characters"
    if target == "reading_time":
        if words < WORDS_PER_MINUTE:
            return "< 1 min read"
        return f"{math.ceil(words / WORDS_PER_MINUTE)} min read"
    raise ProviderError(UNSUPPORTED_ACTION, f"Unknown text analysis: {target}")


def build_instruction(action_type: ActionType) -> str:
    kind = action_type.kind
    target = action_type.target
    if kind == ActionKind.TRANSLATE:
        language = _LANGUAGE_NAMES.get(target, target)
        return f"Translate the user's text to {language}. Reply with the translation only."
    if kind == ActionKind.CONVERT_CURRENCY:
        return (
            f"Convert the amount in the user's text to {target} using current exchange rates. "
            "Reply with the converted amount only."
        )
    if kind == ActionKind.CONVERT_UNIT:
        return f"Convert the quantity in the user's text to {target}. Reply with the result only."
    if kind == ActionKind.CONVERT_TIME:
        return f"Convert the time in the user's text to the {target} time zone. Reply with the time only."
    if kind == ActionKind.DEFINITION:
        if target == "synonyms":
            return "List up to five synonyms of the user's word, comma separated."
        if target == "antonyms":
            return "List up to five antonyms of the user's word, comma separated."
        return "Give a one-sentence dictionary definition of the user's word."
    raise ProviderError(UNSUPPORTED_ACTION, f"Unknown action type: {kind.value}")


class DashscopeActionExecutor:
    def __init__(
        self,
        api_key: str,
        model: str = "qwen-turbo",
        request_timeout_s: float = 10.0,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._request_timeout_s = request_timeout_s

    async def execute_action(self, action_type: ActionType, text: str) -> ActionResult:
        if action_type.kind == ActionKind.ANALYZE_TEXT:
            return ActionResult(result=analyze_text(action_type.target, text))
        instruction = build_instruction(action_type)
        result = await asyncio.to_thread(self._complete, instruction, text)
        return ActionResult(result=result, metadata={"model": self._model})

    def _complete(self, instruction: str, text: str) -> str:
        if dashscope is None:
            raise ProviderError(PROVIDER_ERROR, "dashscope is not installed")

        api_key = self._api_key or os.getenv("DASHSCOPE_API_KEY", "")
        if not api_key:
            raise ProviderError(AUTH_FAILED, "No API key configured")

        try:
            response = dashscope.Generation.call(
                api_key=api_key,
                model=self._model,
                messages=[
                    {"role": "system", "content": instruction},
                    {"role": "user", "content": text},
                ],
                result_format="message",
                timeout=self._request_timeout_s,
            )
        except Exception as exc:
            raise self._to_provider_error(str(exc)) from exc

        status = self._field(response, "status_code")
        if status is not None and status != 200:
            message = self._field(response, "message") or f"status {status}"
            raise self._to_provider_error(f"{status} {message}")

        content = self._extract_text(response)
        if not content:
            raise ProviderError(PROVIDER_ERROR, "Empty response from model")
        return content

    def _extract_text(self, response: Any) -> str:
        """Pull the assistant message out of a dashscope response dict."""
        output = self._field(response, "output") or {}
        choices = output.get("choices") or []
        if not choices:
            return str(output.get("text") or "").strip()
        message = choices[0].get("message") or {}
        return str(message.get("content") or "").strip()

    def _field(self, response: Any, name: str) -> Optional[Any]:
        if isinstance(response, dict):
            return response.get(name)
        return getattr(response, name, None)

    def _to_provider_error(self, message: str) -> ProviderError:
        """Map an SDK/network failure to a provider error code."""
        low = message.lower()
        if "401" in low or "auth" in low or "api key" in low:
            code = AUTH_FAILED
        elif "timeout" in low or "network" in low or "connection" in low:
            code = NETWORK_ERROR
        else:
            code = PROVIDER_ERROR
        return ProviderError(code, message)
