from __future__ import annotations

import asyncio

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage

from fixwise.analysis.interface import (
    ModelClient,
    ModelTimeoutError,
    ModelUnavailableError,
)


class LangChainModelClient(ModelClient):
    """Text completions from a LangChain chat model, bounded by a timeout."""

    def __init__(self, llm: BaseChatModel, timeout_seconds: float = 10.0) -> None:
        self._llm = llm
        self._timeout_seconds = timeout_seconds

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        messages = [
            ("system", system_prompt),
            ("user", user_prompt),
        ]

        try:
            response = await asyncio.wait_for(
                self._llm.ainvoke(messages), timeout=self._timeout_seconds
            )
        except TimeoutError as exc:
            raise ModelTimeoutError(
                f"Model call timed out after {self._timeout_seconds:g}s"
            ) from exc
        except Exception as exc:
            raise ModelUnavailableError(f"Model call failed: {exc}") from exc

        return _message_text(response)


def _message_text(message: BaseMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content

    # Multi-part content: keep the text blocks only.
    parts: list[str] = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(str(block.get("text", "")))
    return "".join(parts)
