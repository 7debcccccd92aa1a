import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from langchain_core.language_models import BaseChatModel
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage

from fixwise.analysis import create_analyzer
from fixwise.analysis.analyzer import Analyzer
from fixwise.analysis.interface import (
    ModelNotConfiguredError,
    ModelTimeoutError,
    ModelUnavailableError,
)
from fixwise.analysis.langchain_client import LangChainModelClient


class TestLangChainModelClient:
    async def test_returns_completion_text(self) -> None:
        llm = FakeListChatModel(responses=["DIAGNOSIS: Leak"])

        text = await LangChainModelClient(llm).generate("system", "user")

        assert text == "DIAGNOSIS: Leak"

    async def test_sends_system_and_user_messages(self) -> None:
        llm = AsyncMock(spec=BaseChatModel)
        llm.ainvoke = AsyncMock(return_value=AIMessage(content="ok"))

        await LangChainModelClient(llm).generate("be helpful", "sink is leaking")

        llm.ainvoke.assert_awaited_once_with(
            [("system", "be helpful"), ("user", "sink is leaking")]
        )

    async def test_joins_text_blocks(self) -> None:
        llm = AsyncMock(spec=BaseChatModel)
        llm.ainvoke = AsyncMock(
            return_value=AIMessage(
                content=[
                    {"type": "text", "text": "DIAGNOSIS: Leak\n"},
                    {"type": "image_url", "image_url": {"url": "http://x"}},
                    "URGENCY: HIGH",
                ]
            )
        )

        text = await LangChainModelClient(llm).generate("system", "user")

        assert text == "DIAGNOSIS: Leak\nURGENCY: HIGH"

    async def test_times_out(self) -> None:
        async def slow(*args: object, **kwargs: object) -> AIMessage:
            await asyncio.sleep(5)
            return AIMessage(content="too late")

        llm = AsyncMock(spec=BaseChatModel)
        llm.ainvoke = AsyncMock(side_effect=slow)

        with pytest.raises(ModelTimeoutError):
            await LangChainModelClient(llm, timeout_seconds=0.01).generate(
                "system", "user"
            )

    async def test_wraps_provider_errors(self) -> None:
        llm = AsyncMock(spec=BaseChatModel)
        llm.ainvoke = AsyncMock(side_effect=RuntimeError("quota exceeded"))

        with pytest.raises(ModelUnavailableError) as exc_info:
            await LangChainModelClient(llm).generate("system", "user")

        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestCreateAnalyzer:
    def test_missing_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

        with pytest.raises(ModelNotConfiguredError):
            create_analyzer()

    def test_builds_gemini_analyzer(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GOOGLE_API_KEY", "test-key")

        with patch("fixwise.analysis.ChatGoogleGenerativeAI") as chat_cls:
            analyzer = create_analyzer()

        assert isinstance(analyzer, Analyzer)
        kwargs = chat_cls.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash-lite"
        assert kwargs["temperature"] == 0.7
        assert kwargs["google_api_key"] == "test-key"
