from datetime import timezone
from unittest.mock import AsyncMock

import pytest

from fixwise.analysis.analyzer import Analyzer
from fixwise.analysis.interface import (
    Category,
    ModelClient,
    ModelTimeoutError,
    ModelUnavailableError,
    Urgency,
)
from fixwise.analysis.prompts import SYSTEM_PROMPT, build_context, build_user_prompt

COMPLETION = """DIAGNOSIS: Corroded shut-off valve under the kitchen sink.
URGENCY: HIGH
ESTIMATED COST: $150-$300
CONTRACTOR TYPE: Plumber
NEXT STEPS: Turn off the main water supply.
Call a licensed plumber."""


@pytest.fixture
def mock_client() -> AsyncMock:
    client = AsyncMock(spec=ModelClient)
    client.generate = AsyncMock(return_value=COMPLETION)
    return client


class TestAnalyze:
    async def test_sends_description_and_parses_completion(
        self, mock_client: AsyncMock
    ) -> None:
        result = await Analyzer(mock_client).analyze("Water dripping from valve")

        mock_client.generate.assert_awaited_once_with(
            SYSTEM_PROMPT, "Water dripping from valve"
        )
        assert result.diagnosis == "Corroded shut-off valve under the kitchen sink."
        assert result.urgency is Urgency.HIGH
        assert result.estimated_cost == "$150-$300"
        assert result.contractor_type == "Plumber"
        assert result.next_steps == (
            "Turn off the main water supply. Call a licensed plumber."
        )

    async def test_prepends_context(self, mock_client: AsyncMock) -> None:
        await Analyzer(mock_client).analyze(
            "Water dripping from valve", context="Category: Plumbing"
        )

        mock_client.generate.assert_awaited_once_with(
            SYSTEM_PROMPT,
            "Category: Plumbing\n\nIssue Description: Water dripping from valve",
        )

    async def test_unstructured_completion_degrades_to_fallbacks(
        self, mock_client: AsyncMock
    ) -> None:
        mock_client.generate.return_value = "Sorry, I cannot help with that."

        result = await Analyzer(mock_client).analyze("Water dripping from valve")

        assert result.diagnosis == "Sorry, I cannot help with that."
        assert result.urgency is Urgency.MEDIUM
        assert result.contractor_type == "General contractor"

    @pytest.mark.parametrize(
        "error", [ModelTimeoutError("slow"), ModelUnavailableError("down")]
    )
    async def test_model_errors_propagate(
        self, mock_client: AsyncMock, error: Exception
    ) -> None:
        mock_client.generate.side_effect = error

        with pytest.raises(type(error)):
            await Analyzer(mock_client).analyze("Water dripping from valve")


class TestAnalyzeRequest:
    async def test_builds_context_and_stamps_time(
        self, mock_client: AsyncMock
    ) -> None:
        analyzed = await Analyzer(mock_client).analyze_request(
            "Water dripping from valve",
            property_address="12 Elm Street",
            category=Category.PLUMBING,
        )

        mock_client.generate.assert_awaited_once_with(
            SYSTEM_PROMPT,
            "Property Address: 12 Elm Street\nCategory: Plumbing\n\n"
            "Issue Description: Water dripping from valve",
        )
        assert analyzed.description == "Water dripping from valve"
        assert analyzed.property_address == "12 Elm Street"
        assert analyzed.category is Category.PLUMBING
        assert analyzed.analysis.urgency is Urgency.HIGH
        assert analyzed.timestamp.tzinfo == timezone.utc

    async def test_without_context_sends_bare_description(
        self, mock_client: AsyncMock
    ) -> None:
        analyzed = await Analyzer(mock_client).analyze_request(
            "Water dripping from valve"
        )

        mock_client.generate.assert_awaited_once_with(
            SYSTEM_PROMPT, "Water dripping from valve"
        )
        assert analyzed.property_address is None
        assert analyzed.category is None


class TestPrompts:
    def test_system_prompt_names_every_section(self) -> None:
        for label in (
            "DIAGNOSIS:",
            "URGENCY:",
            "ESTIMATED COST:",
            "CONTRACTOR TYPE:",
            "NEXT STEPS:",
        ):
            assert label in SYSTEM_PROMPT

    def test_build_context(self) -> None:
        assert build_context(None, None) is None
        assert build_context("", None) is None
        assert build_context("1 Main St", None) == "Property Address: 1 Main St"
        assert build_context(None, Category.HVAC) == "Category: HVAC"
        assert (
            build_context("1 Main St", Category.OTHER)
            == "Property Address: 1 Main St\nCategory: Other"
        )

    def test_build_user_prompt(self) -> None:
        assert build_user_prompt("Broken window") == "Broken window"
        assert build_user_prompt("Broken window", "") == "Broken window"
        assert (
            build_user_prompt("Broken window", "Category: Other")
            == "Category: Other\n\nIssue Description: Broken window"
        )
