from __future__ import annotations

import logging
import time

from fixwise.analysis.extractor import extract
from fixwise.analysis.interface import (
    AnalysisResult,
    AnalyzedRequest,
    Category,
    ModelClient,
)
from fixwise.analysis.prompts import SYSTEM_PROMPT, build_context, build_user_prompt
from fixwise.base.models import utcnow

logger = logging.getLogger(__name__)


class Analyzer:
    """Runs a maintenance description through the model and parses the answer."""

    def __init__(self, client: ModelClient) -> None:
        self._client = client

    async def analyze(
        self, description: str, context: str | None = None
    ) -> AnalysisResult:
        """
        Analyze a single issue description.

        Model failures (`AnalysisError` subclasses) propagate to the caller.
        A completion that is missing some or all labels still produces a
        complete result through the extractor's fallbacks.
        """
        user_prompt = build_user_prompt(description, context)

        start = time.monotonic()
        completion = await self._client.generate(SYSTEM_PROMPT, user_prompt)
        duration = time.monotonic() - start
        logger.info(
            "Model call finished in %.2fs (%d chars)", duration, len(completion)
        )

        return extract(completion)

    async def analyze_request(
        self,
        description: str,
        property_address: str | None = None,
        category: Category | None = None,
    ) -> AnalyzedRequest:
        context = build_context(property_address, category)
        analysis = await self.analyze(description, context)
        return AnalyzedRequest(
            description=description,
            property_address=property_address,
            category=category,
            analysis=analysis,
            timestamp=utcnow(),
        )
