import os

from langchain_google_genai import ChatGoogleGenerativeAI

from fixwise.analysis.analyzer import Analyzer
from fixwise.analysis.extractor import extract
from fixwise.analysis.interface import (
    AnalysisError,
    AnalysisResult,
    AnalyzedRequest,
    Category,
    ModelClient,
    ModelNotConfiguredError,
    ModelTimeoutError,
    ModelUnavailableError,
    Urgency,
)
from fixwise.analysis.langchain_client import LangChainModelClient

__all__ = [
    "AnalysisError",
    "AnalysisResult",
    "AnalyzedRequest",
    "Analyzer",
    "Category",
    "ModelClient",
    "ModelNotConfiguredError",
    "ModelTimeoutError",
    "ModelUnavailableError",
    "Urgency",
    "create_analyzer",
    "extract",
]

LLM_MODEL = os.environ.get("FIXWISE_LLM_MODEL", "gemini-2.5-flash-lite")
LLM_TEMPERATURE = float(os.environ.get("FIXWISE_LLM_TEMPERATURE", "0.7"))
LLM_TIMEOUT_SECONDS = float(os.environ.get("FIXWISE_LLM_TIMEOUT_SECONDS", "10"))


def create_analyzer() -> Analyzer:
    """Create an analyzer backed by Google Gemini."""
    api_key = os.environ.get("GOOGLE_API_KEY")
    if not api_key:
        raise ModelNotConfiguredError(
            "Gemini API key is missing. Please set GOOGLE_API_KEY environment variable."
        )

    llm = ChatGoogleGenerativeAI(
        model=LLM_MODEL,
        temperature=LLM_TEMPERATURE,
        google_api_key=api_key,
    )
    return Analyzer(LangChainModelClient(llm, timeout_seconds=LLM_TIMEOUT_SECONDS))
