from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


class Urgency(enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Category(enum.Enum):
    PLUMBING = "Plumbing"
    ELECTRICAL = "Electrical"
    HVAC = "HVAC"
    STRUCTURAL = "Structural"
    OTHER = "Other"


@dataclass(frozen=True)
class AnalysisResult:
    diagnosis: str
    urgency: Urgency
    estimated_cost: str
    contractor_type: str
    next_steps: str


@dataclass(frozen=True)
class AnalyzedRequest:
    description: str
    analysis: AnalysisResult
    timestamp: datetime
    property_address: str | None = None
    category: Category | None = None


class AnalysisError(Exception):
    """Base class for failures of the language-model call."""


class ModelNotConfiguredError(AnalysisError):
    """Model credentials are missing."""


class ModelTimeoutError(AnalysisError):
    """The model call timed out or was cancelled."""


class ModelUnavailableError(AnalysisError):
    """The model call failed for any other reason."""


class ModelClient(ABC):
    @abstractmethod
    async def generate(self, system_prompt: str, user_prompt: str) -> str: ...
