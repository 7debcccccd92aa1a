from __future__ import annotations

from fixwise.analysis.interface import Category

SYSTEM_PROMPT = """You are a professional property maintenance analyst. Analyze maintenance issues and provide structured recommendations.

For each maintenance issue description, provide:

1. DIAGNOSIS: Identify the likely problem in 1-2 sentences
2. URGENCY: Classify as LOW, MEDIUM, or HIGH
   - HIGH: Safety hazard, major damage risk, or essential service outage
   - MEDIUM: Affects daily function, could worsen quickly
   - LOW: Minor issue, cosmetic, or can wait for scheduled maintenance
3. ESTIMATED COST: Provide a realistic range in USD (e.g., $150-$400)
4. CONTRACTOR TYPE: Specify what professional is needed (plumber, electrician, HVAC, general contractor, etc.)
5. NEXT STEPS: List 2-3 specific, actionable recommendations

Start each section on its own line with its label exactly as written above.
Be concise, practical, and helpful. Base estimates on typical market rates.
"""


def build_context(
    property_address: str | None,
    category: Category | None,
) -> str | None:
    """Describe the property and category, or None when neither is known."""
    parts: list[str] = []
    if property_address:
        parts.append(f"Property Address: {property_address}")
    if category is not None:
        parts.append(f"Category: {category.value}")
    return "\n".join(parts) if parts else None


def build_user_prompt(description: str, context: str | None = None) -> str:
    if context:
        return f"{context}\n\nIssue Description: {description}"
    return description
