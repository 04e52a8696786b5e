"""Narrative trip-guide text generation through a LangChain chat model."""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_xai import ChatXAI

from tirthyatra.core.config import ApiSettings, is_usable_key
from tirthyatra.core.results import FetchError, Failure, Result, Success
from tirthyatra.core.schemas import ItineraryParams

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a knowledgeable guide for pilgrimages in India. "
    "Write practical, respectful travel advice in plain prose."
)


def build_guide_prompt(params: ItineraryParams, highlights: Sequence[str] = ()) -> str:
    lines = [
        f"Plan a {params.duration}-day spiritual trip from {params.origin} to {params.destination}.",
        f"Budget tier: {params.budget}.",
        "Cover darshan timings, dress code, local food, and a day-by-day outline.",
    ]
    if highlights:
        lines.append("Include these places where sensible: " + ", ".join(highlights) + ".")
    return "\n".join(lines)


def fallback_guide(params: ItineraryParams, highlights: Sequence[str] = ()) -> str:
    """Templated guide used when no language model is available."""

    days = params.duration or 1
    places = list(highlights) or [f"the main temples of {params.destination}"]
    outline = []
    for day in range(1, days + 1):
        place = places[(day - 1) % len(places)]
        outline.append(f"Day {day}: Visit {place}; attend the evening aarti.")
    return (
        f"{days}-day pilgrimage from {params.origin} to {params.destination} ({params.budget} budget).\n"
        + "\n".join(outline)
        + "\nCarry modest clothing, keep footwear-free zones in mind, and book darshan slots early."
    )


class ChatTextGenerator:
    """Adapt any LangChain chat model to the ``generate(prompt)`` contract."""

    provider_id = "llm"

    def __init__(self, llm: BaseChatModel) -> None:
        self.llm = llm

    async def generate(self, prompt: str) -> Result[str]:
        try:
            message = await self.llm.ainvoke([SystemMessage(content=SYSTEM_PROMPT), HumanMessage(content=prompt)])
        except Exception as exc:
            logger.error(f"Language model call failed: {exc}", exc_info=True)
            return Failure(FetchError("network", str(exc), self.provider_id))

        content = getattr(message, "content", None)
        if not isinstance(content, str) or not content.strip():
            return Failure(FetchError("malformed", "empty completion", self.provider_id))
        return Success(content.strip())


def create_text_generator(settings: ApiSettings) -> Optional[ChatTextGenerator]:
    """Build the default generator, or ``None`` when no usable key is configured."""

    if not is_usable_key(settings.xai_api_key):
        logger.info("No language model key configured; guides will use the template")
        return None

    llm = ChatXAI(model="grok-4-fast-reasoning", temperature=0.4, api_key=settings.xai_api_key)
    return ChatTextGenerator(llm)
