"""Completion bridge to the OpenAI Responses API."""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
import logging

from openai import AsyncOpenAI

from relaybot.core.state import Tone
from relaybot.storage.analytics import EventLog

logger = logging.getLogger(__name__)

TONE_INSTRUCTIONS = {
    Tone.FORMAL: "Respond in a formal, professional tone.",
    Tone.TECHNICAL: "Respond with technical precision. Prefer exact terms, details and examples.",
}


@dataclass
class CompletionResult:
    text: str
    tokens: int = 0
    ok: bool = True


def _as_dict(response: Any) -> Dict[str, Any]:
    if isinstance(response, dict):
        return response
    data = response.model_dump()
    # output_text is a property on the SDK object, not a dumped field
    data["output_text"] = getattr(response, "output_text", None)
    return data


def from_output_text(data: Dict[str, Any]) -> Optional[str]:
    text = data.get("output_text")
    return text if isinstance(text, str) else None


def from_output_segments(data: Dict[str, Any]) -> Optional[str]:
    output = data.get("output")
    if not isinstance(output, list):
        return None
    segments = []
    for item in output:
        if not isinstance(item, dict) or item.get("type") == "reasoning":
            continue
        content = item.get("content") or []
        text = "".join(
            part["text"] for part in content
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        )
        if text:
            segments.append(text)
    return "\n".join(segments)


REPLY_EXTRACTORS: List[Callable[[Dict[str, Any]], Optional[str]]] = [
    from_output_text,
    from_output_segments,
]


def extract_reply(data: Dict[str, Any], fallback: str) -> str:
    for extractor in REPLY_EXTRACTORS:
        text = extractor(data)
        if text:
            return text
    return fallback


def extract_tokens(data: Dict[str, Any]) -> int:
    usage = data.get("usage") or {}
    return int(usage.get("input_tokens") or 0) + int(usage.get("output_tokens") or 0)


def build_prompt(text: str, tone: Tone) -> str:
    instruction = TONE_INSTRUCTIONS.get(tone)
    if not instruction:
        return text
    return f"{instruction}\n\n{text}"


class CompletionBridge:
    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-5-mini",
        max_output_tokens: int = 800,
        client: Optional[AsyncOpenAI] = None,
        events: Optional[EventLog] = None,
    ):
        self.model = model
        self.max_output_tokens = max_output_tokens
        self.client = client or AsyncOpenAI(api_key=api_key)
        self.events = events or EventLog()

    async def complete(self, text: str, tone: Tone = Tone.FRIENDLY, chat_id: Optional[int] = None) -> CompletionResult:
        """Ask the model; degrade to echoing the input on any failure."""
        try:
            response = await self.client.responses.create(
                model=self.model,
                input=build_prompt(text, tone),
                max_output_tokens=self.max_output_tokens,
            )
            data = _as_dict(response)
            result = CompletionResult(text=extract_reply(data, text), tokens=extract_tokens(data))
        except Exception as e:
            logger.error(f"OpenAI request failed: {e}")
            self.events.emit("completion_failed", chat_id, error=str(e))
            return CompletionResult(text=text, tokens=0, ok=False)

        self.events.emit("completion_succeeded", chat_id, tokens=result.tokens)
        return result
