"""Fridge image analysis using LLMs."""

import base64
import json
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from freshfocus.domain.scan import ScanItem

logger = logging.getLogger(__name__)

VISION_PROMPT = (
    "Analyze this fridge photo. List all visible ingredients. "
    "For each, estimate the quantity and how many days it likely has left "
    "before expiring (based on typical shelf life). "
    "Return each item with 'name', 'quantity' and 'estimatedDaysLeft'."
)

VISION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "quantity": {"type": "string"},
                    "estimatedDaysLeft": {"type": "number"},
                },
                "required": ["name", "quantity", "estimatedDaysLeft"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["items"],
    "additionalProperties": False,
}


class VisionClient(Protocol):
    """Interface for LLM image analysis."""

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> str:
        """Return the raw structured output text."""


@dataclass
class VisionService:
    """Service that prepares fridge prompts and validates results."""

    client: VisionClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def analyze(self, image_bytes: bytes) -> list[ScanItem]:
        """Propose ingredients visible in a fridge photo."""
        raw = await self.client.extract(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            image_data_url=_to_data_url(image_bytes),
            schema=VISION_SCHEMA,
            prompt=VISION_PROMPT,
        )
        return parse_scan_items(raw)


def parse_scan_items(raw: str) -> list[ScanItem]:
    """Parse model output, skipping items that fail validation."""
    try:
        data = json.loads(raw or "[]")
    except ValueError:
        logger.warning("Failed to parse fridge scan response")
        return []
    if isinstance(data, dict):
        data = data.get("items", [])
    if not isinstance(data, list):
        logger.warning("Fridge scan response has no item list")
        return []
    items: list[ScanItem] = []
    for entry in data:
        try:
            items.append(ScanItem.model_validate(entry))
        except ValidationError:
            logger.warning("Skipping malformed fridge scan item")
    return items


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
