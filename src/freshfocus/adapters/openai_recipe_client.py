"""OpenAI Responses API client for recipe generation."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from freshfocus.services.recipes import RecipeClient


@dataclass
class OpenAIRecipeClient(RecipeClient):
    """Recipe client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> str:
        """Request recipes as structured JSON output."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": prompt,
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "recipe_suggestions",
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        return response.output_text or ""
