"""OpenRouter LLM client."""

import logging

import httpx

from .base import LLMClient, LLMResponse

logger = logging.getLogger(__name__)


class OpenRouterClient(LLMClient):
    """OpenRouter HTTP API client."""

    def __init__(self, api_key: str, base_url: str = "https://openrouter.ai/api/v1"):
        self.api_key = api_key
        self.base_url = base_url

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "X-Title": "archkit",
        }

    def generate(self, prompt: str, model: str, max_tokens: int) -> LLMResponse:
        """Send a single-turn prompt via the OpenRouter chat completions API."""
        payload = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens,
        }

        with httpx.Client(timeout=60.0) as client:
            response = client.post(
                f"{self.base_url}/chat/completions",
                headers=self._headers(),
                json=payload,
            )
            response.raise_for_status()
            data = response.json()

        return self._convert_response(data, model)

    def _convert_response(self, data: dict, model: str) -> LLMResponse:
        """Convert an OpenRouter response to our format."""
        choices = data.get("choices") or []
        if not choices:
            raise ValueError(f"OpenRouter returned no choices: {data.get('error', data)}")

        choice = choices[0]
        message = choice.get("message", {})
        usage = data.get("usage")

        return LLMResponse(
            text=message.get("content") or "",
            model=data.get("model", model),
            stop_reason=choice.get("finish_reason"),
            usage=(
                {
                    "input_tokens": usage.get("prompt_tokens", 0),
                    "output_tokens": usage.get("completion_tokens", 0),
                }
                if usage
                else None
            ),
        )

    def list_models(self, name_filter: str = "") -> list[str]:
        """
        List model ids available to this API key.

        Args:
            name_filter: Only return ids containing this substring

        Returns:
            Sorted list of model ids
        """
        with httpx.Client(timeout=30.0) as client:
            response = client.get(f"{self.base_url}/models", headers=self._headers())
            response.raise_for_status()
            data = response.json()

        ids = [item.get("id") for item in data.get("data", [])]
        models = sorted(model_id for model_id in ids if model_id and name_filter in model_id)
        logger.info(f"OpenRouter lists {len(models)} models")
        return models
