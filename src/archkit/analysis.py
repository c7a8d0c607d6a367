"""Render a template into a prompt and report the outcome as a result envelope."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field

from .config import settings
from .llm import LLMClient, model_for
from .templates import StoreError, TemplateNotFoundError, TemplateRenderer, TemplateStore

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class AnalysisResult(BaseModel):
    """Outcome of rendering (and optionally sending) a template.

    Callers check ``success`` instead of handling exceptions.
    """

    success: bool
    template_key: Optional[str] = None
    prompt: Optional[str] = None  # Rendered prompt text
    response: Optional[str] = None  # LLM output, when a client was used
    error: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)


async def get_templates(store: TemplateStore) -> dict[str, str]:
    """Load the template mapping through the store's cache."""
    return await store.aload()


async def analyze_with_template(
    store: TemplateStore,
    template_key: str,
    variables: Optional[Mapping[str, Any]] = None,
    client: Optional[LLMClient] = None,
    model: Optional[str] = None,
    max_tokens: Optional[int] = None,
) -> AnalysisResult:
    """
    Render ``template_key`` and, when a client is given, send the prompt.

    Args:
        store: Template store to render from
        template_key: Key of the template to render
        variables: Render variables ("input" plus VAR names)
        client: Optional LLM client to forward the prompt to
        model: Model name for the client (defaults to the provider's model)
        max_tokens: Token limit for the client (defaults to settings.max_tokens)

    Returns:
        AnalysisResult with the prompt on success, or the error message
    """
    try:
        await store.aload()
        prompt = TemplateRenderer(store).render(template_key, variables)
    except (StoreError, TemplateNotFoundError) as e:
        logger.warning(f"Could not render template '{template_key}': {e}")
        return AnalysisResult(success=False, template_key=template_key, error=str(e))

    metadata: dict[str, Any] = {"produced_at": _utc_now_iso()}
    if client is None:
        return AnalysisResult(
            success=True, template_key=template_key, prompt=prompt, metadata=metadata
        )

    model = model or model_for()
    try:
        response = await asyncio.to_thread(
            client.generate, prompt, model, max_tokens or settings.max_tokens
        )
    except Exception as e:
        logger.error(f"LLM call failed for template '{template_key}': {e}", exc_info=True)
        return AnalysisResult(
            success=False,
            template_key=template_key,
            prompt=prompt,
            error=f"LLM call failed: {e}",
            metadata=metadata,
        )

    metadata["model"] = response.model
    if response.usage:
        metadata["usage"] = response.usage
    return AnalysisResult(
        success=True,
        template_key=template_key,
        prompt=prompt,
        response=response.text,
        metadata=metadata,
    )


async def run_analysis(
    store: TemplateStore,
    template_key: str,
    input_text: str,
    client: Optional[LLMClient] = None,
    model: Optional[str] = None,
) -> AnalysisResult:
    """Render ``template_key`` with ``input_text`` as its {{INPUT}}."""
    logger.info(f"Using template: {template_key}")
    return await analyze_with_template(
        store, template_key, {"input": input_text}, client=client, model=model
    )
