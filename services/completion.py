"""Completion Invoker and the Gemini provider adapter.

The invoker performs one logical "ask the model" call: a request against the
primary model and, on a transport or provider failure, exactly one retry
against the fixed fallback model. Moderation refusals are never retried.
"""

import asyncio
from dataclasses import dataclass

import google.generativeai as genai
from google.generativeai.types import BlockedPromptException, StopCandidateException

from logging_config import setup_logging
from services.errors import (
    ContentModerationError,
    ProviderBlockedError,
    ProviderError,
    ServiceUnavailableError,
)
from services.operations import OPERATIONS, ModelClass

logger = setup_logging(module_name="completion")


@dataclass(frozen=True)
class ModelSelection:
    primary: str
    fallback: str


class ModelCatalog:
    """Named models. The fast model is the fallback for every operation."""

    def __init__(self, fast, balanced):
        if fast == balanced:
            raise ValueError(f"fast and balanced models must differ, both are {fast!r}")
        self.models = {ModelClass.FAST: fast, ModelClass.BALANCED: balanced}

    @property
    def fallback(self):
        return self.models[ModelClass.FAST]

    def select(self, operation):
        spec = OPERATIONS[operation]
        return ModelSelection(primary=self.models[spec.model_class], fallback=self.fallback)

    def names(self):
        return [model_class.value for model_class in self.models]


class GeminiProvider:
    """Thin adapter over google.generativeai returning the raw completion text."""

    def __init__(self, api_key, temperature=0.7, max_output_tokens=1024):
        genai.configure(api_key=api_key)
        self.generation_config = genai.GenerationConfig(
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )

    def complete(self, system_prompt, user_prompt, model):
        generative_model = genai.GenerativeModel(
            model,
            system_instruction=system_prompt,
            generation_config=self.generation_config,
        )

        try:
            response = generative_model.generate_content(user_prompt)
        except (BlockedPromptException, StopCandidateException) as e:
            raise ProviderBlockedError(str(e)) from e

        feedback = getattr(response, 'prompt_feedback', None)
        if feedback is not None and feedback.block_reason:
            raise ProviderBlockedError(f"Prompt blocked: {feedback.block_reason}")

        for candidate in response.candidates:
            if getattr(candidate.finish_reason, 'name', '') == 'SAFETY':
                raise ProviderBlockedError("Candidate stopped for safety")

        text = response.text
        if not text or not text.strip():
            raise ProviderError(f"Empty completion from {model}")
        return text


class CompletionInvoker:
    """Runs a prompt pair against a model with a single fallback retry.

    At most two provider calls happen per invocation. The provider call is the
    only suspension point; it runs in a worker thread so several invocations
    can be awaited concurrently.
    """

    def __init__(self, provider, classifier, fallback_model):
        self.provider = provider
        self.classifier = classifier
        self.fallback_model = fallback_model

    async def complete(self, system_prompt, user_prompt, model):
        try:
            return await self._attempt(system_prompt, user_prompt, model)
        except ContentModerationError:
            raise
        except Exception as e:
            logger.warning("Gemini API error with model %s: %s", model, e)
            if model == self.fallback_model:
                raise ServiceUnavailableError() from e

        logger.info("Retrying with fallback model: %s", self.fallback_model)
        try:
            return await self._attempt(system_prompt, user_prompt, self.fallback_model)
        except ContentModerationError:
            raise
        except Exception as e:
            logger.error("Fallback model %s also failed: %s", self.fallback_model, e)
            raise ServiceUnavailableError() from e

    async def _attempt(self, system_prompt, user_prompt, model):
        try:
            completion = await asyncio.to_thread(self.provider.complete, system_prompt, user_prompt, model)
        except ProviderBlockedError as e:
            logger.info("Provider safety block on %s: %s", model, e)
            raise ContentModerationError(
                'Your content was flagged by safety filters. Please modify your content and try again.'
            ) from e

        if self.classifier.classify(completion):
            logger.info("Refusal detected in completion from %s", model)
            raise ContentModerationError()

        return completion
