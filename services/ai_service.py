"""AI content tooling for the blog.

caller -> prompt builder -> completion invoker -> response parser -> caller

The service is stateless between calls. Provider, classifier and model names
are handed in at construction time; AIService.from_config wires the real
Gemini-backed pipeline.
"""

import asyncio

from logging_config import setup_logging
from services.completion import CompletionInvoker, GeminiProvider, ModelCatalog
from services.errors import AINotConfiguredError, AIServiceError
from services.moderation import PatternRefusalClassifier
from services.operations import Operation
from services.parsing import (
    Degraded,
    Err,
    parse_category,
    parse_grammar,
    parse_improvement,
    parse_tags,
    parse_text,
    parse_titles,
    unwrap,
)
from services.prompts import build_prompt

logger = setup_logging(module_name="ai_service")


_PARSERS = {
    Operation.TAGS: lambda completion, content, params: parse_tags(completion, params.get('max_tags', 5)),
    Operation.TITLES: lambda completion, content, params: parse_titles(completion, params.get('count', 5)),
    Operation.IMPROVE: lambda completion, content, params: parse_improvement(completion, content),
    Operation.GRAMMAR: lambda completion, content, params: parse_grammar(completion, content),
    Operation.CATEGORY: lambda completion, content, params: parse_category(completion),
}


class AIService:

    def __init__(self, invoker, models, available=True):
        self.invoker = invoker
        self.models = models
        self.available = available

    @classmethod
    def from_config(cls, config):
        """Build the Gemini-backed service. Without an API key it is unavailable."""
        models = ModelCatalog(config.GEMINI_FAST_MODEL, config.GEMINI_BALANCED_MODEL)
        if not config.GEMINI_API_KEY:
            logger.warning("GEMINI_API_KEY not set, AI features are disabled")
            return cls(invoker=None, models=models, available=False)

        provider = GeminiProvider(
            api_key=config.GEMINI_API_KEY,
            temperature=config.AI_TEMPERATURE,
            max_output_tokens=config.AI_MAX_OUTPUT_TOKENS,
        )
        invoker = CompletionInvoker(provider, PatternRefusalClassifier(), models.fallback)
        return cls(invoker=invoker, models=models)

    def is_available(self):
        return self.available and self.invoker is not None

    async def run(self, operation, content, **params):
        """Run one single-call operation and return an Ok, Degraded or Err outcome."""
        operation = Operation(operation)
        if not self.is_available():
            return Err(AINotConfiguredError())

        system_prompt, user_prompt = build_prompt(operation, content, **params)
        selection = self.models.select(operation)
        try:
            completion = await self.invoker.complete(system_prompt, user_prompt, selection.primary)
        except AIServiceError as e:
            return Err(e)

        parser = _PARSERS.get(operation)
        outcome = parser(completion, content, params) if parser else parse_text(completion)
        if isinstance(outcome, Degraded):
            logger.warning("Degraded %s result: %s", operation.value, outcome.reason)
        return outcome

    async def generate_tags(self, content, max_tags=5):
        return unwrap(await self.run(Operation.TAGS, content, max_tags=max_tags))

    async def generate_summary(self, content, length='short'):
        return unwrap(await self.run(Operation.SUMMARY, content, length=length))

    async def generate_titles(self, content, count=5):
        return unwrap(await self.run(Operation.TITLES, content, count=count))

    async def expand_text(self, text, tone='professional'):
        return unwrap(await self.run(Operation.EXPAND, text, tone=tone))

    async def improve_text(self, text):
        return unwrap(await self.run(Operation.IMPROVE, text))

    async def change_tone(self, text, target_tone):
        return unwrap(await self.run(Operation.TONE, text, tone=target_tone))

    async def continue_writing(self, text, sentences=3):
        return unwrap(await self.run(Operation.CONTINUE, text, sentences=sentences))

    async def grammar_check(self, text):
        return unwrap(await self.run(Operation.GRAMMAR, text))

    async def get_category(self, content):
        return unwrap(await self.run(Operation.CATEGORY, content))

    async def analyze(self, content):
        """Tags, summary, category and titles in one go.

        The four calls run concurrently. If any of them raises, the whole
        analysis raises; callers wanting partial results should call the
        individual operations and handle failures one by one.
        """
        tags, summary, category, titles = await asyncio.gather(
            self.generate_tags(content, 5),
            self.generate_summary(content, 'short'),
            self.get_category(content),
            self.generate_titles(content, 3),
        )
        return {'tags': tags, 'summary': summary, 'category': category, 'titles': titles}
