"""Shared test fixtures for the Smart Blog API."""

import json
import os
import sys

import pytest

# Ensure repository root is importable
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from app import create_app
from auth import issue_token
from config import Config
from database import init_db
from services.ai_service import AIService
from services.completion import CompletionInvoker, ModelCatalog
from services.moderation import PatternRefusalClassifier

FAST_MODEL = 'fast-model'
BALANCED_MODEL = 'balanced-model'
TEST_JWT_SECRET = 'test-secret'

LONG_CONTENT = (
    "React hooks changed how we write components. In this post we walk through useState, "
    "useEffect and custom hooks, and show how a small Node.js backend feeds data to the UI."
)


class FakeProvider:
    """Stands in for GeminiProvider.

    `responder` is either a list of replies consumed in order, or a callable
    (system_prompt, user_prompt, model) -> reply. A reply that is an exception
    instance is raised instead of returned.
    """

    def __init__(self, responder):
        self.responder = responder
        self.calls = []

    def complete(self, system_prompt, user_prompt, model):
        self.calls.append((system_prompt, user_prompt, model))
        if callable(self.responder):
            reply = self.responder(system_prompt, user_prompt, model)
        else:
            reply = self.responder.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def models_called(self):
        return [call[2] for call in self.calls]


def reply_by_operation(overrides=None):
    """Responder answering each operation with a well-formed completion."""
    replies = {
        'tagging expert': json.dumps(["react", "hooks", "javascript", "frontend", "node.js"]),
        'summarizer': 'A walkthrough of React hooks backed by a small Node.js API.',
        'content classifier': 'Web Development',
        'headline expert': json.dumps(["Mastering React Hooks", "Hooks in Practice", "React Hooks 101"]),
        'Expand the given text': 'An expanded version of the text.',
        'professional editor': json.dumps({"improved": "Improved text.", "changes": ["Fixed grammar"]}),
        'Rewrite the given text': 'Rewritten text.',
        'Continue the given text': 'And then the story went on.',
        'grammar and spelling checker': json.dumps({
            "corrected": "The cat sat on the mat.",
            "errors": [{"original": "sitted", "correction": "sat", "type": "grammar"}],
        }),
    }
    replies.update(overrides or {})

    def respond(system_prompt, user_prompt, model):
        for marker, reply in replies.items():
            if marker in system_prompt:
                return reply
        raise AssertionError(f"unexpected prompt: {system_prompt[:60]}")

    return respond


def make_service(provider):
    models = ModelCatalog(FAST_MODEL, BALANCED_MODEL)
    invoker = CompletionInvoker(provider, PatternRefusalClassifier(), models.fallback)
    return AIService(invoker=invoker, models=models)


@pytest.fixture
def provider():
    return FakeProvider(reply_by_operation())


@pytest.fixture
def ai_service(provider):
    return make_service(provider)


@pytest.fixture
def app(tmp_path, ai_service):
    class TestConfig(Config):
        TESTING = True
        GEMINI_API_KEY = None
        JWT_SECRET = TEST_JWT_SECRET
        DB_PATH = str(tmp_path / "test_blog.db")

    init_db(TestConfig.DB_PATH)
    app = create_app(TestConfig)
    app.extensions['ai_service'] = ai_service
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {issue_token('user-1', TEST_JWT_SECRET)}"}


@pytest.fixture
def other_auth_headers():
    return {"Authorization": f"Bearer {issue_token('user-2', TEST_JWT_SECRET)}"}
