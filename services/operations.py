"""Catalogue of the AI operations exposed to the blog."""

from dataclasses import dataclass
from enum import Enum


class Operation(str, Enum):
    TAGS = 'tags'
    SUMMARY = 'summary'
    TITLES = 'titles'
    EXPAND = 'expand'
    IMPROVE = 'improve'
    TONE = 'tone'
    CONTINUE = 'continue'
    GRAMMAR = 'grammar'
    CATEGORY = 'category'
    ANALYZE = 'analyze'


class ModelClass(str, Enum):
    FAST = 'FAST'
    BALANCED = 'BALANCED'


@dataclass(frozen=True)
class OperationSpec:
    operation: Operation
    model_class: ModelClass
    max_chars: int = 0  # 0 = composed operation, no prompt of its own


OPERATIONS = {
    Operation.TAGS: OperationSpec(Operation.TAGS, ModelClass.FAST, 3000),
    Operation.SUMMARY: OperationSpec(Operation.SUMMARY, ModelClass.FAST, 4000),
    Operation.TITLES: OperationSpec(Operation.TITLES, ModelClass.FAST, 2000),
    Operation.EXPAND: OperationSpec(Operation.EXPAND, ModelClass.BALANCED, 2000),
    Operation.IMPROVE: OperationSpec(Operation.IMPROVE, ModelClass.BALANCED, 4000),
    Operation.TONE: OperationSpec(Operation.TONE, ModelClass.FAST, 3000),
    Operation.CONTINUE: OperationSpec(Operation.CONTINUE, ModelClass.BALANCED, 4000),
    Operation.GRAMMAR: OperationSpec(Operation.GRAMMAR, ModelClass.FAST, 4000),
    Operation.CATEGORY: OperationSpec(Operation.CATEGORY, ModelClass.FAST, 2000),
    Operation.ANALYZE: OperationSpec(Operation.ANALYZE, ModelClass.FAST),
}

FEATURES = [op.value for op in Operation]

# Closed set for the category operation; anything else maps to "Other"
CATEGORIES = [
    'Technology', 'Programming', 'Web Development', 'Mobile Development',
    'Data Science', 'AI/Machine Learning', 'DevOps', 'Cybersecurity',
    'Business', 'Marketing', 'Design', 'Lifestyle', 'Travel', 'Food',
    'Health', 'Education', 'Finance', 'Entertainment', 'Sports', 'Other',
]

SUMMARY_LENGTHS = ('short', 'medium', 'long')
TONES = ('professional', 'casual', 'academic', 'friendly', 'formal')
