"""Prompt Builder.

Each builder turns user content plus a few knobs into a (system, user) pair.
The system prompt pins the output format down as tightly as possible so the
parser in services/parsing.py only has to handle a narrow shape. Builders are
pure: no network, no exceptions, unknown options fall back to defaults.
"""

from typing import NamedTuple

from services.operations import CATEGORIES, OPERATIONS, Operation


class PromptPair(NamedTuple):
    system: str
    user: str


SUMMARY_LENGTH_INSTRUCTIONS = {
    'short': '1-2 sentences, under 50 words',
    'medium': 'A paragraph, around 100 words',
    'long': 'Detailed summary, around 200 words',
}


def _clip(operation, content):
    """Truncate content to the operation's character budget."""
    return (content or '')[:OPERATIONS[operation].max_chars]


def build_tags_prompt(content, max_tags=5):
    max_tags = max_tags or 5
    system = (
        "You are a content tagging expert. Extract the most relevant tags from the given blog content.\n\n"
        "RULES:\n"
        "- Return ONLY a JSON array of strings, no explanation\n"
        "- Tags should be lowercase, single words or short phrases\n"
        f"- Maximum {max_tags} tags\n"
        "- Focus on main topics, technologies, concepts\n"
        "- Make tags SEO-friendly and searchable\n\n"
        'Example output: ["javascript", "web development", "react", "frontend", "tutorial"]'
    )
    user = f"Extract tags from this blog content:\n\n{_clip(Operation.TAGS, content)}"
    return PromptPair(system, user)


def build_summary_prompt(content, length='short'):
    if length not in SUMMARY_LENGTH_INSTRUCTIONS:
        length = 'short'
    system = (
        f"You are a content summarizer. Create a {length} summary.\n\n"
        "RULES:\n"
        f"- Length: {SUMMARY_LENGTH_INSTRUCTIONS[length]}\n"
        "- Capture the main points and key takeaways\n"
        "- Write in third person\n"
        "- Be concise and informative\n"
        "- Return ONLY the summary text, no labels or prefixes"
    )
    user = f"Summarize this blog content:\n\n{_clip(Operation.SUMMARY, content)}"
    return PromptPair(system, user)


def build_titles_prompt(content, count=5):
    count = count or 5
    system = (
        "You are a headline expert. Generate catchy, SEO-optimized blog titles.\n\n"
        "RULES:\n"
        "- Return ONLY a JSON array of strings\n"
        f"- Generate exactly {count} different title options\n"
        "- Titles should be engaging and click-worthy\n"
        "- Keep titles under 70 characters\n"
        "- Use power words and numbers when appropriate\n"
        "- Vary the style (question, how-to, listicle, etc.)\n\n"
        'Example output: ["10 Ways to Master JavaScript", "The Ultimate Guide to Web Development"]'
    )
    user = f"Generate {count} title options for this blog:\n\n{_clip(Operation.TITLES, content)}"
    return PromptPair(system, user)


def build_expand_prompt(text, tone='professional'):
    tone = tone or 'professional'
    system = (
        "You are a writing assistant. Expand the given text into a fuller, more detailed version.\n\n"
        "RULES:\n"
        "- Maintain the original meaning and intent\n"
        f"- Use a {tone} tone\n"
        "- Add relevant details, examples, or explanations\n"
        "- Double or triple the length naturally\n"
        "- Return ONLY the expanded text, no labels"
    )
    return PromptPair(system, _clip(Operation.EXPAND, text))


def build_improve_prompt(text):
    system = (
        "You are a professional editor. Improve the given text for clarity, grammar, and style.\n\n"
        "Return ONLY a JSON object with:\n"
        '- "improved": the improved version of the text\n'
        '- "changes": array of changes made (max 5)\n\n'
        "Example output:\n"
        '{"improved": "The improved text here...", '
        '"changes": ["Fixed grammar in sentence 2", "Improved clarity"]}'
    )
    return PromptPair(system, _clip(Operation.IMPROVE, text))


def build_tone_prompt(text, tone='professional'):
    tone = tone or 'professional'
    system = (
        f"You are a writing assistant. Rewrite the given text in a {tone} tone.\n\n"
        "RULES:\n"
        "- Keep the same meaning and information\n"
        f"- Adjust vocabulary and sentence structure for the {tone} tone\n"
        "- Return ONLY the rewritten text"
    )
    return PromptPair(system, _clip(Operation.TONE, text))


def build_continue_prompt(text, sentences=3):
    sentences = sentences or 3
    system = (
        "You are a writing assistant. Continue the given text naturally.\n\n"
        "RULES:\n"
        f"- Add approximately {sentences} more sentences\n"
        "- Match the existing writing style and tone\n"
        "- Continue the thought or topic logically\n"
        "- Return ONLY the continuation (not the original text)"
    )
    return PromptPair(system, _clip(Operation.CONTINUE, text))


def build_grammar_prompt(text):
    system = (
        "You are a grammar and spelling checker. Analyze the text for errors.\n\n"
        "Return ONLY a JSON object with:\n"
        '- "corrected": the corrected text\n'
        '- "errors": array of errors found, each with:\n'
        '  - "original": the incorrect text\n'
        '  - "correction": the fix\n'
        '  - "type": "grammar" | "spelling" | "punctuation" | "style"\n\n'
        "If no errors found, return empty errors array.\n\n"
        "Example:\n"
        '{"corrected": "The cat sat on the mat.", '
        '"errors": [{"original": "sitted", "correction": "sat", "type": "grammar"}]}'
    )
    return PromptPair(system, _clip(Operation.GRAMMAR, text))


def build_category_prompt(content):
    system = (
        "You are a content classifier. Classify the given content into ONE of these categories:\n"
        f"{', '.join(CATEGORIES)}\n\n"
        "RULES:\n"
        "- Return ONLY the category name, nothing else\n"
        "- Choose the most relevant category\n"
        '- If unsure, use "Other"'
    )
    user = f"Classify this content:\n\n{_clip(Operation.CATEGORY, content)}"
    return PromptPair(system, user)


_BUILDERS = {
    Operation.TAGS: lambda content, params: build_tags_prompt(content, params.get('max_tags', 5)),
    Operation.SUMMARY: lambda content, params: build_summary_prompt(content, params.get('length', 'short')),
    Operation.TITLES: lambda content, params: build_titles_prompt(content, params.get('count', 5)),
    Operation.EXPAND: lambda content, params: build_expand_prompt(content, params.get('tone', 'professional')),
    Operation.IMPROVE: lambda content, params: build_improve_prompt(content),
    Operation.TONE: lambda content, params: build_tone_prompt(content, params.get('tone', 'professional')),
    Operation.CONTINUE: lambda content, params: build_continue_prompt(content, params.get('sentences', 3)),
    Operation.GRAMMAR: lambda content, params: build_grammar_prompt(content),
    Operation.CATEGORY: lambda content, params: build_category_prompt(content),
}


def build_prompt(operation, content, **params):
    """Return the PromptPair for a single-call operation.

    Full analysis is a composition of other operations and has no prompt.
    """
    return _BUILDERS[Operation(operation)](content, params)
