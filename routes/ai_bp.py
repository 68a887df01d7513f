from flask import Blueprint, request, jsonify, current_app
from werkzeug.exceptions import HTTPException
import functools

from auth import require_auth
from logging_config import setup_logging
from services.errors import AINotConfiguredError, ContentModerationError, ServiceUnavailableError
from services.operations import FEATURES, OPERATIONS, SUMMARY_LENGTHS, TONES, Operation


"""
-----------------------Over here in this file all the AI writing tools are exposed.
Every route validates the body, hands the text to the AI service and maps its
failures (moderation refusal, provider outage) to proper HTTP answers.
"""

ai_bp = Blueprint('ai', __name__)#Blueprint registered here to be registered in app.py

logger = setup_logging(module_name="ai_routes")

MODERATION_HINT = ('The AI has safety filters that prevent generating certain types of content. '
                   'Please ensure your content is appropriate for all audiences.')

# Improve and grammar accept more than their prompt keeps; the prompt clips the rest
EDIT_MAX_LENGTH = 5000


def get_ai_service():
    return current_app.extensions['ai_service']


def require_ai(view):
    """Answers 503 before touching the body when no provider key is configured."""

    @functools.wraps(view)
    def wrapper(*args, **kwargs):
        if not get_ai_service().is_available():
            return jsonify({"success": False, "message": AINotConfiguredError.default_message}), 503
        return current_app.ensure_sync(view)(*args, **kwargs)

    return wrapper


def bad_request(message):
    return jsonify({"success": False, "message": message}), 400


def as_int(value, default, maximum):
    """Parses an optional numeric option, clamped to [1, maximum]."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = default
    return max(1, min(number, maximum))


def read_field(name):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    value = data.get(name)
    return data, value if isinstance(value, str) else None


@ai_bp.errorhandler(Exception)
def handle_ai_error(error):
    """Maps AI service failures to HTTP. Moderation is a 422, never a 5xx."""
    if isinstance(error, HTTPException):
        return error

    if isinstance(error, ContentModerationError):
        logger.info("Content moderated: %s", error.message)
        return jsonify({
            "success": False,
            "message": error.message,
            "code": error.code,
            "hint": MODERATION_HINT,
        }), 422

    if isinstance(error, (ServiceUnavailableError, AINotConfiguredError)):
        logger.warning("AI service unavailable: %s", error)
        return jsonify({
            "success": False,
            "message": error.message,
            "code": ServiceUnavailableError.code,
        }), 503

    logger.exception("AI route failed: %s", error)
    return jsonify({
        "success": False,
        "message": "An error occurred while processing your request",
    }), 500


# --- ANALYSIS TOOLS ---

@ai_bp.route('/tags', methods=['POST'])
@require_auth
@require_ai
async def generate_tags():
    data, content = read_field('content')
    if not content or not content.strip():
        return bad_request('Content is required for tag generation')
    if len(content) < 50:
        return bad_request('Content must be at least 50 characters for accurate tagging')

    tags = await get_ai_service().generate_tags(content, as_int(data.get('maxTags'), 5, 10))
    return jsonify({"success": True, "tags": tags, "count": len(tags)})


@ai_bp.route('/summary', methods=['POST'])
@require_auth
@require_ai
async def generate_summary():
    data, content = read_field('content')
    length = data.get('length', 'short')
    if not content or not content.strip():
        return bad_request('Content is required for summarization')
    if length not in SUMMARY_LENGTHS:
        return bad_request('Length must be "short", "medium", or "long"')

    summary = await get_ai_service().generate_summary(content, length)
    return jsonify({"success": True, "summary": summary, "length": length})


@ai_bp.route('/titles', methods=['POST'])
@require_auth
@require_ai
async def generate_titles():
    data, content = read_field('content')
    if not content or not content.strip():
        return bad_request('Content is required for title generation')

    titles = await get_ai_service().generate_titles(content, as_int(data.get('count'), 5, 10))
    return jsonify({"success": True, "titles": titles, "count": len(titles)})


@ai_bp.route('/category', methods=['POST'])
@require_auth
@require_ai
async def classify_category():
    _, content = read_field('content')
    if not content or not content.strip():
        return bad_request('Content is required for classification')

    category = await get_ai_service().get_category(content)
    return jsonify({"success": True, "category": category})


@ai_bp.route('/analyze', methods=['POST'])
@require_auth
@require_ai
async def analyze_content():
    """Tags, summary, category and titles together. All four succeed or the call fails."""
    _, content = read_field('content')
    if not content or not content.strip():
        return bad_request('Content is required for analysis')
    if len(content) < 100:
        return bad_request('Content must be at least 100 characters for full analysis')

    analysis = await get_ai_service().analyze(content)
    return jsonify({"success": True, "analysis": analysis})


# --- WRITING ASSISTANT ---

@ai_bp.route('/expand', methods=['POST'])
@require_auth
@require_ai
async def expand_text():
    data, text = read_field('text')
    tone = data.get('tone') or 'professional'
    if not text or not text.strip():
        return bad_request('Text is required for expansion')
    if len(text) > OPERATIONS[Operation.EXPAND].max_chars:
        return bad_request('Text must be under 2000 characters for expansion')

    expanded = await get_ai_service().expand_text(text, tone)
    return jsonify({
        "success": True,
        "expanded": expanded,
        "originalLength": len(text),
        "expandedLength": len(expanded),
    })


@ai_bp.route('/improve', methods=['POST'])
@require_auth
@require_ai
async def improve_text():
    _, text = read_field('text')
    if not text or not text.strip():
        return bad_request('Text is required for improvement')
    if len(text) > EDIT_MAX_LENGTH:
        return bad_request('Text must be under 5000 characters')

    result = await get_ai_service().improve_text(text)
    return jsonify({"success": True, **result})


@ai_bp.route('/tone', methods=['POST'])
@require_auth
@require_ai
async def change_tone():
    data, text = read_field('text')
    target_tone = data.get('targetTone')
    if not text or not text.strip():
        return bad_request('Text is required')
    if target_tone not in TONES:
        return bad_request(f"Target tone must be one of: {', '.join(TONES)}")
    if len(text) > OPERATIONS[Operation.TONE].max_chars:
        return bad_request('Text must be under 3000 characters')

    rewritten = await get_ai_service().change_tone(text, target_tone)
    return jsonify({"success": True, "rewritten": rewritten, "targetTone": target_tone})


@ai_bp.route('/continue', methods=['POST'])
@require_auth
@require_ai
async def continue_writing():
    data, text = read_field('text')
    if not text or not text.strip():
        return bad_request('Text is required for continuation')
    if len(text) < 20:
        return bad_request('Please provide at least 20 characters for context')

    sentences = as_int(data.get('sentences'), 3, 10)
    continuation = await get_ai_service().continue_writing(text, sentences)
    return jsonify({"success": True, "continuation": continuation, "sentences": sentences})


@ai_bp.route('/grammar', methods=['POST'])
@require_auth
@require_ai
async def grammar_check():
    _, text = read_field('text')
    if not text or not text.strip():
        return bad_request('Text is required for grammar check')
    if len(text) > EDIT_MAX_LENGTH:
        return bad_request('Text must be under 5000 characters')

    result = await get_ai_service().grammar_check(text)
    return jsonify({"success": True, **result, "errorCount": len(result['errors'])})


@ai_bp.route('/status', methods=['GET'])
@require_auth
def ai_status():
    """Reports whether the provider key is configured and what the client may call."""
    service = get_ai_service()
    return jsonify({
        "success": True,
        "available": service.is_available(),
        "models": service.models.names(),
        "features": FEATURES,
    })
