from flask import Blueprint, request, jsonify, g, current_app
from datetime import datetime, timezone
import asyncio, json, re, sqlite3, uuid

from auth import require_auth
from database import get_db, blog_to_dict
from logging_config import setup_logging
from services.errors import AIServiceError

blogs_bp = Blueprint('blogs', __name__)

logger = setup_logging(module_name="blogs")

MAX_CONTENT_LENGTH = 50000
AUTO_TAG_MIN_LENGTH = 100
URL_RE = re.compile(r'^https?://.+')
LANGUAGE_RE = re.compile(r'^[a-z]{2}(-[A-Z]{2})?$')


# --- HELPER FUNCTIONS ---

def now():
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def validate_blog_input(content, media=None, language=None):
    """Returns the list of validation errors, empty when the input is fine."""
    errors = []

    if not isinstance(content, str) or not content.strip():
        errors.append('Blog content cannot be empty')
    elif len(content) > MAX_CONTENT_LENGTH:
        errors.append('Blog content cannot exceed 50,000 characters')

    if media is not None:
        if not isinstance(media, list):
            errors.append('Media must be a list of URLs')
        else:
            for index, url in enumerate(media):
                if not isinstance(url, str) or not URL_RE.match(url):
                    errors.append(f'Media URL at index {index} is invalid')

    if language and (not isinstance(language, str) or not LANGUAGE_RE.match(language)):
        errors.append('Language code must be in format: en or en-US')

    return errors


def page_args(default_limit=10, max_limit=50):
    """Reads page/limit query args. Bad values fall back to the defaults."""
    page = max(request.args.get('page', 1, type=int) or 1, 1)
    limit = request.args.get('limit', default_limit, type=int) or default_limit
    return page, max(1, min(limit, max_limit))


def pagination(page, limit, total):
    total_pages = (total + limit - 1) // limit
    return {
        "currentPage": page,
        "totalPages": total_pages,
        "totalBlogs": total,
        "blogsPerPage": limit,
        "hasNextPage": page < total_pages,
        "hasPrevPage": page > 1,
    }


def list_blogs(author_id=None, order='DESC'):
    """Runs the paginated listing shared by the feed and the per-author views."""
    db = get_db()
    page, limit = page_args()

    where, params = '', []
    if author_id:
        where = 'WHERE author_id = ?'
        params.append(author_id)

    total = db.execute(f'SELECT COUNT(*) FROM blogs {where}', params).fetchone()[0]
    rows = db.execute(
        f'SELECT * FROM blogs {where} ORDER BY created_at {order} LIMIT ? OFFSET ?',
        params + [limit, (page - 1) * limit],
    ).fetchall()
    return [blog_to_dict(row) for row in rows], pagination(page, limit, total)


async def auto_tag(content, tags):
    """Tags, summary and category for a new blog.

    Advisory only: any AI failure is logged and the blog is saved without it.
    Returns (tags, summary, category, ai_generated).
    """
    service = current_app.extensions['ai_service']
    if not service.is_available() or len(content) < AUTO_TAG_MIN_LENGTH:
        return tags, None, 'Other', False

    async def caller_tags():
        return tags

    try:
        ai_tags, summary, category = await asyncio.gather(
            caller_tags() if tags else service.generate_tags(content, 5),
            service.generate_summary(content, 'short'),
            service.get_category(content),
        )
    except AIServiceError as e:
        logger.warning("AI auto-tagging failed, continuing without: %s", e)
        return tags, None, 'Other', False

    return ai_tags, summary, category, True


# --- READ ROUTES ---

@blogs_bp.route('', methods=['GET'])
def get_blogs():
    """Public feed, newest first unless ?sort=oldest. Optional ?author filter."""
    order = 'ASC' if request.args.get('sort') == 'oldest' else 'DESC'
    blogs, pages = list_blogs(request.args.get('author'), order)
    return jsonify({"blogs": blogs, "pagination": pages})


@blogs_bp.route('/recent', methods=['GET'])
def get_recent_blogs():
    limit = max(1, min(request.args.get('limit', 10, type=int) or 10, 20))
    rows = get_db().execute('SELECT * FROM blogs ORDER BY created_at DESC LIMIT ?', (limit,)).fetchall()
    return jsonify({"blogs": [blog_to_dict(row) for row in rows]})


@blogs_bp.route('/<blog_id>', methods=['GET'])
def get_blog(blog_id):
    row = get_db().execute('SELECT * FROM blogs WHERE id = ?', (blog_id,)).fetchone()
    if row is None:
        return jsonify({"message": "Blog post not found"}), 404
    return jsonify(blog_to_dict(row))


@blogs_bp.route('/user/<author_id>', methods=['GET'])
def get_user_blogs(author_id):
    blogs, pages = list_blogs(author_id)
    return jsonify({"blogs": blogs, "authorId": author_id, "pagination": pages})


@blogs_bp.route('/my/posts', methods=['GET'])
@require_auth
def get_my_blogs():
    blogs, pages = list_blogs(g.user_id)
    return jsonify({"blogs": blogs, "pagination": pages})


# --- WRITE ROUTES ---

@blogs_bp.route('', methods=['POST'])
@require_auth
async def create_blog():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    content = data.get('content')
    media = data.get('media')
    language = data.get('language')
    errors = validate_blog_input(content, media, language)
    if errors:
        return jsonify({"message": "Validation failed", "errors": errors}), 400

    content = content.strip()
    tags = data.get('tags') if isinstance(data.get('tags'), list) else []

    if data.get('autoTag', True):
        tags, summary, category, ai_generated = await auto_tag(content, tags)
    else:
        summary, category, ai_generated = None, 'Other', False

    blog_id = str(uuid.uuid4())
    created = now()
    db = get_db()
    try:
        db.execute('''INSERT INTO blogs (id, author_id, title, content, media, template, font, language,
                                         tags, summary, category, ai_generated, created_at, updated_at)
                      VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)''',
                   (blog_id, g.user_id, data.get('title') or None, content, json.dumps(media or []),
                    data.get('template') or 'default', data.get('font') or 'Arial', language or 'en',
                    json.dumps(tags), summary, category, int(ai_generated), created, created))
        db.commit()
    except sqlite3.Error as e:
        logger.error("Create blog error: %s", e)
        return jsonify({"message": "Server error while creating blog"}), 500

    row = db.execute('SELECT * FROM blogs WHERE id = ?', (blog_id,)).fetchone()
    return jsonify({"message": "Blog post created successfully", "blog": blog_to_dict(row)}), 201


def load_owned_blog(blog_id):
    """Returns (row, None) for the caller's own blog, or (None, error response)."""
    row = get_db().execute('SELECT * FROM blogs WHERE id = ?', (blog_id,)).fetchone()
    if row is None:
        return None, (jsonify({"message": "Blog post not found"}), 404)
    if row['author_id'] != g.user_id:
        return None, (jsonify({"message": "You are not authorized to modify this blog post"}), 401)
    return row, None


@blogs_bp.route('/<blog_id>', methods=['PUT'])
@require_auth
def update_blog(blog_id):
    row, error = load_owned_blog(blog_id)
    if error:
        return error

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    def incoming(field):
        # Absent or null fields keep the stored value
        value = data.get(field)
        return row[field] if value is None else value

    content = incoming('content')
    media = data.get('media')
    if media is None:
        media = json.loads(row['media'] or '[]')
    language = incoming('language')
    errors = validate_blog_input(content, media, language)
    if errors:
        return jsonify({"message": "Validation failed", "errors": errors}), 400

    db = get_db()
    try:
        db.execute('''UPDATE blogs SET content = ?, media = ?, template = ?, font = ?, language = ?,
                                       title = ?, updated_at = ?
                      WHERE id = ?''',
                   (content.strip(), json.dumps(media), incoming('template'),
                    incoming('font'), language, incoming('title'),
                    now(), blog_id))
        db.commit()
    except sqlite3.Error as e:
        logger.error("Update blog error: %s", e)
        return jsonify({"message": "Server error while updating blog"}), 500

    row = db.execute('SELECT * FROM blogs WHERE id = ?', (blog_id,)).fetchone()
    return jsonify({"message": "Blog post updated successfully", "blog": blog_to_dict(row)})


@blogs_bp.route('/<blog_id>', methods=['DELETE'])
@require_auth
def delete_blog(blog_id):
    _, error = load_owned_blog(blog_id)
    if error:
        return error

    db = get_db()
    db.execute('DELETE FROM blogs WHERE id = ?', (blog_id,))
    db.commit()
    return jsonify({"message": "Blog post deleted successfully"})
