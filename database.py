import json
import sqlite3
from flask import current_app, g

from logging_config import setup_logging

logger = setup_logging(module_name="database")


def get_db():
    """
    Opens a new database connection if there is none yet for the
    current application context.
    """
    if 'db' not in g:
        # Increase timeout to 30s to prevent 'Database is locked' errors under load
        # check_same_thread=False: async views run their body on a worker thread
        g.db = sqlite3.connect(current_app.config["DB_PATH"], timeout=30, check_same_thread=False)
        g.db.row_factory = sqlite3.Row
    return g.db


def close_db(exc=None):
    """Closes the connection opened by get_db, if any. Registered as a teardown."""
    db = g.pop('db', None)
    if db is not None:
        db.close()


def init_db(db_path):
    """
    Initializes the database with the required schema.
    Run this once (or on app startup) to ensure tables exist.
    """
    conn = sqlite3.connect(db_path)
    c = conn.cursor()

    # BLOGS TABLE
    # tags and media are JSON encoded lists. summary/category/tags are filled
    # by the AI auto-tagging on creation when it is available.
    c.execute('''CREATE TABLE IF NOT EXISTS blogs (
        id TEXT PRIMARY KEY,
        author_id TEXT NOT NULL,
        title TEXT,
        content TEXT NOT NULL,
        media TEXT DEFAULT '[]',
        template TEXT DEFAULT 'default',
        font TEXT DEFAULT 'Arial',
        language TEXT DEFAULT 'en',
        tags TEXT DEFAULT '[]',
        summary TEXT,
        category TEXT DEFAULT 'Other',
        ai_generated INTEGER DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )''')
    c.execute('CREATE INDEX IF NOT EXISTS idx_blogs_created_at ON blogs (created_at)')
    c.execute('CREATE INDEX IF NOT EXISTS idx_blogs_author ON blogs (author_id, created_at)')

    conn.commit()
    conn.close()
    logger.info("Database initialized at %s", db_path)


def blog_to_dict(row):
    """Turns a blogs row into the JSON shape the client expects."""
    return {
        'id': row['id'],
        'authorId': row['author_id'],
        'title': row['title'],
        'content': row['content'],
        'media': json.loads(row['media'] or '[]'),
        'template': row['template'],
        'font': row['font'],
        'language': row['language'],
        'tags': json.loads(row['tags'] or '[]'),
        'summary': row['summary'],
        'category': row['category'],
        'aiGenerated': bool(row['ai_generated']),
        'createdAt': row['created_at'],
        'updatedAt': row['updated_at'],
    }
