"""
Database Schema.

DDL for the roommate matching tables. Statements are idempotent.
"""

SCHEMA_STATEMENTS: list[str] = [
    # Profile store (display data and notification target)
    """
    CREATE TABLE IF NOT EXISTS users (
        uid TEXT PRIMARY KEY,
        first_name TEXT NOT NULL DEFAULT '',
        last_name TEXT NOT NULL DEFAULT '',
        image_url TEXT,
        telegram_chat_id TEXT,
        notifications_enabled BOOLEAN NOT NULL DEFAULT TRUE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    # No FK to users: preferences and profiles may live apart
    """
    CREATE TABLE IF NOT EXISTS roommate_preferences (
        uid TEXT PRIMARY KEY,
        age INTEGER NOT NULL,
        gender TEXT NOT NULL,
        description TEXT NOT NULL,
        lifestyles TEXT[] NOT NULL DEFAULT '{}',
        interests TEXT[] NOT NULL DEFAULT '{}',
        location TEXT NOT NULL,
        min_budget NUMERIC(12, 2) NOT NULL,
        max_budget NUMERIC(12, 2) NOT NULL,
        completed BOOLEAN NOT NULL DEFAULT TRUE,
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        CONSTRAINT roommate_preferences_budget_check CHECK (min_budget <= max_budget)
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS roommate_preferences_location_idx
        ON roommate_preferences (location) WHERE completed
    """,
    """
    CREATE TABLE IF NOT EXISTS likes (
        liker_uid TEXT NOT NULL,
        liked_uid TEXT NOT NULL,
        mutual BOOLEAN NOT NULL DEFAULT FALSE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        matched_at TIMESTAMPTZ,
        PRIMARY KEY (liker_uid, liked_uid),
        CONSTRAINT likes_no_self CHECK (liker_uid <> liked_uid)
    )
    """,
    "CREATE INDEX IF NOT EXISTS likes_liked_uid_idx ON likes (liked_uid)",
    """
    CREATE TABLE IF NOT EXISTS passes (
        user_uid TEXT NOT NULL,
        passed_uid TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        PRIMARY KEY (user_uid, passed_uid),
        CONSTRAINT passes_no_self CHECK (user_uid <> passed_uid)
    )
    """,
    # Inbox of like / match notifications
    """
    CREATE TABLE IF NOT EXISTS notifications (
        id BIGSERIAL PRIMARY KEY,
        recipient_uid TEXT NOT NULL,
        sender_uid TEXT,
        title TEXT NOT NULL,
        message TEXT NOT NULL,
        type TEXT NOT NULL DEFAULT 'general',
        data JSONB NOT NULL DEFAULT '{}',
        is_read BOOLEAN NOT NULL DEFAULT FALSE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS notifications_recipient_idx
        ON notifications (recipient_uid, created_at DESC)
    """,
]
