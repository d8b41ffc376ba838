import os
from dotenv import load_dotenv
from sqlalchemy import create_engine, text

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./beer_reviews.db")

if DATABASE_URL.startswith("sqlite"):
    engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False})
else:
    engine = create_engine(DATABASE_URL)


SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS users (
        user_id VARCHAR(32) PRIMARY KEY,
        username VARCHAR(255) NOT NULL UNIQUE,
        password_hash VARCHAR(255) NOT NULL,
        first_name VARCHAR(255) NOT NULL DEFAULT '',
        last_name VARCHAR(255) NOT NULL DEFAULT ''
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS beers (
        beer_id VARCHAR(32) PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        style VARCHAR(255),
        abv FLOAT,
        ibu FLOAT,
        description TEXT,
        brewery VARCHAR(255)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS reviews (
        review_id VARCHAR(32) PRIMARY KEY,
        beer_id VARCHAR(32) NOT NULL REFERENCES beers(beer_id),
        author_id VARCHAR(32) NOT NULL REFERENCES users(user_id),
        comment TEXT NOT NULL,
        created_at VARCHAR(64) NOT NULL
    )
    """,
]


def init_db():
    with engine.begin() as conn:
        for statement in SCHEMA:
            conn.execute(text(statement))
