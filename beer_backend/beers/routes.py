from fastapi import APIRouter, HTTPException, Depends, Response
from pydantic import BaseModel, Field
from sqlalchemy import text
from typing import Optional, List
from datetime import datetime
from uuid import uuid4
import logging
import pytz

from ..database import engine
from ..security import require_user

logger = logging.getLogger(__name__)

router = APIRouter()

BEER_FIELDS = ("name", "style", "abv", "ibu", "description", "brewery")


class ReviewAuthor(BaseModel):
    id: str = Field(alias="_id")


class NewReview(BaseModel):
    author: ReviewAuthor
    comment: str
    date: Optional[str] = None


class NewBeer(BaseModel):
    name: str
    style: Optional[str] = None
    abv: Optional[float] = None
    ibu: Optional[float] = None
    description: Optional[str] = None
    brewery: Optional[str] = None


class BeerUpdate(BaseModel):
    id: str
    name: Optional[str] = None
    style: Optional[str] = None
    abv: Optional[float] = None
    ibu: Optional[float] = None
    description: Optional[str] = None
    brewery: Optional[str] = None
    reviews: Optional[List[NewReview]] = None


def fetch_reviews(conn, beer_id=None):
    """Reviews with their authors, grouped by beer id, oldest first."""
    query = """
        SELECT r.beer_id, r.comment, r.created_at,
               u.user_id, u.first_name, u.last_name
        FROM reviews r
        JOIN users u ON r.author_id = u.user_id
    """
    params = {}
    if beer_id is not None:
        query += " WHERE r.beer_id = :beer_id"
        params["beer_id"] = beer_id
    query += " ORDER BY r.created_at, r.review_id"

    grouped = {}
    for row in conn.execute(text(query), params).fetchall():
        grouped.setdefault(row.beer_id, []).append({
            "author": {
                "_id": row.user_id,
                "firstName": row.first_name,
                "lastName": row.last_name,
            },
            "comment": row.comment,
            "date": row.created_at,
        })
    return grouped


def serialize_beer(row, reviews):
    return {
        "id": row.beer_id,
        "name": row.name,
        "style": row.style,
        "abv": row.abv,
        "ibu": row.ibu,
        "description": row.description,
        "brewery": row.brewery,
        "reviews": reviews,
    }


def get_beer_row(conn, beer_id):
    return conn.execute(
        text("SELECT * FROM beers WHERE beer_id = :beer_id"),
        {"beer_id": beer_id}
    ).fetchone()


@router.get("/beers")
def get_beers():
    with engine.connect() as conn:
        rows = conn.execute(text("SELECT * FROM beers ORDER BY name")).fetchall()
        reviews = fetch_reviews(conn)
    return {"beers": [serialize_beer(row, reviews.get(row.beer_id, [])) for row in rows]}


@router.get("/beers/{beer_id}")
def get_beer(beer_id: str):
    with engine.connect() as conn:
        row = get_beer_row(conn, beer_id)
        if not row:
            raise HTTPException(status_code=404, detail="Beer not found")
        reviews = fetch_reviews(conn, beer_id)
    return serialize_beer(row, reviews.get(beer_id, []))


@router.post("/beers", status_code=201)
def create_beer(beer: NewBeer, user=Depends(require_user)):
    if not beer.name.strip():
        raise HTTPException(status_code=422, detail="Missing field: name")

    beer_id = uuid4().hex
    with engine.begin() as conn:
        conn.execute(
            text("""
                INSERT INTO beers (beer_id, name, style, abv, ibu, description, brewery)
                VALUES (:beer_id, :name, :style, :abv, :ibu, :description, :brewery)
            """),
            {"beer_id": beer_id, **beer.model_dump()}
        )
        row = get_beer_row(conn, beer_id)

    logger.info("User %s created beer %s (%s)", user.username, beer.name, beer_id)
    return serialize_beer(row, [])


@router.put("/beers/{beer_id}", status_code=204)
def update_beer(beer_id: str, update: BeerUpdate, user=Depends(require_user)):
    if update.id != beer_id:
        raise HTTPException(
            status_code=400,
            detail=f"Request path id ({beer_id}) and request body id ({update.id}) must match"
        )

    fields = update.model_dump(include=set(BEER_FIELDS), exclude_unset=True)
    if "name" in fields and not (fields["name"] or "").strip():
        raise HTTPException(status_code=422, detail="Missing field: name")

    for review in update.reviews or []:
        if review.author.id != user.user_id:
            raise HTTPException(status_code=403, detail="Reviews can only be posted as the logged-in user")

    with engine.begin() as conn:
        if not get_beer_row(conn, beer_id):
            raise HTTPException(status_code=404, detail="Beer not found")

        if fields:
            assignments = ", ".join(f"{name} = :{name}" for name in fields)
            conn.execute(
                text(f"UPDATE beers SET {assignments} WHERE beer_id = :beer_id"),
                {"beer_id": beer_id, **fields}
            )

        for review in update.reviews or []:
            conn.execute(
                text("""
                    INSERT INTO reviews (review_id, beer_id, author_id, comment, created_at)
                    VALUES (:review_id, :beer_id, :author_id, :comment, :created_at)
                """),
                {
                    "review_id": uuid4().hex,
                    "beer_id": beer_id,
                    "author_id": review.author.id,
                    "comment": review.comment,
                    "created_at": review.date or datetime.now(pytz.utc).isoformat(),
                }
            )

    logger.info("User %s updated beer %s", user.username, beer_id)
    return Response(status_code=204)


@router.delete("/beers/{beer_id}", status_code=204)
def delete_beer(beer_id: str, user=Depends(require_user)):
    with engine.begin() as conn:
        conn.execute(text("DELETE FROM reviews WHERE beer_id = :beer_id"), {"beer_id": beer_id})
        result = conn.execute(text("DELETE FROM beers WHERE beer_id = :beer_id"), {"beer_id": beer_id})
        if result.rowcount == 0:
            raise HTTPException(status_code=404, detail="Beer not found")

    logger.info("User %s deleted beer %s", user.username, beer_id)
    return Response(status_code=204)
