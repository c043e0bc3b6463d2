# controllers/comments.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..dependencies import get_db
from ..responses import json_response
from ..schemas import social as schemas
from ..services import comments as service

router = APIRouter()


@router.post("/create-comment", summary="Create a comment on a post")
def create_comment(
    payload: schemas.CreateCommentRequest,
    db: Session = Depends(get_db)
):
    """Insert a comment and return it with the author's profile."""
    comment = service.create_comment(db, payload.user_id, payload.post_id, payload.content)
    return json_response({
        "success": True,
        "comment": schemas.Comment.model_validate(comment).model_dump(),
    })
