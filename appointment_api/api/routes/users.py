from fastapi import APIRouter, Depends, status
from pymongo.asynchronous.database import AsyncDatabase

from ..deps import get_db, get_payload
from ...core.errors import NotFoundError
from ...models import InsertedResponse, User
from ...services.user_service import UserService

router = APIRouter(tags=["Users"])


@router.get("/users/{userid}", response_model=User)
async def get_user(userid: str, db: AsyncDatabase = Depends(get_db)):
    """Get a user by ``user_id``."""
    user = await UserService(db).get_user(userid)
    if user is None:
        raise NotFoundError(content=None)
    return user


@router.post(
    "/register-user",
    response_model=InsertedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_user(
    payload: dict = Depends(get_payload),
    db: AsyncDatabase = Depends(get_db),
):
    """Register a new user."""
    inserted_id = await UserService(db).register_user(payload)
    return InsertedResponse(message="User Registered", inserted_id=inserted_id)
