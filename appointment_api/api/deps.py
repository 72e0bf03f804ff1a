import logging

from fastapi import Request
from pymongo.asynchronous.database import AsyncDatabase

from ..core.errors import InternalError, ValidationError

logger = logging.getLogger(__name__)

FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def get_db(request: Request) -> AsyncDatabase:
    """Get the shared database handle, connecting on first use."""
    manager = getattr(request.app.state, "db_manager", None)
    if manager is None:
        raise InternalError("Database manager is not initialised")
    return await manager.acquire()


async def get_payload(request: Request) -> dict:
    """Read a JSON or form body into a dict.

    Values are passed through untouched. An empty body, or JSON that is not
    an object, gives an empty dict.
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_TYPES):
        form = await request.form()
        return dict(form)

    body = await request.body()
    if not body.strip():
        return {}
    try:
        data = await request.json()
    except ValueError:
        raise ValidationError("Malformed request body")
    if not isinstance(data, dict):
        logger.warning(f"Ignoring non-object JSON body on {request.url.path}")
        return {}
    return data
