from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

# MongoDB's ``_id``. Kept as an opaque string so it is never mixed up with
# the domain identifiers (``user_id``, ``appointment_id``).
StorageKey = Annotated[str, BeforeValidator(str)]


class Document(BaseModel):
    """A document as stored in a collection.

    ``id`` maps to ``_id``. Fields this service does not know about are kept
    so a document reads back exactly as it was written.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[StorageKey] = Field(alias="_id", default=None)

    def to_document(self) -> dict:
        """Fields to write, without ``_id`` so the database assigns one."""
        return self.model_dump(exclude={"id"})


class MessageResponse(BaseModel):
    message: str


class InsertedResponse(MessageResponse):
    model_config = ConfigDict(populate_by_name=True)

    inserted_id: StorageKey = Field(alias="insertedId")
