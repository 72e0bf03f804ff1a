import logging
from typing import Any, Callable, List, Optional

from pymongo.asynchronous.database import AsyncDatabase

from ..core.database import APPOINTMENTS
from ..core.errors import NotFoundError
from ..models.appointment import Appointment, coerce_number, is_blank
from .identifiers import next_appointment_id, resolve

logger = logging.getLogger(__name__)


class AppointmentService:
    def __init__(
        self,
        db: AsyncDatabase,
        generate_id: Callable[[], int] = next_appointment_id,
    ):
        self.db = db
        self.appointments = db[APPOINTMENTS]
        self.generate_id = generate_id

    async def list_for_user(self, user_id: str) -> List[Appointment]:
        cursor = self.appointments.find({"user_id": user_id})
        docs = await cursor.to_list(length=None)
        return [Appointment.model_validate(doc) for doc in docs]

    async def get_appointment(self, raw_id: str) -> Optional[Appointment]:
        doc = await resolve(raw_id, self.appointments.find_one)
        if doc is None:
            return None
        return Appointment.model_validate(doc)

    async def add_appointment(self, payload: dict) -> str:
        """Insert an appointment, generating its id when none was sent."""
        appointment_id = payload.get("appointment_id")
        if is_blank(appointment_id):
            appointment_id = self.generate_id()
        else:
            appointment_id = self._coerce_id(appointment_id)

        appointment = Appointment.from_payload(payload, appointment_id)
        result = await self.appointments.insert_one(appointment.to_document())
        logger.info(
            f"Inserted appointment -> db: {self.db.name}, collection: {APPOINTMENTS}, "
            f"insertedId: {result.inserted_id}"
        )
        return str(result.inserted_id)

    async def edit_appointment(self, raw_id: str, payload: dict) -> None:
        """Replace every field of the first appointment ``raw_id`` resolves to.

        The stored ``appointment_id`` is taken from the body, so leaving it
        out clears it.
        """
        appointment_id = payload.get("appointment_id")
        appointment_id = None if is_blank(appointment_id) else self._coerce_id(appointment_id)
        update = {"$set": Appointment.from_payload(payload, appointment_id).to_document()}

        async def update_one(query: dict):
            return await self.appointments.update_one(query, update)

        result = await resolve(raw_id, update_one, lambda r: r.matched_count > 0)
        if result is None:
            raise NotFoundError()

    async def delete_appointment(self, raw_id: str) -> None:
        result = await resolve(
            raw_id, self.appointments.delete_one, lambda r: r.deleted_count > 0
        )
        if result is None:
            raise NotFoundError()

    @staticmethod
    def _coerce_id(value: Any) -> Any:
        number = coerce_number(value)
        return value if number is None else number
