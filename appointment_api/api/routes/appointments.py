from typing import List

from fastapi import APIRouter, Depends, status
from pymongo.asynchronous.database import AsyncDatabase

from ..deps import get_db, get_payload
from ...core.errors import NotFoundError
from ...models import Appointment, InsertedResponse, MessageResponse
from ...services.appointment_service import AppointmentService

router = APIRouter(tags=["Appointments"])


@router.get("/appointments/user/{userid}", response_model=List[Appointment])
async def list_user_appointments(userid: str, db: AsyncDatabase = Depends(get_db)):
    """Get every appointment booked by a user."""
    return await AppointmentService(db).list_for_user(userid)


@router.get("/appointment/{appointment_id}", response_model=Appointment)
async def get_appointment(appointment_id: str, db: AsyncDatabase = Depends(get_db)):
    """Get a single appointment by numeric id, string id or storage key."""
    appointment = await AppointmentService(db).get_appointment(appointment_id)
    if appointment is None:
        raise NotFoundError(content=None)
    return appointment


@router.post(
    "/add-appointment",
    response_model=InsertedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_appointment(
    payload: dict = Depends(get_payload),
    db: AsyncDatabase = Depends(get_db),
):
    """Add an appointment, generating its id when none is given."""
    inserted_id = await AppointmentService(db).add_appointment(payload)
    return InsertedResponse(message="Appointment Added", inserted_id=inserted_id)


@router.put("/edit-appointment/{appointment_id}", response_model=MessageResponse)
async def edit_appointment(
    appointment_id: str,
    payload: dict = Depends(get_payload),
    db: AsyncDatabase = Depends(get_db),
):
    """Replace every field of an appointment found by numeric id, string id or storage key."""
    await AppointmentService(db).edit_appointment(appointment_id, payload)
    return MessageResponse(message="Appointment Updated")


@router.delete("/delete-appointment/{appointment_id}", response_model=MessageResponse)
async def delete_appointment(appointment_id: str, db: AsyncDatabase = Depends(get_db)):
    """Delete the first appointment the identifier resolves to."""
    await AppointmentService(db).delete_appointment(appointment_id)
    return MessageResponse(message="Appointment Deleted")
