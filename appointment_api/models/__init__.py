from .appointment import Appointment
from .base import MessageResponse, InsertedResponse, StorageKey
from .user import User

__all__ = ["Appointment", "InsertedResponse", "MessageResponse", "StorageKey", "User"]
