"""Pydantic models for booking administration."""

from enum import Enum

from pydantic import BaseModel


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"
    REFUNDED = "REFUNDED"


class ServiceType(str, Enum):
    ACCOMMODATION = "ACCOMMODATION"
    TRANSPORTATION = "TRANSPORTATION"
    TOUR = "TOUR"


class BookingStatusRequest(BaseModel):
    """Payload for moving a booking to another status."""

    status: BookingStatus
