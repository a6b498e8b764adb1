"""Pydantic models for accommodation, transportation and tour listings."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ListingRequest(BaseModel):
    """Fields shared by every listing kind.

    Non-finite numbers are rejected so malformed numeric form input
    comes back to the console as a validation error.
    """

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    name: str = Field(..., min_length=1)
    description: str = ""
    type: str
    location_id: Optional[str] = Field(default=None, alias="locationId")
    currency: str = "RWF"
    amenities: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    is_available: bool = Field(default=True, alias="isAvailable")

    def to_payload(self, partial: bool = False) -> Dict[str, Any]:
        """Dump by alias; ``partial`` drops fields the client did not send."""
        return self.model_dump(by_alias=True, exclude_unset=partial)


class AccommodationRequest(ListingRequest):
    type: str = "HOTEL"
    category: str = "STANDARD"
    address: str = ""
    price_per_night: float = Field(..., ge=0, alias="pricePerNight")
    max_guests: int = Field(..., ge=1, alias="maxGuests")
    bedrooms: int = Field(default=1, ge=0)
    bathrooms: int = Field(default=1, ge=0)


class TransportationRequest(ListingRequest):
    type: str = "AIRPORT_PICKUP"
    vehicle_type: str = Field(default="STANDARD", alias="vehicleType")
    capacity: int = Field(..., ge=1)
    price_per_trip: float = Field(..., ge=0, alias="pricePerTrip")
    price_per_hour: Optional[float] = Field(default=None, ge=0, alias="pricePerHour")


class TourRequest(ListingRequest):
    type: str = "CITY_TOUR"
    category: str = "STANDARD"
    duration: int = Field(..., ge=1)
    max_participants: int = Field(..., ge=1, alias="maxParticipants")
    min_participants: int = Field(default=1, ge=1, alias="minParticipants")
    price_per_person: float = Field(..., ge=0, alias="pricePerPerson")
    itinerary: List[str] = Field(default_factory=list)
    includes: List[str] = Field(default_factory=list)
    excludes: List[str] = Field(default_factory=list)
    meeting_point: str = Field(default="", alias="meetingPoint")
    start_time: str = Field(default="", alias="startTime")
    end_time: str = Field(default="", alias="endTime")


class VerifyRequest(BaseModel):
    """Payload for toggling a listing's verification flag."""

    model_config = ConfigDict(populate_by_name=True)

    is_verified: bool = Field(..., alias="isVerified")
