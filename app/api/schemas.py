from pydantic import BaseModel, Field


class AvailableSlotSchema(BaseModel):
    dateTime: str
    formatted: str


class CheckAvailabilityResponseSchema(BaseModel):
    timezone: str
    availableSlots: list[AvailableSlotSchema] = Field(default_factory=list)


class BookingSchema(BaseModel):
    id: str
    startTime: str
    endTime: str
    timezone: str


class SaveBookingResponseSchema(BaseModel):
    success: bool = True
    booking: BookingSchema


class HealthResponseSchema(BaseModel):
    status: str
    timestamp: str
