"""
Calendar Tools

Calendars, free-slot lookup and appointment booking.
"""

from typing import Any, Dict, Optional

from pydantic import Field, model_validator

from ..base import ToolArgs, ToolProvider, tool


class CalendarIdArgs(ToolArgs):
    calendarId: str = Field(description="The unique ID of the calendar")


class FreeSlotsArgs(ToolArgs):
    calendarId: str = Field(description="The unique ID of the calendar")
    startDate: int = Field(description="Range start as epoch milliseconds")
    endDate: int = Field(description="Range end as epoch milliseconds")
    timezone: Optional[str] = Field(None, description="IANA timezone for the returned slots, e.g. America/New_York")

    @model_validator(mode="after")
    def check_range(self) -> "FreeSlotsArgs":
        if self.endDate <= self.startDate:
            raise ValueError("endDate must be after startDate")
        return self


class CreateAppointmentArgs(ToolArgs):
    calendarId: str = Field(description="Calendar to book into")
    contactId: str = Field(description="Contact the appointment is for")
    startTime: str = Field(description="Start time in ISO 8601 format")
    endTime: Optional[str] = Field(None, description="End time in ISO 8601 format; defaults to the calendar slot length")
    title: Optional[str] = Field(None, description="Appointment title")
    appointmentStatus: Optional[str] = Field(None, description="new, confirmed, cancelled, showed, noshow or invalid")
    assignedUserId: Optional[str] = Field(None, description="Team member the appointment is assigned to")
    notes: Optional[str] = Field(None, description="Internal notes")


class AppointmentIdArgs(ToolArgs):
    appointmentId: str = Field(description="The unique ID of the appointment")


class CalendarTools(ToolProvider):
    category = "Calendars"

    @tool("ghl_get_calendars", "List all calendars in the configured location.")
    async def get_calendars(self, params: ToolArgs) -> Dict[str, Any]:
        return await self.client.get_calendars()

    @tool("ghl_get_calendar", "Get a calendar by ID.", args=CalendarIdArgs)
    async def get_calendar(self, params: CalendarIdArgs) -> Dict[str, Any]:
        return await self.client.get_calendar(params.calendarId)

    @tool("ghl_get_free_slots", "Get available booking slots for a calendar in a date range.", args=FreeSlotsArgs)
    async def get_free_slots(self, params: FreeSlotsArgs) -> Dict[str, Any]:
        return await self.client.get_free_slots(
            params.calendarId, params.startDate, params.endDate, timezone=params.timezone
        )

    @tool("ghl_create_appointment", "Book an appointment for a contact.", args=CreateAppointmentArgs)
    async def create_appointment(self, params: CreateAppointmentArgs) -> Dict[str, Any]:
        return await self.client.create_appointment(params.payload())

    @tool("ghl_get_appointment", "Get an appointment by ID.", args=AppointmentIdArgs)
    async def get_appointment(self, params: AppointmentIdArgs) -> Dict[str, Any]:
        return await self.client.get_appointment(params.appointmentId)

    @tool("ghl_delete_appointment", "Delete an appointment.", args=AppointmentIdArgs)
    async def delete_appointment(self, params: AppointmentIdArgs) -> Dict[str, Any]:
        return await self.client.delete_appointment(params.appointmentId)
