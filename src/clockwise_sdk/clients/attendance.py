from __future__ import annotations

from ..models import BreakEvent, ClockEvent, GeoPoint, Shift, TimesheetDay
from .base import BaseClient


def _as_items(data: object) -> list:
    if isinstance(data, list):
        return data
    return []


def _as_object(data: object) -> dict:
    if isinstance(data, dict):
        return data
    return {}


class AttendanceClient(BaseClient):
    def clock_in(
        self,
        *,
        location: GeoPoint,
        notes: str = "",
        device_info: str | None = None,
        photo_url: str | None = None,
        shift_id: str | None = None,
        branch_id: str | None = None,
    ) -> ClockEvent:
        data = self._rpc(
            "submit_clock_in",
            {
                "latitude": location.latitude,
                "longitude": location.longitude,
                "photo_url": photo_url,
                "notes": notes,
                "device_info": device_info,
                "shift_id_param": shift_id,
                "branch_id_param": branch_id,
            },
            module="attendance",
        )
        return ClockEvent.model_validate(_as_object(data))

    def clock_out(
        self,
        *,
        location: GeoPoint,
        notes: str = "",
        device_info: str | None = None,
        photo_url: str | None = None,
    ) -> ClockEvent:
        data = self._rpc(
            "submit_clock_out",
            {
                "latitude": location.latitude,
                "longitude": location.longitude,
                "photo_url": photo_url,
                "notes": notes,
                "device_info": device_info,
            },
            module="attendance",
        )
        return ClockEvent.model_validate(_as_object(data))

    def start_break(
        self,
        *,
        break_type: str = "short",
        location: GeoPoint | None = None,
        notes: str = "",
    ) -> BreakEvent:
        data = self._rpc(
            "submit_break_start",
            {
                "break_type_param": break_type,
                "latitude": location.latitude if location else None,
                "longitude": location.longitude if location else None,
                "notes": notes,
            },
            module="attendance",
        )
        return BreakEvent.model_validate({"break_type": break_type, **_as_object(data)})

    def end_break(self, *, location: GeoPoint | None = None, notes: str = "") -> BreakEvent:
        data = self._rpc(
            "submit_break_end",
            {
                "latitude": location.latitude if location else None,
                "longitude": location.longitude if location else None,
                "notes": notes,
            },
            module="attendance",
        )
        return BreakEvent.model_validate(_as_object(data))

    def get_my_schedule(self, start_date: str, end_date: str) -> list[Shift]:
        data = self._rpc(
            "get_my_schedule",
            {"start_date_param": start_date, "end_date_param": end_date},
            module="attendance",
        )
        return [Shift.model_validate(item) for item in _as_items(data)]

    def get_my_timesheet(self, week_start_date: str) -> list[TimesheetDay]:
        data = self._rpc("get_my_timesheet", {"week_start_param": week_start_date}, module="attendance")
        return [TimesheetDay.model_validate(item) for item in _as_items(data)]
