from __future__ import annotations

import logging
from datetime import date

from clockwise_sdk import ApiSession
from clockwise_sdk.models import BreakEvent, ClockEvent, DeviceInfo, GeoPoint, Shift, TimesheetDay

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def clock_in(self, location: GeoPoint, device_info: DeviceInfo, notes: str = "") -> ClockEvent:
        logger.info("clock_in_attempt")
        event = self.session.attendance_client().clock_in(
            location=location,
            notes=notes,
            device_info=device_info.model_dump_json(),
        )
        logger.info("clock_in_success", extra={"clock_entry_id": event.clock_entry_id})
        return event

    def clock_out(self, location: GeoPoint, device_info: DeviceInfo, notes: str = "") -> ClockEvent:
        logger.info("clock_out_attempt")
        event = self.session.attendance_client().clock_out(
            location=location,
            notes=notes,
            device_info=device_info.model_dump_json(),
        )
        logger.info("clock_out_success", extra={"clock_entry_id": event.clock_entry_id})
        return event

    def start_break(self, break_type: str = "short", notes: str = "", location: GeoPoint | None = None) -> BreakEvent:
        event = self.session.attendance_client().start_break(break_type=break_type, location=location, notes=notes)
        logger.info("break_started", extra={"break_type": break_type, "break_id": event.break_id})
        return event

    def end_break(self, notes: str = "", location: GeoPoint | None = None) -> BreakEvent:
        event = self.session.attendance_client().end_break(location=location, notes=notes)
        logger.info("break_ended", extra={"break_id": event.break_id})
        return event

    def schedule(self, start: date, end: date) -> list[Shift]:
        shifts = self.session.attendance_client().get_my_schedule(start.isoformat(), end.isoformat())
        logger.info("schedule_loaded", extra={"start": start.isoformat(), "count": len(shifts)})
        return shifts

    def timesheet(self, week_start: date) -> list[TimesheetDay]:
        return self.session.attendance_client().get_my_timesheet(week_start.isoformat())
