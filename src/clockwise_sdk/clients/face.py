from __future__ import annotations

import json
from typing import Any

from ..exceptions import NotFoundError
from ..models import DeviceInfo, FaceDescriptorRecord, FaceEnrollment, FaceVerification, GeoPoint
from .base import BaseClient, eq


def _dump(value: DeviceInfo | GeoPoint | None) -> str | None:
    return json.dumps(value.model_dump()) if value is not None else None


class FaceClient(BaseClient):
    def enroll_face(
        self,
        *,
        user_id: str,
        descriptor: list[float],
        face_image_url: str,
        confidence: float,
        device_info: DeviceInfo | None = None,
        location: GeoPoint | None = None,
    ) -> FaceEnrollment:
        data = self._rpc(
            "enroll_face",
            {
                "p_user_id": user_id,
                "p_descriptor": descriptor,
                "p_face_image_url": face_image_url,
                "p_face_confidence": confidence,
                "p_device_info": _dump(device_info),
                "p_location": _dump(location),
            },
            module="face",
        )
        return FaceEnrollment.model_validate(data or {"success": False})

    def verify_face(
        self,
        *,
        user_id: str,
        captured_descriptor: list[float],
        similarity_score: float,
        verification_type: str = "clock_in",
        captured_image_url: str | None = None,
        device_info: DeviceInfo | None = None,
        location: GeoPoint | None = None,
        clock_entry_id: str | None = None,
    ) -> FaceVerification:
        # The RPC stores GPS as a point literal: (longitude,latitude).
        gps_point = f"({location.longitude},{location.latitude})" if location else None
        data = self._rpc(
            "verify_face",
            {
                "p_user_id": user_id,
                "p_captured_descriptor": captured_descriptor,
                "p_similarity_score": similarity_score,
                "p_verification_type": verification_type,
                "p_captured_image_url": captured_image_url,
                "p_device_info": _dump(device_info),
                "p_gps_location": gps_point,
                "p_clock_entry_id": clock_entry_id,
            },
            module="face",
        )
        return FaceVerification.model_validate(data or {"success": False})

    def get_face_descriptor(self, user_id: str) -> FaceDescriptorRecord:
        data: dict[str, Any] = self._rpc("get_face_descriptor", {"p_user_id": user_id}, module="face") or {}
        if not data.get("success"):
            raise NotFoundError(
                code="FACE_NOT_ENROLLED",
                message=str(data.get("error") or "No enrolled face found for this user"),
                details=None,
                trace_id=None,
                status_code=404,
                raw_payload=data,
            )
        return FaceDescriptorRecord.model_validate(data)

    def has_enrolled_face(self, user_id: str) -> bool:
        data = self._select(
            "face_descriptors",
            {"select": "id", "user_id": eq(user_id), "is_active": eq(True), "limit": 1},
            module="face",
        )
        return bool(data)
