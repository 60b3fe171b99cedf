from __future__ import annotations

import logging

from clockwise_sdk import ApiSession
from clockwise_sdk.models import DeviceInfo, FaceEnrollment, FaceVerification, GeoPoint

from clockwise_app.face_matching import FaceMatch, match_face

logger = logging.getLogger(__name__)

FACE_BUCKET = "face-images"


class FaceService:
    def __init__(self, session: ApiSession, threshold: float | None = None) -> None:
        self.session = session
        self.threshold = threshold if threshold is not None else session.config.face_match_threshold

    def _user_id(self) -> str:
        if self.session.user is None:
            raise RuntimeError("Not authenticated")
        return self.session.user.id

    def enroll(
        self,
        descriptor: list[float],
        image: bytes,
        confidence: float,
        device_info: DeviceInfo | None = None,
        location: GeoPoint | None = None,
    ) -> FaceEnrollment:
        user_id = self._user_id()
        path = f"{user_id}/enrollment.jpg"
        storage = self.session.storage_client()
        storage.upload(FACE_BUCKET, path, image)
        enrollment = self.session.face_client().enroll_face(
            user_id=user_id,
            descriptor=descriptor,
            face_image_url=storage.public_url(FACE_BUCKET, path),
            confidence=confidence,
            device_info=device_info,
            location=location,
        )
        logger.info("face_enrolled", extra={"user_id": user_id, "action": enrollment.action})
        return enrollment

    def verify(
        self,
        captured: list[float],
        verification_type: str = "clock_in",
        device_info: DeviceInfo | None = None,
        location: GeoPoint | None = None,
    ) -> tuple[FaceMatch, FaceVerification]:
        user_id = self._user_id()
        face = self.session.face_client()
        enrolled = face.get_face_descriptor(user_id)
        match = match_face(captured, enrolled.descriptor, self.threshold)
        # Failed attempts are recorded too.
        record = face.verify_face(
            user_id=user_id,
            captured_descriptor=captured,
            similarity_score=match.similarity,
            verification_type=verification_type,
            device_info=device_info,
            location=location,
        )
        logger.info(
            "face_verified",
            extra={"user_id": user_id, "passed": match.passed, "similarity": round(match.similarity, 4)},
        )
        return match, record
