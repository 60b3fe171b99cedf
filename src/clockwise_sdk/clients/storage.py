from __future__ import annotations

from .base import BaseClient


class StorageClient(BaseClient):
    def upload(self, bucket: str, path: str, content: bytes, content_type: str = "image/jpeg") -> str:
        self._request(
            "POST",
            f"/storage/v1/object/{bucket}/{path}",
            content=content,
            headers={"Content-Type": content_type, "Cache-Control": "3600", "x-upsert": "false"},
            module="storage",
            operation="upload",
        )
        return path

    def public_url(self, bucket: str, path: str) -> str:
        return self.http.build_url(f"/storage/v1/object/public/{bucket}/{path}")

    def create_signed_url(self, bucket: str, path: str, expires_in: int = 3600) -> str:
        data = self._request(
            "POST",
            f"/storage/v1/object/sign/{bucket}/{path}",
            json_body={"expiresIn": expires_in},
            module="storage",
            operation="create_signed_url",
        )
        signed = (data or {}).get("signedURL") or (data or {}).get("signedUrl") or ""
        return self.http.build_url(f"/storage/v1{signed}") if signed.startswith("/") else signed
