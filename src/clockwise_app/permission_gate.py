from __future__ import annotations

from dataclasses import dataclass, fields, replace

PERMISSION_ITEMS: tuple[tuple[str, str, str], ...] = (
    ("location", "Location Services", "For geofenced clock-in"),
    ("camera", "Camera", "For face verification"),
    ("motion", "Motion & Fitness", "For idle detection"),
    ("notifications", "Notifications", "For shift reminders"),
)


@dataclass(frozen=True)
class PermissionSet:
    location: bool = False
    camera: bool = False
    motion: bool = False
    notifications: bool = False

    def all_granted(self) -> bool:
        return all(getattr(self, item.name) for item in fields(self))

    def missing(self) -> list[str]:
        return [item.name for item in fields(self) if not getattr(self, item.name)]


class PermissionDraft:
    """Local acknowledgement state of the permissions screen.

    Nothing is requested from the operating system; granting only flips the
    draft flag. The draft is committed to the application state on continue.
    """

    def __init__(self, initial: PermissionSet | None = None) -> None:
        self._draft = initial or PermissionSet()

    @property
    def current(self) -> PermissionSet:
        return self._draft

    def grant(self, key: str) -> None:
        if key not in {item.name for item in fields(PermissionSet)}:
            raise KeyError(key)
        self._draft = replace(self._draft, **{key: True})

    @property
    def can_continue(self) -> bool:
        return self._draft.all_granted()

    def commit(self) -> PermissionSet | None:
        if not self.can_continue:
            return None
        return self._draft
