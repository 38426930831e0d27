"""Session DTOs shared across application layers."""

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Optional, Tuple

import pandas as pd

SessionStatus = Literal["draft", "published"]
EditableField = Literal["title", "tags", "json_file_url"]
EDITABLE_FIELDS: Tuple[EditableField, ...] = ("title", "tags", "json_file_url")


def parse_tags(raw: str) -> list[str]:
    """'math, sets,, ' -> ['math', 'sets']"""
    return [tag.strip() for tag in (raw or "").split(",") if tag.strip()]


def format_tags(tags) -> str:
    return ", ".join(tags or [])


def _parse_timestamp(value: Any) -> Optional[pd.Timestamp]:
    if not value:
        return None
    ts = pd.to_datetime(value, utc=True, errors="coerce")
    return None if pd.isna(ts) else ts


@dataclass(frozen=True)
class Session:
    id: str
    title: str
    tags: Tuple[str, ...] = ()
    json_file_url: str = ""
    status: SessionStatus = "draft"
    owner: Optional[str] = None
    created_at: Optional[pd.Timestamp] = None
    updated_at: Optional[pd.Timestamp] = None

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "Session":
        owner = payload.get("user_id") or payload.get("owner")
        return cls(
            id=str(payload.get("_id") or payload.get("id") or ""),
            title=payload.get("title") or "",
            tags=tuple(payload.get("tags") or ()),
            json_file_url=payload.get("json_file_url") or "",
            status="published" if payload.get("status") == "published" else "draft",
            owner=str(owner) if owner is not None else None,
            created_at=_parse_timestamp(payload.get("created_at")),
            updated_at=_parse_timestamp(payload.get("updated_at")),
        )

    @property
    def is_published(self) -> bool:
        return self.status == "published"


@dataclass(frozen=True)
class DraftFields:
    """Raw editor inputs; tags stay as the comma-separated text the user typed."""

    title: str = ""
    tags: str = ""
    json_file_url: str = ""

    @classmethod
    def from_session(cls, session: Session) -> "DraftFields":
        return cls(
            title=session.title,
            tags=format_tags(session.tags),
            json_file_url=session.json_file_url,
        )

    def replace(self, name: EditableField, value: str) -> "DraftFields":
        if name not in EDITABLE_FIELDS:
            raise KeyError(name)
        values = {f: getattr(self, f) for f in EDITABLE_FIELDS}
        values[name] = value if value is not None else ""
        return DraftFields(**values)


@dataclass(frozen=True)
class DraftPayload:
    """Body of a save-draft request. No session_id means create."""

    title: str
    tags: Tuple[str, ...] = field(default_factory=tuple)
    json_file_url: str = ""
    session_id: Optional[str] = None

    def to_request(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "title": self.title,
            "tags": list(self.tags),
            "json_file_url": self.json_file_url,
        }
        if self.session_id:
            body["_id"] = self.session_id
        return body
