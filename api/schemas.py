from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    email: str
    password: str


class PasswordChange(BaseModel):
    password: str


class SyncSnapshot(BaseModel):
    """Full personalization snapshot as pushed by a client."""

    model_config = ConfigDict(populate_by_name=True)

    subreddits: list[str] = Field(default_factory=list)
    custom_subs: list[str] = Field(default_factory=list, alias="customSubs")
    interests: dict[str, int] = Field(default_factory=dict)
    settings: dict[str, Any] = Field(default_factory=dict)
    bookmarks: list[dict[str, Any]] = Field(default_factory=list)
    reactions: dict[str, dict[str, Any]] = Field(default_factory=dict)
    blocked: list[str] = Field(default_factory=list)
    show_less: list[str] = Field(default_factory=list, alias="showLess")

    def extras(self) -> dict[str, Any]:
        return {
            "reactions": self.reactions,
            "blocked": self.blocked,
            "showLess": self.show_less,
        }
