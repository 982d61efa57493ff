"""Pydantic model for the person being reviewed."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    UNSET = "unset"


class ReviewSubject(BaseModel):
    name: str = ""
    gender: Gender = Gender.UNSET
    position: str = ""
    relationship: str = ""  # e.g. "Direct report", "Peer", "Manager"

    model_config = {"frozen": True}

    def missing_fields(self) -> list[str]:
        """Names of fields that still need a value before submission."""
        missing = []
        for name in ("name", "gender", "position", "relationship"):
            value = getattr(self, name)
            if value is Gender.UNSET or not str(value).strip():
                missing.append(name)
        return missing
