"""
Contact form request / response schemas.
"""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

PHONE_NOT_PROVIDED = "Not provided"

# Header row of the submissions table, in storage order.
SUBMISSION_COLUMNS = ("Timestamp", "First Name", "Last Name", "Email", "Phone", "Comment")


class SubmissionRecord(BaseModel):
    """ホームページのお問い合わせフォームから送信された1件のデータ。"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    phone: str | None = None
    comment: str
    timestamp: datetime

    @field_validator("first_name", "last_name", "email", "comment")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("phone", mode="before")
    @classmethod
    def _phone_as_text(cls, value):
        # フォームによっては電話番号を数値で送ってくる
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # 時差情報のないタイムスタンプは UTC として扱う
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class ContactResponse(BaseModel):
    """JSON body returned for every request, success or not."""

    status: Literal["ok", "success", "error"]
    message: str
