"""
お問い合わせフォーム受付ハンドラ。

フロー:
  1. リクエストボディを解析・検証
  2. 行ストアへ 1 行追記
  3. 通知メールを送信（失敗しても追記済みの行は残る）
  4. JSON レスポンスを返却（エラー時も status="error" のボディで返す）
"""

from pydantic import ValidationError

from contact_relay.config import Settings
from contact_relay.exceptions import MalformedRequest, StorageFailure, SubmissionError
from contact_relay.logger import get_service_logger
from contact_relay.providers.mail_sender import MailSender
from contact_relay.providers.row_store import RowStore
from contact_relay.schemas.contact import ContactResponse, SubmissionRecord

from .formatting import format_display_timestamp, normalize_phone
from .notification import NotificationComposer

log = get_service_logger("Submission")

SUCCESS_MESSAGE = "Form submitted successfully"
HEALTH_MESSAGE = "Contact form handler is active"


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def parse_submission(request_body: bytes) -> SubmissionRecord:
    """
    Parse a raw JSON body into a SubmissionRecord.

    Raises:
        MalformedRequest: invalid JSON, wrong shape, or a required field missing/empty
    """
    try:
        return SubmissionRecord.model_validate_json(request_body)
    except ValidationError as e:
        raise MalformedRequest(_describe_validation_error(e)) from e


class SubmissionHandler:
    """Parse, persist, notify. One instance serves every request."""

    def __init__(self, settings: Settings, row_store: RowStore, mail_sender: MailSender):
        self.settings = settings
        self.row_store = row_store
        self.notifier = NotificationComposer(settings, mail_sender)

    def health_check(self) -> ContactResponse:
        return ContactResponse(status="ok", message=HEALTH_MESSAGE)

    def build_row(self, record: SubmissionRecord, display_timestamp: str) -> list[str]:
        """Columns in storage order: timestamp, first, last, email, phone, comment."""
        return [
            display_timestamp,
            record.first_name,
            record.last_name,
            record.email,
            normalize_phone(record.phone),
            record.comment,
        ]

    def handle_submission(self, request_body: bytes) -> ContactResponse:
        try:
            record = parse_submission(request_body)
            try:
                display_timestamp = format_display_timestamp(
                    record.timestamp, self.settings.tzinfo
                )
            except OverflowError as e:
                raise MalformedRequest("timestamp: out of range") from e

            try:
                self.row_store.append_row(self.build_row(record, display_timestamp))
            except StorageFailure:
                raise
            except Exception as e:
                raise StorageFailure(str(e)) from e
            log.info("handle", "Submission stored", email=record.email)

            self.notifier.compose_and_send(record, display_timestamp)
        except SubmissionError as e:
            log.error(
                "handle",
                "Error processing form submission",
                error_kind=e.kind,
                error=str(e),
            )
            return ContactResponse(status="error", message=str(e))

        return ContactResponse(status="success", message=SUCCESS_MESSAGE)
