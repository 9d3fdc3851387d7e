"""Error kinds raised by the submission pipeline."""


class SubmissionError(Exception):
    """Base exception for a failed submission."""

    kind = "submission_error"


class MalformedRequest(SubmissionError):
    """The request body could not be parsed or is missing required fields."""

    kind = "malformed_request"


class StorageFailure(SubmissionError):
    """Appending the row to the store failed."""

    kind = "storage_failure"


class NotificationFailure(SubmissionError):
    """Sending the notification email failed."""

    kind = "notification_failure"
