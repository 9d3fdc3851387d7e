from .notification import NotificationComposer
from .submission_handler import SubmissionHandler

__all__ = ["NotificationComposer", "SubmissionHandler"]
