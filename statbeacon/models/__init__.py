from .sample import Sample, TIME_FORMAT, format_timestamp
from .report import Level, Report
from .notification import (
    Attachment,
    AttachmentField,
    Notification,
    PayloadFormat,
    encode_payload,
)

__all__ = [
    "Sample",
    "TIME_FORMAT",
    "format_timestamp",
    "Level",
    "Report",
    "Attachment",
    "AttachmentField",
    "Notification",
    "PayloadFormat",
    "encode_payload",
]
