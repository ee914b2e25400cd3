from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from statbeacon.models.report import Level, Report

FOOTER = "StatBeacon"
ALERT_COLOR = "#ff0000"
UPDATE_COLOR = "#228B22"


class PayloadFormat(StrEnum):
    """JSON body contract for an outbound endpoint."""

    NOTIFICATION = "notification"
    REPORT = "report"


class AttachmentField(BaseModel):
    title: str
    value: str
    short: bool = True


class Attachment(BaseModel):
    color: str
    title: str
    text: str
    fields: list[AttachmentField] = Field(default_factory=list)
    footer: str = FOOTER


class Notification(BaseModel):
    """Chat-style message (text + one attachment) derived from a Report."""

    text: str
    attachments: list[Attachment] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: Report) -> Notification:
        if report.level == Level.WARN:
            text = f"Alert: {report.name} is experiencing high resource usage!"
            color, title = ALERT_COLOR, "System Alert"
            summary = "The system is running low on resources."
        else:
            text = f"Update: {report.name} resource usage"
            color, title = UPDATE_COLOR, "System Update"
            summary = "The system is currently ok."

        fields = [
            AttachmentField(title="Name", value=report.name),
            AttachmentField(title="Status", value=report.level.value),
            AttachmentField(title="CPU", value=report.cpu),
            AttachmentField(title="Memory", value=report.mem),
            AttachmentField(title="Temperature", value=report.temp),
            AttachmentField(title="Time", value=report.time),
        ]
        return cls(
            text=text,
            attachments=[Attachment(color=color, title=title, text=summary, fields=fields)],
        )


def encode_payload(report: Report, payload_format: PayloadFormat) -> dict[str, Any]:
    """Build the JSON body for ``report`` in the requested shape."""
    if payload_format == PayloadFormat.REPORT:
        return report.model_dump(mode="json")
    return Notification.from_report(report).model_dump(mode="json")
