"""Report layer — change reports and notifications for the delivery channel."""

from .assembler import (
    assemble_error_report,
    assemble_initial_report,
    assemble_report,
    build_deep_link,
    format_timestamp,
    resolve_name,
)
from .models import Attachment, ChangeReport, Notification

__all__ = [
    "Attachment",
    "ChangeReport",
    "Notification",
    "assemble_error_report",
    "assemble_initial_report",
    "assemble_report",
    "build_deep_link",
    "format_timestamp",
    "resolve_name",
]
