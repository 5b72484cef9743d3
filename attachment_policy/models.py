"""Typed containers shared across the policy evaluator."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Hashable

DEFAULT_UNACCEPTABLE_EXTENSIONS = frozenset(
    {
        "ade", "adp", "bat", "chm", "cmd", "com", "cpl", "dll", "exe", "hta",
        "ins", "isp", "jse", "lib", "mde", "msc", "msp", "mst", "pif", "scr",
        "sct", "shb", "sys", "vb", "vbe", "vbs", "vxd", "wsc", "wsf", "wsh",
    }
)


@dataclass(frozen=True)
class AttachmentRecord:
    """Metadata for a single message attachment."""

    attachment_id: Hashable
    name: str
    content_type: str
    size: int


@dataclass(frozen=True)
class PolicyConfiguration:
    """Static allow/deny lists and limits applied to every attachment."""

    acceptable_view_types: frozenset[str] = frozenset({"*/*"})
    unacceptable_view_types: frozenset[str] = frozenset()
    unacceptable_extensions: frozenset[str] = DEFAULT_UNACCEPTABLE_EXTENSIONS
    installable_extensions: frozenset[str] = frozenset({"apk"})
    max_download_size: int = 5 * 1024 * 1024
    content_authority: str = "mail.attachmentprovider"


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of running the policy rules over one attachment."""

    attachment_id: Hashable
    name: str
    content_type: str
    size: int
    allow_view: bool
    allow_save: bool

    @property
    def eligible_for_download(self) -> bool:
        """An attachment is worth downloading if it can be viewed or saved."""
        return self.allow_view or self.allow_save


class IntentFlag(enum.Flag):
    GRANT_READ_URI_PERMISSION = enum.auto()
    CLEAR_WHEN_TASK_RESET = enum.auto()


VIEW_FLAGS = IntentFlag.GRANT_READ_URI_PERMISSION | IntentFlag.CLEAR_WHEN_TASK_RESET


@dataclass(frozen=True)
class ViewRequest:
    """Request handed to an external viewer to open an attachment."""

    data: str
    action: str = "VIEW"
    flags: IntentFlag = field(default=VIEW_FLAGS)
