"""Read-only views of device state consulted by the policy rules."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Protocol


class NetworkClass(enum.Enum):
    NONE = "none"
    METERED = "metered"
    UNMETERED = "unmetered"


class PlatformContext(Protocol):
    """Queries the evaluator needs from the host platform."""

    def active_network_class(self) -> Optional[NetworkClass]:
        """Class of the active network, or None/NONE when offline."""

    def count_view_handlers(self, locator: str) -> int:
        """Number of installed apps able to view the given content locator."""

    def is_sideload_install_allowed(self) -> bool:
        """Whether packages from outside the app marketplace may be installed."""

    def resolve_attachment_uri(self, uri: str) -> Optional[str]:
        """Map an attachment URI to a content locator, or None if unresolved."""


@dataclass
class PlatformSnapshot:
    """Platform state captured as fixed values."""

    network: NetworkClass = NetworkClass.NONE
    view_handlers: int = 0
    sideload_allowed: bool = False
    content_locators: dict[str, str] = field(default_factory=dict)

    def active_network_class(self) -> NetworkClass:
        return self.network

    def count_view_handlers(self, locator: str) -> int:
        return self.view_handlers

    def is_sideload_install_allowed(self) -> bool:
        return self.sideload_allowed

    def resolve_attachment_uri(self, uri: str) -> Optional[str]:
        return self.content_locators.get(uri)
