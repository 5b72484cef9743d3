"""Rules that decide whether an attachment may be viewed and/or saved."""

from __future__ import annotations

import logging
from typing import Callable, Hashable, Optional

from .config import Settings
from .locators import resolve_content_locator
from .mime import filename_extension, infer_mime_type, mime_type_matches
from .models import AttachmentRecord, EvaluationResult, PolicyConfiguration, ViewRequest
from .platform import NetworkClass, PlatformContext

logger = logging.getLogger(__name__)

MimeInferrer = Callable[[Optional[str], Optional[str]], str]


class AttachmentPolicy:
    """Evaluate MIME/extension/size/viewer rules for a single attachment.

    Every rule can only clear a permission. Platform queries that fail are
    treated as the most restrictive answer, so evaluation itself never raises
    because of the host platform.
    """

    def __init__(
        self,
        config: PolicyConfiguration,
        mime_inferrer: MimeInferrer = infer_mime_type,
    ) -> None:
        self.config = config
        self.infer_mime_type = mime_inferrer

    @classmethod
    def from_settings(cls, settings: Settings) -> "AttachmentPolicy":
        return cls(settings.policy_configuration())

    def evaluate(self, attachment: AttachmentRecord, platform: PlatformContext) -> EvaluationResult:
        """Run every rule and return the combined view/save permissions."""
        content_type = self.infer_mime_type(attachment.name, attachment.content_type)
        can_view = True
        can_save = True

        if not mime_type_matches(content_type, self.config.acceptable_view_types) or (
            mime_type_matches(content_type, self.config.unacceptable_view_types)
        ):
            logger.debug("Attachment %s: type %s not viewable", attachment.attachment_id, content_type)
            can_view = False

        extension = filename_extension(attachment.name)

        if extension and extension in self.config.unacceptable_extensions:
            logger.debug("Attachment %s: extension '%s' blocked", attachment.attachment_id, extension)
            can_view = False
            can_save = False

        if extension and extension in self.config.installable_extensions:
            sideload_allowed = self._sideload_allowed(platform)
            logger.debug(
                "Attachment %s: installable extension '%s' (sideload allowed=%s)",
                attachment.attachment_id,
                extension,
                sideload_allowed,
            )
            can_view = False
            can_save = can_save and sideload_allowed

        # Any size is acceptable on an unmetered connection.
        if attachment.size > self.config.max_download_size:
            network = self._network_class(platform)
            if network is not NetworkClass.UNMETERED:
                logger.debug(
                    "Attachment %s: %s bytes exceeds limit of %s on %s network",
                    attachment.attachment_id,
                    attachment.size,
                    self.config.max_download_size,
                    network.value,
                )
                can_view = False
                can_save = False

        request = self.view_request(attachment, platform)
        if self._view_handler_count(platform, request.data) == 0:
            logger.debug("Attachment %s: no application can view %s", attachment.attachment_id, request.data)
            can_view = False
            can_save = False

        return EvaluationResult(
            attachment_id=attachment.attachment_id,
            name=attachment.name,
            content_type=content_type,
            size=attachment.size,
            allow_view=can_view,
            allow_save=can_save,
        )

    def view_request(
        self, attachment: AttachmentRecord, platform: PlatformContext, account_id: Hashable = 0
    ) -> ViewRequest:
        """Build the request that opens an attachment; permissions are not checked here."""
        locator = resolve_content_locator(
            platform, self.config.content_authority, account_id, attachment.attachment_id
        )
        return ViewRequest(data=locator)

    @staticmethod
    def _network_class(platform: PlatformContext) -> NetworkClass:
        try:
            network = platform.active_network_class()
        except Exception:
            logger.warning("Network state unavailable; treating as offline", exc_info=True)
            return NetworkClass.NONE
        if not isinstance(network, NetworkClass):
            return NetworkClass.NONE
        return network

    @staticmethod
    def _view_handler_count(platform: PlatformContext, locator: str) -> int:
        try:
            count = platform.count_view_handlers(locator)
        except Exception:
            logger.warning("Viewer lookup failed for %s; assuming no viewers", locator, exc_info=True)
            return 0
        if not isinstance(count, int) or count < 0:
            return 0
        return count

    @staticmethod
    def _sideload_allowed(platform: PlatformContext) -> bool:
        try:
            return bool(platform.is_sideload_install_allowed())
        except Exception:
            logger.warning("Sideload setting unavailable; treating as disabled", exc_info=True)
            return False
