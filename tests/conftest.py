import pytest

from attachment_policy.models import AttachmentRecord, PolicyConfiguration
from attachment_policy.platform import NetworkClass, PlatformSnapshot
from attachment_policy.policy import AttachmentPolicy


@pytest.fixture
def config():
    return PolicyConfiguration(
        acceptable_view_types=frozenset({"image/*", "text/plain", "application/pdf", "application/octet-stream"}),
        unacceptable_view_types=frozenset({"image/svg+xml"}),
        unacceptable_extensions=frozenset({"exe", "bat", "scr"}),
        installable_extensions=frozenset({"apk"}),
        max_download_size=5 * 1024 * 1024,
    )


@pytest.fixture
def policy(config):
    return AttachmentPolicy(config)


@pytest.fixture
def platform():
    return PlatformSnapshot(network=NetworkClass.METERED, view_handlers=1)


@pytest.fixture
def make_attachment():
    def _make(name="photo.jpg", content_type="image/jpeg", size=1000, attachment_id=7):
        return AttachmentRecord(
            attachment_id=attachment_id, name=name, content_type=content_type, size=size
        )

    return _make
