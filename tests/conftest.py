"""
Pytest configuration for the share handoff suite.

Provides fakes for the external collaborators (video probe, wake signal)
and a tmp_path-backed container/store.
"""
from pathlib import Path

import pytest
from PIL import Image

from share_handoff.classifier import AttachmentClassifier
from share_handoff.config import Settings
from share_handoff.container import SharedContainer
from share_handoff.errors import LoadFailed, PublishFailed, ThumbnailFailed
from share_handoff.extension import ExtensionContext
from share_handoff.loader import ManifestLoader
from share_handoff.models import AttachmentDescriptor
from share_handoff.normalizer import ContentNormalizer
from share_handoff.shared_store import SharedStore
from share_handoff.thumbnail import ThumbnailDeriver

BUNDLE_ID = "com.example.app.ShareExtension"
HOST = "com.example.app"


class FakeProbe:
    """Stands in for OpenCV: fixed duration and a solid-colour frame."""

    def __init__(self, duration_seconds=2.5004, size=(1920, 1080)):
        self.duration = duration_seconds
        self.size = size
        self.seeks = []
        self.duration_probes = 0

    def duration_seconds(self, path):
        self.duration_probes += 1
        return self.duration

    def frame_at(self, path, seconds):
        if self.duration <= 0:
            raise ThumbnailFailed("empty media")
        self.seeks.append(seconds)
        return Image.new("RGB", self.size, color=(200, 40, 40))


class RecordingWake:
    def __init__(self, fail=False):
        self.urls = []
        self.fail = fail

    def open_url(self, url):
        self.urls.append(url)
        if self.fail:
            raise PublishFailed("host not installed")


class FailingLoader:
    async def load_item(self, descriptor, type_identifier):
        raise LoadFailed(f"cannot load {type_identifier}")


def file_descriptor(path: Path, *types: str) -> AttachmentDescriptor:
    """Descriptor whose payload for every type is the file's URI."""
    return AttachmentDescriptor(
        registered_type_identifiers=list(types),
        suggested_name=path.name,
        payloads={type_id: {"location": path.as_uri()} for type_id in types},
    )


def write_file(path: Path, content: bytes = b"data") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


@pytest.fixture
def settings(tmp_path):
    return Settings(
        extension_bundle_id=BUNDLE_ID,
        container_root=tmp_path / "containers",
        shared_store_db=tmp_path / "shared.db",
    )


@pytest.fixture
def container(tmp_path):
    return SharedContainer(tmp_path / "containers", BUNDLE_ID)


@pytest.fixture
def container_dir(container):
    return container.path


@pytest.fixture
def probe():
    return FakeProbe()


@pytest.fixture
def thumbnails(container, probe):
    return ThumbnailDeriver(container, probe=probe)


@pytest.fixture
def normalizer(container, thumbnails):
    return ContentNormalizer(container, thumbnails)


@pytest.fixture
def classifier(normalizer):
    return AttachmentClassifier(ManifestLoader(), normalizer)


@pytest.fixture
def store(tmp_path):
    return SharedStore(tmp_path / "shared.db")


@pytest.fixture
def wake():
    return RecordingWake()


@pytest.fixture
def context():
    return ExtensionContext()


@pytest.fixture
def source_dir(tmp_path):
    directory = tmp_path / "source"
    directory.mkdir()
    return directory
