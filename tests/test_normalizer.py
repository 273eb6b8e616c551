"""Tests for normalization and file materialization."""

import uuid
from pathlib import Path

import pytest

from share_handoff.container import SharedContainer
from share_handoff.errors import CopyFailed, MissingHostIdentity, TypeMismatch
from share_handoff.models import (
    FileItem,
    ImageItem,
    LoadedLocation,
    LoadedText,
    TextItem,
    URLItem,
    VideoItem,
)

from conftest import write_file


def location(path: Path, type_id: str = "public.file-url") -> LoadedLocation:
    return LoadedLocation(type_id, path.as_uri())


class TestNormalize:
    def test_text(self, normalizer):
        assert normalizer.normalize(LoadedText("public.text", "hi"), "text") == TextItem("hi")

    def test_remote_url_is_not_copied(self, normalizer, tmp_path):
        loaded = LoadedLocation("public.url", "https://example.com/a.png")
        assert normalizer.normalize(loaded, "url") == URLItem("https://example.com/a.png")
        assert not (tmp_path / "containers").exists()

    def test_file_backed_url_is_copied_as_file(self, normalizer, source_dir, container_dir):
        note = write_file(source_dir / "note.txt", b"note")
        item = normalizer.normalize(location(note, "public.url"), "url")

        assert item == FileItem((container_dir / "note.txt").as_uri())
        assert (container_dir / "note.txt").read_bytes() == b"note"

    def test_image_copied_into_container(self, normalizer, source_dir, container_dir):
        photo = write_file(source_dir / "photo.jpg", b"jpeg")
        item = normalizer.normalize(location(photo, "public.image"), "image")

        assert isinstance(item, ImageItem)
        copied = container_dir / "photo.jpg"
        assert item.location == copied.as_uri()
        assert copied.read_bytes() == b"jpeg"
        assert photo.exists()

    def test_remote_image_stays_url(self, normalizer):
        loaded = LoadedLocation("public.image", "https://cdn.example.com/p.png")
        assert normalizer.normalize(loaded, "image") == URLItem("https://cdn.example.com/p.png")

    def test_video_has_preview_and_rounded_duration(self, normalizer, source_dir, container_dir):
        clip = write_file(source_dir / "clip.mov", b"mov")
        item = normalizer.normalize(location(clip, "public.movie"), "video")

        assert isinstance(item, VideoItem)
        assert item.info.video_location == (container_dir / "clip.mov").as_uri()
        assert item.info.duration_millis == 2500.0
        assert item.info.preview_location != item.info.video_location
        assert item.info.preview_location.endswith(".png")

    def test_video_duration_probed_once(self, normalizer, probe, source_dir):
        clip = write_file(source_dir / "clip.mov", b"mov")
        normalizer.normalize(location(clip, "public.movie"), "video")

        assert probe.duration_probes == 1
        assert len(probe.seeks) == 1

    def test_location_kind_with_text_value_mismatch(self, normalizer):
        with pytest.raises(TypeMismatch):
            normalizer.normalize(LoadedText("public.movie", "not a url"), "video")

    def test_text_kind_with_location_mismatch(self, normalizer):
        with pytest.raises(TypeMismatch):
            normalizer.normalize(LoadedLocation("public.text", "https://x.test"), "text")

    def test_missing_source_fails_copy(self, normalizer, tmp_path):
        with pytest.raises(CopyFailed):
            normalizer.normalize(location(tmp_path / "gone.pdf"), "file")


class TestContainer:
    def test_second_copy_overwrites(self, container, source_dir, container_dir):
        first = write_file(source_dir / "a" / "doc.txt", b"first")
        second = write_file(source_dir / "b" / "doc.txt", b"second")

        container.copy_file_to_host(first)
        destination = container.copy_file_to_host(second)

        assert destination == container_dir / "doc.txt"
        assert destination.read_bytes() == b"second"
        assert [p.name for p in container_dir.iterdir()] == ["doc.txt"]

    def test_empty_override_falls_back_to_source_name(self, container, source_dir):
        source = write_file(source_dir / "blob", b"x")
        destination = container.copy_file_to_host(source, file_name="")
        assert destination.name == "blob"

    def test_nameless_source_gets_generated_identifier(self, container, monkeypatch):
        monkeypatch.setattr(container, "copy", lambda src, dest: dest.write_bytes(b"x"))
        destination = container.copy_file_to_host(Path("/"))

        assert uuid.UUID(destination.name)
        assert destination.name == destination.name.upper()
        assert destination.exists()

    def test_container_scoped_to_host_group(self, container, tmp_path):
        assert container.path == (tmp_path / "containers" / "group.com.example.app").resolve()

    def test_missing_host_identity(self, tmp_path, source_dir):
        container = SharedContainer(tmp_path / "containers", "nodots")
        with pytest.raises(MissingHostIdentity):
            container.copy_file_to_host(write_file(source_dir / "a.txt"))
