"""Tests for the photo ingestion controller."""

import asyncio

import pytest

from cvbuilder.form_state import FieldPath, FormState
from cvbuilder.photo import (
    AttemptOutcome,
    AvatarKind,
    PhotoFile,
    PhotoIngestionController,
    PhotoLimits,
    PhotoSlotState,
    UploadErrorKind,
    encode_data_uri,
    is_image_data_uri,
)


class GatedPhoto:
    """Candidate whose read() blocks until release() is called."""

    def __init__(self, name, content, mime="image/png"):
        self.name = name
        self.type = mime
        self.size = len(content)
        self._content = content
        self._gate = asyncio.Event()
        self._fail = False

    def release(self, fail=False):
        self._fail = fail
        self._gate.set()

    async def read(self):
        await self._gate.wait()
        if self._fail:
            raise OSError("stream closed")
        return self._content


class BrokenPhoto:
    name = "broken.png"
    type = "image/png"
    size = 10

    async def read(self):
        raise OSError("corrupt stream")


def _select(controller, photo):
    return asyncio.run(controller.on_file_selected(photo))


@pytest.fixture
def committed(form_state, png_bytes):
    """Controller with an already committed PNG."""
    controller = PhotoIngestionController(form_state)
    _select(controller, PhotoFile.from_bytes("old.png", png_bytes))
    return controller


class TestInitialState:
    """Tests for the state right after mount."""

    def test_empty_form_starts_empty_with_initials(self, form_state):
        controller = PhotoIngestionController(form_state)
        assert controller.state == PhotoSlotState.EMPTY
        assert controller.preview is None
        assert controller.upload_error is None
        assert controller.avatar().kind == AvatarKind.INITIALS
        assert controller.avatar().value == "JD"
        assert not controller.can_remove

    def test_resumed_session_starts_committed(self, form_state):
        """A form that already carries a photo shows it immediately."""
        form_state.set(FieldPath.PHOTO_URL, "data:image/png;base64,AAAA")
        controller = PhotoIngestionController(form_state)
        assert controller.state == PhotoSlotState.COMMITTED
        assert controller.preview == "data:image/png;base64,AAAA"
        assert controller.avatar().kind == AvatarKind.PHOTO

    def test_placeholder_without_names(self):
        controller = PhotoIngestionController(FormState())
        assert controller.avatar().kind == AvatarKind.PLACEHOLDER
        assert controller.get_fallback_identity() == ""


class TestSelection:
    """Tests for on_file_selected()."""

    def test_no_file_is_noop(self, committed):
        before = (committed.photo_url, committed.preview)
        assert _select(committed, None) == AttemptOutcome.IGNORED
        assert (committed.photo_url, committed.preview) == before
        assert committed.upload_error is None

    def test_valid_photo_commits(self, form_state, png_bytes):
        controller = PhotoIngestionController(form_state)
        outcome = _select(controller, PhotoFile.from_bytes("me.png", png_bytes))
        expected = encode_data_uri("image/png", png_bytes)
        assert outcome == AttemptOutcome.COMMITTED
        assert form_state.get(FieldPath.PHOTO_URL) == expected
        assert controller.preview == expected
        assert controller.upload_error is None
        assert controller.state == PhotoSlotState.COMMITTED
        assert controller.can_remove

    @pytest.mark.parametrize("mime", ["application/pdf", "text/plain", ""])
    def test_unsupported_type_leaves_state_untouched(self, committed, mime):
        before = (committed.photo_url, committed.preview)
        outcome = _select(committed, PhotoFile(name="x", type=mime, size=10, content=b"x"))
        assert outcome == AttemptOutcome.REJECTED
        assert committed.upload_error.kind == UploadErrorKind.UnsupportedType
        assert committed.upload_error_message == "Please select an image file (PNG, JPG, JPEG)"
        assert (committed.photo_url, committed.preview) == before

    def test_too_large_leaves_state_untouched(self, committed):
        before = (committed.photo_url, committed.preview)
        outcome = _select(committed, PhotoFile(name="big.png", type="image/png", size=2_097_153))
        assert outcome == AttemptOutcome.REJECTED
        assert committed.upload_error.kind == UploadErrorKind.TooLarge
        assert (committed.photo_url, committed.preview) == before
        assert committed.state == PhotoSlotState.COMMITTED

    def test_read_failure_leaves_state_untouched(self, committed):
        before = (committed.photo_url, committed.preview)
        assert _select(committed, BrokenPhoto()) == AttemptOutcome.REJECTED
        assert committed.upload_error.kind == UploadErrorKind.ReadFailure
        assert "OSError" in committed.upload_error.detail
        assert (committed.photo_url, committed.preview) == before

    def test_type_parameters_dropped_from_stored_uri(self, form_state):
        controller = PhotoIngestionController(form_state)
        photo = PhotoFile(name="p.png", type="image/png; name=p.png", size=3, content=b"abc")
        assert _select(controller, photo) == AttemptOutcome.COMMITTED
        assert controller.photo_url == "data:image/png;base64,YWJj"
        assert is_image_data_uri(controller.photo_url)

    def test_wildcard_type_rejected(self, committed):
        before = committed.photo_url
        outcome = _select(committed, PhotoFile(name="p", type="image/*", size=3, content=b"abc"))
        assert outcome == AttemptOutcome.REJECTED
        assert committed.upload_error.kind == UploadErrorKind.UnsupportedType
        assert committed.photo_url == before

    def test_file_grown_since_selection_rejected(self, committed, form_state, tmp_path):
        """The byte count actually read is held to the limit too."""
        controller = PhotoIngestionController(form_state, PhotoLimits(max_bytes=8))
        before = controller.photo_url
        path = tmp_path / "me.png"
        path.write_bytes(b"tiny")
        photo = PhotoFile.from_path(path)
        path.write_bytes(b"x" * 9)
        assert _select(controller, photo) == AttemptOutcome.REJECTED
        assert controller.upload_error.kind == UploadErrorKind.TooLarge
        assert controller.photo_url == before

    def test_new_attempt_clears_previous_error(self, form_state, png_bytes):
        controller = PhotoIngestionController(form_state)
        _select(controller, PhotoFile(name="x.txt", type="text/plain", size=1, content=b"x"))
        assert controller.upload_error is not None
        _select(controller, PhotoFile.from_bytes("me.png", png_bytes))
        assert controller.upload_error is None

    def test_cancelled_picker_keeps_standing_error(self, form_state):
        controller = PhotoIngestionController(form_state)
        _select(controller, PhotoFile(name="x.txt", type="text/plain", size=1, content=b"x"))
        _select(controller, None)
        assert controller.upload_error.kind == UploadErrorKind.UnsupportedType

    def test_preview_and_form_agree_inside_watchers(self, form_state, png_bytes):
        """No observer sees the preview and photoUrl disagree after a commit."""
        controller = PhotoIngestionController(form_state)
        observed = []
        form_state.watch(FieldPath.PHOTO_URL, lambda path, value: observed.append(controller.preview == value))
        _select(controller, PhotoFile.from_bytes("me.png", png_bytes))
        assert observed == [True]


class TestStaleCompletion:
    """Tests for overlapping reads: only the newest attempt may commit."""

    def test_older_read_finishing_last_is_dropped(self, form_state):
        async def scenario():
            controller = PhotoIngestionController(form_state)
            slow = GatedPhoto("slow.png", b"slow")
            fast = GatedPhoto("fast.png", b"fast")
            first = asyncio.create_task(controller.on_file_selected(slow))
            await asyncio.sleep(0)
            assert controller.state == PhotoSlotState.VALIDATING
            second = asyncio.create_task(controller.on_file_selected(fast))
            await asyncio.sleep(0)
            fast.release()
            assert await second == AttemptOutcome.COMMITTED
            slow.release()
            assert await first == AttemptOutcome.SUPERSEDED
            return controller

        controller = asyncio.run(scenario())
        assert controller.photo_url == encode_data_uri("image/png", b"fast")
        assert controller.preview == controller.photo_url
        assert controller.state == PhotoSlotState.COMMITTED

    def test_stale_failure_does_not_set_error(self, form_state):
        async def scenario():
            controller = PhotoIngestionController(form_state)
            slow = GatedPhoto("slow.png", b"slow")
            first = asyncio.create_task(controller.on_file_selected(slow))
            await asyncio.sleep(0)
            await controller.on_file_selected(PhotoFile.from_bytes("me.png", b"new", "image/png"))
            slow.release(fail=True)
            assert await first == AttemptOutcome.SUPERSEDED
            return controller

        controller = asyncio.run(scenario())
        assert controller.upload_error is None
        assert controller.photo_url == encode_data_uri("image/png", b"new")

    def test_rejected_newer_attempt_supersedes_pending_read(self, committed):
        """A newer selection wins even when it is rejected."""
        before = committed.photo_url

        async def scenario():
            slow = GatedPhoto("slow.png", b"slow")
            first = asyncio.create_task(committed.on_file_selected(slow))
            await asyncio.sleep(0)
            await committed.on_file_selected(PhotoFile(name="a.pdf", type="application/pdf", size=1, content=b"x"))
            slow.release()
            return await first

        assert asyncio.run(scenario()) == AttemptOutcome.SUPERSEDED
        assert committed.photo_url == before
        assert committed.upload_error.kind == UploadErrorKind.UnsupportedType
        assert committed.state == PhotoSlotState.COMMITTED

    def test_removal_during_read_wins(self, form_state):
        async def scenario():
            controller = PhotoIngestionController(form_state)
            slow = GatedPhoto("slow.png", b"slow")
            first = asyncio.create_task(controller.on_file_selected(slow))
            await asyncio.sleep(0)
            controller.remove_photo()
            slow.release()
            assert await first == AttemptOutcome.SUPERSEDED
            return controller

        controller = asyncio.run(scenario())
        assert controller.photo_url == ""
        assert controller.preview is None


class TestRemoval:
    """Tests for remove_photo()."""

    def test_remove_clears_everything(self, committed):
        _select(committed, PhotoFile(name="big.png", type="image/png", size=10**7))
        committed.remove_photo()
        assert committed.photo_url == ""
        assert committed.preview is None
        assert committed.upload_error is None
        assert committed.state == PhotoSlotState.EMPTY
        assert committed.avatar().kind == AvatarKind.INITIALS

    def test_remove_is_idempotent(self, form_state):
        controller = PhotoIngestionController(form_state)
        controller.remove_photo()
        controller.remove_photo()
        assert (controller.photo_url, controller.preview, controller.upload_error) == ("", None, None)


class TestExternalWrites:
    """Tests for preview tracking of photoUrl written by others."""

    def test_preview_follows_form(self, committed, form_state):
        form_state.set(FieldPath.PHOTO_URL, "")
        assert committed.preview is None
        form_state.set(FieldPath.PHOTO_URL, "data:image/jpeg;base64,AAAA")
        assert committed.preview == "data:image/jpeg;base64,AAAA"


class TestClose:
    """Tests for close() and context manager use."""

    def test_close_detaches_from_form(self, form_state):
        with PhotoIngestionController(form_state) as controller:
            pass
        assert controller.closed
        form_state.set(FieldPath.PHOTO_URL, "data:image/png;base64,AAAA")
        assert controller.preview is None
        assert _select(controller, PhotoFile.from_bytes("me.png", b"x")) == AttemptOutcome.IGNORED

    def test_remove_after_close_leaves_form_alone(self, committed, form_state):
        stored = form_state.get(FieldPath.PHOTO_URL)
        committed.close()
        committed.remove_photo()
        assert form_state.get(FieldPath.PHOTO_URL) == stored

    def test_pending_read_dropped_after_close(self, form_state):
        async def scenario():
            controller = PhotoIngestionController(form_state)
            slow = GatedPhoto("slow.png", b"slow")
            task = asyncio.create_task(controller.on_file_selected(slow))
            await asyncio.sleep(0)
            controller.close()
            slow.release()
            return await task

        assert asyncio.run(scenario()) == AttemptOutcome.SUPERSEDED
        assert form_state.get(FieldPath.PHOTO_URL) == ""


def test_upload_then_remove_scenario(form_state, png_bytes):
    """3 MB PNG rejected, 500 KB JPEG committed, then removed back to initials."""
    controller = PhotoIngestionController(form_state)

    big = PhotoFile(name="big.png", type="image/png", size=3 * 1000 * 1000)
    assert _select(controller, big) == AttemptOutcome.REJECTED
    assert controller.upload_error.kind == UploadErrorKind.TooLarge
    assert controller.photo_url == ""
    assert controller.avatar().value == "JD"

    jpeg_bytes = b"\xff\xd8\xff" + b"\x00" * (500 * 1000)
    jpeg = PhotoFile.from_bytes("me.jpg", jpeg_bytes)
    assert _select(controller, jpeg) == AttemptOutcome.COMMITTED
    assert controller.photo_url == encode_data_uri("image/jpeg", jpeg_bytes)
    assert controller.preview == controller.photo_url
    assert controller.upload_error is None
    assert controller.avatar().kind == AvatarKind.PHOTO

    controller.remove_photo()
    assert controller.photo_url == ""
    assert controller.preview is None
    assert controller.upload_error is None
    assert controller.avatar().kind == AvatarKind.INITIALS
    assert controller.avatar().value == "JD"
