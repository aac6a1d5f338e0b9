"""Tests for manager E2E data models."""

from datetime import datetime, timezone

import pytest

from manager_e2e.core.exceptions import ValidationError
from manager_e2e.models.communications import (
    CAROUSEL,
    EXAM,
    POLL,
    POST_TYPES,
    SIMPLE_POST_PATH,
    MediaFiles,
    get_post_type,
)
from manager_e2e.models.results import PublicationResult, Status
from manager_e2e.models.users import (
    Credentials,
    UsersData,
    clear_users_cache,
    load_users,
)


class TestCredentials:
    """Tests for Credentials."""

    def test_from_dict(self):
        creds = Credentials.from_dict({"email": " qa@example.com ", "password": "pw"})
        assert creds.email == "qa@example.com"
        assert creds.password == "pw"

    def test_missing_email(self):
        with pytest.raises(ValidationError) as exc_info:
            Credentials.from_dict({"password": "pw"})
        assert exc_info.value.field == "validUser.email"

    def test_missing_password(self):
        with pytest.raises(ValidationError, match="password"):
            Credentials.from_dict({"email": "qa@example.com", "password": ""})

    def test_not_an_object(self):
        with pytest.raises(ValidationError):
            Credentials.from_dict("qa@example.com")

    def test_repr_hides_secrets(self):
        text = repr(Credentials(email="qa.user@example.com", password="s3cret"))
        assert "s3cret" not in text
        assert "qa.user" not in text
        assert "q***@example.com" in text


class TestLoadUsers:
    """Tests for load_users."""

    @pytest.fixture(autouse=True)
    def reset_cache(self):
        clear_users_cache()
        yield
        clear_users_cache()

    def test_load(self, users_file):
        users = load_users(users_file)
        assert isinstance(users, UsersData)
        assert users.valid_user.email == "qa.user@example.com"

    def test_cached_per_path(self, users_file):
        first = load_users(users_file)
        users_file.write_text('{"validUser": {"email": "changed@example.com", "password": "x"}}')

        assert load_users(users_file) is first
        assert load_users(users_file, use_cache=False).valid_user.email == "changed@example.com"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValidationError, match="not found"):
            load_users(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text("{not json")
        with pytest.raises(ValidationError, match="not valid JSON"):
            load_users(path)

    def test_missing_valid_user(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text('{"otherUser": {}}')
        with pytest.raises(ValidationError, match="validUser"):
            load_users(path)


class TestPostTypes:
    """Tests for the communication type table."""

    def test_paths(self):
        assert CAROUSEL.path == "/manager/communications/new/carousel-communication"
        assert POLL.path == "/manager/communications/new/poll"
        assert SIMPLE_POST_PATH == "/manager/communications/new/simple-communication"

    def test_only_carousel_skips_data_collection(self):
        assert [t.name for t in POST_TYPES if not t.data_collection] == ["Post carrossel"]

    def test_poll_requirements(self):
        assert POLL.requires_question and POLL.requires_options and POLL.requires_deadline

    def test_lookup(self):
        assert get_post_type("exam") is EXAM
        assert get_post_type("Post Enquete") is POLL

    def test_unknown(self):
        with pytest.raises(KeyError):
            get_post_type("newsletter")


class TestMediaFiles:
    """Tests for MediaFiles."""

    def test_from_dir(self, tmp_path):
        media = MediaFiles.from_dir(tmp_path)
        assert media.image == tmp_path / "post-image.png"
        assert media.gif == tmp_path / "simple.gif"
        assert media.video == tmp_path / "simple.mp4"

    def test_missing(self, tmp_path):
        (tmp_path / "simple.gif").write_bytes(b"GIF89a")
        media = MediaFiles.from_dir(tmp_path)
        assert media.missing() == [media.image, media.video]


class TestPublicationResult:
    """Tests for PublicationResult."""

    def test_to_dict(self):
        result = PublicationResult(
            post_type="Quiz",
            status=Status.CONTENT_FILLED,
            title="Teste - Quiz",
            duration_seconds=1.23456,
            timestamp=datetime(2025, 1, 2, tzinfo=timezone.utc),
        )

        assert result.to_dict() == {
            "post_type": "Quiz",
            "status": "content_filled",
            "title": "Teste - Quiz",
            "media": "",
            "duration_seconds": 1.23,
            "timestamp": "2025-01-02T00:00:00+00:00",
        }
        assert not result.is_published

    def test_is_published(self):
        assert PublicationResult(post_type="Post enquete", status=Status.PUBLISHED).is_published
