"""
Unit Tests for request schemas
Tests for: normalization, cross-field validation
"""
import pytest
from datetime import datetime, timezone, timedelta
from pydantic import ValidationError

from sponsorhub.models.user import UserRole
from sponsorhub.schemas.auth import UserRegister, UserLogin
from sponsorhub.schemas.event import EventCreate
from sponsorhub.schemas.message import MessageCreate, MAX_MESSAGE_LENGTH
from sponsorhub.schemas.profile import OrganizerProfileUpdate, SponsorProfileUpdate


class TestUserRegister:

    def test_normalizes_name_and_email(self):
        user = UserRegister(name="  Priya  ", email="Priya@Example.COM", password="secret1")

        assert user.name == "Priya"
        assert user.email == "priya@example.com"
        assert user.role == UserRole.ORGANIZER

    def test_short_password(self):
        with pytest.raises(ValidationError):
            UserRegister(name="Priya", email="priya@example.com", password="123")

    def test_blank_name(self):
        with pytest.raises(ValidationError) as exc_info:
            UserRegister(name="   ", email="priya@example.com", password="secret1")

        assert "Name is required" in str(exc_info.value)

    def test_login_email_lowercased(self):
        assert UserLogin(email="A@B.io", password="x").email == "a@b.io"


class TestEventCreate:

    def test_end_before_start(self):
        start = datetime(2026, 12, 1)
        with pytest.raises(ValidationError) as exc_info:
            EventCreate(title="Fest", description="Annual fest", start_date=start, end_date=start)

        assert "End date must be after start date" in str(exc_info.value)

    def test_aware_dates_stored_as_naive_utc(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        event = EventCreate(
            title="Fest",
            description="Annual fest",
            start_date=datetime(2026, 12, 1, 10, 0, tzinfo=ist),
            end_date=datetime(2026, 12, 2, 10, 0, tzinfo=ist),
        )

        assert event.start_date == datetime(2026, 12, 1, 4, 30)
        assert event.start_date.tzinfo is None

    def test_negative_amount(self):
        with pytest.raises(ValidationError):
            EventCreate(
                title="Fest",
                description="Annual fest",
                start_date=datetime(2026, 12, 1),
                end_date=datetime(2026, 12, 2),
                amount_required=-1,
            )


class TestMessageCreate:

    def test_content_trimmed(self):
        assert MessageCreate(content="  hello  ").content == "hello"

    def test_blank_content(self):
        with pytest.raises(ValidationError):
            MessageCreate(content="   ")

    def test_too_long(self):
        with pytest.raises(ValidationError):
            MessageCreate(content="x" * (MAX_MESSAGE_LENGTH + 1))


class TestProfileUpdate:

    def test_omitted_name_is_left_unset(self):
        update = SponsorProfileUpdate(bio="  Snacks for every fest  ")

        assert update.model_dump(exclude_unset=True) == {"bio": "Snacks for every fest"}

    @pytest.mark.parametrize("name", [None, "   "])
    def test_name_cannot_be_cleared(self, name):
        with pytest.raises(ValidationError) as exc_info:
            OrganizerProfileUpdate(name=name)

        assert "Name is required" in str(exc_info.value)

    def test_designation_stripped(self):
        assert OrganizerProfileUpdate(designation=" Dean ").designation == "Dean"
