"""Tests for the user aggregate: value objects, User, UserSkill, availability, preferences."""

from __future__ import annotations

import uuid
from datetime import time

import pytest

from skillswap.domain.common.errors import BusinessRuleError, ValidationError
from skillswap.domain.users.models import (
    DayOfWeek,
    Email,
    SkillType,
    User,
    UserAvailability,
    UserPreferences,
    UserProfile,
    UserSkill,
    UserStatus,
    VerificationStatus,
)


def _user(**overrides) -> User:
    fields = dict(
        email=Email("Ada@Example.com"),
        username="Ada_L",
        password_hash="hashed",
        profile=UserProfile("Ada", "Lovelace"),
    )
    fields.update(overrides)
    return User(**fields)


class TestEmail:
    def test_normalised_to_lower_case(self):
        assert Email("  Ada@Example.COM ").value == "ada@example.com"

    @pytest.mark.parametrize(
        "raw",
        ["plainaddress", "a@b", "a@@b.com", "a b@c.com", "a@.com", "a@b..com", "@b.com"],
    )
    def test_invalid_formats_rejected(self, raw):
        with pytest.raises(ValidationError, match="Invalid email format"):
            Email(raw)

    def test_empty_rejected(self):
        with pytest.raises(ValidationError, match="cannot be null or empty"):
            Email("   ")


class TestUserProfile:
    def test_trims_and_lowercases_language(self):
        p = UserProfile(" Ada ", " Lovelace ", preferred_language=" EN ")
        assert p.full_name == "Ada Lovelace"
        assert p.preferred_language == "en"

    def test_with_bio_returns_copy(self):
        p = UserProfile("Ada", "Lovelace")
        q = p.with_bio("Mathematician")
        assert p.bio is None
        assert q.bio == "Mathematician"

    def test_long_bio_rejected(self):
        with pytest.raises(ValidationError, match="Bio cannot exceed 1000"):
            UserProfile("Ada", "Lovelace", bio="x" * 1001)


class TestUser:
    def test_new_user_defaults(self):
        user = _user()
        assert user.username == "ada_l"
        assert user.email.value == "ada@example.com"
        assert user.status is UserStatus.PENDING_VERIFICATION
        assert user.verification_status is VerificationStatus.UNVERIFIED
        assert user.user_skills == ()
        assert user.preferences is None

    @pytest.mark.parametrize("username", ["ab", "has space", "x" * 51, ""])
    def test_bad_username_rejected(self, username):
        with pytest.raises(ValidationError):
            _user(username=username)

    def test_verify_email_activates_pending_user(self):
        user = _user()
        user.verify_email()
        assert user.status is UserStatus.ACTIVE
        assert user.is_email_verified()

    def test_update_email_resets_verification(self):
        user = _user()
        user.verify_email()
        user.update_email(Email("new@example.com"))
        assert user.email.value == "new@example.com"
        assert user.verification_status is VerificationStatus.UNVERIFIED

    def test_profile_roundtrips_through_columns(self):
        user = _user()
        user.update_profile(UserProfile("Ada", "King", bio="Analyst", timezone="UTC"))
        assert user.profile.full_name == "Ada King"
        assert user.profile.bio == "Analyst"

    def test_add_skill_rejects_duplicate_type(self):
        user = _user()
        skill_id = uuid.uuid4()
        user.add_skill(UserSkill(user.id, skill_id, SkillType.CAN_TEACH, 4))
        with pytest.raises(BusinessRuleError):
            user.add_skill(UserSkill(user.id, skill_id, SkillType.CAN_TEACH, 2))

    def test_same_skill_can_be_taught_and_learned(self):
        user = _user()
        skill_id = uuid.uuid4()
        user.add_skill(UserSkill(user.id, skill_id, SkillType.CAN_TEACH, 4))
        user.add_skill(UserSkill(user.id, skill_id, SkillType.WANT_TO_LEARN, 1))
        assert user.can_teach(skill_id)
        assert user.wants_to_learn(skill_id)
        assert len(user.teachable_skills()) == 1
        assert len(user.learning_skills()) == 1

    def test_remove_skill(self):
        user = _user()
        skill_id = uuid.uuid4()
        user.add_skill(UserSkill(user.id, skill_id, SkillType.CAN_TEACH, 4))
        user.remove_skill(skill_id, SkillType.CAN_TEACH)
        assert not user.can_teach(skill_id)


class TestUserSkill:
    @pytest.mark.parametrize("level", [0, 6])
    def test_proficiency_bounds(self, level):
        with pytest.raises(ValidationError, match="between 1 and 5"):
            UserSkill(uuid.uuid4(), uuid.uuid4(), SkillType.CAN_TEACH, level)

    def test_proficiency_description(self):
        us = UserSkill(uuid.uuid4(), uuid.uuid4(), SkillType.CAN_TEACH, 5)
        assert us.proficiency_description() == "Expert"


class TestUserAvailability:
    def test_start_must_precede_end(self):
        with pytest.raises(ValidationError, match="Start time must be before end time"):
            UserAvailability(uuid.uuid4(), DayOfWeek.MONDAY, time(10), time(9), "UTC")

    def test_overlap_and_duration(self):
        slot = UserAvailability(uuid.uuid4(), DayOfWeek.FRIDAY, time(9), time(11, 30), "UTC")
        assert slot.duration_minutes == 150
        assert slot.overlaps_with(time(11), time(12))
        assert not slot.overlaps_with(time(11, 30), time(12))


class TestUserPreferences:
    def test_defaults(self):
        prefs = UserPreferences(uuid.uuid4())
        assert prefs.preferred_session_duration == 60
        assert prefs.preferred_meeting_platform == "built_in"
        assert prefs.notification_summary() == "Email, Push, Reminders"

    def test_negative_travel_distance_rejected(self):
        with pytest.raises(ValidationError):
            UserPreferences(uuid.uuid4()).update_max_travel_distance(-1)

    def test_reset_to_defaults(self):
        prefs = UserPreferences(uuid.uuid4())
        prefs.update_notification_preferences(False, False, False, True)
        prefs.update_max_travel_distance(20)
        prefs.reset_to_defaults()
        assert prefs.marketing_emails is False
        assert prefs.max_travel_distance is None
