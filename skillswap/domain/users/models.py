"""User aggregate: accounts, their skills, weekly availability and preferences.

``Email`` and ``UserProfile`` are frozen value objects; the remaining
classes are entities that mutate only through named methods.
"""

from __future__ import annotations

import re
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import datetime, time
from enum import Enum, IntEnum

from ..common.entity import Entity, require_id, require_text, utc_now
from ..common.errors import BusinessRuleError, ValidationError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class UserStatus(str, Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"
    PENDING_VERIFICATION = "pending_verification"
    SUSPENDED = "suspended"
    BANNED = "banned"


class VerificationStatus(str, Enum):
    """Ordered from least to most trusted."""

    UNVERIFIED = "unverified"
    VERIFIED = "verified"
    SKILL_VERIFIED = "skill_verified"
    TRUSTED_MEMBER = "trusted_member"

    @property
    def rank(self) -> int:
        return list(VerificationStatus).index(self)


class SkillType(str, Enum):
    CAN_TEACH = "can_teach"
    WANT_TO_LEARN = "want_to_learn"


class DayOfWeek(IntEnum):
    """Matches ``datetime.weekday()`` numbering."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------

_USERNAME_RE = re.compile(r"^[a-zA-Z0-9_-]+$")


def normalize_email(value: str) -> str:
    return value.strip().lower()


def normalize_username(value: str) -> str:
    return value.strip().lower()


@dataclass(frozen=True)
class Email:
    """A syntactically valid, lower-cased email address."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValidationError("Email cannot be null or empty")
        normalized = normalize_email(self.value)
        if not _is_valid_email(normalized):
            raise ValidationError("Invalid email format")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value


def _is_valid_email(email: str) -> bool:
    if len(email) > 255 or email.count("@") != 1 or any(c.isspace() for c in email):
        return False
    local_part, domain = email.split("@")
    if not local_part or len(local_part) > 64:
        return False
    if not domain or "." not in domain or ".." in email:
        return False
    return not (domain.startswith(".") or domain.endswith("."))


@dataclass(frozen=True)
class UserProfile:
    """Display profile stored inline on the user row."""

    first_name: str
    last_name: str
    bio: str | None = None
    profile_image_url: str | None = None
    timezone: str | None = None
    preferred_language: str = "en"

    def __post_init__(self) -> None:
        if not self.first_name or not self.first_name.strip():
            raise ValidationError("First name cannot be null or empty")
        if not self.last_name or not self.last_name.strip():
            raise ValidationError("Last name cannot be null or empty")
        if len(self.first_name) > 100:
            raise ValidationError("First name cannot exceed 100 characters")
        if len(self.last_name) > 100:
            raise ValidationError("Last name cannot exceed 100 characters")
        if self.bio and len(self.bio) > 1000:
            raise ValidationError("Bio cannot exceed 1000 characters")
        if self.profile_image_url and len(self.profile_image_url) > 500:
            raise ValidationError("Profile image URL cannot exceed 500 characters")

        object.__setattr__(self, "first_name", self.first_name.strip())
        object.__setattr__(self, "last_name", self.last_name.strip())
        for name in ("bio", "profile_image_url", "timezone"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, value.strip())
        object.__setattr__(
            self, "preferred_language", (self.preferred_language or "en").strip().lower()
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def with_bio(self, bio: str | None) -> UserProfile:
        return replace(self, bio=bio)

    def with_timezone(self, timezone: str | None) -> UserProfile:
        return replace(self, timezone=timezone)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


class UserSkill(Entity):
    """A skill a user can teach or wants to learn, with self-rated proficiency."""

    _PROFICIENCY_LABELS = {
        1: "Beginner",
        2: "Novice",
        3: "Intermediate",
        4: "Advanced",
        5: "Expert",
    }

    def __init__(
        self,
        user_id: uuid.UUID,
        skill_id: uuid.UUID,
        skill_type: SkillType,
        proficiency_level: int,
        years_of_experience: int | None = None,
        description: str | None = None,
        is_primary: bool = False,
    ) -> None:
        super().__init__()
        self._user_id = require_id(user_id, "User ID")
        self._skill_id = require_id(skill_id, "Skill ID")
        self._skill_type = SkillType(skill_type)
        self._proficiency_level = self._validate_proficiency(proficiency_level)
        self._years_of_experience = years_of_experience
        self._description = description.strip() if description is not None else None
        self._is_primary = is_primary

    @property
    def user_id(self) -> uuid.UUID:
        return self._user_id

    @property
    def skill_id(self) -> uuid.UUID:
        return self._skill_id

    @property
    def skill_type(self) -> SkillType:
        return SkillType(self._skill_type)

    @property
    def proficiency_level(self) -> int:
        return self._proficiency_level

    @property
    def years_of_experience(self) -> int | None:
        return self._years_of_experience

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def is_primary(self) -> bool:
        return self._is_primary

    @property
    def skill(self):
        """The related Skill; only available when eagerly loaded."""
        return getattr(self, "_skill", None)

    @property
    def user(self) -> User | None:
        """The owning User; only available when eagerly loaded."""
        return getattr(self, "_user", None)

    def update_proficiency(
        self, proficiency_level: int, years_of_experience: int | None = None
    ) -> None:
        self._proficiency_level = self._validate_proficiency(proficiency_level)
        self._years_of_experience = years_of_experience
        self.touch()

    def update_description(self, description: str | None) -> None:
        self._description = description.strip() if description is not None else None
        self.touch()

    def set_as_primary(self) -> None:
        self._is_primary = True
        self.touch()

    def remove_primary_designation(self) -> None:
        self._is_primary = False
        self.touch()

    def proficiency_description(self) -> str:
        return self._PROFICIENCY_LABELS.get(self._proficiency_level, "Unknown")

    @staticmethod
    def _validate_proficiency(level: int) -> int:
        if not 1 <= level <= 5:
            raise ValidationError("Proficiency level must be between 1 and 5")
        return level


class UserAvailability(Entity):
    """A recurring weekly time slot during which the user can meet."""

    def __init__(
        self,
        user_id: uuid.UUID,
        day_of_week: DayOfWeek,
        start_time: time,
        end_time: time,
        timezone: str,
    ) -> None:
        super().__init__()
        self._user_id = require_id(user_id, "User ID")
        self._timezone = require_text(timezone, "Timezone")
        if start_time >= end_time:
            raise ValidationError("Start time must be before end time")
        self._day_of_week = DayOfWeek(day_of_week)
        self._start_time = start_time
        self._end_time = end_time
        self._is_active = True

    @property
    def user_id(self) -> uuid.UUID:
        return self._user_id

    @property
    def day_of_week(self) -> DayOfWeek:
        return DayOfWeek(self._day_of_week)

    @property
    def start_time(self) -> time:
        return self._start_time

    @property
    def end_time(self) -> time:
        return self._end_time

    @property
    def timezone(self) -> str:
        return self._timezone

    @property
    def is_active(self) -> bool:
        return self._is_active

    def update_time_slot(self, start_time: time, end_time: time) -> None:
        if start_time >= end_time:
            raise ValidationError("Start time must be before end time")
        self._start_time = start_time
        self._end_time = end_time
        self.touch()

    def update_timezone(self, timezone: str) -> None:
        self._timezone = require_text(timezone, "Timezone")
        self.touch()

    def activate(self) -> None:
        self._is_active = True
        self.touch()

    def deactivate(self) -> None:
        self._is_active = False
        self.touch()

    def overlaps_with(self, other_start: time, other_end: time) -> bool:
        return self._start_time < other_end and self._end_time > other_start

    @property
    def duration_minutes(self) -> int:
        start = self._start_time.hour * 60 + self._start_time.minute
        end = self._end_time.hour * 60 + self._end_time.minute
        return end - start


class UserPreferences(Entity):
    """Per-user notification and session settings (one row per user)."""

    DEFAULT_SESSION_DURATION = 60
    DEFAULT_MEETING_PLATFORM = "built_in"

    def __init__(self, user_id: uuid.UUID) -> None:
        super().__init__()
        self._user_id = require_id(user_id, "User ID")
        self._max_travel_distance: int | None = None
        self._apply_defaults()

    def _apply_defaults(self) -> None:
        self._email_notifications = True
        self._push_notifications = True
        self._session_reminders = True
        self._marketing_emails = False
        self._preferred_session_duration = self.DEFAULT_SESSION_DURATION
        self._preferred_meeting_platform = self.DEFAULT_MEETING_PLATFORM
        self._auto_accept_from_verified = False

    @property
    def user_id(self) -> uuid.UUID:
        return self._user_id

    @property
    def email_notifications(self) -> bool:
        return self._email_notifications

    @property
    def push_notifications(self) -> bool:
        return self._push_notifications

    @property
    def session_reminders(self) -> bool:
        return self._session_reminders

    @property
    def marketing_emails(self) -> bool:
        return self._marketing_emails

    @property
    def preferred_session_duration(self) -> int:
        return self._preferred_session_duration

    @property
    def max_travel_distance(self) -> int | None:
        return self._max_travel_distance

    @property
    def preferred_meeting_platform(self) -> str:
        return self._preferred_meeting_platform

    @property
    def auto_accept_from_verified(self) -> bool:
        return self._auto_accept_from_verified

    def update_notification_preferences(
        self, email: bool, push: bool, session_reminders: bool, marketing: bool
    ) -> None:
        self._email_notifications = email
        self._push_notifications = push
        self._session_reminders = session_reminders
        self._marketing_emails = marketing
        self.touch()

    def update_session_preferences(
        self, session_duration: int, meeting_platform: str, auto_accept_from_verified: bool
    ) -> None:
        if session_duration <= 0:
            raise ValidationError("Session duration must be positive")
        self._preferred_meeting_platform = require_text(meeting_platform, "Meeting platform")
        self._preferred_session_duration = session_duration
        self._auto_accept_from_verified = auto_accept_from_verified
        self.touch()

    def update_max_travel_distance(self, max_distance: int | None) -> None:
        if max_distance is not None and max_distance < 0:
            raise ValidationError("Max travel distance cannot be negative")
        self._max_travel_distance = max_distance
        self.touch()

    def reset_to_defaults(self) -> None:
        self._apply_defaults()
        self._max_travel_distance = None
        self.touch()

    def notification_summary(self) -> str:
        enabled = [
            label
            for label, on in (
                ("Email", self._email_notifications),
                ("Push", self._push_notifications),
                ("Reminders", self._session_reminders),
                ("Marketing", self._marketing_emails),
            )
            if on
        ]
        return ", ".join(enabled) if enabled else "None"


class User(Entity):
    """A SkillSwap account.

    ``user_skills``, ``availability`` and ``preferences`` are only
    available when loaded through the matching repository method
    (``get_with_skills``, ``get_with_availability``) or on a new user.
    """

    def __init__(
        self,
        email: Email,
        username: str,
        password_hash: str,
        profile: UserProfile,
    ) -> None:
        super().__init__()
        if email is None:
            raise ValidationError("Email is required")
        if password_hash is None:
            raise ValidationError("Password hash is required")
        if profile is None:
            raise ValidationError("Profile is required")
        self._email = email.value
        self._username = self._validate_username(username)
        self._password_hash = password_hash
        self._set_profile(profile)
        self._status = UserStatus.PENDING_VERIFICATION
        self._verification_status = VerificationStatus.UNVERIFIED
        self._last_login_at: datetime | None = None
        self._user_skills: list[UserSkill] = []
        self._availability: list[UserAvailability] = []
        self._preferences: UserPreferences | None = None

    # -- Properties --------------------------------------------------------

    @property
    def email(self) -> Email:
        return Email(self._email)

    @property
    def username(self) -> str:
        return self._username

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def profile(self) -> UserProfile:
        return UserProfile(
            first_name=self._first_name,
            last_name=self._last_name,
            bio=self._bio,
            profile_image_url=self._profile_image_url,
            timezone=self._timezone,
            preferred_language=self._preferred_language,
        )

    @property
    def status(self) -> UserStatus:
        return UserStatus(self._status)

    @property
    def verification_status(self) -> VerificationStatus:
        return VerificationStatus(self._verification_status)

    @property
    def last_login_at(self) -> datetime | None:
        return self._last_login_at

    @property
    def user_skills(self) -> tuple[UserSkill, ...]:
        return tuple(self._user_skills)

    @property
    def availability(self) -> tuple[UserAvailability, ...]:
        return tuple(self._availability)

    @property
    def preferences(self) -> UserPreferences | None:
        return self._preferences

    # -- Mutations ---------------------------------------------------------

    def update_profile(self, profile: UserProfile) -> None:
        if profile is None:
            raise ValidationError("Profile is required")
        self._set_profile(profile)
        self.touch()

    def update_email(self, email: Email) -> None:
        if email is None:
            raise ValidationError("Email is required")
        self._email = email.value
        self._verification_status = VerificationStatus.UNVERIFIED
        self.touch()

    def update_password_hash(self, password_hash: str) -> None:
        if not password_hash or not password_hash.strip():
            raise ValidationError("Password hash cannot be null or empty")
        self._password_hash = password_hash
        self.touch()

    def activate(self) -> None:
        self._status = UserStatus.ACTIVE
        self.touch()

    def deactivate(self) -> None:
        self._status = UserStatus.INACTIVE
        self.touch()

    def suspend(self) -> None:
        self._status = UserStatus.SUSPENDED
        self.touch()

    def ban(self) -> None:
        self._status = UserStatus.BANNED
        self.touch()

    def verify_email(self) -> None:
        self._verification_status = VerificationStatus.VERIFIED
        if self.status is UserStatus.PENDING_VERIFICATION:
            self._status = UserStatus.ACTIVE
        self.touch()

    def record_login(self) -> None:
        self._last_login_at = utc_now()
        self.touch()

    def add_skill(self, user_skill: UserSkill) -> None:
        if user_skill is None:
            raise ValidationError("User skill is required")
        if self._find_skill(user_skill.skill_id, user_skill.skill_type) is not None:
            raise BusinessRuleError("User already has this skill with the same type")
        self._user_skills.append(user_skill)
        self.touch()

    def remove_skill(self, skill_id: uuid.UUID, skill_type: SkillType) -> None:
        existing = self._find_skill(skill_id, skill_type)
        if existing is not None:
            self._user_skills.remove(existing)
            self.touch()

    def update_availability(self, availability: Iterable[UserAvailability]) -> None:
        if availability is None:
            raise ValidationError("Availability is required")
        self._availability = list(availability)
        self.touch()

    def set_preferences(self, preferences: UserPreferences) -> None:
        if preferences is None:
            raise ValidationError("Preferences are required")
        self._preferences = preferences
        self.touch()

    # -- Queries -----------------------------------------------------------

    def can_teach(self, skill_id: uuid.UUID) -> bool:
        return self._find_skill(skill_id, SkillType.CAN_TEACH) is not None

    def wants_to_learn(self, skill_id: uuid.UUID) -> bool:
        return self._find_skill(skill_id, SkillType.WANT_TO_LEARN) is not None

    def teachable_skills(self) -> list[UserSkill]:
        return [us for us in self._user_skills if us.skill_type is SkillType.CAN_TEACH]

    def learning_skills(self) -> list[UserSkill]:
        return [us for us in self._user_skills if us.skill_type is SkillType.WANT_TO_LEARN]

    def is_active(self) -> bool:
        return self.status is UserStatus.ACTIVE

    def is_email_verified(self) -> bool:
        return self.verification_status.rank >= VerificationStatus.VERIFIED.rank

    # -- Helpers -----------------------------------------------------------

    def _find_skill(self, skill_id: uuid.UUID, skill_type: SkillType) -> UserSkill | None:
        for us in self._user_skills:
            if us.skill_id == skill_id and us.skill_type is SkillType(skill_type):
                return us
        return None

    def _set_profile(self, profile: UserProfile) -> None:
        self._first_name = profile.first_name
        self._last_name = profile.last_name
        self._bio = profile.bio
        self._profile_image_url = profile.profile_image_url
        self._timezone = profile.timezone
        self._preferred_language = profile.preferred_language

    @staticmethod
    def _validate_username(username: str) -> str:
        if not username or not username.strip():
            raise ValidationError("Username cannot be null or empty")
        if not 3 <= len(username) <= 50:
            raise ValidationError("Username must be between 3 and 50 characters")
        if not _USERNAME_RE.match(username):
            raise ValidationError(
                "Username can only contain letters, numbers, underscores, and hyphens"
            )
        return normalize_username(username)


__all__ = [
    "UserStatus",
    "VerificationStatus",
    "SkillType",
    "DayOfWeek",
    "Email",
    "UserProfile",
    "normalize_email",
    "normalize_username",
    "User",
    "UserSkill",
    "UserAvailability",
    "UserPreferences",
]
