"""Integration tests for the entity-specific repository queries."""

from __future__ import annotations

import uuid
from datetime import time

import pytest

from skillswap.domain.access.models import Permission, Role, RolePermission, RoleType, UserRole
from skillswap.domain.common.errors import ConflictError
from skillswap.domain.skills.models import Skill, SkillCategory
from skillswap.domain.users.models import (
    DayOfWeek,
    Email,
    SkillType,
    User,
    UserAvailability,
    UserProfile,
    UserSkill,
)
from skillswap.infra.db.seed import DEFAULT_CATEGORIES, ROLE_DEFINITIONS, seed_reference_data
from skillswap.use_cases.skill_categories import (
    CreateSkillCategoryCommand,
    CreateSkillCategoryUseCase,
)


def _user(email: str, username: str) -> User:
    return User(Email(email), username, "hashed", UserProfile("Test", "User"))


async def _seed_catalogue(uow):
    tech = SkillCategory("Technology", "Tech skills", "technology")
    music = SkillCategory("Music", "Music skills", "music")
    python = Skill("Python", "General purpose programming", tech.id)
    rust = Skill("Rust", "Systems programming", tech.id)
    cobol = Skill("COBOL", "Legacy programming", tech.id)
    cobol.deactivate()
    guitar = Skill("Guitar", "Acoustic and electric", music.id)
    uow.skill_categories.add_range([tech, music])
    uow.skills.add_range([python, rust, cobol, guitar])
    await uow.save_changes()
    return tech, music, python, rust, cobol, guitar


class TestSkillCategoryRepository:
    @pytest.mark.asyncio
    async def test_name_exists_honours_exclusion(self, uow):
        _, music, *_ = await _seed_catalogue(uow)
        other = (await uow.skill_categories.get_by_name("Technology")).id

        assert await uow.skill_categories.name_exists("Music") is True
        assert await uow.skill_categories.name_exists("Music", exclude_id=music.id) is False
        assert await uow.skill_categories.name_exists("Music", exclude_id=other) is True
        assert await uow.skill_categories.name_exists("Painting") is False

    @pytest.mark.asyncio
    async def test_get_by_slug_and_ordering(self, uow):
        await _seed_catalogue(uow)
        assert (await uow.skill_categories.get_by_slug("music")).name == "Music"
        names = [c.name for c in await uow.skill_categories.get_ordered()]
        assert names == ["Music", "Technology"]

    @pytest.mark.asyncio
    async def test_get_active_excludes_inactive(self, uow):
        _, music, *_ = await _seed_catalogue(uow)
        music.deactivate()
        uow.skill_categories.update(music)
        await uow.save_changes()

        assert [c.name for c in await uow.skill_categories.get_active()] == ["Technology"]

    @pytest.mark.asyncio
    async def test_get_with_skills_loads_only_active_skills(self, make_uow):
        writer = make_uow()
        tech, *_ = await _seed_catalogue(writer)
        await writer.close()

        reader = make_uow()
        loaded = await reader.skill_categories.get_with_skills(tech.id)
        assert [s.name for s in loaded.skills] == ["Python", "Rust"]
        await reader.close()

    @pytest.mark.asyncio
    async def test_get_with_skills_unknown_id(self, uow):
        assert await uow.skill_categories.get_with_skills(uuid.uuid4()) is None


class TestDuplicateCategoryEndToEnd:
    @pytest.mark.asyncio
    async def test_existing_name_is_a_conflict(self, make_uow):
        writer = make_uow()
        writer.skill_categories.add(SkillCategory("Languages", "Spoken languages", "languages"))
        await writer.save_changes()
        assert await writer.skill_categories.name_exists("Languages") is True
        await writer.close()

        with pytest.raises(ConflictError, match="already exists"):
            await CreateSkillCategoryUseCase().execute(
                make_uow(), CreateSkillCategoryCommand(name="Languages")
            )

        reader = make_uow()
        assert await reader.skill_categories.count() == 1
        await reader.close()


class TestSkillRepository:
    @pytest.mark.asyncio
    async def test_search_matches_name_or_description_case_insensitively(self, uow):
        await _seed_catalogue(uow)
        assert [s.name for s in await uow.skills.search("PROGRAMMING")] == ["Python", "Rust"]
        assert [s.name for s in await uow.skills.search("guit")] == ["Guitar"]

    @pytest.mark.asyncio
    async def test_search_blank_term_returns_nothing(self, uow):
        await _seed_catalogue(uow)
        assert await uow.skills.search("   ") == []

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, uow):
        await _seed_catalogue(uow)
        assert await uow.skills.search("%") == []

    @pytest.mark.asyncio
    async def test_by_category_includes_inactive(self, uow):
        tech, *_ = await _seed_catalogue(uow)
        names = [s.name for s in await uow.skills.get_by_category(tech.id)]
        assert names == ["COBOL", "Python", "Rust"]

    @pytest.mark.asyncio
    async def test_name_exists_in_category(self, uow):
        tech, music, python, *_ = await _seed_catalogue(uow)
        assert await uow.skills.name_exists_in_category("Python", tech.id) is True
        assert await uow.skills.name_exists_in_category("Python", music.id) is False
        assert (
            await uow.skills.name_exists_in_category("Python", tech.id, exclude_id=python.id)
            is False
        )

    @pytest.mark.asyncio
    async def test_get_by_slug(self, uow):
        await _seed_catalogue(uow)
        assert (await uow.skills.get_by_slug("guitar")).name == "Guitar"


class TestUserRepositories:
    @pytest.mark.asyncio
    async def test_lookup_by_email_and_username_is_case_insensitive(self, uow):
        ada = _user("ada@example.com", "ada_l")
        uow.users.add(ada)
        await uow.save_changes()

        assert await uow.users.get_by_email("ADA@Example.com") is ada
        assert await uow.users.get_by_username("ADA_L") is ada
        assert await uow.users.email_exists("ada@example.com") is True
        assert await uow.users.email_exists("ada@example.com", exclude_id=ada.id) is False
        assert await uow.users.username_exists("nobody") is False

    @pytest.mark.asyncio
    async def test_user_with_skills_round_trip(self, make_uow):
        writer = make_uow()
        _, _, python, rust, _, guitar = await _seed_catalogue(writer)
        ada = _user("ada@example.com", "ada")
        bob = _user("bob@example.com", "bob")
        ada.add_skill(UserSkill(ada.id, python.id, SkillType.CAN_TEACH, 5))
        ada.add_skill(UserSkill(ada.id, guitar.id, SkillType.WANT_TO_LEARN, 1))
        bob.add_skill(UserSkill(bob.id, rust.id, SkillType.CAN_TEACH, 3))
        writer.users.add_range([ada, bob])
        # Users and their skills go out in one flush
        assert await writer.save_changes() == 5
        await writer.close()

        reader = make_uow()
        loaded = await reader.users.get_with_skills(ada.id)
        assert loaded.can_teach(python.id)
        assert loaded.wants_to_learn(guitar.id)
        assert {us.skill.name for us in loaded.user_skills} == {"Python", "Guitar"}

        teachers = await reader.users.get_users_by_skills([python.id, rust.id])
        assert [u.username for u in teachers] == ["ada", "bob"]
        assert await reader.users.get_users_by_skills([]) == []

        teachable = await reader.user_skills.get_teachable_skills(ada.id)
        assert [us.skill_id for us in teachable] == [python.id]
        assert await reader.user_skills.user_has_skill(bob.id, rust.id) is True
        await reader.close()

    @pytest.mark.asyncio
    async def test_availability_queries(self, uow):
        ada = _user("ada@example.com", "ada")
        bob = _user("bob@example.com", "bob")
        uow.users.add_range([ada, bob])
        morning = UserAvailability(ada.id, DayOfWeek.MONDAY, time(9), time(12), "UTC")
        evening = UserAvailability(ada.id, DayOfWeek.MONDAY, time(18), time(20), "UTC")
        bob_slot = UserAvailability(bob.id, DayOfWeek.MONDAY, time(10), time(11), "UTC")
        bob_off = UserAvailability(bob.id, DayOfWeek.MONDAY, time(9), time(10, 30), "UTC")
        bob_off.deactivate()
        uow.user_availability.add_range([evening, morning, bob_slot, bob_off])
        await uow.save_changes()

        mine = await uow.user_availability.get_by_user_and_day(ada.id, DayOfWeek.MONDAY)
        assert mine == [morning, evening]

        at_ten_thirty = await uow.user_availability.get_users_available_at(
            DayOfWeek.MONDAY, time(10, 30)
        )
        assert {slot.user_id for slot in at_ten_thirty} == {ada.id, bob.id}
        assert bob_off not in at_ten_thirty
        assert await uow.user_availability.get_users_available_at(
            DayOfWeek.TUESDAY, time(10, 30)
        ) == []


class TestAccessRepositories:
    @pytest.mark.asyncio
    async def test_role_with_permissions(self, make_uow):
        writer = make_uow()
        role = Role(RoleType.MODERATOR, "Moderator")
        writer.roles.add(role)
        writer.role_permissions.add_range(
            [
                RolePermission(role.id, Permission.VIEW_USERS, True, "tests"),
                RolePermission(role.id, Permission.MODERATE_CONTENT, True, "tests"),
                RolePermission(role.id, Permission.DELETE_USERS, False, "tests"),
            ]
        )
        await writer.save_changes()
        await writer.close()

        reader = make_uow()
        loaded = await reader.roles.get_with_permissions(role.id)
        assert loaded.has_permission(Permission.MODERATE_CONTENT)
        assert not loaded.has_permission(Permission.DELETE_USERS)
        assert set(loaded.granted_permissions()) == {
            Permission.VIEW_USERS,
            Permission.MODERATE_CONTENT,
        }

        perms = reader.role_permissions
        assert await perms.role_has_permission(role.id, "ModerateContent") is True
        assert await perms.role_has_permission(role.id, Permission.DELETE_USERS) is False
        assert await perms.role_has_permission(role.id, "NoSuchPermission") is False
        assert await perms.get_by_permission("NoSuchPermission") == []
        assert len(await perms.get_by_role_id(role.id)) == 3
        await reader.close()

    @pytest.mark.asyncio
    async def test_user_role_assignment(self, uow):
        ada = _user("ada@example.com", "ada")
        role = Role(RoleType.ADMINISTRATOR, "Administrator")
        uow.users.add(ada)
        uow.roles.add(role)
        assignment = UserRole(ada.id, role.id, "tests")
        uow.user_roles.add(assignment)
        await uow.save_changes()

        assert await uow.user_roles.user_has_role(ada.id, role.id) is True
        assert await uow.user_roles.user_has_role_named(ada.id, "Administrator") is True
        assert await uow.user_roles.user_has_role_named(ada.id, "Moderator") is False

        assignment.deactivate()
        uow.user_roles.update(assignment)
        await uow.save_changes()
        assert await uow.user_roles.user_has_role_named(ada.id, "Administrator") is False

    @pytest.mark.asyncio
    async def test_role_lookup_by_type(self, uow):
        uow.roles.add(Role(RoleType.USER, "User"))
        await uow.save_changes()
        assert (await uow.roles.get_by_type(RoleType.USER)).name == "User"
        assert await uow.roles.get_by_type(RoleType.SUPER_ADMIN) is None


class TestSeedReferenceData:
    @pytest.mark.asyncio
    async def test_seeds_once(self, make_uow):
        first = make_uow()
        await seed_reference_data(first)
        await first.close()

        second = make_uow()
        await seed_reference_data(second)
        await second.close()

        reader = make_uow()
        assert await reader.skill_categories.count() == len(DEFAULT_CATEGORIES)
        assert await reader.roles.count() == len(ROLE_DEFINITIONS)
        admin = await reader.roles.get_by_type(RoleType.SUPER_ADMIN)
        loaded = await reader.roles.get_with_permissions(admin.id)
        assert set(loaded.granted_permissions()) == set(Permission)
        assert await reader.skills.count() == 0
        await reader.close()

    @pytest.mark.asyncio
    async def test_sample_skills_optional(self, make_uow):
        uow = make_uow()
        await seed_reference_data(uow, include_samples=True)
        await uow.close()

        reader = make_uow()
        assert await reader.skills.count() == 15
        assert (await reader.skills.get_by_name("Python")) is not None
        await reader.close()
