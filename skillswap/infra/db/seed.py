"""Reference data: default skill categories, system roles and their grants.

Every seed function is idempotent: a part is skipped when its table
already holds rows.  All parts run inside one explicit transaction so a
failure leaves the database untouched.
"""

from __future__ import annotations

import logging

from skillswap.domain.access.models import Permission, Role, RolePermission, RoleType
from skillswap.domain.common.uow import UnitOfWork
from skillswap.domain.skills.models import Skill, SkillCategory

logger = logging.getLogger(__name__)

SEEDED_BY = "System Seeder"

# (name, description, slug, color, icon)
DEFAULT_CATEGORIES: tuple[tuple[str, str, str, str, str], ...] = (
    ("Technology", "Technology and programming skills", "technology", "#007ACC", "code"),
    ("Creative", "Creative and artistic skills", "creative", "#FF6B35", "palette"),
    ("Business", "Business and professional skills", "business", "#2E8B57", "briefcase"),
    ("Language", "Language and communication skills", "language", "#8A2BE2", "message-circle"),
    ("Health", "Health and fitness skills", "health", "#DC143C", "heart"),
    ("Culinary", "Culinary and cooking skills", "culinary", "#FF8C00", "chef-hat"),
    ("Crafts", "Crafts and hobby skills", "crafts", "#8B4513", "scissors"),
    ("Education", "Education and teaching skills", "education", "#4169E1", "book"),
    ("Music", "Music and musical skills", "music", "#9932CC", "music"),
    ("Sports", "Sports and recreation skills", "sports", "#228B22", "activity"),
    ("Science", "Science and research skills", "science", "#20B2AA", "microscope"),
    ("Other", "Other skills not covered by above categories", "other", "#696969", "more-horizontal"),
)

SAMPLE_SKILLS: dict[str, tuple[tuple[str, str], ...]] = {
    "Technology": (
        ("JavaScript", "Modern JavaScript programming including ES6+ features"),
        ("Python", "Python programming for web development and data science"),
        ("React", "Building interactive user interfaces with React"),
        ("Node.js", "Server-side JavaScript development"),
        ("C#", "C# programming for .NET applications"),
    ),
    "Creative": (
        ("Digital Art", "Digital illustration and design"),
        ("Photography", "Portrait and landscape photography"),
        ("Video Editing", "Video production and editing"),
        ("Graphic Design", "Logo and visual design"),
        ("3D Modeling", "3D modeling and animation"),
    ),
    "Business": (
        ("Project Management", "Agile and Scrum project management"),
        ("Digital Marketing", "SEO and social media marketing"),
        ("Sales", "Lead generation and negotiation"),
        ("Public Speaking", "Presentation and communication skills"),
        ("Leadership", "Team management and leadership"),
    ),
}

P = Permission

ROLE_DEFINITIONS: dict[RoleType, tuple[str, str, tuple[Permission, ...]]] = {
    RoleType.SUPER_ADMIN: (
        "Super Administrator",
        "Full system access with all permissions",
        tuple(Permission),
    ),
    RoleType.ADMINISTRATOR: (
        "Administrator",
        "Administrative access to manage users and content",
        (
            P.VIEW_USERS, P.CREATE_USERS, P.UPDATE_USERS,
            P.VIEW_SKILLS, P.CREATE_SKILLS, P.UPDATE_SKILLS,
            P.MODERATE_CONTENT, P.VIEW_REPORTS, P.RESOLVE_REPORTS,
            P.VIEW_SYSTEM_LOGS, P.MANAGE_ROLES,
            P.VIEW_SWAPS, P.CREATE_SWAPS, P.UPDATE_SWAPS,
            P.VIEW_PROFILES, P.UPDATE_OWN_PROFILE, P.UPDATE_ANY_PROFILE,
        ),
    ),
    RoleType.MODERATOR: (
        "Moderator",
        "Content moderation and user management permissions",
        (
            P.VIEW_USERS, P.UPDATE_USERS,
            P.VIEW_SKILLS, P.CREATE_SKILLS, P.UPDATE_SKILLS,
            P.MODERATE_CONTENT, P.VIEW_REPORTS, P.RESOLVE_REPORTS,
            P.VIEW_SWAPS, P.UPDATE_SWAPS,
            P.VIEW_PROFILES, P.UPDATE_OWN_PROFILE, P.UPDATE_ANY_PROFILE,
        ),
    ),
    RoleType.USER: (
        "User",
        "Standard user with basic platform permissions",
        (
            P.VIEW_SKILLS, P.CREATE_SKILLS,
            P.VIEW_SWAPS, P.CREATE_SWAPS, P.UPDATE_SWAPS,
            P.VIEW_PROFILES, P.UPDATE_OWN_PROFILE,
        ),
    ),
}


async def seed_skill_categories(uow: UnitOfWork) -> int:
    if await uow.skill_categories.count() > 0:
        logger.info("Skill categories already present, skipping")
        return 0
    categories = [SkillCategory(*row) for row in DEFAULT_CATEGORIES]
    uow.skill_categories.add_range(categories)
    await uow.save_changes()
    logger.info("Seeded %d skill categories", len(categories))
    return len(categories)


async def seed_system_roles(uow: UnitOfWork) -> int:
    if await uow.roles.count() > 0:
        logger.info("Roles already present, skipping")
        return 0
    grants = 0
    for role_type, (name, description, permissions) in ROLE_DEFINITIONS.items():
        role = Role(role_type, name, description)
        uow.roles.add(role)
        uow.role_permissions.add_range(
            RolePermission(role.id, permission, is_granted=True, granted_by=SEEDED_BY)
            for permission in permissions
        )
        grants += len(permissions)
    await uow.save_changes()
    logger.info("Seeded %d roles with %d permission grants", len(ROLE_DEFINITIONS), grants)
    return len(ROLE_DEFINITIONS)


async def seed_sample_skills(uow: UnitOfWork) -> int:
    """Development-only sample skills; needs the default categories."""
    if await uow.skills.count() > 0:
        logger.info("Skills already present, skipping")
        return 0
    created = 0
    for category_name, rows in SAMPLE_SKILLS.items():
        category = await uow.skill_categories.get_by_name(category_name)
        if category is None:
            logger.warning("Category %s missing, no sample skills added for it", category_name)
            continue
        uow.skills.add_range(Skill(name, description, category.id) for name, description in rows)
        created += len(rows)
    await uow.save_changes()
    logger.info("Seeded %d sample skills", created)
    return created


async def seed_reference_data(uow: UnitOfWork, include_samples: bool = False) -> None:
    """Seed categories and roles (and optionally sample skills) atomically."""
    async with await uow.begin_transaction() as tx:
        await seed_skill_categories(uow)
        await seed_system_roles(uow)
        if include_samples:
            await seed_sample_skills(uow)
        await tx.commit()
