"""Skill catalogue domain: categories, skills and their repository ports."""

from .models import *  # noqa: F401,F403
from .ports import *  # noqa: F401,F403
