"""User domain: accounts, profiles, skills, availability and preferences."""

from .models import *  # noqa: F401,F403
from .ports import *  # noqa: F401,F403
