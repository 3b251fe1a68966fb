"""Access-control domain: roles, role assignments and permission grants."""

from .models import *  # noqa: F401,F403
from .ports import *  # noqa: F401,F403
