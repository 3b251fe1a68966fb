"""SkillSwap peer-to-peer skill exchange service."""

__version__ = "0.1.0"
