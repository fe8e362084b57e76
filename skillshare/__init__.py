"""SkillShare — anonymous skill registry on a generic key/value store."""

__version__ = "0.1.0"
