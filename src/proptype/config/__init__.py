"""Project configuration."""

from proptype.config.project import ProjectConfig

__all__ = ["ProjectConfig"]
