"""Configuration module -- exports Settings."""

from resume_ats.config.settings import Settings

__all__ = ["Settings"]
