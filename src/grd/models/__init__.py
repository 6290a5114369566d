"""Data models for grd."""

from grd.models.release import Release, Asset
from grd.models.repository import Provider, Repository

__all__ = ["Release", "Asset", "Provider", "Repository"]
