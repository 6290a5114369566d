"""grd - download release assets from GitHub and Gitea."""

__version__ = "0.3.0"
