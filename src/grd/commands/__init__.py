"""grd command implementations."""
