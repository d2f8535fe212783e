"""Runtime services: telemetry and filesystem locations."""

from . import telemetry
from .paths import expand_path, home_dir, stdpath

__all__ = ["telemetry", "expand_path", "home_dir", "stdpath"]
