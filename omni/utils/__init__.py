"""Utility helpers for omni."""

from omni.utils.concurrency import map_with_concurrency
from omni.utils.helpers import parse_list, sanitize_key_part

__all__ = ["map_with_concurrency", "parse_list", "sanitize_key_part"]
