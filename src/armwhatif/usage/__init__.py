"""Usage estimates keyed by resource address."""

from .loader import load_usage_file, usage_map_from_dict

__all__ = ["load_usage_file", "usage_map_from_dict"]
