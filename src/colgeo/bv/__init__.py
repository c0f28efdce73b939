"""Bounding volumes."""
from .aabb import AABB
from .obb import OBB
from .compute import compute_bv, register_bv, registered_bv_pairs
