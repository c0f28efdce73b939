"""Analytic collision shapes."""
from .base import ShapeBase
from .ellipsoid import Ellipsoid, mbe_of_points
from .sphere import Sphere
