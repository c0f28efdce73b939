import numpy as np

from ..bv import AABB, OBB, compute_bv, register_bv
from ..transform import RigidTransform
from ..types import NodeType
from .base import ShapeBase


class Sphere(ShapeBase):
    """Sphere centered at the local origin.

    Parameters
    ----------
    radius : float, positive
        The radius of the sphere.
    """

    def __init__(self, radius):
        super().__init__()
        self.radius = radius

    def __repr__(self):
        return f"Sphere(radius={self.radius})"

    @property
    def radius(self):
        return self._radius

    @radius.setter
    def radius(self, value):
        self._radius = float(value)
        self.invalidate_aabb()

    def compute_local_aabb(self):
        self._set_local_aabb(compute_bv(self, RigidTransform.identity(), AABB))

    def get_node_type(self):
        return NodeType.GEOM_SPHERE

    def compute_volume(self):
        return 4 * np.pi * self.radius**3 / 3

    def compute_moment_of_inertia(self):
        I = 0.4 * self.compute_volume() * self.radius**2
        return I * np.eye(3)

    def contains(self, points, tol=1e-8):
        points = np.array(points)
        ndim = points.ndim
        points = np.atleast_2d(points)
        res = np.linalg.norm(points, axis=1) <= self.radius + tol
        if ndim == 1:
            return res[0]
        return res

    def support(self, direction):
        d = np.array(direction, dtype=float)
        return self.radius * d / np.linalg.norm(d)


@register_bv(Sphere, AABB)
def _sphere_aabb(shape, transform):
    t = transform.translation
    return AABB(t - shape.radius, t + shape.radius)


@register_bv(Sphere, OBB)
def _sphere_obb(shape, transform):
    return OBB(
        axis=transform.rotation,
        center=transform.translation,
        extent=shape.radius * np.ones(3),
    )
