"""Abstract base class for geometric shapes."""
import abc

import numpy as np

from ..inertial import InertialParameters
from ..types import ObjectType


class ShapeBase(abc.ABC):
    """A solid geometric primitive, centered at its local origin.

    Placement in the world is not part of the shape: it is given separately
    as a rigid transform whenever a world-frame quantity is needed.

    Attributes
    ----------
    cost_density : float
        Collision cost per unit volume.
    threshold_occupied : float
        The shape is occupied if ``cost_density >= threshold_occupied``.
    threshold_free : float
        The shape is free if ``cost_density <= threshold_free``.
    user_data :
        Arbitrary data attached by the caller.
    """

    def __init__(self):
        self.cost_density = 1.0
        self.threshold_occupied = 1.0
        self.threshold_free = 0.0
        self.user_data = None
        self.invalidate_aabb()

    def invalidate_aabb(self):
        """Mark the cached local bounding box as stale.

        It is recomputed the next time one of ``aabb_local``, ``aabb_center``
        or ``aabb_radius`` is read.
        """
        self._aabb_local = None
        self._aabb_center = None
        self._aabb_radius = None

    def _set_local_aabb(self, aabb):
        self._aabb_local = aabb
        self._aabb_center = aabb.center
        self._aabb_radius = np.linalg.norm(aabb.v_min - self._aabb_center)

    @property
    def aabb_local(self):
        """Axis-aligned bounding box in the shape's own frame."""
        if self._aabb_local is None:
            self.compute_local_aabb()
        return self._aabb_local

    @property
    def aabb_center(self):
        """Center of ``aabb_local``."""
        if self._aabb_local is None:
            self.compute_local_aabb()
        return self._aabb_center

    @property
    def aabb_radius(self):
        """Radius of the sphere about ``aabb_center`` enclosing ``aabb_local``."""
        if self._aabb_local is None:
            self.compute_local_aabb()
        return self._aabb_radius

    @abc.abstractmethod
    def compute_local_aabb(self):
        """Compute and cache the local bounding box, center and radius."""
        pass

    def get_object_type(self):
        return ObjectType.GEOM

    @abc.abstractmethod
    def get_node_type(self):
        """The ``NodeType`` tag identifying the kind of shape."""
        pass

    def compute_volume(self):
        """Volume of the shape."""
        return 0.0

    def compute_com(self):
        """Center of mass of the shape in its local frame."""
        return np.zeros(3)

    @abc.abstractmethod
    def compute_moment_of_inertia(self):
        """Inertia matrix about the local origin, assuming unit density.

        Returns
        -------
        : np.ndarray, shape (3, 3)
            The inertia matrix.
        """
        pass

    def compute_moment_of_inertia_related_to_com(self):
        """Inertia matrix about the center of mass, assuming unit density."""
        C = self.compute_moment_of_inertia()
        com = self.compute_com()
        V = self.compute_volume()

        # parallel axis theorem with mass equal to the volume
        return C - V * (com @ com * np.eye(3) - np.outer(com, com))

    def inertial_params(self, density=1.0):
        """Inertial parameters of the shape with uniform density.

        Parameters
        ----------
        density : float, non-negative
            The mass density.

        Returns
        -------
        : InertialParameters
            The inertial parameters in the shape's local frame.
        """
        mass = density * self.compute_volume()
        Ic = density * self.compute_moment_of_inertia_related_to_com()
        return InertialParameters(
            mass=mass, com=self.compute_com(), I=Ic, translate_from_com=True
        )

    def is_occupied(self):
        return self.cost_density >= self.threshold_occupied

    def is_free(self):
        return self.cost_density <= self.threshold_free

    def is_uncertain(self):
        return not self.is_occupied() and not self.is_free()

    @abc.abstractmethod
    def contains(self, points, tol=1e-8):
        """Test if the shape contains a set of points in its local frame.

        Parameters
        ----------
        points : np.ndarray, shape (3,) or (n, 3)
            The points to check.
        tol : float, non-negative
            The numerical tolerance for membership.

        Returns
        -------
        : bool or np.ndarray of bool, shape (n,)
            Boolean array where each entry is ``True`` if the shape
            contains the corresponding point and ``False`` otherwise.
        """
        pass

    @abc.abstractmethod
    def support(self, direction):
        """The point of the shape farthest along a direction, in its local frame.

        Parameters
        ----------
        direction : np.ndarray, shape (3,)
            The direction. It does not need to be normalized but must be
            nonzero.

        Returns
        -------
        : np.ndarray, shape (3,)
            The support point.
        """
        pass
