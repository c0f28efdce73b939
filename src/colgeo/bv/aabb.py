import numpy as np

from ..types import NodeType
from ..util import box_vertices


class AABB:
    """An axis-aligned bounding box.

    Parameters
    ----------
    v_min : np.ndarray, shape (3,)
        The minimum corner of the box.
    v_max : np.ndarray, shape (3,)
        The maximum corner of the box. Must be at least ``v_min`` in every
        component.

    Attributes
    ----------
    v_min : np.ndarray, shape (3,)
        The minimum corner of the box.
    v_max : np.ndarray, shape (3,)
        The maximum corner of the box.
    """

    def __init__(self, v_min, v_max):
        self.v_min = np.array(v_min, dtype=float)
        self.v_max = np.array(v_max, dtype=float)
        assert self.v_min.shape == (3,)
        assert self.v_max.shape == (3,)

    def __repr__(self):
        return f"AABB(v_min={self.v_min}, v_max={self.v_max})"

    @classmethod
    def from_point(cls, point):
        """Construct a degenerate box containing a single point."""
        point = np.array(point, dtype=float)
        return cls(point, point.copy())

    @classmethod
    def from_points(cls, points):
        """Construct the smallest box that contains all of the points."""
        points = np.atleast_2d(points)
        return cls(np.min(points, axis=0), np.max(points, axis=0))

    @classmethod
    def from_center_and_half_extents(cls, center, half_extents):
        center = np.array(center, dtype=float)
        half_extents = np.array(half_extents, dtype=float)
        assert np.all(half_extents >= 0)
        return cls(center - half_extents, center + half_extents)

    @staticmethod
    def get_node_type():
        return NodeType.BV_AABB

    @property
    def center(self):
        """The center of the box."""
        return 0.5 * (self.v_min + self.v_max)

    @property
    def half_extents(self):
        return 0.5 * (self.v_max - self.v_min)

    @property
    def width(self):
        return self.v_max[0] - self.v_min[0]

    @property
    def height(self):
        return self.v_max[1] - self.v_min[1]

    @property
    def depth(self):
        return self.v_max[2] - self.v_min[2]

    @property
    def volume(self):
        return self.width * self.height * self.depth

    @property
    def size(self):
        """Squared length of the box's diagonal."""
        d = self.v_max - self.v_min
        return d @ d

    @property
    def radius(self):
        """Radius of the smallest sphere about the center containing the box."""
        return 0.5 * np.sqrt(self.size)

    @property
    def vertices(self):
        return box_vertices(self.half_extents, center=self.center)

    def contains(self, points, tol=1e-8):
        """Test if the box contains a set of points.

        Parameters
        ----------
        points : np.ndarray, shape (3,) or (n, 3)
            The point(s) to check.
        tol : float, non-negative
            The numerical tolerance for membership.

        Returns
        -------
        : bool or np.ndarray of bool, shape (n,)
            ``True`` for each point inside the box, ``False`` otherwise.
        """
        points = np.array(points)
        ndim = points.ndim
        points = np.atleast_2d(points)
        res = np.all(
            (points >= self.v_min - tol) & (points <= self.v_max + tol), axis=1
        )
        if ndim == 1:
            return res[0]
        return res

    def contains_aabb(self, other, tol=1e-8):
        """Check if this box contains another box entirely."""
        return np.all(self.v_min <= other.v_min + tol) and np.all(
            self.v_max >= other.v_max - tol
        )

    def overlap(self, other):
        """Check if this box intersects another box.

        Boxes that only touch are considered to overlap.
        """
        return not (
            np.any(self.v_min > other.v_max) or np.any(self.v_max < other.v_min)
        )

    def intersection(self, other):
        """The box shared by two overlapping boxes, or ``None``."""
        if not self.overlap(other):
            return None
        return AABB(
            np.maximum(self.v_min, other.v_min),
            np.minimum(self.v_max, other.v_max),
        )

    def distance(self, other):
        """Euclidean distance between two boxes; zero if they overlap."""
        gap = np.maximum(
            0, np.maximum(self.v_min - other.v_max, other.v_min - self.v_max)
        )
        return np.linalg.norm(gap)

    def merge(self, other):
        """The smallest box containing this box and another box or point."""
        if not isinstance(other, AABB):
            other = AABB.from_point(other)
        return AABB(
            np.minimum(self.v_min, other.v_min),
            np.maximum(self.v_max, other.v_max),
        )

    def __add__(self, other):
        return self.merge(other)

    def expand(self, delta):
        """Grow the box by ``delta`` in each direction.

        ``delta`` may be a scalar or a per-axis 3-vector.
        """
        return AABB(self.v_min - delta, self.v_max + delta)

    def is_same(self, other, tol=1e-8):
        """Check if this box is the same as another one."""
        if not isinstance(other, self.__class__):
            return False
        return np.allclose(self.v_min, other.v_min, atol=tol) and np.allclose(
            self.v_max, other.v_max, atol=tol
        )
