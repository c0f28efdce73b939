import numpy as np

from ..types import NodeType
from ..util import clean_transform, box_vertices
from .aabb import AABB


# added to the rotation entries in the separating axis test to handle nearly
# parallel edges
OBB_OVERLAP_EPS = 1e-6


class OBB:
    """An oriented bounding box.

    Parameters
    ----------
    axis : np.ndarray, shape (3, 3)
        The box's axes, one per column. Defaults to the identity.
    center : np.ndarray, shape (3,)
        The center of the box. Defaults to the origin.
    extent : np.ndarray, shape (3,)
        Half dimensions of the box along each of its axes.
    """

    def __init__(self, axis=None, center=None, extent=None):
        self.axis, self.center = clean_transform(rotation=axis, translation=center)
        if extent is None:
            extent = np.zeros(3)
        self.extent = np.array(extent, dtype=float)
        assert self.axis.shape == (3, 3)
        assert self.extent.shape == (3,)

    def __repr__(self):
        return f"OBB(axis={self.axis}, center={self.center}, extent={self.extent})"

    @staticmethod
    def get_node_type():
        return NodeType.BV_OBB

    @property
    def width(self):
        return 2 * self.extent[0]

    @property
    def height(self):
        return 2 * self.extent[1]

    @property
    def depth(self):
        return 2 * self.extent[2]

    @property
    def volume(self):
        return 8 * np.prod(self.extent)

    @property
    def size(self):
        """Squared length of the box's diagonal."""
        return 4 * self.extent @ self.extent

    @property
    def vertices(self):
        return box_vertices(self.extent, rotation=self.axis, center=self.center)

    def contains(self, points, tol=1e-8):
        """Test if the box contains a point or a set of points."""
        points = np.array(points)
        ndim = points.ndim
        points = np.atleast_2d(points)

        # coordinates in the box frame
        local = (points - self.center) @ self.axis
        res = np.all(np.abs(local) <= self.extent + tol, axis=1)
        if ndim == 1:
            return res[0]
        return res

    def overlap(self, other):
        """Check if this box intersects another using the separating axis test.

        The fifteen candidate axes are the face normals of both boxes and the
        cross products of each pair of their edges.

        Parameters
        ----------
        other : OBB
            The other box.

        Returns
        -------
        : bool
            ``True`` if the boxes overlap, ``False`` if a separating axis exists.
        """
        a = self.extent
        b = other.extent

        # other's axes and center expressed in this box's frame
        R = self.axis.T @ other.axis
        t = self.axis.T @ (other.center - self.center)
        Rabs = np.abs(R) + OBB_OVERLAP_EPS

        # face normals of this box
        for i in range(3):
            if abs(t[i]) > a[i] + Rabs[i, :] @ b:
                return False

        # face normals of the other box
        for j in range(3):
            if abs(t @ R[:, j]) > a @ Rabs[:, j] + b[j]:
                return False

        # edge-edge cross products
        for i in range(3):
            i1, i2 = (i + 1) % 3, (i + 2) % 3
            for j in range(3):
                j1, j2 = (j + 1) % 3, (j + 2) % 3
                ra = a[i1] * Rabs[i2, j] + a[i2] * Rabs[i1, j]
                rb = b[j1] * Rabs[i, j2] + b[j2] * Rabs[i, j1]
                d = t[i2] * R[i1, j] - t[i1] * R[i2, j]
                if abs(d) > ra + rb:
                    return False
        return True

    def aabb(self):
        """The tightest axis-aligned box containing this box."""
        h = np.abs(self.axis) @ self.extent
        return AABB(self.center - h, self.center + h)

    def is_same(self, other, tol=1e-8):
        """Check if this box is the same as another one.

        Boxes are compared by their parameters, so the same box described with
        permuted or flipped axes is not considered the same.
        """
        if not isinstance(other, self.__class__):
            return False
        return (
            np.allclose(self.axis, other.axis, atol=tol)
            and np.allclose(self.center, other.center, atol=tol)
            and np.allclose(self.extent, other.extent, atol=tol)
        )
