import numpy as np
import cvxpy as cp
from scipy.linalg import orth, null_space

from ..bv import AABB, OBB, compute_bv, register_bv
from ..inertial import InertialParameters
from ..random import random_points_in_ball
from ..transform import RigidTransform
from ..types import NodeType
from .base import ShapeBase


# golden ratio
PHI = (1.0 + np.sqrt(5.0)) / 2.0

# coordinates of a regular icosahedron with vertices (0, ±U, ±V) and cyclic
# permutations, scaled so that it bounds the unit sphere
ICOSAHEDRON_U = np.sqrt(3.0) / PHI**2
ICOSAHEDRON_V = PHI * ICOSAHEDRON_U

# the twelve vertices in a fixed order; callers may index them positionally
# fmt: off
_UNIT_ICOSAHEDRON = np.array([
    [0, ICOSAHEDRON_U, ICOSAHEDRON_V],
    [0, -ICOSAHEDRON_U, ICOSAHEDRON_V],
    [0, ICOSAHEDRON_U, -ICOSAHEDRON_V],
    [0, -ICOSAHEDRON_U, -ICOSAHEDRON_V],
    [ICOSAHEDRON_U, ICOSAHEDRON_V, 0],
    [-ICOSAHEDRON_U, ICOSAHEDRON_V, 0],
    [ICOSAHEDRON_U, -ICOSAHEDRON_V, 0],
    [-ICOSAHEDRON_U, -ICOSAHEDRON_V, 0],
    [ICOSAHEDRON_V, 0, ICOSAHEDRON_U],
    [ICOSAHEDRON_V, 0, -ICOSAHEDRON_U],
    [-ICOSAHEDRON_V, 0, ICOSAHEDRON_U],
    [-ICOSAHEDRON_V, 0, -ICOSAHEDRON_U],
])
# fmt: on


def _radii_from_eigs(eigs):
    """Semi-axis lengths from the eigenvalues of the matrix A in ||Ax + b|| <= 1.

    Zero eigenvalues give zero-length axes rather than infinite ones.
    """
    radii = np.zeros_like(eigs)
    nz = np.nonzero(eigs)
    radii[nz] = 1.0 / eigs[nz]
    return radii


class Ellipsoid(ShapeBase):
    """Ellipsoid centered at the local origin with axes along the local axes.

    Construct either with three semi-axis lengths, ``Ellipsoid(a, b, c)``, or
    with a single vector of them, ``Ellipsoid([a, b, c])``.

    The radii are stored as given. They are expected to be positive and
    finite; otherwise the results of the geometric queries are meaningless.

    Attributes
    ----------
    radii : np.ndarray, shape (3,)
        The semi-axis lengths. The array is read-only: assign a new value to
        change the ellipsoid, which also invalidates the cached bounding box.
    """

    def __init__(self, a, b=None, c=None):
        if b is None and c is None:
            radii = a
        elif b is not None and c is not None:
            radii = [a, b, c]
        else:
            raise ValueError("Ellipsoid needs either three radii or one vector of radii.")
        super().__init__()
        self.radii = radii

    def __repr__(self):
        return f"Ellipsoid(radii={self.radii})"

    @property
    def radii(self):
        return self._radii

    @radii.setter
    def radii(self, value):
        radii = np.array(value, dtype=float)
        assert radii.shape == (3,), f"Ellipsoid needs three radii, got shape {radii.shape}."
        radii.flags.writeable = False
        self._radii = radii
        self.invalidate_aabb()

    def compute_local_aabb(self):
        self._set_local_aabb(compute_bv(self, RigidTransform.identity(), AABB))

    def get_node_type(self):
        return NodeType.GEOM_ELLIPSOID

    def compute_volume(self):
        a, b, c = self.radii
        return 4 * np.pi * a * b * c / 3

    def compute_moment_of_inertia(self):
        V = self.compute_volume()
        a2, b2, c2 = V * self.radii**2
        return np.diag([0.2 * (b2 + c2), 0.2 * (a2 + c2), 0.2 * (a2 + b2)])

    def get_bound_vertices(self, transform=None):
        """Vertices of a convex polytope that bounds the ellipsoid.

        The polytope is a regular icosahedron circumscribing the unit sphere,
        stretched along each axis by the corresponding radius.

        Parameters
        ----------
        transform : RigidTransform
            The pose of the ellipsoid. Defaults to the identity.

        Returns
        -------
        : np.ndarray, shape (12, 3)
            The vertices in the world frame, always in the same order.
        """
        vertices = _UNIT_ICOSAHEDRON * self.radii
        if transform is None:
            return vertices
        return transform.apply(vertices)

    def contains(self, points, tol=1e-8):
        points = np.array(points)
        ndim = points.ndim
        assert ndim <= 2, f"points must have 1 or 2 dimensions, but has {ndim}."
        points = np.atleast_2d(points)

        res = np.sum((points / self.radii) ** 2, axis=1) <= 1 + tol
        if ndim == 1:
            return res[0]
        return res

    def support(self, direction):
        # maximize d @ p subject to p @ diag(1/r^2) @ p <= 1
        d = np.array(direction, dtype=float)
        Ed = self.radii**2 * d
        return Ed / np.sqrt(d @ Ed)

    def random_points(self, shape=1, rng=None):
        """Uniformly sample points inside the ellipsoid."""
        return random_points_in_ball(shape=shape, rng=rng) * self.radii

    def uniform_density_params(self, mass):
        """Generate the inertial parameters corresponding to a uniform mass density.

        Parameters
        ----------
        mass : float, non-negative
            The mass of the body.

        Returns
        -------
        : InertialParameters
            The inertial parameters about the local origin.
        """
        assert mass >= 0, "Mass must be non-negative."
        H = mass * np.diag(self.radii**2) / 5.0
        return InertialParameters(mass=mass, h=np.zeros(3), H=H)


@register_bv(Ellipsoid, AABB)
def _ellipsoid_aabb(shape, transform):
    # extent along world axis e is sqrt(sum_j (R^T e)_j^2 r_j^2)
    R = transform.rotation
    extent = np.sqrt((R**2) @ (shape.radii**2))
    t = transform.translation
    return AABB(t - extent, t + extent)


@register_bv(Ellipsoid, OBB)
def _ellipsoid_obb(shape, transform):
    return OBB(
        axis=transform.rotation,
        center=transform.translation,
        extent=shape.radii.copy(),
    )


def mbe_of_points(points, rcond=None, solver=None):
    """Compute the minimum-volume bounding ellipsoid for a set of points.

    See :cite:t:`boyd2004convex`, Section 8.4.1. Since an ``Ellipsoid`` is
    always centered at its local origin, the result is given as the shape
    together with its pose.

    Parameters
    ----------
    points : np.ndarray, shape (n, 3)
        The points to bound.
    rcond : float, optional
        Conditioning number used for internal routines.
    solver : str or None
        The solver for cvxpy to use.

    Returns
    -------
    : tuple
        A tuple ``(ellipsoid, transform)``, where ``transform`` maps the
        ellipsoid's local frame into the frame of the points.
    """
    points = np.array(points, dtype=float)
    assert points.ndim == 2 and points.shape[1] == 3

    # project onto the span of the points relative to the first one so that
    # flat point sets yield a degenerate ellipsoid instead of a failed solve
    r = points[0]
    R = orth((points - r).T, rcond=rcond)
    rank = R.shape[1]
    P = (points - r) @ R

    # ellipsoid is parameterized as ||Ax + b|| <= 1 for the opt problem
    A = cp.Variable((rank, rank), PSD=True)
    b = cp.Variable(rank)

    objective = cp.Minimize(-cp.log_det(A))
    constraints = [cp.norm2(A @ x + b) <= 1 for x in P]
    problem = cp.Problem(objective, constraints)
    problem.solve(solver=solver)

    eigs, V = np.linalg.eigh(A.value)
    radii = np.zeros(3)
    radii[:rank] = _radii_from_eigs(eigs)

    N = null_space((R @ V).T, rcond=rcond)
    rotation = np.hstack((R @ V, N))
    if np.linalg.det(rotation) < 0:
        rotation[:, -1] = -rotation[:, -1]
    center = R @ np.linalg.lstsq(A.value, -b.value, rcond=rcond)[0] + r

    return Ellipsoid(radii), RigidTransform(rotation=rotation, translation=center)
