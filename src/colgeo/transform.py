"""Rigid transforms in three dimensions."""
import numpy as np
from scipy.spatial.transform import Rotation

from .util import clean_transform


class RigidTransform:
    """A rotation followed by a translation.

    A point ``p`` is mapped to ``rotation @ p + translation``.

    Parameters
    ----------
    rotation : np.ndarray, shape (3, 3)
        Rotation matrix. Defaults to the identity.
    translation : np.ndarray, shape (3,)
        Translation vector. Defaults to zero.

    Attributes
    ----------
    rotation : np.ndarray, shape (3, 3)
        Rotation matrix.
    translation : np.ndarray, shape (3,)
        Translation vector.
    """

    def __init__(self, rotation=None, translation=None):
        self.rotation, self.translation = clean_transform(
            rotation=rotation, translation=translation
        )
        assert self.rotation.shape == (3, 3)
        assert self.translation.shape == (3,)

    def __repr__(self):
        return f"RigidTransform(rotation={self.rotation}, translation={self.translation})"

    @classmethod
    def identity(cls):
        """The identity transform."""
        return cls()

    @classmethod
    def from_quaternion(cls, q, translation=None):
        """Construct from a unit quaternion ``q = (x, y, z, w)``."""
        C = Rotation.from_quat(q).as_matrix()
        return cls(rotation=C, translation=translation)

    @classmethod
    def from_rotvec(cls, rotvec, translation=None):
        """Construct from an axis-angle rotation vector."""
        C = Rotation.from_rotvec(rotvec).as_matrix()
        return cls(rotation=C, translation=translation)

    @classmethod
    def from_matrix(cls, T):
        """Construct from a homogeneous transformation matrix.

        Parameters
        ----------
        T : np.ndarray, shape (4, 4)
            The homogeneous transformation matrix.
        """
        T = np.array(T)
        assert T.shape == (4, 4)
        return cls(rotation=T[:3, :3], translation=T[:3, 3])

    @classmethod
    def random(cls, scale=1.0, rng=None):
        """Generate a random transform.

        The rotation is uniformly distributed and each component of the
        translation is uniform in ``[-scale, scale]``.
        """
        rng = np.random.default_rng(rng)
        C = Rotation.random(random_state=rng).as_matrix()
        r = rng.uniform(low=-scale, high=scale, size=3)
        return cls(rotation=C, translation=r)

    @property
    def matrix(self):
        """Homogeneous transformation matrix."""
        T = np.eye(4)
        T[:3, :3] = self.rotation
        T[:3, 3] = self.translation
        return T

    def apply(self, points):
        """Apply the transform to a point or set of points.

        Parameters
        ----------
        points : np.ndarray, shape (3,) or (n, 3)
            The point(s) to transform.

        Returns
        -------
        : np.ndarray, same shape as ``points``
            The transformed point(s).
        """
        points = np.array(points, dtype=float)
        assert points.shape[-1] == 3
        return points @ self.rotation.T + self.translation

    def apply_rotation(self, vectors):
        """Rotate a vector or set of vectors, ignoring the translation."""
        vectors = np.array(vectors, dtype=float)
        return vectors @ self.rotation.T

    def inv(self):
        """The inverse transform."""
        CT = self.rotation.T
        return RigidTransform(rotation=CT, translation=-CT @ self.translation)

    def __matmul__(self, other):
        # other is applied first
        if not isinstance(other, RigidTransform):
            return NotImplemented
        return RigidTransform(
            rotation=self.rotation @ other.rotation,
            translation=self.rotation @ other.translation + self.translation,
        )

    def is_same(self, other, tol=1e-8):
        """Check if this transform is the same as another one."""
        return np.allclose(
            self.rotation, other.rotation, atol=tol
        ) and np.allclose(self.translation, other.translation, atol=tol)
