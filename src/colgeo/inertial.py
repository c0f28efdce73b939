"""Mass properties of solid shapes."""
import numpy as np


def H2I(H):
    """Convert a second moment matrix to an inertia matrix."""
    assert H.shape == (3, 3)
    return np.trace(H) * np.eye(3) - H


def I2H(I):
    """Convert an inertia matrix to a second moment matrix."""
    assert I.shape == (3, 3)
    return 0.5 * np.trace(I) * np.eye(3) - I


class InertialParameters:
    """Mass, center of mass and rotational inertia of a body.

    At most one of ``h`` and ``com`` may be given, and at most one of ``H``
    and ``I``. Internally the parameters are stored as the mass, center of
    mass and second moment matrix about the origin.

    Parameters
    ----------
    mass : float, non-negative
        Mass of the body.
    h : np.ndarray, shape (3,)
        First moment of mass, ``mass * com``.
    com : np.ndarray, shape (3,)
        Center of mass. Defaults to the origin.
    H : np.ndarray, shape (3, 3)
        Second moment matrix.
    I : np.ndarray, shape (3, 3)
        Inertia matrix.
    translate_from_com : bool
        If ``True``, ``H``/``I`` are taken to be about the center of mass and
        are shifted to the origin.
    """

    def __init__(
        self, mass, h=None, com=None, H=None, I=None, translate_from_com=False
    ):
        assert mass >= 0, f"Mass must be non-negative but is {mass}."
        self.mass = mass

        if h is not None and com is not None:
            raise ValueError("Cannot specify both h and com.")
        if com is None:
            com = np.zeros(3) if h is None else np.array(h) / mass
        self.com = np.array(com, dtype=float)

        if H is not None and I is not None:
            raise ValueError("Cannot specify both H and I.")
        if I is not None:
            H = I2H(np.array(I))
        if H is None:
            H = np.zeros((3, 3))
            translate_from_com = True

        # parallel axis theorem
        if translate_from_com:
            H = H + mass * np.outer(self.com, self.com)
        self.H = np.array(H, dtype=float)

    def __repr__(self):
        return f"InertialParameters(mass={self.mass}, com={self.com}, H={self.H})"

    @property
    def h(self):
        return self.mass * self.com

    @property
    def I(self):
        """Inertia matrix about the origin."""
        return H2I(self.H)

    @property
    def Hc(self):
        """Second moment matrix about the center of mass."""
        return self.H - self.mass * np.outer(self.com, self.com)

    @property
    def Ic(self):
        """Inertia matrix about the center of mass."""
        return H2I(self.Hc)

    @property
    def J(self):
        """Pseudo-inertia matrix."""
        J = np.zeros((4, 4))
        J[:3, :3] = self.H
        J[:3, 3] = self.h
        J[3, :3] = self.h
        J[3, 3] = self.mass
        return J

    def is_same(self, other, tol=1e-8):
        """Check if these parameters are the same as another set."""
        return np.allclose(self.J, other.J, atol=tol)

    def consistent(self, eps=0):
        """Check if the parameters can belong to a physical rigid body.

        This is the case if and only if the pseudo-inertia matrix is positive
        semidefinite.

        Parameters
        ----------
        eps : float
            Required lower bound on the eigenvalues of the pseudo-inertia
            matrix.
        """
        return np.min(np.linalg.eigvalsh(self.J)) >= eps

    def transform(self, rotation=None, translation=None):
        """Express the parameters in a new frame.

        Equivalent to ``T @ J @ T.T``, where ``T`` is the homogeneous matrix
        of the transform.
        """
        if rotation is None:
            rotation = np.eye(3)
        if translation is None:
            translation = np.zeros(3)

        com = rotation @ self.com + translation
        Hc = rotation @ self.Hc @ rotation.T
        return InertialParameters(
            mass=self.mass, com=com, H=Hc, translate_from_com=True
        )

    def __add__(self, other):
        return InertialParameters(
            mass=self.mass + other.mass, h=self.h + other.h, H=self.H + other.H
        )

    def __radd__(self, other):
        if other == 0:
            return self
        return self.__add__(other)
