import numpy as np


def clean_transform(rotation, translation, dim=3):
    """Replace missing parts of a rigid transform with the identity.

    Parameters
    ----------
    rotation : np.ndarray, shape (dim, dim), or None
        Rotation matrix. ``None`` means no rotation.
    translation : np.ndarray, shape (dim,), or None
        Translation vector. ``None`` means no translation.
    dim : int
        Dimension of the ambient space.

    Returns
    -------
    : tuple
        A tuple ``(rotation, translation)`` of float arrays.
    """
    if rotation is None:
        rotation = np.eye(dim)
    else:
        rotation = np.array(rotation, dtype=float)

    if translation is None:
        translation = np.zeros(dim)
    else:
        translation = np.array(translation, dtype=float)

    return rotation, translation


def box_vertices(half_extents, rotation=None, center=None):
    """Generate the eight vertices of a (possibly oriented) box.

    Parameters
    ----------
    half_extents : np.ndarray, shape (3,)
        The half extents of the box along its own axes.
    rotation : np.ndarray, shape (3, 3)
        The box axes as columns. Defaults to the identity.
    center : np.ndarray, shape (3,)
        The center of the box. Defaults to the origin.

    Returns
    -------
    : np.ndarray, shape (8, 3)
        The vertices of the box.
    """
    rotation, center = clean_transform(rotation=rotation, translation=center)
    x, y, z = half_extents
    # fmt: off
    v = np.array([
        [ x,  y,  z],
        [ x,  y, -z],
        [ x, -y,  z],
        [ x, -y, -z],
        [-x,  y,  z],
        [-x,  y, -z],
        [-x, -y,  z],
        [-x, -y, -z]])
    # fmt: on
    return v @ rotation.T + center

