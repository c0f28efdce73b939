"""Generate random points."""
import numpy as np


def random_points_on_sphere(shape=1, rng=None):
    """Sample points uniformly on the unit sphere in three dimensions.

    Parameters
    ----------
    shape : int or tuple
        The shape of the set of points to be returned.
    rng : int or np.random.Generator
        Integer seed or Generator instance to use for generating random
        numbers.

    Returns
    -------
    : np.ndarray, shape ``shape + (3,)``
        The random points. If ``shape == 1``, a single point of shape ``(3,)``
        is returned.
    """
    if np.isscalar(shape):
        shape = (shape,)
    shape = tuple(shape)

    # normalized Gaussian samples are uniform on the sphere
    rng = np.random.default_rng(rng)
    X = rng.normal(size=shape + (3,))
    points = X / np.linalg.norm(X, axis=-1, keepdims=True)

    if shape == (1,):
        return np.squeeze(points)
    return points


def random_points_in_ball(shape=1, rng=None):
    """Sample points uniformly in the unit ball in three dimensions.

    See https://compneuro.uwaterloo.ca/files/publications/voelker.2017.pdf
    """
    if np.isscalar(shape):
        shape = (shape,)
    shape = tuple(shape)

    rng = np.random.default_rng(rng)
    s = random_points_on_sphere(shape=shape, rng=rng)
    r = rng.random(shape) ** (1.0 / 3)
    if shape == (1,):
        return r[0] * s
    return r[..., None] * s
