"""Dispatch of bounding volume computation over (shape, bounding volume) pairs.

A computer for a pair is a function ``f(shape, transform)`` that returns the
tightest closed-form bounding volume of the requested type enclosing the shape
under the rigid transform. Computers are registered with :func:`register_bv`,
so that a new pair can be supported without modifying the shape or bounding
volume classes.
"""
import logging

from ..transform import RigidTransform


logger = logging.getLogger(__name__)

# (shape type, bounding volume type) -> computer
_BV_COMPUTERS = {}


def register_bv(shape_type, bv_type):
    """Decorator registering a bounding volume computer.

    Parameters
    ----------
    shape_type : type
        The shape class the computer handles. Subclasses of ``shape_type``
        without their own computer also use it.
    bv_type : type
        The bounding volume class the computer produces.

    Returns
    -------
    : callable
        The decorator, which returns the decorated function unchanged.
    """

    def decorator(func):
        key = (shape_type, bv_type)
        if key in _BV_COMPUTERS:
            logger.warning(
                "Overriding bounding volume computer for (%s, %s)",
                shape_type.__name__,
                bv_type.__name__,
            )
        _BV_COMPUTERS[key] = func
        logger.debug(
            "Registered bounding volume computer %s for (%s, %s)",
            func.__name__,
            shape_type.__name__,
            bv_type.__name__,
        )
        return func

    return decorator


def registered_bv_pairs():
    """List the registered ``(shape type, bounding volume type)`` pairs."""
    return list(_BV_COMPUTERS.keys())


def _lookup(shape_type, bv_type):
    for cls in shape_type.__mro__:
        func = _BV_COMPUTERS.get((cls, bv_type), None)
        if func is not None:
            return func
    raise NotImplementedError(
        f"No bounding volume computer registered for ({shape_type.__name__}, {bv_type.__name__})."
    )


def compute_bv(shape, transform, bv_type):
    """Compute a bounding volume of a shape in a given pose.

    Parameters
    ----------
    shape : ShapeBase
        The shape to bound. It is not modified.
    transform : RigidTransform or None
        The pose of the shape. ``None`` means the identity.
    bv_type : type
        The type of bounding volume to compute, e.g. ``AABB`` or ``OBB``.

    Returns
    -------
    :
        A new instance of ``bv_type`` enclosing the shape.

    Raises
    ------
    NotImplementedError
        If no computer is registered for the shape and bounding volume types.
    """
    func = _lookup(type(shape), bv_type)
    if transform is None:
        transform = RigidTransform.identity()
    return func(shape, transform)
