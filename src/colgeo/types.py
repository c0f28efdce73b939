"""Kind tags for collision objects and their nodes."""
import enum


class ObjectType(enum.IntEnum):
    """Kind of collision object."""

    UNKNOWN = 0
    BVH = 1
    GEOM = 2
    OCTREE = 3


class NodeType(enum.IntEnum):
    """Kind of bounding volume or geometric primitive.

    Algorithms branch on this value rather than inspecting the Python type of
    an object. The integer values are stable.
    """

    BV_UNKNOWN = 0
    BV_AABB = 1
    BV_OBB = 2
    BV_RSS = 3
    BV_KIOS = 4
    BV_OBBRSS = 5
    BV_KDOP16 = 6
    BV_KDOP18 = 7
    BV_KDOP24 = 8
    GEOM_BOX = 9
    GEOM_SPHERE = 10
    GEOM_ELLIPSOID = 11
    GEOM_CAPSULE = 12
    GEOM_CONE = 13
    GEOM_CYLINDER = 14
    GEOM_CONVEX = 15
    GEOM_PLANE = 16
    GEOM_HALFSPACE = 17
    GEOM_TRIANGLE = 18
    GEOM_OCTREE = 19

    def is_bv(self):
        """``True`` if this is a bounding volume kind."""
        return self <= NodeType.BV_KDOP24

    def is_geometry(self):
        """``True`` if this is a geometric primitive kind."""
        return self >= NodeType.GEOM_BOX
