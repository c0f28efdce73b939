from .types import NodeType, ObjectType
from .transform import RigidTransform
from .bv import AABB, OBB, compute_bv, register_bv, registered_bv_pairs
from .shape import *
from .inertial import H2I, I2H, InertialParameters
from .random import *
from .util import *
from . import profiler
