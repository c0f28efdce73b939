import numpy as np
import pytest
from scipy.spatial import Delaunay
from spatialmath.base import rotx, roty, rotz

import colgeo as cg


U = np.sqrt(3) / cg.shape.ellipsoid.PHI**2
V = cg.shape.ellipsoid.PHI * U


def test_construction():
    ell1 = cg.Ellipsoid(1, 2, 3)
    ell2 = cg.Ellipsoid([1, 2, 3])
    ell3 = cg.Ellipsoid(np.array([1.0, 2.0, 3.0]))
    assert np.allclose(ell1.radii, [1, 2, 3])
    assert np.allclose(ell1.radii, ell2.radii)
    assert np.allclose(ell1.radii, ell3.radii)

    # radii are stored verbatim, without validation
    ell = cg.Ellipsoid(-1, 1, 1)
    assert ell.compute_volume() < 0


def test_node_type():
    ell = cg.Ellipsoid(1, 2, 3)
    assert ell.get_node_type() == cg.NodeType.GEOM_ELLIPSOID
    assert ell.get_node_type().is_geometry()
    assert ell.get_object_type() == cg.ObjectType.GEOM


def test_volume():
    rng = np.random.default_rng(0)
    for _ in range(10):
        a, b, c = rng.uniform(0.1, 2, size=3)
        ell = cg.Ellipsoid(a, b, c)
        assert np.isclose(ell.compute_volume(), 4 * np.pi * a * b * c / 3)

    ell = cg.Ellipsoid(1, 2, 3)
    assert np.isclose(ell.compute_volume(), 4 * np.pi)


def test_moment_of_inertia():
    ell = cg.Ellipsoid(1, 2, 3)
    I = ell.compute_moment_of_inertia()
    k = 0.2 * 4 * np.pi
    assert np.allclose(I, np.diag([13 * k, 10 * k, 5 * k]))
    assert np.allclose(np.diag(I), [32.67256, 25.13274, 12.56637])

    rng = np.random.default_rng(0)
    for _ in range(10):
        ell = cg.Ellipsoid(rng.uniform(0.1, 2, size=3))
        I = ell.compute_moment_of_inertia()
        Ix, Iy, Iz = np.diag(I)

        # diagonal, positive and satisfies the triangle inequalities
        assert np.allclose(I, np.diag(np.diag(I)))
        assert Ix > 0 and Iy > 0 and Iz > 0
        assert Ix + Iy >= Iz
        assert Iy + Iz >= Ix
        assert Ix + Iz >= Iy


def test_moment_of_inertia_matches_params():
    ell = cg.Ellipsoid(0.5, 1, 1.5)
    V = ell.compute_volume()
    I = ell.compute_moment_of_inertia()

    params = ell.uniform_density_params(mass=V)
    assert np.allclose(params.I, I)
    assert params.consistent()

    # centered at the origin, so inertia about the CoM is the same
    assert np.allclose(ell.compute_moment_of_inertia_related_to_com(), I)

    # inertia scales linearly with density
    params2 = ell.inertial_params(density=2.0)
    assert np.isclose(params2.mass, 2 * V)
    assert np.allclose(params2.I, 2 * I)
    assert params2.is_same(ell.uniform_density_params(mass=2 * V))


def test_bound_vertices_scenario():
    ell = cg.Ellipsoid(1, 2, 3)
    vertices = ell.get_bound_vertices(cg.RigidTransform.identity())
    assert vertices.shape == (12, 3)
    assert np.allclose(vertices[4], [U, 2 * V, 0])

    # fixed order
    A, B, C = 1, 2, 3
    # fmt: off
    expected = np.array([
        [0, B * U, C * V], [0, -B * U, C * V], [0, B * U, -C * V], [0, -B * U, -C * V],
        [A * U, B * V, 0], [-A * U, B * V, 0], [A * U, -B * V, 0], [-A * U, -B * V, 0],
        [A * V, 0, C * U], [A * V, 0, -C * U], [-A * V, 0, C * U], [-A * V, 0, -C * U],
    ])
    # fmt: on
    assert np.allclose(vertices, expected)

    # no transform is the same as the identity
    assert np.allclose(ell.get_bound_vertices(), vertices)


def test_bound_vertices_sphere():
    r = 0.7
    ell = cg.Ellipsoid(r, r, r)
    vertices = ell.get_bound_vertices(cg.RigidTransform.identity())
    assert len(vertices) == 12
    norms = np.linalg.norm(vertices, axis=1)
    assert np.allclose(norms, r * np.sqrt(U**2 + V**2))


def test_bound_vertices_transformed():
    ell = cg.Ellipsoid(1, 2, 3)
    C = rotx(np.pi / 3) @ rotz(np.pi / 5)
    r = np.array([1, -2, 0.5])
    tf = cg.RigidTransform(rotation=C, translation=r)

    local = ell.get_bound_vertices()
    world = ell.get_bound_vertices(tf)
    assert np.allclose(world, local @ C.T + r)


def test_bound_vertices_circumscribe():
    rng = np.random.default_rng(0)
    for _ in range(20):
        ell = cg.Ellipsoid(rng.uniform(0.1, 2, size=3))
        tf = cg.RigidTransform.random(rng=rng)
        vertices = ell.get_bound_vertices(tf)

        # every vertex is on or outside the ellipsoid
        local = tf.inv().apply(vertices)
        assert np.all(np.sum((local / ell.radii) ** 2, axis=1) >= 1 - 1e-8)

        # and the hull of the vertices contains the ellipsoid surface
        surface = cg.random_points_on_sphere(100, rng=rng) * ell.radii
        hull = Delaunay(vertices)
        assert np.all(hull.find_simplex(tf.apply(surface)) >= 0)


def test_local_aabb_sphere():
    r = 0.5
    ell = cg.Ellipsoid(r, r, r)
    ell.compute_local_aabb()

    assert np.allclose(ell.aabb_local.v_min, -r * np.ones(3))
    assert np.allclose(ell.aabb_local.v_max, r * np.ones(3))
    assert np.allclose(ell.aabb_center, np.zeros(3))

    # the radius reaches the corners of the box
    assert np.isclose(ell.aabb_radius, np.sqrt(3) * r)
    assert ell.aabb_radius >= 0


def test_local_aabb():
    ell = cg.Ellipsoid(1, 2, 3)
    ell.compute_local_aabb()
    assert np.allclose(ell.aabb_local.v_min, [-1, -2, -3])
    assert np.allclose(ell.aabb_local.v_max, [1, 2, 3])
    assert np.allclose(ell.aabb_center, 0)
    assert np.isclose(
        ell.aabb_radius, np.linalg.norm(ell.aabb_local.v_min - ell.aabb_center)
    )


def test_local_aabb_idempotent():
    ell = cg.Ellipsoid(0.3, 1.2, 0.8)
    ell.compute_local_aabb()
    aabb1 = ell.aabb_local
    center1 = ell.aabb_center.copy()
    radius1 = ell.aabb_radius

    ell.compute_local_aabb()
    assert ell.aabb_local.is_same(aabb1, tol=0)
    assert np.array_equal(ell.aabb_center, center1)
    assert ell.aabb_radius == radius1


def test_local_aabb_invalidated():
    ell = cg.Ellipsoid(1, 1, 1)
    assert np.allclose(ell.aabb_local.v_max, [1, 1, 1])

    ell.radii = [2, 3, 4]
    assert np.allclose(ell.aabb_local.v_max, [2, 3, 4])
    assert np.isclose(ell.aabb_radius, np.sqrt(29))

    # radii cannot be modified in place
    with pytest.raises(ValueError):
        ell.radii[0] = 10.0


def test_local_aabb_lazy():
    ell = cg.Ellipsoid(1, 2, 3)
    assert np.isclose(ell.aabb_radius, np.sqrt(14))
    assert np.allclose(ell.aabb_center, 0)


def test_contains():
    ell = cg.Ellipsoid(1, 2, 3)
    assert ell.contains([0.9, 0, 0])
    assert not ell.contains([1.1, 0, 0])
    assert ell.contains([0, 1.9, 0])
    assert not ell.contains([0, 0, 3.1])

    rng = np.random.default_rng(0)
    points = ell.random_points(100, rng=rng)
    assert points.shape == (100, 3)
    assert ell.contains(points).all()


def test_support():
    ell = cg.Ellipsoid(1, 2, 3)
    assert np.allclose(ell.support([1, 0, 0]), [1, 0, 0])
    assert np.allclose(ell.support([0, -1, 0]), [0, -2, 0])
    assert np.allclose(ell.support([0, 0, 5]), [0, 0, 3])

    rng = np.random.default_rng(0)
    for _ in range(10):
        d = rng.normal(size=3)
        p = ell.support(d)

        # support point is on the surface and beats random interior points
        assert np.isclose(np.sum((p / ell.radii) ** 2), 1)
        points = ell.random_points(50, rng=rng)
        assert np.all(points @ d <= p @ d + 1e-8)


def test_aabb_rotated():
    ell = cg.Ellipsoid(1, 2, 3)

    # rotating by 90 degrees about z swaps the x and y extents
    tf = cg.RigidTransform(rotation=rotz(np.pi / 2), translation=[1, 0, 0])
    aabb = cg.compute_bv(ell, tf, cg.AABB)
    assert np.allclose(aabb.v_min, [-1, -1, -3])
    assert np.allclose(aabb.v_max, [3, 1, 3])


def test_aabb_tight():
    rng = np.random.default_rng(0)
    for _ in range(10):
        ell = cg.Ellipsoid(rng.uniform(0.1, 2, size=3))
        tf = cg.RigidTransform.random(rng=rng)
        aabb = cg.compute_bv(ell, tf, cg.AABB)

        # the box touches the ellipsoid along every world axis
        for i in range(3):
            e = np.zeros(3)
            e[i] = 1
            p_max = tf.apply(ell.support(tf.rotation.T @ e))
            p_min = tf.apply(ell.support(-tf.rotation.T @ e))
            assert np.isclose(p_max[i], aabb.v_max[i])
            assert np.isclose(p_min[i], aabb.v_min[i])

        points = tf.apply(ell.random_points(100, rng=rng))
        assert aabb.contains(points).all()


def test_obb():
    rng = np.random.default_rng(0)
    ell = cg.Ellipsoid(0.5, 1, 2)
    C = roty(np.pi / 6) @ rotx(np.pi / 4)
    tf = cg.RigidTransform(rotation=C, translation=[0, 1, 2])

    obb = cg.compute_bv(ell, tf, cg.OBB)
    assert np.allclose(obb.axis, C)
    assert np.allclose(obb.center, [0, 1, 2])
    assert np.allclose(obb.extent, ell.radii)

    points = tf.apply(ell.random_points(100, rng=rng))
    assert obb.contains(points).all()

    # same as the AABB in the local frame
    obb = cg.compute_bv(ell, None, cg.OBB)
    assert obb.aabb().is_same(ell.aabb_local)


def test_mbe_of_box_vertices():
    h = 0.5
    points = cg.box_vertices(h * np.ones(3))
    ell, tf = cg.mbe_of_points(points)

    # bounding ellipsoid of a cube is a sphere through its corners
    assert np.allclose(ell.radii, np.sqrt(3) * h, rtol=1e-3)
    assert np.allclose(tf.translation, 0, atol=1e-4)
    assert np.isclose(np.linalg.det(tf.rotation), 1)
    assert ell.contains(tf.inv().apply(points), tol=1e-3).all()


def test_mbe_of_points_transformed():
    rng = np.random.default_rng(0)
    C = rotz(np.pi / 4)
    r = np.array([1, 1, 0])
    tf0 = cg.RigidTransform(rotation=C, translation=r)
    points = tf0.apply(cg.box_vertices([1, 0.5, 0.25]))

    ell, tf = cg.mbe_of_points(points)
    assert ell.contains(tf.inv().apply(points), tol=1e-3).all()
    assert np.allclose(tf.translation, r, atol=1e-3)
    assert np.allclose(np.sort(ell.radii), np.sqrt(3) * np.array([0.25, 0.5, 1]), rtol=1e-3)


def test_construction_partial_radii():
    with pytest.raises(ValueError):
        cg.Ellipsoid(1, 2)
    with pytest.raises(ValueError):
        cg.Ellipsoid(1, c=3)


def test_radii_from_eigs():
    radii = cg.shape.ellipsoid._radii_from_eigs(np.array([0.0, 0.5, 2.0]))
    assert np.all(np.isfinite(radii))
    assert np.allclose(radii, [0, 2, 0.5])
