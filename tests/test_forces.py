import numpy as np
from netforce.types import Node, Shockwave
from netforce.core.forces import (
    repulsion,
    spring_force,
    boundary_force,
    shockwave_force,
    apply_repulsion_pairwise,
    apply_springs,
    apply_shockwaves,
)


def make_node(x, y, stress=0.0, node_id=0):
    return Node(id=node_id, type="SUPPLIER", position=(x, y), stress=stress)


def test_repulsion_magnitude_and_direction():
    """
    F = k * (1 + stress * threshold) / (d + 1)^2, pointing away from the other node.
    d = 9 -> (d + 1)^2 = 100.
    """
    a = make_node(0.0, 0.0, stress=0.0)
    b = make_node(9.0, 0.0, node_id=1)
    f = repulsion(a, b, k_repulsion=5000.0, stress_threshold=0.7)
    assert np.allclose(f, [-50.0, 0.0])

    stressed = make_node(0.0, 0.0, stress=0.5)
    f = repulsion(stressed, b, k_repulsion=5000.0, stress_threshold=0.7)
    assert np.allclose(f, [-50.0 * 1.35, 0.0])


def test_repulsion_uses_own_stress_only():
    a = make_node(0.0, 0.0, stress=1.0, node_id=0)
    b = make_node(0.0, 9.0, stress=0.0, node_id=1)
    apply_repulsion_pairwise([a, b], k_repulsion=5000.0, stress_threshold=0.7)
    assert np.allclose(a.acceleration, [0.0, -85.0])
    assert np.allclose(b.acceleration, [0.0, 50.0])


def test_repulsion_coincident_nodes_is_finite():
    a = make_node(10.0, 10.0, node_id=0)
    b = make_node(10.0, 10.0, node_id=1)
    apply_repulsion_pairwise([a, b], k_repulsion=5000.0, stress_threshold=0.7)
    assert np.all(np.isfinite(a.acceleration))
    assert np.allclose(a.acceleration, 0.0)


def test_spring_at_rest_length_is_zero():
    f, displacement = spring_force(np.array([0.0, 0.0]), np.array([120.0, 0.0]), 0.05, 120.0)
    assert np.allclose(f, 0.0)
    assert abs(displacement) < 1e-12


def test_spring_stretched_and_compressed():
    # Stretched by 100: source pulled toward target with k * 100 = 5
    f, displacement = spring_force(np.array([0.0, 0.0]), np.array([220.0, 0.0]), 0.05, 120.0)
    assert np.allclose(f, [5.0, 0.0])
    assert displacement == 100.0

    # Compressed by 20: source pushed away from target
    f, displacement = spring_force(np.array([0.0, 0.0]), np.array([0.0, 100.0]), 0.05, 120.0)
    assert np.allclose(f, [0.0, -1.0])
    assert displacement == -20.0


def test_spring_zero_distance_is_guarded():
    f, displacement = spring_force(np.array([5.0, 5.0]), np.array([5.0, 5.0]), 0.05, 120.0)
    assert np.all(np.isfinite(f))
    assert np.allclose(f, 0.0)
    assert displacement == -120.0


def test_springs_equal_and_opposite():
    a = make_node(100.0, 100.0, node_id=0)
    b = make_node(300.0, 250.0, node_id=1)
    apply_springs([a, b], [(0, 1)], k_spring=0.05, rest_length=120.0)
    assert np.allclose(a.acceleration, -b.acceleration)
    # Stretched: a pulled toward b
    assert a.acceleration[0] > 0 and a.acceleration[1] > 0


def test_boundary_force_per_axis():
    # Inside the interior: nothing
    assert np.allclose(boundary_force(np.array([500.0, 350.0]), 1000, 700, 50, 0.1), 0.0)
    # Left band only
    assert np.allclose(boundary_force(np.array([10.0, 350.0]), 1000, 700, 50, 0.1), [4.0, 0.0])
    # Right and bottom bands
    assert np.allclose(boundary_force(np.array([995.0, 690.0]), 1000, 700, 50, 0.1), [-4.5, -4.0])
    # Top band
    assert np.allclose(boundary_force(np.array([500.0, -50.0]), 1000, 700, 50, 0.1), [0.0, 10.0])


def test_shockwave_force_decays_geometrically():
    sw = Shockwave(origin=(0.0, 0.0), force=1000.0)
    p = np.array([9.0, 0.0])
    assert np.allclose(shockwave_force(p, sw, 0.95), [10.0, 0.0])

    sw.age = 2
    assert np.allclose(shockwave_force(p, sw, 0.95), [10.0 * 0.95 ** 2, 0.0])

    sw.age = 10
    ratio = shockwave_force(p, sw, 0.95)[0] / 10.0
    assert abs(ratio - 0.95 ** 10) < 1e-12


def test_shockwave_at_node_position_is_finite():
    sw = Shockwave(origin=(50.0, 50.0), force=2000.0)
    f = shockwave_force(np.array([50.0, 50.0]), sw, 0.95)
    assert np.all(np.isfinite(f))
    assert np.allclose(f, 0.0)


def test_shockwaves_superimpose_linearly():
    node_pair = make_node(40.0, 30.0)
    node_single = make_node(40.0, 30.0)
    apply_shockwaves(
        [node_pair],
        [Shockwave(origin=(0.0, 0.0), force=300.0), Shockwave(origin=(0.0, 0.0), force=700.0)],
        0.95,
    )
    apply_shockwaves([node_single], [Shockwave(origin=(0.0, 0.0), force=1000.0)], 0.95)
    assert np.allclose(node_pair.acceleration, node_single.acceleration)

    # Different origins: total is the sum of the parts
    s1 = Shockwave(origin=(0.0, 0.0), force=500.0)
    s2 = Shockwave(origin=(100.0, 0.0), force=800.0, age=3)
    both = make_node(40.0, 30.0)
    apply_shockwaves([both], [s1, s2], 0.95)
    expected = shockwave_force(both.position, s1, 0.95) + shockwave_force(both.position, s2, 0.95)
    assert np.allclose(both.acceleration, expected)
