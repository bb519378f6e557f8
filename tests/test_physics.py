import math

import numpy as np
import pytest

from sir_abm.physics import elastic_collision, kinetic_energy, momentum, move

from .conftest import place


def test_move_wraps_at_boundary(pair):
    a, _ = pair
    place(a, (0.999, 0.5), vel=(0.01, 0.0))
    move(a, 1.0)
    assert a.pos[0] == pytest.approx(0.009, abs=1e-12)
    assert a.pos[1] == pytest.approx(0.5)
    assert 0.0 <= a.pos[0] < 1.0


def test_move_wraps_negative_direction(pair):
    a, _ = pair
    place(a, (0.5, 0.002), vel=(0.0, -0.005))
    move(a, 2.0)
    assert a.pos[1] == pytest.approx(0.992)


def test_infinite_mass_never_moves(pair):
    a, _ = pair
    place(a, (0.3, 0.3), vel=(0.1, 0.1), mass=math.inf)
    move(a, 1.0)
    assert a.pos == (0.3, 0.3)


def test_head_on_equal_masses_exchange_velocities(pair):
    a, b = pair
    place(a, (0.50, 0.5), vel=(0.01, 0.0))
    place(b, (0.51, 0.5), vel=(-0.01, 0.0))
    assert elastic_collision(a, b)
    assert np.allclose(a.vel, [-0.01, 0.0])
    assert np.allclose(b.vel, [0.01, 0.0])


def test_collision_conserves_momentum_and_energy(pair):
    a, b = pair
    place(a, (0.50, 0.50), vel=(0.01, 0.002), mass=1.0)
    place(b, (0.51, 0.505), vel=(-0.005, 0.001), mass=2.0)
    p0, e0 = momentum([a, b]), kinetic_energy([a, b])
    assert elastic_collision(a, b)
    assert np.allclose(momentum([a, b]), p0, rtol=0, atol=1e-14)
    assert kinetic_energy([a, b]) == pytest.approx(e0, rel=1e-12)
    # the tangential component is untouched
    t = np.array([-0.005, 0.01])
    assert a.vel @ t == pytest.approx(np.array([0.01, 0.002]) @ t)


def test_separating_pair_is_left_alone(pair):
    a, b = pair
    place(a, (0.50, 0.5), vel=(-0.01, 0.0))
    place(b, (0.51, 0.5), vel=(0.01, 0.0))
    assert not elastic_collision(a, b)
    assert np.allclose(a.vel, [-0.01, 0.0])
    assert np.allclose(b.vel, [0.01, 0.0])


def test_collision_across_boundary(pair):
    a, b = pair
    place(a, (0.995, 0.5), vel=(0.01, 0.0))
    place(b, (0.005, 0.5), vel=(0.0, 0.0))
    assert elastic_collision(a, b)
    assert np.allclose(a.vel, [0.0, 0.0])
    assert np.allclose(b.vel, [0.01, 0.0])


def test_infinite_mass_acts_as_wall(pair):
    wall, mover = pair
    place(wall, (0.50, 0.5), vel=(0.0, 0.0), mass=math.inf)
    place(mover, (0.51, 0.5), vel=(-0.01, 0.003))
    assert elastic_collision(wall, mover)
    assert np.allclose(wall.vel, [0.0, 0.0])
    assert np.allclose(mover.vel, [0.01, 0.003])
    # same result with the wall second
    place(mover, (0.51, 0.5), vel=(-0.01, 0.003))
    assert elastic_collision(mover, wall)
    assert np.allclose(mover.vel, [0.01, 0.003])


def test_two_infinite_masses_do_nothing(pair):
    a, b = pair
    place(a, (0.50, 0.5), vel=(0.0, 0.0), mass=math.inf)
    place(b, (0.51, 0.5), vel=(0.0, 0.0), mass=math.inf)
    assert not elastic_collision(a, b)


def test_coincident_positions_skipped(pair):
    a, b = pair
    place(a, (0.5, 0.5), vel=(0.01, 0.0))
    place(b, (0.5, 0.5), vel=(-0.01, 0.0))
    assert not elastic_collision(a, b)


def test_diagnostics_skip_infinite_mass(pair):
    a, b = pair
    place(a, (0.1, 0.1), vel=(0.0, 0.0), mass=math.inf)
    place(b, (0.2, 0.2), vel=(0.3, 0.4), mass=2.0)
    assert kinetic_energy([a, b]) == pytest.approx(0.25)
    assert np.allclose(momentum([a, b]), [0.6, 0.8])
