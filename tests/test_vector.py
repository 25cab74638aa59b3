import numpy as np
import pytest

from landersim.utils.vector import abs2, magnitude, unit, vec3


def test_abs2_and_magnitude():
    v = np.array([3.0, 4.0, 12.0])
    assert abs2(v) == pytest.approx(169.0)
    assert magnitude(v) == pytest.approx(13.0)


def test_unit_direction():
    u = unit(np.array([0.0, -5.0, 0.0]))
    assert np.allclose(u, [0.0, -1.0, 0.0])
    assert magnitude(u) == pytest.approx(1.0)


def test_unit_of_zero_vector_is_zero():
    assert np.allclose(unit(np.zeros(3)), 0.0)


def test_vec3_rejects_wrong_shape():
    with pytest.raises(ValueError, match="shape"):
        vec3([1.0, 2.0])
    v = vec3((1, 2, 3))
    assert v.dtype == np.float64
