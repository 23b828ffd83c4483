import numpy as np
import pytest

from audacious import VolumeEffect, mix, registry, volume
from audacious.utils.audio import FLOAT32_MAX


def test_mix_at_half_bias_sums_full_volumes():
    np.testing.assert_array_equal(mix([1.0, 2.0], [10.0], 0.5), [11.0, 2.0])


@pytest.mark.parametrize(
    "bias, expected",
    [
        (0.0, [1.0, 2.0]),
        (0.25, [6.0, 12.0]),
        (0.75, [10.5, 21.0]),
        (1.0, [10.0, 20.0]),
    ],
)
def test_mix_cross_fades(bias, expected):
    np.testing.assert_allclose(mix([1.0, 2.0], [10.0, 20.0], bias), expected)


def test_mix_clamps_to_float_range():
    result = mix([FLOAT32_MAX], [FLOAT32_MAX], 0.5)

    assert result.dtype == np.float32
    assert result[0] == np.float32(FLOAT32_MAX)


def test_mix_leaves_inputs_alone():
    first = np.array([1.0, 2.0, 3.0], dtype=np.float32)
    second = [4.0]

    mix(first, second, 0.8)

    np.testing.assert_array_equal(first, [1.0, 2.0, 3.0])
    assert second == [4.0]


@pytest.mark.parametrize("bias", [-0.1, 1.5])
def test_mix_rejects_bias_outside_unit_range(bias):
    with pytest.raises(ValueError):
        mix([1.0], [1.0], bias)


def test_volume_scales_and_clamps():
    np.testing.assert_array_equal(volume([1.0, -2.0], 0.5), [0.5, -1.0])
    assert volume([FLOAT32_MAX], 2.0)[0] == np.float32(FLOAT32_MAX)
    assert volume([-FLOAT32_MAX], 2.0)[0] == np.float32(-FLOAT32_MAX)


def test_volume_effect_from_registry():
    effect = registry.create_effect("volume", factor=2.0)

    assert isinstance(effect, VolumeEffect)
    np.testing.assert_array_equal(effect.apply(np.array([1.0, -3.0]), 8000), [2.0, -6.0])
    assert effect.to_dict() == {"name": "volume", "factor": 2.0}
