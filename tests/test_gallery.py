"""Tests for the surface-net gallery script helpers."""

import importlib.util
from pathlib import Path

import numpy as np
import numpy.testing as npt
import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

_SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "surface_net_gallery.py"


@pytest.fixture(scope="module")
def gallery():
    spec = importlib.util.spec_from_file_location("surface_net_gallery", _SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestShade:
    def test_facing_light_is_full_brightness(self, gallery):
        # counter-clockwise seen from +(1,1,1): normal along the light
        tris = np.array([[[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]])
        npt.assert_allclose(gallery._shade(tris, np.array([1.0, 0.5, 0.25])),
                            [[1.0, 0.5, 0.25]])

    def test_back_face_gets_ambient_only(self, gallery):
        tris = np.array([[[1.0, 0.0, 0.0], [0.0, 0.0, 1.0], [0.0, 1.0, 0.0]]])
        npt.assert_allclose(gallery._shade(tris, np.ones(3)), [[0.3, 0.3, 0.3]])

    def test_degenerate_triangle_is_finite(self, gallery):
        tris = np.zeros((1, 3, 3))
        assert np.isfinite(gallery._shade(tris, np.ones(3))).all()


def test_gallery_fields_mesh(gallery):
    from surfnet import surface_net

    fields = gallery._make_fields(8)
    assert [label for label, _ in fields] == ["sphere", "box", "torus", "gyroid"]
    for _, field in fields:
        assert surface_net(8, field, memoize=True).n_vertices > 0
