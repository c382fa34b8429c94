"""Mesh a few analytic fields with surface nets and render them on one page.

Each field is meshed with :func:`surfnet.surface_net` and drawn with
matplotlib's 3-D axes using flat diffuse shading from the triangle
winding, so inverted faces show up dark.

Usage::

    python scripts/surface_net_gallery.py                  # saves surface_net_gallery.png
    python scripts/surface_net_gallery.py --out my_file.png
    python scripts/surface_net_gallery.py --res 16         # faster, coarser
    python scripts/surface_net_gallery.py --fixed-diagonal # compare the minimal split

Requirements: numpy, matplotlib
"""
from __future__ import annotations

import argparse
import os
import sys

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib.pyplot as plt
import numpy as np
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

from surfnet import surface_net
from surfnet.fields import box_field, lattice_field, sphere_field, torus_field


# ---------------------------------------------------------------------------
# Field catalogue  (label, field)
# ---------------------------------------------------------------------------

def _make_fields(res: int) -> list[tuple[str, object]]:
    c = res / 2.0
    centre = (c, c, c)

    def gyroid(p):
        q = p * 2.0 * np.pi
        return (np.sin(q[..., 0]) * np.cos(q[..., 1])
                + np.sin(q[..., 1]) * np.cos(q[..., 2])
                + np.sin(q[..., 2]) * np.cos(q[..., 0]))

    return [
        ("sphere", sphere_field(centre, 0.35 * res)),
        ("box", box_field(centre, (0.3 * res, 0.2 * res, 0.25 * res))),
        ("torus", torus_field(centre, 0.28 * res, 0.1 * res)),
        ("gyroid", lattice_field(gyroid, ((0, 1), (0, 1), (0, 1)), res)),
    ]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

_LIGHT_DIR = np.array([1.0, 1.0, 1.0]) / np.sqrt(3.0)


def _shade(tris: np.ndarray, base_color: np.ndarray) -> np.ndarray:
    """Per-triangle RGB from the winding normal; back faces get ambient only."""
    normals = np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0])
    area2 = np.linalg.norm(normals, axis=1)
    lit = normals @ _LIGHT_DIR / np.maximum(area2, 1e-12)
    brightness = 0.3 + 0.7 * np.clip(lit, 0.0, 1.0)
    return brightness[:, None] * base_color


def render_gallery(fields, out_path: str, ncols: int = 4, res: int = 32,
                   diagonal: str = "shortest") -> None:
    nrows = (len(fields) + ncols - 1) // ncols
    fig = plt.figure(figsize=(ncols * 3.0, nrows * 3.0), facecolor="#111111")

    face_color = np.array([0.35, 0.75, 1.0])
    view_elev, view_azim = 20, 35

    for idx, (label, field) in enumerate(fields):
        ax = fig.add_subplot(nrows, ncols, idx + 1, projection="3d")
        ax.set_facecolor("#111111")
        ax.set_axis_off()

        mesh = surface_net(res, field, memoize=True, diagonal=diagonal)
        ax.set_title(f"{label} ({mesh.n_triangles} tris)", color="white",
                     fontsize=6.5, pad=1)
        if mesh.n_triangles == 0:
            ax.text2D(0.5, 0.5, "no surface", ha="center", va="center",
                      color="gray", transform=ax.transAxes, fontsize=7)
            continue

        tris = mesh.positions[mesh.faces]
        ax.add_collection3d(Poly3DCollection(tris, facecolors=_shade(tris, face_color),
                                             edgecolors="none", alpha=1.0))

        ax.set_xlim(0, res); ax.set_ylim(0, res); ax.set_zlim(0, res)
        ax.set_box_aspect([1, 1, 1])
        ax.view_init(elev=view_elev, azim=view_azim)

    fig.suptitle("surfnet — surface nets gallery", color="white", fontsize=13, y=1.002)
    plt.tight_layout(pad=0.3)
    fig.savefig(out_path, dpi=180, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    print(f"Saved: {out_path}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Render surface-net meshes of analytic fields to a PNG gallery."
    )
    parser.add_argument("--out",  default="surface_net_gallery.png", help="Output PNG path")
    parser.add_argument("--cols", type=int, default=4, help="Number of columns (default 4)")
    parser.add_argument("--res",  type=int, default=24,
                        help="Cells per axis (default 24)")
    parser.add_argument("--fixed-diagonal", action="store_true",
                        help="Always split quads along the same diagonal")
    args = parser.parse_args()

    fields = _make_fields(args.res)
    render_gallery(fields, args.out, ncols=args.cols, res=args.res,
                   diagonal="fixed" if args.fixed_diagonal else "shortest")


if __name__ == "__main__":
    main()
