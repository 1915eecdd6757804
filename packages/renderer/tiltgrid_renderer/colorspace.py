"""sRGB <-> CIE LCh(ab) ("HCL") conversions.

Arrays are ``(N, 3)``. sRGB channels are floats in [0, 1]; HCL rows are
``(hue_degrees, chroma, luminance)`` with luminance on a 0-100 scale.
HCL is CIE L*a*b* (D65) in polar form.
"""

from __future__ import annotations

import numpy as np

# D65 reference white
WHITE = np.array([0.95047, 1.0, 1.08883])

_DELTA = 6.0 / 29.0

_RGB_TO_XYZ = np.array(
    [
        [0.4124564, 0.3575761, 0.1804375],
        [0.2126729, 0.7151522, 0.0721750],
        [0.0193339, 0.1191920, 0.9503041],
    ]
)
_XYZ_TO_RGB = np.linalg.inv(_RGB_TO_XYZ)


def srgb_to_linear(rgb: np.ndarray) -> np.ndarray:
    rgb = np.asarray(rgb, dtype=np.float64)
    return np.where(rgb > 0.04045, ((np.clip(rgb, 0.04045, None) + 0.055) / 1.055) ** 2.4, rgb / 12.92)


def linear_to_srgb(linear: np.ndarray) -> np.ndarray:
    linear = np.asarray(linear, dtype=np.float64)
    return np.where(
        linear > 0.0031308,
        1.055 * np.power(np.clip(linear, 0, None), 1 / 2.4) - 0.055,
        12.92 * linear,
    )


def _lab_f(t: np.ndarray) -> np.ndarray:
    return np.where(t > _DELTA**3, np.cbrt(t), t / (3 * _DELTA**2) + 4.0 / 29.0)


def _lab_f_inv(t: np.ndarray) -> np.ndarray:
    return np.where(t > _DELTA, t**3, 3 * _DELTA**2 * (t - 4.0 / 29.0))


def rgb_to_lab(rgb: np.ndarray) -> np.ndarray:
    """Convert sRGB rows to CIE L*a*b*."""
    xyz = srgb_to_linear(np.atleast_2d(rgb)) @ _RGB_TO_XYZ.T
    f = _lab_f(xyz / WHITE)
    fx, fy, fz = f[:, 0], f[:, 1], f[:, 2]

    L = 116.0 * fy - 16.0
    a = 500.0 * (fx - fy)
    b = 200.0 * (fy - fz)
    return np.column_stack([L, a, b])


def lab_to_rgb(lab: np.ndarray) -> np.ndarray:
    """Convert CIE L*a*b* rows to sRGB. Out-of-gamut values are not clipped."""
    lab = np.atleast_2d(np.asarray(lab, dtype=np.float64))
    L, a, b = lab[:, 0], lab[:, 1], lab[:, 2]

    fy = (L + 16.0) / 116.0
    fx = fy + a / 500.0
    fz = fy - b / 200.0
    xyz = _lab_f_inv(np.column_stack([fx, fy, fz])) * WHITE

    return linear_to_srgb(xyz @ _XYZ_TO_RGB.T)


def rgb_to_hcl(rgb: np.ndarray) -> np.ndarray:
    lab = rgb_to_lab(rgb)
    L, a, b = lab[:, 0], lab[:, 1], lab[:, 2]
    chroma = np.hypot(a, b)
    hue = np.mod(np.degrees(np.arctan2(b, a)), 360.0)
    return np.column_stack([hue, chroma, L])


def hcl_to_rgb(hcl: np.ndarray) -> np.ndarray:
    hcl = np.atleast_2d(np.asarray(hcl, dtype=np.float64))
    hue, chroma, L = hcl[:, 0], hcl[:, 1], hcl[:, 2]
    radians = np.radians(hue)
    return lab_to_rgb(np.column_stack([L, chroma * np.cos(radians), chroma * np.sin(radians)]))


def interp_angle(a0: float, a1: float, t: float) -> float:
    """Interpolate two angles in degrees along the shortest arc."""
    delta = np.mod(np.mod(a1 - a0, 360.0) + 540.0, 360.0) - 180.0
    return float(np.mod(a0 + t * delta + 360.0, 360.0))
