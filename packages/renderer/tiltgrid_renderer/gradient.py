"""Gradient tables: colour keypoints blended in HCL space."""

from __future__ import annotations

from typing import Iterable, Sequence, Union

from .errors import EmptyTable
from .models import Color, ColorKeypoint

ColorSource = Union[str, Color]


class GradientTable:
    """Ordered colour keypoints at normalized positions.

    Keypoints must be sorted by ascending position; this is not checked.
    A table is never modified after construction and may be shared freely.
    """

    def __init__(self, stops: Iterable[tuple[ColorSource, float]]) -> None:
        keypoints = []
        for source, position in stops:
            color = source if isinstance(source, Color) else Color.from_hex(source)
            keypoints.append(ColorKeypoint(color=color, position=float(position)))
        if not keypoints:
            raise EmptyTable()
        self._keypoints = tuple(keypoints)

    @property
    def keypoints(self) -> Sequence[ColorKeypoint]:
        return self._keypoints

    def __len__(self) -> int:
        return len(self._keypoints)

    def __repr__(self) -> str:
        stops = ", ".join(f"{k.color.hex()}@{k.position:g}" for k in self._keypoints)
        return f"GradientTable([{stops}])"

    def interpolate(self, t: float) -> Color:
        """Return the HCL blend of the two keypoints around ``t``.

        When no adjacent pair brackets ``t`` the last keypoint's colour is
        returned, including for ``t`` below the first keypoint.
        """
        for k1, k2 in zip(self._keypoints, self._keypoints[1:]):
            if k1.position <= t <= k2.position:
                span = k2.position - k1.position
                u = (t - k1.position) / span if span else 1.0
                if u <= 0.0:
                    return k1.color
                if u >= 1.0:
                    return k2.color
                return k1.color.blend_hcl(k2.color, u).clamped()

        return self._keypoints[-1].color
