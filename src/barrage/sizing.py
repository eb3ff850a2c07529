from __future__ import annotations


def display_size(frame_width: float, frame_height: float, *, units: float, unit_size: float) -> tuple[float, float]:
    """Displayed extents of a frame scaled so its longer side spans `units` size units.

    A zero unit request (or a degenerate frame) skips scaling and keeps the frame size.
    """

    width = float(frame_width)
    height = float(frame_height)
    max_dimension = max(width, height)
    if units == 0 or max_dimension <= 0.0:
        return width, height
    scale = float(unit_size) * float(units) / max_dimension
    return width * scale, height * scale


def radius_for(frame_width: float, frame_height: float, *, units: float, unit_size: float) -> float:
    # Circle approximation: half of the smaller displayed extent.
    width, height = display_size(frame_width, frame_height, units=units, unit_size=unit_size)
    return min(width, height) * 0.5
