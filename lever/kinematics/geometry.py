# lever/kinematics/geometry.py
"""Small 2D helpers shared by the squat solver and the pose sampler."""

import numpy as np


def rotate_trunk_offset(horizontal: float, vertical: float, theta: float) -> np.ndarray:
    """
    Rotate a (horizontal, vertical) offset defined in the trunk frame into
    world coordinates for a trunk leaning `theta` rad forward of vertical.

        R(θ)(h, v) = (h·cosθ + v·sinθ,  −h·sinθ + v·cosθ)
    """
    c, s = np.cos(theta), np.sin(theta)
    return np.array([horizontal * c + vertical * s, -horizontal * s + vertical * c])


def endpoint(start: np.ndarray, length: float, angle: float) -> np.ndarray:
    """End of a segment of `length` leaving `start` at `angle` rad from +x."""
    return start + length * np.array([np.cos(angle), np.sin(angle)])


def interior_angle(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> float:
    """Angle ABC in degrees (0..180)."""
    u = a - b
    v = c - b
    nu, nv = np.linalg.norm(u), np.linalg.norm(v)
    if nu < 1e-12 or nv < 1e-12:
        return 0.0
    cos_t = np.clip(np.dot(u, v) / (nu * nv), -1.0, 1.0)
    return float(np.degrees(np.arccos(cos_t)))


def two_link_ik(
    base: np.ndarray,
    target: np.ndarray,
    l1: float,
    l2: float,
    bend: float = 1.0,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Place a two-segment chain from `base` toward `target`.

    Targets outside the reachable annulus |l1 - l2| .. l1 + l2 are pulled to
    the nearest reachable point along the same line, so both segment lengths
    are always exact. `bend` (+1 / -1) picks the elbow side.

    Returns:
        (middle joint, end point)
    """
    delta = target - base
    dist = float(np.linalg.norm(delta))
    direction = delta / dist if dist > 1e-12 else np.array([0.0, 1.0])

    lo = abs(l1 - l2) + 1e-9
    hi = l1 + l2 - 1e-9
    d = min(max(dist, lo), hi)

    cos_a = np.clip((l1 ** 2 + d ** 2 - l2 ** 2) / (2 * l1 * d), -1.0, 1.0)
    a = np.arccos(cos_a)
    phi = np.arctan2(direction[1], direction[0])

    middle = endpoint(base, l1, phi + np.sign(bend) * a)
    end = base + direction * d
    # Re-anchor the end on the forearm so |end - middle| == l2 to machine precision
    seg = end - middle
    end = middle + seg / np.linalg.norm(seg) * l2
    return middle, end
