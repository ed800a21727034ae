"""Closed-form solution of the damped harmonic oscillator."""

from __future__ import annotations

import math


def spring_coefficients(damper: float, speed: float, elapsed: float):
    """Return ``(a, b, sine, cos_h, damper_sin)`` after ``elapsed`` seconds.

    The regime is picked from ``damper²``: below 1 the spring is underdamped
    (decaying sine), at exactly 1 critically damped, above 1 overdamped (sum
    of two real exponentials). All three reduce to the same five numbers.
    """
    t = speed * elapsed
    damper_squared = damper * damper

    if damper_squared < 1.0:
        h = math.sqrt(1.0 - damper_squared)
        ep = math.exp(-damper * t) / h
        cosine = ep * math.cos(h * t)
        sine = ep * math.sin(h * t)
    elif damper_squared == 1.0:
        h = 1.0
        ep = math.exp(-damper * t) / h
        cosine = ep
        sine = ep * t
    else:
        h = math.sqrt(damper_squared - 1.0)
        u = math.exp((-damper + h) * t) / (2.0 * h)
        v = math.exp((-damper - h) * t) / (2.0 * h)
        cosine = u + v
        sine = u - v

    cos_h = h * cosine
    damper_sin = damper * sine
    a = cos_h + damper_sin
    b = speed * sine
    return a, b, sine, cos_h, damper_sin


def position_velocity(damper: float, speed: float, elapsed: float, position0, velocity0, target):
    """Advance channel tuples by ``elapsed`` seconds.

    Returns ``(position, velocity)`` as tuples the same width as the inputs.
    A stopped spring (``speed == 0``) exerts no force, so the state drifts
    with its velocity.
    """
    a, b, sine, cos_h, damper_sin = spring_coefficients(damper, speed, elapsed)
    c = 1.0 - a
    d = sine / speed if speed > 0.0 else elapsed
    e = cos_h - damper_sin

    position = tuple(a * p + c * t + d * v for p, v, t in zip(position0, velocity0, target))
    velocity = tuple(-b * p + b * t + e * v for p, v, t in zip(position0, velocity0, target))
    return position, velocity


__all__ = ["spring_coefficients", "position_velocity"]
