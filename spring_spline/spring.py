"""A physical model of a spring driving any springable value.

The state is never advanced eagerly. Reads of ``position`` and ``velocity``
evaluate the closed form at ``clock()`` against the last snapshot; every write
first snapshots the state at ``clock()`` and then applies the change.

Example::

    spring = Spring(0.0, clock=clock)
    spring.target = 10.0
    spring.damper = 0.5
    spring.speed = 8.0
    spring.bind("label", lambda position, velocity: ...)
"""

from __future__ import annotations

from typing import Callable

from .errors import InvalidMemberError, InvalidParameterError
from .handlers import Ticker, default_ticker
from .orientation import closest_angle
from .properties import _SPRING_PROPS, settings
from .simulation import position_velocity
from .utils import monotonic_clock
from .values import ValueKind, classify, codec_for, expect


def _public(value):
    # mathutils values are mutable, hand out copies
    copy = getattr(value, "copy", None)
    return copy() if copy is not None else value


class Spring:
    """Damped harmonic oscillator over a fixed :class:`ValueKind`."""

    __slots__ = (
        "_kind",
        "_codec",
        "_clock",
        "_time0",
        "_position0",
        "_velocity0",
        "_target",
        "_target_value",
        "_damper",
        "_speed",
        "_ticker",
        "_callbacks",
        "_updating",
    )

    def __init__(self, initial=0.0, clock: Callable[[], float] | None = None, ticker: Ticker | None = None):
        kind = classify(initial)
        codec = codec_for(kind)
        clock = clock if clock is not None else monotonic_clock
        channels = codec.encode(initial)

        self._kind = kind
        self._codec = codec
        self._clock = clock
        self._time0 = clock()
        self._position0 = channels
        self._velocity0 = codec.zero
        self._target = channels
        self._target_value = _public(initial)
        self._damper = _SPRING_PROPS["damper"].default
        self._speed = _SPRING_PROPS["speed"].default
        self._ticker = ticker if ticker is not None else default_ticker
        self._callbacks: dict[str, Callable] = {}
        self._updating = False

    def __repr__(self) -> str:
        return (
            f"Spring(kind={self._kind.value}, target={self._target_value!r}, "
            f"damper={self._damper}, speed={self._speed})"
        )

    def __getattr__(self, name):
        raise InvalidMemberError("Spring", name)

    def __setattr__(self, name, value):
        member = getattr(type(self), name, None)
        if name in Spring.__slots__ or (isinstance(member, property) and member.fset is not None):
            object.__setattr__(self, name, value)
        else:
            raise InvalidMemberError("Spring", name)

    # -------------------- STATE --------------------

    def _channels_at(self, now: float):
        position, velocity = position_velocity(
            self._damper,
            self._speed,
            now - self._time0,
            self._position0,
            self._velocity0,
            self._target,
        )
        return self._codec.constrain(position), velocity

    def _snapshot(self, now: float):
        position, velocity = self._channels_at(now)
        self._position0 = position
        self._velocity0 = velocity
        self._time0 = now
        return position, velocity

    def _unwrap(self, channels: tuple, reference: tuple) -> tuple:
        if not self._codec.angular:
            return channels
        channels = list(channels)
        for index in self._codec.angular:
            channels[index] = closest_angle(channels[index], reference[index])
        return tuple(channels)

    def position_velocity(self, now: float):
        """Return ``(position, velocity)`` at ``now`` without touching state."""
        position, velocity = self._channels_at(now)
        return self._codec.decode(position), self._codec.decode(velocity)

    def advance_to(self, now: float, commit: bool = False):
        """Evaluate the spring at ``now``; with ``commit`` make it the new start state."""
        if commit:
            position, velocity = self._snapshot(now)
            self._update_callbacks()
        else:
            position, velocity = self._channels_at(now)
        return self._codec.decode(position), self._codec.decode(velocity)

    # -------------------- MEMBERS --------------------

    @property
    def position(self):
        position, _ = self._channels_at(self._clock())
        return self._codec.decode(position)

    @position.setter
    def position(self, value):
        channels = self._codec.constrain(expect(self._kind, value, "position"))
        now = self._clock()
        _, velocity = self._channels_at(now)
        self._position0 = self._unwrap(channels, self._target)
        self._velocity0 = velocity
        self._time0 = now
        self._update_callbacks()

    @property
    def velocity(self):
        _, velocity = self._channels_at(self._clock())
        return self._codec.decode(velocity)

    @velocity.setter
    def velocity(self, value):
        channels = expect(self._kind, value, "velocity")
        now = self._clock()
        position, _ = self._channels_at(now)
        self._position0 = position
        self._velocity0 = channels
        self._time0 = now
        self._update_callbacks()

    @property
    def target(self):
        return _public(self._target_value)

    @target.setter
    def target(self, value):
        channels = expect(self._kind, value, "target")
        clamped = self._codec.constrain(channels)
        position, _ = self._snapshot(self._clock())
        self._target = self._unwrap(clamped, position)
        # An out-of-range colour is stored as the colour the spring can reach
        self._target_value = self._codec.decode(clamped) if clamped != channels else _public(value)
        self._update_callbacks()

    @property
    def damper(self) -> float:
        return self._damper

    @damper.setter
    def damper(self, value: float):
        value = _SPRING_PROPS["damper"].coerce(value)
        self._snapshot(self._clock())
        self._damper = value
        self._update_callbacks()

    @property
    def speed(self) -> float:
        return self._speed

    @speed.setter
    def speed(self, value: float):
        value = _SPRING_PROPS["speed"].coerce(value)
        self._snapshot(self._clock())
        self._speed = value
        self._update_callbacks()

    @property
    def clock(self) -> Callable[[], float]:
        return self._clock

    @clock.setter
    def clock(self, value: Callable[[], float]):
        if not callable(value):
            raise InvalidParameterError(f"Clock must be callable, got {value!r}")
        self._snapshot(self._clock())
        self._clock = value
        self._time0 = value()
        self._update_callbacks()

    @property
    def kind(self) -> ValueKind:
        return self._kind

    value = position
    p = position
    v = velocity
    t = target
    d = damper
    s = speed
    type = kind

    # -------------------- FUNCTIONS --------------------

    def impulse(self, delta) -> None:
        """Add ``delta`` to the current velocity."""
        channels = expect(self._kind, delta, "impulse")
        _, velocity = self._snapshot(self._clock())
        self._velocity0 = tuple(v + c for v, c in zip(velocity, channels))
        self._update_callbacks()

    def time_skip(self, delta: float) -> None:
        """Jump the simulated state ``delta`` seconds ahead of the clock."""
        now = self._clock()
        position, velocity = self._channels_at(now + delta)
        self._position0 = position
        self._velocity0 = velocity
        self._time0 = now
        self._update_callbacks()

    def is_animating(self, epsilon: float | None = None):
        """Return ``(animating, value)``.

        ``value`` is the current position while the spring moves, and exactly
        the target once position and velocity are within ``epsilon`` of rest.
        """
        if epsilon is None:
            epsilon = settings.epsilon
        position, velocity = self._channels_at(self._clock())
        if self._codec.settled(position, velocity, self._target, epsilon):
            return False, self.target
        return True, self._codec.decode(position)

    def bind(self, label: str, callback: Callable) -> None:
        """Call ``callback(position, velocity)`` every tick while the spring moves."""
        if label in self._callbacks:
            print(f"[SS] Spring already had a bound callback for label {label!r}, overwriting...")
        self._callbacks[label] = callback
        if settings.debug:
            print(f"[SS] bind {label!r} on {self!r}")
        self._update_callbacks()

    def unbind(self, label: str) -> None:
        self._callbacks.pop(label, None)
        if settings.debug:
            print(f"[SS] unbind {label!r}, {len(self._callbacks)} left")

    @property
    def bound_labels(self) -> tuple:
        return tuple(self._callbacks)

    @property
    def observing(self) -> bool:
        return self._updating

    # -------------------- OBSERVERS --------------------

    def _update_callbacks(self) -> None:
        if self._callbacks and not self._updating:
            self._updating = True
            self._ticker.spawn(self._observe())

    def _emit(self, position, velocity) -> None:
        for callback in list(self._callbacks.values()):
            callback(_public(position), _public(velocity))

    def _observe(self):
        codec = self._codec
        try:
            while self._callbacks:
                position, velocity = self._channels_at(self._clock())
                if codec.settled(position, velocity, self._target, settings.epsilon):
                    # Final frame lands exactly on the target
                    self._emit(self.target, codec.decode(codec.zero))
                    return
                self._emit(codec.decode(position), codec.decode(velocity))
                yield
        finally:
            self._updating = False


__all__ = ["Spring"]
