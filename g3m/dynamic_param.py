"""Time-interpolated ("dynamic") curve parameters.

A DynamicParam moves linearly from its last computed value toward a target
over a bounded window, so weights can be retargeted without a discontinuity
in the curve. Instances are immutable: ``set`` returns a new snapshot, which
lets a pool record swap its parameters in a single assignment.
"""

from __future__ import annotations

from dataclasses import dataclass

from g3m.math.fixed_point import div_trunc


@dataclass(frozen=True)
class DynamicParam:
    """Linearly interpolated scalar.

    Attributes:
        last_computed_value: Value at ``last_update_at``
        update_end: Time at which the target is reached
        update_per_second: Signed change per unit of time
        last_update_at: Time of the last ``set``
        target_value: Value reached at ``update_end``; interpolation never
            passes it
    """

    last_computed_value: int
    update_end: int = 0
    update_per_second: int = 0
    last_update_at: int = 0
    target_value: int | None = None

    @classmethod
    def constant(cls, value: int, now: int = 0) -> DynamicParam:
        """Create a parameter with no pending update."""
        return cls(
            last_computed_value=value,
            update_end=now,
            update_per_second=0,
            last_update_at=now,
            target_value=value,
        )

    @property
    def target(self) -> int:
        return self.last_computed_value if self.target_value is None else self.target_value

    def actualized(self, now: int) -> int:
        """Value of the parameter at time ``now``.

        Equals ``last_computed_value`` for ``now <= last_update_at`` and the
        target for ``now >= update_end``.
        """
        if now >= self.update_end:
            if self.target_value is not None:
                return self.target_value
        elapsed = min(now, self.update_end) - min(now, self.last_update_at)
        if elapsed <= 0:
            return self.last_computed_value
        value = self.last_computed_value + self.update_per_second * elapsed
        target = self.target
        if self.update_per_second > 0:
            return min(value, target)
        if self.update_per_second < 0:
            return max(value, target)
        return value

    def set(self, target: int, update_end: int, now: int) -> DynamicParam:
        """Retarget toward ``target``, reached at ``update_end``.

        The base is rebased to the value actualized at ``now``. An
        ``update_end`` at or before ``now`` applies the target immediately.
        """
        current = self.actualized(now)
        if update_end <= now:
            return DynamicParam(
                last_computed_value=target,
                update_end=now,
                update_per_second=0,
                last_update_at=now,
                target_value=target,
            )
        rate = div_trunc(target - current, update_end - now)
        return DynamicParam(
            last_computed_value=current,
            update_end=update_end,
            update_per_second=rate,
            last_update_at=now,
            target_value=target,
        )

    def is_updating(self, now: int) -> bool:
        return self.last_update_at <= now < self.update_end
