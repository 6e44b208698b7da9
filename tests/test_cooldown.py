"""
Tests for the Per-Hand Cooldown Gate
======================================
"""

import pytest

from inertia_scanner.recognition.cooldown import CooldownGate, RecognitionConfig


class TestRecognitionConfig:
    """Test suite for RecognitionConfig."""

    def test_default_values(self):
        config = RecognitionConfig()

        assert config.cooldown == 0.4
        assert config.num_slots == 2
        assert config.slot_by_handedness is False

    def test_from_dict_partial(self):
        config = RecognitionConfig.from_dict({"cooldown": 1.5})

        assert config.cooldown == 1.5
        assert config.num_slots == 2


class TestCooldownGate:
    """Test suite for CooldownGate."""

    @pytest.fixture
    def gate(self):
        return CooldownGate(RecognitionConfig(cooldown=0.4, num_slots=2))

    def test_first_trigger_fires_immediately(self, gate):
        """A slot that never fired is always ready."""
        assert gate.try_trigger(0, True, now=0.0) is True
        assert gate.last_fired(0) == 0.0

    def test_cooldown_scenario(self, gate):
        """Fires at 0s, blocked at 50ms, fires again at 450ms."""
        assert gate.try_trigger(0, True, now=0.0)
        assert not gate.try_trigger(0, True, now=0.05)
        assert gate.try_trigger(0, True, now=0.45)

    def test_inactive_never_fires(self, gate):
        """No gesture, no trigger, and no timestamp recorded."""
        assert gate.try_trigger(0, False, now=5.0) is False
        assert gate.last_fired(0) is None

    def test_exact_cooldown_does_not_fire(self):
        """Elapsed time must strictly exceed the cooldown."""
        gate = CooldownGate(RecognitionConfig(cooldown=0.5))
        gate.try_trigger(0, True, now=1.0)

        assert gate.try_trigger(0, True, now=1.5) is False
        assert gate.try_trigger(0, True, now=1.5001) is True

    def test_held_gesture_refires_without_release(self, gate):
        """Holding the pose for 2s at 60fps fires roughly every cooldown."""
        fired = []
        for frame in range(121):
            now = frame / 60.0
            if gate.try_trigger(0, True, now):
                fired.append(now)

        assert fired[0] == 0.0
        assert len(fired) == 5
        gaps = [b - a for a, b in zip(fired, fired[1:])]
        assert all(gap > 0.4 for gap in gaps)
        assert all(gap <= 0.4 + 1 / 60.0 + 1e-9 for gap in gaps)

    def test_slots_are_independent(self, gate):
        """One hand's cooldown does not throttle the other."""
        assert gate.try_trigger(0, True, now=0.0)
        assert gate.try_trigger(1, True, now=0.1)
        assert not gate.try_trigger(0, True, now=0.2)
        assert not gate.try_trigger(1, True, now=0.3)

    def test_out_of_range_slot(self, gate):
        """Hands beyond the configured slots never fire."""
        assert gate.try_trigger(2, True, now=0.0) is False
        assert gate.try_trigger(-1, True, now=0.0) is False

    def test_remaining(self, gate):
        assert gate.remaining(0, now=10.0) == 0.0
        gate.try_trigger(0, True, now=10.0)
        assert gate.remaining(0, now=10.1) == pytest.approx(0.3)
        assert gate.remaining(0, now=11.0) == 0.0

    def test_reset(self, gate):
        gate.try_trigger(0, True, now=0.0)
        gate.reset()

        assert gate.last_fired(0) is None
        assert gate.try_trigger(0, True, now=0.01)

    @pytest.mark.parametrize("kwargs", [{"cooldown": 0}, {"cooldown": -1.0}, {"num_slots": 0}])
    def test_invalid_config(self, kwargs):
        with pytest.raises(ValueError):
            CooldownGate(RecognitionConfig(**kwargs))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
