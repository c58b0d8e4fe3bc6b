"""Tests for timer configuration validation and alert editing."""

from __future__ import annotations

import pytest

from meeetimer.timer.validation import (
    DEFAULT_SETTINGS,
    MAX_ALERTS,
    InvalidSettings,
    TimerSettings,
    default_threshold,
    preset,
    replace_threshold,
    validate,
    with_threshold,
    without_threshold,
)


# ═══════════════════════════════════════════════════════════════════════
#  validate()
# ═══════════════════════════════════════════════════════════════════════


class TestValidate:

    def test_drops_duplicate_out_of_range_and_zero(self):
        s = validate(60, [10, 10, 70, 0])
        assert s == TimerSettings(60, (10,))

    def test_sorts_descending(self):
        s = validate(900, [60, 600, 300])
        assert s.alert_thresholds == (600, 300, 60)

    def test_threshold_equal_to_duration_dropped(self):
        assert validate(300, [300, 120]).alert_thresholds == (120,)

    def test_negative_threshold_dropped(self):
        assert validate(300, [-5, 30]).alert_thresholds == (30,)

    def test_caps_at_three_first_come(self):
        s = validate(1000, [100, 200, 300, 900, 800])
        assert s.alert_thresholds == (300, 200, 100)

    def test_cap_counts_distinct_values(self):
        s = validate(1000, [100, 100, 200, 200, 300, 400])
        assert s.alert_thresholds == (300, 200, 100)

    def test_non_integer_thresholds_dropped(self):
        s = validate(100, [10, "20", 30.0, None, True])
        assert s.alert_thresholds == (10,)

    def test_no_thresholds(self):
        s = validate(45)
        assert s.total_duration_seconds == 45
        assert s.alert_thresholds == ()

    @pytest.mark.parametrize("duration", [0, -1, -600])
    def test_non_positive_duration_rejected(self, duration):
        with pytest.raises(InvalidSettings):
            validate(duration, [10])

    @pytest.mark.parametrize("duration", [1.5, "60", None])
    def test_non_integer_duration_rejected(self, duration):
        with pytest.raises(InvalidSettings):
            validate(duration, [])

    def test_invalid_settings_is_value_error(self):
        with pytest.raises(ValueError):
            validate(0)

    def test_one_second_duration_has_no_room_for_alerts(self):
        assert validate(1, [1, 0]).alert_thresholds == ()


class TestTimerSettingsInvariants:

    def test_direct_construction_accepts_canonical(self):
        s = TimerSettings(900, (600, 300, 60))
        assert s.alert_thresholds == (600, 300, 60)

    def test_list_is_stored_as_tuple(self):
        s = TimerSettings(900, [600])
        assert s.alert_thresholds == (600,)

    def test_rejects_ascending(self):
        with pytest.raises(InvalidSettings):
            TimerSettings(900, (60, 300))

    def test_rejects_duplicates(self):
        with pytest.raises(InvalidSettings):
            TimerSettings(900, (300, 300))

    def test_rejects_too_many(self):
        with pytest.raises(InvalidSettings):
            TimerSettings(900, (800, 600, 300, 60))

    def test_rejects_threshold_at_duration(self):
        with pytest.raises(InvalidSettings):
            TimerSettings(900, (900,))

    def test_is_frozen(self):
        s = TimerSettings(900)
        with pytest.raises(AttributeError):
            s.total_duration_seconds = 1


# ═══════════════════════════════════════════════════════════════════════
#  PRESETS
# ═══════════════════════════════════════════════════════════════════════


class TestPresets:

    def test_default_is_twenty_minutes(self):
        assert DEFAULT_SETTINGS.total_duration_seconds == 20 * 60
        assert DEFAULT_SETTINGS.alert_thresholds == (600, 300, 60)

    def test_ten_minute_preset_drops_ten_minute_alert(self):
        assert preset(10).alert_thresholds == (300, 60)

    def test_thirty_minute_preset(self):
        s = preset(30)
        assert s.total_duration_seconds == 1800
        assert s.alert_thresholds == (600, 300, 60)


# ═══════════════════════════════════════════════════════════════════════
#  ALERT EDITING
# ═══════════════════════════════════════════════════════════════════════


class TestAlertEditing:

    def test_first_default_is_halfway(self):
        s = validate(600)
        assert default_threshold(s) == 300
        assert with_threshold(s).alert_thresholds == (300,)

    def test_next_default_is_one_minute_past_furthest(self):
        s = validate(600, [120])
        assert with_threshold(s).alert_thresholds == (180, 120)

    def test_default_past_duration_is_dropped(self):
        s = validate(600, [590])
        assert with_threshold(s).alert_thresholds == (590,)

    def test_add_is_noop_at_cap(self):
        s = validate(900, [600, 300, 60])
        assert len(s.alert_thresholds) == MAX_ALERTS
        assert with_threshold(s, 30) is s

    def test_add_explicit_value(self):
        s = with_threshold(validate(900, [600]), 120)
        assert s.alert_thresholds == (600, 120)

    def test_add_duplicate_is_ignored(self):
        s = with_threshold(validate(900, [600]), 600)
        assert s.alert_thresholds == (600,)

    def test_remove(self):
        s = without_threshold(validate(900, [600, 300]), 600)
        assert s.alert_thresholds == (300,)

    def test_remove_missing_value(self):
        s = without_threshold(validate(900, [600]), 42)
        assert s.alert_thresholds == (600,)

    def test_replace_resorts(self):
        s = replace_threshold(validate(900, [600, 300]), 300, 700)
        assert s.alert_thresholds == (700, 600)

    def test_replace_out_of_range_removes(self):
        s = replace_threshold(validate(900, [600, 300]), 300, 1000)
        assert s.alert_thresholds == (600,)
