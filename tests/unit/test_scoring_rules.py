"""Unit tests for the per-archetype scoring rules."""

import pytest

from checkin_scoring.core.errors import ConfigurationError, InvalidRawValueError
from checkin_scoring.domain.checkin import CheckinValue
from checkin_scoring.domain.task_config import (
    BinaryRule,
    DiminishingRule,
    LinearRule,
    ResolvedTaskConfig,
    ScoringMode,
    ThresholdRule,
    Tier,
    TieredRule,
    TimeAfterRule,
    TimeBeforeRule,
)
from checkin_scoring.domain.template import ScoringArchetype
from checkin_scoring.services import scoring_rules


def _config(rule, *, mode=ScoringMode.DETAILED, binary_points=20, commitment=None, timer_minutes=None):
    return ResolvedTaskConfig(
        archetype=ScoringArchetype(rule.archetype),
        scoring_mode=mode,
        rule=rule,
        binary_points=binary_points,
        commitment=commitment,
        timer_duration_minutes=timer_minutes,
    )


def _score(config, **value):
    return scoring_rules.score(archetype=config.archetype, config=config, raw_value=CheckinValue(**value))


STEPS_RULE = LinearRule(unit_size=1000, points_per_unit=1, daily_cap=10)
WORKOUT_RULE = ThresholdRule(threshold=30, points_at_threshold=50)
WAKE_RULE = TimeAfterRule(target_time="06:30", points_on_time=50, penalty_per_minute=1)
BEDTIME_RULE = TimeBeforeRule(target_time="22:30", points_on_time=50, penalty_per_minute=1)
SCREEN_RULE = TieredRule(
    tiers=(
        Tier(min=0, max=60, points=5),
        Tier(min=60, max=120, points=3),
        Tier(min=120, max=180, points=0),
        Tier(min=180, max=None, points=-3),
    )
)


@pytest.mark.unit
class TestBinary:
    """Tests for binary_yesno scoring."""

    def test_completed_awards_points(self):
        """Test a yes awards the configured points."""
        outcome = _score(_config(BinaryRule(points=10)), boolean_value=True)

        assert outcome.points == 10
        assert outcome.is_complete is True
        assert outcome.rule == "binary_yesno"

    def test_not_completed_awards_nothing(self):
        """Test a no awards zero and is incomplete."""
        outcome = _score(_config(BinaryRule(points=10)), boolean_value=False)

        assert outcome.points == 0
        assert outcome.is_complete is False

    def test_numeric_value_is_rejected(self):
        """Test a numeric value for a binary task raises InvalidRawValueError."""
        with pytest.raises(InvalidRawValueError):
            _score(_config(BinaryRule(points=10)), numeric_value=1)


@pytest.mark.unit
class TestLinear:
    """Tests for linear_per_unit scoring."""

    def test_partial_progress(self):
        """Test 8420 steps earns 8.42 points and is not complete."""
        outcome = _score(_config(STEPS_RULE), numeric_value=8420)

        assert outcome.points == pytest.approx(8.42)
        assert outcome.is_complete is False
        assert outcome.rule == "linear_per_unit"
        assert outcome.derived_values["units"] == pytest.approx(8.42)

    def test_capped_at_daily_cap(self):
        """Test points stop at daily_cap and the uncapped value is kept for diagnostics."""
        outcome = _score(_config(STEPS_RULE), numeric_value=15000)

        assert outcome.points == 10
        assert outcome.points_before_cap == pytest.approx(15)
        assert outcome.is_complete is True
        assert outcome.rule == "linear_per_unit:capped"

    def test_exactly_at_cap_is_complete(self):
        """Test reaching the cap exactly completes the task without the capped branch."""
        outcome = _score(_config(STEPS_RULE), numeric_value=10000)

        assert outcome.is_complete is True
        assert outcome.rule == "linear_per_unit"

    def test_monotonic_and_bounded(self):
        """Test points never decrease with more progress and never exceed daily_cap."""
        previous = -1.0
        for steps in range(0, 30000, 750):
            points = _score(_config(STEPS_RULE), numeric_value=steps).points
            assert points >= previous
            assert points <= STEPS_RULE.daily_cap
            previous = points

    def test_duration_value_is_accepted(self):
        """Test duration_minutes feeds linear tasks measured in minutes."""
        rule = LinearRule(unit_size=5, points_per_unit=0.2, daily_cap=5)
        outcome = _score(_config(rule), duration_minutes=25)

        assert outcome.points == pytest.approx(1.0)


@pytest.mark.unit
class TestThreshold:
    """Tests for threshold scoring."""

    def test_below_threshold(self):
        """Test 20 minutes against a 30 minute threshold earns nothing."""
        outcome = _score(_config(WORKOUT_RULE), numeric_value=20)

        assert outcome.points == 0
        assert outcome.is_complete is False
        assert outcome.rule == "threshold:below"
        assert outcome.derived_values["remaining"] == 10

    def test_at_threshold(self):
        """Test meeting the threshold earns points_at_threshold."""
        outcome = _score(_config(WORKOUT_RULE), numeric_value=30)

        assert outcome.points == 50
        assert outcome.is_complete is True
        assert outcome.rule == "threshold:met"

    def test_bonus_is_capped(self):
        """Test bonus per unit beyond the threshold stops at max_bonus."""
        rule = ThresholdRule(threshold=30, points_at_threshold=50, bonus_per_unit=1, max_bonus=20)

        assert _score(_config(rule), duration_minutes=40).points == 60
        capped = _score(_config(rule), duration_minutes=90)
        assert capped.points == 70
        assert capped.points_before_cap == 110
        assert capped.rule == "threshold:bonus"

    @pytest.mark.parametrize("value", [0, 10, 29.9, 30, 31, 100])
    def test_completion_matches_threshold(self, value):
        """Test completion is exactly value >= threshold and incomplete scores zero."""
        outcome = _score(_config(WORKOUT_RULE), numeric_value=value)

        assert outcome.is_complete == (value >= WORKOUT_RULE.threshold)
        if not outcome.is_complete:
            assert outcome.points == 0


@pytest.mark.unit
class TestTime:
    """Tests for time_before and time_after scoring."""

    def test_wake_late_penalty(self):
        """Test waking at 07:00 for a 06:30 target loses 30 points."""
        outcome = _score(_config(WAKE_RULE), time_value="07:00")

        assert outcome.points == 20
        assert outcome.is_complete is False
        assert outcome.rule == "time_after:late_penalty"
        assert outcome.derived_values["minutes_late"] == 30

    def test_wake_early_is_full_credit(self):
        """Test waking before the target earns full points with no earliness penalty."""
        outcome = _score(_config(WAKE_RULE), time_value="05:45")

        assert outcome.points == 50
        assert outcome.is_complete is True
        assert outcome.rule == "time_after:on_time"

    def test_penalty_floors_at_zero(self):
        """Test a very late wake time scores zero, never negative."""
        outcome = _score(_config(WAKE_RULE), time_value="11:00")

        assert outcome.points == 0
        assert outcome.points_before_cap == -220
        assert outcome.is_complete is False

    def test_late_without_penalty_scores_zero(self):
        """Test lateness without a penalty configured earns nothing."""
        rule = TimeAfterRule(target_time="06:30", points_on_time=50)
        outcome = _score(_config(rule), time_value="06:31")

        assert outcome.points == 0
        assert outcome.rule == "time_after:late"

    def test_bedtime_on_time(self):
        """Test being in bed exactly at the target is on time."""
        outcome = _score(_config(BEDTIME_RULE), time_value="22:30")

        assert outcome.points == 50
        assert outcome.is_complete is True

    def test_bedtime_after_midnight_is_late(self):
        """Test 00:30 is two hours late for a 22:30 bedtime."""
        outcome = _score(_config(BEDTIME_RULE), time_value="00:30")

        assert outcome.derived_values["minutes_late"] == 120
        assert outcome.points == 0
        assert outcome.is_complete is False

    def test_bedtime_slightly_late(self):
        """Test 22:40 loses ten points."""
        outcome = _score(_config(BEDTIME_RULE), time_value="22:40")

        assert outcome.points == 40
        assert outcome.rule == "time_before:late_penalty"

    def test_mirror_schedules_agree_within_the_day(self):
        """Test both time archetypes give the same schedule when the day does not wrap."""
        before = _config(TimeBeforeRule(target_time="12:00", points_on_time=60, penalty_per_minute=2))
        after = _config(TimeAfterRule(target_time="12:00", points_on_time=60, penalty_per_minute=2))
        for minute in range(0, 60, 5):
            value = f"{11 + minute // 30:02d}:{(minute * 2) % 60:02d}"
            assert _score(before, time_value=value).points == _score(after, time_value=value).points

    def test_invalid_time_raises(self):
        """Test a malformed time value raises InvalidRawValueError."""
        with pytest.raises(InvalidRawValueError):
            _score(_config(WAKE_RULE), time_value="7am")


@pytest.mark.unit
class TestTiered:
    """Tests for tiered scoring."""

    def test_middle_tier(self):
        """Test 90 minutes of screen time lands in the 60-120 tier."""
        outcome = _score(_config(SCREEN_RULE), numeric_value=90)

        assert outcome.points == 3
        assert outcome.is_complete is True
        assert outcome.rule == "tiered:1"

    def test_tier_lower_bound_is_inclusive(self):
        """Test a value equal to a tier's min belongs to that tier."""
        assert _score(_config(SCREEN_RULE), numeric_value=60).points == 3

    def test_open_ended_tier_can_be_negative(self):
        """Test the unbounded top tier applies its negative points."""
        outcome = _score(_config(SCREEN_RULE), numeric_value=400)

        assert outcome.points == -3
        assert outcome.is_complete is False

    def test_zero_point_tier_is_not_complete(self):
        """Test a matched tier worth zero points does not complete the task."""
        assert _score(_config(SCREEN_RULE), numeric_value=150).is_complete is False

    def test_no_match_scores_zero(self):
        """Test a value outside every tier scores exactly zero and is incomplete."""
        rule = TieredRule(tiers=(Tier(min=10, max=20, points=5),))
        outcome = _score(_config(rule), numeric_value=5)

        assert outcome.points == 0
        assert outcome.is_complete is False
        assert outcome.rule == "tiered:no_match"

    def test_first_matching_tier_wins(self):
        """Test overlapping tiers resolve in declaration order."""
        rule = TieredRule(tiers=(Tier(min=0, max=100, points=1), Tier(min=50, max=None, points=9)))

        assert _score(_config(rule), numeric_value=75).points == 1


@pytest.mark.unit
class TestDiminishing:
    """Tests for diminishing-returns scoring."""

    RULE = DiminishingRule(threshold=60, points_at_threshold=30, max_points=60)

    def test_below_threshold(self):
        """Test short sessions earn nothing."""
        outcome = _score(_config(self.RULE), duration_minutes=45)

        assert outcome.points == 0
        assert outcome.is_complete is False

    def test_at_threshold(self):
        """Test the threshold earns points_at_threshold."""
        outcome = _score(_config(self.RULE), duration_minutes=60)

        assert outcome.points == pytest.approx(30)
        assert outcome.is_complete is True

    def test_square_root_growth(self):
        """Test four times the threshold earns twice the points."""
        assert _score(_config(self.RULE), duration_minutes=240).points == pytest.approx(60)

    def test_capped_at_max_points(self):
        """Test growth stops at max_points."""
        outcome = _score(_config(self.RULE), duration_minutes=600)

        assert outcome.points == 60
        assert outcome.rule == "diminishing:capped"

    def test_each_extra_hour_is_worth_less(self):
        """Test marginal points shrink as the session grows."""
        points = [_score(_config(self.RULE), duration_minutes=m).points for m in (60, 120, 180)]

        assert points[1] - points[0] > points[2] - points[1]


@pytest.mark.unit
class TestBinaryMode:
    """Tests for the binary scoring mode override."""

    def test_binary_mode_ignores_archetype_rule(self):
        """Test binary mode awards binary_points once the commitment is met."""
        config = _config(WORKOUT_RULE, mode=ScoringMode.BINARY, binary_points=25, commitment=30)

        outcome = _score(config, numeric_value=45)

        assert outcome.points == 25
        assert outcome.is_complete is True
        assert outcome.rule == "binary_mode"

    def test_binary_mode_commitment_not_met(self):
        """Test binary mode awards nothing short of the commitment."""
        config = _config(WORKOUT_RULE, mode=ScoringMode.BINARY, binary_points=25, commitment=30)

        outcome = _score(config, numeric_value=10)

        assert outcome.points == 0
        assert outcome.is_complete is False

    def test_binary_mode_time_task(self):
        """Test a time task in binary mode completes when on time."""
        config = _config(WAKE_RULE, mode=ScoringMode.BINARY, binary_points=15)

        assert _score(config, time_value="06:00").points == 15
        assert _score(config, time_value="06:45").points == 0

    def test_binary_mode_boolean(self):
        """Test a plain yes is honoured in binary mode."""
        config = _config(STEPS_RULE, mode=ScoringMode.BINARY, binary_points=20, commitment=10000)

        assert _score(config, boolean_value=True).points == 20


@pytest.mark.unit
class TestScoreDispatch:
    """Tests for the score entry point."""

    def test_empty_checkin_scores_zero(self):
        """Test a check-in with no value field scores zero without error."""
        outcome = _score(_config(WAKE_RULE))

        assert outcome.points == 0
        assert outcome.is_complete is False
        assert outcome.rule == "no_value"

    def test_archetype_mismatch_raises(self):
        """Test scoring a config under a different archetype is a configuration error."""
        config = _config(STEPS_RULE)

        with pytest.raises(ConfigurationError):
            scoring_rules.score(
                archetype=ScoringArchetype.THRESHOLD, config=config, raw_value=CheckinValue(numeric_value=1)
            )

    def test_timer_duration_replaces_typed_value(self):
        """Test a timer-measured duration overrides the typed duration."""
        config = _config(WORKOUT_RULE, timer_minutes=35)

        assert _score(config, duration_minutes=5).points == 50

    def test_score_is_deterministic(self):
        """Test identical inputs produce identical outcomes."""
        config = _config(SCREEN_RULE)

        assert _score(config, numeric_value=90) == _score(config, numeric_value=90)
