"""Band audit over sampled reports."""
import pandas as pd
import pytest

from moveid import bands
from moveid.audit import band_violations, declared_bands, sample_reports, summarize


@pytest.mark.parametrize('exercise', ['squat', 'deadlift', 'pushup', 'walk', 'default'])
def test_no_values_out_of_band(exercise):
    frame = sample_reports(exercise, samples=150, seed=4)
    assert len(frame) == 150
    assert band_violations(frame, exercise) == []


def test_risk_count_does_not_rise_with_score():
    frame = sample_reports('squat', samples=300, seed=12)
    worst_by_score = frame.groupby('score')['risk_count'].max().sort_index()
    assert worst_by_score.is_monotonic_decreasing


def test_summary_columns():
    frame = sample_reports('walk', samples=40, seed=1)
    summary = summarize(frame)
    assert list(summary.columns) == ['mean', 'std', 'min', 'max']
    for column in ('score', 'confidence_score', 'step_length_cm', 'right_knee'):
        assert column in summary.index
    assert summary.loc['score', 'min'] >= 0
    assert summary.loc['score', 'max'] <= 100


def test_declared_bands_follow_aliases():
    declared = declared_bands('agachamento')
    assert declared['right_knee'] == bands.EXERCISE_BANDS['squat']['joint_angles']['right_knee']
    assert declared['confidence_score'] == bands.CONFIDENCE_BAND


def test_violations_reported():
    frame = pd.DataFrame({'score': [50, 120], 'right_knee': [100.0, 10.0]})
    violations = band_violations(frame, 'squat')
    assert ('score', 120, (0, 100)) in violations
    assert ('right_knee', 10.0, (85.0, 125.0)) in violations
    assert len(violations) == 2
