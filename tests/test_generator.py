"""
Mock generator tests.

Seeded numpy generators throughout, no IO.
"""
from datetime import datetime, timezone

import numpy as np
import pytest
from pydantic import ValidationError

from moveid import bands, generator
from moveid.generator import (
    FALLBACK_SCORE,
    basic_analysis,
    describe_upload,
    generate_analysis,
    overall_score,
    recommendations_for,
    risk_factors_for,
)

LABELS = ['agachamento', 'squat', 'deadlift', 'levantamento_terra', 'flexao',
          'caminhada', 'default', 'zumba', '', None]

SQUAT_JOINTS = {'right_knee', 'left_knee', 'right_hip', 'left_hip',
                'right_ankle', 'left_ankle', 'trunk'}


# ===================================================================
#  Ranges
# ===================================================================

class TestRanges:
    @pytest.mark.parametrize('label', LABELS)
    def test_scores_and_confidence_in_range(self, label):
        rng = np.random.default_rng(7)
        for _ in range(50):
            report = generate_analysis(label, rng=rng)
            assert 0 <= report.score <= 100
            assert 0 <= report.confidence_score <= 1
            assert bands.CONFIDENCE_BAND[0] <= report.confidence_score <= bands.CONFIDENCE_BAND[1]
            for phase in report.movement_phases:
                assert 0 <= phase.quality_score <= 100

    def test_squat_joint_angles_within_bands(self):
        """Portuguese label maps to the squat table with seven joints."""
        declared = bands.EXERCISE_BANDS['squat']['joint_angles']
        rng = np.random.default_rng(3)
        for _ in range(100):
            report = generate_analysis('agachamento', rng=rng)
            angles = report.biomechanics.joint_angles
            assert set(angles) == SQUAT_JOINTS
            for joint, value in angles.items():
                low, high = declared[joint]
                assert low <= value <= high
            assert report.exercise_type == 'squat'
            assert report.camera_angle == 'lateral'

    def test_sub_scores_within_bands(self):
        declared = bands.EXERCISE_BANDS['deadlift']['scores']
        rng = np.random.default_rng(5)
        for _ in range(100):
            report = generate_analysis('deadlift', rng=rng)
            assert set(report.sub_scores) == {'base', 'technique', 'safety'}
            for name, value in report.sub_scores.items():
                low, high = declared[name]
                assert low <= value <= high

    def test_overall_score_is_rounded_mean(self):
        assert overall_score({'base': 80, 'technique': 70, 'safety': 91}) == 80
        assert overall_score({'base': 100, 'technique': 100, 'safety': 100}) == 100


# ===================================================================
#  Labels
# ===================================================================

class TestLabels:
    @pytest.mark.parametrize('label', ['zumba', '', None, 'SOMETHING ELSE'])
    def test_unknown_label_uses_default_shape(self, label):
        unknown = generate_analysis(label, rng=np.random.default_rng(1))
        default = generate_analysis('default', rng=np.random.default_rng(1))
        assert unknown == default
        assert unknown.exercise_type == bands.DEFAULT_EXERCISE

    @pytest.mark.parametrize('label,expected', [
        ('Agachamento', 'squat'),
        (' squat ', 'squat'),
        ('levantamento terra', 'deadlift'),
        ('flexão', 'pushup'),
        ('push-up', 'pushup'),
        ('walking', 'walk'),
        ('yoga', 'default'),
    ])
    def test_resolve_exercise(self, label, expected):
        assert bands.resolve_exercise(label) == expected


# ===================================================================
#  Risk factors and recommendations
# ===================================================================

class TestRiskFactors:
    @pytest.mark.parametrize('exercise', list(bands.EXERCISE_BANDS))
    def test_risk_count_never_grows_with_score(self, exercise):
        counts = [len(risk_factors_for(exercise, score)) for score in range(101)]
        assert all(a >= b for a, b in zip(counts, counts[1:]))

    def test_monotonic_over_generated_reports(self):
        rng = np.random.default_rng(11)
        reports = [generate_analysis('squat', rng=rng) for _ in range(300)]
        for a in reports:
            for b in reports:
                if a.score > b.score:
                    assert len(a.biomechanics.risk_factors) <= len(b.biomechanics.risk_factors)

    def test_thresholds(self):
        assert risk_factors_for('squat', 90) == []
        assert risk_factors_for('squat', 80) == []
        assert len(risk_factors_for('squat', 79)) == 1
        low = risk_factors_for('squat', 55)
        assert 'Compensatory movement pattern detected in the lower limbs' in low
        assert 'Severe loss of alignment: high injury risk under load' in low
        assert 'Severe loss of alignment: high injury risk under load' not in risk_factors_for('squat', 65)

    def test_recommendations_end_with_closing_advice(self):
        recs = recommendations_for('squat', 70)
        assert recs[-2:] == bands.CLOSING_RECOMMENDATIONS
        assert 'Work on ankle mobility to improve squat depth' in recs

    def test_squat_advice_only_below_threshold(self):
        recs = recommendations_for('squat', 90)
        assert 'Work on ankle mobility to improve squat depth' not in recs

    def test_walk_advice_always_present(self):
        assert 'Focus on regular, symmetric steps' in recommendations_for('walk', 100)


# ===================================================================
#  Report structure
# ===================================================================

class TestReportStructure:
    def test_phases_in_time_order(self, squat_report):
        stamps = [p.timestamp_percent for p in squat_report.movement_phases]
        assert stamps == sorted(stamps)
        assert [p.phase for p in squat_report.movement_phases] == ['Setup', 'Descent', 'Bottom', 'Ascent']

    def test_muscles_unique(self, squat_report):
        muscles = squat_report.biomechanics.muscle_activation
        assert len(muscles) == len(set(muscles))

    def test_report_is_frozen(self, squat_report):
        with pytest.raises(ValidationError):
            squat_report.score = 10

    def test_same_seed_same_report(self):
        a = generate_analysis('walk', rng=np.random.default_rng(99))
        b = generate_analysis('walk', rng=np.random.default_rng(99))
        assert a == b

    def test_movement_quality_follows_score(self):
        rng = np.random.default_rng(21)
        for _ in range(50):
            report = generate_analysis('pushup', rng=rng)
            band = bands.score_band(report.score)
            assert report.biomechanics.movement_quality == bands.MOVEMENT_QUALITY_BY_BAND[band]


# ===================================================================
#  Fallback
# ===================================================================

class TestFallback:
    def test_failure_returns_basic_analysis(self, monkeypatch):
        def broken(exercise, rng):
            raise KeyError(exercise)

        monkeypatch.setattr(generator, '_build_report', broken)
        report = generate_analysis('squat', rng=np.random.default_rng(0))
        assert report.score == FALLBACK_SCORE
        assert report.movement_phases == ()
        assert report.biomechanics.risk_factors == ()
        assert report.biomechanics.muscle_activation == ('primary muscles',)

    def test_basic_analysis_mentions_label(self):
        report = basic_analysis('agachamento')
        assert 'agachamento' in report.description
        assert report.exercise_type == 'squat'


# ===================================================================
#  Upload metadata
# ===================================================================

class TestDescribeUpload:
    def test_echoes_upload(self):
        now = datetime(2025, 8, 29, 10, 30, tzinfo=timezone.utc)
        meta = describe_upload('squat.mp4', 1234, 'agachamento', rng=np.random.default_rng(2), now=now)
        assert meta.file_name == 'squat.mp4'
        assert meta.file_size == 1234
        assert meta.exercise_type == 'agachamento'
        assert meta.analysis_timestamp == now.isoformat()
        assert bands.PROCESSING_TIME_BAND[0] <= meta.processing_time <= bands.PROCESSING_TIME_BAND[1]


# ===================================================================
#  Immutability
# ===================================================================

class TestImmutability:
    def test_sequences_are_tuples(self, squat_report):
        with pytest.raises(AttributeError):
            squat_report.recommendations.append('Skip the warm-up')
        with pytest.raises(AttributeError):
            squat_report.biomechanics.risk_factors.append('made up')
        assert isinstance(squat_report.movement_phases, tuple)

    def test_non_finite_numbers_rejected(self, squat_report):
        data = squat_report.model_dump()
        data['biomechanics']['joint_angles'] = {'knee': float('nan')}
        with pytest.raises(ValidationError):
            type(squat_report).model_validate(data)

    def test_camera_angles_are_declared(self):
        angles = {table['camera_angle'] for table in bands.EXERCISE_BANDS.values()}
        assert angles <= {'lateral', 'oblique'}


# ===================================================================
#  Postural, joint, muscle, gait and phase blocks
# ===================================================================

class TestDetailBlocks:
    def test_postural_deviations_never_shrink_as_score_drops(self):
        rng = np.random.default_rng(4)
        counts = [len(generator.postural_analysis_for(rng, score).identified_deviations)
                  for score in range(101)]
        assert all(a >= b for a, b in zip(counts, counts[1:]))
        assert counts[100] == 0
        assert counts[50] == len(bands.POSTURAL_DEVIATIONS)

    def test_postural_block_follows_score(self, squat_report):
        postural = squat_report.postural_analysis
        assert postural.overall_posture_score == squat_report.score
        assert postural.alignment_quality == bands.alignment_quality(squat_report.score)
        low, high = bands.POSTURAL_STABILITY_BAND
        assert low <= postural.postural_stability <= high

    @pytest.mark.parametrize('score,expected', [
        (95, 'Excellent'), (80, 'Excellent'), (79, 'Good'), (60, 'Fair'), (12, 'Needs correction'),
    ])
    def test_alignment_quality(self, score, expected):
        assert bands.alignment_quality(score) == expected

    def test_phase_feedback_copies_sub_scores(self, squat_report):
        feedback = squat_report.phase_feedback
        assert set(feedback) == {'preparation', 'execution', 'finish'}
        assert feedback['preparation'].metrics['stability_score'] == squat_report.sub_scores['safety']
        assert feedback['execution'].metrics['technique_score'] == squat_report.sub_scores['technique']
        assert feedback['execution'].metrics['control_score'] == squat_report.sub_scores['base']
        low, high = bands.PHASE_FEEDBACK['finish']['metrics']['control_score']
        assert low <= feedback['finish'].metrics['control_score'] <= high
        assert all(block.feedback for block in feedback.values())

    def test_joint_angles_ordered(self):
        rng = np.random.default_rng(8)
        for _ in range(30):
            report = generate_analysis('deadlift', rng=rng)
            assert set(report.joint_analysis) == {'primary', 'secondary', 'stabilizers'}
            for joint in report.joint_analysis['primary'].values():
                angles = joint.measured_angles
                assert angles['min'] <= angles['average'] <= angles['max']

    def test_muscle_analysis_by_exercise(self, squat_report):
        assert set(squat_report.muscle_analysis) == {'primary', 'secondary', 'stabilizers'}
        default = generate_analysis('default', rng=np.random.default_rng(1))
        assert default.muscle_analysis == {}

    @pytest.mark.parametrize('label', ['squat', 'deadlift', 'pushup', 'default'])
    def test_gait_only_for_walking(self, label):
        assert generate_analysis(label, rng=np.random.default_rng(3)).gait_analysis is None

    def test_walk_has_gait_block(self):
        report = generate_analysis('caminhada', rng=np.random.default_rng(3))
        gait = report.gait_analysis
        assert gait.gait_phases == tuple(bands.GAIT_PHASES)
        for block, table in bands.GAIT_BANDS.items():
            values = getattr(gait, block)
            for name, (low, high) in table.items():
                assert low <= values[name] <= high

    def test_basic_analysis_has_no_detail_blocks(self):
        report = basic_analysis('squat')
        assert report.postural_analysis is None
        assert report.gait_analysis is None
        assert report.phase_feedback == {}
