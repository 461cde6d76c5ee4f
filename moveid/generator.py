"""
Mock analysis generator.

Builds a plausible AnalysisReport for an exercise label without looking at
the submitted media. Every value is drawn uniformly from the bands in
moveid.bands; warnings and advice are driven by score thresholds so that
worse scores always come with at least as many risk factors.
"""
import logging
from datetime import datetime, timezone

import numpy as np

from moveid import bands
from moveid.models import (
    AnalysisMetadata,
    AnalysisReport,
    BiomechanicsBlock,
    GaitAnalysis,
    JointAssessment,
    MuscleActivity,
    PhaseFeedback,
    PhaseResult,
    PosturalAnalysis,
    PosturalDeviation,
)

logger = logging.getLogger(__name__)

FALLBACK_SCORE = 75
FALLBACK_CONFIDENCE = 0.75


def _draw(rng, band, decimals=1):
    low, high = band
    return round(float(rng.uniform(low, high)), decimals)


def _draw_table(rng, table, decimals=1):
    return {name: _draw(rng, band, decimals) for name, band in table.items()}


def _clamp(value, low=0, high=100):
    return max(low, min(high, value))


def draw_sub_scores(rng, table):
    """Draw the base, technique and safety scores for one report."""
    return {name: int(round(rng.uniform(*band))) for name, band in table['scores'].items()}


def overall_score(sub_scores):
    """Blend the sub-scores into the overall 0-100 score."""
    return int(_clamp(round(float(np.mean(list(sub_scores.values()))))))


def risk_factors_for(exercise, score):
    """
    Warnings triggered by the overall score.

    Each rule fires when score < threshold, so the number of warnings never
    grows as the score increases.
    """
    table = bands.EXERCISE_BANDS[exercise]
    rules = bands.RISK_RULES + table['risk_rules']
    return [warning for threshold, warning in rules if score < threshold]


def recommendations_for(exercise, score):
    table = bands.EXERCISE_BANDS[exercise]
    recommendations = list(bands.ADVICE_BY_BAND[bands.score_band(score)])
    if score < table['advice_below']:
        recommendations.extend(table['advice'])
    recommendations.extend(bands.CLOSING_RECOMMENDATIONS)
    return recommendations


def describe(exercise, score, sub_scores):
    name = bands.DISPLAY_NAMES[exercise]
    return (
        f"Complete biomechanical analysis of the {name}. "
        f"{bands.DESCRIPTION_BY_BAND[bands.score_band(score)]} "
        f"Technique scored {sub_scores.get('technique', score)}/100 "
        f"and safety {sub_scores.get('safety', score)}/100."
    )


def build_phases(rng, table, score):
    phases = []
    for name, timestamp, text in table['phases']:
        quality = _clamp(int(round(score + rng.uniform(*bands.PHASE_QUALITY_JITTER))))
        phases.append(PhaseResult(
            phase=name,
            timestamp_percent=timestamp,
            analysis=text,
            quality_score=quality,
        ))
    return phases


def postural_analysis_for(rng, score):
    """Deviations by score threshold, so lower scores never report fewer of them."""
    deviations = [PosturalDeviation(**deviation)
                  for threshold, deviation in bands.POSTURAL_DEVIATIONS if score < threshold]
    return PosturalAnalysis(
        overall_posture_score=score,
        identified_deviations=deviations,
        postural_stability=_draw(rng, bands.POSTURAL_STABILITY_BAND, decimals=0),
        alignment_quality=bands.alignment_quality(score),
    )


def phase_feedback_for(rng, sub_scores):
    feedback = {}
    for phase, spec in bands.PHASE_FEEDBACK.items():
        metrics = {}
        for name, source in spec['metrics'].items():
            if isinstance(source, str):
                metrics[name] = int(sub_scores[source])
            else:
                metrics[name] = int(round(rng.uniform(*source)))
        feedback[phase] = PhaseFeedback(metrics=metrics, feedback=spec['feedback'])
    return feedback


def joint_analysis_for(rng):
    categories = {}
    for category, joints in bands.JOINT_CATEGORIES.items():
        categories[category] = {}
        for joint, spec in joints.items():
            angles = {name: _draw(rng, band, decimals=0)
                      for name, band in spec.get('measured_angles', {}).items()}
            categories[category][joint] = JointAssessment(
                function=spec['function'],
                normal_rom=spec.get('normal_rom', ''),
                measured_angles=angles,
                quality_assessment=spec['quality_assessment'],
            )
    return categories


def muscle_analysis_for(exercise):
    pattern = bands.MUSCLE_PATTERNS.get(exercise, {})
    return {category: {muscle: MuscleActivity(**activity) for muscle, activity in muscles.items()}
            for category, muscles in pattern.items()}


def gait_analysis_for(rng, exercise):
    if exercise not in bands.GAIT_EXERCISES:
        return None
    return GaitAnalysis(
        gait_phases=bands.GAIT_PHASES,
        **{block: _draw_table(rng, table, decimals=2) for block, table in bands.GAIT_BANDS.items()}
    )


def _build_report(exercise, rng):
    table = bands.EXERCISE_BANDS[exercise]

    sub_scores = draw_sub_scores(rng, table)
    score = overall_score(sub_scores)

    biomechanics = BiomechanicsBlock(
        joint_angles=_draw_table(rng, table['joint_angles']),
        muscle_activation=table['muscles'],
        risk_factors=risk_factors_for(exercise, score),
        movement_quality=bands.MOVEMENT_QUALITY_BY_BAND[bands.score_band(score)],
    )

    return AnalysisReport(
        score=score,
        description=describe(exercise, score, sub_scores),
        movement_phases=build_phases(rng, table, score),
        biomechanics=biomechanics,
        recommendations=recommendations_for(exercise, score),
        confidence_score=_draw(rng, bands.CONFIDENCE_BAND, decimals=3),
        exercise_type=exercise,
        camera_angle=table['camera_angle'],
        sub_scores=sub_scores,
        kinematics=_draw_table(rng, table['kinematics']),
        temporal_parameters=_draw_table(rng, table['temporal']),
        joint_analysis=joint_analysis_for(rng),
        muscle_analysis=muscle_analysis_for(exercise),
        postural_analysis=postural_analysis_for(rng, score),
        phase_feedback=phase_feedback_for(rng, sub_scores),
        gait_analysis=gait_analysis_for(rng, exercise),
    )


def basic_analysis(exercise_type):
    """Minimal report returned when generation fails."""
    return AnalysisReport(
        score=FALLBACK_SCORE,
        description=f"Basic analysis of {exercise_type or 'the movement'} processed successfully.",
        movement_phases=[],
        biomechanics=BiomechanicsBlock(
            joint_angles={},
            muscle_activation=['primary muscles'],
            risk_factors=[],
            movement_quality='Analysis in progress',
        ),
        recommendations=['Consult a professional for a more detailed analysis'],
        confidence_score=FALLBACK_CONFIDENCE,
        exercise_type=bands.resolve_exercise(exercise_type),
    )


def generate_analysis(exercise_type, rng=None):
    """
    Generate a mock AnalysisReport for an exercise label.

    Parameters
    ----------
    exercise_type : str
        Free-text label. Known labels (and their aliases) use their own
        parameter table; anything else uses the default table.
    rng : numpy.random.Generator, optional
        Random source. A fresh generator is created when omitted.

    Returns
    -------
    AnalysisReport
        Never raises: failures produce the basic fallback report.
    """
    exercise = bands.resolve_exercise(exercise_type)
    if rng is None:
        rng = np.random.default_rng()
    try:
        return _build_report(exercise, rng)
    except Exception:
        logger.exception("Mock analysis failed for %r, returning basic analysis", exercise_type)
        return basic_analysis(exercise_type)


def describe_upload(file_name, file_size, exercise_type, rng=None, now=None):
    """Echo of the uploaded file returned next to the analysis."""
    if rng is None:
        rng = np.random.default_rng()
    now = now or datetime.now(timezone.utc)
    return AnalysisMetadata(
        file_name=file_name or '',
        file_size=int(file_size or 0),
        exercise_type=exercise_type or '',
        analysis_timestamp=now.isoformat(),
        processing_time=_draw(rng, bands.PROCESSING_TIME_BAND, decimals=2),
    )
