"""
Band audit for the mock generator.

Draws a batch of reports for one exercise and tabulates them, so the
declared bands and the score/risk relationship can be checked at a glance.
"""
import numpy as np
import pandas as pd

from moveid import bands
from moveid.generator import generate_analysis


def sample_reports(exercise_type, samples=200, seed=None):
    """Generate `samples` reports and return one row per report."""
    rng = np.random.default_rng(seed)
    rows = []
    for _ in range(samples):
        report = generate_analysis(exercise_type, rng=rng)
        row = {
            'score': report.score,
            'confidence_score': report.confidence_score,
            'risk_count': len(report.biomechanics.risk_factors),
            'recommendation_count': len(report.recommendations),
        }
        row.update({f"{name}_score": value for name, value in report.sub_scores.items()})
        row.update(report.biomechanics.joint_angles)
        row.update(report.kinematics)
        row.update(report.temporal_parameters)
        rows.append(row)
    return pd.DataFrame(rows)


def summarize(frame):
    """Mean, std, min and max of every numeric column."""
    stats = []
    for col in frame.columns:
        if pd.api.types.is_numeric_dtype(frame[col]):
            stats.append({
                'column': col,
                'mean': frame[col].mean(),
                'std': frame[col].std(),
                'min': frame[col].min(),
                'max': frame[col].max(),
            })
    return pd.DataFrame(stats).set_index('column')


def declared_bands(exercise_type):
    table = bands.EXERCISE_BANDS[bands.resolve_exercise(exercise_type)]
    declared = {f"{name}_score": band for name, band in table['scores'].items()}
    declared['confidence_score'] = bands.CONFIDENCE_BAND
    declared['score'] = (0, 100)
    for key in ('joint_angles', 'kinematics', 'temporal'):
        declared.update(table[key])
    return declared


def band_violations(frame, exercise_type):
    """List (column, value, band) for every sampled value outside its declared band."""
    violations = []
    for column, (low, high) in declared_bands(exercise_type).items():
        if column not in frame.columns:
            continue
        outside = frame[(frame[column] < low) | (frame[column] > high)]
        for value in outside[column]:
            violations.append((column, value, (low, high)))
    return violations
