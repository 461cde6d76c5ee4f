"""
MoveID movement analysis.

Mock biomechanical analysis, vision-model image analysis and PDF report
rendering for exercise videos and images.
"""

__version__ = "0.1.0"
