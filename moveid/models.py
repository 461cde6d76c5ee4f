"""
Report data model.

An AnalysisReport is produced once per request (by the mock generator or by
the vision model), shown to the user and consumed by the PDF renderer. The
models are frozen and sequences are stored as tuples, so nothing downstream
can alter a report after it is built. Dict-valued fields (angles, metrics)
are plain dicts: the freeze is shallow for them, and the generator builds a
fresh dict for every report.

NaN and infinite floats are rejected everywhere; a report must always be
serialisable as strict JSON.
"""
from typing import Dict, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)


class PhaseResult(_Frozen):
    phase: str
    timestamp_percent: float = Field(
        ge=0, le=100,
        validation_alias=AliasChoices("timestamp_percent", "timestamp"),
    )
    analysis: str = ""
    quality_score: int = Field(ge=0, le=100)


class BiomechanicsBlock(_Frozen):
    joint_angles: Dict[str, float] = Field(default_factory=dict)
    muscle_activation: Tuple[str, ...] = ()
    risk_factors: Tuple[str, ...] = ()
    movement_quality: str = ""

    @field_validator("muscle_activation")
    @classmethod
    def _unique_muscles(cls, muscles):
        # set semantics, first-seen order
        return tuple(dict.fromkeys(muscles))


class PosturalDeviation(_Frozen):
    deviation: str
    severity: str
    affected_muscles: Dict[str, Tuple[str, ...]] = Field(default_factory=dict)
    compensation_pattern: str = ""


class PosturalAnalysis(_Frozen):
    overall_posture_score: int = Field(ge=0, le=100)
    identified_deviations: Tuple[PosturalDeviation, ...] = ()
    postural_stability: float = Field(ge=0, le=100)   # percent
    alignment_quality: str


class PhaseFeedback(_Frozen):
    metrics: Dict[str, int] = Field(default_factory=dict)
    feedback: Tuple[str, ...] = ()


class GaitAnalysis(_Frozen):
    gait_phases: Tuple[str, ...] = ()
    step_parameters: Dict[str, float] = Field(default_factory=dict)
    temporal_parameters: Dict[str, float] = Field(default_factory=dict)
    symmetry_analysis: Dict[str, float] = Field(default_factory=dict)


class JointAssessment(_Frozen):
    function: str
    normal_rom: str = ""
    measured_angles: Dict[str, float] = Field(default_factory=dict)   # min / average / max
    quality_assessment: str = ""


class MuscleActivity(_Frozen):
    activation_phases: Dict[str, str] = Field(default_factory=dict)
    peak_moment: str = ""


class AnalysisReport(_Frozen):
    score: int = Field(ge=0, le=100)
    description: str
    movement_phases: Tuple[PhaseResult, ...] = ()
    biomechanics: BiomechanicsBlock = Field(default_factory=BiomechanicsBlock)
    recommendations: Tuple[str, ...] = ()
    confidence_score: float = Field(ge=0, le=1)

    exercise_type: str = "default"
    camera_angle: str = ""
    sub_scores: Dict[str, int] = Field(default_factory=dict)
    kinematics: Dict[str, float] = Field(default_factory=dict)
    temporal_parameters: Dict[str, float] = Field(default_factory=dict)

    # category -> name -> detail
    joint_analysis: Dict[str, Dict[str, JointAssessment]] = Field(default_factory=dict)
    muscle_analysis: Dict[str, Dict[str, MuscleActivity]] = Field(default_factory=dict)
    postural_analysis: Optional[PosturalAnalysis] = None
    # phase name -> metrics and cues
    phase_feedback: Dict[str, PhaseFeedback] = Field(default_factory=dict)
    gait_analysis: Optional[GaitAnalysis] = None

    @field_validator("movement_phases")
    @classmethod
    def _phases_in_time_order(cls, phases):
        return tuple(sorted(phases, key=lambda p: p.timestamp_percent))


class MovementAnalysis(_Frozen):
    posture: str = ""
    alignment: str = ""
    recommendations: Tuple[str, ...] = ()


class ImageAnalysisResult(_Frozen):
    description: str
    movement_analysis: Optional[MovementAnalysis] = None
    biomechanics: Optional[BiomechanicsBlock] = None
    confidence_score: float = Field(default=0.8, ge=0, le=1)


class AnalysisMetadata(_Frozen):
    file_name: str
    file_size: int
    exercise_type: str
    analysis_timestamp: str
    processing_time: float
