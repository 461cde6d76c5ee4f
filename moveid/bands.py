"""
Parameter bands for the mock analysis generator.

Every number the generator draws comes from a (low, high) band in this
module, keyed by canonical exercise label. The values are placeholder
heuristics chosen to look plausible, not validated clinical references.
"""


# ============================================================================
# EXERCISE LABELS
# ============================================================================
DEFAULT_EXERCISE = 'default'

EXERCISE_ALIASES = {
    'agachamento': 'squat',
    'squat': 'squat',
    'levantamento_terra': 'deadlift',
    'levantamento terra': 'deadlift',
    'levantamento': 'deadlift',
    'deadlift': 'deadlift',
    'flexao': 'pushup',
    'flexão': 'pushup',
    'pushup': 'pushup',
    'push-up': 'pushup',
    'caminhada': 'walk',
    'walk': 'walk',
    'walking': 'walk',
    'gait': 'walk',
}

DISPLAY_NAMES = {
    'squat': 'squat',
    'deadlift': 'deadlift',
    'pushup': 'push-up',
    'walk': 'walk',
    DEFAULT_EXERCISE: 'movement',
}


# ============================================================================
# SCORE AND CONFIDENCE BANDS
# ============================================================================
CONFIDENCE_BAND = (0.80, 0.95)
PROCESSING_TIME_BAND = (8.0, 12.0)   # seconds, echoed in upload metadata
PHASE_QUALITY_JITTER = (-8.0, 8.0)

# Description, movement quality and recommendation bands share these cut-offs
SCORE_BANDS = (85, 75, 65)

# (threshold, warning): the warning is added when score < threshold
RISK_RULES = [
    (80, 'Slight forward trunk lean during the loaded phase'),
    (70, 'Compensatory movement pattern detected in the lower limbs'),
    (60, 'Severe loss of alignment: high injury risk under load'),
]


# ============================================================================
# PER-EXERCISE TABLES
# ============================================================================
_STRENGTH_TEMPORAL = {
    'movement_duration_s': (2.0, 4.0),
    'eccentric_phase_s': (1.5, 2.0),
    'isometric_phase_s': (0.2, 0.5),
    'concentric_phase_s': (1.0, 1.4),
    'rhythm_consistency_pct': (80.0, 95.0),
    'cadence_rep_min': (40.0, 60.0),
}

EXERCISE_BANDS = {
    'squat': {
        'camera_angle': 'lateral',
        'scores': {'base': (62, 92), 'technique': (58, 94), 'safety': (60, 95)},
        'joint_angles': {
            'right_knee': (85.0, 125.0),
            'left_knee': (85.0, 125.0),
            'right_hip': (80.0, 115.0),
            'left_hip': (80.0, 115.0),
            'right_ankle': (15.0, 35.0),
            'left_ankle': (15.0, 35.0),
            'trunk': (20.0, 45.0),
        },
        'kinematics': {
            'peak_velocity_cm_s': (100.0, 150.0),
            'average_velocity_cm_s': (60.0, 90.0),
            'max_acceleration_cm_s2': (300.0, 500.0),
            'peak_ground_reaction_force_bw': (1.4, 2.2),
        },
        'temporal': _STRENGTH_TEMPORAL,
        'muscles': ['quadriceps', 'gluteus maximus', 'hamstrings', 'adductors',
                    'gastrocnemius', 'transversus abdominis'],
        'phases': [
            ('Setup', 0, 'Feet shoulder-width apart, core braced and spine neutral before the descent.'),
            ('Descent', 25, 'Controlled hip and knee flexion with the trunk kept upright and load spread across the feet.'),
            ('Bottom', 55, 'Reversal at maximum depth, the point of highest joint and muscular demand.'),
            ('Ascent', 80, 'Coordinated hip and knee extension back to the start position.'),
        ],
        'risk_rules': [
            (75, 'Dynamic knee valgus tendency during the descent'),
        ],
        'advice_below': 80,
        'advice': [
            'Work on ankle mobility to improve squat depth',
            'Strengthen the gluteus medius to keep the knees aligned over the toes',
        ],
    },
    'deadlift': {
        'camera_angle': 'lateral',
        'scores': {'base': (60, 92), 'technique': (58, 93), 'safety': (55, 94)},
        'joint_angles': {
            'right_knee': (110.0, 150.0),
            'left_knee': (110.0, 150.0),
            'right_hip': (60.0, 95.0),
            'left_hip': (60.0, 95.0),
            'trunk': (35.0, 60.0),
            'lumbar_spine': (5.0, 20.0),
        },
        'kinematics': {
            'peak_bar_velocity_cm_s': (60.0, 110.0),
            'average_bar_velocity_cm_s': (40.0, 70.0),
            'max_acceleration_cm_s2': (250.0, 450.0),
            'peak_ground_reaction_force_bw': (1.6, 2.6),
        },
        'temporal': _STRENGTH_TEMPORAL,
        'muscles': ['gluteus maximus', 'hamstrings', 'erector spinae',
                    'latissimus dorsi', 'quadriceps', 'trapezius'],
        'phases': [
            ('Setup', 0, 'Bar over mid-foot, shoulders slightly ahead of the bar and lats engaged.'),
            ('Lift-off', 20, 'The bar breaks from the floor as the legs drive and the back angle holds.'),
            ('Knee pass', 50, 'The hips move forward as the bar passes the knees.'),
            ('Lockout', 80, 'Full hip extension with the ribs stacked over the pelvis.'),
        ],
        'risk_rules': [
            (75, 'Lumbar flexion under load'),
        ],
        'advice_below': 80,
        'advice': [
            'Practise hip hinge drills to keep the spine neutral off the floor',
            'Keep the bar close to the legs throughout the pull',
        ],
    },
    'pushup': {
        'camera_angle': 'lateral',
        'scores': {'base': (62, 92), 'technique': (60, 94), 'safety': (62, 95)},
        'joint_angles': {
            'right_elbow': (70.0, 110.0),
            'left_elbow': (70.0, 110.0),
            'right_shoulder': (30.0, 60.0),
            'left_shoulder': (30.0, 60.0),
            'trunk': (0.0, 12.0),
        },
        'kinematics': {
            'peak_velocity_cm_s': (50.0, 90.0),
            'average_velocity_cm_s': (30.0, 55.0),
            'max_acceleration_cm_s2': (150.0, 300.0),
            'peak_hand_force_bw': (0.6, 0.8),
        },
        'temporal': _STRENGTH_TEMPORAL,
        'muscles': ['pectoralis major', 'triceps brachii', 'anterior deltoid',
                    'serratus anterior', 'rectus abdominis'],
        'phases': [
            ('Plank', 0, 'Hands under the shoulders with the body in a straight line from head to heels.'),
            ('Lowering', 30, 'Elbows bend at roughly 45 degrees while the chest travels toward the floor.'),
            ('Bottom', 55, 'Chest close to the floor with the trunk still rigid.'),
            ('Press', 75, 'Elbows extend and the body returns to the plank as one unit.'),
        ],
        'risk_rules': [
            (75, 'Scapular winging during the press'),
        ],
        'advice_below': 80,
        'advice': [
            'Strengthen the serratus anterior to stabilise the shoulder blades',
            'Keep the hips level with the shoulders for the whole repetition',
        ],
    },
    'walk': {
        'camera_angle': 'lateral',
        'scores': {'base': (68, 94), 'technique': (65, 95), 'safety': (70, 96)},
        'joint_angles': {
            'right_knee': (0.0, 60.0),
            'left_knee': (0.0, 60.0),
            'right_hip': (10.0, 30.0),
            'left_hip': (10.0, 30.0),
            'right_ankle': (0.0, 20.0),
            'left_ankle': (0.0, 20.0),
            'trunk': (0.0, 8.0),
        },
        'kinematics': {
            'walking_speed_km_h': (3.0, 5.0),
            'peak_velocity_cm_s': (120.0, 160.0),
            'max_acceleration_cm_s2': (200.0, 400.0),
            'peak_ground_reaction_force_bw': (1.0, 1.3),
        },
        'temporal': {
            'step_length_cm': (60.0, 80.0),
            'stride_length_cm': (120.0, 160.0),
            'cadence_steps_min': (100.0, 120.0),
            'step_time_s': (0.5, 0.7),
            'stance_phase_pct': (60.0, 65.0),
            'swing_phase_pct': (35.0, 40.0),
        },
        'muscles': ['tibialis anterior', 'quadriceps', 'gluteus medius',
                    'gastrocnemius', 'hamstrings', 'hip flexors'],
        'phases': [
            ('Initial contact', 0, 'Heel strike starts the stance phase and begins absorbing impact.'),
            ('Loading response', 12, 'Body weight is accepted with controlled knee flexion.'),
            ('Mid stance', 30, 'The body progresses over the supporting foot.'),
            ('Terminal stance', 45, 'The heel rises and the limb prepares for push-off.'),
            ('Pre-swing', 55, 'Active push-off as load transfers to the other limb.'),
            ('Swing', 75, 'The limb clears the ground and advances for the next contact.'),
        ],
        'risk_rules': [
            (75, 'Step length asymmetry between limbs'),
        ],
        'advice_below': 101,
        'advice': [
            'Keep a consistent cadence throughout the walk',
            'Focus on regular, symmetric steps',
        ],
    },
    DEFAULT_EXERCISE: {
        'camera_angle': 'oblique',
        'scores': {'base': (60, 90), 'technique': (58, 92), 'safety': (60, 94)},
        'joint_angles': {
            'right_knee': (40.0, 120.0),
            'left_knee': (40.0, 120.0),
            'right_hip': (30.0, 100.0),
            'left_hip': (30.0, 100.0),
            'trunk': (5.0, 35.0),
        },
        'kinematics': {
            'peak_velocity_cm_s': (100.0, 150.0),
            'average_velocity_cm_s': (60.0, 90.0),
            'max_acceleration_cm_s2': (300.0, 500.0),
        },
        'temporal': _STRENGTH_TEMPORAL,
        'muscles': ['quadriceps', 'gluteus maximus', 'core stabilisers'],
        'phases': [
            ('Preparation', 0, 'Initial position and postural set before the movement starts.'),
            ('Execution', 40, 'Main movement phase with the largest joint excursions.'),
            ('Finish', 80, 'Return to the start position under control.'),
        ],
        'risk_rules': [],
        'advice_below': 0,
        'advice': [],
    },
}


# ============================================================================
# POSTURAL ANALYSIS
# ============================================================================
# (threshold, deviation): the deviation is reported when score < threshold
POSTURAL_DEVIATIONS = [
    (80, {
        'deviation': 'Slight forward lean of the trunk',
        'severity': 'mild',
        'affected_muscles': {
            'primary': ['erector spinae'],
            'secondary': ['multifidus'],
            'stabilizers': ['transversus abdominis'],
        },
        'compensation_pattern': 'Possible weakness of the posterior trunk muscles',
    }),
    (70, {
        'deviation': 'Dynamic knee valgus tendency',
        'severity': 'moderate',
        'affected_muscles': {
            'primary': ['gluteus medius'],
            'secondary': ['tensor fasciae latae'],
            'stabilizers': ['gluteus minimus'],
        },
        'compensation_pattern': 'Weak lateral hip stabilisers',
    }),
    (60, {
        'deviation': 'Excessive anterior pelvic tilt',
        'severity': 'high',
        'affected_muscles': {
            'primary': ['hip flexors', 'lumbar erectors'],
            'secondary': ['rectus femoris'],
            'stabilizers': ['gluteals', 'deep abdominals'],
        },
        'compensation_pattern': 'Imbalance between hip flexors and extensors',
    }),
]

POSTURAL_STABILITY_BAND = (70.0, 90.0)   # percent

# (minimum score, label), checked in order
ALIGNMENT_QUALITY = [
    (80, 'Excellent'),
    (70, 'Good'),
    (60, 'Fair'),
    (0, 'Needs correction'),
]


# ============================================================================
# PHASE FEEDBACK
# ============================================================================
# A metric is either a sub-score name (copied from the report) or a band.
PHASE_FEEDBACK = {
    'preparation': {
        'metrics': {'stability_score': 'safety', 'alignment_score': (80, 95)},
        'feedback': [
            'Keep the feet firmly planted for maximum stability',
            'Brace the core before starting the movement',
            'Keep the gaze directed forward',
        ],
    },
    'execution': {
        'metrics': {'technique_score': 'technique', 'control_score': 'base'},
        'feedback': [
            'Control the speed of the movement',
            'Keep the knees aligned throughout the execution',
            'Coordinate the breathing with the movement',
        ],
    },
    'finish': {
        'metrics': {'control_score': (75, 95), 'stability_score': 'safety'},
        'feedback': [
            'Return to the start position under control',
            'Hold the stability until the movement is complete',
            'Pause briefly before the next repetition',
        ],
    },
}


# ============================================================================
# JOINT ANALYSIS
# ============================================================================
# Measured-angle bands are disjoint so that min <= average <= max always holds.
JOINT_CATEGORIES = {
    'primary': {
        'ankle': {
            'function': 'Stabilisation and propulsion',
            'normal_rom': '0-20° dorsiflexion, 0-50° plantar flexion',
            'measured_angles': {'min': (0, 8), 'average': (8, 16), 'max': (16, 30)},
            'quality_assessment': 'Adequate range with satisfactory control',
        },
        'knee': {
            'function': 'Impact absorption and propulsion',
            'normal_rom': '0-135° flexion',
            'measured_angles': {'min': (0, 5), 'average': (45, 65), 'max': (90, 120)},
            'quality_assessment': 'Controlled movement pattern with good stability',
        },
        'hip': {
            'function': 'Force generation and stabilisation',
            'normal_rom': '0-120° flexion, 0-30° extension',
            'measured_angles': {'min': (0, 10), 'average': (40, 55), 'max': (85, 110)},
            'quality_assessment': 'Adequate mobility with good muscle activation',
        },
        'shoulder': {
            'function': 'Stabilisation and coordination',
            'normal_rom': '0-180° flexion/abduction',
            'measured_angles': {'min': (0, 15), 'average': (25, 35), 'max': (45, 65)},
            'quality_assessment': 'Stable positioning with adequate coordination',
        },
    },
    'secondary': {
        'wrist': {'function': 'Fine stabilisation',
                  'quality_assessment': 'Neutral position maintained'},
        'thoracic_spine': {'function': 'Force transmission',
                           'quality_assessment': 'Alignment preserved during the movement'},
        'cervical_spine': {'function': 'Head positioning',
                           'quality_assessment': 'Neutral position maintained'},
    },
    'stabilizers': {
        'pelvis': {'function': 'Centre of body stability',
                   'quality_assessment': 'Adequate control with minimal compensation'},
        'scapula': {'function': 'Shoulder stabilisation',
                    'quality_assessment': 'Stable and coordinated positioning'},
        'lumbopelvic_complex': {'function': 'Core stability',
                                'quality_assessment': 'Efficient activation throughout the movement'},
    },
}


# ============================================================================
# MUSCLE ANALYSIS
# ============================================================================
def _activity(preparation, execution, finish, peak_moment):
    return {
        'activation_phases': {'preparation': preparation, 'execution': execution, 'finish': finish},
        'peak_moment': peak_moment,
    }


MUSCLE_PATTERNS = {
    'squat': {
        'primary': {
            'quadriceps': _activity('low - preparatory activation for stability',
                                    'high - eccentric on the way down, concentric on the way up',
                                    'moderate - holding the final position',
                                    'transition between descent and ascent'),
            'gluteals': _activity('moderate - initial pelvic stabilisation',
                                  'peak - maximum activation during the whole execution',
                                  'moderate - final control of the movement',
                                  'ascent (concentric) phase'),
            'hamstrings': _activity('low - pre-activation for stability',
                                    'moderate - co-contraction with the quadriceps',
                                    'low - gradual relaxation',
                                    'point of maximum flexion'),
        },
        'secondary': {
            'adductors': _activity('low - medial stabilisation',
                                   'moderate - control of dynamic valgus',
                                   'low - return to neutral',
                                   'descent phase'),
            'gastrocnemius': _activity('low - preparing the base of support',
                                       'moderate - ankle stabilisation',
                                       'low - relaxation',
                                       'point of maximum dorsiflexion'),
        },
        'stabilizers': {
            'transversus_abdominis': _activity('high - preparatory core activation',
                                               'peak - maximum stabilisation throughout',
                                               'moderate - keeping the stability',
                                               'throughout the execution'),
            'multifidus': _activity('moderate - lumbar stabilisation',
                                    'high - segmental control of the spine',
                                    'moderate - keeping the alignment',
                                    'point of maximum flexion'),
        },
    },
    'deadlift': {
        'primary': {
            'gluteus_maximus': _activity('moderate - setting the hips',
                                         'peak - hip extension off the floor',
                                         'moderate - lockout',
                                         'passing the knees'),
            'hamstrings': _activity('moderate - loaded stretch at setup',
                                    'high - hip extension',
                                    'low - lockout',
                                    'lift-off'),
        },
        'secondary': {
            'latissimus_dorsi': _activity('high - keeping the bar close',
                                          'high - bar path control',
                                          'moderate - lockout',
                                          'lift-off'),
        },
        'stabilizers': {
            'erector_spinae': _activity('high - neutral spine at setup',
                                        'peak - resisting spinal flexion',
                                        'moderate - upright finish',
                                        'lift-off'),
        },
    },
    'pushup': {
        'primary': {
            'pectoralis_major': _activity('low - plank hold',
                                          'high - eccentric lowering, concentric press',
                                          'low - return to plank',
                                          'bottom position'),
            'triceps_brachii': _activity('low - elbow lock',
                                         'high - elbow extension',
                                         'moderate - lockout',
                                         'press phase'),
        },
        'secondary': {
            'anterior_deltoid': _activity('low - shoulder set',
                                          'moderate - shoulder flexion',
                                          'low - relaxation',
                                          'press phase'),
        },
        'stabilizers': {
            'serratus_anterior': _activity('moderate - scapular protraction',
                                           'high - scapular control',
                                           'moderate - protraction at the top',
                                           'top of the press'),
            'rectus_abdominis': _activity('high - rigid plank',
                                          'high - preventing hip sag',
                                          'moderate - holding the plank',
                                          'throughout the execution'),
        },
    },
    'walk': {
        'primary': {
            'gluteus_medius': _activity('moderate - pelvic level at contact',
                                        'peak - single-leg stance',
                                        'low - swing',
                                        'mid stance'),
            'gastrocnemius': _activity('low - heel strike',
                                       'high - push-off',
                                       'low - swing',
                                       'pre-swing'),
        },
        'secondary': {
            'tibialis_anterior': _activity('high - controlled foot lowering',
                                           'low - stance',
                                           'moderate - toe clearance',
                                           'initial contact'),
        },
        'stabilizers': {
            'hip_flexors': _activity('low - stance',
                                     'moderate - limb advance',
                                     'high - swing',
                                     'initial swing'),
        },
    },
}


# ============================================================================
# GAIT ANALYSIS (walk only)
# ============================================================================
GAIT_PHASES = [
    'Initial contact', 'Loading response', 'Mid stance', 'Terminal stance',
    'Pre-swing', 'Initial swing', 'Mid swing', 'Terminal swing',
]

GAIT_BANDS = {
    'step_parameters': {
        'step_length_right_cm': (65.0, 80.0),
        'step_length_left_cm': (65.0, 80.0),
        'step_width_cm': (8.0, 13.0),
        'foot_angle_deg': (5.0, 15.0),
    },
    'temporal_parameters': {
        'cycle_time_s': (1.0, 1.3),
        'stance_time_s': (0.6, 0.8),
        'swing_time_s': (0.35, 0.45),
        'double_support_pct': (10.0, 15.0),
    },
    'symmetry_analysis': {
        'step_length_symmetry_pct': (85.0, 100.0),
        'stance_time_symmetry_pct': (88.0, 98.0),
        'swing_time_symmetry_pct': (86.0, 98.0),
    },
}

GAIT_EXERCISES = ('walk',)


# ============================================================================
# TEXT BY SCORE BAND
# ============================================================================
DESCRIPTION_BY_BAND = [
    'Excellent execution with optimised movement patterns and refined technique.',
    'Good movement quality with small adjustments that can improve results further.',
    'Moderate quality with some compensations that deserve attention.',
    'Movement pattern that would benefit significantly from technical corrections.',
]

MOVEMENT_QUALITY_BY_BAND = [
    'Excellent',
    'Good',
    'Moderate',
    'Needs correction',
]

ADVICE_BY_BAND = [
    ['Excellent execution, keep this technical quality',
     'Consider more challenging progressions to keep improving'],
    ['Good technique, focus on consistency across every repetition',
     'Work on joint mobility to refine the movement further'],
    ['Keep the trunk more upright throughout the movement',
     'Spread the weight evenly across the feet for more stability',
     'Strengthen the stabilising muscles'],
    ['Slow the movement down for better control',
     'Prioritise technique before increasing intensity',
     'Consider preparatory exercises to build the required base'],
]

CLOSING_RECOMMENDATIONS = [
    'Remember: movement quality matters more than quantity',
    'Take short breaks between repetitions to keep the technique sharp',
]


def resolve_exercise(label):
    """Map a free-text exercise label to a canonical key of EXERCISE_BANDS."""
    if not label:
        return DEFAULT_EXERCISE
    return EXERCISE_ALIASES.get(str(label).strip().lower(), DEFAULT_EXERCISE)


def alignment_quality(score):
    for cutoff, label in ALIGNMENT_QUALITY:
        if score >= cutoff:
            return label
    return ALIGNMENT_QUALITY[-1][1]


def score_band(score):
    """Index into the *_BY_BAND lists for a given overall score."""
    for index, cutoff in enumerate(SCORE_BANDS):
        if score >= cutoff:
            return index
    return len(SCORE_BANDS)
