"""
Movement Analysis PDF Report
Lays out an AnalysisReport on A4 pages with absolute coordinate placement.

Sections are drawn in a fixed order; before each block the page cursor
checks the space left above the bottom margin and starts a new page when the
block would not fit.
"""
import logging
from datetime import datetime
from io import BytesIO

from reportlab.lib.colors import HexColor, black, white
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from moveid.bands import DISPLAY_NAMES
from moveid.charts import create_joint_angle_chart
from moveid.layout import PageCursor, wrap_text

logger = logging.getLogger(__name__)


# ============================================================================
# PAGE GEOMETRY (millimetres)
# ============================================================================
PAGE_WIDTH_MM = A4[0] / mm
PAGE_HEIGHT_MM = A4[1] / mm
MARGIN = 20
BOTTOM_MARGIN = 30
CONTENT_WIDTH = 170
LINE_HEIGHT = 5


# ============================================================================
# COLOR SCHEME
# ============================================================================
COLORS = {
    'accent': HexColor('#0066CC'),
    'accent_fill': HexColor('#F0F8FF'),
    'phase_fill': HexColor('#F5FAFF'),
    'green': HexColor('#009600'),
    'green_fill': HexColor('#F0FFF0'),
    'blue': HexColor('#0064C8'),
    'orange': HexColor('#FFA500'),
    'orange_fill': HexColor('#FFF8DC'),
    'red': HexColor('#FF0000'),
    'red_fill': HexColor('#FFF5F5'),
    'header_fill': HexColor('#E6E6E6'),
    'white': white,
    'black': black,
}

RISK_COLORS = {
    'low': COLORS['green'],
    'medium': COLORS['orange'],
    'high': COLORS['red'],
}

RISK_FILLS = {
    'low': COLORS['green_fill'],
    'medium': COLORS['orange_fill'],
    'high': COLORS['red_fill'],
}

SEVERITY_COLORS = {
    'mild': COLORS['orange'],
    'moderate': COLORS['orange'],
    'high': COLORS['red'],
}

EVALUATION_COLORS = {
    'Normal': COLORS['green'],
    'Attention': COLORS['orange'],
    'Critical': COLORS['red'],
}


# ============================================================================
# REFERENCE DATA
# ============================================================================
# Free-text normal ranges shown next to each joint angle. Not enforced.
NORMAL_RANGES = {
    'knee': '0-135°',
    'hip': '0-120°',
    'ankle': '0-50°',
    'trunk': '0-45°',
    'shoulder': '0-180°',
    'elbow': '0-145°',
}

KNEE_NORMAL = (80, 135)
KNEE_ATTENTION = (60, 80)

FRAME_ANNOTATIONS = [
    '• Postural alignment',
    '• Joint angles',
    '• Compensations',
    '• Movement patterns',
    '• Core stability',
    '• Bilateral symmetry',
]

DISCLAIMER = (
    'This report was generated by artificial intelligence and must be interpreted by a '
    'qualified professional. The recommendations come from computational analysis and do '
    'not replace an in-person assessment.'
)


def base_joint(joint):
    """Strip side prefixes: 'right_knee' -> 'knee'."""
    name = joint.lower().replace('-', '_').replace(' ', '_')
    for prefix in ('right_', 'left_'):
        if name.startswith(prefix):
            return name[len(prefix):]
    return name


def get_normal_range(joint):
    return NORMAL_RANGES.get(base_joint(joint), 'N/A')


def evaluate_angle(joint, angle):
    """
    Simplified angle evaluation.
    Only the knee is evaluated; every other joint reads as Normal.
    """
    if base_joint(joint) == 'knee':
        if KNEE_NORMAL[0] <= angle <= KNEE_NORMAL[1]:
            return 'Normal'
        if KNEE_ATTENTION[0] <= angle < KNEE_ATTENTION[1]:
            return 'Attention'
        return 'Critical'
    return 'Normal'


def calculate_risk_level(risk_factor_count, score):
    if risk_factor_count == 0 and score >= 80:
        return 'low'
    if risk_factor_count <= 2 and score >= 60:
        return 'medium'
    return 'high'


def get_score_label(score):
    if score >= 90:
        return 'Excellent'
    if score >= 80:
        return 'Very good'
    if score >= 70:
        return 'Good'
    if score >= 60:
        return 'Fair'
    if score >= 50:
        return 'Needs improvement'
    return 'Critical'


def get_score_color(score):
    if score >= 85:
        return COLORS['green']
    if score >= 70:
        return COLORS['blue']
    if score >= 50:
        return COLORS['orange']
    return COLORS['red']


def _humanize(key):
    return key.replace('_', ' ').capitalize()


def report_filename(exercise_type, when=None):
    """Download name for a rendered report."""
    when = when or datetime.now()
    label = '-'.join((exercise_type or 'movement').lower().split()) or 'movement'
    return f"movement-analysis-{label}-{when:%Y%m%d-%H%M%S}.pdf"


class _NumberedCanvas(canvas.Canvas):
    """Canvas that holds its pages until save() so every footer knows the page total."""

    def __init__(self, *args, footer_text='', **kwargs):
        canvas.Canvas.__init__(self, *args, **kwargs)
        self._saved_page_states = []
        self._footer_text = footer_text

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        page_count = len(self._saved_page_states)
        for page_number, state in enumerate(self._saved_page_states, start=1):
            self.__dict__.update(state)
            self._draw_footer(page_number, page_count)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)

    def _draw_footer(self, page_number, page_count):
        self.saveState()
        self.setFont('Helvetica', 8)
        self.setFillColor(COLORS['black'])
        self.drawString(MARGIN * mm, 10 * mm,
                        f"MoveID - AI Movement Analysis | Page {page_number} of {page_count} | "
                        f"{self._footer_text}")
        self.restoreState()


class ReportRenderer:
    """
    Renders an AnalysisReport into PDF bytes.

    After render() the `placements` list holds every block drawn (section,
    kind, page, top, bottom in mm) and `page_count` the number of pages.
    """

    def __init__(self, report, source_image=None, subject_name='User',
                 exercise_label=None, generated_at=None,
                 include_charts=True, include_source_image=True):
        self.report = report
        self.source_image = source_image
        self.subject_name = subject_name or 'User'
        self.exercise_label = exercise_label or DISPLAY_NAMES.get(
            report.exercise_type, report.exercise_type).title()
        self.generated_at = generated_at or datetime.now()
        self.include_charts = include_charts
        self.include_source_image = include_source_image

        self.placements = []
        self.page_count = 0
        self._canvas = None
        self._cursor = None
        self._section = ''

    # ------------------------------------------------------------------
    # Drawing helpers
    # ------------------------------------------------------------------

    def _y(self, top_mm):
        """Convert a distance from the top of the page to PDF points."""
        return (PAGE_HEIGHT_MM - top_mm) * mm

    def _place(self, height, kind='block'):
        return self._cursor.place(height, section=self._section, kind=kind)

    def _text(self, x, baseline, text, font='Helvetica', size=11, color=None):
        c = self._canvas
        c.setFont(font, size)
        c.setFillColor(color or COLORS['black'])
        c.drawString(x * mm, self._y(baseline), text)

    def _rect(self, x, top, width, height, stroke_color=None, fill_color=None):
        c = self._canvas
        if stroke_color is not None:
            c.setStrokeColor(stroke_color)
        if fill_color is not None:
            c.setFillColor(fill_color)
        c.rect(x * mm, self._y(top + height), width * mm, height * mm,
               stroke=1 if stroke_color is not None else 0,
               fill=1 if fill_color is not None else 0)

    def _lines(self, text, width=CONTENT_WIDTH, x=MARGIN, size=11, line_height=LINE_HEIGHT):
        """Emit wrapped text one line at a time; each line may break the page."""
        for line in wrap_text(text, width * mm, 'Helvetica', size):
            top = self._place(line_height, kind='text')
            self._text(x, top + line_height - 1, line, size=size)

    def _section_title(self, title, keep_with=0):
        self._section = title
        self._cursor.ensure(15 + keep_with)
        top = self._place(15, kind='title')
        self._text(MARGIN, top + 6, title, font='Helvetica-Bold', size=14, color=COLORS['accent'])
        c = self._canvas
        c.setStrokeColor(COLORS['accent'])
        c.line(MARGIN * mm, self._y(top + 8), (MARGIN + CONTENT_WIDTH) * mm, self._y(top + 8))

    def _subtitle(self, title, height=10):
        top = self._place(height, kind='title')
        self._text(MARGIN, top + 5, title, font='Helvetica-Bold', size=11)

    def _image_placeholder(self, message):
        top = self._place(10, kind='text')
        self._text(MARGIN, top + 5, message, size=11)

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def add_header(self):
        self._section = 'header'
        top = self._place(58)

        self._text(MARGIN, top + 6, 'MOVEMENT ANALYSIS REPORT', font='Helvetica-Bold', size=22)
        self._text(MARGIN, top + 16, 'Computational movement analysis with artificial intelligence',
                   size=13)

        box_top = top + 24
        self._rect(MARGIN, box_top, CONTENT_WIDTH, 26,
                   stroke_color=COLORS['accent'], fill_color=COLORS['accent_fill'])
        self._text(MARGIN + 5, box_top + 7, 'SUBJECT DETAILS', font='Helvetica-Bold', size=12)
        self._text(MARGIN + 5, box_top + 14, f"Name: {self.subject_name}", size=11)
        self._text(MARGIN + 5, box_top + 21, f"Exercise: {self.exercise_label}", size=11)
        self._text(MARGIN + 90, box_top + 14, f"Date: {self.generated_at:%Y-%m-%d}", size=11)
        self._text(MARGIN + 90, box_top + 21, f"Time: {self.generated_at:%H:%M:%S}", size=11)

    def add_executive_summary(self):
        report = self.report
        self._section_title('1. EXECUTIVE SUMMARY', keep_with=30)

        top = self._place(30)
        self._rect(MARGIN, top, CONTENT_WIDTH, 20,
                   stroke_color=COLORS['green'], fill_color=COLORS['green_fill'])
        self._text(MARGIN + 5, top + 8, f"OVERALL SCORE: {report.score}/100",
                   font='Helvetica-Bold', size=16)
        self._text(MARGIN + 5, top + 16, f"({get_score_label(report.score)})",
                   font='Helvetica-Bold', size=14, color=get_score_color(report.score))

        self._lines(report.description)
        self._cursor.skip(10)

        top = self._place(10, kind='text')
        self._text(MARGIN, top + 5, f"AI confidence level: {round(report.confidence_score * 100)}%",
                   font='Helvetica-Bold')
        self._cursor.skip(5)

    def add_source_frame(self):
        self._section_title('2. VIDEO FRAME ANALYSIS', keep_with=70)
        try:
            image = ImageReader(BytesIO(self.source_image))
            image.getSize()
        except Exception:
            logger.warning("Could not embed the source frame, drawing a placeholder", exc_info=True)
            self._image_placeholder('Video frame not available')
            return

        top = self._place(70)
        self._canvas.drawImage(image, MARGIN * mm, self._y(top + 60), 80 * mm, 60 * mm,
                               preserveAspectRatio=True, anchor='c')

        self._rect(MARGIN + 85, top, 85, 60,
                   stroke_color=COLORS['orange'], fill_color=COLORS['orange_fill'])
        self._text(MARGIN + 88, top + 8, 'ANALYSIS POINTS:', font='Helvetica-Bold', size=10)
        for index, annotation in enumerate(FRAME_ANNOTATIONS):
            self._text(MARGIN + 88, top + 15 + index * 6, annotation, size=10)

    def add_biomechanical_parameters(self):
        biomechanics = self.report.biomechanics
        self._section_title('3. DETAILED PARAMETERS', keep_with=28)

        if biomechanics.joint_angles:
            self._subtitle('3.1 JOINT ANGLES')
            top = self._place(10)
            self._rect(MARGIN, top, CONTENT_WIDTH, 8,
                       stroke_color=COLORS['black'], fill_color=COLORS['header_fill'])
            for x, heading in ((2, 'JOINT'), (60, 'ANGLE (°)'), (100, 'NORMAL RANGE'),
                               (140, 'EVALUATION')):
                self._text(MARGIN + x, top + 5.5, heading, font='Helvetica-Bold', size=10)

            for joint, angle in biomechanics.joint_angles.items():
                evaluation = evaluate_angle(joint, angle)
                top = self._place(8, kind='row')
                self._rect(MARGIN, top, CONTENT_WIDTH, 8, stroke_color=COLORS['black'])
                self._text(MARGIN + 2, top + 5.5, _humanize(joint), size=10)
                self._text(MARGIN + 60, top + 5.5, f"{angle:g}°", size=10)
                self._text(MARGIN + 100, top + 5.5, get_normal_range(joint), size=10)
                self._text(MARGIN + 140, top + 5.5, evaluation, size=10,
                           color=EVALUATION_COLORS[evaluation])
            self._cursor.skip(10)

        if biomechanics.muscle_activation:
            self._subtitle('3.2 MUSCLE ACTIVATION', height=8)
            for muscle in biomechanics.muscle_activation:
                top = self._place(6, kind='text')
                self._text(MARGIN + 5, top + 4, f"• {muscle[:1].upper()}{muscle[1:]}")
            self._cursor.skip(10)

        self._parameter_table('3.3 KINEMATIC PARAMETERS', self.report.kinematics)
        self._parameter_table('3.4 TEMPORAL PARAMETERS', self.report.temporal_parameters)
        self.add_postural_analysis()
        self.add_joint_function()
        self.add_muscle_analysis()
        self.add_gait_analysis()

    def add_postural_analysis(self):
        postural = self.report.postural_analysis
        if postural is None:
            return
        self._cursor.ensure(10 + 16)
        self._subtitle('3.5 POSTURAL ANALYSIS')
        top = self._place(16)
        self._rect(MARGIN, top, CONTENT_WIDTH, 14,
                   stroke_color=COLORS['accent'], fill_color=COLORS['accent_fill'])
        self._text(MARGIN + 5, top + 6, f"Alignment quality: {postural.alignment_quality}",
                   font='Helvetica-Bold', size=10)
        self._text(MARGIN + 5, top + 11, f"Postural stability: {postural.postural_stability:g}%", size=10)
        self._text(MARGIN + 90, top + 6, f"Posture score: {postural.overall_posture_score}/100", size=10)

        for deviation in postural.identified_deviations:
            color = SEVERITY_COLORS.get(deviation.severity, COLORS['black'])
            top = self._place(6, kind='text')
            self._text(MARGIN + 5, top + 4, f"• {deviation.deviation} ({deviation.severity})",
                       font='Helvetica-Bold', size=10, color=color)
            muscles = ', '.join(m for group in deviation.affected_muscles.values() for m in group)
            self._lines(f"Compensation: {deviation.compensation_pattern}. Muscles involved: {muscles}.",
                        width=CONTENT_WIDTH - 10, x=MARGIN + 10, size=9, line_height=4.5)
        self._cursor.skip(10)

    def add_joint_function(self):
        primary = self.report.joint_analysis.get('primary', {})
        if not primary:
            return
        self._cursor.ensure(10 + 8 + 8)
        self._subtitle('3.6 JOINT FUNCTION')
        top = self._place(8)
        self._rect(MARGIN, top, CONTENT_WIDTH, 8,
                   stroke_color=COLORS['black'], fill_color=COLORS['header_fill'])
        for x, heading in ((2, 'JOINT'), (30, 'FUNCTION'), (100, 'MIN / AVG / MAX (°)')):
            self._text(MARGIN + x, top + 5.5, heading, font='Helvetica-Bold', size=9)
        for joint, assessment in primary.items():
            angles = assessment.measured_angles
            top = self._place(8, kind='row')
            self._rect(MARGIN, top, CONTENT_WIDTH, 8, stroke_color=COLORS['black'])
            self._text(MARGIN + 2, top + 5.5, _humanize(joint), size=9)
            self._text(MARGIN + 30, top + 5.5, assessment.function, size=9)
            self._text(MARGIN + 100, top + 5.5,
                       f"{angles.get('min', 0):g} / {angles.get('average', 0):g} / {angles.get('max', 0):g}",
                       size=9)
        self._cursor.skip(10)

    def add_muscle_analysis(self):
        categories = self.report.muscle_analysis
        if not categories:
            return
        self._cursor.ensure(8 + 6)
        self._subtitle('3.7 MUSCLE ACTIVATION BY PHASE', height=8)
        for category, muscles in categories.items():
            for muscle, activity in muscles.items():
                top = self._place(6, kind='text')
                self._text(MARGIN + 5, top + 4, f"• {_humanize(muscle)} ({category})",
                           font='Helvetica-Bold', size=10)
                self._lines(f"Peak: {activity.peak_moment}. Execution: "
                            f"{activity.activation_phases.get('execution', 'n/a')}.",
                            width=CONTENT_WIDTH - 10, x=MARGIN + 10, size=9, line_height=4.5)
        self._cursor.skip(10)

    def add_gait_analysis(self):
        gait = self.report.gait_analysis
        if gait is None:
            return
        self._cursor.ensure(8 + 6)
        self._subtitle('3.8 GAIT ANALYSIS', height=8)
        self._lines(f"Gait cycle phases: {', '.join(gait.gait_phases)}.", size=10)
        self._cursor.skip(5)
        self._parameter_table('Step parameters', gait.step_parameters)
        self._parameter_table('Gait cycle timing', gait.temporal_parameters)
        self._parameter_table('Symmetry', gait.symmetry_analysis)

    def _parameter_table(self, title, values):
        if not values:
            return
        self._cursor.ensure(10 + 7)
        self._subtitle(title)
        for name, value in values.items():
            top = self._place(7, kind='row')
            self._rect(MARGIN, top, CONTENT_WIDTH, 7, stroke_color=COLORS['black'])
            self._text(MARGIN + 2, top + 5, _humanize(name), size=10)
            self._text(MARGIN + 100, top + 5, f"{value:g}", size=10)
        self._cursor.skip(10)

    def add_movement_phases(self):
        self._section_title('4. MOVEMENT PHASE ANALYSIS', keep_with=33)

        for index, phase in enumerate(self.report.movement_phases, start=1):
            top = self._place(33)
            self._text(MARGIN, top + 5, f"4.{index} {phase.phase.upper()}", font='Helvetica-Bold')

            box_top = top + 8
            self._rect(MARGIN, box_top, CONTENT_WIDTH, 20,
                       stroke_color=COLORS['accent'], fill_color=COLORS['phase_fill'])
            self._text(MARGIN + 5, box_top + 6, f"Timestamp: {phase.timestamp_percent:g}%", size=10)
            self._text(MARGIN + 5, box_top + 12, f"Quality score: {phase.quality_score}/100", size=10)

            # Quality bar
            bar_width = phase.quality_score / 100 * 60
            self._rect(MARGIN + 90, box_top + 8, bar_width, 4, fill_color=COLORS['green'])
            self._rect(MARGIN + 90, box_top + 8, 60, 4, stroke_color=COLORS['black'])

            self._lines(phase.analysis, size=10)
            self._cursor.skip(10)

        self.add_phase_feedback(len(self.report.movement_phases) + 1)

    def add_phase_feedback(self, number):
        if not self.report.phase_feedback:
            return
        self._cursor.ensure(10 + 6)
        self._subtitle(f"4.{number} PHASE FEEDBACK")
        for phase, feedback in self.report.phase_feedback.items():
            metrics = ', '.join(f"{_humanize(name).lower()} {value}/100"
                                for name, value in feedback.metrics.items())
            top = self._place(6, kind='text')
            self._text(MARGIN + 5, top + 4, f"{_humanize(phase)}: {metrics}",
                       font='Helvetica-Bold', size=10)
            for cue in feedback.feedback:
                for line_index, line in enumerate(wrap_text(cue, 150 * mm, font_size=10)):
                    top = self._place(LINE_HEIGHT, kind='text')
                    self._text(MARGIN + 10, top + 4, ('- ' if line_index == 0 else '  ') + line, size=10)
            self._cursor.skip(4)
        self._cursor.skip(6)

    def add_joint_angle_chart(self):
        self._section_title('5. GRAPHICAL ANALYSIS', keep_with=110)
        try:
            chart = ImageReader(create_joint_angle_chart(self.report.biomechanics.joint_angles))
            chart.getSize()
        except Exception:
            logger.warning("Could not render the joint angle chart, drawing a placeholder", exc_info=True)
            self._image_placeholder('Chart not available')
            return

        top = self._place(110)
        self._canvas.drawImage(chart, MARGIN * mm, self._y(top + 100), CONTENT_WIDTH * mm, 100 * mm,
                               preserveAspectRatio=True, anchor='c')

    def add_risk_assessment(self):
        biomechanics = self.report.biomechanics
        self._section_title('6. RISK ASSESSMENT', keep_with=25)

        if biomechanics.risk_factors:
            level = calculate_risk_level(len(biomechanics.risk_factors), self.report.score)
            color = RISK_COLORS[level]

            top = self._place(20)
            self._rect(MARGIN, top, CONTENT_WIDTH, 15, stroke_color=color, fill_color=RISK_FILLS[level])
            self._text(MARGIN + 5, top + 10, f"RISK LEVEL: {level.upper()}",
                       font='Helvetica-Bold', color=color)

            self._subtitle('IDENTIFIED FACTORS:', height=8)
            for risk in biomechanics.risk_factors:
                for line_index, line in enumerate(wrap_text(risk, 160 * mm)):
                    top = self._place(6, kind='text')
                    prefix = '• ' if line_index == 0 else '  '
                    self._text(MARGIN + 5, top + 4, prefix + line)
            self._cursor.skip(10)
        else:
            top = self._place(25)
            self._rect(MARGIN, top, CONTENT_WIDTH, 15,
                       stroke_color=COLORS['green'], fill_color=COLORS['green_fill'])
            self._text(MARGIN + 5, top + 10, 'NO SIGNIFICANT RISK FACTORS IDENTIFIED',
                       font='Helvetica-Bold', color=COLORS['green'])

    def add_recommendations(self):
        self._section_title('7. PERSONALISED RECOMMENDATIONS', keep_with=LINE_HEIGHT)

        for index, recommendation in enumerate(self.report.recommendations, start=1):
            for line_index, line in enumerate(wrap_text(recommendation, 160 * mm)):
                top = self._place(LINE_HEIGHT, kind='text')
                if line_index == 0:
                    self._text(MARGIN, top + 4, f"7.{index}", font='Helvetica-Bold')
                self._text(MARGIN + 15, top + 4, line)
            self._cursor.skip(5)
        self._cursor.skip(10)

    def add_technical_appendix(self):
        report = self.report
        self._section_title('8. TECHNICAL APPENDIX', keep_with=8)

        self._subtitle('8.1 TECHNICAL PARAMETERS OF THE ANALYSIS', height=8)
        technical_data = [
            '• Method: computational movement analysis',
            f"• AI confidence: {round(report.confidence_score * 100)}%",
            f"• Exercise profile: {report.exercise_type}",
            f"• Camera angle: {report.camera_angle or 'not specified'}",
            f"• Processing date: {self.generated_at:%Y-%m-%d %H:%M:%S}",
        ]
        for line in technical_data:
            top = self._place(6, kind='text')
            self._text(MARGIN, top + 4, line)
        self._cursor.skip(15)

        top = self._place(6, kind='text')
        self._text(MARGIN, top + 4, 'IMPORTANT:', font='Helvetica-Bold')
        self._lines(DISCLAIMER, size=9, line_height=4)

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def render(self):
        """Draw every section and return the PDF as bytes."""
        buffer = BytesIO()
        self._canvas = _NumberedCanvas(buffer, pagesize=A4,
                                       footer_text=f"{self.generated_at:%Y-%m-%d}")
        self._canvas.setTitle(f"Movement analysis - {self.exercise_label}")
        self._cursor = PageCursor(PAGE_HEIGHT_MM, MARGIN, BOTTOM_MARGIN,
                                  on_new_page=self._canvas.showPage)

        self.add_header()
        self.add_executive_summary()
        if self.include_source_image and self.source_image:
            self.add_source_frame()
        self.add_biomechanical_parameters()
        if self.report.movement_phases or self.report.phase_feedback:
            self.add_movement_phases()
        if self.include_charts and self.report.biomechanics.joint_angles:
            self.add_joint_angle_chart()
        self.add_risk_assessment()
        self.add_recommendations()
        self.add_technical_appendix()

        self._canvas.showPage()
        self._canvas.save()

        self.placements = list(self._cursor.placements)
        self.page_count = self._cursor.page
        logger.info("Rendered %s report: %d pages", self.report.exercise_type, self.page_count)
        return buffer.getvalue()


def render_report_pdf(report, **options):
    """Render `report` with ReportRenderer options and return the PDF bytes."""
    return ReportRenderer(report, **options).render()
