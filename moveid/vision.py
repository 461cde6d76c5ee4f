"""
Vision model analysis.

Sends images (or video frames) to an OpenAI chat model with a prompt asking
for a JSON reply. Replies that are not valid JSON, or do not match the
expected shape, are kept as plain-text descriptions with reduced confidence.
"""
import base64
import json
import logging
from typing import Dict, List, Optional

import openai
from openai import OpenAI
from pydantic import ValidationError

from moveid import bands
from moveid.models import AnalysisReport, BiomechanicsBlock, ImageAnalysisResult

logger = logging.getLogger(__name__)

TEXT_FALLBACK_CONFIDENCE = 0.7
FAILED_CALL_CONFIDENCE = 0.0
FALLBACK_REPORT_SCORE = 75
MAX_FRAMES = 5

ANALYSIS_TYPES = ('movement', 'posture', 'biomechanics')

BASE_PROMPT = (
    "Analyse this image of human movement and give a detailed analysis. "
    "Reply with a single JSON object only, no commentary, with this structure:"
)

IMAGE_PROMPTS = {
    'posture': (
        '{\n'
        '  "description": "Overall description of the observed posture",\n'
        '  "movement_analysis": {\n'
        '    "posture": "Posture rating (good/fair/poor)",\n'
        '    "alignment": "Analysis of body alignment",\n'
        '    "recommendations": ["recommendation 1", "recommendation 2"]\n'
        '  },\n'
        '  "confidence_score": 0.85\n'
        '}'
    ),
    'biomechanics': (
        '{\n'
        '  "description": "Biomechanical analysis of the movement",\n'
        '  "biomechanics": {\n'
        '    "joint_angles": {"knee": 90, "hip": 45},\n'
        '    "muscle_activation": ["quadriceps", "glutes"],\n'
        '    "risk_factors": ["knee overload", "muscle imbalance"]\n'
        '  },\n'
        '  "confidence_score": 0.80\n'
        '}'
    ),
    'movement': (
        '{\n'
        '  "description": "Complete analysis of the observed movement",\n'
        '  "movement_analysis": {\n'
        '    "posture": "Posture during the movement",\n'
        '    "alignment": "Alignment and coordination",\n'
        '    "recommendations": ["improvement 1", "improvement 2"]\n'
        '  },\n'
        '  "confidence_score": 0.85\n'
        '}'
    ),
}

FRAME_PROMPT = (
    "You are an expert in biomechanics and movement analysis. Analyse this frame of an "
    "exercise video and describe:\n"
    "1. Posture and body alignment\n"
    "2. Joint angles (knee, hip, ankle, etc.)\n"
    "3. Movement quality\n"
    "4. Possible compensations or errors\n"
    "5. Observed muscle activation\n"
    "6. Injury risk factors\n"
    "7. Specific recommendations for improvement\n"
)

CONSOLIDATION_PROMPT = (
    "Based on the individual frame analyses below, give a consolidated analysis of the "
    "complete movement as a single JSON object.\n\n{frames}\n\n"
    "Use this format:\n"
    '{{\n'
    '  "score": 85,\n'
    '  "description": "Overall analysis of the movement",\n'
    '  "movement_phases": [\n'
    '    {{"phase": "Initial phase", "timestamp": 0, "analysis": "Phase description", "quality_score": 80}}\n'
    '  ],\n'
    '  "biomechanics": {{\n'
    '    "joint_angles": {{"knee": 90, "hip": 45, "ankle": 15}},\n'
    '    "muscle_activation": ["quadriceps", "glutes", "core"],\n'
    '    "risk_factors": ["knee overload"],\n'
    '    "movement_quality": "Good overall execution"\n'
    '  }},\n'
    '  "recommendations": ["Recommendation 1", "Recommendation 2"],\n'
    '  "confidence_score": 0.85\n'
    '}}'
)


def image_prompt(analysis_type):
    schema = IMAGE_PROMPTS.get(analysis_type, IMAGE_PROMPTS['movement'])
    return f"{BASE_PROMPT}\n{schema}"


def frame_prompt(exercise_type=None):
    exercise_type = (exercise_type or '').strip()
    if exercise_type:
        return f"{FRAME_PROMPT}\nExercise type: {exercise_type}. Focus on the specifics of this exercise."
    return FRAME_PROMPT


def to_data_url(data, content_type):
    encoded = base64.b64encode(data).decode('ascii')
    return f"data:{content_type};base64,{encoded}"


def _reject_constant(name):
    raise ValueError(f"non-finite number {name} in model reply")


def parse_llm_json(raw: str) -> Optional[Dict]:
    """Extract a JSON object from raw LLM output. NaN and Infinity are not valid JSON and are rejected."""
    text = (raw or '').strip()
    if text.startswith("```"):
        text = text.strip("`")
        if text.lower().startswith("json"):
            text = text[4:].strip()
    try:
        parsed = json.loads(text, parse_constant=_reject_constant)
        return parsed if isinstance(parsed, dict) else None
    except ValueError:
        pass
    try:
        s = text.index("{")
        e = text.rindex("}") + 1
        parsed = json.loads(text[s:e], parse_constant=_reject_constant)
        return parsed if isinstance(parsed, dict) else None
    except ValueError:
        return None


def parse_image_analysis(raw: str) -> ImageAnalysisResult:
    """Turn a model reply into an ImageAnalysisResult, keeping free text as the description."""
    parsed = parse_llm_json(raw)
    if parsed is not None:
        if parsed.get('confidence_score') is None:
            parsed['confidence_score'] = 0.8
        try:
            return ImageAnalysisResult.model_validate(parsed)
        except ValidationError:
            logger.warning("Vision reply did not match the image analysis shape, keeping it as text")
    return ImageAnalysisResult(description=raw, confidence_score=TEXT_FALLBACK_CONFIDENCE)


def text_only_report(raw, exercise_type='default'):
    return AnalysisReport(
        score=FALLBACK_REPORT_SCORE,
        description=raw,
        movement_phases=[],
        biomechanics=BiomechanicsBlock(movement_quality='Text analysis available'),
        recommendations=['See the detailed description for recommendations'],
        confidence_score=TEXT_FALLBACK_CONFIDENCE,
        exercise_type=exercise_type or 'default',
    )


def parse_video_analysis(raw: str, exercise_type=None) -> AnalysisReport:
    parsed = parse_llm_json(raw)
    if parsed is not None:
        defaults = {
            'score': FALLBACK_REPORT_SCORE,
            'description': 'Movement analysis',
            'confidence_score': 0.8,
            'exercise_type': exercise_type or 'default',
        }
        for key, value in defaults.items():
            if parsed.get(key) is None:
                parsed[key] = value
        try:
            return AnalysisReport.model_validate(parsed)
        except ValidationError:
            logger.warning("Vision reply did not match the report shape, keeping it as text")
    return text_only_report(raw, exercise_type)


class VisionAnalyzer:
    """
    Thin wrapper around the OpenAI chat completions API.

    The client is created on first use so the analyzer can be built without
    credentials (tests inject a fake client).
    """

    def __init__(self, api_key=None, model='gpt-4o', client=None):
        self.api_key = api_key
        self.model = model
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key or None)
        return self._client

    def _complete(self, content, max_tokens, temperature):
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": content}],
            max_tokens=max_tokens,
            temperature=temperature,
        )
        reply = response.choices[0].message.content if response.choices else None
        if not reply:
            raise openai.OpenAIError("The model returned an empty reply")
        return reply

    def analyze_image(self, data: bytes, content_type: str,
                      analysis_type: str = 'movement') -> ImageAnalysisResult:
        """
        Analyse a single image.

        Never raises for model-side problems: a failed call produces a
        text-only result with zero confidence.
        """
        content = [
            {"type": "text", "text": image_prompt(analysis_type)},
            {"type": "image_url", "image_url": {"url": to_data_url(data, content_type), "detail": "high"}},
        ]
        try:
            raw = self._complete(content, max_tokens=1000, temperature=0.3)
        except openai.OpenAIError as exc:
            logger.warning("Image analysis call failed: %s", exc)
            return ImageAnalysisResult(
                description='The image analysis service is unavailable. Please try again later.',
                confidence_score=FAILED_CALL_CONFIDENCE,
            )
        return parse_image_analysis(raw)

    def analyze_frames(self, frames: List[bytes], content_type: str = 'image/jpeg',
                       exercise_type: Optional[str] = None) -> AnalysisReport:
        """
        Analyse up to MAX_FRAMES video frames and consolidate them into one report.

        The prompt carries the label as the user typed it; the report falls back
        to the canonical exercise key.
        """
        prompt = frame_prompt(exercise_type)
        exercise = bands.resolve_exercise(exercise_type)
        selected = frames[:MAX_FRAMES]
        try:
            notes = []
            for index, frame in enumerate(selected):
                timestamp = index / len(frames) * 100
                content = [
                    {"type": "text",
                     "text": f"{prompt}\nThis is frame {index + 1} of {len(frames)}. "
                             f"Analyse this moment of the movement:"},
                    {"type": "image_url",
                     "image_url": {"url": to_data_url(frame, content_type), "detail": "high"}},
                ]
                analysis = self._complete(content, max_tokens=800, temperature=0.3)
                notes.append(f"Frame {index + 1} ({timestamp:.0f}%): {analysis}")

            raw = self._complete(CONSOLIDATION_PROMPT.format(frames="\n\n".join(notes)),
                                 max_tokens=1500, temperature=0.2)
        except openai.OpenAIError as exc:
            logger.warning("Frame analysis call failed: %s", exc)
            report = text_only_report('The video analysis service is unavailable. Please try again later.',
                                      exercise)
            return report.model_copy(update={'confidence_score': FAILED_CALL_CONFIDENCE})
        return parse_video_analysis(raw, exercise)
