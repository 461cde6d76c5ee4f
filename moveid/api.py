"""
HTTP API for MoveID.

POST /api/analyze-video   multipart: video, exerciseType
POST /api/analyze-image   multipart: image, analysisType
POST /api/analyze-frames  multipart: frames (repeated), exerciseType
POST /api/report          JSON report -> PDF download
"""
import base64
import binascii
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from moveid.config import Settings, get_settings
from moveid.generator import describe_upload, generate_analysis
from moveid.models import AnalysisReport
from moveid.report import ReportRenderer, report_filename
from moveid.uploads import UploadRejected, validate_upload
from moveid.vision import VisionAnalyzer

logger = logging.getLogger(__name__)

DEFAULT_EXERCISE_LABEL = 'general movement'

app = FastAPI(title="MoveID Movement Analysis API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ReportRequest(BaseModel):
    analysis: AnalysisReport
    subject_name: str = 'User'
    exercise_type: Optional[str] = None
    include_charts: bool = True
    include_source_image: bool = True
    source_image: Optional[str] = None  # base64, optionally as a data URL


def get_vision_analyzer(settings: Settings = Depends(get_settings)) -> VisionAnalyzer:
    return VisionAnalyzer(api_key=settings.openai_api_key, model=settings.openai_model)


@app.exception_handler(UploadRejected)
def upload_rejected_handler(request: Request, exc: UploadRejected):
    logger.info("Rejected upload on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def _server_error(message, exc):
    logger.exception(message)
    return JSONResponse(status_code=500, content={"error": message, "details": str(exc)})


def _read_upload(upload, kind, max_bytes):
    if upload is None:
        raise UploadRejected(f"No {kind} file was uploaded")
    data = upload.file.read()
    validate_upload(kind, upload.content_type, len(data), max_bytes)
    return data


@app.get("/")
def health_check():
    return {"status": "ok"}


@app.post("/api/analyze-video")
def analyze_video(
    video: Optional[UploadFile] = File(None),
    exercise_type: Optional[str] = Form(None, alias="exerciseType"),
    settings: Settings = Depends(get_settings),
):
    data = _read_upload(video, 'video', settings.max_video_bytes)
    label = exercise_type or DEFAULT_EXERCISE_LABEL
    try:
        analysis = generate_analysis(label)
        metadata = describe_upload(video.filename, len(data), label)
    except Exception as exc:
        return _server_error("Internal server error while processing the video", exc)

    return {
        "success": True,
        "analysis": analysis.model_dump(),
        "metadata": metadata.model_dump(),
    }


@app.post("/api/analyze-image")
def analyze_image(
    image: Optional[UploadFile] = File(None),
    analysis_type: str = Form('movement', alias="analysisType"),
    settings: Settings = Depends(get_settings),
    analyzer: VisionAnalyzer = Depends(get_vision_analyzer),
):
    data = _read_upload(image, 'image', settings.max_image_bytes)
    try:
        analysis = analyzer.analyze_image(data, image.content_type, analysis_type)
    except Exception as exc:
        return _server_error("Internal server error while processing the image", exc)

    return {
        "success": True,
        "analysis": analysis.model_dump(exclude_none=True),
        "metadata": {
            "file_name": image.filename,
            "file_size": len(data),
            "analysis_type": analysis_type,
        },
    }


@app.post("/api/analyze-frames")
def analyze_frames(
    frames: Optional[List[UploadFile]] = File(None),
    exercise_type: Optional[str] = Form(None, alias="exerciseType"),
    settings: Settings = Depends(get_settings),
    analyzer: VisionAnalyzer = Depends(get_vision_analyzer),
):
    if not frames:
        raise UploadRejected("No video frames were uploaded")
    images = [_read_upload(frame, 'image', settings.max_image_bytes) for frame in frames]
    try:
        analysis = analyzer.analyze_frames(images, frames[0].content_type, exercise_type)
    except Exception as exc:
        return _server_error("Internal server error while processing the frames", exc)

    return {
        "success": True,
        "analysis": analysis.model_dump(),
        "metadata": {
            "frame_count": len(images),
            "exercise_type": exercise_type or DEFAULT_EXERCISE_LABEL,
        },
    }


def _decode_image(encoded):
    if not encoded:
        return None
    if encoded.startswith('data:') and ',' in encoded:
        encoded = encoded.split(',', 1)[1]
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        logger.warning("Source image is not valid base64, rendering without it")
        return None


@app.post("/api/report")
def create_report(request: ReportRequest):
    generated_at = datetime.now()
    renderer = ReportRenderer(
        request.analysis,
        source_image=_decode_image(request.source_image),
        subject_name=request.subject_name,
        exercise_label=request.exercise_type,
        generated_at=generated_at,
        include_charts=request.include_charts,
        include_source_image=request.include_source_image,
    )
    try:
        pdf = renderer.render()
    except Exception as exc:
        return _server_error("Internal server error while rendering the report", exc)
    filename = report_filename(request.exercise_type or request.analysis.exercise_type, generated_at)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
