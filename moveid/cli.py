"""
Command line entry point.

    moveid analyze squat_video.mp4 --exercise agachamento --output report.pdf
    moveid audit --exercise deadlift --samples 500
    moveid serve --port 8000
"""
import argparse
import json
import logging
import mimetypes
import sys
from datetime import datetime
from pathlib import Path

import numpy as np
import pandas as pd

from moveid.audit import band_violations, sample_reports, summarize
from moveid.config import get_settings
from moveid.generator import describe_upload, generate_analysis
from moveid.report import ReportRenderer, report_filename
from moveid.session import AnalysisSession
from moveid.uploads import UploadRejected, validate_upload

logger = logging.getLogger(__name__)


def analyze_file(path, exercise_type=None, frame_path=None, subject_name='User',
                 output=None, seed=None, include_charts=True):
    """
    Analyse a local video file and write the PDF report.

    Returns the finished AnalysisSession and the path of the written report.
    """
    settings = get_settings()
    path = Path(path)
    content_type, _ = mimetypes.guess_type(path.name)
    validate_upload('video', content_type, path.stat().st_size, settings.max_video_bytes)

    session = AnalysisSession()
    session.select_file(path.name)
    session.start_analysis()

    rng = np.random.default_rng(seed)
    report = generate_analysis(exercise_type, rng=rng)
    session.update_progress(60)

    source_image = Path(frame_path).read_bytes() if frame_path else None
    generated_at = datetime.now()
    renderer = ReportRenderer(
        report,
        source_image=source_image,
        subject_name=subject_name,
        exercise_label=exercise_type,
        generated_at=generated_at,
        include_charts=include_charts,
        include_source_image=source_image is not None,
    )
    pdf = renderer.render()

    output = Path(output) if output else Path.cwd() / report_filename(report.exercise_type, generated_at)
    output.write_bytes(pdf)
    session.complete(report)

    logger.info("Report generated: %s (%d pages)", output, renderer.page_count)
    return session, output


def _cmd_analyze(args):
    try:
        session, output = analyze_file(
            args.file,
            exercise_type=args.exercise,
            frame_path=args.frame,
            subject_name=args.name,
            output=args.output,
            seed=args.seed,
            include_charts=not args.no_charts,
        )
    except UploadRejected as exc:
        logger.error("%s: %s", args.file, exc.message)
        return 1

    if args.json:
        size = Path(args.file).stat().st_size
        payload = {
            "success": True,
            "analysis": session.report.model_dump(),
            "metadata": describe_upload(session.file_name, size, args.exercise).model_dump(),
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(f"Score: {session.report.score}/100 ({session.report.exercise_type})")
        print(f"Report generated: {output}")
    return 0


def _cmd_audit(args):
    frame = sample_reports(args.exercise, samples=args.samples, seed=args.seed)
    with pd.option_context('display.max_rows', None, 'display.width', 120):
        print(summarize(frame).round(2))

    violations = band_violations(frame, args.exercise)
    for column, value, (low, high) in violations:
        print(f"OUT OF BAND: {column}={value} not in [{low}, {high}]")
    print(f"{len(frame)} reports sampled, {len(violations)} values out of band")
    return 1 if violations else 0


def _cmd_serve(args):
    import uvicorn
    uvicorn.run("moveid.api:app", host=args.host, port=args.port,
                log_level=get_settings().log_level.lower())
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog='moveid', description="MoveID movement analysis")
    sub = parser.add_subparsers(dest='command', required=True)

    analyze = sub.add_parser('analyze', help="Analyse a video file and write a PDF report")
    analyze.add_argument('file', help="Video file to analyse")
    analyze.add_argument('--exercise', default=None,
                         help="Exercise label, e.g. agachamento, squat, deadlift")
    analyze.add_argument('--output', default=None, help="PDF output path")
    analyze.add_argument('--frame', default=None, help="Still image to embed in the report")
    analyze.add_argument('--name', default='User', help="Subject name shown in the report")
    analyze.add_argument('--seed', type=int, default=None, help="Random seed")
    analyze.add_argument('--no-charts', action='store_true', help="Leave out the joint angle chart")
    analyze.add_argument('--json', action='store_true', help="Print the analysis envelope as JSON")
    analyze.set_defaults(func=_cmd_analyze)

    audit = sub.add_parser('audit', help="Sample the mock generator and check its bands")
    audit.add_argument('--exercise', default='squat')
    audit.add_argument('--samples', type=int, default=200)
    audit.add_argument('--seed', type=int, default=None)
    audit.set_defaults(func=_cmd_audit)

    serve = sub.add_parser('serve', help="Run the HTTP API")
    serve.add_argument('--host', default='127.0.0.1')
    serve.add_argument('--port', type=int, default=8000)
    serve.set_defaults(func=_cmd_serve)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=get_settings().log_level, stream=sys.stderr,
                        format='%(levelname)s:%(name)s:%(message)s')
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
