"""
Analysis view state.

Idle -> FileSelected -> Analyzing(progress) -> ReportReady(report), with
reset() returning to Idle from anywhere.
"""
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ViewState(Enum):
    IDLE = 'idle'
    FILE_SELECTED = 'file_selected'
    ANALYZING = 'analyzing'
    REPORT_READY = 'report_ready'


class InvalidTransition(RuntimeError):
    pass


class AnalysisSession:
    """Tracks one user's way from choosing a file to holding a finished report."""

    def __init__(self):
        self.state = ViewState.IDLE
        self.file_name = None
        self.progress = 0
        self.report = None

    def _require(self, action, *allowed):
        if self.state not in allowed:
            raise InvalidTransition(f"Cannot {action} while {self.state.value}")

    def select_file(self, file_name):
        self._require('select a file', ViewState.IDLE, ViewState.FILE_SELECTED, ViewState.REPORT_READY)
        self.file_name = file_name
        self.progress = 0
        self.report = None
        self.state = ViewState.FILE_SELECTED

    def start_analysis(self):
        self._require('start the analysis', ViewState.FILE_SELECTED)
        self.progress = 0
        self.state = ViewState.ANALYZING
        logger.debug("Analyzing %s", self.file_name)

    def update_progress(self, progress):
        self._require('report progress', ViewState.ANALYZING)
        # never goes backwards
        self.progress = max(self.progress, min(100, max(0, int(progress))))

    def complete(self, report):
        self._require('complete the analysis', ViewState.ANALYZING)
        self.progress = 100
        self.report = report
        self.state = ViewState.REPORT_READY

    def reset(self):
        self.state = ViewState.IDLE
        self.file_name = None
        self.progress = 0
        self.report = None
