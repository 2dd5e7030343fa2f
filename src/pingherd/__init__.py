__all__ = [
    "ProbeOrchestrator",
    "run_probes",
    "run_probe",
    "classify_line",
    "RunConfiguration",
    "ProbeConfiguration",
    "ProbeReport",
    "ProbeError",
    "render_text",
    "render_json",
]


from .core import ProbeOrchestrator, run_probes
from .errors import ProbeError
from .models import ProbeConfiguration, ProbeReport, RunConfiguration
from .parsing import classify_line
from .rendering import render_json, render_text
from .runner import run_probe
