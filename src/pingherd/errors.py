from typing import Optional


class ProbeError(Exception):
    """Base class for failures that end a single target's probe."""

    def __init__(self, target: str, message: str) -> None:
        super().__init__(f"{target}: {message}")
        self.target = target


class ProbeLaunchError(ProbeError):
    """The probe process could not be started or its stdout attached."""

    def __init__(self, target: str, cause: Optional[BaseException] = None) -> None:
        detail = f"failed to launch probe ({cause})" if cause else "failed to launch probe"
        super().__init__(target, detail)
        self.cause = cause


class ProbeExecutionError(ProbeError):
    """The probe process ran but exited with a non-zero status."""

    def __init__(self, target: str, returncode: int) -> None:
        super().__init__(target, f"failed with exit code: {returncode}")
        self.returncode = returncode


class ProbeStreamError(ProbeError):
    """Reading the probe's output failed part way through."""

    def __init__(self, target: str, cause: BaseException) -> None:
        super().__init__(target, f"error reading probe output ({cause})")
        self.cause = cause
