"""
Domain exceptions - Semantic error types for the domain pipelines.

These exceptions abort a pipeline run. Their message is what ends up in
the user's trigger file, so it must be readable without a stack trace.
"""


class PipelineError(Exception):
    """Base class for pipeline domain errors."""

    pass


class ExternalCommandFailure(PipelineError):
    """An external program exited with a non-zero status."""

    def __init__(self, description: str, program: str, returncode: int, stderr: str) -> None:
        self.description = description
        self.program = program
        self.returncode = returncode
        self.stderr = stderr.strip()
        super().__init__(f"{description}: {self.stderr or f'{program} exited with status {returncode}'}")


class ValidationFailure(PipelineError):
    """A generated configuration fragment was rejected by its validator."""

    def __init__(self, path: str, stderr: str) -> None:
        self.path = path
        self.stderr = stderr.strip()
        super().__init__(f"Invalid reverse proxy config: {self.stderr or path}")
