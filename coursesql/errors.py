"""
Error Taxonomy

Every pipeline stage wraps its underlying failure in one of these
exceptions so the CLI can report which stage failed and why.
"""

from typing import List


class CourseQueryError(Exception):
    """Base class for all pipeline failures"""
    stage: str = "pipeline"


class ConfigurationError(CourseQueryError):
    stage = "connect"


class GenerationError(CourseQueryError):
    stage = "generate"


class ExecutionError(CourseQueryError):
    stage = "execute"


class RenderError(CourseQueryError):
    stage = "render"


def error_chain(exc: BaseException) -> List[str]:
    """Collect messages from an exception and its explicit causes, outermost first"""
    messages = []
    current = exc
    while current is not None:
        messages.append(str(current) or type(current).__name__)
        current = current.__cause__
    return messages
