"""Call-site resolution by walking the interpreter stack."""

import inspect
from types import FrameType
from typing import Generator, List, Optional

from .constants import MAX_FRAMES


def _frames(skip: int) -> Generator[FrameType, None, None]:
    """
    Yield frames outward from the caller of the public function that
    invoked this generator, skipping `skip` of them first. At most
    MAX_FRAMES frames are considered, counted from that caller.
    """
    frame = inspect.currentframe()
    try:
        # _frames -> locate/locate_all -> caller
        for _ in range(2):
            if frame is None:
                return
            frame = frame.f_back
        for index in range(MAX_FRAMES):
            if frame is None:
                return
            if index >= skip:
                yield frame
            frame = frame.f_back
    finally:
        del frame


def _resolve(frame: FrameType) -> Optional[str]:
    filename = frame.f_code.co_filename
    lineno = frame.f_lineno
    # pseudo files: <string>, <stdin>, <frozen importlib._bootstrap>
    if not filename or filename.startswith("<") or not lineno:
        return None
    return f"{filename}:{lineno}"


def locate(skip: int = 0) -> str:
    """
    Return "<file>:<line>" of the first resolvable frame, starting `skip`
    frames above the caller. Returns "" when no frame resolves.
    """
    for frame in _frames(skip):
        location = _resolve(frame)
        if location:
            return location
    return ""


def locate_all(app_name: str, skip: int = 0) -> List[str]:
    """
    Return every resolvable frame whose path contains "/<app_name>/",
    innermost first.
    """
    needle = f"/{app_name}/"
    out = []
    for frame in _frames(skip):
        location = _resolve(frame)
        if location and needle in location.replace("\\", "/"):
            out.append(location)
    return out
