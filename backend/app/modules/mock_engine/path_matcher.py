"""Request path vs. endpoint path pattern matching"""
from dataclasses import dataclass, field
from typing import Dict, List


PARAM_MARKER = ":"


@dataclass
class PathMatch:
    matched: bool
    params: Dict[str, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.matched


def split_path(path: str) -> List[str]:
    """Split on '/' dropping empty segments, so leading/trailing slashes don't matter"""
    return [segment for segment in (path or "").split("/") if segment]


def is_param_segment(segment: str) -> bool:
    return segment.startswith(PARAM_MARKER) and len(segment) > 1


def is_bare_parameter(pattern_path: str) -> bool:
    """True for a one-segment pattern like ':id' (a parameter path)"""
    segments = split_path(pattern_path)
    return len(segments) == 1 and is_param_segment(segments[0])


def match_path(request_path: str, pattern_path: str) -> PathMatch:
    """
    Match ``request_path`` against ``pattern_path``.

    A bare parameter pattern (':id') binds the last request segment and
    matches any non-empty request. Otherwise segment counts must be equal;
    ':name' segments bind the request segment and static segments must be
    equal (case-sensitive).
    """
    request_segments = split_path(request_path)
    pattern_segments = split_path(pattern_path)

    if len(pattern_segments) == 1 and is_param_segment(pattern_segments[0]):
        if not request_segments:
            return PathMatch(False)
        return PathMatch(True, {pattern_segments[0][1:]: request_segments[-1]})

    if len(request_segments) != len(pattern_segments):
        return PathMatch(False)

    params: Dict[str, str] = {}
    for pattern_segment, request_segment in zip(pattern_segments, request_segments):
        if is_param_segment(pattern_segment):
            params[pattern_segment[1:]] = request_segment
        elif pattern_segment != request_segment:
            return PathMatch(False)

    return PathMatch(True, params)
