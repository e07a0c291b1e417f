"""
Result Formatter
Renders one input's outcome as a single output line.
"""

from dataclasses import dataclass, field
from typing import List


DEFAULT_LABEL = 'cloudflare'


@dataclass
class ResolutionResult:
    original: str
    ipv4: List[str] = field(default_factory=list)
    ipv6: List[str] = field(default_factory=list)
    in_range: bool = False


def format_result(result: ResolutionResult, label: str = DEFAULT_LABEL) -> str:
    """
    Format as `<original> : [<ipv4,...>] [<ipv6,...>] [<label>]`.

    Each bracketed group only appears when it has content, so an input that
    resolved to nothing renders as `<original> : `.
    """
    groups = []
    if result.ipv4:
        groups.append(f"[{','.join(result.ipv4)}]")
    if result.ipv6:
        groups.append(f"[{','.join(result.ipv6)}]")
    if result.in_range and result.ipv4:
        groups.append(f"[{label}]")

    return f"{result.original} : " + ' '.join(groups)


def format_invalid_url(original: str) -> str:
    return f"Invalid URL: {original}"
