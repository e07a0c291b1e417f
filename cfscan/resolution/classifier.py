"""
Input Classifier
Decides whether an input line is a literal address, a URL or a bare hostname.
"""

import ipaddress
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import urlsplit


# RFC 3986 scheme: ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
SCHEME_PATTERN = re.compile(r'^[A-Za-z][A-Za-z0-9+.\-]*$')

SCHEME_SEPARATOR = '://'


class InputKind(Enum):
    ADDRESS = 'address'
    URL = 'url'
    HOSTNAME = 'hostname'
    INVALID_URL = 'invalid_url'


@dataclass(frozen=True)
class ClassifiedInput:
    """
    One classified input line.

    `host` is the literal address for ADDRESS, the hostname to resolve for
    URL and HOSTNAME, and None for INVALID_URL. `original` is always the
    untouched input, which is what gets displayed.
    """
    original: str
    kind: InputKind
    host: Optional[str] = None

    @property
    def needs_resolution(self) -> bool:
        return self.kind in (InputKind.URL, InputKind.HOSTNAME)


def classify_input(raw: str) -> ClassifiedInput:
    """
    Classify a trimmed, non-empty input line.

    Args:
        raw: Input line

    Returns:
        ClassifiedInput describing how the line should be handled
    """
    address = parse_address(raw)
    if address is not None:
        return ClassifiedInput(raw, InputKind.ADDRESS, address)

    if SCHEME_SEPARATOR in raw:
        hostname = extract_hostname(raw)
        if hostname:
            return ClassifiedInput(raw, InputKind.URL, hostname)
        return ClassifiedInput(raw, InputKind.INVALID_URL)

    return ClassifiedInput(raw, InputKind.HOSTNAME, raw)


def parse_address(raw: str) -> Optional[str]:
    """Canonical form of an IPv4/IPv6 literal, or None"""
    try:
        return str(ipaddress.ip_address(raw))
    except ValueError:
        return None


def extract_hostname(url: str) -> Optional[str]:
    """
    Host component of a URL.

    Returns None when the scheme is not a valid URL scheme or the host is
    missing or malformed.
    """
    scheme = url.split(SCHEME_SEPARATOR, 1)[0]
    if not SCHEME_PATTERN.match(scheme):
        return None

    try:
        parsed = urlsplit(url)
        hostname = parsed.hostname
        parsed.port
    except ValueError:
        # Unbalanced IPv6 brackets, non-numeric or out-of-range ports
        return None

    if not hostname:
        return None

    if any(ch.isspace() or not ch.isprintable() for ch in hostname):
        return None

    if '[' in parsed.netloc and parse_address(hostname) is None:
        return None

    return hostname
