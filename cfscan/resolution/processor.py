"""
Input Processor
Runs one input through classification, resolution and formatting.
"""

from typing import Optional

from .classifier import ClassifiedInput, InputKind, classify_input
from .formatter import DEFAULT_LABEL, ResolutionResult, format_invalid_url, format_result
from .resolver import Resolver, split_addresses
from ..ranges.address_ranges import AddressRangeSet


class InputProcessor:
    """
    Per-input pipeline used as the worker pool handler.

    Holds no per-input state, so one instance serves every worker.
    """

    def __init__(self, resolver: Resolver, ranges: AddressRangeSet, label: str = DEFAULT_LABEL):
        self.resolver = resolver
        self.ranges = ranges
        self.label = label

    def process(self, line: str) -> str:
        classified = classify_input(line)
        if classified.kind is InputKind.INVALID_URL:
            return format_invalid_url(classified.original)
        return format_result(self.build_result(classified), self.label)

    __call__ = process

    def build_result(self, classified: ClassifiedInput) -> Optional[ResolutionResult]:
        """Resolve a classified input into a ResolutionResult"""
        if classified.kind is InputKind.ADDRESS:
            addresses = [classified.host]
        elif classified.needs_resolution:
            addresses = self.resolver.resolve(classified.host)
        else:
            return None

        ipv4s, ipv6s = split_addresses(addresses)

        # Only the first IPv4 address is checked against the provider ranges
        in_range = bool(ipv4s) and self.ranges.contains(ipv4s[0])

        return ResolutionResult(
            original=classified.original,
            ipv4=ipv4s,
            ipv6=ipv6s,
            in_range=in_range
        )
