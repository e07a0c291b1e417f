"""
Provider Address Ranges
Holds a provider's published IPv4 CIDR blocks and answers membership queries.
"""

import ipaddress
import sys
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union


AddressLike = Union[str, ipaddress.IPv4Address, ipaddress.IPv6Address]


class AddressRangeSet:
    """
    Read-only set of IPv4 networks.

    Built once at startup and then shared by every worker without locking.
    Membership is a linear scan; the provider lists are short and each query
    is dwarfed by the DNS lookup that precedes it.
    """

    def __init__(self, networks: Optional[Iterable[ipaddress.IPv4Network]] = None):
        self._networks = tuple(networks or ())
        self.skipped = 0

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'AddressRangeSet':
        """
        Load ranges from a file with one CIDR block per line.

        Args:
            path: Ranges file (e.g. ip.conf)

        Returns:
            AddressRangeSet with every line that parsed

        Raises:
            OSError: if the file cannot be opened or read
        """
        path = Path(path)
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            lines = f.readlines()
        return cls.from_lines(lines, source=str(path))

    @classmethod
    def from_lines(cls, lines: Iterable[str], source: str = '<memory>') -> 'AddressRangeSet':
        """Parse CIDR blocks, skipping blanks, comments and malformed entries"""
        networks = []
        skipped = 0

        for lineno, line in enumerate(lines, 1):
            entry = line.strip()
            if not entry or entry.startswith('#'):
                continue

            try:
                network = ipaddress.ip_network(entry, strict=False)
            except ValueError as e:
                print(f"[RANGES] Warning: {source}:{lineno}: could not parse CIDR {entry!r} ({e})",
                      file=sys.stderr)
                skipped += 1
                continue

            if network.version != 4:
                print(f"[RANGES] Skipping IPv6 range {entry} ({source}:{lineno})", file=sys.stderr)
                skipped += 1
                continue

            networks.append(network)

        ranges = cls(networks)
        ranges.skipped = skipped
        return ranges

    def contains(self, address: AddressLike) -> bool:
        """True if the address falls inside at least one loaded range"""
        if isinstance(address, str):
            try:
                address = ipaddress.ip_address(address)
            except ValueError:
                return False

        if address.version != 4:
            return False

        for network in self._networks:
            if address in network:
                return True
        return False

    @property
    def networks(self) -> List[ipaddress.IPv4Network]:
        return list(self._networks)

    def __contains__(self, address: AddressLike) -> bool:
        return self.contains(address)

    def __iter__(self) -> Iterator[ipaddress.IPv4Network]:
        return iter(self._networks)

    def __len__(self) -> int:
        return len(self._networks)
