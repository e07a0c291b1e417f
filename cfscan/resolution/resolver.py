"""
Resolver
Hostname lookups through the host system resolver, memoized in a ResolutionCache.
"""

import ipaddress
import socket
import threading
from typing import Callable, List, Optional, Tuple

from .cache import ResolutionCache


LookupFunc = Callable[[str], List[str]]


def system_lookup(hostname: str) -> List[str]:
    """
    Resolve hostname with getaddrinfo.

    Blocking, with no timeout of its own. Any failure yields an empty list:
    "does not resolve" and "resolves to nothing" are deliberately the same
    answer.
    """
    try:
        infos = socket.getaddrinfo(hostname, None)
    except (OSError, UnicodeError, ValueError):
        return []

    addresses = []
    seen = set()
    for _family, _type, _proto, _canonname, sockaddr in infos:
        address = sockaddr[0]
        if address not in seen:
            seen.add(address)
            addresses.append(address)
    return addresses


class Resolver:
    """Resolves hostnames, consulting the shared cache first"""

    def __init__(self, cache: ResolutionCache, lookup: Optional[LookupFunc] = None):
        """
        Args:
            cache: Cache shared by all workers of the run
            lookup: Name lookup function, defaults to the system resolver
        """
        self.cache = cache
        self._lookup = lookup or system_lookup
        self._count_lock = threading.Lock()
        self.lookups = 0

    def resolve(self, hostname: str) -> List[str]:
        """Addresses for hostname in resolver order; empty if it does not resolve"""
        cached = self.cache.get(hostname)
        if cached is not None:
            return list(cached)

        with self._count_lock:
            self.lookups += 1

        try:
            addresses = self._lookup(hostname)
        except (OSError, UnicodeError, ValueError):
            addresses = []

        return list(self.cache.insert(hostname, addresses))


def split_addresses(addresses: List[str]) -> Tuple[List[str], List[str]]:
    """
    Split addresses into (ipv4, ipv6), keeping their order.

    IPv4-mapped IPv6 addresses are reported as IPv4. Strings that are not
    addresses are dropped.
    """
    ipv4s = []
    ipv6s = []

    for raw in addresses:
        try:
            address = ipaddress.ip_address(raw)
        except ValueError:
            continue

        if address.version == 4:
            ipv4s.append(str(address))
        elif address.ipv4_mapped is not None:
            ipv4s.append(str(address.ipv4_mapped))
        else:
            ipv6s.append(str(address))

    return ipv4s, ipv6s
