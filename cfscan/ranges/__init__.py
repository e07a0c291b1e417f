"""
Provider address ranges: loading, membership checks and updates.
"""

from .address_ranges import AddressRangeSet
from .fetcher import RangeFetcher, update_ranges_file

__all__ = [
    'AddressRangeSet',
    'RangeFetcher',
    'update_ranges_file'
]
