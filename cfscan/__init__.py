"""
cfscan - Resolve IPs, URLs and hostnames and flag provider address ranges.

Packages:
    - core: configuration and input reading
    - ranges: provider address ranges (membership checks, updates)
    - resolution: classifier, cache, resolver, worker pool, runner
"""

__version__ = '1.0.0'
