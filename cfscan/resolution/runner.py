"""
Resolution Runner
Loads the provider ranges, streams the input file through the worker pool
and reports what happened.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from ..core.config import ConfigManager
from ..core.importer import iter_input_lines, open_input_file
from ..ranges.address_ranges import AddressRangeSet
from .cache import ResolutionCache
from .pool import WorkerPool
from .processor import InputProcessor
from .resolver import LookupFunc, Resolver


def run_resolution(
    input_file: Union[str, Path],
    config: ConfigManager,
    sink: Callable[[str], None] = print,
    lookup: Optional[LookupFunc] = None,
    quiet: bool = False
) -> Dict:
    """
    Run the resolution pipeline over an input file.

    Args:
        input_file: File with one IP, URL or hostname per line
        config: Loaded configuration
        sink: Receives each formatted result line
        lookup: Name lookup override, defaults to the system resolver
        quiet: Suppress the summary

    Returns:
        Result dict with success status and run statistics
    """
    start_time = datetime.now()

    ranges_file = Path(config.get('ranges', 'file', default='ip.conf'))
    try:
        ranges = AddressRangeSet.load(ranges_file)
    except OSError as e:
        return {'success': False, 'error': f'Error loading address ranges from {ranges_file}: {e}'}

    if not quiet:
        print(f"[RANGES] Loaded {len(ranges)} ranges from {ranges_file}", file=sys.stderr)

    try:
        handle = open_input_file(Path(input_file))
    except OSError as e:
        return {'success': False, 'error': f'Could not open file: {e}'}

    cache = ResolutionCache()
    resolver = Resolver(cache, lookup=lookup)
    processor = InputProcessor(resolver, ranges, config.get('ranges', 'label', default='cloudflare'))

    pool = WorkerPool(
        processor.process,
        workers=config.get('workers'),
        queue_size=config.get('queue_size'),
        sink=sink
    )

    with handle:
        pool.run(iter_input_lines(handle))

    elapsed = (datetime.now() - start_time).total_seconds()
    cache_stats = cache.stats()
    pool_stats = pool.stats()

    if not quiet:
        print(f"\n[RESOLVE] Summary:", file=sys.stderr)
        print(f"  Inputs processed: {pool_stats['emitted']}", file=sys.stderr)
        print(f"  Failed: {pool_stats['failed']}", file=sys.stderr)
        print(f"  Unique hostnames: {cache_stats['entries']}", file=sys.stderr)
        print(f"  Cache hits/misses: {cache_stats['hits']}/{cache_stats['misses']}", file=sys.stderr)
        print(f"  Lookups: {resolver.lookups}", file=sys.stderr)
        print(f"  Time elapsed: {elapsed:.1f}s", file=sys.stderr)

    return {
        'success': True,
        'processed': pool_stats['emitted'],
        'failed': pool_stats['failed'],
        'ranges': len(ranges),
        'cache': cache_stats,
        'lookups': resolver.lookups,
        'elapsed_seconds': round(elapsed, 2)
    }
