"""
Range Fetcher
Downloads a provider's published IPv4 ranges and writes them to the ranges file.
"""

import ipaddress
import random
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional

import requests


class RangeFetcher:
    """Fetches published CIDR lists over HTTP"""

    def __init__(self, config: Optional[Dict] = None):
        config = config or {}
        self.name = "fetch"
        self.source_urls = config.get('source_urls', ['https://www.cloudflare.com/ips-v4'])
        self.timeout = config.get('timeout', 30)
        self.max_retries = config.get('max_retries', 3)
        self.retry_delay = config.get('retry_delay', 2)  # Base delay in seconds

    def fetch(self) -> List[str]:
        """
        Download every configured source and merge the results.

        Returns:
            Unique IPv4 CIDR blocks in first-seen order

        Raises:
            RuntimeError: if a source keeps failing after all retries
        """
        ranges = []
        seen = set()

        for url in self.source_urls:
            print(f"[FETCH] Downloading {url}", file=sys.stderr)
            for cidr in self._parse(self._download(url)):
                if cidr not in seen:
                    seen.add(cidr)
                    ranges.append(cidr)

        print(f"[FETCH] Got {len(ranges)} ranges", file=sys.stderr)
        return ranges

    def _download(self, url: str) -> str:
        """GET with retry and exponential backoff."""
        headers = {"User-Agent": "cfscan/1.0"}
        last_error = None

        for attempt in range(self.max_retries):
            try:
                response = requests.get(url, headers=headers, timeout=self.timeout)

                if response.status_code in (500, 502, 503, 429):
                    last_error = f"HTTP {response.status_code}"
                    if attempt < self.max_retries - 1:
                        delay = self.retry_delay * (2 ** attempt) + random.uniform(0, 1)
                        print(f"[FETCH] {url}: HTTP {response.status_code}, "
                              f"retry {attempt + 1}/{self.max_retries} in {delay:.1f}s", file=sys.stderr)
                        time.sleep(delay)
                        continue
                    break

                if response.status_code != 200:
                    body_preview = (response.text or "").strip().replace("\n", " ")[:200]
                    raise RuntimeError(f"{url}: HTTP {response.status_code}: {body_preview}")

                return response.text

            except requests.exceptions.Timeout:
                last_error = f"Timeout after {self.timeout}s"
            except requests.exceptions.RequestException as e:
                last_error = f"Request failed: {e}"

            if attempt < self.max_retries - 1:
                delay = self.retry_delay * (2 ** attempt) + random.uniform(0, 1)
                print(f"[FETCH] {url}: {last_error}, retry {attempt + 1}/{self.max_retries} in {delay:.1f}s",
                      file=sys.stderr)
                time.sleep(delay)

        raise RuntimeError(f"{url}: {last_error or 'Max retries exceeded'}")

    def _parse(self, body: str) -> List[str]:
        ranges = []
        for line in body.splitlines():
            entry = line.strip()
            if not entry or entry.startswith('#'):
                continue
            try:
                network = ipaddress.ip_network(entry, strict=False)
            except ValueError:
                print(f"[FETCH] Dropping malformed entry: {entry[:80]!r}", file=sys.stderr)
                continue
            if network.version == 4:
                ranges.append(str(network))
        return ranges


def update_ranges_file(config: Dict, ranges_file: Path) -> Dict:
    """
    Refresh the ranges file from the provider.

    Args:
        config: 'ranges' section of the configuration
        ranges_file: Destination file

    Returns:
        Result dict with success status and output info
    """
    fetcher = RangeFetcher(config)

    try:
        ranges = fetcher.fetch()
    except RuntimeError as e:
        return {'success': False, 'error': str(e)}

    if not ranges:
        return {'success': False, 'error': 'Provider returned no usable ranges'}

    ranges_file = Path(ranges_file)
    ranges_file.parent.mkdir(parents=True, exist_ok=True)
    with open(ranges_file, 'w', encoding='utf-8') as f:
        for cidr in ranges:
            f.write(f"{cidr}\n")

    return {
        'success': True,
        'count': len(ranges),
        'output_file': str(ranges_file)
    }
