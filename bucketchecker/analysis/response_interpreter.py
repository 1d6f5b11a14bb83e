#!/usr/bin/env python3
"""
Response Interpreter
Decides from a probe response whether anonymous read or write access is open.

A read counts only when the body looks like the provider's bucket listing;
a write counts on any 2xx status. A missing response (transport failure)
is never a positive result.
"""

from typing import Dict, Optional, Tuple

from ..discovery.providers import Provider
from ..utils.http_client import ProbeResponse


# Substrings that identify a bucket listing, per provider dialect
LISTING_MARKERS: Dict[Provider, Tuple[str, ...]] = {
    Provider.AWS_S3: ("<ListBucketResult",),
    Provider.DIGITALOCEAN_SPACES: ("<ListBucketResult",),
    Provider.LINODE_OBJECT_STORAGE: ("<ListBucketResult",),
    Provider.AZURE_BLOB: ("EnumerationResults",),
    Provider.GCP_STORAGE: ("ListBucketResult", "xml"),
    # Unknown hosts have no dialect to trust
    Provider.UNKNOWN: (),
}


def is_readable(provider: Provider, response: Optional[ProbeResponse]) -> bool:
    """True if the read probe returned 2xx and a recognised listing body"""
    if response is None or not response.ok:
        return False
    markers = LISTING_MARKERS.get(provider, ())
    return any(marker in response.text for marker in markers)


def is_writable(provider: Provider, response: Optional[ProbeResponse]) -> bool:
    """True if the write probe returned 2xx. The body is not inspected."""
    if response is None:
        return False
    return response.ok
