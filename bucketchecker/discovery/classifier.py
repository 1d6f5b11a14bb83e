#!/usr/bin/env python3
"""
Identifier Classifier
Turns free-form bucket identifiers (hostnames, path-style URLs or bare names)
into (provider, bucket name) targets.

Recognised forms, checked in this order (first match wins):
- <bucket>.s3.amazonaws.com
- s3.amazonaws.com/<bucket>
- <bucket>[.<region>].digitaloceanspaces.com
- <bucket>[.<region>].linodeobjects.com
- <container>.blob.core.windows.net
- <bucket>.storage.googleapis.com
- storage.googleapis.com/<bucket>
Anything else is kept verbatim as an Unknown-provider hostname.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .providers import (
    Provider,
    S3_DOMAIN,
    SPACES_DOMAIN,
    LINODE_DOMAIN,
    AZURE_BLOB_DOMAIN,
    GCS_DOMAIN,
)


@dataclass(frozen=True)
class Target:
    """A classified bucket/container"""
    provider: Provider
    bucket_name: str
    region: Optional[str] = None  # only for DigitalOcean / Linode hostnames


# (match kind, token, provider) in priority order
#   suffix - whole bucket name is the text before the suffix
#   prefix - bucket name is the first path segment after the host
#   label  - bucket name is the first DNS label, optional region is the second
PATTERNS: List[Tuple[str, str, Provider]] = [
    ("suffix", "." + S3_DOMAIN, Provider.AWS_S3),
    ("prefix", S3_DOMAIN + "/", Provider.AWS_S3),
    ("label", "." + SPACES_DOMAIN, Provider.DIGITALOCEAN_SPACES),
    ("label", "." + LINODE_DOMAIN, Provider.LINODE_OBJECT_STORAGE),
    ("label", "." + AZURE_BLOB_DOMAIN, Provider.AZURE_BLOB),
    ("suffix", "." + GCS_DOMAIN, Provider.GCP_STORAGE),
    ("prefix", GCS_DOMAIN + "/", Provider.GCP_STORAGE),
]


def normalize_identifier(line: str) -> str:
    """Trim whitespace, a leading http(s):// scheme and trailing slashes"""
    text = line.strip()
    for scheme in ("http://", "https://"):
        if text.lower().startswith(scheme):
            text = text[len(scheme):]
            break
    return text.rstrip("/")


def _match(kind: str, token: str, provider: Provider, text: str) -> Optional[Target]:
    if kind == "suffix":
        if text.endswith(token):
            bucket = text[:-len(token)]
            if bucket:
                return Target(provider, bucket)
        return None

    if kind == "prefix":
        if text.startswith(token):
            bucket = text[len(token):].split("/")[0]
            if bucket:
                return Target(provider, bucket)
        return None

    if text.endswith(token):
        labels = text.split(".")
        bucket = labels[0]
        if not bucket:
            return None
        region = None
        # <bucket>.<region>.<domain>.<tld> carries a region label
        if provider.is_regional and len(labels) >= 4:
            region = labels[1]
        return Target(provider, bucket, region)
    return None


def classify(line: str) -> Optional[Target]:
    """
    Classify one input line

    Args:
        line: Raw identifier text

    Returns:
        Target, or None for blank lines. Never raises for non-blank input:
        unrecognised identifiers become Provider.UNKNOWN targets whose
        bucket_name is the normalized text (scheme and trailing slashes
        removed), used as a hostname.
    """
    raw = line.strip()
    if not raw:
        return None
    # "http://" alone normalizes to nothing; keep it as an Unknown hostname
    text = normalize_identifier(raw) or raw

    for kind, token, provider in PATTERNS:
        target = _match(kind, token, provider, text)
        if target:
            return target

    return Target(Provider.UNKNOWN, text)


def classify_lines(lines: Iterable[str]) -> List[Target]:
    """Classify every non-blank line, preserving input order"""
    targets = []
    for line in lines:
        target = classify(line)
        if target:
            targets.append(target)
    return targets
