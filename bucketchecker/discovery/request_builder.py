#!/usr/bin/env python3
"""
Probe Request Builder
Builds the anonymous read (listing) and write (test upload) requests for a target.
Pure functions: no network I/O happens here.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from ..utils.config import ProbeConfig
from .classifier import Target
from .providers import Provider, AZURE_BLOB_DOMAIN, GCS_DOMAIN, REGION_KEYS, provider_domain


@dataclass(frozen=True)
class ProbeRequest:
    """HTTP request description for a single probe"""
    method: str
    url: str
    body: Optional[bytes] = None
    headers: Dict[str, str] = field(default_factory=dict)
    # A redirected write never reached the bucket
    allow_redirects: bool = True


def _region(target: Target, config: ProbeConfig) -> str:
    if target.region:
        return target.region
    return config.region_for(REGION_KEYS[target.provider])


def base_url(target: Target, config: Optional[ProbeConfig] = None) -> str:
    """Root URL of the bucket/container, ending in '/'"""
    config = config or ProbeConfig()
    provider = target.provider

    if provider in (Provider.AWS_S3, Provider.DIGITALOCEAN_SPACES, Provider.LINODE_OBJECT_STORAGE):
        region = _region(target, config) if provider.is_regional else ""
        return f"http://{target.bucket_name}.{provider_domain(provider, region)}/"
    if provider is Provider.AZURE_BLOB:
        return f"https://{target.bucket_name}.{AZURE_BLOB_DOMAIN}/"
    if provider is Provider.GCP_STORAGE:
        return f"https://{GCS_DOMAIN}/{target.bucket_name}/"
    # Unknown: treat the identifier as a hostname
    return f"http://{target.bucket_name}/"


def build_read_probe(target: Target, config: Optional[ProbeConfig] = None) -> ProbeRequest:
    """GET request that returns a bucket listing when anonymous reads are allowed"""
    url = base_url(target, config)
    if target.provider is Provider.AZURE_BLOB:
        url += "?restype=container&comp=list"
    return ProbeRequest(method="GET", url=url)


def build_write_probe(target: Target, config: Optional[ProbeConfig] = None) -> ProbeRequest:
    """PUT request uploading the fixed test object"""
    config = config or ProbeConfig()
    headers = {"Content-Type": "text/plain"}
    if target.provider is Provider.AZURE_BLOB:
        # Put Blob rejects requests without a blob type
        headers["x-ms-blob-type"] = "BlockBlob"

    return ProbeRequest(
        method="PUT",
        url=base_url(target, config) + config.test_object_key,
        body=config.test_object_body.encode("utf-8"),
        headers=headers,
        allow_redirects=False,
    )
