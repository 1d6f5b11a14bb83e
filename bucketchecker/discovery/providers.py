#!/usr/bin/env python3
"""
Cloud Storage Providers
Supported object-storage providers, their display labels and hostname suffixes.
"""

from enum import Enum


class Provider(Enum):
    """Object-storage provider. The value is the label shown in reports."""
    AWS_S3 = "AWS S3"
    AZURE_BLOB = "Azure Blob"
    GCP_STORAGE = "GCP Storage"
    DIGITALOCEAN_SPACES = "DigitalOcean Spaces"
    LINODE_OBJECT_STORAGE = "Linode Object Storage"
    UNKNOWN = "Unknown"

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_regional(self) -> bool:
        """Providers whose virtual-hosted domain embeds a region"""
        return self in (Provider.DIGITALOCEAN_SPACES, Provider.LINODE_OBJECT_STORAGE)


# Hostname suffixes / path-style hosts
S3_DOMAIN = "s3.amazonaws.com"
SPACES_DOMAIN = "digitaloceanspaces.com"
LINODE_DOMAIN = "linodeobjects.com"
AZURE_BLOB_DOMAIN = "blob.core.windows.net"
GCS_DOMAIN = "storage.googleapis.com"

# Config key used for each regional provider's default region
REGION_KEYS = {
    Provider.DIGITALOCEAN_SPACES: "digitalocean",
    Provider.LINODE_OBJECT_STORAGE: "linode",
}


def provider_domain(provider: Provider, region: str = "") -> str:
    """
    Virtual-hosted domain for S3-compatible providers

    Args:
        provider: AWS S3, DigitalOcean Spaces or Linode Object Storage
        region: Region subdomain, required for the regional providers

    Returns:
        Domain the bucket name is prefixed to, e.g. "nyc3.digitaloceanspaces.com"
    """
    if provider is Provider.AWS_S3:
        return S3_DOMAIN
    if provider is Provider.DIGITALOCEAN_SPACES:
        return f"{region}.{SPACES_DOMAIN}"
    if provider is Provider.LINODE_OBJECT_STORAGE:
        return f"{region}.{LINODE_DOMAIN}"
    raise ValueError(f"{provider.label} has no virtual-hosted domain")
