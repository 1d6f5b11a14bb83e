"""
Bucket Checker - Anonymous Cloud Storage Permission Prober
Checks AWS S3, Azure Blob, GCP Storage, DigitalOcean Spaces and Linode
Object Storage buckets for public read (listing) and write access.

Modules:
- discovery.providers: Provider enum, labels and domains
- discovery.classifier: Identifier -> (provider, bucket) classification
- discovery.request_builder: Read/write probe request construction
- analysis.response_interpreter: Provider-specific access decisions
- scanners.probe_runner: Concurrent per-target probing
- reporting.console_report: Streaming status lines and summary
- utils.config: ProbeConfig and YAML loading
- utils.http_client: Shared requests session with timeouts
- utils.input_loader: Identifier list reading
"""

from .discovery.providers import Provider
from .discovery.classifier import Target, classify, classify_lines
from .discovery.request_builder import ProbeRequest, build_read_probe, build_write_probe
from .analysis.response_interpreter import is_readable, is_writable
from .scanners.probe_runner import BucketProber, ProbeOutcome
from .reporting.console_report import ResultAggregator, status_tag
from .utils.config import ProbeConfig, get_probe_config, load_probe_config
from .utils.http_client import ProbeHTTPClient, ProbeResponse
from .utils.input_loader import read_identifiers

__version__ = "1.0.0"
__all__ = [
    # Classification
    "Provider",
    "Target",
    "classify",
    "classify_lines",
    # Requests
    "ProbeRequest",
    "build_read_probe",
    "build_write_probe",
    # Interpretation
    "is_readable",
    "is_writable",
    # Probing
    "BucketProber",
    "ProbeOutcome",
    # Reporting
    "ResultAggregator",
    "status_tag",
    # Config / transport / input
    "ProbeConfig",
    "get_probe_config",
    "load_probe_config",
    "ProbeHTTPClient",
    "ProbeResponse",
    "read_identifiers",
]
