#!/usr/bin/env python3
"""
Bucket Permission Prober
Runs one anonymous read probe and one anonymous write probe per target,
fanning targets out over a bounded thread pool.

Outcomes are handed back in completion order, not input order.
"""

import logging
import concurrent.futures
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from ..analysis.response_interpreter import is_readable, is_writable
from ..discovery.classifier import Target
from ..discovery.request_builder import build_read_probe, build_write_probe
from ..utils.config import ProbeConfig
from ..utils.http_client import ProbeHTTPClient


@dataclass(frozen=True)
class ProbeOutcome:
    """Permissions found for one target"""
    target: Target
    readable: bool = False
    writable: bool = False

    @property
    def is_open(self) -> bool:
        return self.readable or self.writable

    @property
    def permissions(self) -> List[str]:
        perms = []
        if self.readable:
            perms.append("read")
        if self.writable:
            perms.append("write")
        return perms


class BucketProber:
    """Concurrent read/write permission checks for classified targets"""

    def __init__(self, config: Optional[ProbeConfig] = None, client: Optional[ProbeHTTPClient] = None):
        """
        Args:
            config: Probe configuration; defaults to ProbeConfig()
            client: Shared HTTP client. Anything with send(ProbeRequest) works.
        """
        self.config = config or ProbeConfig()
        self.client = client or ProbeHTTPClient(self.config)
        self.logger = logging.getLogger('BucketProber')

    def check_read(self, target: Target) -> bool:
        response = self.client.send(build_read_probe(target, self.config))
        return is_readable(target.provider, response)

    def check_write(self, target: Target) -> bool:
        response = self.client.send(build_write_probe(target, self.config))
        return is_writable(target.provider, response)

    def probe(self, target: Target) -> ProbeOutcome:
        """Run both probes for a target. Never raises."""
        readable = self._guarded(self.check_read, target, "read")
        writable = self._guarded(self.check_write, target, "write")
        return ProbeOutcome(target=target, readable=readable, writable=writable)

    def _guarded(self, check: Callable[[Target], bool], target: Target, kind: str) -> bool:
        try:
            return check(target)
        except Exception as e:
            # A broken probe only costs this capability of this target
            self.logger.debug(f"{kind} probe for {target.bucket_name} raised {type(e).__name__}: {e}")
            return False

    def run(self, targets: Iterable[Target],
            on_result: Optional[Callable[[ProbeOutcome], None]] = None,
            executor: Optional[concurrent.futures.Executor] = None) -> List[ProbeOutcome]:
        """
        Probe all targets concurrently

        Args:
            targets: Classified targets
            on_result: Called with each outcome as soon as it completes
            executor: Task-submission pool to use; a ThreadPoolExecutor of
                      config.max_workers threads is created when omitted

        Returns:
            Outcomes in completion order, one per target
        """
        targets = list(targets)
        outcomes: List[ProbeOutcome] = []
        if not targets:
            return outcomes

        self.logger.info(f"Probing {len(targets)} targets with {self.config.max_workers} workers")

        owns_executor = executor is None
        if owns_executor:
            executor = concurrent.futures.ThreadPoolExecutor(max_workers=self.config.max_workers)

        try:
            futures = {executor.submit(self.probe, target): target for target in targets}
            for future in concurrent.futures.as_completed(futures):
                try:
                    outcome = future.result()
                except Exception as e:
                    target = futures[future]
                    self.logger.debug(f"Probe task for {target.bucket_name} failed: {e}")
                    outcome = ProbeOutcome(target=target)
                outcomes.append(outcome)
                if on_result:
                    on_result(outcome)
        except KeyboardInterrupt:
            if owns_executor:
                executor.shutdown(wait=False, cancel_futures=True)
                owns_executor = False
            raise
        finally:
            if owns_executor:
                executor.shutdown(wait=True)

        open_count = sum(1 for o in outcomes if o.is_open)
        self.logger.info(f"Probed {len(outcomes)} targets, {open_count} with open permissions")
        return outcomes
