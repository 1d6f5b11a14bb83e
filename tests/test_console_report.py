import io
import threading

import pytest

from bucketchecker.discovery.classifier import Target
from bucketchecker.discovery.providers import Provider
from bucketchecker.reporting.console_report import (
    BANNER,
    GREEN,
    RED,
    RESET,
    SUMMARY_HEADER,
    YELLOW,
    ResultAggregator,
    status_tag,
)
from bucketchecker.scanners.probe_runner import ProbeOutcome


@pytest.mark.parametrize("readable, writable, tag", [
    (True, True, "[read] [write]"),
    (True, False, "[read]"),
    (False, True, "[write]"),
    (False, False, "[no access]"),
])
def test_status_tag(readable, writable, tag):
    assert status_tag(readable, writable) == tag


def outcome(provider, name, readable=False, writable=False):
    return ProbeOutcome(Target(provider, name), readable, writable)


def test_record_prints_line_immediately():
    stream = io.StringIO()
    agg = ResultAggregator(stream, color=False)
    agg.record(outcome(Provider.AWS_S3, "a", readable=True))
    assert stream.getvalue() == "AWS S3 | a | [read]\n"


def test_colored_tags():
    stream = io.StringIO()
    agg = ResultAggregator(stream, color=True)
    agg.record(outcome(Provider.AWS_S3, "r", readable=True, writable=True))
    agg.record(outcome(Provider.GCP_STORAGE, "w", writable=True))
    agg.record(outcome(Provider.UNKNOWN, "n"))
    lines = stream.getvalue().splitlines()
    assert lines[0] == f"AWS S3 | r | {GREEN}[read] [write]{RESET}"
    assert lines[1] == f"GCP Storage | w | {YELLOW}[write]{RESET}"
    assert lines[2] == f"Unknown | n | {RED}[no access]{RESET}"


def test_summary_lists_only_open_targets_in_record_order():
    stream = io.StringIO()
    agg = ResultAggregator(stream, color=False)
    agg.record(outcome(Provider.AZURE_BLOB, "second", writable=True))
    agg.record(outcome(Provider.AWS_S3, "closed"))
    agg.record(outcome(Provider.LINODE_OBJECT_STORAGE, "first", readable=True, writable=True))
    agg.print_summary()

    lines = stream.getvalue().splitlines()
    header = lines.index(SUMMARY_HEADER)
    assert lines[header + 1:] == [
        "Azure Blob | second | [write]",
        "Linode Object Storage | first | [read, write]",
    ]


def test_summary_with_nothing_open():
    stream = io.StringIO()
    agg = ResultAggregator(stream, color=False)
    agg.record(outcome(Provider.AWS_S3, "closed"))
    agg.print_summary()
    assert stream.getvalue().splitlines()[-1] == SUMMARY_HEADER
    assert agg.summary_lines() == []


def test_provider_labels():
    assert [p.label for p in Provider] == [
        "AWS S3", "Azure Blob", "GCP Storage",
        "DigitalOcean Spaces", "Linode Object Storage", "Unknown",
    ]


def test_banner_plain():
    stream = io.StringIO()
    ResultAggregator(stream, color=False).print_banner()
    assert stream.getvalue().splitlines() == list(BANNER)


def test_concurrent_records_do_not_interleave():
    stream = io.StringIO()
    agg = ResultAggregator(stream, color=False)

    def worker(n):
        for i in range(50):
            agg.record(outcome(Provider.AWS_S3, f"t{n}-{i}", readable=True))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    lines = stream.getvalue().splitlines()
    assert len(lines) == 400
    assert all(line.startswith("AWS S3 | t") and line.endswith(" | [read]") for line in lines)
    assert len(agg.outcomes) == 400
