import asyncio
import threading
import time

import pytest

from conftest import make_record
from zip_renamer.domain.models import ArchiveRecord
from zip_renamer.domain.services import (
    RenameResolver,
    build_index,
    find_duplicate_identifiers,
    summarize,
)
from zip_renamer.exceptions import ContentReadError


@pytest.fixture
def source_records():
    return [
        make_record("a/01.txt"),
        make_record("a/02.txt"),
        make_record("b/01_dup.txt"),
    ]


def test_build_index_last_record_wins(source_records):
    index = build_index(source_records)

    assert index == {"01": "b/01_dup.txt", "02": "a/02.txt"}


def test_build_index_skips_directories_and_unnumbered_files():
    records = [
        make_record("05_folder/", is_directory=True),
        make_record("readme.txt"),
        make_record("05_folder/06_file.txt"),
    ]

    assert build_index(records) == {"06": "05_folder/06_file.txt"}


def test_find_duplicate_identifiers(source_records):
    assert find_duplicate_identifiers(source_records) == {"01": ["a/01.txt", "b/01_dup.txt"]}


def test_resolve_matched_and_unmatched(source_records):
    resolver = RenameResolver(build_index(source_records))
    targets = [
        make_record("x/02_old.txt", b"two"),
        make_record("99_unmatched.txt", b"nine"),
        make_record("notes.txt", b"plain"),
    ]

    entries = resolver.resolve(targets)

    assert [(e.output_path, e.content) for e in entries] == [
        ("a/02.txt", b"two"),
        ("99_unmatched.txt", b"nine"),
        ("notes.txt", b"plain"),
    ]


def test_resolve_skips_directories(source_records):
    resolver = RenameResolver(build_index(source_records))
    targets = [make_record("01_dir/", is_directory=True), make_record("01_dir/01_file.txt", b"f")]

    entries = resolver.resolve(targets)

    assert [e.output_path for e in entries] == ["b/01_dup.txt"]


def test_plan_reports_identifier_and_match(source_records):
    resolver = RenameResolver(build_index(source_records))

    decisions = resolver.plan([make_record("02_old.txt"), make_record("99.txt"), make_record("x.txt")])

    assert [(d.output_path, d.identifier, d.matched) for d in decisions] == [
        ("a/02.txt", "02", True),
        ("99.txt", "99", False),
        ("x.txt", None, False),
    ]
    assert decisions[0].renamed
    assert not decisions[1].renamed


class SlowContent:
    """Content handle whose read time decreases with position."""

    def __init__(self, data: bytes, delay: float) -> None:
        self.data = data
        self.delay = delay

    def read(self) -> bytes:
        time.sleep(self.delay)
        return self.data


def test_resolve_async_keeps_target_order_regardless_of_completion():
    records = [
        ArchiveRecord(path=f"{i:02d}.txt", is_directory=False, content=SlowContent(str(i).encode(), 0.05 - i * 0.01))
        for i in range(5)
    ]
    resolver = RenameResolver({"00": "zero.txt"})

    entries = asyncio.run(resolver.resolve_async(records))

    assert [e.output_path for e in entries] == ["zero.txt", "01.txt", "02.txt", "03.txt", "04.txt"]
    assert [e.content for e in entries] == [b"0", b"1", b"2", b"3", b"4"]


def test_resolve_async_respects_concurrency_limit():
    active = 0
    peak = 0
    lock = threading.Lock()

    class CountingContent:
        def read(self) -> bytes:
            nonlocal active, peak
            with lock:
                active += 1
                peak = max(peak, active)
            time.sleep(0.01)
            with lock:
                active -= 1
            return b"x"

    records = [ArchiveRecord(path=f"{i}.txt", is_directory=False, content=CountingContent()) for i in range(10)]

    entries = asyncio.run(RenameResolver({}, max_concurrent_reads=2).resolve_async(records))

    assert len(entries) == 10
    assert peak <= 2


def test_resolve_async_aborts_on_read_failure():
    class BrokenContent:
        def read(self) -> bytes:
            raise ContentReadError("boom", path="02.txt")

    records = [make_record("01.txt", b"ok"), ArchiveRecord(path="02.txt", is_directory=False, content=BrokenContent())]

    with pytest.raises(ContentReadError):
        asyncio.run(RenameResolver({}).resolve_async(records))


def test_summarize_counts(source_records):
    resolver = RenameResolver(build_index(source_records))
    decisions = resolver.plan(
        [
            make_record("01_a.txt"),
            make_record("01_b.txt"),
            make_record("02_c.txt"),
            make_record("77_d.txt"),
            make_record("readme.md"),
        ]
    )

    report = summarize(decisions, source_records)

    assert report.summary.total_target_files == 5
    assert report.summary.renamed == 3
    assert report.summary.unmatched == 1
    assert report.summary.without_identifier == 1
    assert report.summary.duplicate_source_identifiers == 1
    assert report.summary.colliding_output_paths == 1
    assert report.collisions == {"b/01_dup.txt": ["01_a.txt", "01_b.txt"]}
    assert report.has_warnings()
    assert [d.original_path for d in report.iter_unmatched()] == ["77_d.txt", "readme.md"]
