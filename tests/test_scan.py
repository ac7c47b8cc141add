import os
import queue
from datetime import datetime, timezone

import pytest

from gallerypi.db.database import Database
from gallerypi.db.queries import get_all_items_ordered
from gallerypi.scanner.scan import BatchComplete, Complete, Scanner


def _drain(q):
    events = []
    while not q.empty():
        events.append(q.get_nowait())
    return events


def _write(path, stamp):
    path.write_bytes(b"data")
    os.utime(path, (stamp, stamp))


STAMP = int(datetime(2022, 3, 10, 12, 0, tzinfo=timezone.utc).timestamp())


@pytest.fixture
def db(tmp_path):
    with Database(tmp_path / "db" / "m.db") as database:
        yield database


@pytest.fixture
def media(tmp_path):
    root = tmp_path / "media"
    root.mkdir()
    for name in ("a.jpg", "b.png", "c.mp4"):
        _write(root / name, STAMP)
    _write(root / "notes.txt", STAMP)
    return root


def test_scan_indexes_media(db, media):
    events = queue.Queue()
    assert Scanner(media, events).run(db) == 3
    items = get_all_items_ordered(db.conn)
    assert sorted(os.path.basename(i.path) for i in items) == ["a.jpg", "b.png", "c.mp4"]
    for item in items:
        assert (item.year, item.month) == (2022, 3)
        assert item.mtime == STAMP
        assert item.media_date == STAMP
        assert item.thumb_ready is False
    assert {i.media_type for i in items if i.path.endswith(".mp4")} == {"video"}
    assert _drain(events)[-1] == Complete(total=3)


def test_rescan_skips_unchanged_and_updates_changed(db, media):
    Scanner(media, queue.Queue()).run(db)
    ids_before = {i.path: i.id for i in get_all_items_ordered(db.conn)}
    later = STAMP + 86400 * 60
    os.utime(media / "a.jpg", (later, later))
    events = queue.Queue()
    assert Scanner(media, events).run(db) == 3
    items = {i.path: i for i in get_all_items_ordered(db.conn)}
    assert {p: i.id for p, i in items.items()} == ids_before
    changed = items[str(media / "a.jpg")]
    assert changed.mtime == later
    assert changed.month != 3
    assert _drain(events) == [Complete(total=3)]


def test_batch_event_emitted(db, tmp_path):
    root = tmp_path / "many"
    root.mkdir()
    for i in range(50):
        _write(root / f"p{i}.jpg", STAMP)
    events = queue.Queue()
    Scanner(root, events).run(db)
    assert _drain(events) == [BatchComplete(new_items=50), Complete(total=50)]


def test_scan_empty_directory(db, tmp_path):
    events = queue.Queue()
    assert Scanner(tmp_path / "absent", events).run(db) == 0
    assert _drain(events) == [Complete(total=0)]
    assert get_all_items_ordered(db.conn) == []