import pytest

from gallerypi.db.queries import MediaItem
from gallerypi.gallery.model import GalleryRowData, ThumbnailData, build_rows, row_to_view
from gallerypi.gallery.row_types import ImageRow, MonthHeader


def make_items(specs):
    """specs: list of (year, month, count, media_types or None)."""
    items = []
    next_id = 1
    for year, month, count, types in specs:
        for i in range(count):
            media_type = types[i] if types else "image"
            items.append(
                MediaItem(
                    id=next_id,
                    path=f"/media/{next_id}.jpg",
                    mtime=next_id,
                    media_date=next_id,
                    year=year,
                    month=month,
                    media_type=media_type,
                )
            )
            next_id += 1
    return items


def test_empty_gallery():
    assert build_rows([], 4) == ([], [], {})


def test_single_month_partial():
    rows, months, positions = build_rows(make_items([(2025, 4, 3, None)]), 4)
    assert len(rows) == 2
    assert isinstance(rows[0], MonthHeader)
    assert [t.item_id for t in rows[1].items] == [1, 2, 3]
    assert months == [(2025, 4, "Apr 2025", 0)]
    assert positions == {1: (1, 0), 2: (1, 1), 3: (1, 2)}


def test_single_month_full():
    rows, months, positions = build_rows(make_items([(2025, 3, 12, None)]), 4)
    assert len(rows) == 4
    assert [len(r.items) for r in rows[1:]] == [4, 4, 4]
    assert months == [(2025, 3, "Mar 2025", 0)]
    assert positions[12] == (3, 3)


def test_multi_month():
    specs = [(2025, 4, 6, None), (2025, 3, 4, None), (2025, 2, 8, None)]
    rows, months, _ = build_rows(make_items(specs), 4)
    assert [(label, idx) for _, _, label, idx in months] == [
        ("Apr 2025", 0),
        ("Mar 2025", 3),
        ("Feb 2025", 5),
    ]
    assert len(rows) == 8
    assert all(isinstance(rows[idx], MonthHeader) for *_, idx in months)


def test_mixed_media():
    may_types = ["image", "video", "image", "video", "video", "image", "image"]
    apr_types = ["video", "image", "video", "image"]
    specs = [(2025, 5, 7, may_types), (2025, 4, 4, apr_types)]
    rows, months, positions = build_rows(make_items(specs), 4)
    assert [(m[2], m[3]) for m in months] == [("May 2025", 0), ("Apr 2025", 3)]
    views = [row_to_view(r) for r in rows]
    assert [t.media_type for t in views[1].items] == may_types[:4]
    assert [t.media_type for t in views[2].items] == may_types[4:]
    assert [t.media_type for t in views[4].items] == apr_types
    assert positions[8] == (4, 0)


def test_large_gallery():
    specs = [(2024, m, 8, None) for m in range(10, 0, -1)]
    rows, months, positions = build_rows(make_items(specs), 4)
    labels = [m[2] for m in months]
    assert labels == [
        "Oct 2024", "Sep 2024", "Aug 2024", "Jul 2024", "Jun 2024",
        "May 2024", "Apr 2024", "Mar 2024", "Feb 2024", "Jan 2024",
    ]
    assert [m[3] for m in months] == list(range(0, 30, 3))
    assert len(rows) == 30
    assert len(positions) == 80


def test_positions_point_at_items():
    rows, _, positions = build_rows(make_items([(2025, 1, 9, None), (2024, 12, 2, None)]), 3)
    for item_id, (row_idx, col_idx) in positions.items():
        assert rows[row_idx].items[col_idx].item_id == item_id


def test_repeated_month_key_starts_new_header():
    items = make_items([(2025, 1, 1, None), (2024, 12, 1, None), (2025, 1, 1, None)])
    rows, months, _ = build_rows(items, 4)
    assert [m[:2] for m in months] == [(2025, 1), (2024, 12), (2025, 1)]
    assert sum(isinstance(r, MonthHeader) for r in rows) == 3


def test_zero_columns_rejected():
    with pytest.raises(ValueError):
        build_rows(make_items([(2025, 1, 1, None)]), 0)


def test_row_to_view_header():
    view = row_to_view(MonthHeader("April 2025", 2025, 4))
    assert view == GalleryRowData(is_header=True, header_label="April 2025")
    assert view.item_count == 0


def test_row_to_view_image_row():
    rows, _, _ = build_rows(make_items([(2025, 4, 3, ["image", "video", "image"])]), 4)
    view = row_to_view(rows[1])
    assert view.is_header is False
    assert view.header_label == ""
    assert view.item_count == 3
    assert view.items[1] == ThumbnailData(item_id=2, media_type="video")
    assert all(t.thumb_ready is False and t.thumb_image is None for t in view.items)


def test_row_to_view_rejects_other_types():
    with pytest.raises(TypeError):
        row_to_view("not a row")


def test_empty_image_row_view():
    assert row_to_view(ImageRow([])).item_count == 0