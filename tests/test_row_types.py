from gallerypi.db.queries import MediaItem
from gallerypi.gallery.row_types import GalleryThumb, ImageRow, MonthHeader


def test_from_item_copies_fields():
    item = MediaItem(
        id=7,
        path="/p/a.jpg",
        mtime=99,
        media_date=100,
        year=2024,
        month=2,
        media_type="video",
        thumb_path="/t/a.jpg",
        thumb_ready=True,
    )
    thumb = GalleryThumb.from_item(item)
    assert thumb == GalleryThumb(
        item_id=7,
        path="/p/a.jpg",
        thumb_path="/t/a.jpg",
        thumb_ready=True,
        media_type="video",
        mtime=99,
    )


def test_is_header():
    assert MonthHeader("Apr 2025", 2025, 4).is_header is True
    assert ImageRow([]).is_header is False


def test_image_rows_do_not_share_items():
    first, second = ImageRow(), ImageRow()
    first.items.append(GalleryThumb(1, "/a", None, False, "image", 0))
    assert second.items == []