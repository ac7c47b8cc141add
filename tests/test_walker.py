import os

from gallerypi.scanner.walker import MediaFile, walk_media


def _touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x")
    return path


def test_walk_finds_supported_files(tmp_path):
    a = _touch(tmp_path / "a.jpg")
    b = _touch(tmp_path / "sub" / "b.PNG")
    c = _touch(tmp_path / "sub" / "deep" / "c.mp4")
    d = _touch(tmp_path / "d.jpeg")
    e = _touch(tmp_path / "e.webp")
    _touch(tmp_path / "notes.txt")
    _touch(tmp_path / "noext")
    _touch(tmp_path / "clip.mov")
    found = set(walk_media(tmp_path))
    assert found == {
        MediaFile(a, "image"),
        MediaFile(b, "image"),
        MediaFile(c, "video"),
        MediaFile(d, "image"),
        MediaFile(e, "image"),
    }


def test_walk_skips_directories_named_like_media(tmp_path):
    (tmp_path / "album.jpg").mkdir()
    inner = _touch(tmp_path / "album.jpg" / "x.jpg")
    assert [m.path for m in walk_media(tmp_path)] == [inner]


def test_walk_skips_symlinks(tmp_path):
    target = _touch(tmp_path / "real" / "r.jpg")
    link_dir = tmp_path / "links"
    link_dir.mkdir()
    os.symlink(target, link_dir / "l.jpg")
    assert [m.path for m in walk_media(tmp_path)] == [target]


def test_walk_missing_directory_is_empty(tmp_path):
    assert list(walk_media(tmp_path / "missing")) == []


def test_walk_single_file_root(tmp_path):
    f = _touch(tmp_path / "one.MP4")
    assert list(walk_media(f)) == [MediaFile(f, "video")]