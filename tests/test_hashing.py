import string

from gallerypi.util.hashing import thumb_cache_key


def test_key_is_32_hex_chars():
    key = thumb_cache_key("/photos/a.jpg", 1700000000)
    assert len(key) == 32
    assert set(key) <= set(string.hexdigits.lower())


def test_key_is_deterministic():
    keys = {thumb_cache_key("/photos/a.jpg", 5) for _ in range(3)}
    assert len(keys) == 1
    (key,) = keys
    assert len(key) == 32


def test_key_depends_on_mtime():
    assert thumb_cache_key("/photos/a.jpg", 5) != thumb_cache_key("/photos/a.jpg", 6)


def test_key_depends_on_path():
    assert thumb_cache_key("/photos/a.jpg", 5) != thumb_cache_key("/photos/b.jpg", 5)


def test_negative_mtime_is_accepted():
    key = thumb_cache_key("x", -1)
    assert len(key) == 32
    assert key != thumb_cache_key("x", 1)