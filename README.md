# gallerypi

A library and small command for a photo and video gallery. It indexes a media
folder into a SQLite database and groups the items by month. It builds the rows
of a month-grouped thumbnail grid and makes square JPEG thumbnails on demand.
It can also play videos full screen in an external `mpv` process.

## Install

    pip install .

Video playback needs the `mpv` player on your `PATH`. It also needs a system
with Unix domain sockets, because `mpv` is controlled through its IPC socket.

## The `gallerypi` command

    gallerypi [--config FILE] [--db FILE] [--thumb-dir DIR] [--no-scan]

The command does the following:

1. Loads the configuration.
2. Makes sure the thumbnail cache directory exists.
3. Opens (or creates) the metadata database.
4. Scans the media directory, unless `scan_on_startup` is false or `--no-scan`
   is given.
5. Prints one line per month, newest first: the month label, a tab and the
   number of items, for example `Apr 2025	12`.

Each option replaces a default location:

- `--config` sets the configuration file.
- `--db` sets the database file.
- `--thumb-dir` sets the thumbnail directory.

The log level comes from the `GALLERYPI_LOG` environment variable, for example
`debug`, `info` or `warning`. The default is `info`. Logging goes to stderr.

The exit status is 1 when any of these fails:

- the configuration cannot be read or parsed;
- a directory cannot be created;
- the database reports an error.

## Configuration

The settings live in `config.toml` under `gallerypi/` in the user configuration
directory. `gallerypi.config.config_path()` returns the exact path. If the file
is missing, defaults are used.

Every section is optional. A section that is present must give all of its
fields. Otherwise `gallerypi.config.ConfigError` is raised.

    [gallery]
    media_dir = "/home/pi/Pictures"
    grid_columns = 4
    thumbnail_size = 256

    [performance]
    thumb_gen_threads = 2
    thumb_cache_entries = 150
    scan_on_startup = true

    [ui]
    fullscreen = true

    [video]
    hardware_decode = true
    default_volume = 80
    loop_videos = true

`Config.load(path)` reads a file. With `None` it reads the default path.
`Config.save(path)` writes one. `Config.from_dict` and `Config.to_dict` convert
to and from plain tables.

The metadata database (`metadata.db`) and the thumbnails (`thumbs/`) are kept
in the user cache directory. `gallerypi.config.db_path()` and
`gallerypi.config.thumb_dir()` return those paths.

## Using the library

    import queue

    from gallerypi.config import Config, db_path
    from gallerypi.db.database import Database
    from gallerypi.gallery.controller import GalleryController
    from gallerypi.scanner.scan import Scanner

    config = Config.load(None)
    events = queue.Queue()
    with Database(db_path()) as db:
        Scanner(config.gallery.media_dir, events).run(db)
        gallery = GalleryController(config.gallery.grid_columns)
        gallery.reload(db, float(config.gallery.thumbnail_size))
        for entry in gallery.build_month_model():
            print(entry.label, entry.row_index)

### Supported files and dates

Supported files are `jpg`, `jpeg`, `png` and `webp` images and `mp4` videos.
Symbolic links are not followed.

An item's date is its EXIF `DateTimeOriginal`, read as UTC. When that tag is
missing, the file's modification time is used.

### Modules

- `gallerypi.scanner.scan.Scanner` walks the media directory. It adds new or
  changed files to the database and skips files whose stored mtime is
  unchanged. `run(db)` returns the number of media files found. While it runs,
  it puts events on the queue without waiting for room:
  - `BatchComplete` after every 50 new items;
  - `Progress` every 100 files otherwise.

  At the end it always puts `Complete(total)`.
- `gallerypi.db.queries` holds the `MediaItem` and `MonthGroup` records and the
  queries over the index:
  - `upsert_item`
  - `get_existing_mtime`
  - `mark_thumb_ready`
  - `get_items_by_month`
  - `get_all_items_ordered`
  - `get_month_groups`
  - `get_items_needing_thumbnails`
- `gallerypi.gallery.controller.GalleryController` builds the flat list of rows:
  month headers followed by image rows of `n_cols` thumbnails. Its view rows
  are in `row_model`. It can do the following:
  - find the rows that overlap a scroll position with `rows_in_view`;
  - recompute row offsets for a new width with `ensure_row_tops`;
  - set or clear a cell's thumbnail image with `update_thumbnail` and
    `clear_thumbnail`;
  - look up months and items with `row_index_for_month`, `items_in_month`,
    `item_by_id` and `random_month`.
- `gallerypi.thumbnail.generator` has two parts:
  - `generate_thumbnail` writes a center-cropped square JPEG (quality 85). Its
    name is derived from the source path and mtime, and an existing file is
    reused.
  - `start_on_demand_generator` starts a worker thread and returns a job queue
    and a result queue. You put `GenJob` items on the job queue. After the
    worker has marked the thumbnail ready in the database, an
    `(item_id, thumb_path)` pair arrives on the result queue. Putting `None` on
    the job queue stops the worker.
- `gallerypi.thumbnail.loader.ThumbnailLoader` keeps an LRU cache of
  thumbnails and loads them in a background thread.
  - `request` returns a cached image, or queues a load and returns `None`.
  - `poll_results` returns the finished loads.
  - `close` stops the thread.
- `gallerypi.video.player.VideoController` plays a file in `mpv`.
  - `open` starts `mpv` and raises `VideoError` if it cannot be launched.
  - `toggle_pause`, `seek` and `set_volume` control playback. `set_volume`
    takes a 0 to 1 fraction.
  - `poll_state` updates `position`, `duration` and `paused`. `is_playing`
    reports whether a video is playing.
  - `check_exited` reports once that `mpv` has quit.
  - `stop` quits playback.
- `gallerypi.viewer.navigator.ViewerController` steps through one month's items
  with `go_next` and `go_prev`. `load_image` opens a full-size image as RGBA.
  `gallerypi.viewer.gesture.ZoomPanState` keeps a zoom scale, clamped to 1 to
  8, and a pan offset.

## What it does not do

gallerypi has no graphical interface. It opens no window, draws no thumbnail
grid and handles no touch input. The gallery, viewer and zoom classes hold the
state that such a screen would show, but nothing here renders it. The
`gallerypi` command only indexes the library and prints a summary. The
`fullscreen`, `thumb_gen_threads` and `grid_columns` settings are read and
saved, but the command itself does not act on them. Video playback is done
entirely by `mpv` in its own window.