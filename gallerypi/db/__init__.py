"""SQLite storage and queries for the media index."""