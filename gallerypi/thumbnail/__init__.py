"""Thumbnail generation and background loading."""