"""Video playback through an external mpv process."""