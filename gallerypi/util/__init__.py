"""Small helpers: hashing, paths and time formatting."""