"""Media directory scanning and capture-date extraction."""