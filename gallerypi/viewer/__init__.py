"""Image viewer navigation and zoom state."""