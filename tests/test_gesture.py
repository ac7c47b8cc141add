from gallerypi.viewer.gesture import MAX_SCALE, MIN_SCALE, ZoomPanState


def test_defaults():
    state = ZoomPanState()
    assert (state.scale, state.offset_x, state.offset_y) == (1.0, 0.0, 0.0)


def test_zoom_in_keeps_offsets():
    state = ZoomPanState(offset_x=5.0, offset_y=-3.0)
    state.apply_zoom(2.0)
    assert state.scale == 2.0
    assert (state.offset_x, state.offset_y) == (5.0, -3.0)


def test_zoom_clamped_to_max():
    state = ZoomPanState()
    state.apply_zoom(100.0)
    assert state.scale == MAX_SCALE


def test_zoom_out_clamps_and_clears_pan():
    state = ZoomPanState(scale=2.0, offset_x=10.0, offset_y=20.0)
    state.apply_zoom(0.1)
    assert state.scale == MIN_SCALE
    assert (state.offset_x, state.offset_y) == (0.0, 0.0)


def test_reset():
    state = ZoomPanState(scale=4.0, offset_x=1.0, offset_y=2.0)
    state.reset()
    assert state == ZoomPanState()