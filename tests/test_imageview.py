import numpy as np
import pytest

from polytrack.imageview import ImageHolder, MouseEvent, MouseTool, Rect


def make_image(width=100, height=80):
    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[..., 0] = np.arange(width, dtype=np.uint8)[None, :]
    image[..., 1] = np.arange(height, dtype=np.uint8)[:, None]
    return image


@pytest.fixture
def holder():
    h = ImageHolder(parent="owner")
    h.set_image(make_image())
    return h


def test_set_image_sizes_window(holder):
    assert (holder.window_width, holder.window_height) == (100, 80)
    assert holder.image.shape == (80, 100, 3)
    assert np.array_equal(holder.image_raw, holder.image)


def test_set_image_rejects_bad_shape():
    with pytest.raises(ValueError):
        ImageHolder().set_image(np.zeros(5))


def test_window_size_zero_keeps_value(holder):
    holder.set_window_size(0, 50)
    assert (holder.window_width, holder.window_height) == (100, 50)


@pytest.mark.parametrize("point", [(0, 0), (10, 20), (99, 79)])
def test_coordinate_round_trip_with_pan(holder, point):
    holder.pan_offset = (7, -3)
    screen = holder.image_to_screen(*point)
    assert holder.screen_to_image(*screen) == point


def test_zoom_without_image_is_ignored():
    h = ImageHolder()
    h.zoom_in(1.0)
    h.zoom_out(0.5)
    assert h.zoom_ratio == 1.0


def test_zoom_in_keeps_window_centre_fixed(holder):
    before = holder.screen_to_image(50, 40)
    holder.zoom_in(1.0)
    assert holder.zoom_ratio == 2.0
    assert holder.screen_to_image(50, 40) == before
    assert holder.pan_anchor == holder.pan_offset


def test_zoom_in_respects_limit(holder):
    holder.set_zoom_limit(2.0)
    holder.zoom_in(1.0)
    assert holder.zoom_ratio == 1.0


def test_zoom_set_absolute(holder):
    holder.zoom_in(3.0, incremental=False)
    assert holder.zoom_ratio == 3.0


def test_zoom_out_respects_minimum(holder):
    holder.zoom_out(0.75)
    assert holder.zoom_ratio == 1.0
    holder.zoom_out(0.5)
    assert holder.zoom_ratio == 0.5


def test_restore_defaults(holder):
    holder.zoom_in(1.0)
    holder.restore_defaults()
    assert holder.zoom_ratio == 1.0
    assert holder.pan_offset == (0, 0)


def test_compute_view_without_image():
    assert ImageHolder().compute_view() is None


def test_compute_view_full_image(holder):
    visible, start = holder.compute_view()
    assert start == (0, 0)
    assert holder.image_raw_view == Rect(0, 0, 100, 80)
    assert np.array_equal(visible, holder.image)


def test_compute_view_positive_pan(holder):
    holder.pan_offset = (10, 5)
    visible, start = holder.compute_view()
    assert start == (10, 5)
    assert visible.shape[:2] == (75, 90)
    assert np.array_equal(visible, holder.image[:75, :90])


def test_compute_view_negative_pan(holder):
    holder.pan_offset = (-10, -5)
    visible, start = holder.compute_view()
    assert start == (0, 0)
    assert holder.image_raw_view.x == 10 and holder.image_raw_view.y == 5
    assert np.array_equal(visible, holder.image[5:, 10:])


def test_compute_view_rescales_when_zoomed(holder):
    holder.zoom_ratio = 2.0
    holder.compute_view()
    assert holder.image_raw.shape[:2] == (160, 200)
    assert np.array_equal(holder.image_raw[::2, ::2], holder.image)


def test_pan_mouse_toggle(holder):
    holder.set_pan_mouse(True)
    assert holder.mouse_tool is MouseTool.PAN
    holder.set_pan_mouse(False)
    assert holder.mouse_tool is MouseTool.NO_TOOL
    holder.set_mouse_state(MouseTool.ZOOM)
    assert holder.mouse_tool is MouseTool.ZOOM


def test_pan_drag_moves_offset(holder):
    holder.set_pan_mouse()
    holder.on_left_down(MouseEvent(10, 10, left_down=True))
    holder.on_mouse_motion(MouseEvent(15, 13, left_down=True))
    holder.on_mouse_motion(MouseEvent(20, 20, left_down=True))
    assert holder.pan_offset == (10, 10)
    assert holder.pan_anchor == (20, 20)


def test_callbacks_receive_parent(holder):
    calls = []
    holder.left_up_callback = lambda e, p: calls.append(("up", e.x, p))
    holder.right_up_callback = lambda e, p: calls.append(("rup", e.x, p))
    holder.left_double_click_callback = lambda e, p: calls.append(("dbl", e.x, p))
    holder.left_drag_callback = lambda e, p: calls.append(("ldrag", e.x, p))
    holder.right_drag_callback = lambda e, p: calls.append(("rdrag", e.x, p))
    holder.on_left_up(MouseEvent(1, 1))
    holder.on_right_up(MouseEvent(2, 2))
    holder.on_left_double_click(MouseEvent(3, 3))
    holder.on_mouse_motion(MouseEvent(4, 4, left_down=True, right_down=True))
    assert calls == [
        ("up", 1, "owner"),
        ("rup", 2, "owner"),
        ("dbl", 3, "owner"),
        ("ldrag", 4, "owner"),
        ("rdrag", 4, "owner"),
    ]


def test_left_down_callback_preempts_pan_anchor(holder):
    seen = []
    holder.set_pan_mouse()
    holder.left_down_callback = lambda e, p: seen.append((e.x, e.y))
    holder.on_left_down(MouseEvent(30, 40, left_down=True))
    assert seen == [(30, 40)]
    assert holder.pan_anchor == (0, 0)


def test_disable_all_callbacks(holder):
    seen = []
    holder.left_up_callback = lambda e, p: seen.append(e)
    holder.disable_all_callbacks()
    holder.on_left_up(MouseEvent(1, 1))
    assert seen == []
    assert holder.left_up_callback is None


def test_drag_callback_not_called_in_pan_mode(holder):
    seen = []
    holder.left_drag_callback = lambda e, p: seen.append(e)
    holder.set_pan_mouse()
    holder.on_mouse_motion(MouseEvent(5, 5, left_down=True))
    assert seen == []
    assert holder.pan_offset == (5, 5)