import pytest

from meshworks.viewport import Rect, ViewScreenLocation, Viewport, ViewportRect

WIDTH = 1280
HEIGHT = 720


@pytest.mark.parametrize("location", list(ViewScreenLocation))
def test_screen_quarters_have_half_size(location):
    rect = Viewport(location).resize_to_screen(WIDTH, HEIGHT)
    assert rect.width == WIDTH / 2
    assert rect.height == HEIGHT / 2
    assert rect.min_depth == 0.0
    assert rect.max_depth == 1.0


def test_screen_quarter_corners():
    corners = {
        loc: Viewport(loc).resize_to_screen(WIDTH, HEIGHT) for loc in ViewScreenLocation
    }
    tl = corners[ViewScreenLocation.TOP_LEFT]
    tr = corners[ViewScreenLocation.TOP_RIGHT]
    bl = corners[ViewScreenLocation.BOTTOM_LEFT]
    br = corners[ViewScreenLocation.BOTTOM_RIGHT]
    assert (tl.top_left_x, tl.top_left_y) == (0.0, 0.0)
    assert (tr.top_left_x, tr.top_left_y) == (WIDTH / 2, 0.0)
    assert (bl.top_left_x, bl.top_left_y) == (0.0, HEIGHT / 2)
    assert (br.top_left_x, br.top_left_y) == (WIDTH / 2, HEIGHT / 2)


def test_quarters_tile_the_screen():
    rects = [Viewport(loc).resize_to_screen(WIDTH, HEIGHT) for loc in ViewScreenLocation]
    assert sum(r.width * r.height for r in rects) == WIDTH * HEIGHT
    assert max(r.top_left_x + r.width for r in rects) == WIDTH
    assert max(r.top_left_y + r.height for r in rects) == HEIGHT


def test_no_location_only_sets_depth():
    viewport = Viewport()
    rect = viewport.resize_to_screen(WIDTH, HEIGHT)
    assert rect == ViewportRect(min_depth=0.0, max_depth=1.0)


def test_splits_pick_column_and_row():
    top = Rect(0, 5, 100, 40)
    bottom = Rect(0, 50, 100, 60)
    left = Rect(3, 0, 30, 200)
    right = Rect(40, 0, 70, 200)

    tl = Viewport(ViewScreenLocation.TOP_LEFT).resize_to_splits(top, bottom, left, right)
    assert (tl.top_left_x, tl.top_left_y, tl.width, tl.height) == (
        left.left_top_x, top.left_top_y, left.width, top.height
    )
    tr = Viewport(ViewScreenLocation.TOP_RIGHT).resize_to_splits(top, bottom, left, right)
    assert (tr.top_left_x, tr.top_left_y, tr.width, tr.height) == (
        right.left_top_x, top.left_top_y, right.width, top.height
    )
    bl = Viewport(ViewScreenLocation.BOTTOM_LEFT).resize_to_splits(top, bottom, left, right)
    assert (bl.top_left_x, bl.top_left_y, bl.width, bl.height) == (
        left.left_top_x, bottom.left_top_y, left.width, bottom.height
    )
    br = Viewport(ViewScreenLocation.BOTTOM_RIGHT).resize_to_splits(top, bottom, left, right)
    assert (br.top_left_x, br.top_left_y, br.width, br.height) == (
        right.left_top_x, bottom.left_top_y, right.width, bottom.height
    )


def test_splits_keep_depth_range():
    viewport = Viewport(ViewScreenLocation.TOP_LEFT)
    viewport.resize_to_screen(WIDTH, HEIGHT)
    rect = viewport.resize_to_splits(Rect(), Rect(), Rect(1, 2, 3, 4), Rect())
    assert rect.min_depth == 0.0
    assert rect.max_depth == 1.0


def test_resize_to_rect_copies_rect():
    viewport = Viewport(ViewScreenLocation.BOTTOM_RIGHT)
    target = Rect(12.5, 7.0, 300.0, 150.0)
    rect = viewport.resize_to_rect(target)
    assert (rect.top_left_x, rect.top_left_y, rect.width, rect.height) == (
        target.left_top_x, target.left_top_y, target.width, target.height
    )
    assert viewport.rect == rect
    assert viewport.location is ViewScreenLocation.BOTTOM_RIGHT