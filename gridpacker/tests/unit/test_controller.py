"""
Unit tests for GridController

Tests loading, item updates from untyped values, drawing, container
resize handling and teardown.
"""
import pytest

from gridpacker.config import GridConfig
from gridpacker.controller import GridController
from gridpacker.layout import GridItem


@pytest.fixture
def loaded(controller):
    """Controller holding A at (0, 0) and B at (0, 2), both 2x1"""
    a = GridItem(name='A', size_x=2, row=0, col=0)
    b = GridItem(name='B', size_x=2, row=0, col=2)
    controller.load([a, b])
    return controller, a, b


class TestLoad:
    """Tests for load / add_item"""

    def test_positioned_items_float_after_load(self, controller, assert_valid_layout):
        """A requested at row 3 floats below B, which was auto-placed at the top"""
        a = GridItem(name='A', row=3, col=0)
        b = GridItem(name='B')
        controller.load([a, b])
        assert (b.row, b.col) == (0, 0)
        assert (a.row, a.col) == (1, 0)
        assert controller.grid_height == 2
        assert controller.loaded
        assert_valid_layout(controller.engine)

    def test_auto_placement_row_major(self, controller):
        items = [controller.new_item(name=str(i)) for i in range(4)]
        controller.load(items)
        assert [(i.row, i.col) for i in items] == [(0, 0), (0, 2), (0, 4), (1, 0)]

    def test_load_records_committed_size(self, controller):
        item = GridItem(size_x=3, size_y=2)
        controller.load([item])
        assert (item.old_size_x, item.old_size_y) == (3, 2)

    def test_oversized_item(self, controller):
        item = GridItem(size_x=8, row=0, col=2)
        controller.load([item])
        assert (item.size_x, item.col) == (6, 0)


class TestNewItem:
    """Tests for new_item"""

    def test_untyped_values(self, controller):
        item = controller.new_item('x', row='2', col=None, size_x='0', size_y='3')
        assert item.row == 2
        assert item.col is None
        assert item.size_x == 2
        assert item.size_y == 3

    def test_defaults_follow_config(self):
        controller = GridController(GridConfig.dashboard(), container_width=1200)
        item = controller.new_item()
        assert (item.size_x, item.size_y) == (3, 2)
        assert not item.is_positioned


class TestSetItemPosition:
    """Tests for set_item_position"""

    def test_move_then_float(self, loaded):
        """Moving A to (5, 4) after load floats it back up to row 0"""
        controller, a, b = loaded
        controller.set_item_position(a, 5, 4)
        assert (a.row, a.col) == (0, 4)
        assert (b.row, b.col) == (0, 2)

    def test_string_coordinates(self, loaded):
        controller, a, b = loaded
        controller.set_item_position(a, '0', '4')
        assert (a.row, a.col) == (0, 4)

    def test_move_into_occupied_cell(self, loaded, assert_valid_layout):
        controller, a, b = loaded
        controller.set_item_position(a, 0, 2)
        assert (a.row, a.col) == (0, 2)
        assert (b.row, b.col) == (1, 2)
        assert_valid_layout(controller.engine)


class TestSetItemSize:
    """Tests for set_item_size"""

    def test_empty_string_ignored(self, loaded):
        controller, a, b = loaded
        assert controller.set_item_size(a, 'x', '') is False
        assert a.size_x == 2

    def test_invalid_falls_back_to_default(self, loaded):
        controller, a, b = loaded
        controller.set_item_size_y(a, 3)
        assert a.size_y == 3
        controller.set_item_size_y(a, 'tall')
        assert a.size_y == 1

    def test_growth_pushes_down(self, loaded, assert_valid_layout):
        controller, a, b = loaded
        assert controller.set_item_size_x(a, 3)
        assert (b.row, b.col) == (1, 2)
        assert controller.grid_height == 2
        assert_valid_layout(controller.engine)

    def test_unchanged_size(self, loaded):
        controller, a, b = loaded
        assert controller.set_item_size(a, 'x', 2) is False

    def test_axis_case_insensitive(self, loaded):
        controller, a, b = loaded
        controller.set_item_size(a, 'Y', 2)
        assert a.size_y == 2

    def test_unknown_axis(self, loaded):
        controller, a, b = loaded
        with pytest.raises(ValueError, match="Unknown size axis"):
            controller.set_item_size(a, 'z', 2)


class TestDrawing:
    """Tests for boxes, container height and resize handling"""

    def test_boxes(self, loaded):
        controller, a, b = loaded
        boxes = controller.boxes()
        assert (boxes[a.uid].top, boxes[a.uid].left) == (10, 10)
        assert (boxes[a.uid].width, boxes[a.uid].height) == (190, 90)
        assert boxes[b.uid].left == 210

    def test_container_height(self, loaded):
        controller, a, b = loaded
        assert controller.container_height() == 110

    def test_resize_limits(self, controller):
        limits = controller.resize_limits()
        assert (limits.min_width, limits.max_width) == (90, 590)

    def test_undrawn_grid(self):
        controller = GridController()
        assert controller.mapper is None
        with pytest.raises(RuntimeError, match="not been drawn"):
            controller.boxes()

    def test_mobile_boxes(self, loaded):
        controller, a, b = loaded
        boxes = controller.redraw(500)
        assert controller.layout.is_mobile
        assert all(box.is_flow for box in boxes.values())

    def test_set_options_redraws(self, loaded):
        controller, a, b = loaded
        boxes = controller.set_options(rowHeight=50)
        assert boxes[a.uid].height == 40


class TestContainerResize:
    """Tests for on_container_resize"""

    def test_new_width_redraws_and_notifies(self, loaded):
        controller, a, b = loaded
        events = []
        controller.subscribe(events.append)
        assert controller.on_container_resize(910)
        assert controller.layout.cur_col_width == 150
        assert [e.name for e in events] == ['grid-resized']
        assert events[0].payload == (910, 160)

    def test_same_width_ignored(self, loaded):
        controller, a, b = loaded
        assert not controller.on_container_resize(610)

    def test_ignored_while_moving(self, loaded):
        controller, a, b = loaded
        a.dragging = True
        assert not controller.on_container_resize(910)
        assert controller.layout.cur_width == 610

    def test_no_notification_when_not_resizable(self, loaded):
        controller, a, b = loaded
        controller.set_options(resizable={'enabled': False})
        events = []
        controller.subscribe(events.append)
        assert controller.on_container_resize(910)
        assert events == []


class TestTeardown:
    """Tests for remove_item / detach_item / destroy"""

    def test_remove_item(self, loaded):
        controller, a, b = loaded
        controller.remove_item(a)
        assert a not in controller.grid
        assert controller.items == [b]

    def test_detach_cancels_gesture(self, loaded):
        controller, a, b = loaded
        controller.begin_drag(a)
        status = controller.detach_item(a)
        assert status.ok
        assert a.uid not in controller.sessions
        assert not a.dragging
        assert not controller.preview.visible

    def test_detach_records_failure(self, loaded, monkeypatch):
        """A failing step is reported instead of raised"""
        controller, a, b = loaded

        def broken(item):
            raise RuntimeError("index corrupted")

        monkeypatch.setattr(controller.engine, 'remove_item', broken)
        status = controller.detach_item(a)
        assert not status.ok
        assert status.errors == ["remove from grid: index corrupted"]

    def test_destroy(self, loaded):
        controller, a, b = loaded
        events = []
        controller.subscribe(events.append)
        status = controller.destroy()
        assert status.ok
        assert len(controller.grid) == 0
        assert not controller.loaded
        controller.set_options(draggable={'enabled': False})
        assert events == []


class TestSetOptions:
    """Tests for set_options on a grid holding items"""

    def test_columns_fixed_once_items_placed(self, loaded, assert_valid_layout):
        """Shrinking the grid under placed items is refused"""
        controller, a, b = loaded
        with pytest.raises(ValueError, match="Cannot change columns"):
            controller.set_options(columns=3)
        assert controller.config.columns == 6
        assert_valid_layout(controller.engine)

    def test_same_columns_accepted(self, loaded):
        controller, a, b = loaded
        controller.set_options({'columns': 6, 'rowHeight': 50})
        assert controller.layout.cur_row_height == 50

    def test_columns_on_empty_grid(self, controller):
        controller.set_options(columns=4)
        assert controller.layout.cur_col_width == 150

    def test_row_limits_update_height(self, loaded):
        controller, a, b = loaded
        controller.set_options(minRows=5)
        assert controller.grid_height == 5
        controller.set_options(min_rows=1)
        assert controller.grid_height == 1
