"""Tests for the minimize/maximize state machine and minimized placement."""

from deskwin.config import EngineConfig
from deskwin.core import WindowEngine, normalize_props
from deskwin.core.geometry import ContainerBounds, Geometry, RenderGeometry
from deskwin.core.registry import WindowRegistry
from deskwin.core.state import LifecycleState, place_minimized


class TestPlaceMinimized:
    def test_empty_container_uses_bottom_right_anchor(self):
        # Given
        registry = WindowRegistry(container=ContainerBounds(height=700, width=1000))
        # When
        top, left = place_minimized(registry.container_bounds(), RenderGeometry(32, 280), registry)
        # Then
        assert (top, left) == (664, 716)

    def test_occupied_anchor_moves_up_past_occupant(self, registry, make_window):
        # Given
        first = make_window("first")
        first.minimize_control.set_minimized(True)
        # When
        top, left = place_minimized(registry.container_bounds(), RenderGeometry(32, 280), registry, exclude="second")
        # Then
        assert top == 664 - (32 + 4)
        assert left == 716

    def test_content_hit_does_not_count_as_occupied(self, registry, make_window):
        # Given a normal window whose content covers the anchor center
        make_window("big", top=600, left=700, width=300, height=100)
        # When
        top, _ = place_minimized(registry.container_bounds(), RenderGeometry(32, 280), registry)
        # Then
        assert top == 664

    def test_excluded_window_is_ignored(self, registry, make_window):
        first = make_window("first")
        first.minimize_control.set_minimized(True)
        top, _ = place_minimized(registry.container_bounds(), RenderGeometry(32, 280), registry, exclude="first")
        assert top == 664


class TestMinimize:
    def test_enter_minimized_footprint_and_anchor(self, make_window):
        # Given
        window = make_window(height=300, width=400, top=50, left=50)
        # When
        window.minimize_control.set_minimized(True)
        # Then
        assert window.lifecycle is LifecycleState.MINIMIZED
        assert window.effective == RenderGeometry(32, 280)
        assert (window.top, window.left) == (664, 716)
        assert not window.content_visible
        assert window.minimize_icon == "unminimize"

    def test_custom_minimized_width_ignores_logical_size(self, make_window):
        window = make_window(height=500, width=600, minimized_width=200)
        window.minimize_control.set_minimized(True)
        assert window.effective == RenderGeometry(height=32, width=200)

    def test_exit_minimized_returns_home(self, make_window):
        # Given
        window = make_window(height=300, width=400, top=50, left=50)
        window.minimize_control.set_minimized(True)
        # When
        window.minimize_control.set_minimized(False)
        # Then
        assert window.lifecycle is LifecycleState.NORMAL
        assert window.geometry == Geometry(top=50, left=50, width=400, height=300)
        assert window.effective == RenderGeometry(300, 400)
        assert window.content_visible
        assert window.minimize_icon == "minimize"

    def test_exit_minimized_ignores_drag_position(self, make_window):
        # Given a window dragged away from its configured position
        window = make_window(height=300, width=400, top=50, left=50)
        window.set_geometry(top=120, left=220)
        window.minimize_control.set_minimized(True)
        # When
        window.minimize_control.set_minimized(False)
        # Then
        assert (window.top, window.left) == (50, 50)

    def test_round_trip_is_lossless(self, make_window):
        # Given
        window = make_window(height=300, width=400, top=50, left=50)
        before = window.geometry
        # When
        for value in (True, False, True, False):
            window.minimize_control.set_minimized(value)
        # Then
        assert window.geometry == before

    def test_second_minimized_window_stacks_above_first(self, make_window):
        # Given
        first = make_window("first", height=300, width=400, top=50, left=50)
        second = make_window("second", height=200, width=300, top=10, left=10)
        first.minimize_control.set_minimized(True)
        # When
        second.minimize_control.set_minimized(True)
        # Then
        assert first.top - second.top >= first.effective.height + 4
        assert second.top + second.effective.height <= first.top
        assert second.left == first.left

    def test_single_pass_can_overlap_a_third_window(self, make_window):
        # Given
        windows = [make_window(name) for name in ("a", "b", "c")]
        # When
        for window in windows:
            window.minimize_control.set_minimized(True)
        # Then the third only checked the anchor once, landing on the second
        assert windows[1].top == windows[2].top == 628

    def test_more_passes_keep_climbing(self, make_window):
        # Given
        config = EngineConfig(placement_passes=5)
        windows = [make_window(name, config=config) for name in ("a", "b", "c")]
        # When
        for window in windows:
            window.minimize_control.set_minimized(True)
        # Then
        assert [w.top for w in windows] == [664, 628, 592]


class TestMaximize:
    def test_enter_maximized_fills_container(self):
        # Given
        registry = WindowRegistry(container=ContainerBounds(height=800, width=1200, offset_top=0, offset_left=0))
        window = WindowEngine(normalize_props(id="w", height=300, width=400, top=50, left=60), registry)
        window.mount()
        # When
        window.press_maximize()
        # Then
        assert window.lifecycle is LifecycleState.MAXIMIZED
        assert window.effective == RenderGeometry(800, 1200)
        assert (window.top, window.left) == (0, 0)
        assert window.maximize_icon == "restore"
        assert window.content_visible

    def test_exit_maximized_goes_to_container_offset(self):
        # Given
        registry = WindowRegistry(container=ContainerBounds(height=800, width=1200, offset_top=5, offset_left=7))
        window = WindowEngine(normalize_props(id="w", height=300, width=400, top=50, left=60), registry)
        window.mount()
        window.press_maximize()
        # When
        window.press_maximize()
        # Then
        assert window.lifecycle is LifecycleState.NORMAL
        assert window.effective == RenderGeometry(300, 400)
        assert (window.top, window.left) == (5, 7)
        assert window.maximize_icon == "maximize"

    def test_maximize_leaves_logical_size_alone(self, make_window):
        window = make_window(height=300, width=400)
        window.press_maximize()
        assert (window.geometry.height, window.geometry.width) == (300, 400)


class TestMutualExclusion:
    def test_maximize_after_minimize(self, make_window):
        # Given
        window = make_window(height=300, width=400)
        window.minimize_control.set_minimized(True)
        # When
        window.press_maximize()
        # Then
        assert window.lifecycle is LifecycleState.MAXIMIZED
        assert window.content_visible
        assert window.minimize_icon == "minimize"

    def test_minimize_after_maximize(self, make_window):
        # Given
        window = make_window(height=300, width=400)
        window.press_maximize()
        # When
        window.minimize_control.set_minimized(True)
        # Then
        assert window.lifecycle is LifecycleState.MINIMIZED
        assert not window.state.maximized
        assert window.maximize_icon == "maximize"

    def test_maximize_toggle_after_minimize_starts_fresh(self, make_window):
        window = make_window(height=300, width=400)
        window.press_maximize()
        window.minimize_control.set_minimized(True)
        window.press_maximize()
        assert window.lifecycle is LifecycleState.MAXIMIZED
