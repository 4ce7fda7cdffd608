"""Tests for geometry state and per-state render derivation."""

from deskwin.core.geometry import ContainerBounds, Geometry, GeometryState, RenderGeometry
from deskwin.core.state import LifecycleState, derive_render


class TestGeometryState:
    def test_effective_starts_at_logical_size(self):
        state = GeometryState(Geometry(top=1, left=2, width=300, height=200))
        assert state.effective == RenderGeometry(height=200, width=300)

    def test_set_geometry_updates_only_given_fields(self):
        # Given
        state = GeometryState(Geometry(top=1, left=2, width=300, height=200))
        # When
        state.set_geometry(left=40)
        # Then
        assert state.logical == Geometry(top=1, left=40, width=300, height=200)

    def test_apply_effective_leaves_logical_untouched(self):
        # Given
        state = GeometryState(Geometry(top=1, left=2, width=300, height=200))
        # When
        state.apply_effective(32, 280)
        # Then
        assert state.effective == RenderGeometry(32, 280)
        assert state.logical == Geometry(top=1, left=2, width=300, height=200)

    def test_negative_values_are_accepted(self):
        state = GeometryState(Geometry())
        state.move_to(-10, -20)
        assert (state.top, state.left) == (-10, -20)


class TestDeriveRender:
    geometry = Geometry(top=5, left=5, width=400, height=300)
    bounds = ContainerBounds(height=800, width=1200)
    minimized = RenderGeometry(32, 200)

    def test_normal_uses_logical_size(self):
        result = derive_render(LifecycleState.NORMAL, self.geometry, self.bounds, self.minimized)
        assert result == RenderGeometry(300, 400)

    def test_minimized_uses_compact_footprint(self):
        result = derive_render(LifecycleState.MINIMIZED, self.geometry, self.bounds, self.minimized)
        assert result == RenderGeometry(32, 200)

    def test_maximized_fills_container(self):
        result = derive_render(LifecycleState.MAXIMIZED, self.geometry, self.bounds, self.minimized)
        assert result == RenderGeometry(800, 1200)
