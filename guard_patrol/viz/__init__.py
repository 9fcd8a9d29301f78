"""Visualization: matplotlib route figures."""

from guard_patrol.viz.render import build_route_array, render_route

__all__ = [
    "build_route_array",
    "render_route",
]
