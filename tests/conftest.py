"""Shared pytest fixtures for scenereel tests."""

from __future__ import annotations

import pytest

from scenereel.models import SceneGraph
from scenereel.playback import PlaybackController, VirtualScheduler


def make_graph(durations=(0.8, 1.2, 0.8), types=None) -> SceneGraph:
    """Build a scene graph with one scene per transition duration."""
    types = types or ["crossfade"] * len(durations)
    return SceneGraph.model_validate({
        "style": "storybook",
        "characters": [
            {"id": "alice", "name": "Alice", "color": 1},
            {"id": "fox", "name": "Fox", "color": 4},
        ],
        "environments": [
            {"id": "forest", "name": "Quiet Forest"},
            {"id": "cottage", "name": "Warm Cottage"},
        ],
        "scenes": [
            {
                "id": f"s{i + 1}",
                "title": f"Scene {i + 1}",
                "description": f"Description {i + 1}",
                "environmentId": "forest" if i % 2 == 0 else "cottage",
                "transition": {"type": kind, "duration": duration},
                "characters": [{"id": "alice", "emotion": "calm", "dialogue": "I can do this."}],
            }
            for i, (duration, kind) in enumerate(zip(durations, types))
        ],
    })


@pytest.fixture()
def graph() -> SceneGraph:
    """Three scenes with transitions of 0.8s, 1.2s and 0.8s."""
    return make_graph()


@pytest.fixture()
def scheduler() -> VirtualScheduler:
    return VirtualScheduler()


@pytest.fixture()
def controller(scheduler) -> PlaybackController:
    return PlaybackController(scheduler=scheduler, pacing="normal")


@pytest.fixture()
def loaded(controller, graph) -> PlaybackController:
    """Controller with the three-scene graph installed."""
    controller.install_sequence(graph)
    return controller
