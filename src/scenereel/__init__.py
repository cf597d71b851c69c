"""SceneReel - timed cinematic playback of generated story scenes."""

__version__ = "0.1.0"
