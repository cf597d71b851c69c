"""CLI entry point for the scene player."""

import asyncio
import logging
import typer
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import config
from .errors import BackendError
from .models import GenerationRequest, Pacing, Scene, SceneGraph, Style
from .playback import (
    AsyncioScheduler,
    PlaybackController,
    PlaybackSnapshot,
    SceneSequenceStore,
    VirtualScheduler,
    profile_for,
)

app = typer.Typer(
    name="scenereel",
    help="Play generated story scenes as a timed slideshow",
    no_args_is_help=True
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"scenereel version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """SceneReel - Turn a story into a cinematic scene preview."""
    pass


def _load_graph(script: Path) -> SceneGraph:
    if not script.exists():
        typer.echo(f"❌ No scenes found at {script}")
        typer.echo("   Run 'scenereel generate' to create them")
        raise typer.Exit(1)
    try:
        return SceneGraph.load(script)
    except Exception as e:
        typer.echo(f"❌ Error loading scenes: {e}")
        raise typer.Exit(1)


def _default_pacing() -> Pacing:
    try:
        return Pacing(config.default_pacing)
    except ValueError:
        return Pacing.NORMAL


def _default_style() -> Style:
    try:
        return Style(config.default_style)
    except ValueError:
        return Style.STORYBOOK


def scene_lines(store: SceneSequenceStore, scene: Scene) -> List[str]:
    """Render a scene as plain text lines."""
    environment = store.find_environment(scene.environment_id)
    env_name = environment.name if environment else "?"
    lines = [
        f"{env_name} • {scene.transition.type}",
        scene.title,
    ]
    if scene.description:
        lines.append(scene.description)

    cast = store.resolve_cast(scene)
    if cast:
        lines.append("In scene:")
    for appearance, character in cast:
        name = character.name if character else f"? ({appearance.id})"
        line = f"  • {name}"
        if appearance.emotion:
            line += f" [{appearance.emotion}]"
        lines.append(line)
        if appearance.dialogue:
            lines.append(f"    “{appearance.dialogue}”")
    return lines


@app.command()
def generate(
    text: str = typer.Argument(
        ...,
        help="Story text to turn into scenes"
    ),
    style: Optional[Style] = typer.Option(
        None,
        "--style",
        help="Visual style"
    ),
    pacing: Optional[Pacing] = typer.Option(
        None,
        "--pacing",
        "-p",
        help="Scene pacing"
    ),
    output: Path = typer.Option(
        Path("scenes.yaml"),
        "--output",
        "-o",
        help="Output scene graph file (.yaml or .json)"
    ),
    backend: Optional[str] = typer.Option(
        None,
        "--backend",
        "-b",
        help="Backend URL (defaults to SCENEREEL_BACKEND_URL)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Generate characters, environments and scenes from story text."""
    from .services import SceneGraphClient

    setup_logging(verbose)
    style = style or _default_style()
    pacing = pacing or _default_pacing()

    settings = config.model_copy(update={"backend_url": backend}) if backend else config
    try:
        settings.validate_required()
    except ValueError as e:
        typer.echo(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    try:
        request = GenerationRequest(text=text, style=style, pacing=pacing)
    except Exception as e:
        typer.echo(f"❌ Invalid request: {e}")
        raise typer.Exit(1)

    typer.echo(f"🎬 Generating scenes ({style.value}, {pacing.value})")

    try:
        graph = SceneGraphClient(base_url=settings.backend_url).animate(request)
    except BackendError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        graph.save(output)
        typer.echo(f"\n✅ Scenes saved: {output}")
    except Exception as e:
        typer.echo(f"❌ Error saving scenes: {e}")
        raise typer.Exit(1)

    typer.echo(f"\n📋 Summary:")
    typer.echo(f"   Style: {graph.style}")
    typer.echo(f"   Characters: {', '.join(c.name for c in graph.characters) or '-'}")
    typer.echo(f"   Environments: {', '.join(e.name for e in graph.environments) or '-'}")
    typer.echo(f"   Scenes: {len(graph.scenes)}")
    for scene in graph.scenes:
        profile = profile_for(scene.transition)
        typer.echo(f"   • {scene.id}: {scene.title} ({scene.transition.type} · {profile.duration:g}s)")


@app.command()
def show(
    script: Path = typer.Option(
        Path("scenes.yaml"),
        "--script",
        "-s",
        help="Path to scene graph file",
        file_okay=True,
        dir_okay=False
    )
) -> None:
    """List characters, environments and every scene."""
    graph = _load_graph(script)
    store = SceneSequenceStore()
    store.install(graph)

    typer.echo(f"🎨 Style: {graph.style or '-'}")
    typer.echo("\n👥 Characters:")
    for character in store.characters:
        typer.echo(f"   {character.name} ({character.id})")
    typer.echo("\n🏞️  Environments:")
    for environment in store.environments:
        typer.echo(f"   {environment.name} ({environment.id})")

    typer.echo("\n📽️  Scenes:")
    for scene in store.scenes:
        profile = profile_for(scene.transition)
        typer.echo(f"\n   {scene.title or scene.id}")
        typer.echo(f"   Transition: {scene.transition.type} · {profile.duration:g}s")
        typer.echo(f"   Environment: {scene.environment_id or '-'}")
        for line in scene_lines(store, scene)[2:]:
            typer.echo(f"   {line}")


@app.command()
def timeline(
    script: Path = typer.Option(
        Path("scenes.yaml"),
        "--script",
        "-s",
        help="Path to scene graph file",
        file_okay=True,
        dir_okay=False
    ),
    pacing: Optional[Pacing] = typer.Option(
        None,
        "--pacing",
        "-p",
        help="Scene pacing"
    ),
) -> None:
    """Show when each scene would appear during auto-advance."""
    graph = _load_graph(script)
    pacing = pacing or _default_pacing()

    scheduler = VirtualScheduler()
    controller = PlaybackController(scheduler=scheduler, pacing=pacing)
    controller.install_sequence(graph)

    if controller.length == 0:
        typer.echo("No scenes to play")
        return

    shown: List[tuple] = []

    def record(snapshot: PlaybackSnapshot) -> None:
        if snapshot.scene is not None and (not shown or shown[-1][1] != snapshot.cursor):
            shown.append((scheduler.now, snapshot.cursor, controller.current_delay_ms()))

    shown.append((0.0, 0, controller.current_delay_ms()))
    controller.subscribe(record)
    controller.play()
    scheduler.run_until_idle()

    typer.echo(f"⏱️  Timeline ({pacing.value}):")
    for start, index, hold_ms in shown:
        scene = controller.store.scene_at(index)
        typer.echo(
            f"   {start:7.1f}s  [{index + 1}/{controller.length}] "
            f"{scene.title or scene.id}  hold {hold_ms}ms ({scene.transition.type})"
        )
    typer.echo(f"   {scheduler.now:7.1f}s  end")


async def _autoplay(
    graph: SceneGraph,
    pacing: Pacing,
    start: int,
    speed: float,
) -> None:
    finished = asyncio.Event()
    controller = PlaybackController(
        scheduler=AsyncioScheduler(asyncio.get_running_loop(), time_scale=1.0 / speed),
        pacing=pacing,
    )
    controller.install_sequence(graph)
    for _ in range(start):
        controller.next()

    last_cursor: List[Optional[int]] = [None]

    def render(snapshot: PlaybackSnapshot) -> None:
        if snapshot.scene is not None and snapshot.cursor != last_cursor[0]:
            last_cursor[0] = snapshot.cursor
            profile = snapshot.profile
            typer.echo(
                f"\n── Scene {snapshot.cursor + 1} / {snapshot.length} • "
                f"Auto {'On' if snapshot.auto_advancing else 'Off'} • "
                f"{profile.kind.value} {profile.duration:g}s"
            )
            for line in scene_lines(controller.store, snapshot.scene):
                typer.echo(f"   {line}")
        if not snapshot.auto_advancing:
            finished.set()

    controller.subscribe(render)
    controller.play()
    await finished.wait()


@app.command()
def play(
    script: Path = typer.Option(
        Path("scenes.yaml"),
        "--script",
        "-s",
        help="Path to scene graph file",
        file_okay=True,
        dir_okay=False
    ),
    pacing: Optional[Pacing] = typer.Option(
        None,
        "--pacing",
        "-p",
        help="Scene pacing"
    ),
    start: int = typer.Option(
        1,
        "--start",
        help="Scene number to start from",
        min=1
    ),
    speed: float = typer.Option(
        1.0,
        "--speed",
        help="Playback speed multiplier",
        min=0.1
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Play the scenes in the terminal with auto-advance."""
    setup_logging(verbose)
    graph = _load_graph(script)
    pacing = pacing or _default_pacing()

    if not graph.scenes:
        typer.echo("No scenes to play")
        return

    typer.echo(f"▶️  Playing {len(graph.scenes)} scenes ({pacing.value})")
    try:
        asyncio.run(_autoplay(graph, pacing, start - 1, speed))
    except KeyboardInterrupt:
        typer.echo("\n⏹️  Stopped")
        raise typer.Exit(130)

    typer.echo("\n✅ End of sequence")


if __name__ == "__main__":
    app()
