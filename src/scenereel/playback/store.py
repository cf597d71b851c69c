"""Scene sequence storage and roster lookup."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..models import Character, CharacterAppearance, Environment, Scene, SceneGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Contents:
    """Everything installed from one scene graph."""

    style: str = ""
    scenes: Tuple[Scene, ...] = ()
    characters: Dict[str, Character] = field(default_factory=dict)
    environments: Dict[str, Environment] = field(default_factory=dict)


def _index_by_id(items, kind: str) -> dict:
    index = {}
    for item in items:
        if item.id in index:
            logger.warning(f"Duplicate {kind} id {item.id!r}, keeping the first")
            continue
        index[item.id] = item
    return index


class SceneSequenceStore:
    """Holds the scenes of the last successful generation.

    The contents are swapped as a single reference on install, so readers
    see either the old sequence or the new one.
    """

    def __init__(self) -> None:
        self._contents = _Contents()

    def install(self, graph: SceneGraph) -> None:
        """Replace the sequence and roster with those of `graph`."""
        contents = _Contents(
            style=graph.style,
            scenes=tuple(graph.scenes),
            characters=_index_by_id(graph.characters, "character"),
            environments=_index_by_id(graph.environments, "environment"),
        )
        self._contents = contents
        logger.debug(
            f"Installed {len(contents.scenes)} scenes, "
            f"{len(contents.characters)} characters, "
            f"{len(contents.environments)} environments"
        )

    def clear(self) -> None:
        """Drop the installed sequence."""
        self._contents = _Contents()

    @property
    def style(self) -> str:
        return self._contents.style

    @property
    def scenes(self) -> Tuple[Scene, ...]:
        return self._contents.scenes

    @property
    def characters(self) -> List[Character]:
        return list(self._contents.characters.values())

    @property
    def environments(self) -> List[Environment]:
        return list(self._contents.environments.values())

    @property
    def length(self) -> int:
        return len(self._contents.scenes)

    @property
    def is_empty(self) -> bool:
        return not self._contents.scenes

    def scene_at(self, cursor: Optional[int]) -> Optional[Scene]:
        """Return the scene at `cursor`, or None if there is none."""
        scenes = self._contents.scenes
        if cursor is None or not 0 <= cursor < len(scenes):
            return None
        return scenes[cursor]

    def find_character(self, character_id: str) -> Optional[Character]:
        return self._contents.characters.get(character_id)

    def find_environment(self, environment_id: Optional[str]) -> Optional[Environment]:
        if environment_id is None:
            return None
        return self._contents.environments.get(environment_id)

    def resolve_cast(
        self, scene: Scene
    ) -> List[Tuple[CharacterAppearance, Optional[Character]]]:
        """Pair each appearance in `scene` with its roster entry.

        Appearances that reference an unknown character are paired with None.
        """
        cast = []
        for appearance in scene.characters:
            character = self.find_character(appearance.id)
            if character is None:
                logger.debug(f"Scene {scene.id!r} references unknown character {appearance.id!r}")
            cast.append((appearance, character))
        return cast
