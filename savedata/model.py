"""Data model of a player save file: players, their items, entities and recipes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Tuple

Vector3d = Tuple[float, float, float]
Vector2f = Tuple[float, float]
Uuid = Tuple[int, int, int, int]

_I8 = (-(2**7), 2**7 - 1)
_U8 = (0, 2**8 - 1)
_U16 = (0, 2**16 - 1)
_I32 = (-(2**31), 2**31 - 1)
_U32 = (0, 2**32 - 1)
_I64 = (-(2**63), 2**63 - 1)


def _check_int(name: str, value: int, bounds: tuple[int, int]) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, not {type(value).__name__}")
    low, high = bounds
    if not low <= value <= high:
        raise ValueError(f"{name}={value} is outside the range {low}..{high}")
    return value


def _vector(name: str, values, size: int) -> tuple:
    result = tuple(float(v) for v in values)
    if len(result) != size:
        raise ValueError(f"{name} needs {size} components, got {len(result)}")
    return result


def _uuid(name: str, values) -> Uuid:
    result = tuple(values)
    if len(result) != 4:
        raise ValueError(f"{name} needs 4 words, got {len(result)}")
    for word in result:
        _check_int(name, word, _U32)
    return result  # type: ignore[return-value]


class GameType(IntEnum):
    """Game mode of a player."""

    SURVIVAL = 0
    CREATIVE = 1
    ADVENTURE = 2
    SPECTATOR = 3


@dataclass
class Item:
    """A stack of items in an inventory slot."""

    count: int
    slot: int
    id: str

    def __post_init__(self) -> None:
        _check_int("count", self.count, _I8)
        _check_int("slot", self.slot, _U8)


@dataclass
class Abilities:
    """Movement and building abilities of a player."""

    walk_speed: float
    fly_speed: float
    may_fly: bool
    flying: bool
    invulnerable: bool
    may_build: bool
    instabuild: bool


@dataclass
class Entity:
    """A creature or object in the world."""

    id: str
    pos: Vector3d
    motion: Vector3d
    rotation: Vector2f
    fall_distance: float
    fire: int
    air: int
    on_ground: bool
    no_gravity: bool
    invulnerable: bool
    portal_cooldown: int
    uuid: Uuid
    custom_name: Optional[str]
    custom_name_visible: bool
    silent: bool
    glowing: bool

    def __post_init__(self) -> None:
        self.pos = _vector("pos", self.pos, 3)
        self.motion = _vector("motion", self.motion, 3)
        self.rotation = _vector("rotation", self.rotation, 2)
        _check_int("fire", self.fire, _U16)
        _check_int("air", self.air, _U16)
        _check_int("portal_cooldown", self.portal_cooldown, _I32)
        self.uuid = _uuid("uuid", self.uuid)


@dataclass
class RecipeBook:
    """Recipes a player knows and the state of the recipe screens."""

    recipes: list[str] = field(default_factory=list)
    to_be_displayed: list[str] = field(default_factory=list)
    is_filtering_craftable: bool = False
    is_gui_open: bool = False
    is_furnace_filtering_craftable: bool = False
    is_furnace_gui_open: bool = False
    is_blasting_furnace_filtering_craftable: bool = False
    is_blasting_furnace_gui_open: bool = False
    is_smoker_filtering_craftable: bool = False
    is_smoker_gui_open: bool = False

    def __post_init__(self) -> None:
        self.recipes = list(self.recipes)
        self.to_be_displayed = list(self.to_be_displayed)


@dataclass
class Player:
    """The saved state of one player."""

    game_type: GameType
    previous_game_type: GameType
    score: int
    dimension: str
    selected_item_slot: int
    selected_item: Item
    spawn_dimension: Optional[str]
    spawn_x: int
    spawn_y: int
    spawn_z: int
    spawn_forced: Optional[bool]
    sleep_timer: int
    food_exhaustion_level: float
    food_saturation_level: float
    food_tick_timer: int
    xp_level: int
    xp_p: float
    xp_total: int
    xp_seed: int
    inventory: list[Item]
    ender_items: list[Item]
    abilities: Abilities
    entered_nether_position: Optional[Vector3d]
    root_vehicle: Optional[Tuple[Uuid, Entity]]
    shoulder_entity_left: Optional[Entity]
    shoulder_entity_right: Optional[Entity]
    seen_credits: bool
    recipe_book: RecipeBook

    def __post_init__(self) -> None:
        self.game_type = GameType(self.game_type)
        self.previous_game_type = GameType(self.previous_game_type)
        _check_int("score", self.score, _I64)
        _check_int("selected_item_slot", self.selected_item_slot, _U32)
        for name in ("spawn_x", "spawn_y", "spawn_z"):
            _check_int(name, getattr(self, name), _I64)
        _check_int("sleep_timer", self.sleep_timer, _U16)
        _check_int("food_tick_timer", self.food_tick_timer, _U32)
        _check_int("xp_level", self.xp_level, _U32)
        _check_int("xp_total", self.xp_total, _I32)
        _check_int("xp_seed", self.xp_seed, _I32)
        self.inventory = list(self.inventory)
        self.ender_items = list(self.ender_items)
        if self.entered_nether_position is not None:
            self.entered_nether_position = _vector(
                "entered_nether_position", self.entered_nether_position, 3
            )
        if self.root_vehicle is not None:
            uuid, entity = self.root_vehicle
            self.root_vehicle = (_uuid("root_vehicle", uuid), entity)


@dataclass
class Players:
    """A collection of saved players."""

    players: list[Player] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.players = list(self.players)

    def __len__(self) -> int:
        return len(self.players)

    def __iter__(self):
        return iter(self.players)