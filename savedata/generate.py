"""Random generation of save data for benchmarks and tests."""

from __future__ import annotations

import random
from typing import Callable, Optional, TypeVar

from savedata.model import (
    Abilities,
    Entity,
    GameType,
    Item,
    Player,
    Players,
    RecipeBook,
    Uuid,
    Vector2f,
    Vector3d,
)

T = TypeVar("T")

_ITEM_IDS = (
    "dirt",
    "stone",
    "pickaxe",
    "sand",
    "gravel",
    "shovel",
    "chestplate",
    "steak",
)
_ENTITY_IDS = ("cow", "sheep", "zombie", "skeleton", "spider", "creeper", "parrot", "bee")
_CUSTOM_NAMES = (
    "rainbow",
    "princess",
    "steve",
    "johnny",
    "missy",
    "coward",
    "fairy",
    "howard",
)
_RECIPES = (
    "pickaxe",
    "torch",
    "bow",
    "crafting table",
    "furnace",
    "shears",
    "arrow",
    "tnt",
)
_DIMENSIONS = ("overworld", "nether", "end")

_MAX_RECIPES = 30
_MAX_DISPLAYED_RECIPES = 10
_MAX_ITEMS = 40
_MAX_ENDER_ITEMS = 27


def _int(rng: random.Random, bits: int, signed: bool) -> int:
    value = rng.getrandbits(bits)
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _f32(rng: random.Random) -> float:
    """A float in [0, 1) that is exactly representable as a 32-bit float."""
    return rng.getrandbits(24) / (1 << 24)


def _f64(rng: random.Random) -> float:
    return rng.getrandbits(53) / (1 << 53)


def _bool(rng: random.Random) -> bool:
    return rng.random() < 0.5


def _maybe(rng: random.Random, factory: Callable[[random.Random], T]) -> Optional[T]:
    return factory(rng) if _bool(rng) else None


def _vector3d(rng: random.Random) -> Vector3d:
    return (_f64(rng), _f64(rng), _f64(rng))


def _vector2f(rng: random.Random) -> Vector2f:
    return (_f32(rng), _f32(rng))


def _uuid(rng: random.Random) -> Uuid:
    return tuple(_int(rng, 32, False) for _ in range(4))  # type: ignore[return-value]


def generate_vec(
    rng: random.Random, factory: Callable[[random.Random], T], max_len: int
) -> list[T]:
    """Build a list of fewer than ``max_len`` values made by ``factory``."""
    if max_len <= 0:
        raise ValueError(f"max_len must be positive, got {max_len}")
    length = rng.randrange(max_len)
    return [factory(rng) for _ in range(length)]


def generate_game_type(rng: random.Random) -> GameType:
    """Pick a game type uniformly."""
    return GameType(rng.randrange(len(GameType)))


def generate_item(rng: random.Random) -> Item:
    """Generate a random item stack."""
    return Item(
        count=_int(rng, 8, True),
        slot=_int(rng, 8, False),
        id=rng.choice(_ITEM_IDS),
    )


def generate_abilities(rng: random.Random) -> Abilities:
    """Generate random player abilities."""
    return Abilities(
        walk_speed=_f32(rng),
        fly_speed=_f32(rng),
        may_fly=_bool(rng),
        flying=_bool(rng),
        invulnerable=_bool(rng),
        may_build=_bool(rng),
        instabuild=_bool(rng),
    )


def generate_entity(rng: random.Random) -> Entity:
    """Generate a random entity."""
    return Entity(
        id=rng.choice(_ENTITY_IDS),
        pos=_vector3d(rng),
        motion=_vector3d(rng),
        rotation=_vector2f(rng),
        fall_distance=_f32(rng),
        fire=_int(rng, 16, False),
        air=_int(rng, 16, False),
        on_ground=_bool(rng),
        no_gravity=_bool(rng),
        invulnerable=_bool(rng),
        portal_cooldown=_int(rng, 32, True),
        uuid=_uuid(rng),
        custom_name=_maybe(rng, lambda r: r.choice(_CUSTOM_NAMES)),
        custom_name_visible=_bool(rng),
        silent=_bool(rng),
        glowing=_bool(rng),
    )


def generate_recipe_book(rng: random.Random) -> RecipeBook:
    """Generate a random recipe book."""
    return RecipeBook(
        recipes=generate_vec(rng, lambda r: r.choice(_RECIPES), _MAX_RECIPES),
        to_be_displayed=generate_vec(
            rng, lambda r: r.choice(_RECIPES), _MAX_DISPLAYED_RECIPES
        ),
        is_filtering_craftable=_bool(rng),
        is_gui_open=_bool(rng),
        is_furnace_filtering_craftable=_bool(rng),
        is_furnace_gui_open=_bool(rng),
        is_blasting_furnace_filtering_craftable=_bool(rng),
        is_blasting_furnace_gui_open=_bool(rng),
        is_smoker_filtering_craftable=_bool(rng),
        is_smoker_gui_open=_bool(rng),
    )


def generate_player(rng: random.Random) -> Player:
    """Generate a random player."""
    return Player(
        game_type=generate_game_type(rng),
        previous_game_type=generate_game_type(rng),
        score=_int(rng, 64, True),
        dimension=rng.choice(_DIMENSIONS),
        selected_item_slot=_int(rng, 32, False),
        selected_item=generate_item(rng),
        spawn_dimension=_maybe(rng, lambda r: r.choice(_DIMENSIONS)),
        spawn_x=_int(rng, 64, True),
        spawn_y=_int(rng, 64, True),
        spawn_z=_int(rng, 64, True),
        spawn_forced=_maybe(rng, _bool),
        sleep_timer=_int(rng, 16, False),
        food_exhaustion_level=_f32(rng),
        food_saturation_level=_f32(rng),
        food_tick_timer=_int(rng, 32, False),
        xp_level=_int(rng, 32, False),
        xp_p=_f32(rng),
        xp_total=_int(rng, 32, True),
        xp_seed=_int(rng, 32, True),
        inventory=generate_vec(rng, generate_item, _MAX_ITEMS),
        ender_items=generate_vec(rng, generate_item, _MAX_ENDER_ITEMS),
        abilities=generate_abilities(rng),
        entered_nether_position=_maybe(rng, _vector3d),
        root_vehicle=_maybe(rng, lambda r: (_uuid(r), generate_entity(r))),
        shoulder_entity_left=_maybe(rng, generate_entity),
        shoulder_entity_right=_maybe(rng, generate_entity),
        seen_credits=_bool(rng),
        recipe_book=generate_recipe_book(rng),
    )


def generate_players(rng: random.Random, count: int) -> Players:
    """Generate ``count`` random players."""
    if count < 0:
        raise ValueError(f"count must not be negative, got {count}")
    return Players([generate_player(rng) for _ in range(count)])