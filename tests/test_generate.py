import random
import struct

import pytest

from savedata.generate import (
    generate_abilities,
    generate_entity,
    generate_game_type,
    generate_item,
    generate_player,
    generate_players,
    generate_recipe_book,
    generate_vec,
)
from savedata.model import GameType

ITEM_IDS = {"dirt", "stone", "pickaxe", "sand", "gravel", "shovel", "chestplate", "steak"}
ENTITY_IDS = {"cow", "sheep", "zombie", "skeleton", "spider", "creeper", "parrot", "bee"}
CUSTOM_NAMES = {"rainbow", "princess", "steve", "johnny", "missy", "coward", "fairy", "howard"}
RECIPES = {"pickaxe", "torch", "bow", "crafting table", "furnace", "shears", "arrow", "tnt"}
DIMENSIONS = {"overworld", "nether", "end"}


def is_f32(value):
    return struct.unpack("<f", struct.pack("<f", value))[0] == value


def test_generate_vec_length_below_max():
    rng = random.Random(1)
    lengths = {len(generate_vec(rng, lambda r: 0, 5)) for _ in range(200)}
    assert lengths <= set(range(5))
    assert 0 in lengths and 4 in lengths


def test_generate_vec_uses_factory():
    rng = random.Random(2)
    values = generate_vec(rng, lambda r: "x", 10)
    assert all(v == "x" for v in values)


def test_generate_vec_rejects_non_positive_max():
    with pytest.raises(ValueError):
        generate_vec(random.Random(0), lambda r: 0, 0)


def test_game_type_covers_all_values():
    rng = random.Random(3)
    seen = {generate_game_type(rng) for _ in range(200)}
    assert seen == set(GameType)


def test_item_fields_in_range():
    rng = random.Random(4)
    for _ in range(200):
        item = generate_item(rng)
        assert -128 <= item.count <= 127
        assert 0 <= item.slot <= 255
        assert item.id in ITEM_IDS


def test_abilities_speeds_are_f32_in_unit_interval():
    rng = random.Random(5)
    for _ in range(100):
        abilities = generate_abilities(rng)
        for speed in (abilities.walk_speed, abilities.fly_speed):
            assert 0.0 <= speed < 1.0
            assert is_f32(speed)


def test_entity_fields():
    rng = random.Random(6)
    names = set()
    for _ in range(200):
        entity = generate_entity(rng)
        assert entity.id in ENTITY_IDS
        assert len(entity.pos) == 3 and len(entity.motion) == 3
        assert all(0.0 <= v < 1.0 for v in entity.pos + entity.motion)
        assert all(is_f32(v) for v in entity.rotation)
        assert 0 <= entity.fire <= 0xFFFF
        assert -(2**31) <= entity.portal_cooldown < 2**31
        assert all(0 <= w < 2**32 for w in entity.uuid)
        names.add(entity.custom_name)
    assert None in names
    assert names - {None} <= CUSTOM_NAMES


def test_recipe_book_bounds():
    rng = random.Random(7)
    for _ in range(100):
        book = generate_recipe_book(rng)
        assert len(book.recipes) < 30
        assert len(book.to_be_displayed) < 10
        assert set(book.recipes) | set(book.to_be_displayed) <= RECIPES


def test_player_fields():
    rng = random.Random(8)
    for _ in range(50):
        player = generate_player(rng)
        assert player.dimension in DIMENSIONS
        assert player.spawn_dimension is None or player.spawn_dimension in DIMENSIONS
        assert len(player.inventory) < 40
        assert len(player.ender_items) < 27
        assert player.spawn_forced in (None, True, False)
        assert 0 <= player.sleep_timer <= 0xFFFF
        assert -(2**63) <= player.score < 2**63
        if player.root_vehicle is not None:
            uuid, entity = player.root_vehicle
            assert len(uuid) == 4
            assert entity.id in ENTITY_IDS


def test_generation_is_deterministic_for_a_seed():
    first = generate_players(random.Random(42), 5)
    second = generate_players(random.Random(42), 5)
    assert first == second


def test_different_seeds_give_different_players():
    assert generate_player(random.Random(1)) != generate_player(random.Random(2))


def test_generate_players_count():
    players = generate_players(random.Random(9), 7)
    assert len(players) == 7
    assert len(generate_players(random.Random(9), 0)) == 0


def test_generate_players_rejects_negative_count():
    with pytest.raises(ValueError):
        generate_players(random.Random(0), -1)