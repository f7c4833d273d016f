import random

import pytest

from savedata.generate import (
    generate_abilities,
    generate_entity,
    generate_item,
    generate_recipe_book,
)
from savedata.messages import (
    decode_abilities,
    decode_entity,
    decode_item,
    decode_recipe_book,
    encode_abilities,
    encode_entity,
    encode_item,
    encode_recipe_book,
    game_type_from_name,
    game_type_name,
)
from savedata.model import Abilities, Entity, GameType, Item, RecipeBook
from savedata.wire import DecodeError, MessageWriter, iter_fields


def _entity(**overrides):
    values = dict(
        id="cow",
        pos=(1.5, -2.0, 3.25),
        motion=(0.0, 0.5, 0.0),
        rotation=(0.25, 0.75),
        fall_distance=0.5,
        fire=300,
        air=65535,
        on_ground=True,
        no_gravity=False,
        invulnerable=True,
        portal_cooldown=-17,
        uuid=(1, 2, 0, 4294967295),
        custom_name="steve",
        custom_name_visible=True,
        silent=False,
        glowing=True,
    )
    values.update(overrides)
    return Entity(**values)


@pytest.mark.parametrize(
    "game_type, name",
    [
        (GameType.SURVIVAL, "SURVIVAL"),
        (GameType.CREATIVE, "CREATIVE"),
        (GameType.ADVENTURE, "ADVENTURE"),
        (GameType.SPECTATOR, "SPECTATOR"),
    ],
)
def test_game_type_names(game_type, name):
    assert game_type_name(game_type) == name
    assert game_type_from_name(name) is game_type


def test_game_type_from_unknown_name():
    assert game_type_from_name("HARDCORE") is None
    assert game_type_from_name("survival") is None


def test_game_type_name_rejects_unknown_value():
    with pytest.raises(ValueError):
        game_type_name(9)


def test_item_wire_bytes():
    assert encode_item(Item(count=1, slot=2, id="dirt")) == b"\x08\x01\x10\x02\x1a\x04dirt"


def test_default_item_encodes_empty():
    assert encode_item(Item(count=0, slot=0, id="")) == b""
    assert decode_item(b"") == Item(count=0, slot=0, id="")


def test_negative_count_uses_ten_byte_varint():
    data = encode_item(Item(count=-1, slot=0, id=""))
    assert data == b"\x08" + b"\xff" * 9 + b"\x01"
    assert decode_item(data).count == -1


def test_item_round_trip():
    rng = random.Random(1)
    for _ in range(50):
        item = generate_item(rng)
        assert decode_item(encode_item(item)) == item


def test_item_count_out_of_range():
    data = MessageWriter().varint(1, 200).getvalue()
    with pytest.raises(DecodeError):
        decode_item(data)


def test_item_slot_out_of_range():
    data = MessageWriter().varint(2, 256).getvalue()
    with pytest.raises(DecodeError):
        decode_item(data)


def test_item_wrong_wire_type():
    data = MessageWriter().bytes_field(1, b"x").getvalue()
    with pytest.raises(DecodeError):
        decode_item(data)


def test_item_invalid_utf8():
    data = MessageWriter().bytes_field(3, b"\xff\xfe").getvalue()
    with pytest.raises(DecodeError):
        decode_item(data)


def test_item_unknown_field_skipped():
    item = Item(count=3, slot=4, id="sand")
    data = encode_item(item) + MessageWriter().varint(99, 7).getvalue()
    assert decode_item(data) == item


def test_item_last_value_wins():
    first = Item(count=3, slot=4, id="sand")
    second = Item(count=5, slot=6, id="steak")
    assert decode_item(encode_item(first) + encode_item(second)) == second


def test_abilities_round_trip():
    abilities = Abilities(
        walk_speed=0.25,
        fly_speed=0.5,
        may_fly=True,
        flying=False,
        invulnerable=True,
        may_build=False,
        instabuild=True,
    )
    assert decode_abilities(encode_abilities(abilities)) == abilities


def test_generated_abilities_round_trip():
    rng = random.Random(2)
    for _ in range(30):
        abilities = generate_abilities(rng)
        assert decode_abilities(encode_abilities(abilities)) == abilities


def test_default_abilities_encode_empty():
    abilities = Abilities(0.0, 0.0, False, False, False, False, False)
    assert encode_abilities(abilities) == b""


def test_abilities_fields_numbered_in_order():
    abilities = Abilities(0.25, 0.5, True, True, True, True, True)
    numbers = [number for number, _, _ in iter_fields(encode_abilities(abilities))]
    assert numbers == [1, 2, 3, 4, 5, 6, 7]


def test_entity_round_trip():
    entity = _entity()
    assert decode_entity(encode_entity(entity)) == entity


def test_entity_without_custom_name():
    entity = _entity(custom_name=None)
    decoded = decode_entity(encode_entity(entity))
    assert decoded.custom_name is None
    assert decoded == entity


def test_entity_empty_custom_name_is_kept():
    entity = _entity(custom_name="")
    assert decode_entity(encode_entity(entity)).custom_name == ""


def test_generated_entities_round_trip():
    rng = random.Random(3)
    for _ in range(30):
        entity = generate_entity(rng)
        assert decode_entity(encode_entity(entity)) == entity


def test_entity_zero_vectors_still_present():
    entity = _entity(pos=(0.0, 0.0, 0.0), uuid=(0, 0, 0, 0))
    decoded = decode_entity(encode_entity(entity))
    assert decoded.pos == (0.0, 0.0, 0.0)
    assert decoded.uuid == (0, 0, 0, 0)


def test_entity_missing_position():
    data = b"".join(
        MessageWriter().bytes_field(field, b"").getvalue() for field in (3, 4, 12)
    )
    with pytest.raises(DecodeError):
        decode_entity(data)


def test_entity_missing_uuid():
    data = b"".join(
        MessageWriter().bytes_field(field, b"").getvalue() for field in (2, 3, 4)
    )
    with pytest.raises(DecodeError):
        decode_entity(data)


def test_entity_fire_out_of_range():
    data = encode_entity(_entity()) + MessageWriter().varint(6, 70000).getvalue()
    with pytest.raises(DecodeError):
        decode_entity(data)


def test_recipe_book_default_encodes_empty():
    assert encode_recipe_book(RecipeBook()) == b""
    assert decode_recipe_book(b"") == RecipeBook()


def test_recipe_book_keeps_order_and_empty_strings():
    book = RecipeBook(
        recipes=["tnt", "", "bow", "tnt"],
        to_be_displayed=["crafting table"],
        is_gui_open=True,
        is_smoker_gui_open=True,
    )
    decoded = decode_recipe_book(encode_recipe_book(book))
    assert decoded.recipes == ["tnt", "", "bow", "tnt"]
    assert decoded == book


def test_generated_recipe_books_round_trip():
    rng = random.Random(4)
    for _ in range(30):
        book = generate_recipe_book(rng)
        assert decode_recipe_book(encode_recipe_book(book)) == book


def test_recipe_book_repeated_fields_accumulate():
    first = RecipeBook(recipes=["torch"])
    second = RecipeBook(recipes=["arrow"])
    decoded = decode_recipe_book(encode_recipe_book(first) + encode_recipe_book(second))
    assert decoded.recipes == ["torch", "arrow"]


def test_recipe_book_wrong_wire_type():
    data = MessageWriter().varint(1, 1).getvalue()
    with pytest.raises(DecodeError):
        decode_recipe_book(data)