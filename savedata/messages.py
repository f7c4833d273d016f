"""Protocol buffer messages for items, abilities, entities and recipe books.

Encoding follows proto3 rules: plain scalar fields are left out when they hold
their default value, optional fields and sub-messages are written whenever
they are present. Decoding takes the last value of a repeated scalar field,
merges repeated sub-message fields and skips unknown fields.
"""

from __future__ import annotations

import struct
from typing import Iterable, List, Optional

from savedata.model import (
    Abilities,
    Entity,
    GameType,
    Item,
    RecipeBook,
    Uuid,
    Vector2f,
    Vector3d,
)
from savedata.wire import DecodeError, MessageWriter, WireType, iter_fields, to_signed


def game_type_name(game_type: GameType) -> str:
    """Name of a game type as spelled in the message schema."""
    try:
        return GameType(game_type).name
    except ValueError:
        raise ValueError(f"unknown game type {game_type!r}") from None


def game_type_from_name(name: str) -> Optional[GameType]:
    """Game type for a schema name, or None if the name is unknown."""
    if not isinstance(name, str):
        return None
    try:
        return GameType[name]
    except KeyError:
        return None


# Field readers ---------------------------------------------------------------


def _varint(wire_type: WireType, value, name: str) -> int:
    if wire_type is not WireType.VARINT:
        raise DecodeError(f"{name}: expected a varint, got wire type {wire_type.name}")
    return value


def _fixed32(wire_type: WireType, value, name: str) -> float:
    if wire_type is not WireType.I32:
        raise DecodeError(f"{name}: expected a 32-bit value, got wire type {wire_type.name}")
    return struct.unpack("<f", value)[0]


def _fixed64(wire_type: WireType, value, name: str) -> float:
    if wire_type is not WireType.I64:
        raise DecodeError(f"{name}: expected a 64-bit value, got wire type {wire_type.name}")
    return struct.unpack("<d", value)[0]


def _bytes(wire_type: WireType, value, name: str) -> bytes:
    if wire_type is not WireType.LEN:
        raise DecodeError(
            f"{name}: expected a length-delimited value, got wire type {wire_type.name}"
        )
    return value


def _string(wire_type: WireType, value, name: str) -> str:
    raw = _bytes(wire_type, value, name)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"{name}: invalid UTF-8") from exc


def _int32(value: int) -> int:
    return to_signed(value, 32)


def _uint32(value: int) -> int:
    return value & 0xFFFFFFFF


def _narrow(value: int, low: int, high: int, name: str) -> int:
    if not low <= value <= high:
        raise DecodeError(f"{name}={value} is outside the range {low}..{high}")
    return value


def _required(parts: List[bytes], name: str) -> bytes:
    if not parts:
        raise DecodeError(f"{name} is missing")
    return b"".join(parts)


# Field writers ---------------------------------------------------------------


def _put_varint(writer: MessageWriter, field: int, value: int) -> None:
    if value:
        writer.varint(field, value)


def _put_float32(writer: MessageWriter, field: int, value: float) -> None:
    if value != 0.0:
        writer.float32(field, value)


def _put_float64(writer: MessageWriter, field: int, value: float) -> None:
    if value != 0.0:
        writer.float64(field, value)


def _put_string(writer: MessageWriter, field: int, value: str) -> None:
    if value:
        writer.bytes_field(field, value)


def _put_strings(writer: MessageWriter, field: int, values: Iterable[str]) -> None:
    for value in values:
        writer.bytes_field(field, value)


# Small nested messages -------------------------------------------------------


def _encode_vector3d(vector: Vector3d) -> bytes:
    writer = MessageWriter()
    for field, component in enumerate(vector, start=1):
        _put_float64(writer, field, component)
    return writer.getvalue()


def _decode_vector3d(data: bytes) -> Vector3d:
    components = [0.0, 0.0, 0.0]
    for number, wire_type, value in iter_fields(data):
        if 1 <= number <= 3:
            components[number - 1] = _fixed64(wire_type, value, "Vector3d")
    return (components[0], components[1], components[2])


def _encode_vector2f(vector: Vector2f) -> bytes:
    writer = MessageWriter()
    for field, component in enumerate(vector, start=1):
        _put_float32(writer, field, component)
    return writer.getvalue()


def _decode_vector2f(data: bytes) -> Vector2f:
    components = [0.0, 0.0]
    for number, wire_type, value in iter_fields(data):
        if 1 <= number <= 2:
            components[number - 1] = _fixed32(wire_type, value, "Vector2f")
    return (components[0], components[1])


def _encode_uuid(uuid: Uuid) -> bytes:
    writer = MessageWriter()
    for field, word in enumerate(uuid, start=1):
        _put_varint(writer, field, word)
    return writer.getvalue()


def _decode_uuid(data: bytes) -> Uuid:
    words = [0, 0, 0, 0]
    for number, wire_type, value in iter_fields(data):
        if 1 <= number <= 4:
            words[number - 1] = _uint32(_varint(wire_type, value, "Uuid"))
    return (words[0], words[1], words[2], words[3])


# Item ------------------------------------------------------------------------


def encode_item(item: Item) -> bytes:
    """Encode an item stack as an ``Item`` message."""
    writer = MessageWriter()
    _put_varint(writer, 1, item.count)
    _put_varint(writer, 2, item.slot)
    _put_string(writer, 3, item.id)
    return writer.getvalue()


def decode_item(data: bytes) -> Item:
    """Decode an ``Item`` message."""
    count = 0
    slot = 0
    item_id = ""
    for number, wire_type, value in iter_fields(data):
        if number == 1:
            count = _int32(_varint(wire_type, value, "Item.count"))
        elif number == 2:
            slot = _uint32(_varint(wire_type, value, "Item.slot"))
        elif number == 3:
            item_id = _string(wire_type, value, "Item.id")
    return Item(
        count=_narrow(count, -128, 127, "Item.count"),
        slot=_narrow(slot, 0, 255, "Item.slot"),
        id=item_id,
    )


# Abilities -------------------------------------------------------------------


_ABILITY_FLAGS = ("may_fly", "flying", "invulnerable", "may_build", "instabuild")


def encode_abilities(abilities: Abilities) -> bytes:
    """Encode player abilities as an ``Abilities`` message."""
    writer = MessageWriter()
    _put_float32(writer, 1, abilities.walk_speed)
    _put_float32(writer, 2, abilities.fly_speed)
    for field, flag in enumerate(_ABILITY_FLAGS, start=3):
        _put_varint(writer, field, bool(getattr(abilities, flag)))
    return writer.getvalue()


def decode_abilities(data: bytes) -> Abilities:
    """Decode an ``Abilities`` message."""
    speeds = {"walk_speed": 0.0, "fly_speed": 0.0}
    flags = dict.fromkeys(_ABILITY_FLAGS, False)
    for number, wire_type, value in iter_fields(data):
        if number == 1:
            speeds["walk_speed"] = _fixed32(wire_type, value, "Abilities.walk_speed")
        elif number == 2:
            speeds["fly_speed"] = _fixed32(wire_type, value, "Abilities.fly_speed")
        elif 3 <= number <= 7:
            name = _ABILITY_FLAGS[number - 3]
            flags[name] = _varint(wire_type, value, f"Abilities.{name}") != 0
    return Abilities(**speeds, **flags)


# Entity ----------------------------------------------------------------------


def encode_entity(entity: Entity) -> bytes:
    """Encode an entity as an ``Entity`` message."""
    writer = MessageWriter()
    _put_string(writer, 1, entity.id)
    writer.bytes_field(2, _encode_vector3d(entity.pos))
    writer.bytes_field(3, _encode_vector3d(entity.motion))
    writer.bytes_field(4, _encode_vector2f(entity.rotation))
    _put_float32(writer, 5, entity.fall_distance)
    _put_varint(writer, 6, entity.fire)
    _put_varint(writer, 7, entity.air)
    _put_varint(writer, 8, bool(entity.on_ground))
    _put_varint(writer, 9, bool(entity.no_gravity))
    _put_varint(writer, 10, bool(entity.invulnerable))
    _put_varint(writer, 11, entity.portal_cooldown)
    writer.bytes_field(12, _encode_uuid(entity.uuid))
    if entity.custom_name is not None:
        writer.bytes_field(13, entity.custom_name)
    _put_varint(writer, 14, bool(entity.custom_name_visible))
    _put_varint(writer, 15, bool(entity.silent))
    _put_varint(writer, 16, bool(entity.glowing))
    return writer.getvalue()


_ENTITY_FLAGS = {
    8: "on_ground",
    9: "no_gravity",
    10: "invulnerable",
    14: "custom_name_visible",
    15: "silent",
    16: "glowing",
}


def decode_entity(data: bytes) -> Entity:
    """Decode an ``Entity`` message; position, motion, rotation and uuid are required."""
    entity_id = ""
    pos: List[bytes] = []
    motion: List[bytes] = []
    rotation: List[bytes] = []
    uuid: List[bytes] = []
    fall_distance = 0.0
    fire = 0
    air = 0
    portal_cooldown = 0
    custom_name: Optional[str] = None
    flags = dict.fromkeys(_ENTITY_FLAGS.values(), False)
    for number, wire_type, value in iter_fields(data):
        if number == 1:
            entity_id = _string(wire_type, value, "Entity.id")
        elif number == 2:
            pos.append(_bytes(wire_type, value, "Entity.pos"))
        elif number == 3:
            motion.append(_bytes(wire_type, value, "Entity.motion"))
        elif number == 4:
            rotation.append(_bytes(wire_type, value, "Entity.rotation"))
        elif number == 5:
            fall_distance = _fixed32(wire_type, value, "Entity.fall_distance")
        elif number == 6:
            fire = _uint32(_varint(wire_type, value, "Entity.fire"))
        elif number == 7:
            air = _uint32(_varint(wire_type, value, "Entity.air"))
        elif number == 11:
            portal_cooldown = _int32(_varint(wire_type, value, "Entity.portal_cooldown"))
        elif number == 12:
            uuid.append(_bytes(wire_type, value, "Entity.uuid"))
        elif number == 13:
            custom_name = _string(wire_type, value, "Entity.custom_name")
        elif number in _ENTITY_FLAGS:
            name = _ENTITY_FLAGS[number]
            flags[name] = _varint(wire_type, value, f"Entity.{name}") != 0
    return Entity(
        id=entity_id,
        pos=_decode_vector3d(_required(pos, "Entity.pos")),
        motion=_decode_vector3d(_required(motion, "Entity.motion")),
        rotation=_decode_vector2f(_required(rotation, "Entity.rotation")),
        fall_distance=fall_distance,
        fire=_narrow(fire, 0, 0xFFFF, "Entity.fire"),
        air=_narrow(air, 0, 0xFFFF, "Entity.air"),
        portal_cooldown=portal_cooldown,
        uuid=_decode_uuid(_required(uuid, "Entity.uuid")),
        custom_name=custom_name,
        **flags,
    )


# Recipe book -----------------------------------------------------------------


_RECIPE_BOOK_FLAGS = (
    "is_filtering_craftable",
    "is_gui_open",
    "is_furnace_filtering_craftable",
    "is_furnace_gui_open",
    "is_blasting_furnace_filtering_craftable",
    "is_blasting_furnace_gui_open",
    "is_smoker_filtering_craftable",
    "is_smoker_gui_open",
)


def encode_recipe_book(book: RecipeBook) -> bytes:
    """Encode a recipe book as a ``RecipeBook`` message."""
    writer = MessageWriter()
    _put_strings(writer, 1, book.recipes)
    _put_strings(writer, 2, book.to_be_displayed)
    for field, flag in enumerate(_RECIPE_BOOK_FLAGS, start=3):
        _put_varint(writer, field, bool(getattr(book, flag)))
    return writer.getvalue()


def decode_recipe_book(data: bytes) -> RecipeBook:
    """Decode a ``RecipeBook`` message."""
    recipes: List[str] = []
    to_be_displayed: List[str] = []
    flags = dict.fromkeys(_RECIPE_BOOK_FLAGS, False)
    for number, wire_type, value in iter_fields(data):
        if number == 1:
            recipes.append(_string(wire_type, value, "RecipeBook.recipes"))
        elif number == 2:
            to_be_displayed.append(_string(wire_type, value, "RecipeBook.to_be_displayed"))
        elif 3 <= number <= 10:
            name = _RECIPE_BOOK_FLAGS[number - 3]
            flags[name] = _varint(wire_type, value, f"RecipeBook.{name}") != 0
    return RecipeBook(recipes=recipes, to_be_displayed=to_be_displayed, **flags)