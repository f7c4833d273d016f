"""Protocol buffer messages for whole players and player collections.

Encoding follows proto3 rules: plain scalar fields are left out when they
hold their default value. Optional fields and sub-messages are written
whenever they are present. On decoding, the last value of a scalar field
wins, repeated occurrences of a singular sub-message are merged, and unknown
fields are skipped. A player must carry its selected item, abilities and
recipe book. A vehicle must carry its uuid and entity.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple

from savedata.messages import (
    _bytes,
    _decode_uuid,
    _decode_vector3d,
    _encode_uuid,
    _encode_vector3d,
    _fixed32,
    _int32,
    _narrow,
    _put_float32,
    _put_string,
    _put_varint,
    _required,
    _string,
    _uint32,
    _varint,
    decode_abilities,
    decode_entity,
    decode_item,
    decode_recipe_book,
    encode_abilities,
    encode_entity,
    encode_item,
    encode_recipe_book,
)
from savedata.model import Entity, GameType, Player, Players, Uuid
from savedata.wire import DecodeError, MessageWriter, WireType, iter_fields, to_signed


def _game_type(wire_type: WireType, value, name: str) -> GameType:
    number = _int32(_varint(wire_type, value, name))
    try:
        return GameType(number)
    except ValueError:
        raise DecodeError(f"{name}: unknown game type {number}") from None


def _int64(wire_type: WireType, value, name: str) -> int:
    return to_signed(_varint(wire_type, value, name), 64)


def _u32(wire_type: WireType, value, name: str) -> int:
    return _uint32(_varint(wire_type, value, name))


def _i32(wire_type: WireType, value, name: str) -> int:
    return _int32(_varint(wire_type, value, name))


def _flag(wire_type: WireType, value, name: str) -> bool:
    return _varint(wire_type, value, name) != 0


_Reader = Callable[[WireType, object, str], object]

_SCALARS: Dict[int, Tuple[str, _Reader]] = {
    1: ("game_type", _game_type),
    2: ("previous_game_type", _game_type),
    3: ("score", _int64),
    4: ("dimension", _string),
    5: ("selected_item_slot", _u32),
    7: ("spawn_dimension", _string),
    8: ("spawn_x", _int64),
    9: ("spawn_y", _int64),
    10: ("spawn_z", _int64),
    11: ("spawn_forced", _flag),
    12: ("sleep_timer", _u32),
    13: ("food_exhaustion_level", _fixed32),
    14: ("food_saturation_level", _fixed32),
    15: ("food_tick_timer", _u32),
    16: ("xp_level", _u32),
    17: ("xp_p", _fixed32),
    18: ("xp_total", _i32),
    19: ("xp_seed", _i32),
    27: ("seen_credits", _flag),
}

_MESSAGES: Dict[int, str] = {
    6: "selected_item",
    22: "abilities",
    23: "entered_nether_position",
    24: "root_vehicle",
    25: "shoulder_entity_left",
    26: "shoulder_entity_right",
    28: "recipe_book",
}

_REPEATED: Dict[int, str] = {20: "inventory", 21: "ender_items"}


def _encode_vehicle(vehicle: Tuple[Uuid, Entity]) -> bytes:
    uuid, entity = vehicle
    return (
        MessageWriter()
        .bytes_field(1, _encode_uuid(uuid))
        .bytes_field(2, encode_entity(entity))
        .getvalue()
    )


def _decode_vehicle(data: bytes) -> Tuple[Uuid, Entity]:
    uuid: List[bytes] = []
    entity: List[bytes] = []
    for number, wire_type, value in iter_fields(data):
        if number == 1:
            uuid.append(_bytes(wire_type, value, "Vehicle.uuid"))
        elif number == 2:
            entity.append(_bytes(wire_type, value, "Vehicle.entity"))
    return (
        _decode_uuid(_required(uuid, "Vehicle.uuid")),
        decode_entity(_required(entity, "Vehicle.entity")),
    )


def _optional(parts: List[bytes], decode: Callable[[bytes], object]) -> Optional[object]:
    return decode(b"".join(parts)) if parts else None


def encode_player(player: Player) -> bytes:
    """Encode a player as a ``Player`` message."""
    writer = MessageWriter()
    _put_varint(writer, 1, int(player.game_type))
    _put_varint(writer, 2, int(player.previous_game_type))
    _put_varint(writer, 3, player.score)
    _put_string(writer, 4, player.dimension)
    _put_varint(writer, 5, player.selected_item_slot)
    writer.bytes_field(6, encode_item(player.selected_item))
    if player.spawn_dimension is not None:
        writer.bytes_field(7, player.spawn_dimension)
    _put_varint(writer, 8, player.spawn_x)
    _put_varint(writer, 9, player.spawn_y)
    _put_varint(writer, 10, player.spawn_z)
    if player.spawn_forced is not None:
        writer.varint(11, bool(player.spawn_forced))
    _put_varint(writer, 12, player.sleep_timer)
    _put_float32(writer, 13, player.food_exhaustion_level)
    _put_float32(writer, 14, player.food_saturation_level)
    _put_varint(writer, 15, player.food_tick_timer)
    _put_varint(writer, 16, player.xp_level)
    _put_float32(writer, 17, player.xp_p)
    _put_varint(writer, 18, player.xp_total)
    _put_varint(writer, 19, player.xp_seed)
    for item in player.inventory:
        writer.bytes_field(20, encode_item(item))
    for item in player.ender_items:
        writer.bytes_field(21, encode_item(item))
    writer.bytes_field(22, encode_abilities(player.abilities))
    if player.entered_nether_position is not None:
        writer.bytes_field(23, _encode_vector3d(player.entered_nether_position))
    if player.root_vehicle is not None:
        writer.bytes_field(24, _encode_vehicle(player.root_vehicle))
    if player.shoulder_entity_left is not None:
        writer.bytes_field(25, encode_entity(player.shoulder_entity_left))
    if player.shoulder_entity_right is not None:
        writer.bytes_field(26, encode_entity(player.shoulder_entity_right))
    _put_varint(writer, 27, bool(player.seen_credits))
    writer.bytes_field(28, encode_recipe_book(player.recipe_book))
    return writer.getvalue()


def decode_player(data: bytes) -> Player:
    """Decode a ``Player`` message."""
    fields: Dict[str, object] = {
        "game_type": GameType.SURVIVAL,
        "previous_game_type": GameType.SURVIVAL,
        "score": 0,
        "dimension": "",
        "selected_item_slot": 0,
        "spawn_dimension": None,
        "spawn_x": 0,
        "spawn_y": 0,
        "spawn_z": 0,
        "spawn_forced": None,
        "sleep_timer": 0,
        "food_exhaustion_level": 0.0,
        "food_saturation_level": 0.0,
        "food_tick_timer": 0,
        "xp_level": 0,
        "xp_p": 0.0,
        "xp_total": 0,
        "xp_seed": 0,
        "seen_credits": False,
    }
    messages: Dict[str, List[bytes]] = {name: [] for name in _MESSAGES.values()}
    repeated: Dict[str, list] = {name: [] for name in _REPEATED.values()}

    for number, wire_type, value in iter_fields(data):
        if number in _SCALARS:
            name, reader = _SCALARS[number]
            fields[name] = reader(wire_type, value, f"Player.{name}")
        elif number in _MESSAGES:
            name = _MESSAGES[number]
            messages[name].append(_bytes(wire_type, value, f"Player.{name}"))
        elif number in _REPEATED:
            name = _REPEATED[number]
            repeated[name].append(decode_item(_bytes(wire_type, value, f"Player.{name}")))

    fields["sleep_timer"] = _narrow(fields["sleep_timer"], 0, 0xFFFF, "Player.sleep_timer")
    return Player(
        selected_item=decode_item(
            _required(messages["selected_item"], "Player.selected_item")
        ),
        abilities=decode_abilities(_required(messages["abilities"], "Player.abilities")),
        entered_nether_position=_optional(
            messages["entered_nether_position"], _decode_vector3d
        ),
        root_vehicle=_optional(messages["root_vehicle"], _decode_vehicle),
        shoulder_entity_left=_optional(messages["shoulder_entity_left"], decode_entity),
        shoulder_entity_right=_optional(messages["shoulder_entity_right"], decode_entity),
        recipe_book=decode_recipe_book(
            _required(messages["recipe_book"], "Player.recipe_book")
        ),
        **repeated,
        **fields,
    )


def encode_players(players: Players) -> bytes:
    """Encode a collection of players as a ``Players`` message."""
    writer = MessageWriter()
    for player in players:
        writer.bytes_field(1, encode_player(player))
    return writer.getvalue()


def decode_players(data: bytes) -> Players:
    """Decode a ``Players`` message."""
    players = [
        decode_player(_bytes(wire_type, value, "Players.players"))
        for number, wire_type, value in iter_fields(data)
        if number == 1
    ]
    return Players(players)