# savedata

A model of game player save data, a seeded random generator for building
datasets of it, and a binary codec in protocol buffer wire format for the
same records. It needs nothing beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The model

`savedata.model` defines the records as dataclasses:

- `GameType`: an `IntEnum` with `SURVIVAL`, `CREATIVE`, `ADVENTURE` and
  `SPECTATOR` (0 to 3)
- `Item`: an inventory stack with `count` (signed 8-bit), `slot`
  (unsigned 8-bit) and `id`
- `Abilities`: `walk_speed`, `fly_speed` and five ability flags
- `Entity`: id, position, motion, rotation, fall distance, fire, air,
  portal cooldown, a four-word uuid, an optional custom name and flags
- `RecipeBook`: known and displayed recipes and eight screen flags, all
  with defaults
- `Player`: the full player record
- `Players`: a list of players; it supports `len()` and iteration

Integer fields are checked against their width when a record is built:
a value of the wrong type raises `TypeError` and one out of range raises
`ValueError`. Vectors are stored as tuples of floats and must have the
right number of components. `Player` turns its game types into `GameType`
members.

## Generating data

`savedata.generate` builds random records from a `random.Random`, so the
same seed always gives the same data:

```python
import random
from savedata.generate import generate_players

rng = random.Random(42)
players = generate_players(rng, 100)
```

Single records come from `generate_game_type`, `generate_item`,
`generate_abilities`, `generate_entity`, `generate_recipe_book` and
`generate_player`. `generate_vec(rng, factory, max_len)` makes a list of
between 0 and `max_len - 1` values; it is used for recipes (fewer than 30),
displayed recipes (fewer than 10), inventory (fewer than 40) and ender
items (fewer than 27). Generated 32-bit floats are exactly representable,
so generated data survives an encode and decode unchanged.

`generate_vec` raises `ValueError` for a `max_len` that is not positive,
and `generate_players` for a negative count.

## Encoding and decoding

`savedata.codec` writes and reads whole players:

```python
from savedata.codec import decode_players, encode_players

data = encode_players(players)
assert decode_players(data) == players
```

`encode_player` and `decode_player` handle a single `Player`.

The smaller records have their own functions in `savedata.messages`:
`encode_item` / `decode_item`, `encode_abilities` / `decode_abilities`,
`encode_entity` / `decode_entity` and `encode_recipe_book` /
`decode_recipe_book`. `game_type_name` gives the schema name of a game type
(such as `"CREATIVE"`) and raises `ValueError` for an unknown one;
`game_type_from_name` goes the other way and returns `None` for an unknown
name.

Encoding follows proto3 rules: plain scalar fields holding their default
value are left out, while optional fields and sub-messages are written
whenever present. When decoding, the last value of a scalar field wins,
repeated occurrences of a singular sub-message are merged, and unknown
fields are skipped.

Decoding raises `savedata.wire.DecodeError` (a `ValueError`) for malformed
input: truncated or over-long varints, bad field numbers or wire types,
group fields, a field with the wrong wire type, invalid UTF-8, an unknown
game type, or a missing required sub-message (an entity's position, motion,
rotation and uuid; a player's selected item, abilities and recipe book; a
vehicle's uuid and entity). It is also raised when an item's count or slot,
an entity's fire or air, or a player's sleep timer does not fit its width.
Other 32-bit and 64-bit integer fields are read by truncating to their
width.

## Wire primitives

`savedata.wire` holds the low-level pieces:

- `encode_varint(value)`: base-128 varint; negative values are written as
  64-bit two's complement
- `decode_varint(data, offset)`: returns the value and the offset after it
- `to_signed(value, bits)`: reads the low bits as two's complement
- `iter_fields(data)`: yields `(field_number, wire_type, value)` tuples,
  with varints as integers and other values as raw bytes
- `WireType`: the wire types as an `IntEnum`
- `MessageWriter`: builds a message with `varint`, `float32`, `float64` and
  `bytes_field` (strings are written as UTF-8), each returning the writer,
  and `getvalue` for the bytes so far

## What it does not do

There is no command-line tool, no file handling and no benchmark harness:
the package gives records, a generator and byte-level encoding, and
leaves reading, writing and timing to the caller. Only the protocol buffer
wire format is provided.