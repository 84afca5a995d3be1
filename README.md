# gravitygame

A small side-scrolling platformer. You steer the player left and right,
jump onto platforms, and flip gravity so the player falls up onto the
undersides of platforms. While the game runs you can also place new
platforms and remove existing ones with the mouse.

## Installing

```
pip install .
```

The game uses `pygame` for the window, drawing, sound and game controllers.

## Running

```
gravitygame
```

The game looks for its files in the directory of the program it was
started as (the directory part of `argv[0]`). When started through the
installed `gravitygame` command, that is the directory holding the
command itself. If `argv[0]` has no directory part, the game stops with
an error. It expects:

- `level_dev.json`, the level to load
- `resources/pixil-frame-0.png`, the background, scaled to the 854×480 window
- `resources/trick_sprites/*.png`, the eight player sprites
- `resources/sonic_3_at_3am.wav`, the background music, played in a loop
- `resources/jump.mp3` and `resources/blank.mp3`, the jump sound

A missing level file ends the game with an error message; missing images
end it with an error once the window is open. Sound that cannot be loaded
is logged and the game carries on without it.

A level is a JSON document with a `platforms` array. Each platform has a
`point` array that holds `[x, y, width, height]`:

```json
{"platforms":[{"object_type":"generic_platform","object_id":0,"point":[0,280,854,200]}]}
```

## Controls

| Action          | Keyboard            | Controller         |
|-----------------|---------------------|--------------------|
| Move            | Left / Right arrows | Left stick         |
| Jump            | Up arrow            | Button 0 (A)       |
| Flip gravity    | Z                   | Button 1 (B)       |
| Pause / resume  | P                   | Button 7 (Start)   |

A key acts as Z or P when its name begins with that letter. Controller
button numbers follow the common XInput-style layout. The first connected
controller is used, and another is picked up if it is unplugged.

With the mouse:

- Left click once to pause and mark the first corner of a new platform;
  a purple preview follows the mouse. Left click again to place the
  platform, which also resumes the game. Unpausing with P or Start instead
  cancels the placement.
- Right click on a platform to remove it.

## What it does not do

Platforms placed or removed with the mouse exist only while the game is
running; nothing is written back to the level file.

## Using the pieces as a library

The modules can be used on their own, without a window:

- `gravitygame.seajson` reads values out of JSON text by key with
  `get_string`, `get_int`, `get_dictionary` and `get_array`. `get_array`
  returns a `JArray` (its `item_count` and raw `text`), whose items are read
  with `item`, `string_item` and `int_item`; item access expects compact
  text, which `remove_whitespace` and `JArray.without_whitespace` produce.
  `load_json` reads a file as text. Errors raise `SeaJSONError`.
- `gravitygame.seajson_edit` edits that text: `add_item_to_jarray`,
  `remove_item_of_jarray`, `add_string`, `add_item`, `set_item`,
  `remove_string`, `remove_item`, and the position helpers
  `get_pos_string` and `get_pos_item`.
- `gravitygame.zones` loads platforms with `load_level` (compact files,
  returning a list of `Rect`) or `Zone.from_file` (whitespace allowed).
  A `Zone` keeps world and on-screen rectangles and supports `add` and
  `remove`.
- `gravitygame.collision` answers how a player-sized rectangle touches the
  platforms of a zone, for example `get_collision_type` and
  `colliding_platform`, which return `CollisionType` flags or a platform
  index (`None` when there is none).
- `gravitygame.state` holds `GameState`, the game's rules and physics. It
  advances with `apply_input(InputState(...))` and `update()`, and needs no
  display; `SilentAudio` stands in for sound.

```python
from gravitygame.seajson import get_array

platforms = get_array('{"platforms":[[1,2],[3,4]]}', "platforms")
print(platforms.item_count, platforms.item(1))  # 2 [3,4]
```

## Running the tests

```
pip install .[test]
pytest
```