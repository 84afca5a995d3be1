"""Editing operations on raw JSON text: adding, removing and replacing values."""

from __future__ import annotations

from .seajson import JArray, SeaJSONError

BUILD_VERSION = 19


def _char_at(text: str, index: int) -> str:
    return text[index] if 0 <= index < len(text) else "\0"


def _require_valid(array: JArray | None, operation: str) -> JArray:
    if array is None:
        raise SeaJSONError(f"Non-valid jarray passed into {operation}")
    return array


def remove_item_of_jarray(array: JArray | None, index: int) -> JArray:
    """Return a copy of ``array`` without the item at ``index`` (compact arrays only)."""
    array = _require_valid(array, "remove_item_of_jarray")
    if array.item_count <= 0:
        raise SeaJSONError("jarray with 0 or less items passed into remove_item_of_jarray")
    if index >= array.item_count:
        raise SeaJSONError("Requested out-of-bounds index from jarray (remove_item_of_jarray)")
    text = array.text
    last = len(text) - 2
    out: list[str] = []
    item_index = 0
    depth = 0
    in_string = False
    i = 0
    while i < len(text):
        char = text[i]
        if not in_string:
            if char in "{[":
                depth += 1
            elif char in "}]":
                depth -= 1
            elif char == '"':
                in_string = True
        elif char == '"' and text[i - 1] != "\\":
            in_string = False
        if item_index != index:
            out.append(char)
        following = _char_at(text, i + 1)
        if i == last:
            out.append(following)
            return JArray(array.item_count - 1, "".join(out))
        if following == "," and depth == 1 and not in_string:
            i += 1
            item_index += 1
            if item_index != index:
                out.append(",")
        i += 1
    # The end of the array was never reached; leave it untouched.
    return array


def add_item_to_jarray(array: JArray | None, item: str) -> JArray:
    """Return a copy of ``array`` with the raw ``item`` appended."""
    array = _require_valid(array, "add_item_to_jarray")
    text = array.text
    if not (text.startswith("[") and text.endswith("]")):
        raise SeaJSONError("Failed to find end of jarray (add_item_to_jarray)")
    if len(text) == 2:
        return JArray(1, f"[{item}]")
    return JArray(array.item_count + 1, f"{text[:-1]},{item}]")


def _require_document(json: str) -> None:
    if not json:
        raise SeaJSONError("Cannot append to an empty document")


def add_string(json: str, key: str, value: str) -> str:
    """Append ``"key":"value"`` to an object without checking for an existing key."""
    _require_document(json)
    return f'{json[:-1]},"{key}":"{value}"}}'


def add_item(json: str, key: str, value: str) -> str:
    """Append ``"key":value`` with ``value`` as raw JSON, without checking for the key."""
    _require_document(json)
    return f'{json[:-1]},"{key}":{value}}}'


def get_pos_string(json: str, key: str) -> int:
    """Return the index of the first character of the string after ``"key":``, or -1."""
    read: list[str] = []
    found = False
    in_string = False
    i = 0
    while i < len(json):
        char = json[i]
        if char == '"':
            if in_string:
                if found:
                    raise SeaJSONError("Found end of string (get_pos_string)")
                if "".join(read) == key and _char_at(json, i + 1) == ":":
                    found = True
                    i += 1
                in_string = False
            else:
                read.clear()
                in_string = True
            i += 1
            continue
        if in_string:
            if found:
                return i
            if len(read) > len(key):
                read.clear()
            else:
                read.append(char)
        i += 1
    return -1


def get_pos_item(json: str, key: str) -> int:
    """Return the index of the closing quote of ``"key"`` followed by ``:``, or -1."""
    read: list[str] = []
    in_string = False
    for i, char in enumerate(json):
        if char == '"':
            if in_string:
                if "".join(read) == key and _char_at(json, i + 1) == ":":
                    return i
                in_string = False
            else:
                read.clear()
                in_string = True
            continue
        if in_string:
            if len(read) > len(key):
                read.clear()
            else:
                read.append(char)
    return -1


def _end_of_removed(json: str, start: int, stop_at_comma: bool) -> int:
    """Return the index just past the value that begins scanning at ``start``."""
    depth = 0
    in_string = False
    for i in range(start, len(json)):
        char = json[i]
        if char == '"':
            if json[i - 1] != "\\":
                if depth == 0:
                    return i + 1
                in_string = not in_string
        elif in_string:
            continue
        elif char in "{[":
            depth += 1
        elif char in "}]":
            depth -= 1
        elif char == "," and stop_at_comma and depth == 0:
            return i + 1
    return len(json)


def remove_string(json: str, key: str) -> str:
    """Remove the string entry for ``key`` together with the separator before it."""
    pos = get_pos_string(json, key)
    if pos == -1:
        return json
    start = max(pos - len(key) - 5, 0)
    return json[:start] + json[_end_of_removed(json, pos, False):]


def remove_item(json: str, key: str) -> str:
    """Remove the entry located by :func:`get_pos_item` for ``key``."""
    pos = get_pos_item(json, key)
    if pos == -1:
        return json
    start = max(pos - len(key) - 5, 0)
    return json[:start] + json[_end_of_removed(json, pos, True):]


def set_item(json: str, key: str, value: str) -> str:
    """Replace the raw value of ``key`` with ``value``, adding the key if it is missing."""
    pos = get_pos_item(json, key)
    if pos == -1:
        return add_item(json, key, value)
    start = pos + 2
    end = len(json)
    depth = 0
    in_string = False
    for i in range(start, len(json)):
        char = json[i]
        if char == '"':
            if json[i - 1] != "\\":
                in_string = not in_string
        elif in_string:
            continue
        elif char in "{[":
            depth += 1
        elif char == "}":
            if depth == 0:
                end = i
                break
            depth -= 1
        elif char == "]":
            depth -= 1
        elif char == "," and depth == 0:
            end = i
            break
    return json[:start] + value + json[end:]


def build_version() -> int:
    """Return the build version of this JSON toolkit."""
    return BUILD_VERSION