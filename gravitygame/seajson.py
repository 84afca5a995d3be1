"""A small forgiving JSON scanner that reads values by key from raw text."""

from __future__ import annotations

from dataclasses import dataclass

_WHITESPACE = frozenset("\n \t")
_ULONG_MASK = (1 << 64) - 1


class SeaJSONError(ValueError):
    """Raised when a document or array cannot be read as requested."""


def _char_at(text: str, index: int) -> str:
    return text[index] if 0 <= index < len(text) else "\0"


def load_json(filename) -> str:
    """Read a whole JSON document as text."""
    try:
        with open(filename, encoding="utf-8", newline="") as handle:
            return handle.read()
    except OSError as exc:
        raise SeaJSONError(f"Cannot find file: {filename}") from exc


def get_string(json: str, key: str) -> str | None:
    """Return the string value that follows ``"key":``, or None."""
    read: list[str] = []
    value: list[str] = []
    found = False
    in_string = False
    i = 0
    while i < len(json):
        char = json[i]
        if char == '"':
            if in_string:
                if found:
                    return "".join(value)
                if "".join(read) == key and _char_at(json, i + 1) == ":":
                    found = True
                    i += 1
                in_string = False
            else:
                read.clear()
                value.clear()
                in_string = True
            i += 1
            continue
        if in_string:
            if found:
                value.append(char)
            elif len(read) > len(key):
                read.clear()
            else:
                read.append(char)
        i += 1
    return None


def get_int(json: str, key: str) -> int:
    """Return the unsigned integer that follows ``"key":``, or 0."""
    read: list[str] = []
    found = False
    in_string = False
    result = 0
    i = 0
    while i < len(json):
        char = json[i]
        if char == '"':
            if in_string:
                in_string = False
                if "".join(read) == key and _char_at(json, i + 1) == ":":
                    found = True
                    i += 1
            else:
                read.clear()
                in_string = True
            i += 1
            continue
        if found:
            if char in "},":
                return result
            result = (result * 10 + ord(char) - ord("0")) & _ULONG_MASK
        elif in_string:
            if len(read) > len(key):
                read.clear()
            else:
                read.append(char)
        i += 1
    return 0


def _extract(json: str, key: str, closer: str) -> tuple[str, int] | None:
    """Return the container after ``"key":`` ending with ``closer``, and its item count."""
    read: list[str] = []
    out: list[str] = []
    progress = 0
    found = False
    in_string = False
    depth = 0
    in_value_string = False
    count = 0
    i = 0
    while i < len(json):
        char = json[i]
        if char == '"':
            if in_string:
                in_string = False
                if (
                    progress == len(key)
                    and "".join(read) == key
                    and _char_at(json, i + 1) == ":"
                ):
                    found = True
                    progress = 0
                    i += 2
                    continue
            else:
                in_string = True
                if not found:
                    read.clear()
                    progress = 0
                    i += 1
                    continue
        elif char == closer and found and depth == 1 and not in_value_string:
            return "".join(out[:progress]) + closer, count
        if found:
            if progress < len(out):
                out[progress] = char
            else:
                out.append(char)
            progress += 1
            if not in_value_string:
                if char in "{[":
                    depth += 1
                    if char == "[" and depth == 1 and count == 0:
                        count += 1
                elif char in "}]":
                    depth -= 1
                elif char == '"':
                    in_value_string = True
                elif char == "," and depth == 1:
                    count += 1
            elif char == '"' and json[i - 1] != "\\":
                in_value_string = False
        elif in_string:
            if progress > len(key):
                read.clear()
                progress = 0
            else:
                read.append(char)
                progress += 1
        i += 1
    return None


def get_dictionary(json: str, key: str) -> str | None:
    """Return the object text that follows ``"key":``, or None."""
    extracted = _extract(json, key, "}")
    return None if extracted is None else extracted[0]


def get_array(json: str, key: str) -> JArray | None:
    """Return the array that follows ``"key":``, or None."""
    extracted = _extract(json, key, "]")
    if extracted is None:
        return None
    text, count = extracted
    return JArray(count, text)


def remove_whitespace(json: str) -> str:
    """Drop spaces, tabs and newlines that are outside string literals."""
    out: list[str] = []
    inside = False
    for char in json:
        if not inside:
            if char in _WHITESPACE:
                continue
            if char == '"':
                inside = True
        elif char == '"':
            inside = False
        out.append(char)
    return "".join(out)


@dataclass(frozen=True)
class JArray:
    """The raw text of a JSON array together with its item count."""

    item_count: int
    text: str

    @classmethod
    def empty(cls) -> JArray:
        """Return an array with no items."""
        return cls(0, "[]")

    def item(self, index: int) -> str:
        """Return the raw text of the item at ``index`` (compact arrays only)."""
        if self.item_count <= 0:
            raise SeaJSONError("jarray with 0 or less items")
        if index >= self.item_count:
            raise SeaJSONError("Requested out-of-bounds index from jarray")
        text = self.text
        last = len(text) - 2
        item_index = 0
        collected: list[str] = []
        depth = 0
        in_string = False
        i = 1
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
            separator = _char_at(text, i + 1) == "," and depth == 0 and not in_string
            if item_index == index:
                collected.append(char)
                if separator or i == last:
                    return "".join(collected)
            else:
                if i == last:
                    raise SeaJSONError("Failed to find item in array.")
                if separator:
                    i += 1
                    item_index += 1
            i += 1
        raise SeaJSONError("Failed to find item in array.")

    def string_item(self, index: int) -> str:
        """Return the item at ``index`` with surrounding quotes removed."""
        raw = self.item(index)
        if raw.startswith('"') and raw.endswith('"'):
            return raw[1:-1]
        return raw

    def int_item(self, index: int) -> int:
        """Return the item at ``index`` read as a signed decimal integer."""
        raw = self.item(index)
        negative = raw.startswith("-")
        value = 0
        for char in raw[1:] if negative else raw:
            value = value * 10 + ord(char) - ord("0")
        return -value if negative else value

    def without_whitespace(self) -> JArray:
        """Return the same array with insignificant whitespace removed."""
        return JArray(self.item_count, remove_whitespace(self.text))