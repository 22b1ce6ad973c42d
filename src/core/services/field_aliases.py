"""Legacy field-name aliases for output templates.

Users still type `.Id` and `.Image` from older releases; the inspect records
call those fields `ID` and `ImageID`. The rewrite works on whole field
names only and knows nothing about the template language.
"""

from __future__ import annotations

FIELD_ALIASES: dict[str, str] = {
    "Id": "ID",
    "Image": "ImageID",
}


def _is_word(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def normalize_format(fmt: str, aliases: dict[str, str] | None = None) -> str:
    """Rewrite every `.<Alias>` field reference to its canonical name.

    The name after a dot spans the longest run of word characters, so it
    must end at a non-word character or the end of the string: `.Identity`
    and `.Images` are left alone, while `.Config.Image` and `$c.Id` are
    rewritten like any other reference.
    """

    table = FIELD_ALIASES if aliases is None else aliases
    if not fmt or "." not in fmt:
        return fmt

    out: list[str] = []
    i = 0
    n = len(fmt)
    while i < n:
        ch = fmt[i]
        if ch == ".":
            j = i + 1
            while j < n and _is_word(fmt[j]):
                j += 1
            name = fmt[i + 1 : j]
            out.append("." + table.get(name, name))
            i = j
            continue
        out.append(ch)
        i += 1
    return "".join(out)
