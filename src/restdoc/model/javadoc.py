"""Javadoc comment text parser.

Turns raw doc comment text into the fields of a DocComment: the main
description, its first sentence, @param texts and all other block tags.
"""

import re

_BLOCK_TAG = re.compile(r"^@(\w+)\s*(.*)$")
_SENTENCE_END = re.compile(r"\.(\s|$)")


def strip_comment(text: str) -> str:
    """Remove the /** */ delimiters and leading * gutters."""
    text = text.strip()
    if text.startswith("/**"):
        text = text[3:]
    elif text.startswith("/*"):
        text = text[2:]
    if text.endswith("*/"):
        text = text[:-2]

    lines = []
    for line in text.splitlines():
        line = line.strip()
        if line.startswith("*"):
            line = line[1:]
            if line.startswith(" "):
                line = line[1:]
        lines.append(line.rstrip())
    return "\n".join(lines).strip()


def first_sentence(body: str) -> str:
    """Return the text up to and including the first period followed by whitespace."""
    body = body.strip()
    match = _SENTENCE_END.search(body)
    if not match:
        return " ".join(body.split())
    return " ".join(body[: match.start() + 1].split())


def parse_javadoc(text: str) -> dict:
    """Parse raw Javadoc text into DocComment fields."""
    main: list[str] = []
    blocks: list[tuple[str, list[str]]] = []

    for line in strip_comment(text).splitlines():
        match = _BLOCK_TAG.match(line.strip())
        if match:
            blocks.append((match.group(1), [match.group(2)]))
        elif blocks:
            blocks[-1][1].append(line.strip())
        else:
            main.append(line)

    body = "\n".join(main).strip()
    tags = []
    params: dict[str, str] = {}
    for name, parts in blocks:
        content = " ".join(p for p in parts if p).strip()
        if name == "param":
            # name and text may be separated by any whitespace
            words = content.split(None, 1)
            if words:
                # first @param for a name wins, like the javadoc tool
                params.setdefault(words[0], words[1].strip() if len(words) > 1 else "")
        else:
            tags.append({"name": name, "text": content})

    return {
        "body": body,
        "first_sentence": first_sentence(body),
        "tags": tags,
        "params": params,
    }
