"""
Record template compiler and renderer.

A template is literal text with placeholder actions between `{{` and `}}`.
Two action forms are recognised:

- `{{.name}}` (whitespace inside the braces is allowed: `{{ .name }}`)
- `{{generate "name"}}`

Anything else between the braces is a syntax error; text outside actions,
including stray `}}` (common in JSON skeletons), is copied verbatim.
Templates are compiled once and rendered many times: rendering is a join of
precomputed literal chunks and the per-record formatted values.

Usage:
    from corpusgen.template import compile_template

    tpl = compile_template('{"x":{{.x}}}')
    tpl.render({"x": "42"})  # b'{"x":42}'
"""

from __future__ import annotations

import re
from typing import List, Mapping, Tuple

from corpusgen.errors import TemplateSyntaxError, UndefinedFieldError

OPEN_DELIM = "{{"
CLOSE_DELIM = "}}"

_NAME = r"[A-Za-z_@][A-Za-z0-9_.@\-]*"
_DOT_ACTION = re.compile(rf"^\.({_NAME})$")
_GENERATE_ACTION = re.compile(rf'^generate\s+"({_NAME})"$')


def _parse_action(action: str, position: int) -> str:
    inner = action.strip()
    if not inner:
        raise TemplateSyntaxError("Empty template action", position)
    for pattern in (_DOT_ACTION, _GENERATE_ACTION):
        match = pattern.match(inner)
        if match:
            return match.group(1)
    raise TemplateSyntaxError(f"Unrecognised template action '{inner}'", position)


class CompiledTemplate:
    """
    Immutable, pre-split template.

    `literals` always holds one more chunk than `names`; a record is
    literals[0] + value(names[0]) + literals[1] + ... + literals[-1].
    """

    __slots__ = ("source", "_literals", "_names")

    def __init__(self, source: str, literals: List[str], names: List[str]) -> None:
        self.source = source
        self._literals: Tuple[str, ...] = tuple(literals)
        self._names: Tuple[str, ...] = tuple(names)

    @property
    def fields(self) -> List[str]:
        """Placeholder names in first-appearance order, without duplicates."""
        return list(dict.fromkeys(self._names))

    def render(self, namespace: Mapping[str, str]) -> bytes:
        """
        Substitute formatted values into the template.

        Raises
        ------
        UndefinedFieldError
            If a placeholder names a field missing from `namespace`.
        """
        literals = self._literals
        parts = [literals[0]]
        for index, name in enumerate(self._names, start=1):
            try:
                parts.append(namespace[name])
            except KeyError:
                raise UndefinedFieldError(name) from None
            parts.append(literals[index])
        return "".join(parts).encode("utf-8")

    def __repr__(self) -> str:
        return f"CompiledTemplate(fields={self.fields!r})"


def compile_template(text: str) -> CompiledTemplate:
    """
    Compile template text.

    Raises
    ------
    TemplateSyntaxError
        On an unclosed or unrecognised action, or when the template contains
        no placeholders at all.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TemplateSyntaxError(f"Template is not valid UTF-8: {exc}") from exc

    literals: List[str] = []
    names: List[str] = []
    pos = 0
    while True:
        start = text.find(OPEN_DELIM, pos)
        if start < 0:
            literals.append(text[pos:])
            break
        end = text.find(CLOSE_DELIM, start + len(OPEN_DELIM))
        if end < 0:
            raise TemplateSyntaxError("Unclosed template action", start)
        literals.append(text[pos:start])
        names.append(_parse_action(text[start + len(OPEN_DELIM) : end], start))
        pos = end + len(CLOSE_DELIM)

    if not names:
        raise TemplateSyntaxError("Template contains no placeholders")
    return CompiledTemplate(text, literals, names)


__all__ = ["CompiledTemplate", "compile_template", "OPEN_DELIM", "CLOSE_DELIM"]
