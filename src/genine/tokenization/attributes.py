"""Attribute-list parsing for opening tags.

The attribute portion of a tag (everything after the first space) is scanned
character by character with a NAME/VALUE state and an in-quotation flag.
Double quotes group a value that may contain spaces and ``=``; they are never
part of the value itself.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import List

from genine.shared import (
    MalformedAttributePair,
    QuoteOutsideValue,
    UnterminatedQuote,
)

QUOTE = '"'
ASSIGN = "="
SEPARATOR = " "


class AttributeState(Enum):
    """Which half of a name/value pair is being read."""

    NAME = auto()
    VALUE = auto()


@dataclass(frozen=True)
class Attribute:
    """A name/value pair attached to an opening tag."""

    name: str
    value: str

    def __str__(self) -> str:
        return f'{self.name}="{self.value}"'


def parse_attributes(s: str, base_offset: int = 0) -> List[Attribute]:
    """Parse an attribute list such as ``class="a b" id=x``.

    Pairs are returned in encounter order, duplicates included. A trailing
    pair is kept only when both its name and value are non-empty, so a bare
    ``disabled`` at the end of the list is dropped.

    Args:
        s: Attribute portion of a tag
        base_offset: Offset of ``s`` in the original input, used in errors

    Returns:
        List of attributes

    Raises:
        MalformedAttributePair: If a pair is finalized without a value or name
        QuoteOutsideValue: If a quote appears while reading a name
        UnterminatedQuote: If a quotation is still open at the end
    """
    base_offset += len(s) - len(s.lstrip())
    s = s.strip()

    attributes: List[Attribute] = []
    state = AttributeState.NAME
    in_quotation = False
    name = ""
    value = ""

    for index, char in enumerate(s):
        if char == ASSIGN:
            if in_quotation:
                if state != AttributeState.VALUE:
                    raise MalformedAttributePair(
                        f"'{ASSIGN}' inside quotes while reading a name",
                        base_offset + index,
                    )
                value += char
            else:
                state = AttributeState.VALUE
        elif char == SEPARATOR:
            if in_quotation:
                value += char
                continue
            if state == AttributeState.NAME:
                raise MalformedAttributePair(
                    f"attribute {name!r} has no value" if name
                    else "unexpected space in attribute list",
                    base_offset + index,
                )
            if not name:
                raise MalformedAttributePair(
                    f"value {value!r} has no attribute name",
                    base_offset + index,
                )
            attributes.append(Attribute(name, value))
            name = ""
            value = ""
            state = AttributeState.NAME
        elif char == QUOTE:
            if state != AttributeState.VALUE:
                raise QuoteOutsideValue(
                    f"quote in attribute name {name!r}", base_offset + index
                )
            in_quotation = not in_quotation
        elif state == AttributeState.NAME:
            name += char
        else:
            value += char

    if in_quotation:
        raise UnterminatedQuote(
            f"unterminated quote in value of attribute {name!r}",
            base_offset + len(s),
        )

    if name and value:
        attributes.append(Attribute(name, value))

    return attributes
