"""Chemical formula parsing.

A compound string such as ``Ca(OH)2`` is first split into entity tokens
(``["Ca", "(OH)2"]``). Each token is then resolved into a base and a
count; parenthesised bases are parsed recursively and scaled by their
count. The result is a composition: a mapping from element symbol to the
number of atoms of that element in one unit of the compound.
"""

from __future__ import annotations

import logging
import re
import string
import warnings
from typing import Mapping

from chembalance.constants import MAX_ENTITY_COUNT, MAX_INT64, SUSPICIOUS_SYMBOL_LENGTH
from chembalance.errors import (
    EmptyToken,
    InvalidCharacter,
    InvalidNumber,
    MalformedEntity,
    SuspiciousElementWarning,
    UnmatchedParentheses,
)

logger = logging.getLogger(__name__)

_VALID_CHARS = frozenset(string.ascii_letters + string.digits + "()")
_BARE_ENTITY = re.compile(r"([A-Z][a-z]*)([0-9]*)")
_GROUP_ENTITY = re.compile(r"\((.*)\)([0-9]*)", re.DOTALL)
_HYDRATE_SEPARATOR = re.compile(r"[.·*]")
_HYDRATE_PART = re.compile(r"([0-9]*)(.+)", re.DOTALL)


def tokenize_compound(compound: str) -> list[str]:
    """Split a compound string into entity tokens.

    ``CaSO4`` becomes ``["Ca", "S", "O4"]`` and ``Ca(OH)2`` becomes
    ``["Ca", "(OH)2"]``. Nested parentheses stay inside the outer group
    token and are handled when that group is parsed.
    """
    tokens: list[str] = []
    depth = 0

    for position, char in enumerate(compound):
        if char not in _VALID_CHARS:
            raise InvalidCharacter(
                f"{compound}: invalid character {char!r} at position {position}",
                compound=compound,
                char=char,
                position=position,
            )

        if char == "(":
            depth += 1
            if depth == 1:
                tokens.append(char)
            else:
                tokens[-1] += char
            continue

        if depth == 0:
            if char == ")":
                raise UnmatchedParentheses(
                    f"{compound}: unexpected ')' at position {position}",
                    compound=compound,
                    position=position,
                )
            if char.isupper():
                tokens.append(char)
            elif tokens:
                tokens[-1] += char
            else:
                # e.g. "c26"
                raise MalformedEntity(
                    f"{compound}: entity cannot start with {char!r}",
                    compound=compound,
                    char=char,
                    position=position,
                )
        else:
            if char == ")":
                depth -= 1
            tokens[-1] += char

    if depth != 0:
        raise UnmatchedParentheses(
            f"{compound}: {depth} unclosed parenthes{'is' if depth == 1 else 'es'}",
            compound=compound,
            depth=depth,
        )

    return tokens


def resolve_entity(entity: str) -> tuple[str, int]:
    """Split an entity token into its base and trailing count.

    For a bare entity the base is the element symbol (``"H2"`` gives
    ``("H", 2)``); for a parenthesised group it is the text between the
    outer parentheses (``"(OH)2"`` gives ``("OH", 2)``). The count
    defaults to 1.
    """
    if not entity:
        raise EmptyToken("Empty entity")

    is_group = entity[0] == "("
    match = (_GROUP_ENTITY if is_group else _BARE_ENTITY).fullmatch(entity)
    if match is None:
        raise MalformedEntity(f"Malformed entity {entity!r}", entity=entity)

    base, digits = match.groups()
    count = _parse_count(digits, entity) if digits else 1

    if not is_group and len(base) >= SUSPICIOUS_SYMBOL_LENGTH:
        warnings.warn(
            SuspiciousElementWarning(
                f'special element "{base}", the equation may not exist',
                symbol=base,
            ),
            stacklevel=2,
        )

    return base, count


def parse_compound(compound: str) -> dict[str, int]:
    """Return the element composition of a compound string.

    >>> parse_compound("Ca(OH)2")
    {'Ca': 1, 'O': 2, 'H': 2}
    """
    if not compound:
        raise EmptyToken("Empty compound")

    composition: dict[str, int] = {}
    for entity in tokenize_compound(compound):
        base, count = resolve_entity(entity)
        if entity[0] == "(":
            _merge(composition, parse_compound(base), count)
        else:
            _merge(composition, {base: 1}, count)
    return composition


def expand_hydrates(compound: str) -> str:
    """Rewrite hydrate notation into a parenthesised group.

    ``CuSO4.5H2O`` (or with ``·`` / ``*`` as separator) becomes
    ``CuSO4(H2O)5``. Strings without a separator, or with an empty part,
    are returned unchanged and left for the tokenizer to judge.
    """
    parts = _HYDRATE_SEPARATOR.split(compound)
    if len(parts) == 1 or not all(parts):
        return compound

    pieces = [parts[0]]
    for part in parts[1:]:
        multiplier, formula = _HYDRATE_PART.fullmatch(part).groups()
        pieces.append(f"({formula}){multiplier}")
    expanded = "".join(pieces)
    logger.debug("Expanded hydrate %s to %s", compound, expanded)
    return expanded


def _parse_count(digits: str, entity: str) -> int:
    try:
        count = int(digits)
    except ValueError as exc:
        raise InvalidNumber(f"Cannot read count {digits!r} in {entity!r}", entity=entity) from exc
    if count > MAX_ENTITY_COUNT:
        raise InvalidNumber(
            f"Count {count} in {entity!r} exceeds {MAX_ENTITY_COUNT}",
            entity=entity,
            count=count,
        )
    return count


def _merge(target: dict[str, int], composition: Mapping[str, int], factor: int) -> None:
    for element, count in composition.items():
        total = target.get(element, 0) + count * factor
        if total > MAX_INT64:
            raise InvalidNumber(
                f"Count of {element} exceeds {MAX_INT64}",
                element=element,
                count=total,
            )
        target[element] = total
