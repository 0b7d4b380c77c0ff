from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FaultKind(Enum):
    OUT_OF_BOUNDS = 'out-of-bounds'
    MISSING_CLOSING_BRACKET = 'missing-closing-bracket'
    MISSING_OPENING_BRACKET = 'missing-opening-bracket'


def _build_context(program: bytes, position: int, *, context: int = 16) -> str:
    start = max(0, position - context)
    end = min(len(program), position + context + 1)

    snippet = program[start:end].decode('latin-1')
    # Keep the caret aligned with the offending byte
    snippet = ''.join(ch if ch.isprintable() else ' ' for ch in snippet)
    caret = ' ' * (position - start) + '^'
    return f"  {start:6d} | {snippet}\n         | {caret}"


def _hint_for(kind: FaultKind, direction: Optional[str]) -> Optional[str]:
    if kind is FaultKind.OUT_OF_BOUNDS:
        if direction == 'left':
            return 'The data pointer starts at cell 0; move right before moving left.'
        return 'The tape is fixed-size and does not wrap; check the number of ">" moves.'
    if kind is FaultKind.MISSING_CLOSING_BRACKET:
        return 'Every "[" needs a matching "]" later in the program.'
    if kind is FaultKind.MISSING_OPENING_BRACKET:
        return 'Every "]" needs a matching "[" earlier in the program.'
    return None


@dataclass
class BFIError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BFIConfigError(BFIError):
    pass


@dataclass
class BFILoadError(BFIError):
    path: str


@dataclass
class BFIFault(BFIError):
    kind: FaultKind
    position: int
    context: str
    hint: Optional[str] = None

    def diagnostic(self) -> str:
        return f"Error: {self.message} at char {self.position}\n"


@dataclass
class PointerOutOfBounds(BFIFault):
    direction: str = 'right'


@dataclass
class MissingClosingBracket(BFIFault):
    pass


@dataclass
class MissingOpeningBracket(BFIFault):
    pass


_FAULT_CLASSES = {
    FaultKind.OUT_OF_BOUNDS: PointerOutOfBounds,
    FaultKind.MISSING_CLOSING_BRACKET: MissingClosingBracket,
    FaultKind.MISSING_OPENING_BRACKET: MissingOpeningBracket,
}


def _message_for(kind: FaultKind, direction: Optional[str]) -> str:
    if kind is FaultKind.OUT_OF_BOUNDS:
        return f"pointer moved out of bounds to the {direction}"
    if kind is FaultKind.MISSING_CLOSING_BRACKET:
        return 'missing closing bracket to opening bracket'
    return 'missing opening bracket to closing bracket'


def make_fault(kind: FaultKind, *, program: bytes, position: int,
               direction: Optional[str] = None) -> BFIFault:
    ctx = _build_context(program, position)
    fields = dict(
        message=_message_for(kind, direction),
        kind=kind,
        position=position,
        context=ctx,
        hint=_hint_for(kind, direction),
    )
    if kind is FaultKind.OUT_OF_BOUNDS:
        fields['direction'] = direction or 'right'
    return _FAULT_CLASSES[kind](**fields)
