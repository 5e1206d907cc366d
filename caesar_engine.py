# -*- coding: utf-8 -*-
"""
CAESAR SHIFT ENGINE
━━━━━━━━━━━━━━━━━━━
Substitution over several alphabets at once (Latin, Persian, digits):
  1. The dominant script of the input picks the shift modulus
  2. One table per normalized shift covers every alphabet
  3. Tables 1..100 are built eagerly, the rest lazily, all cached
  4. Large inputs are processed in chunks, optionally yielding to asyncio
"""

import asyncio
import logging
import re
import time
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Dict, Iterator, List, Optional, Tuple, Union

from caesar_alphabets import ALPHABETS, Alphabet, detect_alphabet, to_ascii_digits

log = logging.getLogger(__name__)


WARM_SHIFTS = 100
DEFAULT_CHUNK_SIZE = 1000
YIELD_EVERY = 10          # chunks between event loop yields
YIELD_THRESHOLD = 10_000  # characters
LARGE_INPUT = 1000        # characters; callers show a progress indicator above this

INVALID_SHIFT_MESSAGE = 'error: invalid shift value'
PROCESSING_FAILED_MESSAGE = 'error: processing failed'


# ═══════════════════════════════════════════════════════════════════════════════
# ERRORS
# ═══════════════════════════════════════════════════════════════════════════════

class CaesarError(ValueError):
    """Base class for user-facing errors"""


class InvalidShift(CaesarError):
    """Shift is not an integer, or is zero"""


class EmptyInput(CaesarError):
    """Input text is blank"""


class ProcessingFailed(CaesarError):
    """Unexpected fault while batching a large input"""


# ═══════════════════════════════════════════════════════════════════════════════
# SHIFT VALUES
# ═══════════════════════════════════════════════════════════════════════════════

_LEADING_INT = re.compile(r'\s*([+-]?[0-9]+)')


def parse_shift(raw: Union[str, int]) -> int:
    """
    Parses a raw shift value the way a form field would: Persian/Arabic digits
    are folded first, then the leading signed integer is taken and anything
    after it is ignored. Zero and non-numbers raise InvalidShift.
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    else:
        match = _LEADING_INT.match(to_ascii_digits(str(raw)))
        if match is None:
            raise InvalidShift(f'shift is not a number: {raw!r}')
        try:
            value = int(match.group(1))
        except ValueError as exc:
            raise InvalidShift(f'shift is too long to be a number: {len(match.group(1))} digits') from exc
    if value == 0:
        raise InvalidShift('shift must be a non-zero integer')
    return value


def normalize_shift(shift: int, size: int) -> int:
    """|shift| folded into [1, size]; a multiple of size becomes size, never 0"""
    if shift == 0:
        raise InvalidShift('shift must be a non-zero integer')
    return (abs(shift) - 1) % size + 1


# ═══════════════════════════════════════════════════════════════════════════════
# SUBSTITUTION TABLES
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SubstitutionTable:
    """Forward and reverse character mapping for one normalized shift"""
    shift: int
    forward: Dict[str, str]
    reverse: Dict[str, str]
    _forward_tt: dict = field(init=False, repr=False, compare=False)
    _reverse_tt: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, '_forward_tt', str.maketrans(self.forward))
        object.__setattr__(self, '_reverse_tt', str.maketrans(self.reverse))

    def apply(self, text: str, decrypt: bool = False) -> str:
        """str.translate() does the per-character work; unmapped chars pass through"""
        return text.translate(self._reverse_tt if decrypt else self._forward_tt)


def build_table(shift: int, alphabets: Tuple[Alphabet, ...] = ALPHABETS) -> SubstitutionTable:
    forward: Dict[str, str] = {}
    reverse: Dict[str, str] = {}
    for alphabet in alphabets:
        letters = alphabet.letters
        size = alphabet.size
        for i, char in enumerate(letters):
            shifted = letters[(i + shift) % size]
            restored = letters[(i - shift) % size]
            forward[char] = shifted
            reverse[char] = restored
            if alphabet.cased:
                forward[char.lower()] = shifted.lower()
                reverse[char.lower()] = restored.lower()
    return SubstitutionTable(shift=shift, forward=forward, reverse=reverse)


class ShiftTableCache:
    """
    Append-only shift → table store. Entries are never replaced or removed,
    so readers need no locking; building the same shift twice yields an
    identical table.
    """

    def __init__(self, alphabets: Tuple[Alphabet, ...] = ALPHABETS):
        self.alphabets = alphabets
        self._tables: Dict[int, SubstitutionTable] = {}
        self.hits = 0
        self.misses = 0

    def get_or_build(self, shift: int) -> SubstitutionTable:
        if shift < 1:
            raise InvalidShift(f'normalized shift must be positive, got {shift}')
        table = self._tables.get(shift)
        if table is not None:
            self.hits += 1
            return table
        self.misses += 1
        log.debug('building substitution table for shift %d', shift)
        table = self._tables.setdefault(shift, build_table(shift, self.alphabets))
        return table

    def warm(self, upto: int = WARM_SHIFTS) -> 'ShiftTableCache':
        for shift in range(1, upto + 1):
            if shift not in self._tables:
                self._tables[shift] = build_table(shift, self.alphabets)
        return self

    def __contains__(self, shift: int) -> bool:
        return shift in self._tables

    def __len__(self) -> int:
        return len(self._tables)


@lru_cache(maxsize=None)
def default_cache() -> ShiftTableCache:
    """Process-wide cache, warmed once on first use"""
    return ShiftTableCache().warm()


# ═══════════════════════════════════════════════════════════════════════════════
# ENGINE
# ═══════════════════════════════════════════════════════════════════════════════

class Mode(Enum):
    ENCRYPT = 'encrypt'
    DECRYPT = 'decrypt'

    @classmethod
    def parse(cls, value: Union['Mode', str]) -> 'Mode':
        if isinstance(value, cls):
            return value
        return cls(str(value).lower())


@dataclass(frozen=True)
class TransformRequest:
    """What an input provider hands over: raw text and the raw shift field"""
    text: str
    shift: Union[str, int]
    mode: Mode = Mode.ENCRYPT


@dataclass(frozen=True)
class TransformResult:
    text: str
    mode: Mode
    shift: int
    alphabet: Alphabet
    applied_shift: int
    characters: int
    elapsed_ms: float


def validate_request(request: TransformRequest) -> int:
    """Checks a request before it reaches the engine; returns the parsed shift"""
    if not request.text.strip():
        raise EmptyInput('enter some text to encrypt or decrypt')
    return parse_shift(request.shift)


class CipherEngine:
    """Detect → normalize → table lookup → translate, optionally in chunks"""

    def __init__(
        self,
        cache: Optional[ShiftTableCache] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        yield_every: int = YIELD_EVERY,
        yield_threshold: int = YIELD_THRESHOLD,
    ):
        self.cache = cache if cache is not None else default_cache()
        self.chunk_size = chunk_size
        self.yield_every = yield_every
        self.yield_threshold = yield_threshold

    def plan(
        self, text: str, shift: int, alphabet: Optional[Alphabet] = None
    ) -> Tuple[Alphabet, int]:
        """Alphabet whose size governs the shift, and the normalized shift"""
        if alphabet is None:
            alphabet = detect_alphabet(text)
        return alphabet, normalize_shift(shift, alphabet.size)

    def _apply(self, text: str, normalized: int, mode: Mode) -> str:
        table = self.cache.get_or_build(normalized)
        return table.apply(text, decrypt=mode is Mode.DECRYPT)

    def transform(
        self,
        text: str,
        shift: int,
        mode: Union[Mode, str] = Mode.ENCRYPT,
        alphabet: Optional[Alphabet] = None,
    ) -> str:
        mode = Mode.parse(mode)
        if not text or shift == 0:
            return text
        _, normalized = self.plan(text, shift, alphabet)
        return self._apply(text, normalized, mode)

    def encrypt(self, text: str, shift: int) -> str:
        return self.transform(text, shift, Mode.ENCRYPT)

    def decrypt(self, text: str, shift: int) -> str:
        return self.transform(text, shift, Mode.DECRYPT)

    # ─── chunked processing ────────────────────────────────────────────────

    def _chunk_size(self, chunk_size: Optional[int]) -> int:
        size = self.chunk_size if chunk_size is None else chunk_size
        if size < 1:
            raise ValueError(f'chunk size must be at least 1, got {size}')
        return size

    def iter_batches(
        self,
        text: str,
        shift: int,
        mode: Union[Mode, str] = Mode.ENCRYPT,
        chunk_size: Optional[int] = None,
        alphabet: Optional[Alphabet] = None,
    ) -> Iterator[str]:
        """
        Lazily yields transformed chunks in order. Detection runs once on the
        whole text, so a chunk dominated by another script still uses the
        modulus of the full input.
        """
        size = self._chunk_size(chunk_size)
        mode = Mode.parse(mode)
        normalized = None
        if text and shift != 0:
            detected, normalized = self.plan(text, shift, alphabet)
            log.debug('batch plan: %d chars, %s alphabet, shift %d, chunks of %d',
                      len(text), detected.name, normalized, size)
        return self._batches(text, normalized, mode, size)

    def _batches(
        self, text: str, normalized: Optional[int], mode: Mode, size: int
    ) -> Iterator[str]:
        for start in range(0, len(text), size):
            chunk = text[start:start + size]
            yield chunk if normalized is None else self._apply(chunk, normalized, mode)

    def batch_process(
        self,
        text: str,
        shift: int,
        mode: Union[Mode, str] = Mode.ENCRYPT,
        chunk_size: Optional[int] = None,
    ) -> str:
        batches = self.iter_batches(text, shift, mode, chunk_size)
        try:
            return ''.join(batches)
        except Exception as exc:
            log.exception('batch processing failed')
            raise ProcessingFailed(PROCESSING_FAILED_MESSAGE) from exc

    async def batch_process_async(
        self,
        text: str,
        shift: int,
        mode: Union[Mode, str] = Mode.ENCRYPT,
        chunk_size: Optional[int] = None,
    ) -> str:
        """Same output as batch_process, but hands control back to the loop on big inputs"""
        size = self._chunk_size(chunk_size)
        mode = Mode.parse(mode)
        should_yield = len(text) > self.yield_threshold
        parts: List[str] = []
        try:
            if len(text) <= size:
                return self.transform(text, shift, mode)
            for index, chunk in enumerate(self.iter_batches(text, shift, mode, size), 1):
                parts.append(chunk)
                if should_yield and index % self.yield_every == 0:
                    await asyncio.sleep(0)
        except Exception as exc:
            log.exception('batch processing failed')
            raise ProcessingFailed(PROCESSING_FAILED_MESSAGE) from exc
        return ''.join(parts)

    # ─── requests ──────────────────────────────────────────────────────────

    def _result(
        self, request: TransformRequest, shift: int, output: str, started: float
    ) -> TransformResult:
        alphabet, applied = self.plan(request.text, shift)
        return TransformResult(
            text=output,
            mode=Mode.parse(request.mode),
            shift=shift,
            alphabet=alphabet,
            applied_shift=applied,
            characters=len(request.text),
            elapsed_ms=(time.perf_counter() - started) * 1000,
        )

    def run(self, request: TransformRequest, chunk_size: Optional[int] = None) -> TransformResult:
        shift = validate_request(request)
        started = time.perf_counter()
        output = self.batch_process(request.text, shift, request.mode, chunk_size)
        return self._result(request, shift, output, started)

    async def run_async(
        self, request: TransformRequest, chunk_size: Optional[int] = None
    ) -> TransformResult:
        shift = validate_request(request)
        started = time.perf_counter()
        output = await self.batch_process_async(request.text, shift, request.mode, chunk_size)
        return self._result(request, shift, output, started)


# ═══════════════════════════════════════════════════════════════════════════════
# LIVE MODE
# ═══════════════════════════════════════════════════════════════════════════════

class LiveSession:
    """
    Re-encryption on every edit. Each submit takes a ticket; a result whose
    ticket was superseded while it was in flight is dropped (None) instead
    of overwriting the newer output.
    """

    def __init__(self, engine: Optional[CipherEngine] = None):
        self.engine = engine or CipherEngine()
        self.latest: Optional[str] = None
        self._ticket = 0

    async def submit(
        self, text: str, shift: Union[str, int], mode: Union[Mode, str] = Mode.ENCRYPT
    ) -> Optional[str]:
        self._ticket += 1
        ticket = self._ticket

        if not text.strip():
            output = ''
        else:
            try:
                value = parse_shift(shift)
            except InvalidShift:
                output = INVALID_SHIFT_MESSAGE
            else:
                try:
                    output = await self.engine.batch_process_async(text, value, mode)
                except ProcessingFailed:
                    output = PROCESSING_FAILED_MESSAGE

        if ticket != self._ticket:
            log.debug('dropping stale live result #%d (latest is #%d)', ticket, self._ticket)
            return None
        self.latest = output
        return output
