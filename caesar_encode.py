#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Caesar encryption/decryption for Latin, Persian and digit text"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from caesar import UI, setup_logging
from caesar_engine import (
    DEFAULT_CHUNK_SIZE,
    LARGE_INPUT,
    CaesarError,
    CipherEngine,
    Mode,
    TransformRequest,
)

log = logging.getLogger(__name__)

STATE_ENV = 'CAESAR_STATE_FILE'
STATE_NAME = '.caesar_last_input'


class LastInputStore:
    """Remembers the last entered text between runs"""

    def __init__(self, path: Optional[Path] = None):
        if path is None:
            path = Path(os.environ.get(STATE_ENV) or Path.home() / STATE_NAME)
        self.path = Path(path)

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding='utf-8') or None
        except (OSError, UnicodeDecodeError) as e:
            log.warning('could not read last input from %s: %s', self.path, e)
            return None

    def save(self, text: str) -> bool:
        try:
            self.path.write_text(text, encoding='utf-8')
        except OSError as e:
            log.warning('could not save last input to %s: %s', self.path, e)
            return False
        log.debug('saved %d characters to %s', len(text), self.path)
        return True


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f'must be at least 1, got {number}')
    return number


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog='caesar-encode',
        description='Caesar cipher over Latin, Persian and digits',
    )
    p.add_argument('shift', help='Non-zero shift; Persian/Arabic digits are accepted')
    p.add_argument('text', nargs='*', help='Text to transform')
    p.add_argument('-d', '--decrypt', action='store_true',
                   help='Decrypt instead of encrypt')
    p.add_argument('-r', '--raw', action='store_true',
                   help='Print only the resulting text')
    p.add_argument('--chunk-size', type=positive_int, default=DEFAULT_CHUNK_SIZE,
                   help=f'Characters per batch (default: {DEFAULT_CHUNK_SIZE})')
    p.add_argument('--restore', action='store_true',
                   help='Reuse the last saved input text')
    p.add_argument('--no-save', action='store_true',
                   help='Do not remember the input text')
    p.add_argument('--state-file', type=Path,
                   help=f'Where the last input is kept (default: ~/{STATE_NAME}, env {STATE_ENV})')
    p.add_argument('-v', '--verbose', action='store_true',
                   help='Debug logging on stderr')
    return p.parse_args(argv)


def read_text(args: argparse.Namespace, store: LastInputStore, ui: UI) -> Optional[str]:
    if args.text:
        return ' '.join(args.text)
    if args.restore:
        return store.load()
    if not sys.stdin.isatty():
        return sys.stdin.read().rstrip('\n')
    if args.raw:
        return None
    return ui.ask_multiline("Enter the text:")


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)
    ui = UI()
    store = LastInputStore(args.state_file)

    text = read_text(args, store, ui)
    if text is None:
        ui.error("no input: pass text as arguments, on a pipe, or use --restore")
        return 1

    if text.strip() and not args.no_save and not args.restore:
        store.save(text)

    mode = Mode.DECRYPT if args.decrypt else Mode.ENCRYPT
    request = TransformRequest(text=text, shift=args.shift, mode=mode)

    try:
        engine = CipherEngine(chunk_size=args.chunk_size)
        if len(text) > LARGE_INPUT and not args.raw:
            with ui.c.status("Processing large text..."):
                result = asyncio.run(engine.run_async(request))
        else:
            result = asyncio.run(engine.run_async(request))
    except CaesarError as e:
        ui.error(str(e))
        return 1

    if args.raw:
        print(result.text)
    else:
        ui.transform_result(result)
    return 0


def main():
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        print("\n👋")


if __name__ == '__main__':
    main()
