#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CAESAR CRACKER — MULTISCRIPT EDITION
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
Cryptanalysis report for Latin ciphertext:
  1. Brute force over all 25 shifts, ranked by English-likeness
  2. Letter frequency table
  3. Weak-encryption patterns (triples, doubles, common words)
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from caesar_analysis import (
    BruteForceCandidate,
    FrequencyEntry,
    PatternReport,
    brute_force,
    detect_patterns,
    frequency_analysis,
)
from caesar_engine import CaesarError, EmptyInput, TransformResult

log = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(message)s',
        datefmt='[%X]',
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# UI
# ═══════════════════════════════════════════════════════════════════════════════

class UI:
    def __init__(self, console: Optional[Console] = None):
        self.c = console or Console()
        self.err = Console(stderr=True)

    def header(self, title: str, subtitle: str):
        self.c.print(Panel(
            f"[bold cyan]{title}[/bold cyan]\n[dim]{subtitle}[/dim]",
            border_style="cyan", box=box.DOUBLE
        ))
        self.c.print()

    def error(self, message: str):
        self.err.print(f"[bold red]❌ {escape(message)}[/bold red]")

    def brute_force(self, candidates: List[BruteForceCandidate], top: int):
        best = candidates[0]
        self.c.print("[bold green]💬 BEST GUESS:[/bold green]")
        self.c.print()
        self.c.print(best.plaintext, markup=False, highlight=False)
        self.c.print()
        self.c.print(f"[dim]🔑 Shift: [bold yellow]{best.shift}[/bold yellow]  "
                     f"📊 Score: {self._score_colored(best.score)}[/dim]")
        self.c.print()

        tbl = Table(
            box=box.SIMPLE, show_header=True,
            header_style="bold", title="[bold]Candidates[/bold]"
        )
        tbl.add_column("#", width=4)
        tbl.add_column("Shift", width=6)
        tbl.add_column("Score", width=9)
        tbl.add_column("Top letters", width=14)
        tbl.add_column("Text")

        for i, cand in enumerate(candidates[:top], 1):
            marker = "⭐" if i == 1 else str(i)
            letters = ' '.join(f"{e.char}:{e.count}" for e in cand.top_chars)
            tbl.add_row(marker, str(cand.shift), self._score_colored(cand.score),
                        letters, escape(cand.preview))

        self.c.print(tbl)

    def frequencies(self, entries: List[FrequencyEntry]):
        if not entries:
            self.c.print("[dim]No Latin letters to count.[/dim]")
            return
        tbl = Table(
            box=box.ROUNDED, show_header=True,
            header_style="bold magenta", title="[bold]Letter frequencies[/bold]"
        )
        tbl.add_column("Letter", width=7, style="cyan")
        tbl.add_column("Count", width=7, style="yellow")
        tbl.add_column("%", width=8)
        for e in entries:
            tbl.add_row(e.char, str(e.count), f"{e.percentage:.2f}")
        self.c.print(tbl)

    def patterns(self, report: PatternReport):
        self.c.print(Panel(
            f"Triple letters: [bold]{report.repeated_chars}[/bold]\n"
            f"Double letters: [bold]{report.double_letters}[/bold]\n"
            f"Common words:   [bold]{report.common_words}[/bold]",
            title="[bold]Patterns[/bold]", border_style="blue"
        ))

    def transform_result(self, result: TransformResult):
        verb = "decrypted" if result.mode.value == 'decrypt' else "encrypted"
        self.c.print()
        self.c.print(f"[bold green]💬 {verb.upper()} TEXT:[/bold green]")
        self.c.print()
        self.c.print(result.text, markup=False, highlight=False)
        self.c.print()
        self.c.print(Panel(
            f"📊 {result.characters:,} characters in {result.elapsed_ms:.2f} ms\n"
            f"🔤 Alphabet: [bold]{result.alphabet.name}[/bold] ({result.alphabet.size} letters)\n"
            f"⚡ Applied shift: [bold yellow]{result.applied_shift}[/bold yellow]",
            title=f"[bold]Text {verb}[/bold]", border_style="green"
        ))

    def _score_colored(self, score: float) -> str:
        if score >= 80:
            return f"[bold green]{score:.1f}[/bold green]"
        elif score >= 50:
            return f"[yellow]{score:.1f}[/yellow]"
        else:
            return f"[red]{score:.1f}[/red]"

    def ask_multiline(self, prompt: str) -> str:
        """Multiline input: an empty line or Ctrl+D ends it"""
        self.c.print(f"[bold yellow]{prompt}[/bold yellow]")
        self.c.print("[dim](empty line = end of input)[/dim]")

        lines = []
        try:
            while True:
                line = input()
                if line == '':
                    break
                lines.append(line)
        except EOFError:
            pass
        return '\n'.join(lines)


# ═══════════════════════════════════════════════════════════════════════════════
# APPLICATION
# ═══════════════════════════════════════════════════════════════════════════════

def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog='caesar',
        description='Caesar Cipher Cracker — brute force and frequency analysis',
    )
    p.add_argument('text', nargs='*', help='Ciphertext')
    p.add_argument('-r', '--raw', action='store_true',
                   help='Print only the best decryption (handy for pipes)')
    p.add_argument('-n', '--top', type=int, default=5,
                   help='Number of candidates to list (default: 5)')
    p.add_argument('-v', '--verbose', action='store_true',
                   help='Debug logging on stderr')
    return p.parse_args(argv)


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)
    ui = UI()

    if args.text:
        text = ' '.join(args.text)
    elif not sys.stdin.isatty():
        text = sys.stdin.read().strip()
    else:
        if args.raw:
            ui.error("--raw needs the text as an argument or on a pipe")
            return 1
        ui.header("CAESAR CRACKER — MULTISCRIPT EDITION",
                  "Brute force • Frequencies • Patterns")
        text = ui.ask_multiline("Enter the ciphertext:")

    try:
        if not text.strip():
            raise EmptyInput('enter some ciphertext to analyse')
        candidates = brute_force(text)
    except CaesarError as e:
        ui.error(str(e))
        return 1

    log.debug('best shift %d with score %.2f', candidates[0].shift, candidates[0].score)

    if args.raw:
        print(candidates[0].plaintext)
        return 0

    ui.brute_force(candidates, max(1, args.top))
    ui.c.print()
    ui.frequencies(frequency_analysis(text))
    ui.c.print()
    ui.patterns(detect_patterns(text))
    return 0


def main():
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        print("\n👋")
    except Exception as e:
        print(f"\n❌ {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
