"""Status lines for the minispec CLI.

Lines go to stderr so stdout only carries the reporter's output. Emoji
markers fall back to ASCII on streams that cannot encode them.
"""

import click


def _supports_character(character: str) -> bool:
    stream = click.get_text_stream("stderr")
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def _glyph(emoji: str, fallback: str) -> str:
    return emoji if _supports_character(emoji) else fallback


def success(msg: str) -> None:
    """Emit a green, bold line to stderr, e.g. ``✅  3 tests passed.``"""
    click.secho(f"{_glyph('✅', '[OK]')}  {msg}", fg="green", bold=True, err=True)


def warn(msg: str) -> None:
    """Emit a yellow, bold line to stderr, e.g. ``⚠️  Suite has no tests.``"""
    click.secho(f"{_glyph('⚠️', '[!]')}  {msg}", fg="yellow", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red, bold line to stderr, e.g. ``❌  2 failures, 1 error.``"""
    click.secho(f"{_glyph('❌', '[X]')}  {msg}", fg="red", bold=True, err=True)
