"""Main CLI entry point for rwfs."""

import click
import json
import logging
import sys
from pathlib import Path

from rich.console import Console

from .. import __version__
from ..core.chunks import split_preserving_separator
from ..core.options import DebugRange, RewriteOptions
from ..core.rewriter import ChunkRewriter
from ..debug.preview import DebugPreviewer
from ..io.file_handler import FileHandler
from ..io.rule_loader import RuleLoader

_ESCAPES = {"\\n": "\n", "\\r": "\r", "\\t": "\t"}


def _decode_separator(ctx, param, value):
    """Turn typed escapes like ``\\n`` into the characters they stand for."""
    if value is None:
        return None
    for escape, char in _ESCAPES.items():
        value = value.replace(escape, char)
    if value == "":
        raise click.BadParameter("separator must not be empty")
    return value


def _debug_limit(limit, line_range):
    if line_range:
        return DebugRange(start=line_range[0], end=line_range[1])
    if limit is not None:
        return limit
    return None


separator_option = click.option(
    '--separator', '-s', callback=_decode_separator,
    help='Chunk separator; \\n, \\r and \\t escapes are understood (default: newline)',
)
encoding_option = click.option('--encoding', '-e', default=None, help='File encoding (default: utf-8)')
limit_option = click.option('--limit', '-n', type=int, default=None, help='Show the first N chunks')
range_option = click.option(
    '--range', 'line_range', type=int, nargs=2, default=None, metavar='START END',
    help='Show chunks START..END (one-based, inclusive)',
)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug-level logging')
@click.pass_context
def cli(ctx, verbose):
    """rwfs - rewrite files chunk by chunk"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    ctx.ensure_object(dict)
    ctx.obj['file_handler'] = FileHandler()
    ctx.obj['rule_loader'] = RuleLoader(ctx.obj['file_handler'])


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@separator_option
@encoding_option
@limit_option
@range_option
@click.option('--normalize', is_flag=True, help='Replace literal newlines with LF before splitting')
@click.pass_context
def preview(ctx, file, separator, encoding, limit, line_range, normalize):
    """Show how a file splits into chunks"""
    try:
        options = RewriteOptions(
            separator=separator or "\n",
            encoding=encoding or "utf-8",
            debug_output_limit=_debug_limit(limit, line_range),
        )
        content = ctx.obj['file_handler'].read_text(file, options.encoding)
        previewer = DebugPreviewer(Console(highlight=False))
        previewer.preview(content, options.separator, options.debug_output_limit, normalize=normalize)
    except Exception as e:
        click.echo(f"❌ Error previewing {file}: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@separator_option
@encoding_option
@click.option('--normalize', is_flag=True, help='Replace literal newlines with LF before splitting')
@click.pass_context
def chunks(ctx, file, separator, encoding, normalize):
    """Print a file's chunks as JSON strings, separator kept in place"""
    try:
        content = ctx.obj['file_handler'].read_text(file, encoding or "utf-8")
        for chunk in split_preserving_separator(content, separator or "\n", normalize=normalize):
            click.echo(json.dumps(chunk, ensure_ascii=False))
    except Exception as e:
        click.echo(f"❌ Error splitting {file}: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('files', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option('--rules', '-r', 'rules_file', required=True, type=click.Path(exists=True, dir_okay=False),
              help='YAML rule file')
@separator_option
@encoding_option
@click.option('--invert', is_flag=True, help='Process chunks from last to first')
@click.option('--preserve-inverted-order', is_flag=True,
              help='Keep the reversed order when writing (with --invert)')
@click.option('--remove-empty', is_flag=True, help='Drop chunks that end up empty')
@click.option('--debug', is_flag=True, help='Preview chunks before rewriting')
@limit_option
@range_option
@click.pass_context
def apply(ctx, files, rules_file, separator, encoding, invert, preserve_inverted_order,
          remove_empty, debug, limit, line_range):
    """Rewrite FILES in place using the rules in a rule file"""
    try:
        loaded = ctx.obj['rule_loader'].load(rules_file)

        # Command line values override the rule file's options block; flags can only switch on
        overrides = {
            'separator': separator,
            'encoding': encoding,
            'invert': invert or None,
            'preserve_inverted_order': preserve_inverted_order or None,
            'remove_empty': remove_empty or None,
            'debug': debug or None,
            'debug_output_limit': _debug_limit(limit, line_range),
        }
        merged = dict(loaded.options)
        merged.update({key: value for key, value in overrides.items() if value is not None})
        options = RewriteOptions.from_dict(merged)

        rewriter = ChunkRewriter(
            options,
            file_handler=ctx.obj['file_handler'],
            previewer=DebugPreviewer(Console(highlight=False)),
        )
    except Exception as e:
        click.echo(f"❌ Error loading rules from {rules_file}: {e}", err=True)
        sys.exit(1)

    for file in files:
        try:
            rewriter.rewrite(Path(file), loaded.rules)
            click.echo(f"✅ Rewrote {file}")
        except Exception as e:
            click.echo(f"❌ Error rewriting {file}: {e}", err=True)
            sys.exit(1)


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
