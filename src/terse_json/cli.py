"""Command-line interface for terse-json."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .types import DICTIONARY_FIELD, CompressOptions, TerseError
from .codec import TerseCodec
from .models import TersePayload
from .parser import JSONParser
from .profiler import benchmark_codec
from .tree import get_structure_statistics
from .utils.size_calculator import SizeCalculator


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _read_json(input_file: Path):
    parser = JSONParser()
    return parser.parse(input_file.read_text(encoding="utf-8"))


def _write_output(data, output: Optional[str], indent: Optional[int]) -> None:
    text = json.dumps(data, ensure_ascii=False, indent=indent,
                      separators=None if indent else (",", ":"))
    if output:
        Path(output).write_text(text, encoding="utf-8")
        click.echo(f"Wrote {output}", err=True)
    else:
        click.echo(text)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _parse_nested(value: str):
    if value.isdigit():
        return int(value)
    return value


@click.group()
@click.version_option(version=__version__)
def main():
    """terse-json - Shrink repetitive JSON by aliasing object keys."""
    pass


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', help='Output file (default: stdout)')
@click.option('--pattern', '-p', default='alpha',
              help='Alias pattern: alpha, numeric, alphanumeric, short or prefixed:<prefix>')
@click.option('--min-key-length', default=2, show_default=True, type=int,
              help='Shortest key that gets an alias')
@click.option('--nested', default='deep', show_default=True,
              help='Keys to alias: deep, shallow, arrays or a depth limit')
@click.option('--exclude', multiple=True, help='Key that is never aliased (repeatable)')
@click.option('--include', multiple=True, help='Alias this key even if shorter than --min-key-length (repeatable)')
@click.option('--indent', type=int, default=None, help='Indent the output JSON')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def compress(input_file: Path, output: Optional[str], pattern: str, min_key_length: int,
             nested: str, exclude, include, indent: Optional[int], verbose: bool):
    """Encode a JSON file as a terse payload."""
    _configure_logging(verbose)

    try:
        options = CompressOptions(
            min_key_length=min_key_length,
            key_pattern=pattern,
            nested_handling=_parse_nested(nested),
            exclude_keys=tuple(exclude),
            include_keys=tuple(include),
        )
        data, is_terse = _read_json(input_file)
        if is_terse:
            _fail(f"{input_file} is already a terse payload")
        envelope = TerseCodec(options).compress(data).to_dict()
    except (ValueError, TerseError) as e:
        _fail(str(e))

    _write_output(envelope, output, indent)
    if verbose:
        sizes = SizeCalculator().compare_sizes(data, envelope)
        click.echo(
            f"{sizes['original_size']} -> {sizes['compressed_size']} bytes "
            f"({sizes['savings_percent']:.1f}% savings, {len(envelope[DICTIONARY_FIELD])} aliases)",
            err=True,
        )


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', help='Output file (default: stdout)')
@click.option('--indent', type=int, default=None, help='Indent the output JSON')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def expand(input_file: Path, output: Optional[str], indent: Optional[int], verbose: bool):
    """Decode a terse payload back to plain JSON. Plain JSON passes through."""
    _configure_logging(verbose)

    try:
        data, _ = _read_json(input_file)
        result = TerseCodec().expand(data)
    except (ValueError, TerseError) as e:
        _fail(str(e))

    _write_output(result, output, indent)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect(input_file: Path):
    """Describe a JSON file or terse payload."""
    try:
        data, is_terse = _read_json(input_file)
    except ValueError as e:
        _fail(str(e))

    if is_terse:
        try:
            payload = TersePayload.from_dict(data, require_supported=False)
        except TerseError as e:
            _fail(str(e))
        click.echo(payload.get_summary())
        click.echo(f"Supported version: {'yes' if payload.is_supported else 'no'}")
        for alias, original in payload.dictionary.items():
            click.echo(f"  {alias} -> {original}")
        return

    stats = get_structure_statistics(data)
    click.echo("plain JSON")
    for name, value in stats.items():
        click.echo(f"  {name}: {value}")


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--iterations', '-n', default=10, show_default=True, type=int,
              help='Rounds per operation')
@click.option('--pattern', '-p', default='alpha', help='Alias pattern')
def benchmark(input_file: Path, iterations: int, pattern: str):
    """Measure savings and encode / expand / proxy timings for a JSON file."""
    try:
        data, is_terse = _read_json(input_file)
        if is_terse:
            data = TerseCodec().expand(data)
        report = benchmark_codec(data, iterations, CompressOptions(key_pattern=pattern))
    except (ValueError, TerseError) as e:
        _fail(str(e))

    calculator = SizeCalculator()
    sizes = report["sizes"]
    click.echo(f"Original:   {calculator.format_size(sizes['original_size'])}")
    click.echo(f"Compressed: {calculator.format_size(sizes['compressed_size'])}")
    click.echo(f"Savings:    {sizes['savings_percent']:.1f}% ({report['keys_compressed']} aliases)")
    for name, entry in report["timings"]["operations"].items():
        click.echo(
            f"{name:<8} avg {entry['average_duration'] * 1000:.3f} ms "
            f"over {entry['count']} runs, peak RSS {entry['memory_peak_mb']:.1f} MB"
        )


if __name__ == '__main__':
    main()
