"""
POCSAG Encoder CLI - Convert pager messages to PCM audio.
"""

import logging
import random
import sys

import click

from . import SAMPLE_RATE, MIN_DELAY, MAX_DELAY
from .encoder import POCSAGEncoder
from .page import parse_lines


@click.command()
@click.argument(
    "input",
    type=click.File("rb"),
    default="-",
)
@click.option(
    "-o", "--output",
    type=click.Path(),
    default=None,
    help="Output WAV file path (default: raw PCM to stdout)",
)
@click.option(
    "-s", "--sample-rate",
    type=int,
    default=SAMPLE_RATE,
    help=f"Sample rate in Hz (default: {SAMPLE_RATE})",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed for the silence gaps between messages",
)
@click.option(
    "--min-delay",
    type=float,
    default=MIN_DELAY,
    help=f"Shortest silence between messages in seconds (default: {MIN_DELAY})",
)
@click.option(
    "--max-delay",
    type=float,
    default=MAX_DELAY,
    help=f"Longest silence between messages in seconds (default: {MAX_DELAY})",
)
@click.option(
    "--play",
    is_flag=True,
    help="Play through the default audio output (cannot be combined with -o)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output on stderr",
)
def main(input, output, sample_rate: int, seed, min_delay: float, max_delay: float, play: bool, verbose: bool):
    """
    Encode pager messages read from INPUT (default: stdin) as POCSAG audio.

    Each line is ADDRESS:MESSAGE or ADDRESS:FUNCTION:MESSAGE. Output is
    signed 16-bit little-endian mono PCM. Each input byte is sent as one
    7-bit character.

    Examples:

        echo "1234567:HELLO" | pocsag-encode > page.raw

        pocsag-encode messages.txt -o pages.wav

        echo "1234567:0:123" | pocsag-encode --play
    """
    if play and output:
        raise click.UsageError("--play cannot be combined with -o/--output")

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            stream=sys.stderr,
        )

    try:
        encoder = POCSAGEncoder(
            sample_rate=sample_rate,
            rng=random.Random(seed),
            min_delay=min_delay,
            max_delay=max_delay,
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    pages = parse_lines(input)

    try:
        if play:
            encoder.play(pages)
        elif output:
            encoder.generate_to_file(output, pages)
            click.echo(f"✓ Generated {output}", err=True)
        else:
            stdout = sys.stdout.buffer
            for chunk in encoder.generate(pages):
                stdout.write(chunk)
            stdout.flush()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
