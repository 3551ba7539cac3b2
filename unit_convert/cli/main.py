"""Main CLI interface"""

import logging

import click

from .. import __version__
from ..config.converter_config import ConverterConfiguration
from ..core.exceptions import (
    UnitConvertError,
    InvalidNumberError,
    MissingArgumentError,
)
from ..core.units import UnitConverter
from ..infrastructure.logging.session_logger import setup_logging, shutdown_logging

USAGE = "Usage: convert -f (From Unit) -t (To Unit) <num>"
OPTION_ARGUMENTS = {'-f': 'from', '--from': 'from', '-t': 'to', '--to': 'to'}

logger = logging.getLogger(__name__)


def parse_value(token: str) -> float:
    """
    Parse the numeric value token

    Raises:
        InvalidNumberError: If the token is not a number
    """
    try:
        return float(token)
    except (TypeError, ValueError):
        raise InvalidNumberError(token)


def _style(text: str, use_color: bool, **styles) -> str:
    return click.style(text, **styles) if use_color else text


def report_error(error: UnitConvertError, use_color: bool = True):
    """Print an error and the usage line"""
    click.echo(_style("Error: ", use_color, fg='red', bold=True) + _style(str(error), use_color, fg='red'),
               err=True)
    click.echo(USAGE)


def format_result(value: float, precision: int) -> str:
    return f"{value:.{precision}g}"


def load_configuration(config_path, precision, color, log_file, verbose) -> ConverterConfiguration:
    """Defaults, then environment, then config file, then command line flags"""
    config = ConverterConfiguration.from_env()
    if config_path:
        config.update_from_file(config_path)
    config.update({
        'precision': precision,
        'color': color,
        'log_file': log_file,
        'verbose': True if verbose else None,
    })
    config.validate()
    return config


def run_conversion(from_unit, to_unit, value_token, list_units=False,
                   converter: UnitConverter = None):
    """
    Validate arguments, normalize units and convert

    Returns:
        Tuple of (from_key, to_key, result), or None when only a listing
        was requested
    """
    value = parse_value(value_token) if value_token is not None else None

    missing = [name for name, given in (('from', from_unit), ('to', to_unit), ('value', value_token))
               if given is None]
    if missing:
        if list_units:
            return None
        raise MissingArgumentError(missing)

    converter = converter or UnitConverter()
    from_key = converter.registry.normalize(from_unit)
    to_key = converter.registry.normalize(to_unit)
    logger.debug(f"Normalized '{from_unit}' -> '{from_key}', '{to_unit}' -> '{to_key}'")

    result = converter.convert(from_key, to_key, value)
    return from_key, to_key, result


class ConvertCommand(click.Command):
    """Reports an option given without its value as a missing argument"""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except (click.BadOptionUsage, click.MissingParameter) as e:
            name = getattr(e, 'option_name', None) or getattr(e.param, 'name', None) or ''
            error = MissingArgumentError([OPTION_ARGUMENTS.get(name, name.lstrip('-'))])
            report_error(error)
            ctx.exit(error.exit_code)


@click.command(cls=ConvertCommand, context_settings={'help_option_names': ['-h', '--help'],
                                 'ignore_unknown_options': True})
@click.version_option(__version__)
@click.argument('value', required=False)
@click.option('--from', '-f', 'from_unit', metavar='UNIT', help='Unit to convert from')
@click.option('--to', '-t', 'to_unit', metavar='UNIT', help='Unit to convert to')
@click.option('--list', '--units', '-l', 'list_units', is_flag=True, help='List supported units')
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='Configuration file')
@click.option('--precision', '-p', type=int, help='Significant digits in the result')
@click.option('--color/--no-color', default=None, help='Colored terminal output')
@click.option('--log-file', type=click.Path(dir_okay=False), help='Write a session log')
@click.option('--verbose', '-v', is_flag=True, help='Verbose logging')
def cli(value, from_unit, to_unit, list_units, config_path, precision, color, log_file, verbose):
    """Convert VALUE between units of length, mass, volume or temperature"""

    use_color = color is not False
    try:
        config = load_configuration(config_path, precision, color, log_file, verbose)
        use_color = config.color
        setup_logging(config.log_file, verbose=config.verbose)

        outcome = run_conversion(from_unit, to_unit, value, list_units)
        if outcome is None:
            click.echo(USAGE)
            raise SystemExit(1)

        from_key, to_key, result = outcome
        logger.info(f"{value} {from_key} -> {result!r} {to_key}")

        formatted = format_result(result, config.precision)
        click.echo(f"From: {from_key}")
        click.echo(f"To: {to_key}")
        click.echo("Value: " + _style(f"{formatted}{to_key}", use_color, fg='green', bold=True))

    except UnitConvertError as e:
        logger.error(f"{type(e).__name__}: {e}")
        report_error(e, use_color)
        raise SystemExit(e.exit_code)

    finally:
        shutdown_logging()


def main():
    cli(prog_name='convert')


if __name__ == '__main__':
    main()
