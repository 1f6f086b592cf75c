"""
Command-Line Interface for Anonymous Data

Provides commands for:
- sample: Generate anonymous values of a type
- shape: Report how a distribution shapes its samples
- config: Manage configurations
"""

import argparse
import importlib
import sys
import logging
from typing import Any, Callable, Dict, Optional

import pandas as pd
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from .config import ConfigLoader, ConfigValidator, get_default_config
from .distribution import Distribution
from .engine import AnonymousData
from .utils import SampleWriter, setup_logging
from .validation import assess_distribution

# Setup console
console = Console()

# Named samplers: name -> func(anon, distribution)
SAMPLERS: Dict[str, Callable[[AnonymousData, Optional[Distribution]], Any]] = {
    'bool': lambda anon, d: anon.any_bool(d),
    'int': lambda anon, d: anon.any_int32(distribution=d),
    'int16': lambda anon, d: anon.any_int16(distribution=d),
    'int64': lambda anon, d: anon.any_int64(distribution=d),
    'byte': lambda anon, d: anon.any_byte(distribution=d),
    'float': lambda anon, d: anon.any_double(distribution=d),
    'single': lambda anon, d: anon.any_single(distribution=d),
    'decimal': lambda anon, d: anon.any_decimal(distribution=d),
    'char': lambda anon, d: anon.any_alphanumeric_char(distribution=d),
    'str': lambda anon, d: anon.any_string(distribution=d),
    'bytes': lambda anon, d: anon.any_bytes(distribution=d),
    'uuid': lambda anon, d: anon.any_uuid(),
    'first_name': lambda anon, d: anon.any_first_name(),
    'surname': lambda anon, d: anon.any_surname(),
    'full_name': lambda anon, d: anon.any_full_name(),
    'datetime': lambda anon, d: anon.any_datetime(distribution=d),
    'datetime_offset': lambda anon, d: anon.any_datetime_offset(distribution=d),
    'date': lambda anon, d: anon.any_date(distribution=d),
    'time': lambda anon, d: anon.any_time(distribution=d),
    'timedelta': lambda anon, d: anon.any_timedelta(distribution=d),
    'timezone': lambda anon, d: anon.any_timezone(d),
}

PRESET_DESCRIPTIONS = {
    'default': 'Default configuration',
    'deep': 'Populate whole object graphs',
    'compact': 'Short strings and collections',
    'edge': 'Values biased toward both ends of their ranges',
}


def resolve_type(name: str) -> Any:
    """
    Import a type from "package.module:QualifiedName"

    Args:
        name: Import path of the type

    Returns:
        The imported object
    """
    module_name, _, qualname = name.partition(':')
    if not qualname:
        raise ValueError(
            f"Unknown sample type '{name}'. Use one of {', '.join(SAMPLERS)} or 'module:Class'"
        )

    target = importlib.import_module(module_name)
    for part in qualname.split('.'):
        target = getattr(target, part)
    return target


class CLI:
    """Main CLI class"""

    def __init__(self):
        self.parser = self._create_parser()
        self.config_loader = ConfigLoader()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser"""
        parser = argparse.ArgumentParser(
            prog="anondata",
            description="Anonymous Data CLI",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Ten anonymous full names
  anondata sample full_name -n 10

  # Deeply populated instances of your own class
  anondata sample myapp.models:Order --option deep --seed 42

  # How InvertedNormal shapes its samples
  anondata shape inverted_normal --runs 5000

  # Write the default configuration to a file
  anondata config create anondata.yaml
            """
        )

        parser.add_argument(
            '--verbose', '-v',
            action='store_true',
            help='Enable verbose output'
        )

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        # Sample command
        sample_parser = subparsers.add_parser('sample', help='Generate anonymous values')
        sample_parser.add_argument('type', help=f"One of {', '.join(SAMPLERS)} or 'module:Class'")
        sample_parser.add_argument('--count', '-n', type=int, default=5, help='Number of values')
        sample_parser.add_argument('--seed', '-s', type=int, help='Random seed for reproducibility')
        sample_parser.add_argument('--preset', '-p', help='Configuration preset')
        sample_parser.add_argument('--config', '-c', help='Custom configuration file')
        sample_parser.add_argument('--distribution', '-d', help='Distribution for ranged values')
        sample_parser.add_argument('--option', choices=['none', 'shallow', 'deep'], help='Population option')
        sample_parser.add_argument('--output', '-o', help='Write values to a .csv or .json file')

        # Shape command
        shape_parser = subparsers.add_parser('shape', help='Report a distribution shape')
        shape_parser.add_argument('distribution', help="Distribution name, or 'all'")
        shape_parser.add_argument('--runs', '-r', type=int, default=1000, help='Number of samples')
        shape_parser.add_argument('--seed', '-s', type=int, help='Random seed')
        shape_parser.add_argument('--output', '-o', help='Write the report to a .csv file')

        # Config command
        config_parser = subparsers.add_parser('config', help='Manage configurations')
        config_subparsers = config_parser.add_subparsers(dest='config_command')

        config_subparsers.add_parser('list', help='List available presets')

        show_parser = config_subparsers.add_parser('show', help='Show preset configuration')
        show_parser.add_argument('preset', help='Preset name')

        create_parser = config_subparsers.add_parser('create', help='Create custom configuration')
        create_parser.add_argument('output', help='Output configuration file')
        create_parser.add_argument('--preset', '-p', default='default', help='Preset to start from')

        validate_parser = config_subparsers.add_parser('validate', help='Validate a configuration file')
        validate_parser.add_argument('input', help='Configuration file')

        return parser

    def run(self, args=None):
        """Run CLI"""
        args = self.parser.parse_args(args)

        log_level = logging.DEBUG if args.verbose else logging.WARNING
        setup_logging(level=log_level)

        if args.command == 'sample':
            self.cmd_sample(args)
        elif args.command == 'shape':
            self.cmd_shape(args)
        elif args.command == 'config':
            self.cmd_config(args)
        else:
            self.parser.print_help()

    def _fail(self, args, error: Exception):
        console.print(f"[bold red]✗ Error:[/bold red] {str(error)}")
        if args.verbose:
            console.print_exception()
        sys.exit(1)

    def cmd_sample(self, args):
        """Generate anonymous values"""
        try:
            if args.config:
                config = self.config_loader.load_from_file(args.config)
            elif args.preset:
                config = self.config_loader.load_preset(args.preset)
            else:
                config = get_default_config()

            if args.option:
                config.generation.population = args.option

            is_valid, errors = ConfigValidator.validate(config)
            if not is_valid:
                raise ValueError("; ".join(errors))

            if args.count < 0:
                raise ValueError(f"--count must not be negative, got {args.count}")

            anon = AnonymousData(seed=args.seed, config=config)
            distribution = Distribution.parse(args.distribution) if args.distribution else None

            sampler = SAMPLERS.get(args.type)
            if sampler is None:
                type_ = resolve_type(args.type)
                values = [anon.any(type_) for _ in range(args.count)]
            else:
                values = [sampler(anon, distribution) for _ in range(args.count)]

            table = Table(title=f"Anonymous {args.type}", show_header=True)
            table.add_column("#", style="cyan", justify="right")
            table.add_column("Value", style="green")
            for index, value in enumerate(values, 1):
                table.add_row(str(index), escape(repr(value)))
            console.print(table)

            if args.output:
                SampleWriter.write(values, args.output)
                console.print(f"✓ Saved {len(values)} values to: {args.output}")

        except Exception as e:
            self._fail(args, e)

    def cmd_shape(self, args):
        """Report how distributions shape their samples"""
        try:
            if args.distribution == 'all':
                distributions = list(Distribution)
            else:
                distributions = [Distribution.parse(args.distribution)]

            seed = args.seed if args.seed is not None else get_default_config().generation.seed

            table = Table(title=f"Distribution Shape ({args.runs:,} runs)", show_header=True)
            table.add_column("Distribution", style="cyan")
            table.add_column("< 0.15", style="yellow", justify="right")
            table.add_column("> 0.85", style="yellow", justify="right")
            table.add_column("< 0", style="red", justify="right")
            table.add_column("Mean", style="green", justify="right")
            table.add_column("KS vs uniform", style="blue", justify="right")

            frames = []
            for distribution in distributions:
                report = assess_distribution(distribution, runs=args.runs, seed=seed)
                fractions = list(report.fractions.values())
                table.add_row(
                    distribution.value,
                    f"{fractions[0]:.3f}",
                    f"{fractions[1]:.3f}",
                    f"{fractions[2]:.3f}",
                    f"{report.summary['mean']:.3f}",
                    f"{report.ks_statistic:.3f}",
                )
                frame = report.to_frame()
                frame.insert(0, 'distribution', distribution.value)
                frames.append(frame)

            console.print(table)

            if args.output:
                pd.concat(frames, ignore_index=True).to_csv(args.output, index=False)
                console.print(f"✓ Report saved to: {args.output}")

        except Exception as e:
            self._fail(args, e)

    def cmd_config(self, args):
        """Manage configurations"""
        console.print(Panel.fit(
            "⚙️ [bold]Configuration Management[/bold]",
            border_style="magenta"
        ))

        try:
            if args.config_command == 'list':
                table = Table(title="Available Presets", show_header=True)
                table.add_column("Preset", style="cyan")
                table.add_column("Description", style="white")

                for preset in self.config_loader.list_presets():
                    table.add_row(preset, PRESET_DESCRIPTIONS.get(preset, 'Custom preset'))

                console.print(table)

            elif args.config_command == 'show':
                config = self.config_loader.load_preset(args.preset)

                console.print(f"\n[bold]Preset: {args.preset}[/bold]\n")
                console.print_json(data=config.to_dict())

            elif args.config_command == 'create':
                config = self.config_loader.load_preset(args.preset)
                self.config_loader.save_config(config, args.output)

                console.print(f"✓ Created configuration file: {args.output}")
                console.print("  Edit this file to customize settings")

            elif args.config_command == 'validate':
                config = self.config_loader.load_from_file(args.input)
                is_valid, errors = ConfigValidator.validate(config)

                if not is_valid:
                    for error in errors:
                        console.print(f"  ✗ {error}")
                    raise ValueError(f"{len(errors)} configuration error(s) in {args.input}")

                console.print(f"✓ {args.input} is valid")

            else:
                console.print(
                    "Use 'config list', 'config show <preset>', 'config create <file>' "
                    "or 'config validate <file>'"
                )

        except Exception as e:
            self._fail(args, e)


def main():
    """CLI entry point"""
    cli = CLI()
    cli.run()


if __name__ == "__main__":
    main()
