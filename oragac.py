#!/usr/bin/env python3
import sys
import logging
import click
from gac_scanner.config import CONFIG_FILENAME, OUTPUT_FORMATS, load_config
from gac_scanner.errors import ReconcileError
from gac_scanner.reconcile import ReconciliationDriver
from gac_scanner.report import render_report, write_report
from gac_scanner.version import COMPARATORS, to_driver_version

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# --- Helper Functions ---
def _configure_logging(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT, stream=sys.stderr)

def _abort(error: Exception):
    click.secho(f"Error: {error}", fg="red", err=True)
    sys.exit(1)

config_option = click.option("--config", "config_path", type=click.Path(dir_okay=False), default=CONFIG_FILENAME, show_default=True, help="YAML file with inventory locations and GAC roots.")
verbose_option = click.option("-v", "--verbose", is_flag=True, help="Log every inventory, folder and verdict to stderr.")

# --- CLI Definition ---
@click.group(context_settings=dict(help_option_names=['-h', '--help']))
def cli():
    """
    oragac: finds Oracle .NET driver assemblies in the GAC that don't match the installed Oracle client.
    Prints 'gacutil /u' commands for the stale ones; nothing is uninstalled.
    """
    pass

@cli.command("scan")
@config_option
@click.option("--format", "output_format", type=click.Choice(OUTPUT_FORMATS, case_sensitive=False), help="Output format. [default: text]")
@click.option("--comparison", type=click.Choice(list(COMPARATORS), case_sensitive=False), help="How GAC versions are ordered against the expected version. [default: lexicographic]")
@click.option("--output-file", type=click.Path(dir_okay=False), help="Write the report here instead of stdout.")
@verbose_option
def scan(config_path, output_format, comparison, output_file, verbose):
    """Reads the Oracle inventories and lists GAC assemblies to uninstall."""
    _configure_logging(verbose)
    try:
        config = load_config(config_path).with_overrides(output_format=output_format, comparison=comparison, output_file=output_file)
        result = ReconciliationDriver(config).run()
    except ReconcileError as e:
        _abort(e)

    report = render_report(result, config.output_format)
    if config.output_file:
        try:
            path = write_report(report, config.output_file)
        except ReconcileError as e:
            _abort(e)
        click.echo(f"Report saved to: {path.resolve()}")
    else:
        click.echo(report, nl=False)

@cli.command("detect")
@config_option
@verbose_option
def detect(config_path, verbose):
    """Shows the installed Oracle version from each inventory and the matching .NET version."""
    _configure_logging(verbose)
    try:
        driver = ReconciliationDriver(load_config(config_path))
    except ReconcileError as e:
        _abort(e)
    try:
        driver.detect()
    except ReconcileError as e:
        _echo_readings(driver.readings)
        _abort(e)
    _echo_readings(driver.readings)
    try:
        expected = to_driver_version(driver.installed_version)
    except ReconcileError as e:
        _abort(e)
    click.echo(f"Installed Oracle version: {driver.installed_version}")
    click.echo(f"Expected .NET version is: {expected}")

def _echo_readings(readings):
    for reading in readings:
        if reading.found:
            click.echo(f"  {reading.label}: {reading.version} ({reading.path})")
        else:
            click.echo(f"  {reading.label}: not found ({reading.error})")

@cli.command("expected")
@click.argument("installed_version")
def expected(installed_version):
    """Prints the .NET driver version for an Oracle client version, e.g. 12.1.0.2.0."""
    try:
        click.echo(to_driver_version(installed_version))
    except ReconcileError as e:
        _abort(e)

if __name__ == "__main__":
    cli()
