# === FILE: script_scout/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for ScriptScout.

Commands:
  scan TARGET   Crawl TARGET (a URL, or a file of URLs with --file) and print findings
  config        Show the effective configuration

Global options:
  --config PATH       YAML/JSON configuration file (defaults are used without one)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Also write logs to this file
  --log-format FORMAT Logging format string

scan options:
  --dom / --secrets / --urls / --noisy / --verify / --file
  --browser [chromium|static]  DOM backend used with --dom
  --concurrency N     URLs processed in parallel
  --rate-limit R      New URLs dispatched per second
  --json PATH         Save a JSON report
  --html PATH         Save an HTML report
  --scan-timeout SEC  Timeout for the whole scan

Also:
  --version, -v       Show the ScriptScout version

Example:
  script-scout scan https://example.com --secrets --urls --verify --json findings.json
"""
import asyncio
import sys
from pathlib import Path

import click

from script_scout import __version__
from script_scout.aggregator import aggregate_results
from script_scout.config import load_config
from script_scout.errors import ScriptScoutError
from script_scout.logger import configure
from script_scout.output import StreamSink
from script_scout.report.html_report import render_html
from script_scout.report.json_report import render_json
from script_scout.scanner import start_scan
from script_scout.utils import read_url_list

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='ScriptScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON configuration file.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Also write logs to this file'
)
@click.option(
    '--log-format', 'log_format',
    default='%(levelname)s %(message)s',
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """ScriptScout: pull strings and secrets out of a site's scripts."""
    configure(level=log_level, log_file=str(log_file) if log_file else None, log_format=log_format)
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Could not load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@click.argument('target')
@click.option('--dom', is_flag=True, help='Discover scripts from the rendered DOM')
@click.option('--secrets', is_flag=True, help='Look for secrets instead of listing strings')
@click.option('--urls', is_flag=True, help='Report URLs as secrets (with --secrets)')
@click.option('--noisy', is_flag=True, help='High-recall matching, more false positives')
@click.option('--verify', is_flag=True, help='Show the URL each finding came from')
@click.option('--file', 'from_file', is_flag=True, help='TARGET is a file with one URL per line')
@click.option(
    '--browser',
    type=click.Choice(['chromium', 'static']),
    default=None,
    help='DOM backend used with --dom'
)
@click.option('--concurrency', type=click.IntRange(min=1), default=None, help='URLs processed in parallel')
@click.option('--rate-limit', 'rate_limit', type=click.FloatRange(min=0, min_open=True), default=None,
              help='New URLs dispatched per second')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save a JSON report'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save an HTML report'
)
@click.option(
    '--scan-timeout', 'scan_timeout',
    type=float,
    default=None,
    help='Timeout for the whole scan (seconds)'
)
@click.pass_context
def scan(ctx, target, dom, secrets, urls, noisy, verify, from_file, browser, concurrency, rate_limit,
         json_output, html_output, scan_timeout):
    """Scan TARGET and print one line per finding."""
    cfg = ctx.obj['config'].with_overrides(
        dom=dom or None,
        secrets=secrets or None,
        urls=urls or None,
        noisy=noisy or None,
        verify=verify or None,
        file=from_file or None,
        browser=browser,
        concurrency=concurrency,
        rate_limit=rate_limit,
    )

    if cfg.file:
        try:
            targets = read_url_list(target)
        except OSError as e:
            print_error(f'Could not read URL list: {e}')
    else:
        targets = [target]

    sink = StreamSink()
    try:
        if scan_timeout:
            results = asyncio.run(
                asyncio.wait_for(start_scan(cfg, targets, sink), timeout=scan_timeout)
            )
        else:
            results = asyncio.run(start_scan(cfg, targets, sink))
    except asyncio.TimeoutError:
        print_error(f'Scan did not finish within {scan_timeout} seconds')
    except ScriptScoutError as e:
        print_error(f'Scan failed: {e}')

    if json_output or html_output:
        report = aggregate_results(results)
        if json_output:
            try:
                click.echo(f'JSON report: {render_json(report, json_output)}', err=True)
            except OSError as e:
                print_error(f'Could not save JSON report: {e}')
        if html_output:
            try:
                click.echo(f'HTML report: {render_html(report, html_output)}', err=True)
            except OSError as e:
                print_error(f'Could not save HTML report: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
