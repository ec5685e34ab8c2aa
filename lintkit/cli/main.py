import os
from pathlib import Path

import click
from pydantic import ValidationError

from lintkit import __version__
from lintkit.ci.policy import evaluate_exit_code
from lintkit.cli.plugin_loader import PluginLoader, collect_entry_points
from lintkit.config.engine import EngineConfig
from lintkit.config.loader import load_config
from lintkit.config.output import OutputConfig
from lintkit.config.targets import TargetsConfig
from lintkit.core.errors import LintKitError
from lintkit.engine.runner import run_analysis
from lintkit.report.generator import SUPPORTED_FORMATS, parse_output_format, render
from lintkit.targets.resolver import TargetResolver
from lintkit.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def _progress(quiet: bool, message: str) -> None:
    if not quiet:
        click.echo(message, err=True)


@click.command('lintkit', context_settings=dict(help_option_names=['-h', '--help']))
@click.option('--analyzers', 'analyzer_paths', multiple=True, type=click.Path(), help='Path to an analyzer module (repeatable).')
@click.option('--target', required=True, type=click.Path(exists=True, file_okay=True, dir_okay=True), help='Solution, project, directory or file to analyze.')
@click.option('--format', 'output_format', type=click.Choice(SUPPORTED_FORMATS, case_sensitive=False), default=None, help='Output format: text (default) or sarif.')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output.')
@click.option('--quiet', '-q', is_flag=True, help='Enable quiet output (minimal).')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write the report to this file instead of stdout.')
@click.option('--jobs', '-j', type=click.IntRange(min=1), default=None, help='Number of worker threads running analyzers.')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False), help='Path to a project config file.')
@click.version_option(version=__version__, prog_name='lintkit')
@click.pass_context
def main(ctx, analyzer_paths, target, output_format, verbose, quiet, output, jobs, config_path):
    """
    LintKit: run analyzer plugins over source files and report violations.
    """
    if verbose and quiet:
        raise click.UsageError('Cannot specify both --verbose and --quiet')

    log_level = 'INFO' if verbose else 'ERROR' if quiet else 'WARNING'
    setup_logging(log_level=log_level, json_logs=os.environ.get('LINTKIT_LOG_JSON') == '1')

    # Everything that can be rejected up front is rejected before any analysis runs.
    try:
        raw_config = load_config('.', config_path=config_path)
        targets_config = TargetsConfig(**raw_config['targets'])
        engine_config = EngineConfig(**raw_config['engine'])
        output_config = OutputConfig(**raw_config['output'])
        fmt = parse_output_format(output_format or output_config.format)
    except (LintKitError, ValidationError) as e:
        raise click.UsageError(str(e))

    paths = [str(p) for p in raw_config.get('analyzers') or []] + list(analyzer_paths)
    if not paths:
        raise click.UsageError('At least one --analyzers path is required.')

    _progress(quiet, f'LintKit v{__version__}')
    if verbose:
        _progress(quiet, f'Analyzers: {", ".join(paths)}')
        _progress(quiet, f'Target: {target}')
        _progress(quiet, f'Format: {fmt.value}')

    loader = PluginLoader()
    plugins, load_errors = loader.load_all(paths)
    load_errors.extend(warning for plugin in plugins for warning in plugin.warnings)
    entry_points = collect_entry_points(plugins)

    _progress(quiet, 'Running lint analysis...')
    result = run_analysis(
        entry_points,
        target,
        resolver=TargetResolver(targets_config),
        jobs=jobs or engine_config.jobs,
        errors=load_errors,
    )
    loader.release()

    report = render(fmt, result, verbose)
    if output:
        Path(output).write_text(report + '\n' if report else '', encoding='utf-8')
        _progress(quiet, f'Report saved to {output}')
    elif report:
        click.echo(report)

    code = evaluate_exit_code(result, requested_plugins=len(paths), loaded_plugins=len(plugins))
    if not plugins:
        click.echo('Error: no analyzer module could be loaded', err=True)
    logger.info('run_finished', exit_code=code)
    ctx.exit(code)


if __name__ == '__main__':
    main()
