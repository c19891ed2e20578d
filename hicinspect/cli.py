#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for HiCInspect.

This module provides the main CLI entry point and all subcommands for
running the Hi-C contact map analyses.
"""

import logging
import sys
import click
from pathlib import Path
import yaml

from .version import __version__
from .config.parser import ConfigParser, ConfigValidationError
from .config.schema import VALID_TEMPLATES, load_config, save_config_template, validate_config


def _setup_logging(verbose: bool, quiet: bool, level: str = 'INFO', log_file=None):
    """Configure root logging from the CLI flags and the config's logging section."""
    if verbose:
        log_level = logging.DEBUG
    elif quiet:
        log_level = logging.WARNING
    else:
        log_level = getattr(logging, str(level).upper(), logging.INFO)

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    HiCInspect: Hi-C contact map analysis for assembly curation

    Insulation and TAD boundaries, A/B compartments, P(s) contact decay,
    inversion/translocation patterns, misassembly flags with cut
    suggestions, and an overall assembly health score.
    """
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='hicinspect_config.yaml',
              help='Output configuration file path')
@click.option('--template', '-t', type=click.Choice(VALID_TEMPLATES),
              default='default', help='Configuration template type')
def config_init(output, template):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating {template} configuration template: {output}")

    try:
        save_config_template(Path(output), template=template)
        click.echo(f"✓ Configuration file created: {output}")
        click.echo("\nThe configuration file includes:")
        click.echo("  • Insulation window and boundary prominence")
        click.echo("  • Compartment power iteration settings")
        click.echo("  • Contact decay and pattern thresholds")
        click.echo("  • Misassembly fusion margins")
        click.echo("\nEdit this file to customize the analyses.")
    except Exception as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
        errors = validate_config(config)
    except Exception as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)

    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")
    click.echo("\nKey Settings:")
    click.echo(f"  Insulation window: {config['insulation']['window_size']}")
    click.echo(f"  Compartment bin size: {config['compartments']['bin_size']}")
    click.echo(f"  Threads: {config['execution']['threads'] or 'auto'}")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except Exception as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)
    for section in ('insulation', 'compartments', 'decay', 'patterns', 'misassembly'):
        click.echo(f"\n{section.capitalize()}:")
        for key, value in config[section].items():
            click.echo(f"  {key}: {value}")


# ============================================================================
# Analysis Commands
# ============================================================================

def _strip_profiles(report):
    """Drop per-pixel arrays from a report, keeping the summaries."""
    for key in ('raw_scores', 'normalized_scores'):
        report['insulation'].pop(key, None)
    for key in ('eigenvector', 'normalized_eigenvector'):
        report['compartments'].pop(key, None)
    for key in ('mean_contacts', 'log_distances', 'log_contacts', 'distances'):
        report['decay'].pop(key, None)
    report['scaffolds'].pop('inter_contig_scores', None)


@main.command()
@click.option('--matrix', '-m', 'matrix_file', required=True, type=click.Path(exists=True),
              help='Overview contact matrix (.npy, .npz or whitespace text)')
@click.option('--contigs', '-c', 'contigs_file', required=True, type=click.Path(exists=True),
              help='Contig table TSV (name, length, pixel_start, pixel_end) in display order')
@click.option('--config', 'config_file', type=click.Path(exists=True), default=None,
              help='Configuration file (YAML)')
@click.option('--output', '-o', type=click.Path(), default='hicinspect_report.json',
              help='Output report (JSON)')
@click.option('--threads', '-t', type=int, default=None,
              help='Worker threads for the analyses (default: auto)')
@click.pass_context
def analyze(ctx, matrix_file, contigs_file, config_file, output, threads):
    """
    Run every analysis on a contact map and write a JSON report.

    Examples:
        hicinspect analyze -m overview.npy -c contigs.tsv -o report.json
    """
    from .analysis import run_analyses, score_session_health, suggest_cuts
    from .analysis.contact_decay_module import format_decay_summary
    from .assembly_utils import (
        build_contig_ranges,
        calculate_metrics,
        detect_chromosome_blocks,
        texture_size_of,
    )
    from .io_utils import load_contact_matrix, load_contig_table, write_report

    try:
        parser = ConfigParser(config_file)
        parser.merge_cli_overrides({'execution.threads': threads})
        parser.validate()
    except (ConfigValidationError, FileNotFoundError) as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    config = parser.to_dict()
    _setup_logging(
        ctx.obj.get('VERBOSE', False), ctx.obj.get('QUIET', False),
        parser.get('output.logging.level', 'INFO'), parser.get('output.logging.log_file'),
    )
    quiet = ctx.obj.get('QUIET', False)

    try:
        matrix = load_contact_matrix(matrix_file)
        contigs = load_contig_table(contigs_file)
    except (OSError, ValueError) as e:
        click.echo(f"✗ Error reading input: {e}", err=True)
        sys.exit(1)

    size = matrix.shape[0]
    contig_order = list(range(len(contigs)))
    texture_size = texture_size_of(contigs, contig_order)
    if texture_size <= 0:
        click.echo("✗ Contig table covers no texture pixels", err=True)
        sys.exit(1)

    ranges = build_contig_ranges(contigs, contig_order, texture_size, size)

    session = run_analyses(matrix, size, ranges, config, max_workers=parser.get('execution.threads'))
    suggest_cuts(session, ranges, contigs, contig_order)
    metrics = calculate_metrics(contigs, contig_order)
    health = score_session_health(session, metrics)
    scaffolds = detect_chromosome_blocks(matrix, size, contigs, contig_order, texture_size)

    report = {
        'version': __version__,
        'inputs': {
            'matrix': str(matrix_file),
            'contigs': str(contigs_file),
            'size': size,
            'contig_count': len(contigs),
        },
        'metrics': metrics.to_dict(),
        **session.to_dict(),
        'decay_summary': format_decay_summary(session.decay),
        'scaffolds': scaffolds.to_dict(),
    }
    if not parser.get('output.include_profiles', True):
        _strip_profiles(report)

    write_report(report, output)

    if not quiet:
        click.echo(f"{'='*60}")
        click.echo("HiCInspect Analysis Summary")
        click.echo(f"{'='*60}")
        click.echo(f"Matrix: {size}x{size}, {len(contigs)} contigs")
        click.echo(f"TAD boundaries: {len(session.insulation.boundaries)}")
        click.echo(f"Compartment eigenvalue: {session.compartments.eigenvalue:.4f}")
        click.echo(format_decay_summary(session.decay))
        click.echo(f"Patterns: {len(session.patterns)}")
        click.echo(f"Misassembly flags: {session.misassembly.summary.total}")
        click.echo(f"Cut suggestions: {len(session.cut_suggestions)}")
        click.echo(f"Chromosome blocks: {len(scaffolds.blocks)}")
        click.echo(f"Health score: {health.overall}/100")
        click.echo(f"{'='*60}")
        click.echo(f"✓ Report saved to: {output}")


@main.command()
@click.option('--n50', type=float, required=True, help='Assembly N50 (bp)')
@click.option('--total-length', type=float, required=True, help='Total assembly length (bp)')
@click.option('--contig-count', type=int, required=True, help='Number of contigs')
@click.option('--decay-exponent', type=float, default=None, help='P(s) decay exponent')
@click.option('--misassemblies', type=int, default=0, help='Misassembly flag count')
@click.option('--eigenvalue', type=float, default=None, help='Compartment eigenvalue')
def health(n50, total_length, contig_count, decay_exponent, misassemblies, eigenvalue):
    """Compute the composite assembly health score from summary values."""
    from .analysis import HealthScoreInput, compute_health_score

    result = compute_health_score(HealthScoreInput(
        n50=n50,
        total_length=total_length,
        contig_count=contig_count,
        decay_exponent=decay_exponent,
        misassembly_count=misassemblies,
        eigenvalue=eigenvalue,
    ))

    click.echo(f"Health score: {result.overall}/100")
    click.echo(f"  Contiguity:    {result.components.contiguity:.1f}")
    click.echo(f"  Decay quality: {result.components.decay_quality:.1f}")
    click.echo(f"  Integrity:     {result.components.integrity:.1f}")
    click.echo(f"  Compartments:  {result.components.compartments:.1f}")


def _parse_order(ctx, param, value):
    if value is None:
        return None
    try:
        return [int(item) for item in value.split(',') if item.strip()]
    except ValueError:
        raise click.BadParameter(f"expected comma-separated contig indices, got '{value}'")


@main.command()
@click.option('--current', required=True, callback=_parse_order,
              help='Current contig order, comma-separated (e.g. 2,0,1)')
@click.option('--reference', required=True, callback=_parse_order,
              help='Reference contig order, comma-separated')
@click.option('--previous', default=None, callback=_parse_order,
              help='Earlier contig order to compare against')
@click.option('--operations', type=int, default=0, help='Curation operations applied so far')
def progress(current, reference, previous, operations):
    """Score a contig order against a reference order."""
    from .assembly_utils import compute_progress, compute_trend

    score = compute_progress(current, reference, operations)
    click.echo(f"Kendall's tau: {score.kendall_tau:.3f}")
    click.echo(
        f"Longest correct run: {score.longest_run}/{score.total_contigs} "
        f"({score.longest_run_pct:.1f}%)"
    )
    click.echo(f"Operations: {score.operation_count}")

    if previous is not None:
        trend = compute_trend(score, compute_progress(previous, reference))
        status = 'improving' if trend.improving else 'not improving'
        click.echo(f"Trend: {status} ({trend.tau_delta:+.3f})")


# ============================================================================
# Utility Commands
# ============================================================================

@main.command()
def version():
    """Show version information."""
    click.echo(f"HiCInspect v{__version__}")
    click.echo("\nDependencies:")

    import numpy
    click.echo(f"  NumPy: {numpy.__version__}")

    import scipy
    click.echo(f"  SciPy: {scipy.__version__}")

    click.echo(f"  PyYAML: {yaml.__version__}")


if __name__ == '__main__':
    sys.exit(main())
