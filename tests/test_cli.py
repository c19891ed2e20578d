#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HiCInspect v0.1.0

Tests for CLI command interface.

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import json

import numpy as np
import pytest
import yaml
from click.testing import CliRunner

from hicinspect.cli import main


def _write_inputs(matrix_name='overview.npy'):
    """Write a two-TAD matrix and matching contig table into the cwd."""
    matrix = np.full((64, 64), 0.05)
    matrix[:32, :32] = 0.8
    matrix[32:, 32:] = 0.8
    if matrix_name.endswith('.npy'):
        np.save(matrix_name, matrix)
    else:
        np.savetxt(matrix_name, matrix)

    with open('contigs.tsv', 'w') as f:
        f.write("name\tlength\tpixel_start\tpixel_end\n")
        f.write("ctg_a\t3200000\t0\t320\n")
        f.write("ctg_b\t3200000\t320\t640\n")


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self):
        """Test that --help runs without error."""
        runner = CliRunner()
        result = runner.invoke(main, ['--help'])

        assert result.exit_code == 0
        assert 'HiCInspect' in result.output

    def test_cli_version(self):
        """Test that --version displays version."""
        runner = CliRunner()
        result = runner.invoke(main, ['--version'])

        assert result.exit_code == 0
        assert '0.1' in result.output

    def test_version_command(self):
        runner = CliRunner()
        result = runner.invoke(main, ['version'])

        assert result.exit_code == 0
        assert 'NumPy' in result.output

    def test_invalid_command(self):
        """Test that invalid commands are handled gracefully."""
        runner = CliRunner()
        result = runner.invoke(main, ['nonexistent_command'])

        assert result.exit_code != 0


class TestConfigCommands:
    """config init / validate / show."""

    def test_config_init_command(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            result = runner.invoke(main, ['config', 'init', '--output', 'test_config.yaml'])

            assert result.exit_code == 0
            with open('test_config.yaml') as f:
                assert yaml.safe_load(f)['insulation']['window_size'] == 10

    def test_config_validate_valid(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            runner.invoke(main, ['config', 'init', '-o', 'c.yaml', '-t', 'low_coverage'])
            result = runner.invoke(main, ['config', 'validate', 'c.yaml'])

            assert result.exit_code == 0
            assert 'valid' in result.output

    def test_config_validate_invalid(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            with open('bad.yaml', 'w') as f:
                yaml.dump({'compartments': {'bin_size': 0}}, f)
            result = runner.invoke(main, ['config', 'validate', 'bad.yaml'])

            assert result.exit_code == 1

    def test_config_show_yaml(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            runner.invoke(main, ['config', 'init', '-o', 'c.yaml'])
            result = runner.invoke(main, ['config', 'show', 'c.yaml', '--format', 'yaml'])

            assert result.exit_code == 0
            assert 'window_size' in result.output


class TestAnalyzeCommand:
    """analyze end to end."""

    def test_analyze_writes_report(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write_inputs()
            result = runner.invoke(main, [
                'analyze', '-m', 'overview.npy', '-c', 'contigs.tsv', '-o', 'report.json'
            ])

            assert result.exit_code == 0, result.output
            with open('report.json') as f:
                report = json.load(f)

            assert report['inputs']['size'] == 64
            assert report['inputs']['contig_count'] == 2
            for key in ('insulation', 'compartments', 'decay', 'patterns',
                        'misassembly', 'cut_suggestions', 'health', 'metrics', 'scaffolds'):
                assert key in report
            assert 0 <= report['health']['overall'] <= 100

    def test_analyze_text_matrix_with_config(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write_inputs('overview.txt')
            with open('c.yaml', 'w') as f:
                yaml.dump({'insulation': {'window_size': 8, 'boundary_prominence': 0.05},
                           'output': {'include_profiles': False}}, f)
            result = runner.invoke(main, [
                'analyze', '-m', 'overview.txt', '-c', 'contigs.tsv',
                '--config', 'c.yaml', '-o', 'out/report.json', '--threads', '2',
            ])

            assert result.exit_code == 0, result.output
            with open('out/report.json') as f:
                report = json.load(f)
            assert report['insulation']['boundaries'] == [32]
            assert 'raw_scores' not in report['insulation']

    def test_analyze_invalid_config(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write_inputs()
            with open('c.yaml', 'w') as f:
                yaml.dump({'insulation': {'window_size': -3}}, f)
            result = runner.invoke(main, [
                'analyze', '-m', 'overview.npy', '-c', 'contigs.tsv', '--config', 'c.yaml'
            ])

            assert result.exit_code == 1

    def test_analyze_missing_matrix(self):
        runner = CliRunner()
        result = runner.invoke(main, ['analyze', '-m', 'nope.npy', '-c', 'nope.tsv'])

        assert result.exit_code != 0

    def test_analyze_non_square_matrix(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write_inputs()
            np.save('rect.npy', np.ones((4, 5)))
            result = runner.invoke(main, ['analyze', '-m', 'rect.npy', '-c', 'contigs.tsv'])

            assert result.exit_code == 1


class TestHealthCommand:
    """health from summary values."""

    def test_perfect_score(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            'health', '--n50', '1000000', '--total-length', '1000000',
            '--contig-count', '1', '--decay-exponent', '-1.15', '--eigenvalue', '0.5',
        ])

        assert result.exit_code == 0
        assert 'Health score: 100/100' in result.output

    def test_missing_required_option(self):
        runner = CliRunner()
        result = runner.invoke(main, ['health', '--n50', '10'])

        assert result.exit_code != 0


class TestProgressCommand:
    """progress against a reference order."""

    def test_reference_order_scores_perfect(self):
        runner = CliRunner()
        result = runner.invoke(main, ['progress', '--current', '0,1,2,3', '--reference', '0,1,2,3'])

        assert result.exit_code == 0
        assert "Kendall's tau: 1.000" in result.output
        assert 'Longest correct run: 4/4 (100.0%)' in result.output

    def test_trend_against_previous_order(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            'progress', '--current', '1,0,2,3', '--reference', '0,1,2,3',
            '--previous', '3,2,1,0', '--operations', '2',
        ])

        assert result.exit_code == 0
        assert 'Operations: 2' in result.output
        assert 'Trend: improving (+1.667)' in result.output

    def test_bad_order_rejected(self):
        runner = CliRunner()
        result = runner.invoke(main, ['progress', '--current', '0,a', '--reference', '0,1'])

        assert result.exit_code != 0

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
