"""Tests for command line parsing."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from argument_parser import EXIT_INVALID_ARGUMENTS, parse_arguments
from codecommit_to_github import main
from config import PushMethod, Visibility


def test_defaults(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    options = parse_arguments([])

    assert options.source_path == os.getcwd()
    assert options.token == ''
    assert options.remote == 'origin'
    assert options.organization is None
    assert options.make_public is False
    assert options.visibility == Visibility.PRIVATE
    assert options.aws_profile is None
    assert options.verbose is False
    assert options.dry_run is False
    assert options.branch == 'master'
    assert options.push_method == PushMethod.SSH
    assert options.api_url == 'https://api.github.com'


def test_short_options() -> None:
    options = parse_arguments(
        ['-t', 'ghp_x', '-r', 'cc', '-o', 'acme', '-p', '-a', 'work', '-v', '-d', './repo']
    )

    assert options.token == 'ghp_x'
    assert options.remote == 'cc'
    assert options.organization == 'acme'
    assert options.make_public is True
    assert options.aws_profile == 'work'
    assert options.verbose is True
    assert options.dry_run is True
    assert options.source_path == './repo'


def test_long_options() -> None:
    options = parse_arguments(
        [
            '--token', 'ghp_x', '--remote', 'cc', '--organization', 'acme', '--public',
            '--aws-profile', 'work', '--verbose', '--dry', '--branch', 'main',
            '--all-branches', '--push-method', 'https',
            '--gh-api', 'https://github.acme.com/api/v3/',
        ]
    )

    assert options.organization == 'acme'
    assert options.branch == 'main'
    assert options.all_branches is True
    assert options.push_method == PushMethod.HTTPS
    assert options.api_url == 'https://github.acme.com/api/v3'


def test_options_are_immutable() -> None:
    options = parse_arguments(['-t', 'ghp_x'])

    with pytest.raises(AttributeError):
        options.token = 'other'


@pytest.mark.parametrize(
    'argv',
    [
        ['-o', 'not a valid org'],
        ['-o', '-leading-hyphen'],
        ['--remote', '--upload-pack=evil'],
        ['--branch', 'two words'],
        ['--gh-api', 'http://github.acme.com/api/v3'],
    ],
)
def test_invalid_input_exits(argv, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        parse_arguments(argv)

    assert excinfo.value.code == EXIT_INVALID_ARGUMENTS


@patch('codecommit_to_github.MigrationOrchestrator')
def test_help_exits_before_migration(mock_orchestrator, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(['--help'])

    assert excinfo.value.code == 0
    assert 'Migrate an AWS CodeCommit repository to GitHub' in capsys.readouterr().out
    mock_orchestrator.assert_not_called()


@patch('codecommit_to_github.MigrationOrchestrator')
def test_main_returns_orchestrator_exit_code(mock_orchestrator) -> None:
    mock_orchestrator.return_value.run.return_value = 1

    assert main(['-t', 'ghp_x', '/tmp/repo']) == 1

    options = mock_orchestrator.call_args.args[0]
    assert options.source_path == '/tmp/repo'
