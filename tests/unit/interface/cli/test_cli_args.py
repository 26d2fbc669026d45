from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. Only explicitly set options become overrides.
3. Mutually exclusive input sources.
"""

import pytest

from treefs.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_no_flags_means_no_overrides():
    assert args_to_overrides(parse_args([])) == {}


def test_cli_flags_mapping():
    args = parse_args([
        "-f", "state.fs",
        "--no-autosave",
        "--unsorted",
        "--debug",
        "--log-file", "out.log",
    ])

    overrides = args_to_overrides(args)

    assert overrides == {
        "snapshot_path": "state.fs",
        "autosave_on_quit": False,
        "sort_listing": False,
        "log_level": "DEBUG",
        "log_file": "out.log",
    }


def test_repeatable_command_option():
    args = parse_args(["-c", "mkdir /a", "-c", "ls /"])

    assert args.commands == ["mkdir /a", "ls /"]
    assert args.script_path is None


def test_script_and_command_are_exclusive():
    with pytest.raises(SystemExit):
        parse_args(["-s", "cmds.txt", "-c", "pwd"])
