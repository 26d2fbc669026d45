from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides.
"""

import argparse
from typing import Any, Dict

from treefs.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the treefs CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="treefs",
        description=i18n.t("app.description"),
    )

    # --- Persistence ---
    p.add_argument(
        "-f", "--snapshot",
        dest="snapshot_path",
        default=None,
        help=i18n.t("cli.args.snapshot"),
    )
    p.add_argument(
        "--load",
        action="store_true",
        help=i18n.t("cli.args.load"),
    )
    p.add_argument(
        "--no-autosave",
        action="store_true",
        help=i18n.t("cli.args.no_autosave"),
    )

    # --- Input Sources ---
    source = p.add_mutually_exclusive_group()
    source.add_argument(
        "-s", "--script",
        dest="script_path",
        default=None,
        help=i18n.t("cli.args.script"),
    )
    source.add_argument(
        "-c", "--command",
        dest="commands",
        action="append",
        default=None,
        help=i18n.t("cli.args.command"),
    )

    # --- Shell Behaviour ---
    p.add_argument(
        "--unsorted",
        action="store_true",
        help=i18n.t("cli.args.unsorted"),
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help=i18n.t("cli.args.defaults"),
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help=i18n.t("cli.args.dump"),
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help=i18n.t("cli.args.save_config"),
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help=i18n.t("cli.args.debug"),
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help=i18n.t("cli.args.log_file"),
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Only the keys the user actually set.
    """
    overrides: Dict[str, Any] = {}

    if args.snapshot_path:
        overrides["snapshot_path"] = args.snapshot_path
    if args.no_autosave:
        overrides["autosave_on_quit"] = False
    if args.unsorted:
        overrides["sort_listing"] = False
    if args.debug:
        overrides["log_level"] = "DEBUG"
    if args.log_file:
        overrides["log_file"] = args.log_file

    return overrides
