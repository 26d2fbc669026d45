from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, stored file, command-line overrides), optional initial reload,
and execution of the shell over a prompt, a script file or inline commands.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from treefs.core.operations import FileSystem
from treefs.domain.config import (
    get_config_file,
    get_default_config,
    load_config,
    save_config,
    validate_config,
)
from treefs.domain.errors import FsError
from treefs.infra.fs import normalize_path
from treefs.infra.logging import LoggingConfig, configure_logging, get_logger
from treefs.interface.cli import args as cli_args
from treefs.interface.shell.session import Session, describe_error
from treefs.utils.i18n import i18n

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: 0 on success, 1 if a scripted command or the initial reload
             failed, 2 if the script cannot be read, 130 on interrupt.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Resolve configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)

    # 2. Logging bootstrap
    configure_logging(LoggingConfig.from_settings(conf))

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if conf["locale"] != i18n.locale:
        i18n.load_locale(conf["locale"])

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return 0

    if args.save_config:
        save_config(conf)
        print(i18n.t("cli.status.config_saved", path=get_config_file()))
        return 0

    # 3. Build the namespace and the session around it
    fs = FileSystem(snapshot_path=conf["snapshot_path"], sort_listing=conf["sort_listing"])
    session = Session(fs, autosave_on_quit=conf["autosave_on_quit"], prompt=conf["prompt"])

    if args.load:
        try:
            fs.reload()
        except FsError as e:
            msg = i18n.t("cli.errors.initial_load", reason=describe_error(e))
            logger.error(msg)
            print(msg, file=sys.stderr)
            return 1

    # 4. Execution phase
    try:
        if args.commands:
            failures = session.run(args.commands)
            return 0 if failures == 0 else 1

        if args.script_path:
            lines = _read_script(args.script_path)
            if lines is None:
                return 2
            failures = session.run(lines)
            return 0 if failures == 0 else 1

        session.interact()
        return 0

    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return 130

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge known override keys into the base configuration.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in base and v is not None:
            out[k] = v
    return out


def _read_script(path: str) -> Optional[List[str]]:
    """Load a command script, reporting and returning None if it is unreadable."""
    script = normalize_path(path, os.curdir)
    try:
        with open(script, "r", encoding="utf-8") as f:
            return f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        msg = i18n.t("cli.errors.script_unreadable", path=path, error=e)
        logger.error(msg)
        print(msg, file=sys.stderr)
        return None
