#!/usr/bin/env python3
"""
gflaunch: run Griffon scripts from the command line

Commands:
  gflaunch run SCRIPT       # run one script (--home or --classpath)
  gflaunch build FILE [T]   # run targets of a YAML build file
  gflaunch classpath        # show the resolved classpath
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from gflaunch.core import classpath as cp
from gflaunch.core.configuration import default_log_file, load_entry_points, set_verbose
from gflaunch.core.exceptions import BuildException, InvalidPath
from gflaunch.core.models import EntryPoints
from gflaunch.tasks import GriffonTask, Project
from gflaunch.utils.logging_config import setup_logging

log = logging.getLogger("gflaunch")


def _entry_points(args: argparse.Namespace) -> EntryPoints:
    path = getattr(args, "entry_points", None)
    return load_entry_points(Path(path) if path else None)


def cmd_run(args: argparse.Namespace) -> int:
    ep = _entry_points(args)
    project = Project(base_dir=Path(args.base_dir).resolve() if args.base_dir else Path.cwd())
    task = GriffonTask(
        project=project,
        home=args.home,
        args=args.args,
        environment=args.env,
        classpath=args.classpath,
        entry_points=ep,
    )
    try:
        if args.command:
            task.command = args.script
        else:
            task.script = args.script
        task.execute()
    except BuildException as e:
        log.error("%s", e)
        print(f"BUILD FAILED: {e}", file=sys.stderr)
        return 1
    print("BUILD SUCCESSFUL")
    return 0


def cmd_build(args: argparse.Namespace) -> int:
    ep = _entry_points(args)
    try:
        project = Project.load_build_file(Path(args.build_file), entry_points=ep)
        project.execute_targets(args.targets)
    except BuildException as e:
        log.error("%s", e)
        print(f"BUILD FAILED: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        log.error("Cannot load %s: %s", args.build_file, e)
        print(f"BUILD FAILED: {e}", file=sys.stderr)
        return 1
    print("BUILD SUCCESSFUL")
    return 0


def render_classpath(entries: List[Path]):
    from rich.table import Table

    table = Table(title=f"classpath ({len(entries)} entries)")
    table.add_column("#", justify="right")
    table.add_column("name", no_wrap=True)
    table.add_column("location", overflow="fold")
    for i, entry in enumerate(entries, 1):
        style = None if entry.exists() else "red"
        table.add_row(str(i), entry.name, entry.as_uri(), style=style)
    return table


def cmd_classpath(args: argparse.Namespace) -> int:
    from rich.console import Console

    if bool(args.home) == bool(args.classpath):
        print("One of --home or --classpath must be provided.", file=sys.stderr)
        return 1
    ep = _entry_points(args)
    try:
        entries = cp.resolve(args.classpath, args.home, framework=ep.framework)
    except InvalidPath as e:
        print(str(e), file=sys.stderr)
        return 1
    Console().print(render_classpath(entries))
    return 0


def _add_source_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--home", help="Location of a local Griffon installation")
    p.add_argument(
        "--classpath",
        action="append",
        help="Classpath entry to load the framework from; can repeat (instead of --home)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gflaunch", description="Run Griffon scripts in an isolated loader")
    parser.add_argument("--verbose", action="store_true", help="Print timestamped launcher diagnostics")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="INFO")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    parser.add_argument("--entry-points", default=None, help="YAML file overriding framework entry point names")
    sub = parser.add_subparsers(dest="cmd")

    p_run = sub.add_parser("run", help="Run one script")
    p_run.add_argument("script", help="Script name, e.g. Compile (or command name with --command)")
    _add_source_args(p_run)
    p_run.add_argument("--args", default=None, help="Argument string passed to the script")
    p_run.add_argument("--env", default=None, help="Environment to run in, e.g. production")
    p_run.add_argument("--base-dir", default=None, help="Project directory (default: current directory)")
    p_run.add_argument(
        "--command", action="store_true", help="Treat SCRIPT as a command name (run-app -> RunApp)"
    )
    p_run.set_defaults(func=cmd_run)

    p_build = sub.add_parser("build", help="Run targets from a YAML build file")
    p_build.add_argument("build_file", help="Path to build YAML")
    p_build.add_argument("targets", nargs="*", help="Targets to run (default: all, in file order)")
    p_build.set_defaults(func=cmd_build)

    p_cp = sub.add_parser("classpath", help="Show the resolved classpath")
    _add_source_args(p_cp)
    p_cp.set_defaults(func=cmd_classpath)

    return parser


def _bind_option_values(argv: List[str]) -> List[str]:
    """Attach the value following --args, which usually starts with '-'."""
    bound: List[str] = []
    tokens = iter(argv)
    for token in tokens:
        value = next(tokens, None) if token == "--args" else None
        bound.append(token if value is None else f"--args={value}")
    return bound


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(_bind_option_values(sys.argv[1:] if argv is None else list(argv)))
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    if args.verbose:
        set_verbose(True)
    log_file = Path(args.log_file) if args.log_file else default_log_file()
    setup_logging(level=args.log_level, log_file=log_file)
    return int(args.func(args))


if __name__ == "__main__":
    sys.exit(main())
