from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from .config import Config, load_config
from .errors import ConfigError, FgoiUserError
from .runner import run
from .version import tool_version

_HANDLER = logging.StreamHandler()
_HANDLER.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fgoi",
        description="Go imports sorter: core, third-party and custom prefix groups",
        add_help=True,
    )
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "paths",
        nargs="+",
        metavar="PATH",
        help="Go files or directories (walked recursively)",
    )
    p.add_argument(
        "-p", "--package",
        action="append",
        metavar="PREFIX[,PREFIX...]",
        help="import path prefix sorted into its own group (repeatable, comma separated)",
    )
    p.add_argument(
        "--check",
        action="store_true",
        help="do not write; exit 1 if any file would change",
    )
    p.add_argument(
        "-j", "--jobs",
        type=int,
        metavar="N",
        help="number of files processed in parallel",
    )
    p.add_argument("--config", metavar="FILE", help="config file (default: ./.fgoi.yaml)")
    p.add_argument("--no-config", action="store_true", help="ignore ./.fgoi.yaml")
    p.add_argument("--json", action="store_true", help="print the run report as JSON")
    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("-q", "--quiet", action="store_true", help="only report errors")
    verbosity.add_argument("--verbose", action="store_true", help="debug output")
    return p


def _parse_packages(values: List[str] | None) -> List[str]:
    """Split repeated/comma separated --package values."""
    result: List[str] = []
    for v in values or []:
        result.extend(x.strip() for x in v.split(",") if x.strip())
    return result


def _setup_logging(ns: argparse.Namespace) -> None:
    if ns.verbose:
        level = logging.DEBUG
    elif ns.quiet:
        level = logging.ERROR
    else:
        level = logging.INFO
    log = logging.getLogger("fgoi")
    log.setLevel(level)
    # main() may run several times in one process; follow the current stderr
    _HANDLER.setStream(sys.stderr)
    log.addHandler(_HANDLER)
    log.propagate = False


def _load(ns: argparse.Namespace) -> Config:
    if ns.no_config:
        cfg = Config()
    else:
        cfg = load_config(Path.cwd(), Path(ns.config) if ns.config else None)
    if ns.jobs is not None and ns.jobs < 1:
        raise ConfigError(f"--jobs must be positive, got {ns.jobs}")
    return cfg.with_overrides(packages=_parse_packages(ns.package), jobs=ns.jobs)


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns)

    try:
        cfg = _load(ns)
        report = run([Path(p) for p in ns.paths], cfg, check=ns.check)
    except FgoiUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    finally:
        log = logging.getLogger("fgoi")
        log.removeHandler(_HANDLER)
        log.propagate = True

    if ns.json:
        sys.stdout.write(json.dumps(report.model_dump(mode="json"), ensure_ascii=False, indent=2) + "\n")
    elif ns.check:
        for path in report.changed:
            sys.stdout.write(f"{path}\n")
    return report.exit_code()


if __name__ == "__main__":
    raise SystemExit(main())
