"""Selfcheck — entry point.

Runs every startup check and prints a report:

    selfcheck                       # full check with configured settings
    selfcheck --config conf.json    # use another settings file
    selfcheck --minimal             # only template and temp directories
    selfcheck --no-update-check     # skip the release lookup

Exit status: 0 healthy, 1 incompatible runtime, 2 permission problems.
"""

import argparse
import logging
import os
import platform
import sys
from datetime import date

from selfcheck.branding import AppBranding
from selfcheck.config.settings import AppSettings
from selfcheck.core.errors import CompatibilityError
from selfcheck.core.permissions import check_permissions
from selfcheck.core.runtime import (
    check_extensions,
    check_version,
    has_reached_eol,
    list_extension_requirements,
    lookup_eol,
)
from selfcheck.core.update_checker import UpdateChecker

EXIT_OK = 0
EXIT_INCOMPATIBLE = 1
EXIT_PERMISSIONS = 2


def setup_logging(data_dir: str, verbose: bool = False):
    """Configure logging to console, and to file when the data dir allows it."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    # Never create the data dir here: its absence is for the audit to report
    if os.path.isdir(data_dir):
        log_dir = os.path.join(data_dir, 'logs')
        try:
            os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(
                os.path.join(log_dir, 'selfcheck.log'), encoding='utf-8'))
        except OSError:
            pass  # reported by the permission audit

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=handlers,
    )


def run_checks(settings: AppSettings, minimal: bool = False,
               update_check: bool = True) -> int:
    """Run all checks, print the report, and return the exit status."""
    logger = logging.getLogger(__name__)
    py_version = platform.python_version()

    print(f"{AppBranding.APP_NAME} {AppBranding.VERSION} on Python {py_version}")

    try:
        check_version(settings.min_python_version, py_version)
        check_extensions()
    except CompatibilityError as e:
        logger.error("%s", e)
        print(f"\n  ✗ {e}")
        return EXIT_INCOMPATIBLE

    today = date.today()
    eol = lookup_eol(py_version, today)
    if has_reached_eol(py_version, today):
        print(f"  ⚠ Python {py_version} reached end of life on {eol}")
    else:
        print(f"  Python {py_version} supported until {eol}")

    print("\nExtensions:")
    for ext in list_extension_requirements():
        mark = "✓" if ext.loaded else ("✗" if ext.required else "-")
        print(f"  {mark} {ext.name:<12} {ext.description}")

    if update_check:
        try:
            checker = UpdateChecker.from_settings(settings)
        except ValueError as e:
            logger.warning("Update check skipped: %s", e)
        else:
            latest = checker.check_update(settings.check_updates, True)
            if latest:
                print(f"\n  Update available: v{latest}")

    errors = check_permissions(settings.resource_requirements(), minimal)
    print("\nPermissions:")
    if not errors:
        print("  ✓ All resources are accessible")
        return EXIT_OK
    for line in errors:
        print(f"  ⚠ {line}")
    return EXIT_PERMISSIONS


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description=f"{AppBranding.APP_NAME} installation health check")
    parser.add_argument("--config", help="Path to the JSON settings file")
    parser.add_argument("--minimal", action="store_true",
                        help="Only check template and temp directories")
    parser.add_argument("--no-update-check", action="store_true",
                        help="Do not look for a newer release")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    settings = AppSettings.load(args.config)
    setup_logging(settings.data_dir, args.verbose)
    logger = logging.getLogger(__name__)
    logger.info("Selfcheck starting")

    exit_code = run_checks(settings, minimal=args.minimal,
                           update_check=not args.no_update_check)
    logger.info("Selfcheck finished with status %d", exit_code)
    return exit_code


if __name__ == '__main__':
    sys.exit(main())
