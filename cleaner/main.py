"""Main entry point for the code cleaner."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from cleaner.config.environment import EnvironmentConfig
from cleaner.config.exceptions import ConfigurationError
from cleaner.config.loader import load_config
from cleaner.config.models import AppConfig
from cleaner.logging import get_logger
from cleaner.logging.config import configure_logging
from cleaner.pipeline import CleanupPipeline, read_text, write_text
from cleaner.reconcile import StyleReconciler
from cleaner.scoring import similarity
from cleaner.vcs import GitError, GitRepository

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str], dry_run: bool = False
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load and prepare runtime configuration.

    Args:
        config_path: Path to configuration file (None to search the default locations)
        log_level_override: Log level from CLI (takes precedence)
        dry_run: --dry-run flag; only ever switches dry-run on

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with the effective log level resolved

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    # Log level priority: CLI > Environment > Config
    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    if dry_run:
        app_config.cleanup.dry_run = True

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="code-cleaner",
        description=(
            "Code Cleaner - reconcile quote, semicolon, whitespace, indentation and "
            "line-ending drift toward a base version"
        ),
    )
    parser.add_argument("--base", type=Path, help="Base (reference) file for file mode")
    parser.add_argument("--modified", type=Path, help="Modified file for file mode")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Where to write the cleaned text in file mode (default: stdout)",
    )
    parser.add_argument(
        "--repo",
        type=Path,
        default=Path("."),
        help="Git working tree to clean in git mode (default: current directory)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: cleaner.yaml if present)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report similarity without writing any file",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def run_file_mode(args: argparse.Namespace, app_config: AppConfig) -> int:
    """Reconcile --modified toward --base and emit the cleaned text."""
    encoding = app_config.cleanup.encoding
    base = read_text(args.base, encoding)
    modified = read_text(args.modified, encoding)

    result = StyleReconciler().reconcile(base, modified)
    original_score = similarity(base, modified)

    logger.info(
        f"Similarity index for {args.modified}: {result.score:.4f}",
        extra={
            "event": "cli.file_mode.completed",
            "original_score": original_score,
            "score": result.score,
            "changed": result.cleaned != modified,
        },
    )

    if app_config.cleanup.dry_run:
        return 0

    if args.output:
        write_text(args.output, result.cleaned, encoding)
    else:
        sys.stdout.write(result.cleaned)
        sys.stdout.flush()
    return 0


def run_git_mode(args: argparse.Namespace, app_config: AppConfig) -> int:
    """Clean every changed file of the working tree against its base branch."""
    repository = GitRepository(
        args.repo,
        git_executable=app_config.git.git_executable,
        encoding=app_config.cleanup.encoding,
    )
    result = CleanupPipeline(app_config, repository).run_once()

    if result.total_files == 0:
        print("No files have been changed compared to base branch.", file=sys.stderr)
    else:
        print(
            f"Code cleaned: {result.total_changed} of {result.total_files} file(s) changed"
            + (" (dry run)" if result.dry_run else ""),
            file=sys.stderr,
        )

    return 1 if result.had_errors else 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the code cleaner.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if (args.base is None) != (args.modified is None):
        parser.error("--base and --modified must be given together")

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level, args.dry_run)
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        if args.base is not None:
            return run_file_mode(args, app_config)
        return run_git_mode(args, app_config)

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except GitError as e:
        print(f"Git Error: {e}", file=sys.stderr)
        logger.error(
            f"Git error: {e}",
            extra={"event": "cli.git.error", "error_type": type(e).__name__},
        )
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
