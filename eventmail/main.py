"""Command-line entry point for eventmail."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from eventmail.config.environment import EnvironmentConfig, load_environment_config
from eventmail.config.exceptions import ConfigurationError
from eventmail.config.loader import load_profiles
from eventmail.config.models import LogLevel, Profile
from eventmail.logging import get_logger
from eventmail.logging.config import configure_logging
from eventmail.logging.context import profile_scope
from eventmail.notifications.models import NotificationError
from eventmail.notifications.service import MailService
from eventmail.preparation.exceptions import PreparationError
from eventmail.preparation.preparer import prepare_text
from eventmail.profiles.exceptions import ProfileError
from eventmail.profiles.resolver import fill_unset, resolve_profile
from eventmail.profiles.store import ProfileStore

logger = get_logger(__name__, component="cli")

DEFAULT_LOG_LEVEL = LogLevel.WARNING.value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eventmail",
        description="Send announcement emails about the next event, built from a profile "
        "in the eventmail configuration file",
    )
    parser.add_argument(
        "-p",
        "--profile",
        default=None,
        help="Profile to use (default: first profile in the config file)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Just display final data for sending (minus credentials)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path of config file to use (default: eventmail.yaml in the config directory)",
    )
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="Just list the profiles with a 'doc' field in the config file",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=[level.value for level in LogLevel],
        help="Log level (overrides LOG_LEVEL)",
    )
    return parser


def apply_environment_credentials(profile: Profile, env_config: EnvironmentConfig) -> Profile:
    """Fill unset SMTP credentials from the environment; the profile wins."""
    fallback = Profile(user=env_config.smtp_user, password=env_config.smtp_password)
    return fill_unset(profile, fallback)


def list_profiles(store: ProfileStore) -> None:
    """Print every documented (callable) profile."""
    print("The following profiles exist in the config file:")
    for name, doc in store.documented():
        print(f"{name} - {doc}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for eventmail.

    Args:
        argv: Command-line arguments (sys.argv[1:] if None)

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = build_parser().parse_args(argv)

    try:
        env_config = load_environment_config()
        log_level = args.log_level or env_config.log_level or DEFAULT_LOG_LEVEL
        configure_logging(level=log_level, format_type=env_config.log_format)

        store = ProfileStore(load_profiles(args.config, env_config))
        logger.info(
            "Configuration loaded",
            extra={"event": "config.loaded", "profile_count": len(store)},
        )

        if args.list:
            list_profiles(store)
            return 0

        name, profile = resolve_profile(store, args.profile)
        profile = apply_environment_credentials(profile, env_config)

        with profile_scope(name):
            prepared = prepare_text(profile)
            result = MailService().deliver(prepared, dry_run=args.dry_run)

        if result.is_success():
            print("Email sent successfully!")
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except ProfileError as e:
        print(f"Profile Error: {e}", file=sys.stderr)
        return 1
    except PreparationError as e:
        print(f"Preparation Error: {e}", file=sys.stderr)
        return 1
    except NotificationError as e:
        print(f"Could not send email! - {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Unexpected fatal error",
            extra={"event": "cli.failed", "error_type": type(e).__name__},
            exc_info=True,
        )
        return 1


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
