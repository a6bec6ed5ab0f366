"""
CLI entrypoint for resumeup.

Runs one bump pass over the user's hh.ru resumes. Meant to be triggered
by an external scheduler (cron, systemd timer).
"""

import sys
import json
import logging
import argparse

from resumeup.config import load_settings, DEFAULT_SETTINGS_PATH
from resumeup.logs import setup_logging
from resumeup.auth import CredentialStore, TokenManager
from resumeup.hh import ResumeClient
from resumeup.publish import RunCoordinator, RunReport, PUBLISH_NOW, WAIT_UNTIL, SKIP_NOT_VISIBLE
from resumeup.telegram import build_notifier


logger = logging.getLogger("resumeup")


def print_summary(report: RunReport) -> None:
    """Print per-resume run summary to console."""
    print("\n" + "=" * 60)
    print("RUN SUMMARY")
    print("=" * 60)

    total = len(report.results)
    published = sum(1 for r in report.results if r.published)
    waiting = sum(1 for r in report.results if r.decision.action == WAIT_UNTIL)
    skipped = sum(1 for r in report.results if r.decision.action == SKIP_NOT_VISIBLE)
    failed = sum(1 for r in report.results if r.error)

    print(f"\nResumes processed: {total}")
    print(f"[OK] Published: {published}")
    print(f"[WAIT] Waiting for cooldown: {waiting}")
    print(f"[SKIP] Not visible for clients: {skipped}")
    print(f"[FAIL] Failed: {failed}")

    if report.aborted:
        print(f"\n[ERROR] Run aborted: {report.error}")

    print("\n" + "-" * 60)
    print("PER-RESUME RESULTS:")
    print("-" * 60)

    for result in report.results:
        if result.error:
            status_symbol = "[FAIL]"
        elif result.published:
            status_symbol = "[OK]"
        else:
            status_symbol = {
                PUBLISH_NOW: "[?]",
                WAIT_UNTIL: "[WAIT]",
                SKIP_NOT_VISIBLE: "[SKIP]",
            }.get(result.decision.action, "[?]")

        print(f"\n{status_symbol} {result.title} ({result.resume_id})")
        print(f"   Decision: {result.decision.action}")

        if result.decision.wait_until:
            print(f"   Next publish at: {result.decision.wait_until.isoformat()}")

        if result.decision.action == PUBLISH_NOW:
            print(f"   Published: {result.published}")
            print(f"   Notified: {result.notified}")

        if result.error:
            print(f"   Error: {result.error}")


def run_command(args) -> int:
    """
    Execute one bump pass.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (always 0, errors end up in the log)
    """
    try:
        settings = load_settings(args.config)
    except Exception as e:
        print(f"[ERROR] Failed to load settings: {e}", file=sys.stderr)
        return 0

    setup_logging(settings, to_console=args.print_all)

    store = CredentialStore(args.env)
    try:
        credentials = store.load()
    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load credentials: %s", e)
        return 0

    tokens = TokenManager(
        store,
        api_url=settings["api_url"],
        timeout=settings["request_timeout"],
        credentials=credentials,
    )
    client = ResumeClient(
        api_url=settings["api_url"],
        user_agent=settings["user_agent"],
        timeout=settings["request_timeout"],
    )
    coordinator = RunCoordinator(
        tokens=tokens,
        client=client,
        notifier=build_notifier(credentials.extra, timeout=settings["request_timeout"]),
        success_template=settings["success_template"],
    )

    try:
        report = coordinator.run()
    except Exception:
        logger.exception("Unexpected error during run")
        return 0

    if args.print_all:
        if report.listing is not None:
            print(json.dumps(report.listing, indent=2, ensure_ascii=False))
        print_summary(report)

    return 0


def main(argv=None):
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description="resumeup - automatic hh.ru resume bumping",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Regular run (logs to resume_up.log)
  resumeup

  # Debug run: print the full listing and a summary, log to stdout
  resumeup --print

Credential file (.env) keys:
  CLIENT_ID          hh.ru application client id (required)
  CLIENT_SECRET      hh.ru application client secret (required)
  ACCESS_TOKEN       OAuth2 access token (required, rewritten on refresh)
  REFRESH_TOKEN      OAuth2 refresh token (required, rewritten on refresh)
  TELEGRAM_TOKEN     Bot token for notifications
  TELEGRAM_CHAT_ID   Chat to notify
  TG_API_ID          Telegram API ID - get from my.telegram.org
  TG_API_HASH        Telegram API hash
  TG_SESSION_DIR     Bot session directory (default: ./data/telegram_session)
        """,
    )

    parser.add_argument(
        "--print",
        dest="print_all",
        action="store_true",
        help="Print all resumes and log to stdout instead of the log file",
    )

    parser.add_argument(
        "--env",
        type=str,
        default=".env",
        help="Path to credential file (default: .env)",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=DEFAULT_SETTINGS_PATH,
        help=f"Path to settings YAML (default: {DEFAULT_SETTINGS_PATH})",
    )

    args = parser.parse_args(argv)

    return run_command(args)


if __name__ == "__main__":
    sys.exit(main())
