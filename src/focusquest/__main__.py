from pathlib import Path
import logging
import os
import sys

from dotenv import load_dotenv

# Ensure the src directory is on sys.path when running as a script
_SRC_DIR = Path(__file__).resolve().parents[1]
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from focusquest.bootstrap import create_focus_session
from focusquest.presentation.session_view import VirtualClock, run_demo

load_dotenv()


def _print_help_surface() -> None:
    print("\nHelp:")
    print("- Demo: runs one simulated 25 minute expedition on a virtual clock.")
    print("- Tuning: FOCUSQUEST_EVENT_PROFILE, FOCUSQUEST_SEED, FOCUSQUEST_START_POLICY, FOCUSQUEST_PARTIAL_BAND.")
    print("- Content issues: run python -m focusquest.infrastructure.content_validator.")


def _configure_logging() -> None:
    level = os.getenv("FOCUSQUEST_LOG_LEVEL", "WARNING").strip().upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING))


def main():
    _configure_logging()
    try:
        clock = VirtualClock()
        session = create_focus_session(clock=clock)
        run_demo(
            session,
            clock,
            task_type=os.getenv("FOCUSQUEST_DEMO_TASK", "expedition"),
            risk_level=os.getenv("FOCUSQUEST_DEMO_RISK", "standard"),
        )
    except KeyboardInterrupt:
        print("\nSession ended.")
    except Exception as exc:
        print("An unexpected error occurred. The session closed safely.")
        print(f"Reason: {exc}")
        _print_help_surface()


if __name__ == "__main__":
    main()
