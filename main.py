#!/usr/bin/env python3
"""Trade Admission - Outcome Replay.

Replays a recorded win/loss sequence through the admission controllers
and logs every permission decision. Useful to check a tuning before
deploying it to the live loop.

Usage:
    python main.py --sequence WLLWLLLW
    python main.py --file outcomes.txt --config config/config.json
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load environment variables first
load_dotenv(override=True)

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

from trade_admission.config import ConfigManager, ConfigValidationError, NotifierConfig
from trade_admission.notifications import AdmissionNotifier
from trade_admission.session import TradeSession

logger = logging.getLogger("trade_admission.replay")

OUTCOME_SYMBOLS = {"W": True, "L": False}


def parse_outcomes(text: str) -> List[bool]:
    """Parse W/L symbols, ignoring whitespace and separators.

    Raises:
        ValueError: On any symbol other than W or L
    """
    outcomes = []
    for symbol in text.upper():
        if symbol.isspace() or symbol in ",;":
            continue
        if symbol not in OUTCOME_SYMBOLS:
            raise ValueError(f"Invalid outcome symbol {symbol!r}, expected W or L")
        outcomes.append(OUTCOME_SYMBOLS[symbol])
    return outcomes


def replay(session: TradeSession, outcomes: List[bool]) -> dict:
    """Feed outcomes through the session and summarise the decisions."""
    allowed = 0
    real_wins = 0
    for index, is_win in enumerate(outcomes, start=1):
        permitted = session.can_trade()
        if permitted:
            allowed += 1
            real_wins += int(is_win)
        session.update(is_win)
        logger.info(
            f"#{index:<5} {'WIN ' if is_win else 'LOSS'} "
            f"real={'yes' if permitted else 'no '} next={'allow' if session.can_trade() else 'block'}"
        )
        for message in session.notifier.drain():
            logger.info(message.replace("\n", " | "))

    return {
        "outcomes": len(outcomes),
        "real_trades": allowed,
        "real_wins": real_wins,
        "real_win_rate": real_wins / allowed if allowed else 0.0,
        "status": session.get_status(),
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Trade Admission - outcome replay")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--sequence", help="Outcomes as a W/L string")
    source.add_argument("--file", type=Path, help="File with W/L outcomes")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.json")
    args = parser.parse_args()

    manager = ConfigManager(config_path=args.config)
    try:
        config = manager.load()
    except ConfigValidationError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"❌ Configuration error: {e}")
        return 1

    # Setup logging
    logging.basicConfig(
        level=manager.log_level,
        format='%(asctime)s | %(levelname)-8s | %(name)-40s | %(message)s',
        datefmt='%H:%M:%S',
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    try:
        text = args.sequence if args.sequence is not None else args.file.read_text()
        outcomes = parse_outcomes(text)
    except (OSError, ValueError) as e:
        logger.error(f"❌ Could not read outcomes: {e}")
        return 1

    # Replay is offline: queue messages for the log instead of Telegram
    session = TradeSession(config, notifier=AdmissionNotifier(NotifierConfig(enabled=True)))
    summary = replay(session, outcomes)

    logger.info("=" * 70)
    logger.info(
        f"Outcomes: {summary['outcomes']} | Real trades: {summary['real_trades']} | "
        f"Real win rate: {summary['real_win_rate'] * 100:.1f}%"
    )
    logger.info(f"Final status: {summary['status']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
