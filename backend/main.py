"""
Runs the desk over the four input files.

    python backend/main.py [data_dir]

data_dir defaults to BOND_DESK_DATA_DIR or ./data and must hold
prices.txt, marketdata.txt, trades.txt and inquiries.txt. Missing files
are skipped.
"""

import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

from bond_desk import DeskConfig, DeskOrchestrator

config = DeskConfig.from_env()
logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)

INPUT_FILES = [
    ("prices.txt", "load_prices"),
    ("marketdata.txt", "load_market_data"),
    ("trades.txt", "load_trades"),
    ("inquiries.txt", "load_inquiries"),
]


def run(data_dir: Path) -> dict:
    desk = DeskOrchestrator(config).wire()
    for filename, loader in INPUT_FILES:
        path = data_dir / filename
        if not path.exists():
            logger.warning(f"[Desk] {path} not found, skipped")
            continue
        getattr(desk, loader)(path)
    return desk.get_system_status()


if __name__ == "__main__":
    data_dir = Path(sys.argv[1] if len(sys.argv) > 1 else os.environ.get("BOND_DESK_DATA_DIR", "data"))
    status = run(data_dir)
    logger.info(f"[Desk] sector risk: {status['sector_risk']}")
    print(json.dumps(status, indent=2, default=str))
