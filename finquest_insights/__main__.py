"""Entry point for insight generation"""
import json
import logging
import os
import sys
import traceback
from pathlib import Path

from finquest_insights.config import settings
from finquest_insights.engine import InsightEngine
from finquest_insights.loader import parse_market, parse_patterns, parse_profile

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)

PROFILE_FILE = "profile.json"
PATTERNS_FILE = "patterns.json"
MARKET_FILE = "market.json"

def load_json(path: Path, default=None):
    """Read a JSON document, or return the default when the file is absent"""
    if not path.exists():
        return default
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)

def run() -> None:
    """Generate insights for the profile found in the input directory."""
    try:
        input_dir = Path(settings.INPUT_DIR)
        profile_path = input_dir / PROFILE_FILE
        if not profile_path.exists():
            raise FileNotFoundError(f"No {PROFILE_FILE} found in {settings.INPUT_DIR}")

        logger.info("Using configuration:")
        logger.info(json.dumps(settings.model_dump(exclude={'FESTIVALS'}), indent=2))

        profile = parse_profile(load_json(profile_path))
        patterns = parse_patterns(load_json(input_dir / PATTERNS_FILE, []))
        market = parse_market(load_json(input_dir / MARKET_FILE))

        engine = InsightEngine(settings)
        result = engine.generate(profile, patterns, market)

        os.makedirs(settings.OUTPUT_DIR, exist_ok=True)
        output_path = os.path.join(settings.OUTPUT_DIR, "results.json")
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(result.model_dump(mode="json"), f, indent=2, ensure_ascii=False)

        logger.info(f"Insight generation complete: {len(result.insights)} insights written to {output_path}")

    except Exception as e:
        logger.error(f"Error during insight generation: {e}")
        traceback.print_exc()
        sys.exit(1)

if __name__ == "__main__":
    run()
