# scripts/smoke.py
"""
Smoke Test Script for the cardharvest pipelines.

Usage
-----
1. Run both pipelines on built-in samples:
    $ uv run python scripts/smoke.py

2. Run on a local file (HTML goes to the set extractor, anything else to the
   card segmenter):
    $ uv run python scripts/smoke.py --file samples/deck.pdf
"""

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path

from dotenv import load_dotenv

from cardharvest.core.settings import load_settings
from cardharvest.extractors.document_text import load_text
from cardharvest.extractors.html_extractor import extract_outcome
from cardharvest.extractors.text_segmenter import segment_text

# --------------------------------------------------------------------------- #
# Environment Setup
# --------------------------------------------------------------------------- #
env_path = Path(".env")
if env_path.exists():
    load_dotenv(env_path)
    print("✅ Loaded .env file")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

# --------------------------------------------------------------------------- #
# Test Data
# --------------------------------------------------------------------------- #
DEFAULT_HTML = """
<html><head><title>Cell Biology | Flashcards</title></head><body>
<script id="__NEXT_DATA__" type="application/json">
{"props": {"set": {"title": "Cell Biology"},
 "studiableItems": [{"word": "Mitosis", "definition": "Cell division"},
                    {"word": "Ribosome", "definition": "Protein factory"}]}}
</script>
</body></html>
"""

DEFAULT_TEXT = """
Unit 3 review
1. What is the powerhouse of the cell?
Answer: The mitochondria
2. Define osmosis   Movement of water across a membrane
Q: Name the cell's control centre
"""


def _run_html(html: str) -> None:
    outcome = extract_outcome(html)
    result = outcome.value_or_none()
    if result is None:
        print(f"❌ No flashcard data detected: {outcome}")
        return
    print(f"📝 Title: {result.title}")
    for pair in result.terms:
        print(f"  - {pair.term} → {pair.definition}")


def _run_text(text: str) -> None:
    cards = segment_text(text)
    print(json.dumps([card.model_dump() for card in cards], indent=2, ensure_ascii=False))
    pending = sum(1 for card in cards if card.needs_review)
    print(f"🃏 {len(cards)} cards, {pending} need review")


def main() -> None:
    """Execute the smoke test workflow."""
    parser = argparse.ArgumentParser(description="Run cardharvest Smoke Test")
    parser.add_argument("--file", "-f", type=str, help="Path to input file (.html, .pdf, .docx, .txt)")
    args = parser.parse_args()
    print(f"🌍 Environment: {load_settings().environment}")

    try:
        if args.file:
            input_path = Path(args.file)
            if not input_path.exists():
                print(f"❌ File not found: {input_path}")
                return
            print(f"\n📂 Using input file: {input_path}")
            if input_path.suffix.lower() in {".html", ".htm"}:
                _run_html(input_path.read_text(encoding="utf-8", errors="replace"))
            else:
                _run_text(load_text(input_path))
        else:
            print("\n📝 Using built-in samples (No --file provided)")
            _run_html(DEFAULT_HTML)
            _run_text(DEFAULT_TEXT)
    except Exception as exc:
        print(f"\n❌ Smoke run crashed: {exc}")
        traceback.print_exc()


if __name__ == "__main__":
    main()
