# scripts/smoke.py
"""
Smoke Test Script for the Plainly explainer.

Makes one real call to the completion provider, so OPENAI_API_KEY must be set
(directly or through `.env`).

Usage
-----
1. Test with default hardcoded text:
    $ python scripts/smoke.py

2. Test with a local text file and a mode:
    $ python scripts/smoke.py --file samples/letter.txt --mode kid
"""

import argparse
import logging
import sys
import traceback
from pathlib import Path

from dotenv import load_dotenv

from plainly.core.settings import load_settings
from plainly.explain.explainer import Explainer
from plainly.explain.render import render_text

# --------------------------------------------------------------------------- #
# Environment Setup
# --------------------------------------------------------------------------- #
env_path = Path(".env")
if env_path.exists():
    load_dotenv(env_path)
    print("✅ Loaded .env file")
else:
    print("⚠️  Warning: No .env file found! The call fails without OPENAI_API_KEY.")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

# --------------------------------------------------------------------------- #
# Test Data
# --------------------------------------------------------------------------- #
DEFAULT_TEXT = """
The insurer may deny coverage if material misrepresentation is found in the
application or underwriting file, irrespective of whether such
misrepresentation was intentional, provided it was material to the risk.
"""


def main() -> None:
    """Execute the smoke test workflow."""
    parser = argparse.ArgumentParser(description="Run Plainly Smoke Test")
    parser.add_argument("--file", "-f", type=str, help="Path to a .txt input file")
    parser.add_argument("--mode", "-m", default="normal", choices=["quick", "normal", "kid"])
    args = parser.parse_args()

    if args.file:
        input_path = Path(args.file)
        if not input_path.exists():
            print(f"❌ File not found: {input_path}")
            return
        print(f"\n📂 Using input file: {input_path}")
        text = input_path.read_text(encoding="utf-8")
    else:
        print("\n📝 Using default test text (No --file provided)")
        text = DEFAULT_TEXT

    load_settings.cache_clear()
    explainer = Explainer.from_settings(load_settings())

    try:
        print(f"... Invoking explain(mode={args.mode!r}) ...")
        result = explainer.explain(text.strip(), args.mode)
    except Exception as exc:
        print(f"\n❌ Explain Crashed: {exc}")
        traceback.print_exc()
        return

    print("\n" + "=" * 60)
    print("✅ Explanation Finished Successfully!")
    print("=" * 60 + "\n")
    print(render_text(result))

    if result.needs_clarification and result.questions:
        print("\n❓ The model asked for clarification:")
        for question in result.questions:
            print(f"  - {question}")


if __name__ == "__main__":
    main()
