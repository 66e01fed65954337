"""Plan the demo boost, or any payout config given on the command line."""
import sys, pathlib
ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))
from satsplit.bootstrap.main import run_app

DEMO_CONFIG = ROOT / "configs" / "demo.yaml"

if __name__ == "__main__":
    config_path = sys.argv[1] if len(sys.argv) > 1 else str(DEMO_CONFIG)
    run_app(config_path=config_path)
