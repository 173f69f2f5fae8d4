from pathlib import Path
import sys

# Add the repository root to path for imports without an install
sys.path.insert(0, str(Path(__file__).parent.parent))
