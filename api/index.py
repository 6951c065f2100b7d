"""
Vercel Serverless Function entry point for the SEO Translate API.
"""

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from seo_translate.api import app  # noqa: E402

__all__ = ["app"]
