from .assets import SCRIPT_SRC_RX, escape_html, extract_assets
from .models import Asset

__all__ = ["Asset", "SCRIPT_SRC_RX", "escape_html", "extract_assets"]
