"""Test helpers.

These tests assume the repo layout is:
  project_root/
    src/
      pixiedust/
    tests/
"""

import io
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def make_png(width: int, height: int, color=(200, 40, 40)) -> bytes:
    from PIL import Image

    buf = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


def make_gif(width: int, height: int, frames: int = 3) -> bytes:
    from PIL import Image

    # distinct colors so the GIF writer does not merge frames
    colors = [(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0), (0, 255, 255)]
    imgs = [Image.new("RGB", (width, height), colors[i % len(colors)]) for i in range(frames)]
    buf = io.BytesIO()
    imgs[0].save(buf, format="GIF", save_all=True, append_images=imgs[1:], duration=80, loop=0)
    return buf.getvalue()
