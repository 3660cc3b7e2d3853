import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

import pytest
from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Tag id of EXIF DateTimeDigitized.
DATE_TIME_DIGITIZED = 36868


@pytest.fixture()
def make_jpeg() -> Callable[..., Path]:
    """Return a factory writing small JPEG files, optionally with an EXIF date."""

    def _make(
        path: Path,
        size: Tuple[int, int] = (8, 6),
        digitized: Optional[datetime] = None,
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        image = Image.new("RGB", size, color=(200, 100, 50))
        if digitized is None:
            image.save(path, format="JPEG")
        else:
            exif = Image.Exif()
            exif[DATE_TIME_DIGITIZED] = digitized.strftime("%Y:%m:%d %H:%M:%S")
            image.save(path, format="JPEG", exif=exif)
        return path

    return _make


@pytest.fixture()
def write_tree(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """Return a helper that writes ``{relative path: text}`` below a fresh root."""

    root = tmp_path / "photos"
    root.mkdir()

    def _write(files: Dict[str, str]) -> Path:
        for relative, text in files.items():
            target = root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        return root

    return _write
