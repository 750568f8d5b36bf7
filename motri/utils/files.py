# motri/utils/files.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional
from uuid import uuid4

log = logging.getLogger(__name__)

# Dateiendung je erlaubtem MIME-Typ
_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

UPLOADS_URL_PREFIX = "uploads"


def ensure_dir(path: str | Path) -> None:
    os.makedirs(path, exist_ok=True)


class ImageStorage:
    """Legt Report-Bilder unter UPLOAD_DIR ab; Referenz = 'uploads/<name>'."""

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)

    def save(self, data: bytes, content_type: str) -> str:
        ensure_dir(self.base_dir)
        ext = _EXTENSIONS.get((content_type or "").lower(), "")
        stored_name = f"{uuid4().hex}{ext}"
        target = self.base_dir / stored_name
        with open(target, "wb") as out_f:
            out_f.write(data)
        return f"{UPLOADS_URL_PREFIX}/{stored_name}"

    def path_for(self, reference: str) -> Optional[Path]:
        # Nur Dateinamen zulassen, keine Pfadanteile
        name = os.path.basename(reference or "")
        if not name:
            return None
        return self.base_dir / name

    def remove(self, reference: Optional[str]) -> bool:
        if not reference:
            return False
        target = self.path_for(reference)
        if target is None:
            return False
        try:
            target.unlink()
        except FileNotFoundError:
            log.warning("Bilddatei %s war bereits entfernt", target)
            return False
        return True
