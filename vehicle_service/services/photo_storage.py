"""
Stockage disque des photos / On-disk photo storage.

Arborescence <racine>/<vehicle_id>/<nom_fichier>. Chaque chemin est normalise
lexicalement et doit rester strictement dans le dossier du vehicule.
Layout is <root>/<vehicle_id>/<file_name>. Every path is normalized lexically
and must stay strictly inside the vehicle directory.
"""

import logging
import os
import uuid
from pathlib import Path

from vehicle_service.config import settings
from vehicle_service.exceptions import InvalidPhotoPathError

logger = logging.getLogger(__name__)


class PhotoStorage:
    """Systeme de fichiers des photos / Photo filesystem."""

    def __init__(self, root: str | os.PathLike):
        self.root = Path(os.path.normpath(os.path.abspath(root)))

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        logger.info("Photo upload directory ready at %s", self.root)

    def vehicle_dir(self, vehicle_id: str) -> Path:
        return self.root / vehicle_id

    def is_within(self, vehicle_id: str, path: str | os.PathLike) -> bool:
        """Chemin strictement sous le dossier du vehicule / Path strictly under the vehicle dir."""
        base = os.path.normpath(str(self.vehicle_dir(vehicle_id)))
        candidate = os.path.normpath(str(path))
        return os.path.dirname(candidate) == base and os.path.basename(candidate) not in ("", ".", "..")

    def resolve(self, vehicle_id: str, file_name: str) -> Path:
        """Resoudre sans toucher au disque / Resolve without touching the filesystem.

        Raises InvalidPhotoPathError for traversal attempts ("../x", "a/b", absolute names).
        """
        candidate = os.path.normpath(os.path.join(str(self.vehicle_dir(vehicle_id)), file_name))
        if not file_name or not self.is_within(vehicle_id, candidate):
            raise InvalidPhotoPathError(file_name)
        return Path(candidate)

    def write(self, vehicle_id: str, file_name: str, content: bytes) -> Path:
        """Ecriture atomique (fichier temporaire + replace) / Atomic write (temp file + replace)."""
        target = self.resolve(vehicle_id, file_name)
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp = target.with_name(f".{target.name}.{uuid.uuid4().hex[:8]}.tmp")
        try:
            tmp.write_bytes(content)
            os.replace(tmp, target)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
        return target

    def delete(self, path: str | os.PathLike) -> bool:
        """Supprimer un fichier / Delete a file. False if it was already gone.

        OSError other than "missing" propagates; callers decide whether to tolerate it.
        """
        try:
            Path(path).unlink()
        except FileNotFoundError:
            return False
        return True


def get_photo_storage() -> PhotoStorage:
    """Dependance FastAPI / FastAPI dependency (overridden in tests)."""
    return PhotoStorage(settings.UPLOAD_DIR)
