"""
Generation des identifiants / Identifier generation.

La source aleatoire est injectee (SystemRandom par defaut, Random(seed) en test).
The random source is injected (SystemRandom by default, seeded Random in tests).
"""

import os
import random
import re
import string
import uuid

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")
_SAFE_EXTENSION = re.compile(r"^[A-Za-z0-9]{1,10}$")

DEFAULT_EXTENSION = ".jpg"


class IdGenerator:
    """Identifiants vehicules et photos / Vehicle and photo identifiers."""

    SUFFIX_ALPHABET = string.ascii_uppercase + string.digits
    SUFFIX_LENGTH = 4

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.SystemRandom()

    @staticmethod
    def sanitize(value: str) -> str:
        """Garder les alphanumeriques en majuscules / Keep alphanumerics, uppercased."""
        return _NON_ALNUM.sub("", value).upper()

    def suffix(self) -> str:
        return "".join(self._rng.choice(self.SUFFIX_ALPHABET) for _ in range(self.SUFFIX_LENGTH))

    def vehicle_id(self, make: str, model: str, year: int) -> str:
        """VEH-<annee>-<MARQUE>-<MODELE>-<XXXX>."""
        return f"VEH-{year}-{self.sanitize(make)}-{self.sanitize(model)}-{self.suffix()}"

    def photo_id(self) -> str:
        return str(uuid.UUID(int=self._rng.getrandbits(128), version=4))

    def photo_file_name(self, vehicle_id: str, original_name: str | None) -> str:
        """<vehicle_id>_<hex>.<ext> ; extension d'origine si sure, sinon .jpg.

        Only a short alphanumeric extension of the original name survives, so
        the generated name never carries separators or traversal sequences.
        """
        ext = DEFAULT_EXTENSION
        if original_name:
            _, dot_ext = os.path.splitext(os.path.basename(original_name.replace("\\", "/")))
            if _SAFE_EXTENSION.match(dot_ext[1:]):
                ext = dot_ext.lower()
        return f"{vehicle_id}_{self._rng.getrandbits(128):032x}{ext}"


def get_id_generator() -> IdGenerator:
    """Dependance FastAPI / FastAPI dependency (overridden in tests)."""
    return _default_generator


_default_generator = IdGenerator()
