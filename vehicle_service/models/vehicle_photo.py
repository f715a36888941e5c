"""Modele photo vehicule / Vehicle photo model.

Metadonnees en base, octets sur disque sous <UPLOAD_DIR>/<vehicle_id>/.
Pas de cle etrangere : les lignes orphelines sont possibles si la cascade ne tourne pas.
Metadata in the database, bytes on disk. No foreign key.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from vehicle_service.database import Base


class VehiclePhoto(Base):
    """Photo d'un vehicule / Vehicle photo."""
    __tablename__ = "vehicle_photos"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    vehicle_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_path: Mapped[str] = mapped_column(String(1024), nullable=False)
    file_url: Mapped[str] = mapped_column(String(500), nullable=False)
    file_size: Mapped[int | None] = mapped_column(Integer)
    content_type: Mapped[str | None] = mapped_column(String(100))
    uploaded_at: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601

    def __repr__(self) -> str:
        return f"<VehiclePhoto {self.id} - {self.file_name}>"
