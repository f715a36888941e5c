"""
Erreurs metier / Domain errors.

Levees par la couche services, traduites en reponses HTTP par les handlers
enregistres dans main.py. Chaque erreur porte son code HTTP.
Raised by the service layer, translated once into HTTP responses by the
handlers registered in main.py. Each error carries its HTTP status code.
"""


class ServiceError(Exception):
    """Erreur de base / Base service error."""

    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# --- 404 ---

class VehicleNotFoundError(ServiceError):
    """Vehicule absent ou non visible pour l'appelant / Vehicle missing or not visible to caller."""

    status_code = 404

    def __init__(self, vehicle_id: str):
        self.vehicle_id = vehicle_id
        super().__init__(f"Vehicle not found: {vehicle_id}")


class PhotoNotFoundError(ServiceError):
    """Photo absente / Photo missing."""

    status_code = 404

    def __init__(self, photo_id: str):
        self.photo_id = photo_id
        super().__init__(f"Photo not found: {photo_id}")


class UnauthorizedPhotoAccessError(PhotoNotFoundError):
    """Photo existante mais vehicule parent d'un autre client / Photo exists, parent vehicle owned by someone else.

    Meme message et meme code que PhotoNotFoundError : l'existence n'est jamais confirmee.
    Same message and status as PhotoNotFoundError: existence is never confirmed.
    """


class PhotoNotReadableError(ServiceError):
    status_code = 404

    def __init__(self, file_name: str):
        super().__init__(f"Photo file not found or not readable: {file_name}")


# --- 409 ---

class DuplicateVinError(ServiceError):
    status_code = 409

    def __init__(self, vin: str):
        self.vin = vin
        super().__init__(f"Vehicle with VIN {vin} already exists")


# --- 400 ---

class InvalidFileTypeError(ServiceError):
    status_code = 400

    def __init__(self, file_name: str | None):
        super().__init__(f"File must be an image: {file_name or '<unnamed>'}")


class PhotoUploadError(ServiceError):
    status_code = 400
    default_message = "Photo upload rejected"


class InvalidPhotoPathError(ServiceError):
    status_code = 400

    def __init__(self, file_name: str):
        super().__init__(f"Invalid photo path: {file_name}")


# --- 500 ---

class InfrastructureError(ServiceError):
    status_code = 500
    default_message = "Internal server error"


class PhotoStorageError(InfrastructureError):
    """Ecriture disque impossible / Disk write failure."""

    default_message = "Could not store photo"
