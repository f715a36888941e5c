"""Vehicle Service - registre des vehicules clients / customer vehicle registry."""
