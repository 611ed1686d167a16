"""Install module exports."""

from .controller import router as install_router
from .service.installer import InstallService

__all__ = ["InstallService", "install_router"]
