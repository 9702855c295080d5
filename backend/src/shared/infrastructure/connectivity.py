import logging

logger = logging.getLogger(__name__)


class Connectivity:
    """Online/offline flag reported by the view shell."""

    def __init__(self, online: bool = True):
        self._online = online

    @property
    def online(self) -> bool:
        return self._online

    def set_online(self, online: bool) -> None:
        if online != self._online:
            logger.info("Connectivity changed: %s", "online" if online else "offline")
        self._online = online
