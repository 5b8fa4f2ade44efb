"""Device location service."""
import logging


class LocationUnavailable(Exception):
    """Raised when the device cannot provide a position."""

    def __init__(self, message, unsupported=False):
        super().__init__(message)
        self.unsupported = unsupported


class LocationService:
    """One-shot access to the device position through toga.Location.

    Each call to current_position() asks the device once; there is no
    continuous tracking.
    """

    def __init__(self, location=None, request_permission=True):
        # location is the app's toga.Location, or None on platforms without GPS
        self.location = location
        self.request_permission = request_permission
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def is_supported(self):
        return self.location is not None

    async def _ensure_permission(self):
        if not self.request_permission or self.location.has_permission:
            return
        granted = await self.location.request_permission()
        if not granted:
            raise LocationUnavailable("Location permission denied")

    async def current_position(self):
        """Return the current (latitude, longitude).

        Raises:
            LocationUnavailable: no location capability, permission refused,
                or the device failed to produce a fix.
        """
        if not self.is_supported:
            raise LocationUnavailable("Location services are not supported on this device", unsupported=True)

        try:
            await self._ensure_permission()
            position = await self.location.current_location()
        except LocationUnavailable:
            raise
        except NotImplementedError as e:
            raise LocationUnavailable("Location services are not supported on this device", unsupported=True) from e
        except Exception as e:
            self.logger.error(f"Location request failed: {e}")
            raise LocationUnavailable(str(e)) from e

        if position is None:
            raise LocationUnavailable("Device returned no position")

        self.logger.info(f"Location captured: {position.lat:.6f}, {position.lng:.6f}")
        return position.lat, position.lng
