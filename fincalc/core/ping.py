"""Health-check payload for the API."""

from fincalc import __version__
from fincalc.schemas.ping import PingResponse


def get_ping_response() -> PingResponse:
    return PingResponse(message="pong", service="fincalc", version=__version__)
