from starlette.requests import HTTPConnection

from .config import Settings
from .resolver import AirQualityResolver


# HTTPConnection covers both Request and WebSocket, so these work on either surface
def get_resolver(conn: HTTPConnection) -> AirQualityResolver:
    return conn.app.state.resolver


def app_settings(conn: HTTPConnection) -> Settings:
    return conn.app.state.settings
