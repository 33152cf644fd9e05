"""Network helpers used when the server starts.

Household members usually open the app from their phones on the same
network, so startup logs the LAN address next to the localhost one.
"""
import socket
from typing import List


def get_local_ip() -> str:
    """Return the LAN address of this machine, or '127.0.0.1' without a route out.

    Connecting a UDP socket sends nothing; it only makes the OS pick the
    outgoing interface.
    """
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(("10.255.255.255", 1))
        ip = str(s.getsockname()[0])
    except OSError:
        ip = "127.0.0.1"
    finally:
        s.close()
    return ip


def server_urls(host: str, port: int) -> List[str]:
    """URLs the API can be reached at for a given bind address."""
    if host not in ("0.0.0.0", ""):
        return [f"http://{host}:{port}"]
    urls = [f"http://localhost:{port}"]
    local_ip = get_local_ip()
    if local_ip not in ("127.0.0.1", "localhost"):
        urls.append(f"http://{local_ip}:{port}")
    return urls
