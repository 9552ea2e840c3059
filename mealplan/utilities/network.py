"""Network helpers for announcing where the plan API can be reached.

Phones running the app usually sit on the same Wi-Fi as the development
machine, so the startup banner shows the LAN address next to localhost.
"""
import socket

LOOPBACK = "127.0.0.1"


def get_local_ip(probe_host: str = "8.8.8.8") -> str:
    """Return the LAN address the OS would route outbound traffic from.

    Connecting a UDP socket sends no packets; it only selects a source
    interface. Falls back to the loopback address when offline.
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            s.connect((probe_host, 80))
            return str(s.getsockname()[0])
    except OSError:
        return LOOPBACK


def server_urls(port: int) -> list[str]:
    """Local URL first, then the LAN URL when one is available."""
    urls = [f"http://localhost:{port}"]
    ip = get_local_ip()
    if ip != LOOPBACK:
        urls.append(f"http://{ip}:{port}")
    return urls
