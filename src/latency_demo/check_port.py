import errno
import socket

from latency_demo.core import Config


def is_port_available(host: str, port: int) -> bool:
    """Return True if we can bind host:port ourselves."""
    # Bind rather than connect: we want to know if WE can listen on it
    bind_host = "" if host == "0.0.0.0" else host

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.settimeout(1)
    try:
        sock.bind((bind_host, port))
        return True
    except OSError as e:
        # 10048 is the Windows code for EADDRINUSE
        if e.errno in (errno.EADDRINUSE, 10048) or "Address already in use" in str(e):
            return False
        raise
    finally:
        sock.close()


def check_port(host: str = None, port: int = None) -> int:
    """Print whether the server port is free. Returns a process exit code."""
    if host is None:
        host = Config.DEMO_HOST
    if port is None:
        port = Config.DEMO_PORT

    print(f"Checking if port {port} is available on {host}...")

    try:
        available = is_port_available(host, port)
    except OSError as e:
        print(f"Error checking port {port}: {e}")
        return 1

    if available:
        print(f"Port {port} is available.")
        return 0

    print(f"\n[ERROR] Port {port} is already in use!")
    print(f"Something is already listening on port {port}.")
    print("Please stop the existing process or change DEMO_PORT in your .env file.")
    return 1


if __name__ == "__main__":
    raise SystemExit(check_port())
