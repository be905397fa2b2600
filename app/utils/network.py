# app/utils/network.py
import ipaddress


def _is_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def strip_port(address: str) -> str:
    """
    Return the host part of a remote address.

    "1.2.3.4:5678" -> "1.2.3.4", "[::1]:8080" -> "::1". Bare IPv6 literals
    such as "::1" are returned as is instead of being cut at the first colon.
    """
    if not address:
        return ""
    address = address.strip()

    if address.startswith("["):
        end = address.find("]")
        if end != -1:
            return address[1:end]
        return address

    if _is_ip(address):
        return address

    host, sep, port = address.rpartition(":")
    if sep and port.isdigit() and ":" not in host:
        return host
    return address
