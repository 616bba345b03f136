from src.domain.ports.host_port import HostPort, HostQueryError

__all__ = [
    "HostPort",
    "HostQueryError",
]
