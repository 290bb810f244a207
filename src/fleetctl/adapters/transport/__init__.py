from .local_shell import LocalShellTransport
from .routing import RoutingTransport
from .ssh import SshTransport

__all__ = ["LocalShellTransport", "RoutingTransport", "SshTransport"]
