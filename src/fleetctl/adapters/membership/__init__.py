from .memory import InMemoryMembershipSource
from .yaml_hosts import YamlMembershipSource

__all__ = ["InMemoryMembershipSource", "YamlMembershipSource"]
