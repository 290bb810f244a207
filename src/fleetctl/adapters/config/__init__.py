from .env_file import EnvFileConfig

__all__ = ["EnvFileConfig"]
