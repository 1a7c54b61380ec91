"""
Configuration Management for DockWatch
Centralizes all environment-based configuration and settings
"""

import os
import logging
from logging.handlers import RotatingFileHandler


class HealthCheckFilter(logging.Filter):
    """Filter out successful health check requests to reduce log noise"""
    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()

        # For uvicorn access logs, the message format is:
        # 'IP:PORT - "METHOD /path HTTP/1.1" STATUS'
        if '200' in message and '/health' in message:
            return False
        return True


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def setup_logging(level: str = None):
    """Configure application logging with rotation"""
    from .paths import LOG_DIR

    os.makedirs(LOG_DIR, mode=0o700, exist_ok=True)

    level = (level or AppConfig.LOG_LEVEL).upper()

    root_logger = logging.getLogger()

    # Close and clear any existing handlers to prevent file descriptor leaks
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(console_formatter)

    # Max 10MB per file, keep 14 backups
    file_handler = RotatingFileHandler(
        os.path.join(LOG_DIR, 'dockwatch.log'),
        maxBytes=10*1024*1024,
        backupCount=14,
        encoding='utf-8'
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(console_formatter)

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    uvicorn_access = logging.getLogger("uvicorn.access")
    uvicorn_access.addFilter(HealthCheckFilter())


class AppConfig:
    """Main application configuration"""

    # Server settings
    HOST = os.getenv('DOCKWATCH_HOST', '0.0.0.0')
    PORT = int(os.getenv('DOCKWATCH_PORT', 8000))

    # Logging
    LOG_LEVEL = os.getenv('DOCKWATCH_LOG_LEVEL', 'INFO')

    # Registry endpoints (Docker Hub token + manifest flow)
    REGISTRY_AUTH_URL = os.getenv('DOCKWATCH_REGISTRY_AUTH_URL', 'https://auth.docker.io/token')
    REGISTRY_SERVICE = os.getenv('DOCKWATCH_REGISTRY_SERVICE', 'registry.docker.io')
    REGISTRY_URL = os.getenv('DOCKWATCH_REGISTRY_URL', 'https://registry-1.docker.io')
    REGISTRY_TIMEOUT = float(os.getenv('DOCKWATCH_REGISTRY_TIMEOUT', 30))

    # Update checks
    MAX_CONCURRENT_CHECKS = int(os.getenv('DOCKWATCH_MAX_CONCURRENT_CHECKS', 0))  # 0 = unbounded
    FAILURE_POLICY = os.getenv('DOCKWATCH_FAILURE_POLICY', 'isolate')
    DIGEST_COMPARISON = os.getenv('DOCKWATCH_DIGEST_COMPARISON', 'any')
    STARTUP_DUMP = _env_bool('DOCKWATCH_STARTUP_DUMP', True)

    @classmethod
    def validate(cls):
        """Validate configuration"""
        from updates.types import DigestComparison, FailurePolicy

        if cls.PORT < 1 or cls.PORT > 65535:
            raise ValueError(f"Invalid port: {cls.PORT}")

        if cls.REGISTRY_TIMEOUT <= 0:
            raise ValueError(f"Registry timeout must be positive: {cls.REGISTRY_TIMEOUT}")

        if cls.MAX_CONCURRENT_CHECKS < 0:
            raise ValueError(f"Max concurrent checks cannot be negative: {cls.MAX_CONCURRENT_CHECKS}")

        # Raise ValueError on unknown policy names
        FailurePolicy(cls.FAILURE_POLICY)
        DigestComparison(cls.DIGEST_COMPARISON)

        return True
